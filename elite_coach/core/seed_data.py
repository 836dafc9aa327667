import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from elite_coach.core.config import settings
from elite_coach.models.profile import Profile, RoleEnum
from elite_coach.services.auth_service import auth_service

logger = logging.getLogger(__name__)


async def create_initial_coach(session: AsyncSession):
    """Create (or promote) the coach account named by INITIAL_COACH_EMAIL."""
    if not settings.INITIAL_COACH_EMAIL or not settings.INITIAL_COACH_PASSWORD:
        logger.info("INITIAL_COACH_EMAIL not set, skipping coach seed")
        return None

    result = await session.execute(
        select(Profile).where(Profile.email == settings.INITIAL_COACH_EMAIL)
    )
    coach = result.scalar_one_or_none()

    if coach is not None:
        if coach.role != RoleEnum.coach:
            coach.role = RoleEnum.coach
            await session.commit()
            logger.info(f"Promoted existing profile {coach.email} to coach")
        return coach

    coach = Profile(
        email=settings.INITIAL_COACH_EMAIL,
        password=auth_service.hash_password(settings.INITIAL_COACH_PASSWORD),
        full_name=settings.INITIAL_COACH_NAME,
        role=RoleEnum.coach,
        email_verified=True,
    )
    session.add(coach)
    await session.commit()
    await session.refresh(coach)

    logger.info(f"Created coach account {coach.email} (ID: {coach.id})")
    return coach
