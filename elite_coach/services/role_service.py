import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from elite_coach.models.profile import RoleEnum
from elite_coach.repositories.profile_repository import ProfileRepository
from elite_coach.schemas.dashboard import DashboardRoute, DashboardView, ClientTab, CoachTab

logger = logging.getLogger(__name__)


async def resolve_role(repo: ProfileRepository, user_id: int) -> RoleEnum:
    """Role of the identity; anything ambiguous falls back to the least privileged one."""
    try:
        profile = await repo.get_by_id(user_id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching profile {user_id} for role routing: {e}")
        return RoleEnum.client

    if profile is None or profile.role is None:
        return RoleEnum.client
    return RoleEnum(profile.role)


def route_for(role: Optional[RoleEnum]) -> DashboardRoute:
    if role == RoleEnum.coach:
        return DashboardRoute(
            role=RoleEnum.coach.value,
            view=DashboardView.coach,
            tabs=[tab.value for tab in CoachTab],
        )
    return DashboardRoute(
        role=RoleEnum.client.value,
        view=DashboardView.client,
        tabs=[tab.value for tab in ClientTab],
    )
