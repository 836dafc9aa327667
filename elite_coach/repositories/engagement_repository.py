from datetime import datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from elite_coach.models.engagement import UserEngagement
from elite_coach.models.profile import Profile, RoleEnum


class EngagementRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_for_user(self, user_id: int) -> Optional[UserEngagement]:
        result = await self.db.execute(
            select(UserEngagement).where(UserEngagement.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_for_clients(self) -> List[UserEngagement]:
        result = await self.db.execute(
            select(UserEngagement)
            .join(Profile, Profile.id == UserEngagement.user_id)
            .where(Profile.role != RoleEnum.coach)
            .order_by(UserEngagement.last_login.asc())
        )
        return list(result.scalars().all())

    async def touch_login(self, user_id: int, now: datetime) -> UserEngagement:
        """Upsert the row and refresh last_login; streaks are left untouched."""
        engagement = await self.get_for_user(user_id)
        if engagement is None:
            engagement = UserEngagement(user_id=user_id, current_streak=0, longest_streak=0)
            self.db.add(engagement)
        engagement.last_login = now
        engagement.updated_at = now
        await self.db.commit()
        return engagement

    async def rollback(self) -> None:
        await self.db.rollback()
