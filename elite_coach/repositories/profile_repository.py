from datetime import datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from elite_coach.models.profile import Profile, RoleEnum


class ProfileRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: int) -> Optional[Profile]:
        result = await self.db.execute(select(Profile).where(Profile.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Profile]:
        result = await self.db.execute(select(Profile).where(Profile.email == email))
        return result.scalar_one_or_none()

    async def get_by_refresh_token(self, refresh_token: str) -> Optional[Profile]:
        """Lookup by the stored refresh token value (used for reuse detection)."""
        result = await self.db.execute(
            select(Profile).where(Profile.refresh_token == refresh_token)
        )
        return result.scalar_one_or_none()

    async def get_by_verification_token(self, token: str) -> Optional[Profile]:
        result = await self.db.execute(
            select(Profile).where(Profile.verification_token == token)
        )
        return result.scalar_one_or_none()

    async def list_clients(self) -> List[Profile]:
        """Every non-coach profile, alphabetically."""
        result = await self.db.execute(
            select(Profile)
            .where(Profile.role != RoleEnum.coach)
            .order_by(Profile.full_name.asc())
        )
        return list(result.scalars().all())

    async def list_all(self) -> List[Profile]:
        result = await self.db.execute(select(Profile).order_by(Profile.created_at.desc()))
        return list(result.scalars().all())

    async def save_refresh_token(
        self,
        user: Profile,
        refresh_token: str,
        expires: datetime,
    ) -> None:
        user.refresh_token = refresh_token
        user.refresh_token_expires = expires
        await self.db.commit()

    async def revoke_refresh_token(self, user: Profile) -> None:
        """Drop the stored refresh token (logout / reuse detected)."""
        user.refresh_token = None
        user.refresh_token_expires = None
        await self.db.commit()

    async def create_user(self, user: Profile) -> Profile:
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def save(self, user: Profile) -> Profile:
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def rollback(self) -> None:
        await self.db.rollback()
