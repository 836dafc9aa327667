from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from elite_coach.models.broadcast import Broadcast


class BroadcastRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def latest(self, limit: int) -> List[Broadcast]:
        result = await self.db.execute(
            select(Broadcast)
            .options(selectinload(Broadcast.coach))
            .order_by(Broadcast.sent_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def create(self, broadcast: Broadcast) -> Broadcast:
        self.db.add(broadcast)
        await self.db.commit()
        await self.db.refresh(broadcast)
        return broadcast

    async def rollback(self) -> None:
        await self.db.rollback()
