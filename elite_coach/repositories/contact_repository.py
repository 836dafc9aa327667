from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from elite_coach.models.contact import ContactMessage


class ContactRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, message: ContactMessage) -> ContactMessage:
        self.db.add(message)
        await self.db.commit()
        await self.db.refresh(message)
        return message

    async def list_all(self) -> List[ContactMessage]:
        result = await self.db.execute(
            select(ContactMessage).order_by(ContactMessage.created_at.desc())
        )
        return list(result.scalars().all())

    async def rollback(self) -> None:
        await self.db.rollback()
