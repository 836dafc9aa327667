from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from elite_coach.models.progress import Progress
from elite_coach.models.attachment import Attachment


class ProgressRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def history(self, user_id: int) -> List[Progress]:
        """Full history, oldest record first."""
        result = await self.db.execute(
            select(Progress)
            .where(Progress.user_id == user_id)
            .order_by(Progress.record_date.asc(), Progress.id.asc())
        )
        return list(result.scalars().all())

    async def recent(self, user_id: int, limit: int) -> List[Progress]:
        """Latest ``limit`` records, newest first."""
        result = await self.db.execute(
            select(Progress)
            .where(Progress.user_id == user_id)
            .order_by(Progress.record_date.desc(), Progress.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_by_id(self, progress_id: int) -> Optional[Progress]:
        result = await self.db.execute(select(Progress).where(Progress.id == progress_id))
        return result.scalar_one_or_none()

    async def create(self, record: Progress) -> Progress:
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        return record

    async def delete(self, record: Progress) -> None:
        await self.db.delete(record)
        await self.db.commit()

    # --- photos ---

    async def list_photos(self, progress_id: int) -> List[Attachment]:
        result = await self.db.execute(
            select(Attachment)
            .where(Attachment.progress_id == progress_id)
            .order_by(Attachment.created_at.asc())
        )
        return list(result.scalars().all())

    async def get_photo(self, photo_id: int) -> Optional[Attachment]:
        result = await self.db.execute(select(Attachment).where(Attachment.id == photo_id))
        return result.scalar_one_or_none()

    async def add_photo(self, photo: Attachment) -> Attachment:
        self.db.add(photo)
        await self.db.commit()
        await self.db.refresh(photo)
        return photo

    async def delete_photo(self, photo: Attachment) -> None:
        await self.db.delete(photo)
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()
