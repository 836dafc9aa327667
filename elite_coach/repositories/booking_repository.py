from datetime import date, time
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, update
from sqlalchemy.orm import selectinload

from elite_coach.models.booking import Booking, BookingStatus, AvailableSlot


class BookingRepository:
    """Bookings and the coach-published slots they are made against."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # --- bookings ---

    async def list_for_user(self, user_id: int) -> List[Booking]:
        result = await self.db.execute(
            select(Booking)
            .where(Booking.user_id == user_id)
            .order_by(Booking.session_date.asc(), Booking.session_time.asc())
        )
        return list(result.scalars().all())

    async def list_all_with_clients(self) -> List[Booking]:
        result = await self.db.execute(
            select(Booking)
            .options(selectinload(Booking.user))
            .order_by(Booking.session_date.desc(), Booking.session_time.desc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, booking_id: int, for_update: bool = False) -> Optional[Booking]:
        query = select(Booking).where(Booking.id == booking_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def next_confirmed(self, user_id: int, today: date) -> Optional[Booking]:
        result = await self.db.execute(
            select(Booking)
            .where(
                Booking.user_id == user_id,
                Booking.session_date >= today,
                Booking.status == BookingStatus.confirmed,
            )
            .order_by(Booking.session_date.asc(), Booking.session_time.asc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_between(self, start: date, end: date) -> List[Booking]:
        result = await self.db.execute(
            select(Booking)
            .where(Booking.session_date >= start, Booking.session_date <= end)
            .order_by(Booking.session_date.asc())
        )
        return list(result.scalars().all())

    async def count_pending(self) -> int:
        result = await self.db.execute(
            select(func.count(Booking.id)).where(Booking.status == BookingStatus.pending)
        )
        return result.scalar_one()

    async def add(self, booking: Booking) -> Booking:
        self.db.add(booking)
        await self.db.flush()
        return booking

    # --- slots ---

    async def find_slot(self, slot_date: date, slot_time: time, for_update: bool = False) -> Optional[AvailableSlot]:
        """Slot published for the exact date/time, open ones first."""
        query = (
            select(AvailableSlot)
            .where(AvailableSlot.slot_date == slot_date, AvailableSlot.slot_time == slot_time)
            .order_by(AvailableSlot.is_booked.asc(), AvailableSlot.id.asc())
            .limit(1)
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_slot(self, slot_id: int, for_update: bool = False) -> Optional[AvailableSlot]:
        query = select(AvailableSlot).where(AvailableSlot.id == slot_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_open_slots(self, from_date: date) -> List[AvailableSlot]:
        result = await self.db.execute(
            select(AvailableSlot)
            .where(AvailableSlot.slot_date >= from_date, AvailableSlot.is_booked == False)  # noqa: E712
            .order_by(AvailableSlot.slot_date.asc(), AvailableSlot.slot_time.asc())
        )
        return list(result.scalars().all())

    async def list_slots(self) -> List[AvailableSlot]:
        result = await self.db.execute(
            select(AvailableSlot).order_by(AvailableSlot.slot_date.asc(), AvailableSlot.slot_time.asc())
        )
        return list(result.scalars().all())

    async def add_slot(self, slot: AvailableSlot) -> AvailableSlot:
        self.db.add(slot)
        await self.db.flush()
        return slot

    async def delete_slot(self, slot: AvailableSlot) -> None:
        await self.db.execute(
            update(Booking).where(Booking.slot_id == slot.id).values(slot_id=None)
        )
        await self.db.delete(slot)

    # --- unit of work ---

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()

    async def refresh(self, obj) -> None:
        await self.db.refresh(obj)
