"""
Booking/slot coordination.

A booking and the slot it occupies are always written in the same
transaction: the slot row is locked with SELECT ... FOR UPDATE before it is
flipped, so two clients cannot take the same published slot.
"""

import logging
from collections import OrderedDict
from datetime import date
from typing import Dict, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from elite_coach.models.booking import Booking, BookingStatus, AvailableSlot
from elite_coach.models.profile import Profile
from elite_coach.repositories.booking_repository import BookingRepository
from elite_coach.schemas.booking import BookingCreate, SlotCreate

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    BookingStatus.pending: {BookingStatus.confirmed, BookingStatus.cancelled},
    BookingStatus.confirmed: {BookingStatus.cancelled},
    BookingStatus.cancelled: set(),
}


def _failure(action: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}. Please try again.",
    )


def group_slots_by_date(slots: List[AvailableSlot]) -> Dict[str, List[str]]:
    """{"2024-06-01": ["09:00", "10:30"], ...} in slot order."""
    grouped: Dict[str, List[str]] = OrderedDict()
    for slot in slots:
        grouped.setdefault(slot.slot_date.isoformat(), []).append(slot.slot_time.strftime("%H:%M"))
    return grouped


def _release(slot: Optional[AvailableSlot]) -> None:
    if slot is not None:
        slot.is_booked = False


async def create_booking(repo: BookingRepository, user: Profile, data: BookingCreate) -> Booking:
    user_id = user.id
    try:
        slot = await repo.find_slot(data.session_date, data.session_time, for_update=True)
        if slot is not None and slot.is_booked:
            await repo.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="This time slot is no longer available",
            )

        booking = Booking(
            user_id=user_id,
            slot_id=slot.id if slot is not None else None,
            session_type=data.session_type,
            session_date=data.session_date,
            session_time=data.session_time,
            notes=data.notes,
            status=BookingStatus.pending,
        )
        if slot is not None:
            slot.is_booked = True

        await repo.add(booking)
        await repo.commit()
        await repo.refresh(booking)
    except SQLAlchemyError as e:
        await repo.rollback()
        logger.error(f"Error creating booking for profile {user_id}: {e}")
        raise _failure("book session")

    if slot is None:
        logger.info(f"Booking {booking.id} created without a published slot")
    else:
        logger.info(f"Booking {booking.id} created on slot {slot.id}")
    return booking


async def cancel_booking(repo: BookingRepository, user: Profile, booking_id: int) -> Booking:
    """Client-side cancel: own pending bookings only."""
    user_id = user.id
    try:
        booking = await repo.get_by_id(booking_id, for_update=True)
        if booking is None or booking.user_id != user_id:
            await repo.rollback()
            raise HTTPException(status_code=404, detail="Booking not found")
        if booking.status != BookingStatus.pending:
            await repo.rollback()
            raise HTTPException(status_code=400, detail="Only pending bookings can be cancelled")

        booking.status = BookingStatus.cancelled
        if booking.slot_id is not None:
            _release(await repo.get_slot(booking.slot_id, for_update=True))

        await repo.commit()
    except SQLAlchemyError as e:
        await repo.rollback()
        logger.error(f"Error cancelling booking {booking_id}: {e}")
        raise _failure("cancel booking")

    logger.info(f"Booking {booking.id} cancelled by client {user_id}")
    return booking


async def update_status(repo: BookingRepository, booking_id: int, new_status: BookingStatus) -> Booking:
    """Coach-side transition. Cancelling releases the slot; confirming keeps it."""
    try:
        booking = await repo.get_by_id(booking_id, for_update=True)
        if booking is None:
            await repo.rollback()
            raise HTTPException(status_code=404, detail="Booking not found")

        current = BookingStatus(booking.status)
        if new_status not in ALLOWED_TRANSITIONS[current]:
            await repo.rollback()
            raise HTTPException(
                status_code=400,
                detail=f"Cannot change booking status from {current.value} to {new_status.value}",
            )

        booking.status = new_status
        if new_status == BookingStatus.cancelled and booking.slot_id is not None:
            _release(await repo.get_slot(booking.slot_id, for_update=True))

        await repo.commit()
    except SQLAlchemyError as e:
        await repo.rollback()
        logger.error(f"Error updating booking {booking_id}: {e}")
        raise _failure("update booking")

    logger.info(f"Booking {booking.id} moved {current.value} -> {new_status.value}")
    return booking


async def list_open_slots(repo: BookingRepository, from_date: date) -> List[AvailableSlot]:
    return await repo.list_open_slots(from_date)


async def add_slot(repo: BookingRepository, data: SlotCreate) -> AvailableSlot:
    slot = AvailableSlot(slot_date=data.slot_date, slot_time=data.slot_time, is_booked=False)
    try:
        await repo.add_slot(slot)
        await repo.commit()
        await repo.refresh(slot)
    except SQLAlchemyError as e:
        await repo.rollback()
        logger.error(f"Error adding slot: {e}")
        raise _failure("add slot")

    logger.info(f"Slot {slot.id} published for {slot.slot_date} {slot.slot_time}")
    return slot


async def delete_slot(repo: BookingRepository, slot_id: int) -> None:
    try:
        slot = await repo.get_slot(slot_id, for_update=True)
        if slot is None:
            await repo.rollback()
            raise HTTPException(status_code=404, detail="Slot not found")
        await repo.delete_slot(slot)
        await repo.commit()
    except SQLAlchemyError as e:
        await repo.rollback()
        logger.error(f"Error deleting slot {slot_id}: {e}")
        raise _failure("delete slot")

    logger.info(f"Slot {slot_id} removed")
