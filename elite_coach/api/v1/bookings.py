from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from elite_coach.core.dependencies import get_current_user, get_booking_repository
from elite_coach.models.profile import Profile
from elite_coach.repositories.booking_repository import BookingRepository
from elite_coach.schemas.booking import BookingCreate, BookingRead, OpenSlotsResponse, SlotRead
from elite_coach.services import booking_service

router = APIRouter(tags=["bookings"])


@router.get("", response_model=List[BookingRead])
async def list_bookings(
    current_user: Profile = Depends(get_current_user),
    repo: BookingRepository = Depends(get_booking_repository),
):
    return await repo.list_for_user(current_user.id)


@router.get("/slots", response_model=OpenSlotsResponse)
async def open_slots(
    from_date: Optional[date] = Query(None, description="Defaults to today"),
    current_user: Profile = Depends(get_current_user),
    repo: BookingRepository = Depends(get_booking_repository),
):
    slots = await booking_service.list_open_slots(repo, from_date or datetime.utcnow().date())
    return OpenSlotsResponse(
        slots=[SlotRead.model_validate(slot) for slot in slots],
        times_by_date=booking_service.group_slots_by_date(slots),
    )


@router.post("", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
async def create_booking(
    data: BookingCreate,
    current_user: Profile = Depends(get_current_user),
    repo: BookingRepository = Depends(get_booking_repository),
):
    return await booking_service.create_booking(repo, current_user, data)


@router.post("/{booking_id}/cancel", response_model=BookingRead)
async def cancel_booking(
    booking_id: int,
    current_user: Profile = Depends(get_current_user),
    repo: BookingRepository = Depends(get_booking_repository),
):
    return await booking_service.cancel_booking(repo, current_user, booking_id)
