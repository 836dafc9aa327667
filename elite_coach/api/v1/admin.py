import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from elite_coach.core.dependencies import (
    get_profile_repository,
    get_booking_repository,
    get_contact_repository,
)
from elite_coach.core.rbac import require_coach
from elite_coach.models.profile import Profile
from elite_coach.repositories.booking_repository import BookingRepository
from elite_coach.repositories.contact_repository import ContactRepository
from elite_coach.repositories.profile_repository import ProfileRepository
from elite_coach.schemas.booking import (
    SlotCreate,
    SlotRead,
    AdminBookingRead,
    BookingRead,
    BookingStatusUpdate,
)
from elite_coach.schemas.profile import ProfileRead, RoleUpdateRequest, RoleUpdateResponse
from elite_coach.schemas.site import ContactRead
from elite_coach.services import booking_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"])


# ==========================
# SLOTS
# ==========================

@router.get("/slots", response_model=List[SlotRead])
async def list_slots(
    current_user: Profile = Depends(require_coach),
    repo: BookingRepository = Depends(get_booking_repository),
):
    return await repo.list_slots()


@router.post("/slots", response_model=SlotRead, status_code=status.HTTP_201_CREATED)
async def add_slot(
    data: SlotCreate,
    current_user: Profile = Depends(require_coach),
    repo: BookingRepository = Depends(get_booking_repository),
):
    return await booking_service.add_slot(repo, data)


@router.delete("/slots/{slot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_slot(
    slot_id: int,
    current_user: Profile = Depends(require_coach),
    repo: BookingRepository = Depends(get_booking_repository),
):
    await booking_service.delete_slot(repo, slot_id)


# ==========================
# BOOKINGS
# ==========================

@router.get("/bookings", response_model=List[AdminBookingRead])
async def list_bookings(
    current_user: Profile = Depends(require_coach),
    repo: BookingRepository = Depends(get_booking_repository),
):
    bookings = await repo.list_all_with_clients()
    return [
        AdminBookingRead(
            **BookingRead.model_validate(b).model_dump(),
            client_name=b.user.full_name if b.user else None,
            client_email=b.user.email if b.user else None,
            created_at=b.created_at,
        )
        for b in bookings
    ]


@router.patch("/bookings/{booking_id}/status", response_model=BookingRead)
async def update_booking_status(
    booking_id: int,
    data: BookingStatusUpdate,
    current_user: Profile = Depends(require_coach),
    repo: BookingRepository = Depends(get_booking_repository),
):
    return await booking_service.update_status(repo, booking_id, data.status)


# ==========================
# CLIENTS
# ==========================

@router.get("/clients", response_model=List[ProfileRead])
async def list_clients(
    current_user: Profile = Depends(require_coach),
    repo: ProfileRepository = Depends(get_profile_repository),
):
    """All profiles, newest first."""
    return await repo.list_all()


@router.put("/clients/{user_id}/role", response_model=RoleUpdateResponse)
async def update_role(
    user_id: int,
    data: RoleUpdateRequest,
    current_user: Profile = Depends(require_coach),
    repo: ProfileRepository = Depends(get_profile_repository),
):
    if user_id == current_user.id:
        raise HTTPException(status_code=400, detail="You cannot change your own role")

    user = await repo.get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    user.role = data.role
    try:
        await repo.save(user)
    except SQLAlchemyError as e:
        await repo.rollback()
        logger.error(f"Error changing role of profile {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update role. Please try again.")

    logger.info(f"Coach {current_user.id} set role of profile {user_id} to {data.role.value}")
    return RoleUpdateResponse(
        message="Role updated",
        user_id=user.id,
        new_role=data.role,
    )


@router.get("/contact-messages", response_model=List[ContactRead])
async def list_contact_messages(
    current_user: Profile = Depends(require_coach),
    repo: ContactRepository = Depends(get_contact_repository),
):
    return await repo.list_all()
