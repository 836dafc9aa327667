from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict
from datetime import date, time, datetime

from elite_coach.models.booking import BookingStatus

SESSION_TYPES = ["1-on-1 Training", "Nutrition Consultation", "Progress Review", "Goal Setting"]


class BookingCreate(BaseModel):
    session_type: str = Field(default=SESSION_TYPES[0], min_length=1)
    session_date: date
    session_time: time
    notes: Optional[str] = None

    @field_validator("session_type")
    @classmethod
    def known_session_type(cls, value: str) -> str:
        if value not in SESSION_TYPES:
            raise ValueError(f"session_type must be one of: {', '.join(SESSION_TYPES)}")
        return value


class BookingRead(BaseModel):
    id: int
    user_id: int
    slot_id: Optional[int] = None
    session_type: str
    session_date: date
    session_time: time
    notes: Optional[str] = None
    status: BookingStatus

    class Config:
        from_attributes = True


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class AdminBookingRead(BookingRead):
    client_name: Optional[str] = None
    client_email: Optional[str] = None
    created_at: Optional[datetime] = None


class SlotCreate(BaseModel):
    slot_date: date
    slot_time: time


class SlotRead(BaseModel):
    id: int
    slot_date: date
    slot_time: time
    is_booked: bool

    class Config:
        from_attributes = True


class OpenSlotsResponse(BaseModel):
    slots: List[SlotRead]
    # "2024-06-01" -> ["10:00", "11:30"]
    times_by_date: Dict[str, List[str]]
    session_types: List[str] = SESSION_TYPES
