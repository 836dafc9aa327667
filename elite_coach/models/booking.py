import enum
from sqlalchemy import Column, Integer, String, Date, Time, ForeignKey, Boolean, Enum, Text, DateTime
from sqlalchemy.orm import relationship
from elite_coach.core.base import Base
from datetime import datetime


class BookingStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"


class AvailableSlot(Base):
    __tablename__ = "available_slots"

    id = Column(Integer, primary_key=True)
    slot_date = Column(Date, nullable=False, index=True)
    slot_time = Column(Time, nullable=False)
    is_booked = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    bookings = relationship("Booking", back_populates="slot", passive_deletes=True)


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    # Unlinked when the client booked a date/time the coach never published
    slot_id = Column(Integer, ForeignKey("available_slots.id", ondelete="SET NULL"), nullable=True, index=True)
    session_type = Column(String, nullable=False)
    session_date = Column(Date, nullable=False, index=True)
    session_time = Column(Time, nullable=False)
    notes = Column(Text, nullable=True)
    status = Column(Enum(BookingStatus), default=BookingStatus.pending, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("Profile", back_populates="bookings")
    slot = relationship("AvailableSlot", back_populates="bookings")
