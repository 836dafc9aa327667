import enum
from sqlalchemy import Column, Integer, String, Enum, Boolean, DateTime
from sqlalchemy.orm import relationship
from elite_coach.core.base import Base
from datetime import datetime


class RoleEnum(str, enum.Enum):
    client = "client"
    coach = "coach"


class Profile(Base):
    """Authenticated identity plus its display attributes; ``role`` picks the dashboard."""
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)
    full_name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    role = Column(Enum(RoleEnum), default=RoleEnum.client, nullable=False)

    email_verified = Column(Boolean, default=False, nullable=False)
    verification_token = Column(String, nullable=True, unique=True)
    verification_token_expires = Column(DateTime, nullable=True)

    refresh_token = Column(String, nullable=True)
    refresh_token_expires = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    workouts = relationship("Workout", back_populates="user", cascade="all, delete")
    bookings = relationship("Booking", back_populates="user", cascade="all, delete")
    progress = relationship("Progress", back_populates="user", cascade="all, delete")
    engagement = relationship("UserEngagement", back_populates="user", uselist=False, cascade="all, delete")
    broadcasts = relationship("Broadcast", back_populates="coach")
    attachments = relationship("Attachment", back_populates="user", cascade="all, delete")
