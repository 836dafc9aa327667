from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from elite_coach.core.base import Base
from datetime import datetime


class UserEngagement(Base):
    """Login/streak tracking. Streak columns are maintained outside this service."""
    __tablename__ = "user_engagement"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, unique=True)
    last_login = Column(DateTime, nullable=True)
    current_streak = Column(Integer, default=0, nullable=False)
    longest_streak = Column(Integer, default=0, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("Profile", back_populates="engagement")
