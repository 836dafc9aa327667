from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from elite_coach.core.db import get_db
from elite_coach.core.config import settings
from elite_coach.models.profile import Profile
from elite_coach.repositories.profile_repository import ProfileRepository
from elite_coach.repositories.workout_repository import WorkoutRepository
from elite_coach.repositories.booking_repository import BookingRepository
from elite_coach.repositories.progress_repository import ProgressRepository
from elite_coach.repositories.engagement_repository import EngagementRepository
from elite_coach.repositories.broadcast_repository import BroadcastRepository
from elite_coach.repositories.contact_repository import ContactRepository


security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


# Repository factories, injected into endpoints through Depends

def get_profile_repository(db: AsyncSession = Depends(get_db)) -> ProfileRepository:
    return ProfileRepository(db)


def get_workout_repository(db: AsyncSession = Depends(get_db)) -> WorkoutRepository:
    return WorkoutRepository(db)


def get_booking_repository(db: AsyncSession = Depends(get_db)) -> BookingRepository:
    return BookingRepository(db)


def get_progress_repository(db: AsyncSession = Depends(get_db)) -> ProgressRepository:
    return ProgressRepository(db)


def get_engagement_repository(db: AsyncSession = Depends(get_db)) -> EngagementRepository:
    return EngagementRepository(db)


def get_broadcast_repository(db: AsyncSession = Depends(get_db)) -> BroadcastRepository:
    return BroadcastRepository(db)


def get_contact_repository(db: AsyncSession = Depends(get_db)) -> ContactRepository:
    return ContactRepository(db)


def decode_access_token(token: str) -> Optional[int]:
    """Return the profile id carried by a valid access token, else None."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    user_id = payload.get("sub")
    if user_id is None:
        return None
    try:
        return int(user_id)
    except ValueError:
        return None


async def get_current_user(
        credentials: HTTPAuthorizationCredentials = Depends(security),
        repo: ProfileRepository = Depends(get_profile_repository),
) -> Profile:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid access token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise credentials_exception

    user = await repo.get_by_id(user_id)
    if user is None:
        raise credentials_exception

    return user


async def get_optional_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
        repo: ProfileRepository = Depends(get_profile_repository),
) -> Optional[Profile]:
    """Like get_current_user, but anonymous callers get None instead of 401."""
    if credentials is None:
        return None
    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        return None
    return await repo.get_by_id(user_id)
