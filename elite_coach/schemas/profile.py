from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

from elite_coach.models.profile import RoleEnum


class ProfileRead(BaseModel):
    id: int
    email: EmailStr
    full_name: str
    phone: Optional[str] = None
    role: RoleEnum
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    phone: Optional[str] = None


class ClientSummary(BaseModel):
    id: int
    full_name: str
    email: EmailStr

    class Config:
        from_attributes = True


class RoleUpdateRequest(BaseModel):
    role: RoleEnum


class RoleUpdateResponse(BaseModel):
    message: str
    user_id: int
    new_role: RoleEnum
