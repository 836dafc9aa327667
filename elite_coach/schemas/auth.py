from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from elite_coach.schemas.profile import ProfileRead


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserRegister(BaseModel):
    full_name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(min_length=6)
    phone: Optional[str] = None


class RegisterResponse(BaseModel):
    message: str
    email: EmailStr
    verification_required: bool = True


class VerifyEmailRequest(BaseModel):
    token: str


class ResendVerificationRequest(BaseModel):
    email: EmailStr


class AuthResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str
    role: str


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class SessionResponse(BaseModel):
    authenticated: bool
    user: Optional[ProfileRead] = None
