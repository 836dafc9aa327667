import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from elite_coach.core.dependencies import get_profile_repository, get_current_user, get_optional_user
from elite_coach.models.profile import Profile
from elite_coach.repositories.profile_repository import ProfileRepository
from elite_coach.services.auth_service import auth_service
from elite_coach.services.email_service import email_service
from elite_coach.schemas.auth import (
    UserLogin,
    UserRegister,
    RegisterResponse,
    VerifyEmailRequest,
    ResendVerificationRequest,
    AuthResponse,
    RefreshTokenRequest,
    SessionResponse,
)
from elite_coach.schemas.profile import ProfileRead, ProfileUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user: UserRegister,
    background_tasks: BackgroundTasks,
    repo: ProfileRepository = Depends(get_profile_repository),
):
    """Create a client account; it stays locked until the email link is followed."""
    new_user = await auth_service.register_user(repo, user)

    background_tasks.add_task(
        email_service.send_verification_email,
        new_user.email,
        new_user.full_name,
        new_user.verification_token,
    )

    return RegisterResponse(
        message="Check your email to confirm your account",
        email=new_user.email,
    )


@router.post("/verify-email", response_model=ProfileRead)
async def verify_email(
    request: VerifyEmailRequest,
    repo: ProfileRepository = Depends(get_profile_repository),
):
    user = await auth_service.verify_email(repo, request.token)
    logger.info(f"Email confirmed for profile {user.id}")
    return user


@router.post("/resend-verification", status_code=status.HTTP_202_ACCEPTED)
async def resend_verification(
    request: ResendVerificationRequest,
    background_tasks: BackgroundTasks,
    repo: ProfileRepository = Depends(get_profile_repository),
):
    """Always answers the same way so the endpoint can't be used to probe accounts."""
    user = await auth_service.refresh_verification(repo, request.email)
    if user is not None:
        background_tasks.add_task(
            email_service.send_verification_email,
            user.email,
            user.full_name,
            user.verification_token,
        )
    return {"message": "If the account exists and is unconfirmed, a new link has been sent"}


@router.post("/login", response_model=AuthResponse)
async def login(user: UserLogin, repo: ProfileRepository = Depends(get_profile_repository)):
    authenticated_user = await auth_service.authenticate_user(repo, user)
    if not authenticated_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid login credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token, refresh_token = await auth_service.issue_tokens(repo, authenticated_user)

    return AuthResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="bearer",
        role=authenticated_user.role.value,
    )


@router.post("/refresh", response_model=AuthResponse)
async def refresh_token(request: RefreshTokenRequest, repo: ProfileRepository = Depends(get_profile_repository)):
    rotated = await auth_service.rotate_refresh_token(repo, request.refresh_token)
    if rotated is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token"
        )

    user, access_token, new_refresh_token = rotated
    return AuthResponse(
        access_token=access_token,
        refresh_token=new_refresh_token,
        token_type="bearer",
        role=user.role.value,
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(request: RefreshTokenRequest, repo: ProfileRepository = Depends(get_profile_repository)):
    await auth_service.logout_user(repo, request.refresh_token)


@router.get("/session", response_model=SessionResponse)
async def session(current_user: Optional[Profile] = Depends(get_optional_user)):
    if current_user is None:
        return SessionResponse(authenticated=False)
    return SessionResponse(authenticated=True, user=ProfileRead.model_validate(current_user))


@router.get("/me", response_model=ProfileRead)
async def me(current_user: Profile = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=ProfileRead)
async def update_me(
    update: ProfileUpdate,
    current_user: Profile = Depends(get_current_user),
    repo: ProfileRepository = Depends(get_profile_repository),
):
    user_id = current_user.id
    if update.full_name is not None:
        current_user.full_name = update.full_name.strip()
    if update.phone is not None:
        current_user.phone = update.phone or None

    try:
        return await repo.save(current_user)
    except SQLAlchemyError as e:
        await repo.rollback()
        logger.error(f"Error updating profile {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update profile. Please try again.")
