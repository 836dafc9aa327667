import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional, Tuple

import bcrypt
from jose import jwt, JWTError
from fastapi import HTTPException, status

from elite_coach.core.config import settings
from elite_coach.models.profile import Profile, RoleEnum
from elite_coach.repositories.profile_repository import ProfileRepository
from elite_coach.schemas.auth import UserLogin, UserRegister

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self):
        self.SECRET_KEY = settings.SECRET_KEY
        self.REFRESH_SECRET_KEY = settings.REFRESH_SECRET_KEY
        self.ALGORITHM = settings.ALGORITHM
        self.ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES
        self.REFRESH_TOKEN_EXPIRE_DAYS = settings.REFRESH_TOKEN_EXPIRE_DAYS
        self.EMAIL_VERIFICATION_EXPIRE_HOURS = settings.EMAIL_VERIFICATION_EXPIRE_HOURS

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')

    def verify_password(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        if not hashed_password:
            return False
        try:
            return bcrypt.checkpw(
                plain_password.encode('utf-8'),
                hashed_password.encode('utf-8')
            )
        except ValueError:
            # not a bcrypt hash
            return False

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None):
        to_encode = data.copy()
        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES)
        to_encode.update({"exp": expire})
        encoded_jwt = jwt.encode(to_encode, self.SECRET_KEY, algorithm=self.ALGORITHM)
        return encoded_jwt

    def create_refresh_token(self, data: dict):
        to_encode = data.copy()
        expire = datetime.utcnow() + timedelta(days=self.REFRESH_TOKEN_EXPIRE_DAYS)
        # jti keeps two tokens issued within the same second distinct
        to_encode.update({"exp": expire, "jti": secrets.token_hex(8)})
        encoded_jwt = jwt.encode(to_encode, self.REFRESH_SECRET_KEY, algorithm=self.ALGORITHM)
        return encoded_jwt

    def _decode_refresh_subject(self, refresh_token: str) -> Optional[int]:
        try:
            payload = jwt.decode(refresh_token, self.REFRESH_SECRET_KEY, algorithms=[self.ALGORITHM])
        except JWTError:
            return None
        user_id = payload.get("sub")
        if user_id is None:
            return None
        try:
            return int(user_id)
        except ValueError:
            return None

    def create_verification_token(self) -> Tuple[str, datetime]:
        token = secrets.token_urlsafe(32)
        expires = datetime.utcnow() + timedelta(hours=self.EMAIL_VERIFICATION_EXPIRE_HOURS)
        return token, expires

    async def issue_tokens(self, repo: ProfileRepository, user: Profile) -> Tuple[str, str]:
        """Create an access/refresh pair and persist the refresh token."""
        role = user.role.value if user.role else RoleEnum.client.value
        access_token = self.create_access_token(data={"sub": str(user.id), "role": role})
        refresh_token = self.create_refresh_token(data={"sub": str(user.id)})
        await repo.save_refresh_token(
            user,
            refresh_token,
            datetime.utcnow() + timedelta(days=self.REFRESH_TOKEN_EXPIRE_DAYS),
        )
        return access_token, refresh_token

    async def authenticate_user(self, repo: ProfileRepository, login_data: UserLogin) -> Optional[Profile]:
        """Return the profile for valid credentials, None otherwise.

        Raises 403 when the password matches but the email was never confirmed.
        """
        user = await repo.get_by_email(login_data.email)

        if not user or not self.verify_password(login_data.password, user.password):
            return None

        if not user.email_verified:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Email not confirmed",
            )

        return user

    async def register_user(self, repo: ProfileRepository, user_data: UserRegister) -> Profile:
        existing_user = await repo.get_by_email(user_data.email)
        if existing_user:
            raise HTTPException(status_code=400, detail="User with this email already exists")

        token, expires = self.create_verification_token()

        new_user = Profile(
            email=user_data.email,
            password=self.hash_password(user_data.password),
            full_name=user_data.full_name.strip(),
            phone=user_data.phone,
            role=RoleEnum.client,
            email_verified=False,
            verification_token=token,
            verification_token_expires=expires,
            created_at=datetime.utcnow(),
        )

        created = await repo.create_user(new_user)
        logger.info(f"Registered profile {created.email}, awaiting verification")
        return created

    async def verify_email(self, repo: ProfileRepository, token: str) -> Profile:
        user = await repo.get_by_verification_token(token)
        if user is None:
            raise HTTPException(status_code=400, detail="Invalid verification link")
        if user.verification_token_expires and user.verification_token_expires < datetime.utcnow():
            raise HTTPException(status_code=400, detail="Verification link has expired")

        user.email_verified = True
        user.verification_token = None
        user.verification_token_expires = None
        return await repo.save(user)

    async def refresh_verification(self, repo: ProfileRepository, email: str) -> Optional[Profile]:
        """Issue a new verification token for an unverified account, if there is one."""
        user = await repo.get_by_email(email)
        if user is None or user.email_verified:
            return None
        user.verification_token, user.verification_token_expires = self.create_verification_token()
        return await repo.save(user)

    async def rotate_refresh_token(
        self,
        repo: ProfileRepository,
        refresh_token: str,
    ) -> Optional[Tuple[Profile, str, str]]:
        """Exchange a refresh token for a new pair.

        A correctly signed token that is no longer stored means it was already
        rotated; the owner's current token is revoked so both parties must log in again.
        """
        user_id = self._decode_refresh_subject(refresh_token)
        if user_id is None:
            return None

        user = await repo.get_by_refresh_token(refresh_token)
        if user is None:
            victim = await repo.get_by_id(user_id)
            if victim is not None:
                logger.warning(f"Refresh token reuse detected for profile {victim.id}")
                await repo.revoke_refresh_token(victim)
            return None

        if user.id != user_id:
            return None
        if not user.refresh_token_expires or user.refresh_token_expires < datetime.utcnow():
            return None

        access_token, new_refresh_token = await self.issue_tokens(repo, user)
        return user, access_token, new_refresh_token

    async def logout_user(self, repo: ProfileRepository, refresh_token: str) -> bool:
        user_id = self._decode_refresh_subject(refresh_token)
        if user_id is None:
            return False

        user = await repo.get_by_id(user_id)
        if user is None:
            return False

        await repo.revoke_refresh_token(user)
        return True


auth_service = AuthService()
