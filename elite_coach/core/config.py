from typing import List, Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql://coach_user:coach_password@db:5432/coach_db"
    SQL_ECHO: bool = False
    # Drops every table on startup, development only
    RESET_DATABASE: bool = False

    SECRET_KEY: str = "SECRET_KEY_FOR_ELITE_COACH"
    REFRESH_SECRET_KEY: Optional[str] = None
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    EMAIL_VERIFICATION_EXPIRE_HOURS: int = 24

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    FRONTEND_URL: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    RESEND_API_KEY: str = ""
    SENDER_EMAIL: str = "Elite Fitness Coach <onboarding@resend.dev>"

    MINIO_ENDPOINT: str = "minio:9000"
    MINIO_ACCESS_KEY: str = "minioadmin"
    MINIO_SECRET_KEY: str = "minioadmin"
    MINIO_BUCKET: str = "progress-photos"

    # Business rules for the coach overview
    AT_RISK_THRESHOLD_HOURS: int = 48
    ACTIVE_WINDOW_DAYS: int = 7
    AT_RISK_LIMIT: int = 5
    SESSION_PRICE: int = 199
    BROADCAST_INBOX_LIMIT: int = 20
    RECENT_PROGRESS_LIMIT: int = 5

    INITIAL_COACH_EMAIL: Optional[str] = None
    INITIAL_COACH_PASSWORD: Optional[str] = None
    INITIAL_COACH_NAME: str = "Coach"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @model_validator(mode="after")
    def default_refresh_secret(self):
        if not self.REFRESH_SECRET_KEY:
            self.REFRESH_SECRET_KEY = self.SECRET_KEY + "_refresh"
        return self


settings = Settings()
