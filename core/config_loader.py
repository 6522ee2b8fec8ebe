from __future__ import annotations
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./leavedesk.db"
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # auth
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    LOG_LEVEL: str = "INFO"

    # uploads
    UPLOAD_DIR: str = "uploads/documents"
    PROFILE_PICTURE_DIR: str = "uploads/profile-pictures"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024
    MAX_UPLOAD_FILES: int = 5

    # paid leave granted to a newly registered employee
    DEFAULT_PAID_LEAVE_DAYS: int = 21

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
