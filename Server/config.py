"""
CampusShare Server - Configuration

Runtime settings loaded from environment variables (prefix CAMPUSSHARE_)
or a .env file in the working directory.
"""

import secrets
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3000

    # Token signing. A random secret means tokens do not survive a restart.
    jwt_secret: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    jwt_algorithm: str = "HS256"
    token_expiration_days: int = 7

    # Storage
    database_path: str = "database/campusshare.db"
    upload_dir: str = "uploads"
    max_upload_size: int = 10 * 1024 * 1024  # 10 MiB

    cors_origins: List[str] = ["*"]

    # Logging; an empty log_dir disables the rotating file handler
    log_dir: str = "logs"
    log_level: str = "INFO"

    seed_demo_user: bool = True

    model_config = SettingsConfigDict(
        env_prefix="CAMPUSSHARE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
