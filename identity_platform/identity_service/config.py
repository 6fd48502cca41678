"""
Configuration management for the identity service
"""
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Identity service configuration loaded from environment variables"""

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./identity.db"

    # Token Signing
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_MINUTES: int = 60

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "/app/logs"

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )


@lru_cache
def get_settings() -> Settings:
    """Settings for the running deployment, read once per process."""
    return Settings()
