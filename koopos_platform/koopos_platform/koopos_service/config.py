"""
Configuration management for the KoopOS service
"""
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service configuration loaded from KOOPOS_* environment variables"""

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./koopos.db"

    # Token Configuration
    SECRET_KEY: str = "change-this-secret-in-prod"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Use pbkdf2_sha256 to avoid external bcrypt backend issues in some environments
    PASSWORD_SCHEMES: List[str] = ["pbkdf2_sha256"]

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_prefix="KOOPOS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
