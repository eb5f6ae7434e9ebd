"""
Application configuration and environment settings.
"""
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Optional, Union


# Repository root (backend/jukeboxd/core/config.py -> three levels up)
BASE_DIR = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Jukeboxd"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Database
    MONGO_URL: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "jukeboxd"
    MONGO_TIMEOUT_MS: int = 5000

    # JWT
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # Password hashing (bcrypt cost factor)
    BCRYPT_ROUNDS: int = 12

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Profile pictures users may pick from
    PROFILE_PICTURE_DIR: str = str(BASE_DIR / "assets" / "photos")

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
