"""
Centralized configuration management with validation.

All environment variables are loaded and validated here.
The storage endpoint, its privileged key and the Gemini key are required:
a missing value fails at import time, which is a fatal startup condition.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """Application settings with validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    # Relational storage - REQUIRED
    DATABASE_URL: str = Field(
        default=...,
        description="SQLAlchemy URL of the relational store, e.g. postgresql://service_role@db:5432/postgres"
    )
    DATABASE_SERVICE_ROLE_KEY: str = Field(
        default=...,
        description="Privileged access key. Used as the connection password when DATABASE_URL has none."
    )

    # Database Pool Configuration
    DB_POOL_SIZE: int = Field(default=10)
    DB_MAX_OVERFLOW: int = Field(default=10)
    DB_POOL_TIMEOUT: int = Field(default=30)
    DB_POOL_RECYCLE: int = Field(default=3600)  # 1 hour

    # Generative language API - REQUIRED key
    GEMINI_API_KEY: str = Field(default=...)
    GEMINI_MODEL: str = Field(default="gemini-2.5-flash")
    GEMINI_API_BASE_URL: Optional[str] = Field(default=None)
    # Whole-request ceiling for one model call
    GEMINI_TIMEOUT_S: float = Field(default=120.0, gt=0)

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="json")  # json or text

    # Environment
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)


# Global settings instance
settings = Settings()
