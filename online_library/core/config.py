# online_library/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # Database
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./online_library.db",
        description="Async SQLAlchemy database URL"
    )

    # Security
    SECRET_KEY: str = Field(
        ...,  # Required, the app refuses to start without it
        min_length=32,
        description="Shared secret used to verify JWT signatures"
    )
    ALGORITHM: str = Field(
        default="HS256",
        description="JWT signing algorithm"
    )
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=10080,  # 7 days
        description="Lifetime of tokens minted by create_access_token"
    )

    # CORS
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins"
    )

    # App
    APP_NAME: str = Field(
        default="OnlineLibraryAPI",
        description="Application name"
    )
    DEBUG: bool = Field(
        default=False,
        description="Debug mode"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
