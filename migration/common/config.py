"""
Migration and API configuration using Pydantic Settings.
Values come from the process environment or a local .env file.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Destination (PostgreSQL)
    DATABASE_URL: str = ""

    # Legacy source (SQL Server)
    SOURCE_DATABASE_URL: str = (
        "mssql+pyodbc://@localhost/DEV"
        "?driver=ODBC+Driver+17+for+SQL+Server&trusted_connection=yes"
    )

    # Migration
    EXPORT_DIR: str = "data/exports"
    BATCH_SIZE: int = 1000
    ABORT_ON_COUNT_MISMATCH: bool = True
    INCLUDE_LOGS: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # API
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    ENVIRONMENT: str = "development"
    ADMIN_EMAIL: str = "admin@example.com"
    ADMIN_PASSWORD: str = "changeme"
    AUTH_COOKIE_NAME: str = "auth-token"
    AUTH_COOKIE_MAX_AGE: int = 60 * 60 * 24 * 7


settings = Settings()
