"""
Application Configuration Settings
Clinic Booking Constrained Entity Store
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Application
    APP_NAME: str = "Clinic Booking Store"
    APP_VERSION: str = "1.0.0"

    # Database
    DATABASE_URL: str = "sqlite:///./clinic_booking.db"
    SQLITE_FOREIGN_KEYS: bool = True  # Engine-side FK enforcement behind the store's own checks

    # Store
    QUERY_BATCH_SIZE: int = 100  # Rows fetched per round trip when streaming query results

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
