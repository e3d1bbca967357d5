"""Configuration management for chorechart."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # SQLite Configuration
    sqlite_db_path: str = Field(default="./data/chorechart.db", description="Path to the SQLite database file")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    # Assignment Generation Configuration
    generation_min_days: int = Field(default=1, description="Smallest day count accepted by a single generation run")
    generation_max_days: int = Field(default=365, description="Largest day count accepted by a single generation run")
    generation_horizon_days: int = Field(
        default=7, description="Number of days the nightly job generates ahead (starting today, UTC)"
    )

    # Scheduler Configuration
    enable_scheduler: bool = Field(default=True, description="Start the nightly generation job with the app")

    def require_credential(self, field_name: str, service_name: str) -> str:
        """Validate that a required credential is set, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            service_name: Human-readable service name for error message

        Returns:
            The credential value

        Raises:
            ValueError: If the credential is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{service_name} credential not configured. "
                f"Set {field_name.upper()} environment variable or add to .env file."
            )
        return value


# Application Constants
class Constants:
    """Application-wide constants."""

    # HTTP Status Codes
    HTTP_OK: int = 200
    HTTP_SERVICE_UNAVAILABLE: int = 503

    # HTTP generation trigger
    API_MAX_GENERATION_DAYS: int = 30  # Upper bound for on-demand generation and listing windows

    # Scheduler Configuration
    GENERATION_JOB_HOUR: int = 0  # Midnight UTC
    GENERATION_JOB_MINUTE: int = 5

    # Listing Limits
    MAX_LIST_LIMIT: int = 5000  # Ceiling for unpaginated assignment listings

    # Job Tracker Configuration
    TRACKER_DEAD_LETTER_QUEUE_MAXLEN: int = 100  # Max items in dead letter queue
    TRACKER_CONSECUTIVE_FAILURE_THRESHOLD: int = 3  # Failures before a job lands in the dead letter queue


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
