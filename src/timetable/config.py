"""Timetable configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings


class TimetableConfig(BaseSettings):
    """Timetable configuration loaded from environment variables.

    Settings are loaded from environment variables with sensible defaults.
    For local development, create a .env file in the project root.
    """

    # beste.schule journal API
    api_base_url: str = Field(
        default="https://beste.schule/api",
        description="Base URL of the journal API",
    )
    api_token: str = Field(
        default="",
        description="Bearer token for the journal API",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for a single week request",
    )

    # Resolution
    search_horizon_days: int = Field(
        default=21,
        description="How many calendar days to search forward for the next school day",
    )
    day_cutoff_hour: int = Field(
        default=17,
        description="From this local hour on, show the next day's timetable",
    )
    show_countdown_days: int = Field(
        default=5,
        description="Show holiday mode instead of a timetable from this many days off",
    )
    refresh_interval_seconds: int = Field(
        default=7 * 60,
        description="Refresh interval for the CLI watch mode",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "TIMETABLE_",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton pattern
_config: TimetableConfig | None = None


def get_config() -> TimetableConfig:
    """Get the timetable configuration singleton.

    Returns:
        TimetableConfig: Timetable configuration instance
    """
    global _config
    if _config is None:
        _config = TimetableConfig()
    return _config
