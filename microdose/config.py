import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="MICRODOSE_", extra="ignore")

    log_level: str = "INFO"

    # Text and calendar defaults
    default_locale: str = "en"
    default_timezone: str = "UTC"

    # Reminder times used when a protocol does not set its own ("HH:MM")
    default_morning_time: str = "08:00"
    default_evening_time: str = "20:00"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def setup_logging(level: str = None):
    """Configure root logging at the given level (defaults to settings.log_level)."""
    if level is None:
        level = get_settings().log_level
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
