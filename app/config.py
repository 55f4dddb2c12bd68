"""
Application settings read from the environment.
"""

import os
from dataclasses import dataclass


def _flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the web server, database and geocoder."""
    host: str = "0.0.0.0"
    port: int = 3003
    database_url: str = "sqlite:///./train_catalogue.db"
    hosted: bool = False
    geocoder_enabled: bool = True
    geocoder_user_agent: str = "train-catalogue/1.0"
    geocoder_timeout: float = 10.0
    geocoder_min_delay: float = 1.0
    geocoder_max_retries: int = 2
    geocoder_error_wait: float = 5.0


def load_settings() -> Settings:
    """Build settings from environment variables, falling back to defaults."""
    return Settings(
        host=os.getenv("HOST", Settings.host),
        port=int(os.getenv("PORT", Settings.port)),
        database_url=os.getenv("DATABASE_URL", Settings.database_url),
        hosted=_flag("HOSTED", Settings.hosted),
        geocoder_enabled=_flag("GEOCODER_ENABLED", Settings.geocoder_enabled),
        geocoder_user_agent=os.getenv("GEOCODER_USER_AGENT", Settings.geocoder_user_agent),
        geocoder_timeout=float(os.getenv("GEOCODER_TIMEOUT", Settings.geocoder_timeout)),
        geocoder_min_delay=float(os.getenv("GEOCODER_MIN_DELAY", Settings.geocoder_min_delay)),
        geocoder_max_retries=int(os.getenv("GEOCODER_MAX_RETRIES", Settings.geocoder_max_retries)),
        geocoder_error_wait=float(os.getenv("GEOCODER_ERROR_WAIT", Settings.geocoder_error_wait)),
    )


settings = load_settings()
