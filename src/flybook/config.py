"""Environment-based settings for the flight booking client."""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_API_URL = "http://localhost:8081/api"
DEFAULT_TIMEOUT = 30
DEFAULT_DWELL = 4.7
DEFAULT_GRACE = 0.3


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Invalid value for {name}: {value!r} (expected a number)")


def _log_level_env(name: str, default: str) -> str:
    level = os.getenv(name, default).strip().upper() or default
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Invalid value for {name}: {level!r} (expected a logging level name)")
    return level


@dataclass
class Settings:
    """Runtime settings.

    Attributes:
        api_url: Base URL of the flight/booking service.
        timeout: HTTP request timeout in seconds.
        notification_dwell: Seconds a notification stays visible.
        notification_grace: Seconds between fading and removal.
        log_level: Name of the logging level for the CLI.
    """

    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    notification_dwell: float = DEFAULT_DWELL
    notification_grace: float = DEFAULT_GRACE
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment (and a .env file, if present)."""
        load_dotenv()
        return cls(
            api_url=os.getenv("FLYBOOK_API_URL", DEFAULT_API_URL),
            timeout=_float_env("FLYBOOK_TIMEOUT", DEFAULT_TIMEOUT),
            notification_dwell=_float_env("FLYBOOK_NOTIFICATION_DWELL", DEFAULT_DWELL),
            notification_grace=_float_env("FLYBOOK_NOTIFICATION_GRACE", DEFAULT_GRACE),
            log_level=_log_level_env("FLYBOOK_LOG_LEVEL", "WARNING"),
        )
