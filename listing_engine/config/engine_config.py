"""Engine configuration settings for the car listing engine."""

from dataclasses import dataclass
from typing import Optional
import logging
import os

from dotenv import load_dotenv


load_dotenv()

logger = logging.getLogger(__name__)


@dataclass
class DebounceConfig:
    """Filter change debounce configuration."""
    delay_ms: int = 250


@dataclass
class FetchConfig:
    """Listing API configuration."""
    base_url: str = "http://localhost:5000"
    page_limit: int = 12
    timeout_seconds: float = 10.0
    access_token: Optional[str] = None


@dataclass
class RetryConfig:
    """Retry configuration for listing fetches."""
    max_retries: int = 3
    initial_delay_seconds: float = 0.5
    backoff_multiplier: float = 2.0

    def get_backoff_delay(self, attempt: int) -> float:
        """
        Calculate backoff delay before a retry attempt.

        delay = initial_delay_seconds * (backoff_multiplier ^ attempt)

        Args:
            attempt: The retry attempt number (0-indexed)

        Returns:
            Delay in seconds before the retry attempt
        """
        return self.initial_delay_seconds * (self.backoff_multiplier ** attempt)


@dataclass
class EngineSettings:
    """Main engine configuration settings."""
    log_level: str = "INFO"
    debounce: DebounceConfig = None
    fetch: FetchConfig = None
    retry: RetryConfig = None

    def __post_init__(self):
        """Initialize nested configs if not provided."""
        if self.debounce is None:
            self.debounce = DebounceConfig()
        if self.fetch is None:
            self.fetch = FetchConfig()
        if self.retry is None:
            self.retry = RetryConfig()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring malformed {name}={raw!r}, using {default}")
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring malformed {name}={raw!r}, using {default}")
        return default


def load_engine_config() -> dict:
    """Read the engine configuration from the environment.

    Malformed numeric values are logged and replaced by their defaults.
    """
    return {
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "debounce": {
            "delay_ms": _env_int("DEBOUNCE_DELAY_MS", 250),
        },
        "fetch": {
            "base_url": os.getenv("LISTING_API_BASE_URL", "http://localhost:5000"),
            "page_limit": _env_int("LISTING_PAGE_LIMIT", 12),
            "timeout_seconds": _env_float("FETCH_TIMEOUT_SECONDS", 10.0),
            "access_token": os.getenv("LISTING_API_TOKEN"),
        },
        "retry": {
            "max_retries": _env_int("MAX_RETRIES", 3),
            "initial_delay_seconds": _env_float("RETRY_INITIAL_DELAY_SECONDS", 0.5),
            "backoff_multiplier": _env_float("RETRY_BACKOFF_MULTIPLIER", 2.0),
        },
    }


# Default engine configuration
ENGINE_CONFIG = load_engine_config()


def get_engine_settings() -> EngineSettings:
    """Get engine settings from the current environment."""
    config = load_engine_config()
    return EngineSettings(
        log_level=config["log_level"],
        debounce=DebounceConfig(**config["debounce"]),
        fetch=FetchConfig(**config["fetch"]),
        retry=RetryConfig(**config["retry"]),
    )


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for applications embedding the engine."""
    logging.basicConfig(
        level=getattr(logging, (level or ENGINE_CONFIG["log_level"]).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
