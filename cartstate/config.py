"""Cart client configuration from environment variables."""
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from cartstate.logging import get_logger

logger = get_logger(__name__)

DEFAULT_API_URL = "http://localhost:8000/api"
DEFAULT_TIMEOUT = 10.0
DEFAULT_CONNECT_TIMEOUT = 5.0
DEFAULT_MAX_RETRIES = 3


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using default %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Non-positive %s=%r, using default %s", name, raw, default)
        return default
    return value


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using default %s", name, raw, default)
        return default
    if value < 1:
        logger.warning("%s must be at least 1, got %r; using default %s", name, raw, default)
        return default
    return value


@dataclass(frozen=True)
class CartSettings:
    """Settings for talking to the remote cart service."""
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "CartSettings":
        """
        Read settings from the environment.

        Variables:
            CART_API_URL: Base URL of the cart API
            CART_API_TIMEOUT: Request timeout in seconds
            CART_API_MAX_RETRIES: Attempts for idempotent requests
            LOG_LEVEL: Level for cartstate logs
        """
        api_url = os.environ.get("CART_API_URL", "") or DEFAULT_API_URL
        return cls(
            api_url=api_url.rstrip("/"),
            timeout=_env_float("CART_API_TIMEOUT", DEFAULT_TIMEOUT),
            connect_timeout=DEFAULT_CONNECT_TIMEOUT,
            max_retries=_env_int("CART_API_MAX_RETRIES", DEFAULT_MAX_RETRIES),
            log_level=os.environ.get("LOG_LEVEL", "") or "INFO",
        )


def load_settings(env_file: str | Path | None = None) -> CartSettings:
    """
    Load settings, optionally reading a .env file first.

    Variables already present in the environment win over the file.
    """
    if env_file is not None:
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path, override=False)
        else:
            logger.warning("Env file %s not found, using process environment", env_path)
    return CartSettings.from_env()
