"""
Configuration via environment variables.

An optional ``.env`` file is loaded with python-dotenv before anything
reads ``os.environ``. All values are exposed through ``get_settings()``.
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Settings:
    """
    Application settings.

    Attributes:
        app_name: Name used in logs and the OpenAPI title
        app_env: Environment label (development, production, ...)
        host: Address uvicorn binds to
        port: Port uvicorn listens on
        log_level: Console log level
        log_file: Optional path of a log file
        api_key: Declared for clients that send ``x-api-key``; not enforced
    """
    app_name: str = "product-api"
    app_env: str = "development"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    log_file: Optional[str] = None
    api_key: Optional[str] = None

    def is_development(self) -> bool:
        return self.app_env.lower() == "development"


def _get_int(key: str, default: int) -> int:
    raw = os.environ.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable '{key}' must be an integer, got {raw!r}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read settings from the environment once and cache them."""
    return Settings(
        app_name=os.environ.get("APP_NAME", "product-api"),
        app_env=os.environ.get("APP_ENV", "development"),
        host=os.environ.get("HOST", "0.0.0.0"),
        port=_get_int("PORT", 3000),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        log_file=os.environ.get("LOG_FILE") or None,
        api_key=os.environ.get("API_KEY") or None,
    )
