"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://localhost:3000"


class ConfigError(RuntimeError):
    """Raised when mandatory configuration is missing."""


@dataclass(frozen=True)
class Settings:
    google_api_key: str
    port: int = 8080
    places_timeout_seconds: float = 10.0
    places_max_results: int = 20
    default_search_radius_meters: int = 5000
    cors_allow_origins: Tuple[str, ...] = ()

    def require_api_key(self) -> str:
        if not self.google_api_key:
            raise ConfigError("GOOGLE_API_KEY must be set in the environment to query Google Places.")
        return self.google_api_key


def _parse_origins(raw: str) -> Tuple[str, ...]:
    raw = raw.strip()
    if raw == "*":
        return ("*",)
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_api_key = os.getenv("GOOGLE_API_KEY", "")
    port = int(os.getenv("PORT", "8080"))
    places_timeout_seconds = float(os.getenv("PLACES_TIMEOUT_SECONDS", "10"))
    places_max_results = int(os.getenv("PLACES_MAX_RESULTS", "20"))
    default_search_radius_meters = int(os.getenv("DEFAULT_SEARCH_RADIUS_METERS", "5000"))
    cors_allow_origins = _parse_origins(os.getenv("CORS_ALLOW_ORIGINS", _DEFAULT_CORS_ORIGINS))

    if not google_api_key:
        logger.warning("GOOGLE_API_KEY is not configured; Google Places requests will fail.")

    return Settings(
        google_api_key=google_api_key,
        port=port,
        places_timeout_seconds=places_timeout_seconds,
        places_max_results=places_max_results,
        default_search_radius_meters=default_search_radius_meters,
        cors_allow_origins=cors_allow_origins,
    )
