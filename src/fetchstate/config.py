"""Settings loaded from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from fetchstate.api import DEFAULT_BASE_URL, DEFAULT_PAGE_SIZE, PHOTOS_PAGE_SIZE
from fetchstate.duration import parse_duration

logger = logging.getLogger(__name__)

ENV_PREFIX = "FETCHSTATE"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str) -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer, using %d", name, raw, default)
        return default


def _env_duration(name: str, default: str) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return parse_duration(default)
    value: str | int = int(raw) if raw.strip().isdigit() else raw
    try:
        return parse_duration(value)
    except ValueError:
        logger.warning("%s=%r is not a duration, using %s", name, raw, default)
        return parse_duration(default)


@dataclass(frozen=True)
class Settings:
    """Runtime settings. Durations are in milliseconds."""

    api_base_url: str = DEFAULT_BASE_URL
    api_timeout: float = 10_000
    cache_duration: float = 300_000
    search_debounce: float = 300
    page_size: int = DEFAULT_PAGE_SIZE
    photos_page_size: int = PHOTOS_PAGE_SIZE
    storage_path: Path = Path("~/.fetchstate/storage.json")
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read settings from ``FETCHSTATE_*`` environment variables."""
    return Settings(
        api_base_url=_env(_k("API_BASE_URL"), DEFAULT_BASE_URL),
        api_timeout=_env_duration(_k("API_TIMEOUT"), "10s"),
        cache_duration=_env_duration(_k("CACHE_DURATION"), "5m"),
        search_debounce=_env_duration(_k("SEARCH_DEBOUNCE"), "300ms"),
        page_size=_env_int(_k("PAGE_SIZE"), DEFAULT_PAGE_SIZE),
        photos_page_size=_env_int(_k("PHOTOS_PAGE_SIZE"), PHOTOS_PAGE_SIZE),
        storage_path=Path(
            _env(_k("STORAGE_PATH"), "~/.fetchstate/storage.json")
        ).expanduser(),
        log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
    )
