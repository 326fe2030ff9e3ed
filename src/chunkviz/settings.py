"""Environment driven settings for the visualizer service."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

LOGGER = logging.getLogger(__name__)


def _int_from_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        LOGGER.warning("Invalid integer for %s: %s; using default %s", name, value, default)
        return default


def _float_from_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        LOGGER.warning("Invalid float for %s: %s; using default %s", name, value, default)
        return default


@dataclass(frozen=True, slots=True)
class VisualizerSettings:
    chunk_size: int = 1000
    overlap: int = 200
    page_height_units: float = 320.0
    max_upload_bytes: int = 25 * 1024 * 1024
    max_sessions: int = 256
    log_level: str = "INFO"
    log_dir: Path = Path("logs")

    @classmethod
    def from_env(cls) -> "VisualizerSettings":
        defaults = cls()
        page_height = _float_from_env("PAGE_HEIGHT_UNITS", defaults.page_height_units)
        if page_height <= 0:
            LOGGER.warning("PAGE_HEIGHT_UNITS must be positive; using default %s", defaults.page_height_units)
            page_height = defaults.page_height_units
        return cls(
            chunk_size=_int_from_env("CHUNK_SIZE", defaults.chunk_size),
            overlap=_int_from_env("CHUNK_OVERLAP", defaults.overlap),
            page_height_units=page_height,
            max_upload_bytes=_int_from_env("MAX_UPLOAD_BYTES", defaults.max_upload_bytes),
            max_sessions=_int_from_env("MAX_SESSIONS", defaults.max_sessions),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).strip().upper() or defaults.log_level,
            log_dir=Path(os.getenv("LOG_DIR", str(defaults.log_dir))),
        )


@lru_cache(maxsize=1)
def get_settings() -> VisualizerSettings:
    """Return the process-wide settings, read once from the environment."""

    return VisualizerSettings.from_env()
