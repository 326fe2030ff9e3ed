"""Parsing and validation of the JSON chunking configuration."""
from __future__ import annotations

import json
import math
from typing import Any

from .errors import ConfigParseError, ConfigValidationError
from .models import ChunkConfig
from .settings import VisualizerSettings, get_settings

MISSING_FIELDS_MESSAGE = "Config must have 'chunkSize' and 'overlap' as numbers."
NOT_WHOLE_MESSAGE = "'chunkSize' and 'overlap' must be whole numbers."
NON_POSITIVE_SIZE_MESSAGE = "'chunkSize' must be positive."
NEGATIVE_OVERLAP_MESSAGE = "'overlap' cannot be negative."
OVERLAP_TOO_LARGE_MESSAGE = "'overlap' must be less than 'chunkSize'."


def dump_chunk_config(config: ChunkConfig) -> str:
    """Serialise ``config`` using the same keys the parser expects."""

    return json.dumps({"chunkSize": config.chunk_size, "overlap": config.overlap}, indent=2)


def default_config_text(settings: VisualizerSettings | None = None) -> str:
    settings = settings or get_settings()
    return json.dumps({"chunkSize": settings.chunk_size, "overlap": settings.overlap}, indent=2)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but not a usable size.
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _as_whole(value: int | float) -> int:
    if isinstance(value, float):
        if not value.is_integer():
            raise ConfigValidationError(NOT_WHOLE_MESSAGE)
        return int(value)
    return value


def parse_chunk_config(text: str) -> ChunkConfig:
    """Parse configuration ``text`` into a validated :class:`ChunkConfig`.

    Raises :class:`ConfigParseError` when the text is not JSON and
    :class:`ConfigValidationError` when a chunking rule is violated.
    """

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigParseError(
            f"Invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})"
        ) from exc
    except (ValueError, RecursionError) as exc:
        # Over-long integer literals and pathological nesting.
        raise ConfigParseError(f"Invalid JSON: {exc}") from exc

    if not isinstance(parsed, dict):
        raise ConfigValidationError(MISSING_FIELDS_MESSAGE)

    chunk_size = parsed.get("chunkSize")
    overlap = parsed.get("overlap")
    if not _is_number(chunk_size) or not _is_number(overlap):
        raise ConfigValidationError(MISSING_FIELDS_MESSAGE)

    if chunk_size <= 0:
        raise ConfigValidationError(NON_POSITIVE_SIZE_MESSAGE)
    if overlap < 0:
        raise ConfigValidationError(NEGATIVE_OVERLAP_MESSAGE)
    if overlap >= chunk_size:
        raise ConfigValidationError(OVERLAP_TOO_LARGE_MESSAGE)

    return ChunkConfig(chunk_size=_as_whole(chunk_size), overlap=_as_whole(overlap))
