"""Exceptions raised by the chunk visualizer."""
from __future__ import annotations


class ChunkVisualizerError(Exception):
    """Base class for recoverable visualizer errors."""


class ExtractionError(ChunkVisualizerError, RuntimeError):
    """Raised when a source document cannot be read or parsed."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.__cause__ = cause


class ConfigError(ChunkVisualizerError, ValueError):
    """Base class for chunking configuration problems."""


class ConfigParseError(ConfigError):
    """Raised when the configuration text is not well-formed JSON."""


class ConfigValidationError(ConfigError):
    """Raised when a parsed configuration violates a chunking rule."""
