"""Logging configuration for the visualizer service."""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .settings import VisualizerSettings, get_settings

# Attributes every LogRecord carries; anything else was passed via ``extra``.
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class MinimalJSONFormatter(logging.Formatter):
    """Render each record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - inherited
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z")
        payload: dict[str, Any] = {"ts": ts, "level": record.levelname, "module": record.name}

        if isinstance(record.msg, dict):
            payload.update(record.msg)
        else:
            message = record.getMessage()
            if message:
                payload["message"] = message

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        payload.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRIBUTES and not key.startswith("_")
        )
        return json.dumps(payload, ensure_ascii=False, default=str)


AUDIT_LOGGER_NAME = "chunkviz.extract.audit"


def configure_logging(settings: VisualizerSettings | None = None) -> None:
    """Configure JSON logging plus the extraction audit log file."""

    settings = settings or get_settings()
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"json": {"()": MinimalJSONFormatter}},
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                },
                "extraction_audit": {
                    "class": "logging.FileHandler",
                    "filename": str(log_dir / "extraction_audit.log"),
                    "mode": "a",
                    "encoding": "utf-8",
                    "formatter": "json",
                },
            },
            "root": {
                "level": settings.log_level,
                "handlers": ["default"],
            },
            "loggers": {
                AUDIT_LOGGER_NAME: {
                    "level": "INFO",
                    "handlers": ["extraction_audit"],
                    "propagate": False,
                }
            },
        }
    )
