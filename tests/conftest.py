"""Shared fixtures for the visualizer test-suite."""
from __future__ import annotations

import os
import tempfile
from typing import Iterator

import pytest

# ``chunkviz.main`` configures logging on import; keep the audit log out of the
# working tree.
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="chunkviz-logs-"))

from chunkviz.session import SessionStore  # noqa: E402
from chunkviz.settings import VisualizerSettings, get_settings  # noqa: E402


@pytest.fixture()
def settings() -> VisualizerSettings:
    return VisualizerSettings()


@pytest.fixture()
def store(settings: VisualizerSettings) -> SessionStore:
    return SessionStore(settings=settings)


@pytest.fixture()
def clean_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
