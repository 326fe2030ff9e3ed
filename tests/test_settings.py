from pathlib import Path

import pytest

from chunkviz.settings import VisualizerSettings, get_settings


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch, clean_settings_cache) -> None:
    monkeypatch.setenv("CHUNK_SIZE", "512")
    monkeypatch.setenv("CHUNK_OVERLAP", "64")
    monkeypatch.setenv("PAGE_HEIGHT_UNITS", "480")
    monkeypatch.setenv("LOG_DIR", "/tmp/chunkviz-test-logs")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.chunk_size == 512
    assert settings.overlap == 64
    assert settings.page_height_units == 480.0
    assert settings.log_dir == Path("/tmp/chunkviz-test-logs")
    assert settings.log_level == "DEBUG"
    assert get_settings() is settings


def test_settings_fall_back_on_invalid_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHUNK_SIZE", "large")
    monkeypatch.setenv("PAGE_HEIGHT_UNITS", "-3")
    monkeypatch.delenv("CHUNK_OVERLAP", raising=False)

    settings = VisualizerSettings.from_env()

    assert settings.chunk_size == 1000
    assert settings.overlap == 200
    assert settings.page_height_units == 320.0
