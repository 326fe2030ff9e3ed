import json

import pytest

from chunkviz.config import (
    MISSING_FIELDS_MESSAGE,
    default_config_text,
    dump_chunk_config,
    parse_chunk_config,
)
from chunkviz.errors import ConfigError, ConfigParseError, ConfigValidationError
from chunkviz.models import ChunkConfig
from chunkviz.settings import VisualizerSettings


def _config(**values) -> str:
    return json.dumps(values)


def test_parse_accepts_valid_config():
    assert parse_chunk_config(_config(chunkSize=100, overlap=99)) == ChunkConfig(chunk_size=100, overlap=99)


def test_parse_ignores_unknown_keys_and_coerces_integral_floats():
    config = parse_chunk_config('{"chunkSize": 1000.0, "overlap": 0, "strategy": "fixed"}')

    assert config == ChunkConfig(chunk_size=1000, overlap=0)
    assert isinstance(config.chunk_size, int)


@pytest.mark.parametrize(
    "values, message",
    [
        ({"chunkSize": 0, "overlap": 0}, "'chunkSize' must be positive."),
        ({"chunkSize": -5, "overlap": 0}, "'chunkSize' must be positive."),
        ({"chunkSize": 100, "overlap": -1}, "'overlap' cannot be negative."),
        ({"chunkSize": 100, "overlap": 100}, "'overlap' must be less than 'chunkSize'."),
        ({"chunkSize": 100, "overlap": 150}, "'overlap' must be less than 'chunkSize'."),
        ({"chunkSize": 100}, MISSING_FIELDS_MESSAGE),
        ({"chunkSize": "100", "overlap": 10}, MISSING_FIELDS_MESSAGE),
        ({"chunkSize": True, "overlap": 0}, MISSING_FIELDS_MESSAGE),
        ({"chunkSize": 100, "overlap": None}, MISSING_FIELDS_MESSAGE),
        ({"chunkSize": 100.5, "overlap": 10}, "'chunkSize' and 'overlap' must be whole numbers."),
    ],
)
def test_parse_rejects_invalid_values(values, message):
    with pytest.raises(ConfigValidationError) as excinfo:
        parse_chunk_config(json.dumps(values))

    assert str(excinfo.value) == message


@pytest.mark.parametrize("text", ["[1000, 200]", "42", "null", '"chunkSize"'])
def test_parse_rejects_non_object_json(text):
    with pytest.raises(ConfigValidationError) as excinfo:
        parse_chunk_config(text)

    assert str(excinfo.value) == MISSING_FIELDS_MESSAGE


@pytest.mark.parametrize("text", ["", "{", "{chunkSize: 10}", '{"chunkSize": 10, "overlap": 2,}'])
def test_parse_reports_malformed_json(text):
    with pytest.raises(ConfigParseError) as excinfo:
        parse_chunk_config(text)

    assert str(excinfo.value).startswith("Invalid JSON:")
    assert isinstance(excinfo.value, ConfigError)
    assert isinstance(excinfo.value, ValueError)


def test_default_config_text_uses_settings():
    text = default_config_text(VisualizerSettings(chunk_size=512, overlap=64))

    assert parse_chunk_config(text) == ChunkConfig(chunk_size=512, overlap=64)


def test_dump_chunk_config_round_trips():
    config = ChunkConfig(chunk_size=300, overlap=30)

    assert json.loads(dump_chunk_config(config)) == {"chunkSize": 300, "overlap": 30}


def test_parse_reports_integer_literals_too_long_to_convert():
    text = '{"chunkSize": ' + "9" * 5000 + ', "overlap": 0}'

    with pytest.raises(ConfigParseError) as excinfo:
        parse_chunk_config(text)

    assert str(excinfo.value).startswith("Invalid JSON:")


def test_parse_reports_excessively_nested_json():
    with pytest.raises(ConfigParseError):
        parse_chunk_config("[" * 200000 + "]" * 200000)
