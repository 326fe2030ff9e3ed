import math

import pytest

from chunkviz.chunker import CHUNK_COLORS, chunk_text
from chunkviz.models import ChunkConfig


def _ranges(chunks):
    return [(chunk.start, chunk.end) for chunk in chunks]


def test_chunk_text_matches_reference_example():
    chunks = chunk_text(1000, ChunkConfig(chunk_size=400, overlap=100))

    assert _ranges(chunks) == [(0, 400), (300, 700), (600, 1000)]
    assert [chunk.index for chunk in chunks] == [0, 1, 2]


def test_chunk_text_returns_nothing_for_empty_text():
    assert chunk_text(0, ChunkConfig(chunk_size=10, overlap=2)) == []


@pytest.mark.parametrize("total_chars", [1, 50, 400, 401])
def test_chunk_text_single_chunk_when_size_covers_text(total_chars):
    chunks = chunk_text(total_chars, ChunkConfig(chunk_size=max(total_chars, 400), overlap=0))

    assert _ranges(chunks) == [(0, total_chars)]


@pytest.mark.parametrize(
    "total_chars, chunk_size, overlap",
    [(1000, 400, 100), (999, 100, 99), (12345, 1000, 200), (17, 5, 0), (3, 2, 1), (250, 100, 0)],
)
def test_chunk_text_covers_input_with_exact_overlap(total_chars, chunk_size, overlap):
    chunks = chunk_text(total_chars, ChunkConfig(chunk_size=chunk_size, overlap=overlap))

    assert chunks[0].start == 0
    assert chunks[-1].end == total_chars

    coverage = [False] * total_chars
    for chunk in chunks:
        assert 0 <= chunk.start < chunk.end <= total_chars
        assert chunk.length <= chunk_size
        for position in range(chunk.start, chunk.end):
            coverage[position] = True
    assert all(coverage)

    for current, nxt in zip(chunks, chunks[1:]):
        assert current.length == chunk_size
        assert current.end - nxt.start == overlap


@pytest.mark.parametrize(
    "total_chars, chunk_size, overlap",
    [(1000, 400, 100), (10, 400, 100), (100, 400, 100), (101, 400, 100), (5000, 7, 3), (1, 1, 0)],
)
def test_chunk_count_matches_closed_form(total_chars, chunk_size, overlap):
    chunks = chunk_text(total_chars, ChunkConfig(chunk_size=chunk_size, overlap=overlap))

    if total_chars > overlap:
        expected = math.ceil((total_chars - overlap) / (chunk_size - overlap))
    else:
        expected = 1
    assert len(chunks) == expected


def test_chunk_colors_cycle_through_palette():
    chunks = chunk_text(100, ChunkConfig(chunk_size=10, overlap=0))

    assert len(chunks) == 10
    assert chunks[0].color_class == CHUNK_COLORS[0]
    assert chunks[len(CHUNK_COLORS)].color_class == CHUNK_COLORS[0]
    assert chunks[1].color_class == CHUNK_COLORS[1]
    assert chunks[3].label == "Chunk 4"


@pytest.mark.parametrize(
    "config",
    [ChunkConfig(chunk_size=10, overlap=10), ChunkConfig(chunk_size=0, overlap=0), ChunkConfig(chunk_size=10, overlap=-1)],
)
def test_chunk_text_refuses_configs_that_would_not_advance(config):
    with pytest.raises(ValueError):
        chunk_text(100, config)
