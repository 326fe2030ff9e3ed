"""Data models shared by the chunker, the page projector and the extractors."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

# Renderer colour classes, assigned to chunks cyclically by position.
CHUNK_COLORS: Tuple[str, ...] = (
    "bg-blue-500/30 border-l-4 border-blue-400",
    "bg-green-500/30 border-l-4 border-green-400",
    "bg-yellow-500/30 border-l-4 border-yellow-400",
    "bg-purple-500/30 border-l-4 border-purple-400",
    "bg-red-500/30 border-l-4 border-red-400",
    "bg-indigo-500/30 border-l-4 border-indigo-400",
    "bg-pink-500/30 border-l-4 border-pink-400",
)


@dataclass(frozen=True, slots=True)
class Page:
    """Character span contributed by one page of the source document."""

    page_number: int
    start_char_index: int
    char_count: int

    @property
    def end_char_index(self) -> int:
        return self.start_char_index + self.char_count


@dataclass(frozen=True, slots=True)
class ChunkConfig:
    """Validated chunking parameters."""

    chunk_size: int
    overlap: int

    @property
    def step(self) -> int:
        return self.chunk_size - self.overlap


@dataclass(frozen=True, slots=True)
class Chunk:
    """Half-open ``[start, end)`` window into the concatenated document text."""

    index: int
    start: int
    end: int
    color_index: int

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def color_class(self) -> str:
        return CHUNK_COLORS[self.color_index % len(CHUNK_COLORS)]

    @property
    def label(self) -> str:
        return f"Chunk {self.index + 1}"


@dataclass(frozen=True, slots=True)
class ChunkProjection:
    """Visible slice of a chunk on a single page, in page height units."""

    chunk: Chunk
    top: float
    height: float


@dataclass(frozen=True, slots=True)
class DrawRect:
    """Rectangle handed to the renderer for one chunk on one page.

    ``label`` and ``chunk_index`` number chunks by their position in the whole
    document, not per page: a chunk spanning two pages is drawn on both with
    the same label, and the first rectangle on page 2 is usually not
    "Chunk 1". ``display_text`` is the full chunk text, even though only the
    slice between ``top_offset`` and ``top_offset + height_offset`` is drawn.
    """

    label: str
    top_offset: float
    height_offset: float
    color_class: str
    display_text: str
    chunk_index: int


@dataclass(slots=True)
class PageView:
    """Draw instructions for a single page."""

    page_number: int
    start_char_index: int
    char_count: int
    rects: List[DrawRect] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ExtractedDocument:
    """Pages and concatenated text produced by an extractor."""

    file_name: str | None
    pages: Tuple[Page, ...]
    full_text: str

    @property
    def total_chars(self) -> int:
        return len(self.full_text)

    @classmethod
    def empty(cls) -> "ExtractedDocument":
        return cls(file_name=None, pages=(), full_text="")
