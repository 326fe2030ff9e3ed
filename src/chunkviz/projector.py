"""Projection of chunks onto the pages they span."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence

from .models import Chunk, ChunkProjection, DrawRect, Page, PageView

LOGGER = logging.getLogger(__name__)


def _project_page(page: Page, chunks: Iterable[Chunk], page_height_units: float) -> List[ChunkProjection]:
    # Empty pages have no vertical extent to project onto.
    if page.char_count <= 0:
        return []

    page_start = page.start_char_index
    page_end = page.end_char_index
    projections: List[ChunkProjection] = []
    for chunk in chunks:
        if not (chunk.start < page_end and chunk.end > page_start):
            continue
        visible_start = max(chunk.start, page_start)
        visible_end = min(chunk.end, page_end)
        top = (visible_start - page_start) / page.char_count * page_height_units
        height = (visible_end - visible_start) / page.char_count * page_height_units
        projections.append(ChunkProjection(chunk=chunk, top=top, height=height))
    return projections


def project_chunks(
    pages: Sequence[Page],
    chunks: Sequence[Chunk],
    page_height_units: float,
) -> Dict[int, List[ChunkProjection]]:
    """Map each page number to the ordered chunk slices visible on that page.

    A chunk intersects a page when their half-open ranges overlap; chunks that
    merely touch a page boundary are excluded. ``top`` and ``height`` are the
    fraction of the page covered, scaled by ``page_height_units``.
    """

    return {page.page_number: _project_page(page, chunks, page_height_units) for page in pages}


def build_page_views(
    pages: Sequence[Page],
    chunks: Sequence[Chunk],
    full_text: str,
    page_height_units: float,
) -> List[PageView]:
    """Turn projections into renderer rectangles, one :class:`PageView` per page."""

    projections = project_chunks(pages, chunks, page_height_units)
    views: List[PageView] = []
    for page in pages:
        rects = [
            DrawRect(
                label=projection.chunk.label,
                top_offset=projection.top,
                height_offset=projection.height,
                color_class=projection.chunk.color_class,
                display_text=full_text[projection.chunk.start : projection.chunk.end],
                chunk_index=projection.chunk.index,
            )
            for projection in projections[page.page_number]
        ]
        views.append(
            PageView(
                page_number=page.page_number,
                start_char_index=page.start_char_index,
                char_count=page.char_count,
                rects=rects,
            )
        )
    LOGGER.debug("Built views for %s pages from %s chunks", len(views), len(chunks))
    return views
