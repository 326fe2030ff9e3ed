"""Document extraction producing page boundaries and concatenated text."""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..errors import ExtractionError
from ..models import ExtractedDocument, Page
from .extractors import DocxExtractor, PDFExtractor, TextExtractor
from .format_detection import DocumentFormat, detect_format, sniff_format

LOGGER = logging.getLogger(__name__)

# Appended after every page and counted into that page's span.
PAGE_SEPARATOR = "\n\n"

__all__ = [
    "PAGE_SEPARATOR",
    "DocumentExtractor",
    "DocumentFormat",
    "detect_format",
    "assemble_document",
    "sniff_format",
]


def assemble_document(page_texts: Sequence[str], file_name: Optional[str] = None) -> ExtractedDocument:
    """Concatenate ``page_texts`` and record where each page starts."""

    pages: List[Page] = []
    parts: List[str] = []
    offset = 0
    for page_number, text in enumerate(page_texts, start=1):
        char_count = len(text) + len(PAGE_SEPARATOR)
        pages.append(Page(page_number=page_number, start_char_index=offset, char_count=char_count))
        parts.append(text)
        parts.append(PAGE_SEPARATOR)
        offset += char_count
    return ExtractedDocument(file_name=file_name, pages=tuple(pages), full_text="".join(parts))


class DocumentExtractor:
    """Dispatch uploads to the extractor matching their format."""

    def __init__(self) -> None:
        self.pdf_extractor = PDFExtractor()
        self.docx_extractor = DocxExtractor()
        self.text_extractor = TextExtractor()

    def extract(self, data: bytes, file_name: str, mime_type: Optional[str] = None) -> ExtractedDocument:
        if not data:
            raise ExtractionError("Failed to read file.")

        document_format = detect_format(data, file_name, mime_type)
        LOGGER.info("Extracting %s (%s, %s bytes)", file_name, document_format.value, len(data))

        if document_format is DocumentFormat.PDF:
            page_texts = self.pdf_extractor.extract(data)
        elif document_format is DocumentFormat.DOCX:
            page_texts = self.docx_extractor.extract(data)
        else:
            page_texts = self.text_extractor.extract(data)

        document = assemble_document(page_texts, file_name=file_name)
        LOGGER.info(
            "Extracted %s pages (%s characters) from %s",
            len(document.pages),
            document.total_chars,
            file_name,
        )
        return document
