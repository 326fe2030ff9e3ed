"""Extractors turning uploaded bytes into per-page text."""
from __future__ import annotations

import io
import logging
from typing import List

from docx import Document as DocxDocument
from PyPDF2 import PdfReader

from ..errors import ExtractionError

LOGGER = logging.getLogger(__name__)

_UTF16_BOMS = (b"\xff\xfe", b"\xfe\xff")


class PDFExtractor:
    """Extract the text of every page of a PDF document."""

    def extract(self, data: bytes) -> List[str]:
        try:
            reader = PdfReader(io.BytesIO(data))
            if reader.is_encrypted and not reader.decrypt(""):
                raise ExtractionError("Error parsing PDF: document is password protected")
            pages = list(reader.pages)
        except ExtractionError:
            raise
        except Exception as error:
            raise ExtractionError(f"Error parsing PDF: {error}", cause=error) from error

        texts: List[str] = []
        for index, page in enumerate(pages, start=1):
            try:
                text = page.extract_text() or ""
            except Exception as error:
                raise ExtractionError(
                    f"Error parsing PDF: page {index} could not be read ({error})", cause=error
                ) from error
            LOGGER.debug("Extracted %s characters from PDF page %s", len(text), index)
            texts.append(text)
        return texts


class DocxExtractor:
    """Extract text from Microsoft Word documents.

    Word files carry no reliable page layout, so the whole document is
    reported as a single page.
    """

    def extract(self, data: bytes) -> List[str]:
        try:
            document = DocxDocument(io.BytesIO(data))
        except Exception as error:
            raise ExtractionError(f"Error parsing DOCX: {error}", cause=error) from error

        paragraphs = [paragraph.text for paragraph in document.paragraphs if paragraph.text]
        return ["\n\n".join(paragraphs)]


class TextExtractor:
    """Extract text from plaintext documents, splitting pages on form feeds."""

    def extract(self, data: bytes) -> List[str]:
        text = self._decode(data)
        pages = text.split("\f")
        if len(pages) > 1 and pages[-1] == "":
            pages.pop()
        return pages

    @staticmethod
    def _decode(data: bytes) -> str:
        if data.startswith(_UTF16_BOMS):
            try:
                return data.decode("utf-16")
            except UnicodeDecodeError:
                LOGGER.warning("UTF-16 BOM present but payload is not valid UTF-16")
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError:
            LOGGER.info("Text upload is not valid UTF-8; decoding as latin-1")
            return data.decode("latin-1")
