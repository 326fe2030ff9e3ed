"""Work out which extractor an upload needs."""
from __future__ import annotations

import logging
from enum import Enum
from pathlib import PurePath
from typing import Optional

from ..errors import ExtractionError

LOGGER = logging.getLogger(__name__)

# Browsers send these when they do not know better; they say nothing about the payload.
GENERIC_MIME_TYPES = frozenset({"", "application/octet-stream", "binary/octet-stream"})

_PDF_MAGIC = b"%PDF-"
_ZIP_MAGIC = b"PK\x03\x04"
_SNIFF_BYTES = 4096
_DOCX_MAIN_PART = b"word/document.xml"


class DocumentFormat(str, Enum):
    PDF = "pdf"
    DOCX = "docx"
    TXT = "txt"


_MIME_FORMATS = {
    "application/pdf": DocumentFormat.PDF,
    "application/x-pdf": DocumentFormat.PDF,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": DocumentFormat.DOCX,
    "text/plain": DocumentFormat.TXT,
}

_SUFFIX_FORMATS = {
    ".pdf": DocumentFormat.PDF,
    ".docx": DocumentFormat.DOCX,
    ".txt": DocumentFormat.TXT,
    ".text": DocumentFormat.TXT,
}


def sniff_format(data: bytes) -> Optional[DocumentFormat]:
    """Guess the format from the leading bytes of ``data``."""

    head = data[:_SNIFF_BYTES]
    if head.lstrip().startswith(_PDF_MAGIC):
        return DocumentFormat.PDF
    if head.startswith(_ZIP_MAGIC):
        # Part names are stored uncompressed in the zip central directory.
        return DocumentFormat.DOCX if _DOCX_MAIN_PART in data else None
    if b"\x00" in head and not head.startswith((b"\xff\xfe", b"\xfe\xff")):
        return None
    return DocumentFormat.TXT


def detect_format(data: bytes, file_name: str, mime_type: Optional[str] = None) -> DocumentFormat:
    """Return the format of an upload.

    A specific MIME type wins, then a known file suffix. Uploads with neither
    (``application/octet-stream``, a bare ``upload`` name) are sniffed.
    """

    mime = (mime_type or "").split(";", 1)[0].strip().lower()
    if mime in _MIME_FORMATS:
        return _MIME_FORMATS[mime]

    suffix = PurePath(file_name).suffix.lower()
    if suffix in _SUFFIX_FORMATS:
        return _SUFFIX_FORMATS[suffix]

    if mime in GENERIC_MIME_TYPES or not suffix:
        sniffed = sniff_format(data)
        if sniffed is not None:
            LOGGER.info("Detected %s from content of %s (mime %r)", sniffed.value, file_name, mime_type)
            return sniffed

    raise ExtractionError(f"Unsupported file format: {file_name}")
