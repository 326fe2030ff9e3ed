"""Per-session visualizer state.

A session holds the currently loaded document and the configuration text.
Chunks and page views are never stored: they are derived from the current
``(document, config)`` pair every time they are requested, so a new upload
or a config edit fully supersedes whatever was shown before.
"""
from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Tuple

from starlette.concurrency import run_in_threadpool

from .chunker import chunk_text
from .config import default_config_text, parse_chunk_config
from .errors import ConfigError, ExtractionError
from .extract import DocumentExtractor
from .logging_config import AUDIT_LOGGER_NAME
from .models import Chunk, ChunkConfig, ExtractedDocument, PageView
from .projector import build_page_views
from .settings import VisualizerSettings, get_settings

LOGGER = logging.getLogger(__name__)
AUDIT_LOGGER = logging.getLogger(AUDIT_LOGGER_NAME)


@lru_cache(maxsize=64)
def _cached_chunks(total_chars: int, config: ChunkConfig) -> Tuple[Chunk, ...]:
    return tuple(chunk_text(total_chars, config))


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Consistent view of a session at one point in time."""

    session_id: str
    document: ExtractedDocument
    config_text: str
    config: Optional[ChunkConfig]
    config_error: Optional[str]
    document_error: Optional[str]
    is_loading: bool

    @property
    def error(self) -> Optional[str]:
        return self.document_error or self.config_error

    @property
    def chunks(self) -> Tuple[Chunk, ...]:
        if self.config is None or not self.document.pages:
            return ()
        return _cached_chunks(self.document.total_chars, self.config)

    def page_views(self, page_height_units: float) -> List[PageView]:
        return build_page_views(self.document.pages, self.chunks, self.document.full_text, page_height_units)


class VisualizerSession:
    """Mutable holder for one user's document and chunking configuration."""

    def __init__(
        self,
        session_id: str,
        *,
        extractor: DocumentExtractor | None = None,
        settings: VisualizerSettings | None = None,
    ) -> None:
        self.session_id = session_id
        self.extractor = extractor or DocumentExtractor()
        self.settings = settings or get_settings()
        self._lock = threading.Lock()
        self._document = ExtractedDocument.empty()
        self._document_error: Optional[str] = None
        self._load_token = 0
        self._loading = False
        self._config_text = ""
        self._config: Optional[ChunkConfig] = None
        self._config_error: Optional[str] = None
        try:
            self.update_config(default_config_text(self.settings))
        except ConfigError as error:
            LOGGER.warning("Default chunking config is invalid: %s", error)

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return SessionSnapshot(
                session_id=self.session_id,
                document=self._document,
                config_text=self._config_text,
                config=self._config,
                config_error=self._config_error,
                document_error=self._document_error,
                is_loading=self._loading,
            )

    def update_config(self, text: str) -> SessionSnapshot:
        """Replace the configuration text, re-validating it.

        The text is kept even when invalid so it can be shown back for editing;
        the parsed config is cleared and the error re-raised in that case.
        """

        try:
            config = parse_chunk_config(text)
        except ConfigError as error:
            with self._lock:
                self._config_text = text
                self._config = None
                self._config_error = str(error)
            LOGGER.info("Rejected config for session %s: %s", self.session_id, error)
            raise

        with self._lock:
            self._config_text = text
            self._config = config
            self._config_error = None
        LOGGER.info(
            "Config for session %s set to chunk_size=%s overlap=%s",
            self.session_id,
            config.chunk_size,
            config.overlap,
        )
        return self.snapshot()

    async def load_document(
        self, data: bytes, file_name: str, mime_type: Optional[str] = None
    ) -> SessionSnapshot:
        """Extract ``data`` and make it the session's current document.

        Only the most recently started load may commit; an older load that
        finishes afterwards is discarded. On failure the document is reset to
        the empty state and the :class:`ExtractionError` is re-raised.
        """

        token = self._begin_load(file_name)
        started = time.perf_counter()
        try:
            document = await run_in_threadpool(self.extractor.extract, data, file_name, mime_type)
        except ExtractionError as error:
            if self._commit(token, ExtractedDocument(file_name=file_name, pages=(), full_text=""), str(error)):
                LOGGER.warning("Extraction failed for %s in session %s: %s", file_name, self.session_id, error)
            raise

        if not self._commit(token, document, None):
            LOGGER.info("Discarded stale extraction of %s for session %s", file_name, self.session_id)
            return self.snapshot()

        duration = time.perf_counter() - started
        AUDIT_LOGGER.info(
            {
                "event": "extract",
                "session_id": self.session_id,
                "file_name": file_name,
                "pages": len(document.pages),
                "total_chars": document.total_chars,
                "duration_ms": round(duration * 1000.0, 3),
            }
        )
        return self.snapshot()

    def reset(self) -> None:
        """Drop the current document and return to the empty state."""

        with self._lock:
            self._load_token += 1
            self._loading = False
            self._document = ExtractedDocument.empty()
            self._document_error = None

    def _begin_load(self, file_name: str) -> int:
        with self._lock:
            self._load_token += 1
            self._loading = True
            self._document = ExtractedDocument(file_name=file_name, pages=(), full_text="")
            self._document_error = None
            return self._load_token

    def _commit(self, token: int, document: ExtractedDocument, error: Optional[str]) -> bool:
        with self._lock:
            if token != self._load_token:
                return False
            self._document = document
            self._document_error = error
            self._loading = False
            return True


class SessionStore:
    """In-memory registry of visualizer sessions.

    Holds at most ``settings.max_sessions`` sessions; the least recently used
    one is evicted when a new session would exceed that bound.
    """

    def __init__(self, settings: VisualizerSettings | None = None) -> None:
        self._settings = settings
        self._sessions: "OrderedDict[str, VisualizerSession]" = OrderedDict()
        self._lock = threading.Lock()

    @property
    def max_sessions(self) -> int:
        return max((self._settings or get_settings()).max_sessions, 1)

    def get(self, session_id: str) -> VisualizerSession:
        """Return the session for ``session_id``, creating it if needed."""

        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
                return session

            session = VisualizerSession(session_id, settings=self._settings)
            self._sessions[session_id] = session
            LOGGER.debug("Created session %s", session_id)
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                LOGGER.info("Evicted session %s (limit %s)", evicted, self.max_sessions)
            return session

    def snapshot(self, session_id: str) -> SessionSnapshot:
        """Snapshot an existing session, or the empty state for unknown ids."""

        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
        if session is None:
            session = VisualizerSession(session_id, settings=self._settings)
        return session.snapshot()

    def drop(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


_session_store = SessionStore()


def get_session_store() -> SessionStore:
    """FastAPI dependency returning the shared :class:`SessionStore`."""

    return _session_store
