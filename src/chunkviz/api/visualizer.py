"""API router exposing document upload, config editing and page views."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile
from pydantic import BaseModel, Field

from chunkviz.errors import ConfigError, ExtractionError
from chunkviz.models import Chunk, Page
from chunkviz.session import SessionSnapshot, SessionStore, get_session_store
from chunkviz.settings import VisualizerSettings, get_settings

router = APIRouter(prefix="/sessions", tags=["visualizer"])


class PageModel(BaseModel):
    page_number: int
    start_char_index: int
    char_count: int


class DocumentResponse(BaseModel):
    """Summary of the document currently loaded in a session."""

    session_id: str
    file_name: Optional[str]
    page_count: int
    total_chars: int
    pages: list[PageModel]


class ConfigRequest(BaseModel):
    config: str = Field(..., description="JSON text with 'chunkSize' and 'overlap'.")


class ChunkConfigModel(BaseModel):
    chunk_size: int
    overlap: int


class ConfigResponse(BaseModel):
    session_id: str
    config_text: str
    config: Optional[ChunkConfigModel]
    error: Optional[str]


class ChunkModel(BaseModel):
    index: int
    label: str
    start: int
    end: int
    length: int
    color_class: str


class ChunksResponse(BaseModel):
    session_id: str
    config: Optional[ChunkConfigModel]
    total_chars: int
    chunk_count: int
    chunks: list[ChunkModel]


class DrawRectModel(BaseModel):
    label: str
    chunk_index: int
    top_offset: float
    height_offset: float
    color_class: str
    display_text: str


class PageViewModel(BaseModel):
    page_number: int
    start_char_index: int
    char_count: int
    rects: list[DrawRectModel]


class VisualizationResponse(BaseModel):
    session_id: str
    file_name: Optional[str]
    page_height: float
    is_loading: bool
    error: Optional[str]
    pages: list[PageViewModel]


def _serialise_page(page: Page) -> PageModel:
    return PageModel(
        page_number=page.page_number,
        start_char_index=page.start_char_index,
        char_count=page.char_count,
    )


def _serialise_chunk(chunk: Chunk) -> ChunkModel:
    return ChunkModel(
        index=chunk.index,
        label=chunk.label,
        start=chunk.start,
        end=chunk.end,
        length=chunk.length,
        color_class=chunk.color_class,
    )


def _config_model(snapshot: SessionSnapshot) -> Optional[ChunkConfigModel]:
    if snapshot.config is None:
        return None
    return ChunkConfigModel(chunk_size=snapshot.config.chunk_size, overlap=snapshot.config.overlap)


def _document_response(snapshot: SessionSnapshot) -> DocumentResponse:
    document = snapshot.document
    return DocumentResponse(
        session_id=snapshot.session_id,
        file_name=document.file_name,
        page_count=len(document.pages),
        total_chars=document.total_chars,
        pages=[_serialise_page(page) for page in document.pages],
    )


def _chunks_response(snapshot: SessionSnapshot) -> ChunksResponse:
    chunks = snapshot.chunks
    return ChunksResponse(
        session_id=snapshot.session_id,
        config=_config_model(snapshot),
        total_chars=snapshot.document.total_chars,
        chunk_count=len(chunks),
        chunks=[_serialise_chunk(chunk) for chunk in chunks],
    )


@router.post("/{session_id}/document", response_model=DocumentResponse)
async def upload_document(
    session_id: str,
    file: UploadFile = File(...),
    store: SessionStore = Depends(get_session_store),
    settings: VisualizerSettings = Depends(get_settings),
) -> DocumentResponse:
    """Replace the session's document with the uploaded file."""

    limit = settings.max_upload_bytes
    too_large = HTTPException(status_code=413, detail=f"File exceeds the {limit} byte upload limit")
    if file.size is not None and file.size > limit:
        raise too_large
    # One byte past the limit is enough to tell an oversized body apart.
    data = await file.read(limit + 1)
    if len(data) > limit:
        raise too_large

    session = store.get(session_id)
    try:
        snapshot = await session.load_document(data, file.filename or "upload", file.content_type)
    except ExtractionError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _document_response(snapshot)


@router.get("/{session_id}/document", response_model=DocumentResponse)
def get_document(session_id: str, store: SessionStore = Depends(get_session_store)) -> DocumentResponse:
    return _document_response(store.snapshot(session_id))


@router.put("/{session_id}/config", response_model=ChunksResponse)
def update_config(
    session_id: str,
    request: ConfigRequest,
    store: SessionStore = Depends(get_session_store),
) -> ChunksResponse:
    """Validate new configuration text and return the recomputed chunks."""

    session = store.get(session_id)
    try:
        snapshot = session.update_config(request.config)
    except ConfigError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _chunks_response(snapshot)


@router.get("/{session_id}/config", response_model=ConfigResponse)
def get_config(session_id: str, store: SessionStore = Depends(get_session_store)) -> ConfigResponse:
    snapshot = store.snapshot(session_id)
    return ConfigResponse(
        session_id=snapshot.session_id,
        config_text=snapshot.config_text,
        config=_config_model(snapshot),
        error=snapshot.config_error,
    )


@router.get("/{session_id}/chunks", response_model=ChunksResponse)
def get_chunks(session_id: str, store: SessionStore = Depends(get_session_store)) -> ChunksResponse:
    return _chunks_response(store.snapshot(session_id))


@router.get("/{session_id}/visualization", response_model=VisualizationResponse)
def get_visualization(
    session_id: str,
    page_height: Optional[float] = Query(None, gt=0, description="Height of one page in display units."),
    store: SessionStore = Depends(get_session_store),
    settings: VisualizerSettings = Depends(get_settings),
) -> VisualizationResponse:
    """Return per-page draw rectangles for the current document and config."""

    snapshot = store.snapshot(session_id)
    height = page_height if page_height is not None else settings.page_height_units
    pages = [
        PageViewModel(
            page_number=view.page_number,
            start_char_index=view.start_char_index,
            char_count=view.char_count,
            rects=[
                DrawRectModel(
                    label=rect.label,
                    chunk_index=rect.chunk_index,
                    top_offset=rect.top_offset,
                    height_offset=rect.height_offset,
                    color_class=rect.color_class,
                    display_text=rect.display_text,
                )
                for rect in view.rects
            ],
        )
        for view in snapshot.page_views(height)
    ]
    return VisualizationResponse(
        session_id=snapshot.session_id,
        file_name=snapshot.document.file_name,
        page_height=height,
        is_loading=snapshot.is_loading,
        error=snapshot.error,
        pages=pages,
    )


@router.delete("/{session_id}", status_code=204)
def delete_session(session_id: str, store: SessionStore = Depends(get_session_store)) -> Response:
    """Forget the session, returning it to the empty state."""

    store.drop(session_id)
    return Response(status_code=204)
