import logging

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from chunkviz import __version__
from chunkviz.api.visualizer import router as visualizer_router
from chunkviz.logging_config import configure_logging
from chunkviz.settings import get_settings

configure_logging()

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="Chunk Visualizer API", version=__version__)
app.include_router(visualizer_router)


@app.get("/", response_class=PlainTextResponse)
def read_root() -> str:
    """Healthcheck endpoint for the service."""
    return "ok"


@app.get("/healthz", response_class=PlainTextResponse)
def healthcheck() -> str:
    """Liveness probe used by container orchestrators."""
    return "ok"


@app.on_event("startup")
async def _log_startup() -> None:
    settings = get_settings()
    LOGGER.info(
        "Chunk visualizer started (default chunk_size=%s overlap=%s page_height=%s)",
        settings.chunk_size,
        settings.overlap,
        settings.page_height_units,
    )
