"""FastAPI application for the idea-graph import service."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from idea_graph.clients.openai_client import OpenAIClient
from idea_graph.logging import configure_logging
from idea_graph.pipeline.extractor import OpenAIDetailExtractor
from idea_graph.pipeline.pipeline import ImportPipeline

from .config import get_settings
from .routes.health import router as health_router
from .routes.imports import router as imports_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the shared pipeline at startup, close the OpenAI client at shutdown."""
    settings = get_settings()
    configure_logging(json_output=settings.LOG_JSON, log_level=settings.LOG_LEVEL)

    openai: OpenAIClient | None = None
    if settings.OPENAI_API_KEY:
        openai = OpenAIClient(
            api_key=settings.OPENAI_API_KEY,
            chat_model=settings.OPENAI_CHAT_MODEL,
        )
        logger.info("lifespan.detail_extraction_enabled", model=openai.chat_model)
    else:
        logger.warning("lifespan.detail_extraction_disabled")

    # Store on app.state for request handlers
    app.state.openai = openai
    app.state.pipeline = ImportPipeline(
        OpenAIDetailExtractor(openai) if openai is not None else None
    )

    logger.info("lifespan.ready")
    yield

    # Shutdown
    logger.info("lifespan.shutdown")
    if openai is not None:
        await openai.close()


app = FastAPI(
    title="idea-graph",
    description="Imports AI conversations and pasted documents into a project graph",
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(imports_router)
