"""FastAPI application entry point."""

import logging
from typing import Annotated

from fastapi import Depends, FastAPI

from bearingbot.api.chat import health_router
from bearingbot.api.chat import router as chat_router
from bearingbot.api.exceptions import register_exception_handlers
from bearingbot.configs.config import get_app_config
from bearingbot.core.catalog import build_catalog
from bearingbot.core.llm import build_language_port
from bearingbot.core.metrics import instrument_metrics
from bearingbot.infra.cache import build_session_cache
from bearingbot.infra.db import build_feedback_sink
from bearingbot.infra.lifespan import inject
from bearingbot.infra.logging import setup_logging
from bearingbot.infra.telemetry import init_telemetry

logger = logging.getLogger(__name__)


@inject
async def lifespan(
    app: FastAPI,
    _cache: Annotated[None, Depends(build_session_cache)],
    _catalog: Annotated[None, Depends(build_catalog)],
    _sink: Annotated[None, Depends(build_feedback_sink)],
    _port: Annotated[None, Depends(build_language_port)],
):
    """Application lifespan: every collaborator is a lifespan dependency."""
    logger.info("Bearing assistant started")
    yield
    logger.info("Bearing assistant shutting down")


def get_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_app_config()
    setup_logging(config.logging)

    app = FastAPI(
        title="Bearing Assistant",
        description="Conversational Q&A over a bearing product catalog",
        version="0.1.0",
        lifespan=lifespan,
    )

    register_exception_handlers(app)
    init_telemetry(app, config.tracing)
    instrument_metrics(app, config)

    app.include_router(chat_router)
    app.include_router(health_router)

    return app


app = get_app()
