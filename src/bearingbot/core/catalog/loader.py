"""Bulk catalog loading at startup."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Annotated

from fastapi import Depends, FastAPI, Request
from pydantic import ValidationError

from bearingbot.configs.config import AppConfig, get_app_config
from bearingbot.configs.system import CatalogConfig
from bearingbot.core.models import Part
from bearingbot.infra.lifespan import get_app

from .sample import sample_parts
from .store import CatalogStore

logger = logging.getLogger(__name__)

PART_FILE_GLOB = "*.json"


def _load_dir(data_dir: Path) -> list[Part]:
    if not data_dir.is_dir():
        logger.warning("Catalog directory not found: %s", data_dir)
        return []

    files = sorted(data_dir.glob(PART_FILE_GLOB))
    logger.info("Found %d part files in %s", len(files), data_dir)

    parts: list[Part] = []
    for path in files:
        try:
            part = Part.model_validate_json(path.read_bytes())
        except (OSError, ValidationError):
            logger.warning("Failed to load part file %s", path.name, exc_info=True)
            continue
        parts.append(part)
        logger.debug("Loaded part %s - %s", part.designation, part.title)
    return parts


def load_catalog(config: CatalogConfig) -> CatalogStore:
    """Load every part file under ``config.data_dir`` into a store.

    Unreadable or invalid files are skipped.  When nothing loads and
    ``use_sample_when_empty`` is set, the built-in sample parts are used.
    """
    parts = _load_dir(config.data_dir)
    if not parts and config.use_sample_when_empty:
        logger.info("No part files loaded, using sample catalog")
        parts = sample_parts()
    logger.info("Catalog ready with %d parts", len(parts))
    return CatalogStore(parts)


# ---------------------------------------------------------------------------
# Lifespan + per-request dependencies
# ---------------------------------------------------------------------------


async def build_catalog(
    app: Annotated[FastAPI, Depends(get_app)],
    config: Annotated[AppConfig, Depends(get_app_config)],
) -> AsyncGenerator[None, None]:
    app.state.catalog = load_catalog(config.catalog)
    yield


def get_catalog(request: Request) -> CatalogStore:
    return request.app.state.catalog
