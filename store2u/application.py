"""FastAPI application factory and bootstrap helpers."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from store2u.api.routes import include_api_routes
from store2u.config import settings
from store2u.services.clients.catalog_client import HttpCatalogClient, create_http_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Own the upstream HTTP client for the lifetime of the application."""
    http_client = create_http_client()
    app.state.catalog_client = HttpCatalogClient(http_client)
    logger.info("Catalog client ready for %s", settings.CATALOG_API_URL)
    try:
        yield
    finally:
        await http_client.aclose()
        logger.info("Catalog client closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Store2u Catalog",
        description="Filtered, sorted and paginated storefront listings",
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    _configure_cors(app)
    include_api_routes(app)

    return app


def _configure_cors(app: FastAPI) -> None:
    """Allow broad access in non-production environments."""

    if settings.is_production:
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
