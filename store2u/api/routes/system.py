"""System-level routes such as health checks."""

from __future__ import annotations

from fastapi import APIRouter

from store2u.config import settings
from store2u.services.clients.catalog_client import CatalogDependency

router = APIRouter(tags=["system"])


@router.get("/")
async def read_root() -> dict[str, str]:
    """Hello World endpoint used by smoke tests."""

    return {"message": "Hello World"}


@router.get("/health")
async def health_check(catalog: CatalogDependency) -> dict[str, str]:
    """Health check endpoint with upstream catalog connectivity check."""

    catalog_status = "connected" if await catalog.ping() else "disconnected"

    return {
        "status": "healthy",
        "catalog": catalog_status,
        "environment": settings.ENVIRONMENT,
    }
