"""Routes backing the admin dashboard tables."""

from __future__ import annotations

from fastapi import APIRouter, Query

from store2u.config import settings
from store2u.models.order import OrderPage
from store2u.services.catalog.pipeline import run_orders_pipeline
from store2u.services.clients.catalog_client import CatalogDependency

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get(
    "/orders",
    response_model=OrderPage,
    summary="List orders, highest id first, optionally narrowed by a search term",
)
async def list_orders(
    catalog: CatalogDependency,
    contains: str = Query("", description="Case-insensitive substring matched against any field"),
    page: int = Query(0, ge=0),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, gt=0, le=settings.MAX_PAGE_SIZE),
) -> OrderPage:
    orders = await catalog.fetch_orders()
    return run_orders_pipeline(orders, contains, page, page_size)
