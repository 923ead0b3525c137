"""Routes serving filtered, ordered and paginated catalog listings."""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from store2u.config import settings
from store2u.models.listing import (
    FilterCriteria,
    ListingPage,
    ListingQuery,
    SortMode,
    StatusFilter,
    StockLevel,
    StockSummary,
    SubcategoryCount,
)
from store2u.services.catalog.predicates import filter_by_subcategories, stock_summary
from store2u.services.catalog.session import Fetch, ListingSession
from store2u.services.catalog.taxonomy import find_category, resolve_category_scope
from store2u.services.clients.catalog_client import CatalogDependency

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["catalog"])


def _listing_query(
    contains: str = Query("", description="Case-insensitive substring matched against any field"),
    status_filter: StatusFilter = Query(StatusFilter.ALL, alias="status"),
    min_price: float | None = Query(None, ge=0),
    max_price: float | None = Query(None, ge=0),
    taxonomy: str | None = Query(None, description="Category/subcategory id or slug"),
    stock: StockLevel = StockLevel.ALL,
    sort: SortMode = SortMode.NEWEST,
    page: int = Query(0, ge=0),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, gt=0, le=settings.MAX_PAGE_SIZE),
) -> ListingQuery:
    if min_price is not None and max_price is not None and min_price > max_price:
        raise HTTPException(
            status_code=422,
            detail="min_price must be less than or equal to max_price",
        )
    criteria = FilterCriteria(
        query=contains,
        status=status_filter,
        min_price=min_price,
        max_price=max_price,
        taxonomy=taxonomy,
        stock=stock,
    )
    return ListingQuery(criteria=criteria, sort=sort, page=page, page_size=page_size)


ListingQueryDependency = Annotated[ListingQuery, Depends(_listing_query)]


async def _serve_listing(fetch: Fetch, listing: ListingQuery) -> ListingPage:
    session = ListingSession(
        criteria=listing.criteria,
        sort=listing.sort,
        page_size=listing.page_size,
    )
    await session.refresh(fetch)
    session.go_to_page(listing.page)
    return session.view()


@router.get(
    "/products",
    response_model=ListingPage,
    summary="List all products, optionally narrowed by an upstream search",
)
async def list_products(
    catalog: CatalogDependency,
    listing: ListingQueryDependency,
    q: str | None = Query(None, description="Search term sent to the catalog search endpoint"),
) -> ListingPage:
    return await _serve_listing(partial(catalog.fetch_products, q, strict=True), listing)


@router.get(
    "/categories/{slug}/products",
    response_model=ListingPage,
    summary="List the products of a category",
)
async def list_category_products(
    catalog: CatalogDependency,
    listing: ListingQueryDependency,
    slug: str = Path(..., description="Category slug"),
) -> ListingPage:
    categories = await catalog.fetch_categories()
    if categories and find_category(categories, slug) is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return await _serve_listing(
        partial(catalog.fetch_category_products, slug, strict=True),
        listing,
    )


@router.get(
    "/categories/{slug}/subcategories",
    response_model=list[SubcategoryCount],
    summary="Subcategories of a category with their product counts",
)
async def list_category_subcategories(
    catalog: CatalogDependency,
    slug: str = Path(..., description="Category slug"),
) -> list[SubcategoryCount]:
    categories, subcategories, products = await asyncio.gather(
        catalog.fetch_categories(),
        catalog.fetch_subcategories(),
        catalog.fetch_products(),
    )
    scope = resolve_category_scope(slug, categories, subcategories)
    if scope is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return [
        SubcategoryCount(
            id=subcategory.id,
            name=subcategory.name,
            slug=subcategory.slug,
            count=len(filter_by_subcategories(products, [subcategory.slug])),
        )
        for subcategory in scope
    ]


@router.get(
    "/subcategories/{slug}/products",
    response_model=ListingPage,
    summary="List the products of a subcategory",
)
async def list_subcategory_products(
    catalog: CatalogDependency,
    listing: ListingQueryDependency,
    slug: str = Path(..., description="Subcategory slug"),
) -> ListingPage:
    scoped = listing.model_copy(
        update={"criteria": listing.criteria.model_copy(update={"taxonomy": slug})}
    )
    return await _serve_listing(partial(catalog.fetch_products, strict=True), scoped)


@router.get(
    "/discounted",
    response_model=ListingPage,
    summary="List the products currently on discount",
)
async def list_discounted(
    catalog: CatalogDependency,
    listing: ListingQueryDependency,
) -> ListingPage:
    return await _serve_listing(partial(catalog.fetch_discounted, strict=True), listing)


@router.get(
    "/top-rated",
    response_model=ListingPage,
    summary="List the products flagged as top rated",
)
async def list_top_rated(
    catalog: CatalogDependency,
    listing: ListingQueryDependency,
) -> ListingPage:
    return await _serve_listing(partial(catalog.fetch_top_rated, strict=True), listing)


@router.get(
    "/stock-summary",
    response_model=StockSummary,
    summary="Count products per stock level",
)
async def get_stock_summary(catalog: CatalogDependency) -> StockSummary:
    products = await catalog.fetch_products()
    summary = stock_summary(products)
    logger.debug("Stock summary computed over %d products", len(products))
    return summary
