"""Filter -> sort -> paginate, shared by every listing surface."""

from __future__ import annotations

from collections.abc import Sequence

from store2u.models.listing import FilterCriteria, ListingPage, SortMode
from store2u.models.order import OrderPage, OrderRecord
from store2u.models.product import CatalogItem
from store2u.services.catalog.ordering import apply_sort, sort_by_id_desc
from store2u.services.catalog.pagination import build_page
from store2u.services.catalog.predicates import apply_filters, search_records


def run_pipeline(
    items: Sequence[CatalogItem] | None,
    criteria: FilterCriteria,
    sort: SortMode,
    page: int,
    page_size: int,
) -> ListingPage:
    filtered = apply_filters(items, criteria)
    ordered = apply_sort(filtered, sort)
    return build_page(ordered, page, page_size)


def run_orders_pipeline(
    orders: Sequence[OrderRecord] | None,
    query: str,
    page: int,
    page_size: int,
) -> OrderPage:
    """Admin orders table: any-field search, highest id first, then the page."""
    ordered = sort_by_id_desc(search_records(orders, query))
    return build_page(ordered, page, page_size, envelope=OrderPage)
