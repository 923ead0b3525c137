"""Predicate stage of the listing pipeline."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Protocol, TypeVar

from store2u.config import settings
from store2u.models.listing import FilterCriteria, StatusFilter, StockLevel, StockSummary
from store2u.models.product import CatalogItem

logger = logging.getLogger(__name__)

Predicate = Callable[[CatalogItem], bool]


class SearchableRecord(Protocol):
    def field_values(self) -> list[Any]: ...


RecordT = TypeVar("RecordT", bound=SearchableRecord)


def as_collection(items: object) -> list[CatalogItem]:
    """Return ``items`` as a list, or an empty list when it is not a collection."""
    if isinstance(items, (list, tuple)):
        return list(items)
    if items is not None:
        logger.warning("Expected a collection of catalog items, got %s", type(items).__name__)
    return []


def as_text(value: Any) -> str:
    """String form of a JSON value as the storefront search renders it.

    Lists join their entries with commas and null entries render empty.
    Objects render as ``[object Object]``; whole-number floats drop the ``.0``.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        return ",".join("" if entry is None else as_text(entry) for entry in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def matches_query(item: SearchableRecord, query: str) -> bool:
    """Substring search over the string form of every field on the item.

    Intentionally broad: ids, timestamps and image URLs are searched too.
    """
    needle = query.lower()
    if not needle:
        return True
    return any(needle in as_text(value).lower() for value in item.field_values())


def matches_status(item: CatalogItem, status: StatusFilter) -> bool:
    if status is StatusFilter.TOP_RATED:
        return item.rating is not None and item.rating >= settings.TOP_RATED_THRESHOLD
    if status is StatusFilter.ON_SALE:
        return item.discount is not None and item.discount > 0
    return True


def matches_price(
    item: CatalogItem,
    min_price: float | None,
    max_price: float | None,
) -> bool:
    if min_price is not None and item.price < min_price:
        return False
    if max_price is not None and item.price > max_price:
        return False
    return True


def matches_taxonomy(item: CatalogItem, taxonomy: str | None) -> bool:
    if not taxonomy:
        return True
    return taxonomy in item.taxonomy_refs()


def classify_stock(stock: int) -> StockLevel:
    if stock <= 0:
        return StockLevel.OUT_OF_STOCK
    if stock < settings.LOW_STOCK_THRESHOLD:
        return StockLevel.LOW
    if stock < settings.HEALTHY_STOCK_THRESHOLD:
        return StockLevel.MEDIUM
    return StockLevel.HEALTHY


def matches_stock(item: CatalogItem, level: StockLevel) -> bool:
    if level is StockLevel.ALL:
        return True
    return classify_stock(item.stock) is level


def build_predicates(criteria: FilterCriteria) -> list[Predicate]:
    """Translate criteria into the list of active predicates."""
    predicates: list[Predicate] = []
    if criteria.query:
        predicates.append(lambda item: matches_query(item, criteria.query))
    if criteria.status is not StatusFilter.ALL:
        predicates.append(lambda item: matches_status(item, criteria.status))
    if criteria.min_price is not None or criteria.max_price is not None:
        predicates.append(
            lambda item: matches_price(item, criteria.min_price, criteria.max_price)
        )
    if criteria.taxonomy:
        predicates.append(lambda item: matches_taxonomy(item, criteria.taxonomy))
    if criteria.stock is not StockLevel.ALL:
        predicates.append(lambda item: matches_stock(item, criteria.stock))
    return predicates


def apply_filters(
    items: Sequence[CatalogItem] | None,
    criteria: FilterCriteria,
) -> list[CatalogItem]:
    """Keep the items that satisfy every predicate in ``criteria``."""
    collection = as_collection(items)
    predicates = build_predicates(criteria)
    return [item for item in collection if all(check(item) for check in predicates)]


def filter_by_subcategories(
    items: Sequence[CatalogItem] | None,
    subcategory_slugs: Iterable[str],
) -> list[CatalogItem]:
    """Keep the items whose subcategory slug is one of ``subcategory_slugs``."""
    allowed = set(subcategory_slugs)
    return [item for item in as_collection(items) if item.subcategory_slug in allowed]


def stock_summary(items: Sequence[CatalogItem] | None) -> StockSummary:
    summary = StockSummary()
    for item in as_collection(items):
        level = classify_stock(item.stock)
        field = level.value.replace("-", "_")
        setattr(summary, field, getattr(summary, field) + 1)
    return summary


def search_records(records: Sequence[RecordT] | None, query: str) -> list[RecordT]:
    """Keep the admin table rows with any field containing ``query``."""
    return [record for record in as_collection(records) if matches_query(record, query)]
