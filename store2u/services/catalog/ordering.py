"""Ordering stage of the listing pipeline."""

from __future__ import annotations

import math
import unicodedata
from collections.abc import Mapping, Sequence
from datetime import UTC
from typing import Any, TypeVar

from store2u.models.listing import SortMode
from store2u.models.product import CatalogItem
from store2u.services.catalog.predicates import as_collection

RowT = TypeVar("RowT")


def name_sort_key(name: str) -> tuple[str, str]:
    """Locale-aware collation key: accents and case only break ties."""
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name


def _timestamp(item: CatalogItem) -> float | None:
    if item.created_at is None:
        return None
    created = item.created_at
    if created.tzinfo is None:
        created = created.replace(tzinfo=UTC)
    return created.timestamp()


def _sort_newest(items: list[CatalogItem]) -> list[CatalogItem]:
    # Stable in both directions: undated items go last in input order.
    dated = [item for item in items if item.created_at is not None]
    undated = [item for item in items if item.created_at is None]
    dated.sort(key=lambda item: -_timestamp(item))
    return dated + undated


def apply_sort(items: Sequence[CatalogItem] | None, mode: SortMode) -> list[CatalogItem]:
    """Return a new list ordered by ``mode``; the input is never mutated."""
    collection = as_collection(items)
    if mode is SortMode.NEWEST:
        return _sort_newest(collection)
    if mode is SortMode.PRICE_ASC:
        return sorted(collection, key=lambda item: item.price)
    if mode is SortMode.PRICE_DESC:
        return sorted(collection, key=lambda item: -item.price)
    if mode is SortMode.NAME_ASC:
        return sorted(collection, key=lambda item: name_sort_key(item.name))
    raise ValueError(f"Unsupported sort mode: {mode!r}")


def _numeric_id(row: Any) -> float | None:
    raw = row.get("id") if isinstance(row, Mapping) else getattr(row, "id", None)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def sort_by_id_desc(rows: Sequence[RowT] | None) -> list[RowT]:
    """Admin tables list the most recent record (highest id) first.

    Rows whose id is not a number follow the numbered ones in input order.
    """
    collection = list(rows) if isinstance(rows, (list, tuple)) else []
    numbered = [row for row in collection if _numeric_id(row) is not None]
    unnumbered = [row for row in collection if _numeric_id(row) is None]
    numbered.sort(key=lambda row: -_numeric_id(row))
    return numbered + unnumbered
