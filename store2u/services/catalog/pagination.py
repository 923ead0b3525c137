"""Pagination stage of the listing pipeline."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

from pydantic import BaseModel

from store2u.config import settings
from store2u.models.listing import ListingPage
from store2u.models.product import CatalogItem

T = TypeVar("T")
PageT = TypeVar("PageT", bound=BaseModel)


def page_count(total_items: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError("page_size must be a positive integer")
    return math.ceil(total_items / page_size)


def paginate(items: Sequence[T], page: int, page_size: int) -> list[T]:
    """Slice ``items`` into the requested page; out-of-range pages are empty."""
    if page_size <= 0:
        raise ValueError("page_size must be a positive integer")
    if page < 0:
        raise ValueError("page must be zero or greater")
    start = page * page_size
    return list(items[start : start + page_size])


def build_page(
    items: Sequence[T],
    page: int,
    page_size: int,
    *,
    envelope: type[PageT] = ListingPage,
) -> PageT:
    return envelope(
        items=paginate(items, page, page_size),
        page=page,
        page_size=page_size,
        total_items=len(items),
        page_count=page_count(len(items), page_size),
    )


class Paginator:
    """Page state for one listing.

    Changing the page size or the upstream collection resets the page to 0
    so a user never lands on an out-of-range page silently.
    """

    def __init__(self, page_size: int | None = None) -> None:
        size = page_size or settings.DEFAULT_PAGE_SIZE
        if size <= 0:
            raise ValueError("page_size must be a positive integer")
        self._page_size = size
        self._page = 0

    @property
    def page(self) -> int:
        return self._page

    @property
    def page_size(self) -> int:
        return self._page_size

    def go_to(self, page: int) -> None:
        if page < 0:
            raise ValueError("page must be zero or greater")
        self._page = page

    def set_page_size(self, page_size: int) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be a positive integer")
        self._page_size = page_size
        self._page = 0

    def reset(self) -> None:
        """Called whenever the filtered/ordered collection changes."""
        self._page = 0

    def slice(self, items: Sequence[CatalogItem]) -> ListingPage:
        return build_page(items, self._page, self._page_size)
