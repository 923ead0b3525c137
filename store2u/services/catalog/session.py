"""Per-listing state: fetched collection, criteria, ordering and page."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from enum import Enum

from store2u.models.listing import FilterCriteria, ListingPage, SortMode
from store2u.models.product import CatalogItem
from store2u.services.catalog.pagination import Paginator
from store2u.services.catalog.pipeline import run_pipeline
from store2u.services.clients.errors import CatalogError

logger = logging.getLogger(__name__)

Fetch = Callable[[], Awaitable[Sequence[CatalogItem]]]


class ListingState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    LOADED = "loaded"
    FETCH_FAILED = "fetch_failed"


class ListingSession:
    """Owns the catalog collection behind one listing surface.

    Each ``refresh`` is tagged with a monotonically increasing sequence
    number. A response is applied only if its number is still the latest
    issued, so a slow superseded request can never overwrite newer state.
    """

    def __init__(
        self,
        *,
        criteria: FilterCriteria | None = None,
        sort: SortMode = SortMode.NEWEST,
        page_size: int | None = None,
    ) -> None:
        self._items: list[CatalogItem] = []
        self._state = ListingState.IDLE
        self._latest_request = 0
        self._criteria = criteria or FilterCriteria()
        self._sort = sort
        self._paginator = Paginator(page_size)
        self.last_error: CatalogError | None = None

    @property
    def state(self) -> ListingState:
        return self._state

    @property
    def items(self) -> list[CatalogItem]:
        return list(self._items)

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def sort(self) -> SortMode:
        return self._sort

    @property
    def page(self) -> int:
        return self._paginator.page

    @property
    def page_size(self) -> int:
        return self._paginator.page_size

    async def refresh(self, fetch: Fetch) -> bool:
        """Run ``fetch`` and apply its result if no newer refresh was issued.

        Returns True when the outcome was applied, False when it was discarded
        as stale.
        """
        self._latest_request += 1
        request_id = self._latest_request
        self._state = ListingState.FETCHING

        try:
            items = await fetch()
        except CatalogError as exc:
            if request_id != self._latest_request:
                logger.debug("Discarding stale failed fetch #%d", request_id)
                return False
            logger.warning("Listing fetch #%d failed: %s", request_id, exc)
            self._items = []
            self._state = ListingState.FETCH_FAILED
            self.last_error = exc
            self._paginator.reset()
            return True

        if request_id != self._latest_request:
            logger.debug(
                "Discarding stale fetch #%d (latest is #%d)",
                request_id,
                self._latest_request,
            )
            return False

        self._items = list(items)
        self._state = ListingState.LOADED
        self.last_error = None
        self._paginator.reset()
        logger.debug("Fetch #%d loaded %d items", request_id, len(self._items))
        return True

    def set_criteria(self, criteria: FilterCriteria) -> None:
        self._criteria = criteria
        self._paginator.reset()

    def set_sort(self, sort: SortMode) -> None:
        self._sort = sort
        self._paginator.reset()

    def set_page_size(self, page_size: int) -> None:
        self._paginator.set_page_size(page_size)

    def go_to_page(self, page: int) -> None:
        self._paginator.go_to(page)

    def view(self) -> ListingPage:
        """Recompute the visible page from the full in-memory collection."""
        items = self._items if self._state is ListingState.LOADED else []
        return run_pipeline(
            items,
            self._criteria,
            self._sort,
            self._paginator.page,
            self._paginator.page_size,
        )
