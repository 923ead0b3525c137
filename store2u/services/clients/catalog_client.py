"""Catalog client abstractions and implementations."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Annotated, Any, TypeVar
from urllib.parse import quote

import httpx
from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError

from store2u.config import settings
from store2u.models.order import OrderRecord
from store2u.models.product import CatalogItem
from store2u.models.taxonomy import Category, Subcategory
from store2u.services.clients.errors import CatalogError, MalformedResponse, NetworkFailure

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class CatalogClient(ABC):
    """Abstract fetcher for the upstream Store2u catalog.

    Every method performs a single request. With ``strict=False`` (the
    default) failures degrade to an empty list and are logged; with
    ``strict=True`` they raise :class:`CatalogError`.
    """

    @abstractmethod
    async def fetch_products(
        self, query: str | None = None, *, strict: bool = False
    ) -> list[CatalogItem]:
        """Return all products, or the search results for ``query``."""

    @abstractmethod
    async def fetch_category_products(
        self, slug: str, *, strict: bool = False
    ) -> list[CatalogItem]:
        """Return the products of every subcategory of a category."""

    @abstractmethod
    async def fetch_discounted(self, *, strict: bool = False) -> list[CatalogItem]:
        """Return the products currently on discount."""

    @abstractmethod
    async def fetch_top_rated(self, *, strict: bool = False) -> list[CatalogItem]:
        """Return the products flagged as top rated."""

    @abstractmethod
    async def fetch_categories(self, *, strict: bool = False) -> list[Category]:
        """Return every category."""

    @abstractmethod
    async def fetch_subcategories(self, *, strict: bool = False) -> list[Subcategory]:
        """Return every subcategory."""

    @abstractmethod
    async def fetch_orders(self, *, strict: bool = False) -> list[OrderRecord]:
        """Return every order for the admin orders table."""

    async def ping(self) -> bool:
        """Return True when the upstream catalog answers."""
        try:
            await self.fetch_categories(strict=True)
        except CatalogError:
            return False
        return True


class HttpCatalogClient(CatalogClient):
    """Catalog client backed by ``httpx.AsyncClient``."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch_products(
        self, query: str | None = None, *, strict: bool = False
    ) -> list[CatalogItem]:
        query = (query or "").strip()
        if not query:
            # /api/products answers with a bare array, not a data envelope
            return await self._collection(
                "/api/products", CatalogItem, envelope=False, strict=strict
            )
        path = f"/api/products/search/{quote(query, safe='')}"
        return await self._collection(path, CatalogItem, strict=strict)

    async def fetch_category_products(
        self, slug: str, *, strict: bool = False
    ) -> list[CatalogItem]:
        path = f"/api/categories/{quote(slug, safe='')}/products"
        return await self._collection(path, CatalogItem, strict=strict)

    async def fetch_discounted(self, *, strict: bool = False) -> list[CatalogItem]:
        return await self._collection("/api/products/discounted", CatalogItem, strict=strict)

    async def fetch_top_rated(self, *, strict: bool = False) -> list[CatalogItem]:
        return await self._collection("/api/products/topRated", CatalogItem, strict=strict)

    async def fetch_categories(self, *, strict: bool = False) -> list[Category]:
        return await self._collection("/api/categories", Category, strict=strict)

    async def fetch_subcategories(self, *, strict: bool = False) -> list[Subcategory]:
        return await self._collection("/api/subcategories", Subcategory, strict=strict)

    async def fetch_orders(self, *, strict: bool = False) -> list[OrderRecord]:
        return await self._collection(
            "/api/orders", OrderRecord, envelope=False, strict=strict
        )

    async def _collection(
        self,
        path: str,
        model: type[ModelT],
        *,
        envelope: bool = True,
        strict: bool = False,
    ) -> list[ModelT]:
        try:
            body = await self._get_json(path)
            return self._parse_collection(path, body, model, envelope=envelope)
        except CatalogError as exc:
            if strict:
                raise
            logger.error(
                "Catalog fetch failed, returning empty collection: %s",
                exc,
                extra={"path": exc.path, "error_type": type(exc).__name__},
            )
            return []

    async def _get_json(self, path: str) -> Any:
        try:
            response = await self._client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise NetworkFailure(path, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise NetworkFailure(path, f"{type(exc).__name__}: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponse(path, "response body is not valid JSON") from exc

    @staticmethod
    def _parse_collection(
        path: str,
        body: Any,
        model: type[ModelT],
        *,
        envelope: bool,
    ) -> list[ModelT]:
        if envelope:
            if not isinstance(body, dict):
                raise MalformedResponse(path, "expected an object with a 'data' field")
            body = body.get("data")
            if body is None:
                return []
        if not isinstance(body, list):
            raise MalformedResponse(path, f"expected a list, got {type(body).__name__}")

        parsed: list[ModelT] = []
        for raw in body:
            try:
                parsed.append(model.model_validate(raw))
            except ValidationError as exc:
                logger.warning(
                    "Skipping invalid %s from %s: %s",
                    model.__name__,
                    path,
                    exc.errors(include_url=False),
                )
        logger.debug("Fetched %d %s records from %s", len(parsed), model.__name__, path)
        return parsed


def create_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.CATALOG_API_URL,
        timeout=settings.CATALOG_TIMEOUT_SECONDS,
        headers={"Accept": "application/json"},
    )


def get_catalog_client(request: Request) -> CatalogClient:
    """FastAPI dependency returning the catalog client owned by the app lifespan."""

    return request.app.state.catalog_client


CatalogDependency = Annotated[CatalogClient, Depends(get_catalog_client)]
