"""Pytest configuration and fixtures for the catalog service."""

import asyncio

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from store2u.models.order import OrderRecord
from store2u.models.product import CatalogItem
from store2u.models.taxonomy import Category, Subcategory
from store2u.services.clients.catalog_client import CatalogClient, get_catalog_client
from store2u.services.clients.errors import NetworkFailure

PRODUCTS = [
    {
        "id": 1,
        "name": "Aurora Floor Lamp",
        "slug": "aurora-floor-lamp",
        "sku": "AUR-LGT-001",
        "price": 120.0,
        "discount": 0,
        "rating": 4.8,
        "stock": 0,
        "createdAt": "2024-03-01T10:00:00Z",
        "subcategorySlug": "lamps",
        "subCategoryId": 11,
        "images": '["https://cdn.example.com/lamp.jpg"]',
    },
    {
        "id": 2,
        "name": "brass desk lamp",
        "slug": "brass-desk-lamp",
        "sku": "BRS-LGT-002",
        "price": 45.0,
        "discount": 20,
        "rating": 4.1,
        "stock": 8,
        "createdAt": "2024-05-01T10:00:00Z",
        "subcategorySlug": "lamps",
        "subCategoryId": 11,
        "images": ["https://cdn.example.com/desk.jpg"],
    },
    {
        "id": 3,
        "name": "Cotton Throw",
        "slug": "cotton-throw",
        "sku": "CTN-TXT-003",
        "price": 30.0,
        "discount": 10,
        "rating": 4.6,
        "stock": 25,
        "createdAt": "2024-04-01T10:00:00Z",
        "subcategorySlug": "throws",
        "subCategoryId": 12,
        "images": [],
    },
    {
        "id": 4,
        "name": "Oak Side Table",
        "slug": "oak-side-table",
        "sku": "OAK-FRN-004",
        "price": 210.0,
        "stock": 60,
        "subcategorySlug": "tables",
        "subCategoryId": 21,
        "images": None,
    },
]

CATEGORIES = [
    {"id": 1, "name": "Home Decor", "slug": "home-decor"},
    {"id": 2, "name": "Furniture", "slug": "furniture"},
]

SUBCATEGORIES = [
    {"id": 11, "name": "Lamps", "slug": "lamps", "categoryId": 1},
    {"id": 12, "name": "Throws", "slug": "throws", "categoryId": 1},
    {"id": 21, "name": "Tables", "slug": "tables", "categoryId": 2},
]


ORDERS = [
    {"id": 5, "userId": 1, "total": 165.0, "status": "PENDING", "user": {"name": "Ana"}},
    {"id": 12, "userId": 2, "total": 45.0, "status": "SHIPPED", "user": {"name": "Ben"}},
    {"id": 9, "userId": 1, "total": 30.0, "status": "DELIVERED", "user": {"name": "Ana"}},
    {"id": "legacy-1", "userId": 3, "total": 210.0, "status": "SHIPPED"},
]

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


def make_items(rows=None) -> list[CatalogItem]:
    return [CatalogItem.model_validate(row) for row in (PRODUCTS if rows is None else rows)]


class StubCatalogClient(CatalogClient):
    """In-memory catalog used instead of the upstream HTTP API."""

    def __init__(self, products=None, categories=None, subcategories=None) -> None:
        self.products = make_items(products)
        self.categories = [Category.model_validate(row) for row in (categories or CATEGORIES)]
        self.subcategories = [
            Subcategory.model_validate(row) for row in (subcategories or SUBCATEGORIES)
        ]
        self.orders = [OrderRecord.model_validate(row) for row in ORDERS]
        self.failing = False
        self.calls: list[tuple[str, str | None]] = []

    async def _result(self, name: str, arg, value, strict: bool):
        await asyncio.sleep(0)
        self.calls.append((name, arg))
        if self.failing:
            if strict:
                raise NetworkFailure(f"/stub/{name}", "HTTP 503")
            return []
        return list(value)

    async def fetch_products(self, query=None, *, strict=False):
        products = self.products
        if query:
            products = [p for p in products if query.lower() in p.name.lower()]
        return await self._result("products", query, products, strict)

    async def fetch_category_products(self, slug, *, strict=False):
        slugs = {
            sub.slug
            for sub in self.subcategories
            for cat in self.categories
            if cat.slug == slug and str(sub.category_id) == str(cat.id)
        }
        products = [p for p in self.products if p.subcategory_slug in slugs]
        return await self._result("category_products", slug, products, strict)

    async def fetch_discounted(self, *, strict=False):
        products = [p for p in self.products if p.discount]
        return await self._result("discounted", None, products, strict)

    async def fetch_top_rated(self, *, strict=False):
        products = [p for p in self.products if (p.rating or 0) >= 4.5]
        return await self._result("top_rated", None, products, strict)

    async def fetch_categories(self, *, strict=False):
        return await self._result("categories", None, self.categories, strict)

    async def fetch_subcategories(self, *, strict=False):
        return await self._result("subcategories", None, self.subcategories, strict)

    async def fetch_orders(self, *, strict=False):
        return await self._result("orders", None, self.orders, strict)


@pytest.fixture()
def items() -> list[CatalogItem]:
    return make_items()


@pytest.fixture()
def catalog_stub():
    """Provide a stub catalog so tests do not call the upstream API."""
    from store2u.main import app

    stub = StubCatalogClient()
    app.dependency_overrides[get_catalog_client] = lambda: stub
    yield stub
    app.dependency_overrides.pop(get_catalog_client, None)


@pytest_asyncio.fixture()
async def client(catalog_stub):
    """Return an HTTPX async client pointing at the FastAPI app."""
    from store2u.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        yield test_client
