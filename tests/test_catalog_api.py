"""Tests for the catalog listing endpoints."""

import pytest


def _ids(payload):
    return [item["id"] for item in payload["items"]]


@pytest.mark.asyncio
async def test_root_and_health(client, catalog_stub):
    assert (await client.get("/")).json() == {"message": "Hello World"}

    healthy = (await client.get("/health")).json()
    assert healthy["catalog"] == "connected"

    catalog_stub.failing = True
    degraded = (await client.get("/health")).json()
    assert degraded["status"] == "healthy"
    assert degraded["catalog"] == "disconnected"


@pytest.mark.asyncio
async def test_list_products_defaults(client):
    response = await client.get("/catalog/products")

    assert response.status_code == 200
    data = response.json()
    # newest first, default page size of 5
    assert _ids(data) == [2, 3, 1, 4]
    assert data["page"] == 0
    assert data["page_size"] == 5
    assert data["total_items"] == 4
    assert data["page_count"] == 1


@pytest.mark.asyncio
async def test_list_products_with_filters_sort_and_page(client):
    response = await client.get(
        "/catalog/products",
        params={"status": "on-sale", "sort": "price-asc", "page_size": 1, "page": 1},
    )

    data = response.json()
    assert _ids(data) == [2]
    assert data["total_items"] == 2
    assert data["page_count"] == 2


@pytest.mark.asyncio
async def test_upstream_search_term_is_forwarded(client, catalog_stub):
    response = await client.get("/catalog/products", params={"q": "lamp"})

    assert _ids(response.json()) == [2, 1]
    assert ("products", "lamp") in catalog_stub.calls


@pytest.mark.asyncio
async def test_local_text_filter_matches_any_field(client):
    response = await client.get("/catalog/products", params={"contains": "ctn-txt"})
    assert _ids(response.json()) == [3]


@pytest.mark.asyncio
async def test_no_match_returns_empty_page(client):
    response = await client.get("/catalog/products", params={"contains": "xyz"})

    assert response.status_code == 200
    data = response.json()
    assert data["items"] == []
    assert data["page"] == 0
    assert data["page_count"] == 0


@pytest.mark.asyncio
async def test_out_of_range_page_is_empty_not_error(client):
    response = await client.get("/catalog/products", params={"page": 2, "page_size": 10})

    assert response.status_code == 200
    assert response.json()["items"] == []


@pytest.mark.asyncio
async def test_upstream_failure_degrades_to_empty_listing(client, catalog_stub):
    catalog_stub.failing = True
    response = await client.get("/catalog/products")

    assert response.status_code == 200
    assert response.json()["items"] == []
    assert response.json()["total_items"] == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [
        {"min_price": 50, "max_price": 10},
        {"sort": "price-sideways"},
        {"status": "bestseller"},
        {"page_size": 0},
        {"page": -1},
    ],
)
async def test_invalid_parameters_are_rejected(client, params):
    response = await client.get("/catalog/products", params=params)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_category_products(client):
    response = await client.get(
        "/catalog/categories/home-decor/products", params={"sort": "name-asc"}
    )

    assert response.status_code == 200
    assert _ids(response.json()) == [1, 2, 3]


@pytest.mark.asyncio
async def test_category_products_narrowed_to_subcategory(client):
    response = await client.get(
        "/catalog/categories/home-decor/products",
        params={"taxonomy": "throws"},
    )
    assert _ids(response.json()) == [3]


@pytest.mark.asyncio
async def test_unknown_category_is_404(client):
    response = await client.get("/catalog/categories/garden/products")
    assert response.status_code == 404

    response = await client.get("/catalog/categories/garden/subcategories")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_category_subcategories_include_counts(client):
    response = await client.get("/catalog/categories/home-decor/subcategories")

    assert response.status_code == 200
    assert response.json() == [
        {"id": 11, "name": "Lamps", "slug": "lamps", "count": 2},
        {"id": 12, "name": "Throws", "slug": "throws", "count": 1},
    ]


@pytest.mark.asyncio
async def test_subcategory_products(client):
    response = await client.get(
        "/catalog/subcategories/lamps/products",
        params={"min_price": 100},
    )
    assert _ids(response.json()) == [1]


@pytest.mark.asyncio
async def test_discounted_and_top_rated(client):
    discounted = await client.get("/catalog/discounted", params={"sort": "price-desc"})
    assert _ids(discounted.json()) == [2, 3]

    top_rated = await client.get("/catalog/top-rated", params={"sort": "name-asc"})
    assert _ids(top_rated.json()) == [1, 3]


@pytest.mark.asyncio
async def test_stock_summary(client):
    response = await client.get("/catalog/stock-summary")
    assert response.json() == {"out_of_stock": 1, "low": 1, "medium": 1, "healthy": 1}
