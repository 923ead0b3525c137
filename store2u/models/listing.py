"""Models describing listing criteria and paginated listing results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from store2u.models.product import CatalogItem


class StatusFilter(str, Enum):
    """Status classifier applied by the listing pages."""

    ALL = "all"
    TOP_RATED = "top-rated"
    ON_SALE = "on-sale"


class StockLevel(str, Enum):
    """Stock buckets shown on the admin product table."""

    ALL = "all"
    OUT_OF_STOCK = "out-of-stock"
    LOW = "low"
    MEDIUM = "medium"
    HEALTHY = "healthy"


class SortMode(str, Enum):
    """Closed set of orderings offered by the storefront."""

    NEWEST = "newest"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    NAME_ASC = "name-asc"


class FilterCriteria(BaseModel):
    """Conjunction of predicates applied to a fetched collection."""

    query: str = Field("", description="Case-insensitive substring matched against any field")
    status: StatusFilter = StatusFilter.ALL
    min_price: float | None = Field(None, ge=0)
    max_price: float | None = Field(None, ge=0)
    taxonomy: str | None = Field(
        None,
        description="Category/subcategory id or slug the items must belong to",
    )
    stock: StockLevel = StockLevel.ALL

    @model_validator(mode="after")
    def _check_price_bounds(self) -> FilterCriteria:
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValueError("min_price must be less than or equal to max_price")
        return self


class ListingPage(BaseModel):
    """One page of an ordered, filtered listing."""

    items: list[CatalogItem] = Field(default_factory=list)
    page: int = Field(0, ge=0)
    page_size: int = Field(..., gt=0)
    total_items: int = Field(0, ge=0)
    page_count: int = Field(0, ge=0)


class StockSummary(BaseModel):
    """Counts per stock bucket for the admin dashboard cards."""

    out_of_stock: int = 0
    low: int = 0
    medium: int = 0
    healthy: int = 0


class ListingQuery(BaseModel):
    """Everything a listing request asks for: criteria, ordering and page."""

    criteria: FilterCriteria = Field(default_factory=FilterCriteria)
    sort: SortMode = SortMode.NEWEST
    page: int = Field(0, ge=0)
    page_size: int = Field(..., gt=0)


class SubcategoryCount(BaseModel):
    """Sidebar entry of a category page."""

    id: int | str
    name: str
    slug: str
    count: int = 0
