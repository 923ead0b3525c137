"""Product domain models and API schemas."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CatalogItem(BaseModel):
    """A sellable product record as returned by the upstream catalog API.

    Upstream payloads use camelCase keys; both the aliases and the snake_case
    field names are accepted. Unknown fields (sku, slug, stock, ...) are kept
    so that free-text search can match on them.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int | str = Field(..., description="Unique, stable product identifier")
    name: str
    price: float = Field(..., ge=0, description="Nominal (undiscounted) price")
    discount: float | None = Field(
        None,
        ge=0,
        le=100,
        description="Optional discount percentage",
    )
    rating: float | None = Field(None, ge=0, le=5)
    created_at: datetime | None = Field(None, alias="createdAt")
    subcategory_slug: str | None = Field(None, alias="subcategorySlug")
    subcategory_id: int | str | None = Field(None, alias="subCategoryId")
    category_slug: str | None = Field(None, alias="categorySlug")
    images: list[str] = Field(default_factory=list)

    @field_validator("images", mode="before")
    @classmethod
    def _normalize_images(cls, value: Any) -> Any:
        # Raw SQL endpoints return JSON_ARRAYAGG output as a string,
        # ORM endpoints return a list of {"url": ...} rows.
        if isinstance(value, str):
            value = json.loads(value) if value.strip() else None
        if value is None:
            return []
        if isinstance(value, list):
            # An aggregate over zero image rows yields [null]
            urls = [entry.get("url") if isinstance(entry, dict) else entry for entry in value]
            return [url for url in urls if url is not None]
        return value

    @property
    def effective_price(self) -> float:
        """Price after the discount percentage is applied."""
        if self.discount:
            return self.price * (1 - self.discount / 100)
        return self.price

    @property
    def stock(self) -> int:
        raw = (self.model_extra or {}).get("stock")
        try:
            return int(raw or 0)
        except (TypeError, ValueError):
            return 0

    def taxonomy_refs(self) -> set[str]:
        """Return every taxonomy reference (slug or id) this item belongs to."""
        refs = {self.subcategory_slug, self.subcategory_id, self.category_slug}
        return {str(ref) for ref in refs if ref is not None and ref != ""}

    def field_values(self) -> list[Any]:
        return present_field_values(self)


def present_field_values(record: BaseModel) -> list[Any]:
    """Values of the fields the payload carried, extras included, in JSON form.

    Defaults the upstream record never sent are left out, as they would be
    absent from the raw object.
    """
    extras = record.model_extra or {}
    present = record.model_fields_set | set(extras)
    dumped = record.model_dump(mode="json")
    return [value for name, value in dumped.items() if name in present]
