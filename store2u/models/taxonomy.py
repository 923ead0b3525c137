"""Category and subcategory schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Category(BaseModel):
    """Top level taxonomy node coming from the catalog service."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int | str
    name: str
    slug: str
    image_url: str | None = Field(None, alias="imageUrl")


class Subcategory(BaseModel):
    """Second level taxonomy node; products reference it by slug."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int | str
    name: str
    slug: str
    category_id: int | str | None = Field(None, alias="categoryId")
