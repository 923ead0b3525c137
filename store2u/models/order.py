"""Order rows listed on the admin orders table."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from store2u.models.product import present_field_values


class OrderRecord(BaseModel):
    """An order as returned by the upstream ``/api/orders`` endpoint.

    Nested relations (user, order items) are kept as extras so the admin
    search sees them the way the table does.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int | str
    user_id: int | str | None = Field(None, alias="userId")
    total: float | None = None
    status: str | None = None
    created_at: datetime | None = Field(None, alias="createdAt")

    def field_values(self) -> list[Any]:
        return present_field_values(self)


class OrderPage(BaseModel):
    """One page of the admin orders table."""

    items: list[OrderRecord] = Field(default_factory=list)
    page: int = Field(0, ge=0)
    page_size: int = Field(..., gt=0)
    total_items: int = Field(0, ge=0)
    page_count: int = Field(0, ge=0)
