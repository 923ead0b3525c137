"""Helpers resolving category pages to the subcategories they cover."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from store2u.models.taxonomy import Category, Subcategory

logger = logging.getLogger(__name__)


def find_category(categories: Sequence[Category], slug: str) -> Category | None:
    return next((category for category in categories if category.slug == slug), None)


def resolve_category_scope(
    category_slug: str,
    categories: Sequence[Category],
    subcategories: Sequence[Subcategory],
) -> list[Subcategory] | None:
    """Return the subcategories belonging to a category.

    ``None`` means the category does not exist; an empty list means it exists
    but has no subcategories yet.
    """
    category = find_category(categories, category_slug)
    if category is None:
        logger.info("Category %s not found", category_slug)
        return None
    return [
        subcategory
        for subcategory in subcategories
        if subcategory.category_id is not None
        and str(subcategory.category_id) == str(category.id)
    ]
