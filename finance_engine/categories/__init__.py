"""Category resolution package."""

from finance_engine.categories.resolver import (
    CATEGORY_ALIASES,
    CategoryResolver,
    background_token,
    resolve_category,
)

__all__ = [
    "CATEGORY_ALIASES",
    "CategoryResolver",
    "background_token",
    "resolve_category",
]
