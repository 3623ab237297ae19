"""Localized content package."""

from finance_engine.content.provider import (
    ContentProvider,
    DictContentProvider,
    lookup,
)

__all__ = ["ContentProvider", "DictContentProvider", "lookup"]
