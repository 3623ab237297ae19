"""
Content Provider Interface

The engine returns machine-readable identifiers (category values,
loan status values). Turning them into display strings is the job of
a ContentProvider that the caller passes in explicitly.

Keys follow the "<namespace>.<identifier>" convention, e.g.
"category.food" or "loan.status.overdue".
"""

from abc import ABC, abstractmethod
from typing import Mapping, Optional


class ContentProvider(ABC):
    """
    Abstract source of localized strings.

    Any localization backend (bundled catalogs, a remote service, ...)
    must implement this method.
    """

    @abstractmethod
    def localized_string(self, key: str) -> Optional[str]:
        """
        Look up the display string for a key.

        Args:
            key: Content key such as "category.food"

        Returns:
            The localized string, or None if the key is unknown
        """
        pass


class DictContentProvider(ContentProvider):
    """In-memory provider backed by a plain mapping."""

    def __init__(self, strings: Mapping[str, str]):
        self._strings = dict(strings)

    def localized_string(self, key: str) -> Optional[str]:
        return self._strings.get(key)


def lookup(provider: ContentProvider, key: str, fallback: str) -> str:
    """Resolve `key` through `provider`, using `fallback` when it is missing."""
    value = provider.localized_string(key)
    return value if value else fallback
