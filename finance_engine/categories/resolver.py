"""
Category Resolver

Maps raw category labels to TransactionCategory values and categories
to display descriptors.

Resolution is total: every string, including the empty string and
labels nobody has seen before, resolves to exactly one category, with
OTHER as the fallback. Nothing here raises or has side effects.
"""

from typing import Optional

from finance_engine.content import ContentProvider, lookup
from finance_engine.models.transaction import (
    CategoryDescriptor,
    Transaction,
    TransactionCategory,
)

BACKGROUND_OPACITY_MARKER = "opacity15"

# Labels used by imports and older app versions.
CATEGORY_ALIASES: dict[str, TransactionCategory] = {
    "food & dining": TransactionCategory.FOOD,
    "dining": TransactionCategory.FOOD,
    "groceries": TransactionCategory.FOOD,
    "transportation": TransactionCategory.TRANSPORT,
    "utilities": TransactionCategory.BILLS,
    "health & fitness": TransactionCategory.HEALTHCARE,
    "health": TransactionCategory.HEALTHCARE,
    "rent": TransactionCategory.HOUSING,
    "mortgage": TransactionCategory.HOUSING,
    "salary": TransactionCategory.INCOME,
}

_SYMBOLS: dict[TransactionCategory, str] = {
    TransactionCategory.FOOD: "fork.knife",
    TransactionCategory.TRANSPORT: "car.fill",
    TransactionCategory.SHOPPING: "bag.fill",
    TransactionCategory.ENTERTAINMENT: "tv.fill",
    TransactionCategory.BILLS: "doc.text.fill",
    TransactionCategory.SAVINGS: "banknote.fill",
    TransactionCategory.INCOME: "arrow.down.circle.fill",
    TransactionCategory.HOUSING: "house.fill",
    TransactionCategory.HEALTHCARE: "cross.fill",
    TransactionCategory.EDUCATION: "graduationcap.fill",
    TransactionCategory.TRAVEL: "airplane",
    TransactionCategory.OTHER: "questionmark.circle.fill",
}

_COLORS: dict[TransactionCategory, str] = {
    TransactionCategory.FOOD: "green",
    TransactionCategory.TRANSPORT: "blue",
    TransactionCategory.SHOPPING: "orange",
    TransactionCategory.ENTERTAINMENT: "purple",
    TransactionCategory.BILLS: "red",
    TransactionCategory.SAVINGS: "green",
    TransactionCategory.INCOME: "mint",
    TransactionCategory.HOUSING: "red",
    TransactionCategory.HEALTHCARE: "red",
    TransactionCategory.EDUCATION: "blue",
    TransactionCategory.TRAVEL: "orange",
    TransactionCategory.OTHER: "gray",
}


def background_token(color: str) -> str:
    """Colour identifier combined with the 15% opacity marker."""
    return f"{color}.{BACKGROUND_OPACITY_MARKER}"


class CategoryResolver:
    """
    Resolves raw labels and describes categories.

    Stateless; a single instance can be shared freely between threads.
    """

    def __init__(self, aliases: Optional[dict[str, TransactionCategory]] = None):
        self._aliases = dict(CATEGORY_ALIASES)
        if aliases:
            self._aliases.update({k.strip().lower(): v for k, v in aliases.items()})

    def resolve(self, raw_label: Optional[str]) -> TransactionCategory:
        """
        Resolve a raw label to a category.

        Matching is case-insensitive and ignores surrounding whitespace.
        Unknown, empty and missing labels resolve to OTHER.
        """
        if not raw_label:
            return TransactionCategory.OTHER

        key = raw_label.strip().lower()
        try:
            return TransactionCategory(key)
        except ValueError:
            return self._aliases.get(key, TransactionCategory.OTHER)

    def display_descriptor(self, category: TransactionCategory) -> CategoryDescriptor:
        """Icon, colour and background token for a category."""
        color = _COLORS.get(category, _COLORS[TransactionCategory.OTHER])
        return CategoryDescriptor(
            category=category,
            symbol=_SYMBOLS.get(category, _SYMBOLS[TransactionCategory.OTHER]),
            color=color,
            background_token=background_token(color),
        )

    def describe_label(self, raw_label: Optional[str]) -> CategoryDescriptor:
        """Resolve a raw label and describe the resulting category."""
        return self.display_descriptor(self.resolve(raw_label))

    def backfill_display(self, transaction: Transaction) -> Transaction:
        """
        Fill in missing icon overrides from the transaction's category.

        Overrides that are already set are kept. Returns the same object
        when nothing is missing, otherwise a copy.
        """
        if transaction.has_display_overrides:
            return transaction

        descriptor = self.describe_label(transaction.category)
        return transaction.model_copy(update={
            "icon_name": transaction.icon_name or descriptor.symbol,
            "icon_color_name": transaction.icon_color_name or descriptor.color,
            "icon_background_name": (
                transaction.icon_background_name or descriptor.background_token
            ),
        })

    def localized_name(
        self,
        category: TransactionCategory,
        provider: ContentProvider,
    ) -> str:
        """
        Display name through an injected content provider.

        Falls back to the "category.other" entry, then to the
        capitalised identifier.
        """
        other = lookup(provider, "category.other", "Other")
        fallback = other if category is TransactionCategory.OTHER else category.value.capitalize()
        return lookup(provider, f"category.{category.value}", fallback)


_default_resolver = CategoryResolver()


def resolve_category(raw_label: Optional[str]) -> TransactionCategory:
    """Resolve with the default alias table."""
    return _default_resolver.resolve(raw_label)
