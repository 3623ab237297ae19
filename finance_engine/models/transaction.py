"""
Transaction Models

A transaction is an immutable financial fact. Its sign is the single
source of truth for income vs. expense: positive amounts are income,
negative amounts are expenses. There is no separately settable
income flag; `transaction_type` and `is_income` are derived.

The only change a transaction ever undergoes is display-override
backfill (icon name/colour/background), which produces a copy.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finance_engine.utils.dates import to_naive_utc


# =============================================================================
# ENUMS
# =============================================================================

class TransactionCategory(str, Enum):
    """
    Machine-readable transaction categories.

    Raw labels coming from manual entry or imports are resolved to one of
    these values by the category resolver; anything unrecognised becomes
    OTHER.
    """
    FOOD = "food"
    TRANSPORT = "transport"
    SHOPPING = "shopping"
    ENTERTAINMENT = "entertainment"
    BILLS = "bills"
    SAVINGS = "savings"
    INCOME = "income"
    HOUSING = "housing"
    HEALTHCARE = "healthcare"
    EDUCATION = "education"
    TRAVEL = "travel"
    OTHER = "other"


class TransactionType(str, Enum):
    """Income/expense flag derived from the amount's sign."""
    INCOME = "income"
    EXPENSE = "expense"


# =============================================================================
# DISPLAY
# =============================================================================

class CategoryDescriptor(BaseModel):
    """
    Display tokens for a category.

    These are identifiers consumed by the rendering layer, not rendered
    values: `color` is a colour name and `background_token` is that name
    combined with the fixed 15% opacity marker.
    """
    model_config = ConfigDict(frozen=True)

    category: TransactionCategory
    symbol: str = Field(..., description="Icon identifier")
    color: str = Field(..., description="Colour identifier")
    background_token: str = Field(
        ...,
        description="Colour identifier with the 15% opacity marker"
    )


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A single income or expense record.

    `category` holds the raw label as entered or imported; use the
    category resolver to obtain a TransactionCategory.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique transaction ID"
    )
    title: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Short description shown in lists"
    )
    subtitle: Optional[str] = Field(
        default=None,
        max_length=200,
    )
    amount: Decimal = Field(
        ...,
        description="Signed amount: positive = income, negative = expense"
    )
    category: str = Field(
        default="other",
        max_length=100,
        description="Raw category label"
    )
    date: datetime = Field(
        ...,
        description="When the transaction happened"
    )
    linked_goal_name: Optional[str] = Field(
        default=None,
        description="Savings goal this transaction contributes to"
    )

    # Display overrides (backfilled from the category when missing)
    icon_name: Optional[str] = None
    icon_color_name: Optional[str] = None
    icon_background_name: Optional[str] = None

    @field_validator('date')
    @classmethod
    def validate_date(cls, v: datetime) -> datetime:
        """Store as naive UTC so dates from any source compare safely."""
        return to_naive_utc(v)

    @property
    def transaction_type(self) -> TransactionType:
        """INCOME for positive amounts, EXPENSE otherwise."""
        if self.amount > 0:
            return TransactionType.INCOME
        return TransactionType.EXPENSE

    @property
    def is_income(self) -> bool:
        return self.amount > 0

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    @property
    def has_display_overrides(self) -> bool:
        """True when every icon override is present."""
        return all((
            self.icon_name,
            self.icon_color_name,
            self.icon_background_name,
        ))
