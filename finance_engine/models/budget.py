"""Budget Models"""

from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from finance_engine.utils.numbers import ZERO


class BudgetPeriod(str, Enum):
    """Period a budget limit applies to."""
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Budget(BaseModel):
    """
    A spending limit for one category.

    `spent` is recomputed from expense transactions by
    finance_engine.aggregation.apply_spending; `remaining` is derived.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    category: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Raw category label this budget tracks"
    )
    limit: Decimal = Field(
        ...,
        ge=0,
        description="Allocated amount for the period"
    )
    spent: Decimal = Field(
        default=ZERO,
        ge=0,
    )
    period: BudgetPeriod = BudgetPeriod.MONTHLY

    @property
    def remaining(self) -> Decimal:
        """Amount left, never negative."""
        return max(ZERO, self.limit - self.spent)

    @property
    def progress(self) -> Decimal:
        """Spent share of the limit as a fraction capped at 1."""
        if self.limit <= 0:
            return ZERO
        return min(self.spent / self.limit, Decimal("1"))

    @property
    def is_over_budget(self) -> bool:
        return self.spent > self.limit


class BudgetOverview(BaseModel):
    """Totals over a collection of budgets."""

    total_budgeted: Decimal
    total_spent: Decimal
    overall_progress: Decimal = Field(
        ...,
        description="total_spent / total_budgeted, 0 when nothing is budgeted"
    )
    over_budget_categories: list[str] = Field(default_factory=list)
