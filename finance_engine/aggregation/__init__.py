"""Period aggregation package."""

from finance_engine.aggregation.budgets import (
    apply_spending,
    budget_overview,
    spent_by_category,
)
from finance_engine.aggregation.periods import PeriodAggregator, in_period
from finance_engine.utils.dates import month_bounds, shift_months
from finance_engine.utils.numbers import percentage_of

__all__ = [
    "PeriodAggregator",
    "apply_spending",
    "budget_overview",
    "in_period",
    "month_bounds",
    "percentage_of",
    "shift_months",
    "spent_by_category",
]
