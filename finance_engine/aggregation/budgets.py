"""
Budget spending roll-up.

A budget's `spent` is the sum of absolute expense amounts whose raw
category label matches the budget's label (case-insensitive). Income
and zero-amount transactions never count against a budget.
"""

from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from finance_engine.aggregation.periods import in_period
from finance_engine.models.budget import Budget, BudgetOverview
from finance_engine.models.transaction import Transaction
from finance_engine.utils.numbers import ZERO


def _label_key(label: str) -> str:
    return label.strip().lower()


def spent_by_category(transactions: Iterable[Transaction]) -> dict[str, Decimal]:
    """Expense totals keyed by normalised raw category label."""
    spent: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for transaction in transactions:
        if transaction.amount < 0:
            spent[_label_key(transaction.category)] += -transaction.amount
    return dict(spent)


def apply_spending(
    budgets: Iterable[Budget],
    transactions: Iterable[Transaction],
    period_start: Optional[datetime] = None,
    period_end: Optional[datetime] = None,
) -> list[Budget]:
    """
    Recompute each budget's `spent` from the transactions.

    When both period bounds are given only transactions inside the
    half-open period count. Returns updated copies in input order.
    """
    if (period_start is None) != (period_end is None):
        raise ValueError("period_start and period_end must be given together")

    if period_start is not None:
        transactions = [t for t in transactions if in_period(t, period_start, period_end)]

    spent = spent_by_category(transactions)
    return [
        budget.model_copy(update={"spent": spent.get(_label_key(budget.category), ZERO)})
        for budget in budgets
    ]


def budget_overview(budgets: Iterable[Budget]) -> BudgetOverview:
    """Totals and overall progress across budgets."""
    budgets = list(budgets)
    total_budgeted = sum((b.limit for b in budgets), ZERO)
    total_spent = sum((b.spent for b in budgets), ZERO)
    progress = total_spent / total_budgeted if total_budgeted > 0 else ZERO

    return BudgetOverview(
        total_budgeted=total_budgeted,
        total_spent=total_spent,
        overall_progress=progress,
        over_budget_categories=[b.category for b in budgets if b.is_over_budget],
    )
