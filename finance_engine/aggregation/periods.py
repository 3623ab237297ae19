"""
Period Aggregator

Buckets transactions into half-open calendar periods and derives
income, expense, percentage and trend metrics.

A transaction belongs to [period_start, period_end) iff
period_start <= date < period_end; an instant exactly at period_end
belongs to the next period. Positive amounts are income, negative
amounts are expenses (by absolute value), zero amounts are neither.
Aware datetimes are compared in UTC; naive ones are taken as UTC.
"""

from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from finance_engine.categories import CategoryResolver
from finance_engine.models.reports import (
    CategorySpending,
    ExpenseBreakdown,
    MonthData,
    MonthlyOverviewData,
    PeriodAggregate,
    TrendMetric,
)
from finance_engine.models.transaction import Transaction, TransactionCategory
from finance_engine.utils.dates import month_bounds, shift_months, to_naive_utc
from finance_engine.utils.numbers import ZERO, percentage_of

# Expense categories with a dedicated ExpenseBreakdown slot.
_BREAKDOWN_SLOTS = {
    TransactionCategory.HOUSING: "housing",
    TransactionCategory.FOOD: "food",
    TransactionCategory.TRANSPORT: "transportation",
}


def in_period(transaction: Transaction, period_start: datetime, period_end: datetime) -> bool:
    return to_naive_utc(period_start) <= transaction.date < to_naive_utc(period_end)


class PeriodAggregator:
    """
    Aggregates transactions per period.

    Holds only a category resolver; every method is a pure function of
    its arguments.
    """

    def __init__(self, resolver: Optional[CategoryResolver] = None):
        self._resolver = resolver or CategoryResolver()

    # -------------------------------------------------------------------------
    # Core aggregation
    # -------------------------------------------------------------------------

    def aggregate(
        self,
        transactions: Iterable[Transaction],
        period_start: datetime,
        period_end: datetime,
    ) -> PeriodAggregate:
        """Income, expenses and per-category expenses for one period."""
        period_start = to_naive_utc(period_start)
        period_end = to_naive_utc(period_end)
        income = ZERO
        expenses = ZERO
        count = 0
        breakdown: dict[TransactionCategory, Decimal] = defaultdict(lambda: ZERO)

        for transaction in transactions:
            if not in_period(transaction, period_start, period_end):
                continue
            count += 1
            if transaction.amount > 0:
                income += transaction.amount
            elif transaction.amount < 0:
                spent = -transaction.amount
                expenses += spent
                breakdown[self._resolver.resolve(transaction.category)] += spent

        return PeriodAggregate(
            period_start=period_start,
            period_end=period_end,
            income=income,
            expenses=expenses,
            breakdown_by_category=dict(breakdown),
            transaction_count=count,
        )

    def aggregate_month(
        self,
        transactions: Iterable[Transaction],
        moment: datetime,
    ) -> PeriodAggregate:
        """Aggregate the calendar month containing `moment`."""
        start, end = month_bounds(moment)
        return self.aggregate(transactions, start, end)

    # -------------------------------------------------------------------------
    # Metrics
    # -------------------------------------------------------------------------

    @staticmethod
    def month_over_month_change(
        current: PeriodAggregate,
        previous: PeriodAggregate,
    ) -> Decimal:
        """
        Percent change in income from `previous` to `current`.

        Returns 0 whenever the previous income is 0, even if the current
        income is not.
        """
        if previous.income == 0:
            return ZERO
        return percentage_of(current.income - previous.income, previous.income)

    @staticmethod
    def net_income_trend(
        current: PeriodAggregate,
        previous: Optional[PeriodAggregate] = None,
    ) -> TrendMetric:
        """
        Change in net income, as an amount and as a percentage of the
        previous period's absolute net.

        Without a previous period the change is the current net and the
        percentage is 0.
        """
        if previous is None:
            return TrendMetric(
                change=current.net,
                percentage=ZERO,
                is_positive=current.net >= 0,
            )

        change = current.net - previous.net
        return TrendMetric(
            change=change,
            percentage=percentage_of(change, abs(previous.net)),
            is_positive=change >= 0,
        )

    @staticmethod
    def category_spending(aggregate: PeriodAggregate) -> list[CategorySpending]:
        """Per-category share of the period's expenses, largest first."""
        rows = [
            CategorySpending(
                category=category,
                amount=amount,
                percentage=percentage_of(amount, aggregate.expenses),
            )
            for category, amount in aggregate.breakdown_by_category.items()
        ]
        rows.sort(key=lambda row: (-row.amount, row.category.value))
        return rows

    @staticmethod
    def expense_breakdown(
        aggregate: PeriodAggregate,
        loan_payments: Decimal = ZERO,
    ) -> ExpenseBreakdown:
        """
        Fold a period's category breakdown into the five projection buckets.

        Housing, food and transport keep their own bucket, every other
        expense category lands in `other`; `loan_payments` fills `loans`.
        """
        slots = {"housing": ZERO, "food": ZERO, "transportation": ZERO, "other": ZERO}
        for category, amount in aggregate.breakdown_by_category.items():
            slots[_BREAKDOWN_SLOTS.get(category, "other")] += amount
        return ExpenseBreakdown(loans=loan_payments, **slots)

    # -------------------------------------------------------------------------
    # Monthly views
    # -------------------------------------------------------------------------

    def monthly_overview(
        self,
        transactions: Iterable[Transaction],
        now: datetime,
        starting_balance: Decimal = ZERO,
    ) -> MonthlyOverviewData:
        """
        Current and previous calendar month around `now`.

        Income and expense percentages are relative to the starting
        balance. The result is returned even when both months are empty;
        check `is_empty` to decide whether to display it.
        """
        transactions = list(transactions)
        current_start, current_end = month_bounds(now)
        previous_start = shift_months(current_start, -1)

        current = self.aggregate(transactions, current_start, current_end)
        previous = self.aggregate(transactions, previous_start, current_start)

        return MonthlyOverviewData(
            current_month=self._month_data(current, starting_balance),
            previous_month=self._month_data(previous, starting_balance),
            month_over_month_change=self.month_over_month_change(current, previous),
            starting_balance=starting_balance,
        )

    def monthly_series(
        self,
        transactions: Iterable[Transaction],
        now: datetime,
        months: int = 4,
    ) -> list[PeriodAggregate]:
        """Aggregates for the `months` calendar months ending with the one containing `now`, oldest first."""
        if months < 0:
            raise ValueError("months cannot be negative")

        transactions = list(transactions)
        current_start, _ = month_bounds(now)
        series = []
        for offset in range(months - 1, -1, -1):
            start = shift_months(current_start, -offset)
            series.append(self.aggregate(transactions, start, shift_months(start, 1)))
        return series

    @staticmethod
    def _month_data(aggregate: PeriodAggregate, starting_balance: Decimal) -> MonthData:
        return MonthData(
            date=aggregate.period_start,
            income=aggregate.income,
            expenses=aggregate.expenses,
            income_percentage=percentage_of(aggregate.income, starting_balance),
            expense_percentage=percentage_of(aggregate.expenses, starting_balance),
        )
