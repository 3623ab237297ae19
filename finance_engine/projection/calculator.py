"""
Income Projection Calculator

Projects income at every time scale from an hourly rate and a work
schedule, and sets it against expenses and loan payments.

The income figures form one derivation chain, each step built from the
previous one:

    daily   = hourly_rate * hours_per_week / 7
    weekly  = daily * 7
    monthly = weekly * 52 / 12
    yearly  = weekly * 52

Available income is never clamped: a negative value means the
expenses exceed the income and is passed through unchanged.
"""

from decimal import Decimal
from typing import NamedTuple, Optional

from finance_engine.models.reports import (
    ExpenseBreakdown,
    IncomeProjectionData,
    IncomeProjectionResult,
    TimeRange,
    WorkSchedule,
)
from finance_engine.utils.numbers import ZERO, strip_trailing_zeros

WEEKS_PER_YEAR = Decimal("52")
MONTHS_PER_YEAR = Decimal("12")
DAYS_PER_WEEK = Decimal("7")
HOURS_PER_WEEK = Decimal("168")

# Monthly amount -> other range: amount * multiplier / divisor
_FROM_MONTHLY: dict[TimeRange, tuple[Decimal, Decimal]] = {
    TimeRange.HOURLY: (MONTHS_PER_YEAR, WEEKS_PER_YEAR * HOURS_PER_WEEK),
    TimeRange.DAILY: (MONTHS_PER_YEAR, WEEKS_PER_YEAR * DAYS_PER_WEEK),
    TimeRange.WEEKLY: (MONTHS_PER_YEAR, WEEKS_PER_YEAR),
    TimeRange.MONTHLY: (Decimal("1"), Decimal("1")),
    TimeRange.YEARLY: (MONTHS_PER_YEAR, Decimal("1")),
}


class IncomeChain(NamedTuple):
    """Income at each time scale for one rate and schedule."""
    hourly: Decimal
    daily: Decimal
    weekly: Decimal
    monthly: Decimal
    yearly: Decimal

    def for_range(self, time_range: TimeRange) -> Decimal:
        return getattr(self, time_range.value)


def income_chain(hourly_rate: Decimal, work_schedule: WorkSchedule) -> IncomeChain:
    """Build the daily -> weekly -> monthly -> yearly chain."""
    daily = hourly_rate * work_schedule.hours_per_week / DAYS_PER_WEEK
    weekly = daily * DAYS_PER_WEEK
    monthly = weekly * WEEKS_PER_YEAR / MONTHS_PER_YEAR
    yearly = weekly * WEEKS_PER_YEAR
    return IncomeChain(
        hourly=hourly_rate,
        daily=strip_trailing_zeros(daily),
        weekly=strip_trailing_zeros(weekly),
        monthly=strip_trailing_zeros(monthly),
        yearly=strip_trailing_zeros(yearly),
    )


def scale_amount(monthly_amount: Decimal, time_range: TimeRange) -> Decimal:
    """Express a monthly amount in another time range."""
    multiplier, divisor = _FROM_MONTHLY[time_range]
    return strip_trailing_zeros(monthly_amount * multiplier / divisor)


def scale_breakdown(monthly: ExpenseBreakdown, time_range: TimeRange) -> ExpenseBreakdown:
    """Express every bucket of a monthly breakdown in another time range."""
    return ExpenseBreakdown(
        housing=scale_amount(monthly.housing, time_range),
        food=scale_amount(monthly.food, time_range),
        transportation=scale_amount(monthly.transportation, time_range),
        loans=scale_amount(monthly.loans, time_range),
        other=scale_amount(monthly.other, time_range),
    )


class IncomeProjectionCalculator:
    """Stateless income projection; safe to share between threads."""

    def project(
        self,
        work_schedule: WorkSchedule,
        hourly_rate: Decimal,
        expense_breakdown: ExpenseBreakdown,
        loan_payments: Decimal = ZERO,
        projected_income: Optional[Decimal] = None,
    ) -> IncomeProjectionResult:
        """
        Monthly projection for one rate and schedule.

        Args:
            work_schedule: Determines hours per week
            hourly_rate: Current hourly rate
            expense_breakdown: Monthly expenses
            loan_payments: Monthly loan payments
            projected_income: Monthly income to evaluate instead of the
                              computed one for `projected_available_income`;
                              defaults to the computed monthly income

        Returns:
            IncomeProjectionResult; available figures may be negative
        """
        chain = income_chain(hourly_rate, work_schedule)
        outgoings = expense_breakdown.total_expenses + loan_payments

        if projected_income is None:
            projected_income = chain.monthly

        return IncomeProjectionResult(
            work_schedule=work_schedule,
            hourly_rate=hourly_rate,
            daily_income=chain.daily,
            weekly_income=chain.weekly,
            monthly_income=chain.monthly,
            yearly_income=chain.yearly,
            expense_breakdown=expense_breakdown,
            loan_payments=loan_payments,
            available_income=chain.monthly - outgoings,
            projected_available_income=projected_income - outgoings,
        )

    def income_for(
        self,
        hourly_rate: Decimal,
        work_schedule: WorkSchedule,
        time_range: TimeRange,
    ) -> Decimal:
        """Income over one `time_range` at the given rate."""
        return income_chain(hourly_rate, work_schedule).for_range(time_range)

    def project_all_ranges(
        self,
        hourly_rate: Decimal,
        projected_hourly_rate: Decimal,
        work_schedule: WorkSchedule,
        monthly_expenses: ExpenseBreakdown,
        monthly_loan_payments: Decimal = ZERO,
    ) -> list[IncomeProjectionData]:
        """Current vs. projected rate, one entry per TimeRange in declaration order."""
        current = income_chain(hourly_rate, work_schedule)
        projected = income_chain(projected_hourly_rate, work_schedule)

        projections = []
        for time_range in TimeRange:
            expenses = scale_breakdown(monthly_expenses, time_range)
            loans = scale_amount(monthly_loan_payments, time_range)
            outgoings = expenses.total_expenses + loans
            current_income = current.for_range(time_range)
            projected_income = projected.for_range(time_range)

            projections.append(IncomeProjectionData(
                time_range=time_range,
                current_income=current_income,
                projected_income=projected_income,
                expense_breakdown=expenses,
                loan_payments=loans,
                available_income=current_income - outgoings,
                projected_available_income=projected_income - outgoings,
            ))
        return projections

    def required_hourly_rate(
        self,
        monthly_expenses: ExpenseBreakdown,
        monthly_loan_payments: Decimal,
        work_schedule: WorkSchedule,
        target_savings: Decimal = ZERO,
    ) -> Decimal:
        """Hourly rate at which monthly income covers expenses, loans and savings."""
        needs = monthly_expenses.total_expenses + monthly_loan_payments + target_savings
        return needs * MONTHS_PER_YEAR / (work_schedule.hours_per_week * WEEKS_PER_YEAR)
