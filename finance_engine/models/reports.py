"""
Report Models

Shapes produced by the period aggregator and the income projection
calculator. Every percentage on these models is derived with
`percentage_of`, so a zero total yields 0 rather than an error.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from finance_engine.models.transaction import TransactionCategory
from finance_engine.utils.numbers import ZERO, percentage_of


# =============================================================================
# PERIOD AGGREGATION
# =============================================================================

class PeriodAggregate(BaseModel):
    """
    Income and expenses for the half-open interval [period_start, period_end).

    An aggregate over no transactions is all zeros; it is still a valid
    result and callers decide whether to show it.
    """
    model_config = ConfigDict(frozen=True)

    period_start: datetime
    period_end: datetime
    income: Decimal = ZERO
    expenses: Decimal = Field(
        default=ZERO,
        description="Sum of absolute values of negative amounts"
    )
    breakdown_by_category: dict[TransactionCategory, Decimal] = Field(
        default_factory=dict,
        description="Expenses per resolved category"
    )
    transaction_count: int = Field(default=0, ge=0)

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses

    @property
    def is_empty(self) -> bool:
        """True when there was no income and no expense in the period."""
        return self.income == 0 and self.expenses == 0


class MonthData(BaseModel):
    """One month of an overview, normalised against the starting balance."""
    model_config = ConfigDict(frozen=True)

    date: datetime = Field(..., description="First instant of the month")
    income: Decimal
    expenses: Decimal
    income_percentage: Decimal = ZERO
    expense_percentage: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


class MonthlyOverviewData(BaseModel):
    """Current vs. previous month with the month-over-month income change."""
    model_config = ConfigDict(frozen=True)

    current_month: MonthData
    previous_month: MonthData
    month_over_month_change: Decimal = Field(
        ...,
        description="Percent change in income; 0 when last month had none"
    )
    starting_balance: Decimal

    @property
    def is_empty(self) -> bool:
        return (
            self.current_month.income == 0
            and self.current_month.expenses == 0
            and self.previous_month.income == 0
            and self.previous_month.expenses == 0
        )


class CategorySpending(BaseModel):
    """Share of a period's expenses spent in one category."""
    model_config = ConfigDict(frozen=True)

    category: TransactionCategory
    amount: Decimal
    percentage: Decimal


class TrendMetric(BaseModel):
    """Change in net income between two periods."""
    model_config = ConfigDict(frozen=True)

    change: Decimal
    percentage: Decimal
    is_positive: bool


# =============================================================================
# EXPENSE BREAKDOWN
# =============================================================================

class ExpenseBreakdown(BaseModel):
    """
    Expenses of one period split into the five projection buckets.
    """
    model_config = ConfigDict(frozen=True)

    housing: Decimal = ZERO
    food: Decimal = ZERO
    transportation: Decimal = ZERO
    loans: Decimal = ZERO
    other: Decimal = ZERO

    @property
    def total_expenses(self) -> Decimal:
        return self.housing + self.food + self.transportation + self.loans + self.other

    @property
    def housing_percentage(self) -> Decimal:
        return percentage_of(self.housing, self.total_expenses)

    @property
    def food_percentage(self) -> Decimal:
        return percentage_of(self.food, self.total_expenses)

    @property
    def transportation_percentage(self) -> Decimal:
        return percentage_of(self.transportation, self.total_expenses)

    @property
    def loans_percentage(self) -> Decimal:
        return percentage_of(self.loans, self.total_expenses)

    @property
    def other_percentage(self) -> Decimal:
        return percentage_of(self.other, self.total_expenses)

    def percentages(self) -> dict[str, Decimal]:
        """All bucket percentages keyed by bucket name."""
        return {
            "housing": self.housing_percentage,
            "food": self.food_percentage,
            "transportation": self.transportation_percentage,
            "loans": self.loans_percentage,
            "other": self.other_percentage,
        }


# =============================================================================
# INCOME PROJECTION
# =============================================================================

class WorkSchedule(str, Enum):
    """Employment pattern; each carries a fixed number of hours per week."""
    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    FREELANCE = "freelance"
    CONTRACT = "contract"

    @property
    def hours_per_week(self) -> Decimal:
        return _HOURS_PER_WEEK[self]


_HOURS_PER_WEEK = {
    WorkSchedule.FULL_TIME: Decimal("40"),
    WorkSchedule.PART_TIME: Decimal("20"),
    WorkSchedule.FREELANCE: Decimal("30"),
    WorkSchedule.CONTRACT: Decimal("35"),
}


class TimeRange(str, Enum):
    """Time scale a projection is expressed in."""
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class IncomeProjectionData(BaseModel):
    """Current vs. projected income for one time range."""
    model_config = ConfigDict(frozen=True)

    time_range: TimeRange
    current_income: Decimal
    projected_income: Decimal
    expense_breakdown: ExpenseBreakdown
    loan_payments: Decimal
    available_income: Decimal = Field(
        ...,
        description="May be negative (overspending)"
    )
    projected_available_income: Decimal

    @property
    def income_gap(self) -> Decimal:
        """Projected income minus total expenses."""
        return self.projected_income - self.expense_breakdown.total_expenses

    @property
    def current_income_gap(self) -> Decimal:
        return self.current_income - self.expense_breakdown.total_expenses


class IncomeProjectionResult(BaseModel):
    """Income at every time scale for one hourly rate and schedule."""
    model_config = ConfigDict(frozen=True)

    work_schedule: WorkSchedule
    hourly_rate: Decimal
    daily_income: Decimal
    weekly_income: Decimal
    monthly_income: Decimal
    yearly_income: Decimal
    expense_breakdown: ExpenseBreakdown
    loan_payments: Decimal
    available_income: Decimal = Field(
        ...,
        description="monthly_income - total expenses - loan payments; may be negative"
    )
    projected_available_income: Decimal
