"""
Loan Models

A loan carries both authoritative fields (amounts and dates) and a
stored `payment_status`. The stored status is a cache: the loan status
engine can always recompute it from the authoritative fields, and only
its explicit refresh operation writes the derived value back.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from finance_engine.utils.dates import to_naive_utc


# =============================================================================
# ENUMS
# =============================================================================

class LoanPaymentStatus(str, Enum):
    """
    Payment status of a loan.

    Always derivable from due dates, payment history and the remaining
    amount; see finance_engine.loans.derive_status.
    """
    CURRENT = "current"
    OVERDUE = "overdue"
    MISSED = "missed"
    PAID = "paid"


class LoanCategory(str, Enum):
    """Kind of loan."""
    MORTGAGE = "mortgage"
    AUTO = "auto"
    STUDENT = "student"
    PERSONAL = "personal"
    CREDIT_CARD = "credit_card"
    OTHER = "other"


# =============================================================================
# CORE LOAN MODEL
# =============================================================================

class Loan(BaseModel):
    """
    A loan record.

    `remaining_amount` only goes down (payments); principal increases are
    not modelled. `due_date` is the originally agreed due date and serves
    as the effective next-due date until a payment schedules another one.
    """
    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique loan ID"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
    )
    principal_amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount originally borrowed"
    )
    remaining_amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount still owed"
    )
    interest_rate: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Annual interest rate in percent"
    )
    monthly_payment: Decimal = Field(
        default=Decimal("0"),
        ge=0,
    )
    due_date: datetime = Field(
        ...,
        description="Agreed due date"
    )
    last_payment_date: Optional[datetime] = None
    next_payment_due_date: Optional[datetime] = None
    category: LoanCategory = LoanCategory.OTHER

    # Cached value, may be stale. Recompute with LoanStatusEngine.
    payment_status: LoanPaymentStatus = LoanPaymentStatus.CURRENT

    @field_validator('due_date', 'last_payment_date', 'next_payment_due_date')
    @classmethod
    def validate_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Dates are stored as naive UTC."""
        return to_naive_utc(v) if v is not None else None

    @model_validator(mode='after')
    def validate_amounts(self) -> 'Loan':
        """Remaining balance cannot exceed what was borrowed."""
        if self.remaining_amount > self.principal_amount:
            raise ValueError("Remaining amount cannot exceed principal amount")
        return self

    @property
    def effective_next_due_date(self) -> datetime:
        """Next payment due date, falling back to the agreed due date."""
        return self.next_payment_due_date or self.due_date

    @property
    def amount_paid(self) -> Decimal:
        return self.principal_amount - self.remaining_amount


class LoanSummary(BaseModel):
    """Totals over a collection of loans, evaluated at a point in time."""

    total_loans: int = Field(ge=0)
    active_loans: int = Field(ge=0, description="Loans with a balance left")
    total_debt: Decimal
    total_monthly_payments: Decimal
    average_interest_rate: Decimal
    overdue_count: int = Field(
        ge=0,
        description="Active loans whose derived status is overdue or missed"
    )
    next_payment_date: Optional[datetime] = None
