"""
Loan Status Engine

Derives a loan's payment status from its authoritative fields.

Priority (first match wins):
1. remaining_amount <= 0              -> PAID
2. now > next_due + grace period      -> MISSED
3. now > next_due                     -> OVERDUE
4. otherwise                          -> CURRENT

next_due is the loan's next_payment_due_date, or its due_date when no
payment has scheduled a later one. Derivation never touches the loan;
refresh() is the one operation that writes the derived value back, and
it does so on a copy.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

import structlog

from finance_engine.config import get_settings
from finance_engine.models.loan import Loan, LoanPaymentStatus, LoanSummary
from finance_engine.utils.dates import shift_months, to_naive_utc
from finance_engine.utils.numbers import ZERO, percentage_of

DEFAULT_GRACE_PERIOD = timedelta(days=2)

logger = structlog.get_logger(__name__)


def derive_status(
    loan: Loan,
    now: datetime,
    grace_period: timedelta = DEFAULT_GRACE_PERIOD,
) -> LoanPaymentStatus:
    """Payment status of `loan` at `now`. Ignores the stored status."""
    if loan.remaining_amount <= 0:
        return LoanPaymentStatus.PAID

    next_due = loan.effective_next_due_date
    now = to_naive_utc(now)
    if now > next_due + grace_period:
        return LoanPaymentStatus.MISSED
    if now > next_due:
        return LoanPaymentStatus.OVERDUE
    return LoanPaymentStatus.CURRENT


def progress_percentage(loan: Loan) -> Decimal:
    """Share of the principal already repaid, in percent."""
    return percentage_of(loan.amount_paid, loan.principal_amount)


class LoanStatusEngine:
    """
    Status derivation with the configured grace period, plus the
    operations that produce updated loan records.
    """

    def __init__(self, grace_period: Optional[timedelta] = None):
        """
        Args:
            grace_period: Time after a due date before OVERDUE becomes
                          MISSED. Defaults to the configured value.
        """
        if grace_period is None:
            grace_period = get_settings().engine.grace_period
        if grace_period < timedelta(0):
            raise ValueError("Grace period cannot be negative")
        self._grace_period = grace_period

    @property
    def grace_period(self) -> timedelta:
        return self._grace_period

    def derive_status(self, loan: Loan, now: datetime) -> LoanPaymentStatus:
        return derive_status(loan, now, self._grace_period)

    def is_stale(self, loan: Loan, now: datetime) -> bool:
        """True when the stored status differs from the derived one."""
        return loan.payment_status != self.derive_status(loan, now)

    def refresh(self, loan: Loan, now: datetime) -> Loan:
        """
        Commit the derived status.

        Returns a copy of `loan` whose payment_status is the derived
        status at `now`. The input record is not modified.
        """
        status = self.derive_status(loan, now)
        if status != loan.payment_status:
            logger.debug(
                "loan_status_refreshed",
                loan_id=str(loan.id),
                previous_status=loan.payment_status.value,
                status=status.value,
            )
        return loan.model_copy(update={"payment_status": status})

    def refresh_all(self, loans: Iterable[Loan], now: datetime) -> list[Loan]:
        return [self.refresh(loan, now) for loan in loans]

    def record_payment(
        self,
        loan: Loan,
        amount: Decimal,
        paid_at: datetime,
    ) -> Loan:
        """
        Apply a payment.

        Lowers the remaining amount (never below zero), records the
        payment date and moves the next due date one calendar month past
        the current one. A payment that clears the balance also clears
        the next due date. The returned loan has a refreshed status.

        Raises:
            ValueError: If amount is not positive
        """
        if amount <= 0:
            raise ValueError("Payment amount must be greater than zero")
        paid_at = to_naive_utc(paid_at)

        remaining = max(ZERO, loan.remaining_amount - amount)
        next_due = (
            None if remaining == 0
            else shift_months(loan.effective_next_due_date, 1)
        )

        updated = loan.model_copy(update={
            "remaining_amount": remaining,
            "last_payment_date": paid_at,
            "next_payment_due_date": next_due,
        })

        logger.info(
            "loan_payment_recorded",
            loan_id=str(loan.id),
            amount=str(amount),
            remaining=str(remaining),
        )
        return self.refresh(updated, paid_at)

    def mark_paid(self, loan: Loan, now: datetime) -> Loan:
        """Settle the loan in full at `now`."""
        logger.info("loan_marked_paid", loan_id=str(loan.id))
        now = to_naive_utc(now)
        return loan.model_copy(update={
            "remaining_amount": ZERO,
            "last_payment_date": now,
            "next_payment_due_date": None,
            "payment_status": LoanPaymentStatus.PAID,
        })

    def summarize(self, loans: Iterable[Loan], now: datetime) -> LoanSummary:
        """Debt totals and overdue count at `now`."""
        loans = list(loans)
        statuses = [self.derive_status(loan, now) for loan in loans]
        active = [
            loan for loan, status in zip(loans, statuses)
            if status != LoanPaymentStatus.PAID
        ]
        overdue = sum(
            1 for status in statuses
            if status in (LoanPaymentStatus.OVERDUE, LoanPaymentStatus.MISSED)
        )

        average_rate = ZERO
        if active:
            average_rate = sum((loan.interest_rate for loan in active), ZERO) / len(active)

        next_payment = min(
            (loan.effective_next_due_date for loan in active),
            default=None,
        )

        return LoanSummary(
            total_loans=len(loans),
            active_loans=len(active),
            total_debt=sum((loan.remaining_amount for loan in active), ZERO),
            total_monthly_payments=sum((loan.monthly_payment for loan in active), ZERO),
            average_interest_rate=average_rate,
            overdue_count=overdue,
            next_payment_date=next_payment,
        )
