"""Loan status package."""

from finance_engine.loans.status import (
    DEFAULT_GRACE_PERIOD,
    LoanStatusEngine,
    derive_status,
    progress_percentage,
)

__all__ = [
    "DEFAULT_GRACE_PERIOD",
    "LoanStatusEngine",
    "derive_status",
    "progress_percentage",
]
