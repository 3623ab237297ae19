"""Small shared helpers for money and calendar arithmetic."""

from finance_engine.utils.dates import month_bounds, shift_months, to_naive_utc, utc_now
from finance_engine.utils.numbers import (
    ZERO,
    percentage_of,
    quantize_money,
    strip_trailing_zeros,
)

__all__ = [
    "ZERO",
    "month_bounds",
    "percentage_of",
    "quantize_money",
    "shift_months",
    "strip_trailing_zeros",
    "to_naive_utc",
    "utc_now",
]
