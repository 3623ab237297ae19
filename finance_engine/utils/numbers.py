"""Decimal helpers shared by every component that derives a percentage."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")

Number = Union[Decimal, int]


def percentage_of(value: Number, base: Number) -> Decimal:
    """
    Express ``value`` as a percentage of ``base``.

    Returns 0 whenever ``base <= 0``; a percentage is never undefined
    and never infinite.
    """
    base = Decimal(base)
    if base <= 0:
        return ZERO
    return Decimal(value) / base * HUNDRED


def quantize_money(amount: Decimal) -> Decimal:
    """Round to cents, half away from zero."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def strip_trailing_zeros(amount: Decimal) -> Decimal:
    """
    Drop insignificant trailing zeros without switching to exponent form.

    ``Decimal("1000.000000")`` -> ``Decimal("1000")``; the value is unchanged.
    """
    if not amount.is_finite():
        return amount
    normalized = amount.normalize()
    if normalized.as_tuple().exponent > 0:
        return normalized.quantize(Decimal(1))
    return normalized
