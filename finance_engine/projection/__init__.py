"""Income projection package."""

from finance_engine.projection.calculator import (
    IncomeChain,
    IncomeProjectionCalculator,
    income_chain,
    scale_amount,
    scale_breakdown,
)

__all__ = [
    "IncomeChain",
    "IncomeProjectionCalculator",
    "income_chain",
    "scale_amount",
    "scale_breakdown",
]
