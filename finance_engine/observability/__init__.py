"""Logging package."""

from finance_engine.observability.logger import (
    configure_from_settings,
    configure_logging,
    is_configured,
)

__all__ = [
    "configure_from_settings",
    "configure_logging",
    "is_configured",
]
