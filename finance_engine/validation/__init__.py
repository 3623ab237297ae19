"""Input validation package."""

from finance_engine.validation.validator import InputValidator

__all__ = ["InputValidator"]
