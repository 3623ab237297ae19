"""
Configuration Management for Finance Engine

Uses pydantic-settings for type-safe configuration from environment variables.

All configuration the engine consumes is declared here: the starting
balance used for percentage normalisation, the loan grace period, the
currency code handed to formatting collaborators, export file naming
and logging.
"""

from datetime import timedelta
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Settings for the computation components."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    starting_balance: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Balance entered at onboarding; base for monthly percentages"
    )
    grace_period_days: int = Field(
        default=2,
        ge=0,
        le=365,
        description="Days after a due date before an overdue loan counts as missed"
    )
    currency_code: str = Field(
        default="USD",
        description="ISO 4217 code passed to the formatting layer"
    )

    # Validation thresholds
    future_date_tolerance_days: int = Field(
        default=7,
        ge=0,
        description="How many days in the future a transaction date can be"
    )
    max_transaction_amount: Decimal = Field(
        default=Decimal("1000000"),
        gt=0,
        description="Maximum reasonable transaction amount (for sanity checking)"
    )

    @field_validator('currency_code')
    @classmethod
    def validate_currency_code(cls, v: str) -> str:
        """Accept three-letter codes, normalised to upper case."""
        code = v.strip().upper()
        if len(code) != 3 or not code.isalpha():
            raise ValueError(f"Invalid currency code: {v!r}")
        return code

    @property
    def grace_period(self) -> timedelta:
        return timedelta(days=self.grace_period_days)


class ExportSettings(BaseSettings):
    """Export file naming and destination."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_EXPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    file_prefix: str = Field(
        default="Finance",
        min_length=1,
        max_length=50,
        description="Prefix of export file names"
    )
    directory: Optional[Path] = Field(
        default=None,
        description="Directory export files are written to"
    )


class LoggingSettings(BaseSettings):
    """Structured logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    level: str = Field(
        default="INFO",
        description="Standard library log level name"
    )
    renderer: str = Field(
        default="json",
        pattern="^(json|console)$",
        description="Log line format"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def engine(self) -> EngineSettings:
        return EngineSettings()

    @property
    def export(self) -> ExportSettings:
        return ExportSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
