"""
Tests for the engine facade
"""

import logging
import re

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal

import structlog

from finance_engine.config import EngineSettings, ExportSettings
from finance_engine.engine import FinanceEngine, create_engine
from finance_engine.models import (
    Budget,
    ExportErrorKind,
    ExportKind,
    ExportSources,
    LoanPaymentStatus,
    WorkSchedule,
)
from finance_engine.observability import configure_logging, is_configured
from finance_engine.observability import logger as logger_module

from tests.conftest import make_loan, make_transaction

NOW = datetime(2025, 2, 15, 9, 0)
ANSI_CODES = re.compile(r"\x1b\[[0-9;]*m")


@pytest.fixture
def restore_logging(monkeypatch):
    """Undo configure_logging on the root logger and structlog."""
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    monkeypatch.setattr(logger_module, "_configured", False)
    yield
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler and handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def engine(tmp_path):
    return FinanceEngine(
        engine_settings=EngineSettings(
            starting_balance=Decimal("5000"),
            grace_period_days=3,
            currency_code="EUR",
        ),
        export_settings=ExportSettings(file_prefix="Test", directory=tmp_path),
    )


class TestFacade:
    """Tests for settings flowing into components."""

    def test_wiring(self, engine):
        """Test that configured values reach the components."""
        assert engine.currency_code == "EUR"
        assert engine.loan_status.grace_period == timedelta(days=3)
        assert engine.exporter.file_name(ExportKind.LOANS, date(2025, 2, 15)) == (
            "Test_Loans_2025-02-15.csv"
        )

    def test_monthly_overview_uses_starting_balance(self, engine, winter_transactions):
        """Test percentage normalisation with the configured balance."""
        overview = engine.monthly_overview(winter_transactions, NOW)
        assert overview.starting_balance == Decimal("5000")
        assert overview.previous_month.income_percentage == Decimal("50")

    def test_enrich_and_refresh(self, engine, winter_transactions):
        """Test display backfill and status refresh."""
        enriched = engine.enrich_transactions(winter_transactions)
        assert enriched[1].icon_name == "fork.knife"

        loans = engine.refresh_loans([make_loan(due_date=NOW - timedelta(days=2))], NOW)
        assert loans[0].payment_status is LoanPaymentStatus.OVERDUE

    def test_budget_overview_for_current_month(self, engine, winter_transactions):
        """Test that only this month's spending counts."""
        updated, overview = engine.budget_overview(
            [Budget(category="food", limit=Decimal("100"))],
            winter_transactions,
            NOW,
        )
        assert updated[0].spent == Decimal("4.50")
        assert overview.total_spent == Decimal("4.50")

    def test_project_income(self, engine):
        """Test projection from this month's expenses and active loans."""
        transactions = [
            make_transaction("Rent", "-1000", datetime(2025, 2, 1), category="rent"),
            make_transaction("Food", "-300", datetime(2025, 2, 3), category="food"),
        ]
        loans = [
            make_loan(monthly_payment=Decimal("240"), due_date=datetime(2025, 3, 1)),
            make_loan(remaining="0", monthly_payment=Decimal("99")),
        ]
        result = engine.project_income(
            transactions, loans, NOW, WorkSchedule.CONTRACT, Decimal("24"),
        )
        assert result.expense_breakdown.housing == Decimal("1000")
        assert result.loan_payments == Decimal("240")
        assert result.available_income == Decimal("2100")

    def test_project_income_rejects_invalid_rate(self, engine):
        """Test that invalid inputs raise before projecting."""
        with pytest.raises(ValueError):
            engine.project_income([], [], NOW, WorkSchedule.FULL_TIME, Decimal("-5"))

    def test_export_to_configured_directory(self, engine, winter_transactions, tmp_path):
        """Test writing to the configured export directory."""
        sources = ExportSources(transactions=winter_transactions, as_of=NOW)
        result = engine.export_to_file(ExportKind.TRANSACTIONS, sources, today=date(2025, 2, 15))

        assert result.success
        written = tmp_path / "Test_Transactions_2025-02-15.csv"
        assert written.read_text(encoding="utf-8") == result.document.content

    def test_export_without_directory(self, winter_transactions):
        """Test that a missing directory is a file creation failure."""
        engine = FinanceEngine(
            engine_settings=EngineSettings(),
            export_settings=ExportSettings(directory=None),
        )
        result = engine.export_to_file(
            ExportKind.TRANSACTIONS,
            ExportSources(transactions=winter_transactions, as_of=NOW),
        )
        assert result.error_kind is ExportErrorKind.FILE_CREATION_FAILED


class TestCreateEngine:
    """Tests for the factory function."""

    def test_explicit_settings(self):
        """Test that explicit settings win over the environment."""
        engine = create_engine(
            engine_settings=EngineSettings(grace_period_days=7),
            export_settings=ExportSettings(file_prefix="X"),
            configure_logs=False,
        )
        assert engine.loan_status.grace_period == timedelta(days=7)

    def test_configure_logging(self, restore_logging, caplog):
        """Test that events are rendered by the console renderer."""
        configure_logging(level="DEBUG", renderer="console")
        assert is_configured()
        assert logging.getLogger().level == logging.DEBUG

        structlog.get_logger("tests.logging").info("engine_ready", answer=42)

        message = ANSI_CODES.sub("", caplog.records[-1].getMessage())
        assert "engine_ready" in message
        assert "answer=42" in message
        assert not message.startswith("{")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
