"""
Tests for the Pydantic models
"""

import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from pydantic import ValidationError

from finance_engine.models import (
    ExportErrorKind,
    ExportFailure,
    ExportKind,
    MonthData,
    MonthlyOverviewData,
    TransactionType,
    ValidationIssue,
    ValidationResult,
)

from tests.conftest import make_loan, make_transaction

JAN = datetime(2025, 1, 1)


class TestTransaction:
    """Tests for the transaction model."""

    def test_type_follows_sign(self):
        """Test that the sign alone decides income vs. expense."""
        income = make_transaction("Salary", "10", JAN)
        expense = make_transaction("Rent", "-10", JAN)
        zero = make_transaction("Zero", "0", JAN)

        assert income.transaction_type is TransactionType.INCOME
        assert income.is_income and not income.is_expense
        assert expense.transaction_type is TransactionType.EXPENSE
        assert expense.is_expense
        assert zero.transaction_type is TransactionType.EXPENSE
        assert not zero.is_income and not zero.is_expense

    def test_is_frozen(self):
        """Test that transactions cannot be mutated."""
        transaction = make_transaction("Salary", "10", JAN)
        with pytest.raises(ValidationError):
            transaction.amount = Decimal("-10")

    def test_strips_whitespace(self):
        """Test that text fields are trimmed."""
        assert make_transaction("  Salary  ", "10", JAN).title == "Salary"

    def test_default_category(self):
        """Test the fallback raw label."""
        transaction = make_transaction("Thing", "-1", JAN)
        assert transaction.category == "other"
        assert not transaction.has_display_overrides


class TestExportModels:
    """Tests for export enums and failures."""

    def test_kind_labels(self):
        """Test display names and file labels."""
        assert ExportKind.ALL.display_name == "All Data"
        assert ExportKind.ALL.file_label == "AllData"
        assert ExportKind.LOANS.file_label == "Loans"

    def test_failure_message(self):
        """Test that detail is appended to the default message."""
        failure = ExportFailure.of(ExportErrorKind.FILE_CREATION_FAILED, "disk full")
        assert failure.message == "Failed to create export file: disk full"
        assert ExportFailure.of(ExportErrorKind.EXPORT_IN_PROGRESS).message == (
            "An export is already in progress"
        )


class TestReportModels:
    """Tests for report shapes."""

    def test_month_data_net(self):
        """Test the derived net."""
        month = MonthData(date=JAN, income=Decimal("100"), expenses=Decimal("40"))
        assert month.net == Decimal("60")

    def test_overview_is_empty(self):
        """Test emptiness across both months."""
        empty = MonthData(date=JAN, income=Decimal("0"), expenses=Decimal("0"))
        overview = MonthlyOverviewData(
            current_month=empty,
            previous_month=empty,
            month_over_month_change=Decimal("0"),
            starting_balance=Decimal("0"),
        )
        assert overview.is_empty


class TestValidationModels:
    """Tests for validation result models."""

    def test_counts(self):
        """Test error and warning helpers."""
        result = ValidationResult(
            subject="x",
            is_valid=False,
            issues=[
                ValidationIssue(field="a", issue_type="missing", message="A", severity="error"),
                ValidationIssue(field="b", issue_type="odd", message="B", severity="warning"),
            ],
        )
        assert result.has_errors
        assert result.error_count == 1
        assert result.warnings == ["B"]

    def test_severity_pattern(self):
        """Test that unknown severities are rejected."""
        with pytest.raises(ValidationError):
            ValidationIssue(field="a", issue_type="x", message="m", severity="fatal")


class TestDateNormalisation:
    """Tests for storing datetimes as naive UTC."""

    def test_aware_transaction_date_converted(self):
        """Test that an aware date is stored as its naive UTC instant."""
        plus_two = timezone(timedelta(hours=2))
        transaction = make_transaction("Salary", "10", datetime(2025, 1, 1, 1, 0, tzinfo=plus_two))
        assert transaction.date == datetime(2024, 12, 31, 23, 0)
        assert transaction.date.tzinfo is None

    def test_naive_transaction_date_unchanged(self):
        """Test that naive dates are taken as UTC."""
        assert make_transaction("Salary", "10", JAN).date == JAN

    def test_aware_loan_dates_converted(self):
        """Test every loan date field."""
        loan = make_loan(
            due_date=datetime(2025, 3, 1, tzinfo=timezone.utc),
            last_payment_date=datetime(2025, 2, 1, 12, 0, tzinfo=timezone(timedelta(hours=-5))),
        )
        assert loan.due_date == datetime(2025, 3, 1)
        assert loan.last_payment_date == datetime(2025, 2, 1, 17, 0)
        assert loan.next_payment_due_date is None

    def test_loan_assignment_converted(self):
        """Test that assigned dates are normalised too."""
        loan = make_loan()
        loan.next_payment_due_date = datetime(2025, 4, 1, tzinfo=timezone.utc)
        assert loan.next_payment_due_date == datetime(2025, 4, 1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
