"""
Input Validation

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - SCHEMA VALIDATION:
- Required values present and finite
- Signs and ranges (rates, amounts)
- Handled mostly by the pydantic models; this stage covers inputs that
  arrive as bare Decimals

STAGE 2 - SEMANTIC VALIDATION:
- Future date detection
- Absurd amount detection
- Empty or placeholder titles
- Only run when stage 1 found no errors

IMPORTANT: Validation NEVER silently fixes issues.
It reports them; the caller decides whether to proceed.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

import structlog

from finance_engine.config import EngineSettings, get_settings
from finance_engine.models.reports import ExpenseBreakdown
from finance_engine.models.transaction import Transaction
from finance_engine.models.validation import ValidationIssue, ValidationResult
from finance_engine.utils.dates import to_naive_utc

logger = structlog.get_logger(__name__)

_PLACEHOLDER_TITLES = {"-", "?", "n/a", "na", "none", "untitled"}


def _is_finite(value: Decimal) -> bool:
    return isinstance(value, Decimal) and value.is_finite()


class InputValidator:
    """
    Validates projection inputs and transactions before they reach the
    computation components.
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        """
        Initialize validator.

        Args:
            settings: Thresholds to validate against.
                      If None, they are read from the environment.
        """
        self._settings = settings or get_settings().engine

    # =========================================================================
    # PROJECTION INPUTS
    # =========================================================================

    def validate_projection_inputs(
        self,
        hourly_rate: Decimal,
        expense_breakdown: ExpenseBreakdown,
        loan_payments: Decimal,
    ) -> ValidationResult:
        """
        Check the inputs of an income projection.

        A zero hourly rate is allowed (the projection is then all
        outgoings); negative or non-finite values are errors.
        """
        issues = []

        if not _is_finite(hourly_rate):
            issues.append(ValidationIssue(
                field="hourly_rate",
                issue_type="invalid_value",
                message="Hourly rate must be a finite number",
                severity="error",
            ))
        elif hourly_rate < 0:
            issues.append(ValidationIssue(
                field="hourly_rate",
                issue_type="invalid_value",
                message="Hourly rate cannot be negative",
                severity="error",
                suggested_fix="Enter the gross hourly rate as a positive number",
            ))
        elif hourly_rate == 0:
            issues.append(ValidationIssue(
                field="hourly_rate",
                issue_type="suspicious_value",
                message="Hourly rate is zero; projected income will be zero",
                severity="info",
            ))

        if not _is_finite(loan_payments):
            issues.append(ValidationIssue(
                field="loan_payments",
                issue_type="invalid_value",
                message="Loan payments must be a finite number",
                severity="error",
            ))
        elif loan_payments < 0:
            issues.append(ValidationIssue(
                field="loan_payments",
                issue_type="invalid_value",
                message="Loan payments cannot be negative",
                severity="error",
            ))

        for bucket, amount in (
            ("housing", expense_breakdown.housing),
            ("food", expense_breakdown.food),
            ("transportation", expense_breakdown.transportation),
            ("loans", expense_breakdown.loans),
            ("other", expense_breakdown.other),
        ):
            if not _is_finite(amount):
                issues.append(ValidationIssue(
                    field=f"expense_breakdown.{bucket}",
                    issue_type="invalid_value",
                    message=f"Expense bucket '{bucket}' must be a finite number",
                    severity="error",
                ))
            elif amount < 0:
                issues.append(ValidationIssue(
                    field=f"expense_breakdown.{bucket}",
                    issue_type="invalid_value",
                    message=f"Expense bucket '{bucket}' cannot be negative",
                    severity="error",
                    suggested_fix="Expenses are entered as positive amounts",
                ))

        return self._result("projection_inputs", issues)

    # =========================================================================
    # TRANSACTIONS
    # =========================================================================

    def _validate_schema(self, transaction: Transaction) -> list[ValidationIssue]:
        issues = []

        if not _is_finite(transaction.amount):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be a finite number",
                severity="error",
            ))
        elif transaction.amount == 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount is zero; it counts as neither income nor expense",
                severity="warning",
                suggested_fix="Enter a positive amount for income or a negative one for an expense",
            ))

        if not transaction.title or not transaction.title.strip():
            issues.append(ValidationIssue(
                field="title",
                issue_type="missing",
                message="Title is required",
                severity="error",
            ))

        return issues

    def _validate_semantic(
        self,
        transaction: Transaction,
        now: datetime,
    ) -> list[ValidationIssue]:
        issues = []

        now = to_naive_utc(now)
        max_future = now + timedelta(days=self._settings.future_date_tolerance_days)
        if transaction.date > max_future:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Transaction date ({transaction.date.date().isoformat()}) is in the future",
                severity="warning",
                suggested_fix="Please verify the date is correct",
            ))

        if abs(transaction.amount) > self._settings.max_transaction_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({abs(transaction.amount):,.2f}) seems unusually high",
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))

        if transaction.title.strip().lower() in _PLACEHOLDER_TITLES:
            issues.append(ValidationIssue(
                field="title",
                issue_type="suspicious_value",
                message=f"Title '{transaction.title}' looks like a placeholder",
                severity="warning",
            ))

        return issues

    def validate_transaction(
        self,
        transaction: Transaction,
        now: datetime,
    ) -> ValidationResult:
        """
        Run both stages against one transaction.

        Args:
            transaction: The record to check
            now: Reference instant for the future-date check

        Returns:
            ValidationResult with all issues found
        """
        issues = self._validate_schema(transaction)
        if not any(issue.severity == "error" for issue in issues):
            issues.extend(self._validate_semantic(transaction, now))
        return self._result(str(transaction.id), issues)

    def _result(self, subject: str, issues: list[ValidationIssue]) -> ValidationResult:
        is_valid = not any(issue.severity == "error" for issue in issues)
        if issues:
            logger.debug(
                "validation_issues_found",
                subject=subject,
                is_valid=is_valid,
                issue_count=len(issues),
            )
        return ValidationResult(subject=subject, is_valid=is_valid, issues=issues)
