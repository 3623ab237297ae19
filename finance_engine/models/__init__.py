"""
Data Models Package

This package contains all Pydantic models used by the Finance Engine.
All records flowing through the engine must conform to these schemas.
"""

from finance_engine.models.budget import (
    Budget,
    BudgetOverview,
    BudgetPeriod,
)
from finance_engine.models.export import (
    ExportDocument,
    ExportErrorKind,
    ExportFailure,
    ExportKind,
    ExportResult,
    ExportSources,
)
from finance_engine.models.loan import (
    Loan,
    LoanCategory,
    LoanPaymentStatus,
    LoanSummary,
)
from finance_engine.models.reports import (
    CategorySpending,
    ExpenseBreakdown,
    IncomeProjectionData,
    IncomeProjectionResult,
    MonthData,
    MonthlyOverviewData,
    PeriodAggregate,
    TimeRange,
    TrendMetric,
    WorkSchedule,
)
from finance_engine.models.transaction import (
    CategoryDescriptor,
    Transaction,
    TransactionCategory,
    TransactionType,
)
from finance_engine.models.validation import (
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Transaction models
    "CategoryDescriptor",
    "Transaction",
    "TransactionCategory",
    "TransactionType",
    # Budget models
    "Budget",
    "BudgetOverview",
    "BudgetPeriod",
    # Loan models
    "Loan",
    "LoanCategory",
    "LoanPaymentStatus",
    "LoanSummary",
    # Report models
    "CategorySpending",
    "ExpenseBreakdown",
    "IncomeProjectionData",
    "IncomeProjectionResult",
    "MonthData",
    "MonthlyOverviewData",
    "PeriodAggregate",
    "TimeRange",
    "TrendMetric",
    "WorkSchedule",
    # Export models
    "ExportDocument",
    "ExportErrorKind",
    "ExportFailure",
    "ExportKind",
    "ExportResult",
    "ExportSources",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
]
