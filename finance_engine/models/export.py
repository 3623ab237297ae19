"""
Export Models

The export pipeline never raises to its caller. Every outcome is an
ExportResult: either a document, or an ExportFailure carrying one of
the ExportErrorKind values and a human-readable message.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from finance_engine.models.budget import Budget
from finance_engine.models.loan import Loan
from finance_engine.models.transaction import Transaction
from finance_engine.utils.dates import to_naive_utc, utc_now


class ExportKind(str, Enum):
    """Which entities an export covers."""
    TRANSACTIONS = "transactions"
    BUDGETS = "budgets"
    LOANS = "loans"
    ALL = "all"

    @property
    def display_name(self) -> str:
        return {
            ExportKind.TRANSACTIONS: "Transactions",
            ExportKind.BUDGETS: "Budgets",
            ExportKind.LOANS: "Loans",
            ExportKind.ALL: "All Data",
        }[self]

    @property
    def description(self) -> str:
        return {
            ExportKind.TRANSACTIONS: "Export all transaction records",
            ExportKind.BUDGETS: "Export all budget information",
            ExportKind.LOANS: "Export all loan details",
            ExportKind.ALL: "Export all financial data",
        }[self]

    @property
    def file_label(self) -> str:
        """Label used in export file names."""
        if self is ExportKind.ALL:
            return "AllData"
        return self.display_name


class ExportErrorKind(str, Enum):
    """Failure taxonomy of the export pipeline."""
    NO_DATA_AVAILABLE = "no_data_available"
    FILE_CREATION_FAILED = "file_creation_failed"
    DATA_PROCESSING_FAILED = "data_processing_failed"
    EXPORT_IN_PROGRESS = "export_in_progress"

    @property
    def default_message(self) -> str:
        return {
            ExportErrorKind.NO_DATA_AVAILABLE: "No data available to export",
            ExportErrorKind.FILE_CREATION_FAILED: "Failed to create export file",
            ExportErrorKind.DATA_PROCESSING_FAILED: "Failed to process data for export",
            ExportErrorKind.EXPORT_IN_PROGRESS: "An export is already in progress",
        }[self]


class ExportFailure(BaseModel):
    """Why an export did not produce a document."""
    model_config = ConfigDict(frozen=True)

    kind: ExportErrorKind
    message: str = Field(..., min_length=1)

    @classmethod
    def of(cls, kind: ExportErrorKind, detail: Optional[str] = None) -> "ExportFailure":
        """Build a failure, appending `detail` to the kind's default message."""
        message = kind.default_message
        if detail:
            message = f"{message}: {detail}"
        return cls(kind=kind, message=message)


class ExportSources(BaseModel):
    """
    In-memory records to export.

    `as_of` is the instant loan statuses are derived at; pin it to get
    byte-identical documents across repeated exports.
    """

    transactions: list[Transaction] = Field(default_factory=list)
    budgets: list[Budget] = Field(default_factory=list)
    loans: list[Loan] = Field(default_factory=list)
    as_of: datetime = Field(
        default_factory=utc_now,
        description="Naive UTC; aware values are converted"
    )

    @field_validator('as_of')
    @classmethod
    def validate_as_of(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class ExportDocument(BaseModel):
    """A serialized export."""
    model_config = ConfigDict(frozen=True)

    kind: ExportKind
    content: str
    row_count: int = Field(
        ...,
        ge=0,
        description="Number of records serialized (header rows excluded)"
    )


class ExportResult(BaseModel):
    """Outcome of one export call."""
    model_config = ConfigDict(frozen=True)

    success: bool
    document: Optional[ExportDocument] = None
    failure: Optional[ExportFailure] = None
    location: Optional[str] = Field(
        default=None,
        description="Where the document was written, when a sink was used"
    )

    @model_validator(mode='after')
    def validate_outcome(self) -> 'ExportResult':
        """Exactly one of document/failure is set, matching `success`."""
        if self.success and (self.document is None or self.failure is not None):
            raise ValueError("Successful result must carry a document and no failure")
        if not self.success and (self.failure is None or self.document is not None):
            raise ValueError("Failed result must carry a failure and no document")
        return self

    @classmethod
    def ok(cls, document: ExportDocument, location: Optional[str] = None) -> "ExportResult":
        return cls(success=True, document=document, location=location)

    @classmethod
    def fail(cls, failure: ExportFailure) -> "ExportResult":
        return cls(success=False, failure=failure)

    @property
    def error_kind(self) -> Optional[ExportErrorKind]:
        return self.failure.kind if self.failure else None
