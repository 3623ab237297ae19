"""
Export Pipeline

Serializes transactions, budgets and loans into delimited text.

STATE MACHINE:
    IDLE -> EXPORTING -> IDLE

One export runs per pipeline instance at a time. The state is guarded by
a lock acquired without blocking: a caller that finds the pipeline
EXPORTING gets an EXPORT_IN_PROGRESS result straight away instead of
waiting. The only thing kept between calls is the last failure, and it
is cleared when the next export starts.

IMPORTANT: export() never raises. Every outcome, including a record
that cannot be serialized or a sink that cannot be written, comes back
as an ExportResult. A record failure abandons the whole document; there
is no partial output.
"""

import threading
from datetime import date, datetime
from enum import Enum
from typing import Callable, Optional, Sequence

import structlog

from finance_engine.config import get_settings
from finance_engine.exceptions import RecordSerializationError, SinkError
from finance_engine.export.csv_format import format_amount, format_date, format_row
from finance_engine.export.sinks import ExportSink
from finance_engine.loans.status import LoanStatusEngine
from finance_engine.models.budget import Budget
from finance_engine.models.export import (
    ExportDocument,
    ExportErrorKind,
    ExportFailure,
    ExportKind,
    ExportResult,
    ExportSources,
)
from finance_engine.models.loan import Loan
from finance_engine.models.transaction import Transaction

logger = structlog.get_logger(__name__)


TRANSACTION_HEADER = ("Title", "Amount", "Category", "Date", "Type")
BUDGET_HEADER = ("Category", "Limit", "Spent", "Period")
LOAN_HEADER = (
    "Name",
    "Principal",
    "Remaining",
    "Rate",
    "Monthly Payment",
    "Due Date",
    "Status",
)

SECTION_TITLES = {
    ExportKind.TRANSACTIONS: "=== TRANSACTIONS ===",
    ExportKind.BUDGETS: "=== BUDGETS ===",
    ExportKind.LOANS: "=== LOANS ===",
}

_SECTION_ORDER = (ExportKind.TRANSACTIONS, ExportKind.BUDGETS, ExportKind.LOANS)


class ExportState(str, Enum):
    """Whether the pipeline is running an export."""
    IDLE = "idle"
    EXPORTING = "exporting"


class _ExportAborted(Exception):
    """Carries a failure out of the rendering steps."""

    def __init__(self, failure: ExportFailure):
        super().__init__(failure.message)
        self.failure = failure


# =============================================================================
# ROWS
# =============================================================================

def transaction_row(transaction: Transaction) -> tuple[str, ...]:
    return (
        transaction.title,
        format_amount(transaction.amount),
        transaction.category,
        format_date(transaction.date),
        transaction.transaction_type.value,
    )


def budget_row(budget: Budget) -> tuple[str, ...]:
    return (
        budget.category,
        format_amount(budget.limit),
        format_amount(budget.spent),
        budget.period.value,
    )


def loan_row(loan: Loan, status_engine: LoanStatusEngine, as_of: datetime) -> tuple[str, ...]:
    """Loan row; the status column is derived at `as_of`, not read from the record."""
    return (
        loan.name,
        format_amount(loan.principal_amount),
        format_amount(loan.remaining_amount),
        format_amount(loan.interest_rate),
        format_amount(loan.monthly_payment),
        format_date(loan.due_date),
        status_engine.derive_status(loan, as_of).value,
    )


# =============================================================================
# PIPELINE
# =============================================================================

class ExportPipeline:
    """
    Turns in-memory records into export documents.

    Usage:
        pipeline = ExportPipeline(status_engine=LoanStatusEngine())
        result = pipeline.export(ExportKind.LOANS, sources)
        if result.success:
            print(result.document.content)
    """

    def __init__(
        self,
        status_engine: Optional[LoanStatusEngine] = None,
        file_prefix: Optional[str] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            status_engine: Derives the loan status column.
                           If None, one is built from settings.
            file_prefix: Prefix of export file names.
                         If None, read from export settings.
        """
        self._status_engine = status_engine or LoanStatusEngine()
        self._file_prefix = file_prefix or get_settings().export.file_prefix
        self._lock = threading.Lock()
        self._state = ExportState.IDLE
        self._last_error: Optional[ExportFailure] = None

    @property
    def state(self) -> ExportState:
        return self._state

    @property
    def is_exporting(self) -> bool:
        return self._state is ExportState.EXPORTING

    @property
    def last_error(self) -> Optional[ExportFailure]:
        """Failure of the most recent export, None after a success."""
        return self._last_error

    def file_name(self, kind: ExportKind, today: date) -> str:
        """`<prefix>_<Kind>_<YYYY-MM-DD>.csv`"""
        return f"{self._file_prefix}_{kind.file_label}_{format_date(today)}.csv"

    # =========================================================================
    # PUBLIC OPERATIONS
    # =========================================================================

    def export(self, kind: ExportKind, sources: ExportSources) -> ExportResult:
        """
        Serialize the records of `kind` into one document.

        Returns:
            ExportResult with the document, or a failure of kind
            NO_DATA_AVAILABLE, DATA_PROCESSING_FAILED or EXPORT_IN_PROGRESS
        """
        return self._run(kind, lambda: ExportResult.ok(self._render(kind, sources)))

    def export_to_sink(
        self,
        kind: ExportKind,
        sources: ExportSources,
        sink: ExportSink,
        today: date,
    ) -> ExportResult:
        """
        Serialize and write one document through `sink`.

        The pipeline stays EXPORTING until the sink returns. A sink
        failure is reported as FILE_CREATION_FAILED.
        """
        def render_and_write() -> ExportResult:
            document = self._render(kind, sources)
            file_name = self.file_name(kind, today)
            try:
                location = sink.write(file_name, document.content)
            except SinkError as exc:
                raise _ExportAborted(
                    ExportFailure.of(ExportErrorKind.FILE_CREATION_FAILED, str(exc))
                ) from exc
            return ExportResult.ok(document, location=location)

        return self._run(kind, render_and_write)

    # =========================================================================
    # STATE HANDLING
    # =========================================================================

    def _run(self, kind: ExportKind, step: Callable[[], ExportResult]) -> ExportResult:
        if not self._lock.acquire(blocking=False):
            logger.warning("export_rejected_busy", kind=kind.value)
            return ExportResult.fail(ExportFailure.of(ExportErrorKind.EXPORT_IN_PROGRESS))

        try:
            self._state = ExportState.EXPORTING
            self._last_error = None
            logger.info("export_started", kind=kind.value)

            try:
                result = step()
            except _ExportAborted as exc:
                self._last_error = exc.failure
                logger.warning(
                    "export_failed",
                    kind=kind.value,
                    error_kind=exc.failure.kind.value,
                    message=exc.failure.message,
                )
                return ExportResult.fail(exc.failure)

            logger.info(
                "export_completed",
                kind=kind.value,
                row_count=result.document.row_count,
                location=result.location,
            )
            return result
        finally:
            self._state = ExportState.IDLE
            self._lock.release()

    # =========================================================================
    # RENDERING
    # =========================================================================

    def _render(self, kind: ExportKind, sources: ExportSources) -> ExportDocument:
        if kind is ExportKind.ALL:
            return self._render_all(sources)

        records = self._records(kind, sources)
        if not records:
            raise _ExportAborted(ExportFailure.of(
                ExportErrorKind.NO_DATA_AVAILABLE,
                f"no {kind.value} to export",
            ))
        content = self._render_section(kind, sources)
        return ExportDocument(kind=kind, content=content, row_count=len(records))

    def _render_all(self, sources: ExportSources) -> ExportDocument:
        if not any(self._records(section, sources) for section in _SECTION_ORDER):
            raise _ExportAborted(ExportFailure.of(
                ExportErrorKind.NO_DATA_AVAILABLE,
                "no transactions, budgets or loans to export",
            ))

        parts = []
        for section in _SECTION_ORDER:
            parts.append(SECTION_TITLES[section] + "\n" + self._render_section(section, sources))
        row_count = sum(len(self._records(section, sources)) for section in _SECTION_ORDER)
        return ExportDocument(kind=ExportKind.ALL, content="\n".join(parts), row_count=row_count)

    @staticmethod
    def _records(kind: ExportKind, sources: ExportSources) -> Sequence:
        if kind is ExportKind.TRANSACTIONS:
            return sources.transactions
        if kind is ExportKind.BUDGETS:
            return sources.budgets
        return sources.loans

    def _render_section(self, kind: ExportKind, sources: ExportSources) -> str:
        """Header plus one row per record; any bad record fails the section."""
        if kind is ExportKind.TRANSACTIONS:
            header, make_row = TRANSACTION_HEADER, transaction_row
        elif kind is ExportKind.BUDGETS:
            header, make_row = BUDGET_HEADER, budget_row
        else:
            header = LOAN_HEADER

            def make_row(loan: Loan) -> tuple[str, ...]:
                return loan_row(loan, self._status_engine, sources.as_of)

        lines = [format_row(header)]
        for index, record in enumerate(self._records(kind, sources)):
            try:
                lines.append(format_row(make_row(record)))
            except (
                RecordSerializationError,
                ArithmeticError,
                AttributeError,
                TypeError,
                ValueError,
            ) as exc:
                raise _ExportAborted(ExportFailure.of(
                    ExportErrorKind.DATA_PROCESSING_FAILED,
                    f"{kind.value} record {index}: {exc}",
                )) from exc
        return "".join(lines)
