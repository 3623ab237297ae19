"""
Finance Engine Facade

Ties the components together and wires them from settings:

    raw records -> categories / loan status -> aggregation
                -> projection -> export

DESIGN DECISION: The facade holds no financial logic of its own. Every
method delegates to a component; it only decides which configured
values (starting balance, grace period, export prefix and directory)
each call receives. Hosts that need a different wiring can build the
components directly.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional

import structlog

from finance_engine.aggregation import PeriodAggregator, apply_spending, budget_overview
from finance_engine.categories import CategoryResolver
from finance_engine.config import EngineSettings, ExportSettings, LoggingSettings, get_settings
from finance_engine.export import DirectorySink, ExportPipeline, ExportSink
from finance_engine.loans import LoanStatusEngine
from finance_engine.models import (
    Budget,
    BudgetOverview,
    ExportErrorKind,
    ExportFailure,
    ExportKind,
    ExportResult,
    ExportSources,
    IncomeProjectionResult,
    Loan,
    LoanPaymentStatus,
    LoanSummary,
    MonthlyOverviewData,
    Transaction,
    WorkSchedule,
)
from finance_engine.observability import configure_from_settings
from finance_engine.projection import IncomeProjectionCalculator
from finance_engine.utils import ZERO, month_bounds
from finance_engine.validation import InputValidator

logger = structlog.get_logger(__name__)


class FinanceEngine:
    """
    Entry point for host applications.

    Usage:
        engine = create_engine()
        overview = engine.monthly_overview(transactions, now=datetime.now())
        result = engine.export(ExportKind.ALL, ExportSources(...))
    """

    def __init__(
        self,
        engine_settings: EngineSettings,
        export_settings: ExportSettings,
    ):
        self._engine_settings = engine_settings
        self._export_settings = export_settings

        self.resolver = CategoryResolver()
        self.loan_status = LoanStatusEngine(grace_period=engine_settings.grace_period)
        self.aggregator = PeriodAggregator(resolver=self.resolver)
        self.calculator = IncomeProjectionCalculator()
        self.validator = InputValidator(settings=engine_settings)
        self.exporter = ExportPipeline(
            status_engine=self.loan_status,
            file_prefix=export_settings.file_prefix,
        )

    @property
    def currency_code(self) -> str:
        """Handed to whatever formats amounts for display."""
        return self._engine_settings.currency_code

    # =========================================================================
    # ENRICHMENT
    # =========================================================================

    def enrich_transactions(self, transactions: Iterable[Transaction]) -> list[Transaction]:
        """Backfill missing display overrides from each resolved category."""
        return [self.resolver.backfill_display(t) for t in transactions]

    def refresh_loans(self, loans: Iterable[Loan], now: datetime) -> list[Loan]:
        return self.loan_status.refresh_all(loans, now)

    # =========================================================================
    # REPORTS
    # =========================================================================

    def monthly_overview(
        self,
        transactions: Iterable[Transaction],
        now: datetime,
    ) -> MonthlyOverviewData:
        """Current vs. previous month, normalised against the configured starting balance."""
        return self.aggregator.monthly_overview(
            transactions,
            now,
            starting_balance=self._engine_settings.starting_balance,
        )

    def loan_summary(self, loans: Iterable[Loan], now: datetime) -> LoanSummary:
        return self.loan_status.summarize(loans, now)

    def budget_overview(
        self,
        budgets: Iterable[Budget],
        transactions: Iterable[Transaction],
        now: datetime,
    ) -> tuple[list[Budget], BudgetOverview]:
        """Budgets with spending for the month containing `now`, plus their totals."""
        start, end = month_bounds(now)
        updated = apply_spending(budgets, transactions, start, end)
        return updated, budget_overview(updated)

    def project_income(
        self,
        transactions: Iterable[Transaction],
        loans: Iterable[Loan],
        now: datetime,
        work_schedule: WorkSchedule,
        hourly_rate: Decimal,
        projected_income: Optional[Decimal] = None,
    ) -> IncomeProjectionResult:
        """
        Project income against this month's expenses and the monthly
        payments of loans that are not paid off.
        """
        month = self.aggregator.aggregate_month(transactions, now)
        loan_payments = sum(
            (
                loan.monthly_payment
                for loan in loans
                if self.loan_status.derive_status(loan, now) is not LoanPaymentStatus.PAID
            ),
            ZERO,
        )
        breakdown = self.aggregator.expense_breakdown(month)

        validation = self.validator.validate_projection_inputs(hourly_rate, breakdown, loan_payments)
        if not validation.is_valid:
            raise ValueError("; ".join(issue.message for issue in validation.issues))

        return self.calculator.project(
            work_schedule,
            hourly_rate,
            breakdown,
            loan_payments,
            projected_income=projected_income,
        )

    # =========================================================================
    # EXPORT
    # =========================================================================

    def export(self, kind: ExportKind, sources: ExportSources) -> ExportResult:
        return self.exporter.export(kind, sources)

    def export_to_file(
        self,
        kind: ExportKind,
        sources: ExportSources,
        today: Optional[date] = None,
        sink: Optional[ExportSink] = None,
    ) -> ExportResult:
        """
        Export and write the document.

        Uses `sink` when given, otherwise a DirectorySink on the
        configured export directory.
        """
        if sink is None:
            if self._export_settings.directory is None:
                failure = ExportFailure.of(
                    ExportErrorKind.FILE_CREATION_FAILED,
                    "no export directory configured",
                )
                logger.warning("export_failed", kind=kind.value, error_kind=failure.kind.value)
                return ExportResult.fail(failure)
            sink = DirectorySink(self._export_settings.directory)

        return self.exporter.export_to_sink(kind, sources, sink, today or date.today())


def create_engine(
    engine_settings: Optional[EngineSettings] = None,
    export_settings: Optional[ExportSettings] = None,
    logging_settings: Optional[LoggingSettings] = None,
    configure_logs: bool = True,
) -> FinanceEngine:
    """
    Factory function to create a fully wired engine.

    Args:
        engine_settings: Computation settings; read from the environment if None
        export_settings: Export settings; read from the environment if None
        logging_settings: Logging settings; read from the environment if None
        configure_logs: Set to False when the host configures structlog itself

    Returns:
        FinanceEngine
    """
    settings = get_settings()
    if configure_logs:
        configure_from_settings(logging_settings or settings.logging)

    engine = FinanceEngine(
        engine_settings=engine_settings or settings.engine,
        export_settings=export_settings or settings.export,
    )
    logger.info(
        "finance_engine_created",
        currency_code=engine.currency_code,
        grace_period_days=engine.loan_status.grace_period.days,
    )
    return engine
