"""Export package: delimited text codec, pipeline and sinks."""

from finance_engine.export.csv_format import (
    escape_field,
    format_amount,
    format_date,
    format_row,
)
from finance_engine.export.pipeline import (
    BUDGET_HEADER,
    LOAN_HEADER,
    TRANSACTION_HEADER,
    ExportPipeline,
    ExportState,
)
from finance_engine.export.sinks import DirectorySink, ExportSink

__all__ = [
    "BUDGET_HEADER",
    "DirectorySink",
    "ExportPipeline",
    "ExportSink",
    "ExportState",
    "LOAN_HEADER",
    "TRANSACTION_HEADER",
    "escape_field",
    "format_amount",
    "format_date",
    "format_row",
]
