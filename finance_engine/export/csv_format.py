"""
Delimited Text Codec

Rows are comma-delimited and end with a single newline. A field is
wrapped in quotes iff it contains a comma, a quote, a line feed or a
carriage return; inner quotes are doubled. Everything else is emitted
as-is, so plain fields stay readable and the output parses back with
any standard CSV reader.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Union

from finance_engine.exceptions import RecordSerializationError
from finance_engine.utils.numbers import quantize_money

DELIMITER = ","
QUOTE = '"'
LINE_END = "\n"

_SPECIAL = (DELIMITER, QUOTE, "\n", "\r")


def escape_field(value: str) -> str:
    """Quote `value` only when it contains a delimiter, quote or line break."""
    if not isinstance(value, str):
        raise RecordSerializationError(f"Expected text, got {type(value).__name__}")
    if any(char in value for char in _SPECIAL):
        return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE
    return value


def format_row(fields: Iterable[str]) -> str:
    """Escape and join one row, newline included."""
    return DELIMITER.join(escape_field(field) for field in fields) + LINE_END


def format_amount(amount: Decimal) -> str:
    """Two decimals, half-up; `-87.455` -> `-87.46`."""
    try:
        if not amount.is_finite():
            raise RecordSerializationError(f"Amount is not finite: {amount}")
        return str(quantize_money(amount))
    except (AttributeError, InvalidOperation) as exc:
        raise RecordSerializationError(f"Invalid amount {amount!r}: {exc}") from exc


def format_date(moment: Optional[Union[datetime, date]]) -> str:
    """`YYYY-MM-DD` regardless of locale; missing dates become empty fields."""
    if moment is None:
        return ""
    if isinstance(moment, datetime):
        return moment.date().isoformat()
    if isinstance(moment, date):
        return moment.isoformat()
    raise RecordSerializationError(f"Invalid date {moment!r}")
