"""
Tolerant coercion of raw table cells.

Rows come back from the store the way a spreadsheet hands them out: numbers
may be ints, floats or strings, booleans may be real booleans or the strings
"TRUE"/"true", and an untouched cell is an empty string. These helpers turn
that into typed values and back.
"""
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

TRUTHY_STRINGS = {"TRUE", "true"}


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def cell_at(row: list, index: int) -> Any:
    """Read a 0-based cell, treating short rows as padded with empty cells."""
    return row[index] if index < len(row) else ""


def to_text(value: Any) -> str:
    return "" if value is None else str(value)


def to_bool(value: Any, default: bool = False) -> bool:
    # only an untouched cell takes the default; whitespace is a value
    if value is None or value == "":
        return default
    return value is True or value in TRUTHY_STRINGS


def to_decimal(value: Any) -> Decimal:
    if is_blank(value):
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Not a number: {value!r}")


def to_int(value: Any) -> int:
    return int(to_decimal(value))


def to_datetime(value: Any) -> datetime | None:
    if is_blank(value):
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).strip())


def to_cell(value: Any) -> Any:
    """Convert a Python value into something the store can persist as-is."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if value is None:
        return ""
    return value
