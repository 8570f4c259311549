"""Literal formatting for filter expressions and function parameters.

Strings are single-quoted with embedded quotes doubled, booleans and numbers
are written bare, ``None`` is ``null``.
"""

import datetime
import enum
import math
import uuid
from decimal import Decimal
from typing import Any


def escape_string(value: str) -> str:
    """Double every single quote (``O'Brien`` -> ``O''Brien``)."""
    return value.replace("'", "''")


def quote_string(value: str) -> str:
    """Escape and wrap in single quotes (``O'Brien`` -> ``'O''Brien'``)."""
    return f"'{escape_string(value)}'"


def format_literal(value: Any) -> str:
    """Render a Python value as a literal.

    Raises:
        TypeError: for values with no literal form (lists, dicts, arbitrary objects).
    """
    if value is None:
        return "null"
    # bool before int: True is an int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return format_literal(value.value)
    if isinstance(value, str):
        return quote_string(value)
    if isinstance(value, uuid.UUID):
        return quote_string(str(value))
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "INF" if value > 0 else "-INF"
        return repr(value)
    if isinstance(value, (int, Decimal)):
        return str(value)
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    raise TypeError(f"Cannot format {type(value).__name__} as a literal: {value!r}")
