"""
Shared cell-coercion helpers.

Pure functions, no I/O, no side effects. Every aggregation goes through
these so "what counts as a number / a date / empty" is decided in one place.
"""

from __future__ import annotations

import math
import numbers
import re
from datetime import date, datetime
from typing import Any, Optional

from dateutil.parser import ParserError, parse as parse_datetime


# ---------------------------------------------------------------------------
# Emptiness
# ---------------------------------------------------------------------------

def is_blank(value: Any) -> bool:
    """True for None, empty string and float NaN (pandas' missing marker)."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float):
        return math.isnan(value)
    return False


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_YEAR_RE = re.compile(r"[1-9]\d{3}")
_DEFAULT_A = datetime(2001, 1, 1)
_DEFAULT_B = datetime(2002, 2, 2)


def parse_number(value: Any) -> Optional[float]:
    """Parse a cell as a finite number; None when it is not one."""
    if value is None:
        return None
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, numbers.Real):
        num = float(value)
        return num if math.isfinite(num) else None
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not _NUMBER_RE.fullmatch(text):
        return None
    num = float(text)
    return num if math.isfinite(num) else None


def number_or_zero(value: Any) -> float:
    """
    Zero-on-failure coercion used by every sum.

    Two different situations collapse to 0 here: the cell is missing (None,
    empty) and the cell holds something that is not a number ("n/a", "x").
    Callers that need to tell them apart use parse_number / is_blank.
    """
    num = parse_number(value)
    return 0.0 if num is None else num


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse a cell as a calendar date using locale-default parsing.

    Only text (and native date objects) can be dates. Plain numeric text is a
    date only when it is a four-digit year. Other text must spell out its own
    year, month and day; nothing is filled in from the clock.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text or not any(ch.isdigit() for ch in text):
        return None
    if _NUMBER_RE.fullmatch(text):
        if _YEAR_RE.fullmatch(text):
            return datetime(int(text), 1, 1)
        return None

    # parse twice with different defaults: any field the text leaves out
    # shows up as a difference, so fragments like "09:15" or "3rd" are rejected
    try:
        first = parse_datetime(text, default=_DEFAULT_A)
        second = parse_datetime(text, default=_DEFAULT_B)
    except (ParserError, ValueError, OverflowError):
        return None
    if first.date() != second.date():
        return None
    return first


def month_key(value: datetime) -> str:
    """YYYY-MM bucket key; zero padding keeps string order chronological."""
    return f"{value.year:04d}-{value.month:02d}"


# ---------------------------------------------------------------------------
# Text rendering
# ---------------------------------------------------------------------------

def cell_text(value: Any) -> str:
    """Plain string form of a cell, as it appears in tables and exports."""
    if is_blank(value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)
