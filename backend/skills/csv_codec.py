"""
CSV export skill: encodes a dataset to comma-separated text.

Decoding lives in core.decode; the two sides must round-trip.
"""

from __future__ import annotations

from typing import Any

from core.models import Dataset
from core.utils import cell_text

_NEEDS_QUOTES = (",", '"', "\n")


def encode_field(value: Any) -> str:
    if value is None:
        return ""
    text = cell_text(value)
    if isinstance(value, str) and any(ch in text for ch in _NEEDS_QUOTES):
        return '"' + text.replace('"', '""') + '"'
    return text


def encode_csv(rows: Dataset) -> str:
    """
    Header from the first row's keys (unquoted), one line per row.

    Missing keys become empty fields, extra keys in later rows are dropped.
    No trailing newline; an empty dataset encodes to "".
    """
    if not rows:
        return ""
    columns = list(rows[0].keys())
    lines = [",".join(columns)]
    for row in rows:
        lines.append(",".join(encode_field(row.get(c)) for c in columns))
    return "\n".join(lines)
