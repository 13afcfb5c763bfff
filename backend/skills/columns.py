"""
Column classification skill: tags every column as date, numeric or string.

Works on a bounded prefix of the dataset so the result only depends on the
first SAMPLE_ROWS rows.
"""

from __future__ import annotations

from typing import List

from core.models import ColumnClassification, ColumnKind, ColumnProfile, Dataset
from core.utils import is_blank, parse_date, parse_number

SAMPLE_ROWS = 30
MIN_SHARE = 0.3


# ---------------------------------------------------------------------------
# Cell & column decisions
# ---------------------------------------------------------------------------

def classify_cell(value) -> ColumnKind:
    """Date wins over numeric, numeric over string."""
    if parse_date(value) is not None:
        return ColumnKind.date
    if parse_number(value) is not None:
        return ColumnKind.numeric
    return ColumnKind.string


def _column_kind(sample: Dataset, column: str) -> ColumnKind:
    counts = {ColumnKind.date: 0, ColumnKind.numeric: 0, ColumnKind.string: 0}
    for row in sample:
        value = row.get(column)
        if is_blank(value):
            continue
        counts[classify_cell(value)] += 1

    threshold = max(1, MIN_SHARE * len(sample))
    if counts[ColumnKind.date] >= threshold:
        return ColumnKind.date
    if counts[ColumnKind.numeric] >= threshold:
        return ColumnKind.numeric
    return ColumnKind.string


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def classify_columns(rows: Dataset) -> ColumnClassification:
    """
    Split the working columns into date / numeric / string lists.

    The working column set is the key set of the first row; keys that only
    appear in later rows are ignored.
    """
    if not rows:
        return ColumnClassification()

    sample = rows[: min(len(rows), SAMPLE_ROWS)]
    columns = list(sample[0].keys())

    result = ColumnClassification(all_columns=columns)
    for column in columns:
        kind = _column_kind(sample, column)
        if kind == ColumnKind.date:
            result.date_columns.append(column)
        elif kind == ColumnKind.numeric:
            result.numeric_columns.append(column)
        else:
            result.string_columns.append(column)
    return result


def column_profiles(rows: Dataset) -> List[ColumnProfile]:
    return classify_columns(rows).profiles()
