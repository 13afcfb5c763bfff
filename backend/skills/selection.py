"""
Column-selection policy shared by every chart and KPI.

One place decides which date / value / category column an update cycle uses,
so the line chart, bar chart and KPIs never disagree about fallbacks.
"""

from __future__ import annotations

import numbers
from typing import Callable, Optional

from core.models import ColumnClassification, ColumnOptions, ColumnSelection, Dataset


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_text(value) -> bool:
    return isinstance(value, str)


def _first_row_match(
    rows: Dataset,
    columns: list[str],
    predicate: Callable[[object], bool],
) -> Optional[str]:
    first = rows[0] if rows else {}
    for column in columns:
        if predicate(first.get(column)):
            return column
    return None


def _pick(requested: Optional[str], classification: ColumnClassification) -> Optional[str]:
    if requested and requested in classification.all_columns:
        return requested
    return None


def select_columns(
    rows: Dataset,
    classification: ColumnClassification,
    *,
    date_column: Optional[str] = None,
    value_column: Optional[str] = None,
    category_column: Optional[str] = None,
) -> ColumnSelection:
    """
    Resolve the columns for one update cycle.

    A user choice wins when it names a working column. Otherwise:
    date     -> first date column
    value    -> first numeric column, else first column whose first-row
                value is a native number
    category -> first string column, else first column whose first-row
                value is text
    """
    cols = classification.all_columns

    date_pick = _pick(date_column, classification)
    if date_pick is None and classification.date_columns:
        date_pick = classification.date_columns[0]

    value_pick = _pick(value_column, classification)
    if value_pick is None:
        if classification.numeric_columns:
            value_pick = classification.numeric_columns[0]
        else:
            value_pick = _first_row_match(rows, cols, _is_number)

    category_pick = _pick(category_column, classification)
    if category_pick is None:
        if classification.string_columns:
            category_pick = classification.string_columns[0]
        else:
            category_pick = _first_row_match(rows, cols, _is_text)

    return ColumnSelection(
        date_column=date_pick,
        value_column=value_pick,
        category_column=category_pick,
    )


def column_options(classification: ColumnClassification) -> ColumnOptions:
    """Choices offered by the three selectors."""
    return ColumnOptions(
        date=list(classification.date_columns),
        value=list(classification.numeric_columns or classification.all_columns),
        category=list(classification.string_columns or classification.all_columns),
    )
