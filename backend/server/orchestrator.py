"""
Visualization orchestrator: turns the stored dataset into display artifacts.

One call = one update cycle: classify, resolve columns, run the aggregation
skills, and return a fresh VisualizationState. Nothing is kept between calls.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.models import (
    BarArtifact,
    ColumnClassification,
    Dataset,
    LineArtifact,
    LineKind,
    ReportSummary,
    Series,
    TablePreview,
    VisualizationState,
)
from core.utils import cell_text
from skills.categories import placeholder_categories, top_categories
from skills.columns import classify_columns
from skills.kpi import format_kpis, summarize_kpis
from skills.selection import column_options, select_columns
from skills.timeseries import aggregate_by_month, index_series

logger = logging.getLogger("uvicorn.error")

DEFAULT_TABLE_ROWS = 25


# ---------------------------------------------------------------------------
# Table & report helpers
# ---------------------------------------------------------------------------

def _search_text(value) -> str:
    # null cells read as "null", so searching "null" finds them
    return "null" if value is None else cell_text(value)


def filter_rows(rows: Dataset, query: Optional[str]) -> Dataset:
    """Rows where any cell contains `query` (case-insensitive)."""
    q = (query or "").strip().lower()
    if not q:
        return rows
    return [
        r for r in rows
        if any(q in _search_text(v).lower() for v in r.values())
    ]


def preview_table(rows: Dataset, max_rows: int = DEFAULT_TABLE_ROWS) -> TablePreview:
    """First `max_rows` rows projected onto the first row's columns."""
    if not rows:
        return TablePreview()
    columns = list(rows[0].keys())
    body = [[cell_text(r.get(c)) for c in columns] for r in rows[:max_rows]]
    return TablePreview(columns=columns, rows=body, total_rows=len(rows))


def _names(cols) -> str:
    return ", ".join(cols) or "None"


def build_report_summary(rows: Dataset, classification: ColumnClassification) -> ReportSummary:
    if not rows:
        return ReportSummary()
    c = classification
    text = "\n".join([
        f"Rows: {len(rows)}",
        f"Columns: {len(c.all_columns)} ({', '.join(c.all_columns)})",
        f"Detected date columns: {_names(c.date_columns)}",
        f"Detected numeric columns: {_names(c.numeric_columns)}",
        f"Detected string columns: {_names(c.string_columns)}",
    ])
    return ReportSummary(
        row_count=len(rows),
        columns=list(c.all_columns),
        date_columns=list(c.date_columns),
        numeric_columns=list(c.numeric_columns),
        string_columns=list(c.string_columns),
        text=text,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_visuals(
    rows: Optional[Dataset],
    *,
    date_column: Optional[str] = None,
    value_column: Optional[str] = None,
    category_column: Optional[str] = None,
    table_rows: int = DEFAULT_TABLE_ROWS,
) -> VisualizationState:
    """
    Build every display artifact for the dataset.

    An absent dataset is treated as empty and yields empty series. Otherwise
    the line chart is a month series when both a date and a value column
    resolve, and the row-index series when they do not; the bar chart falls
    back to a single "No category" bucket.
    """
    rows = rows or []
    classification = classify_columns(rows)
    selection = select_columns(
        rows,
        classification,
        date_column=date_column,
        value_column=value_column,
        category_column=category_column,
    )
    kpis = summarize_kpis(rows, selection.value_column)

    line = LineArtifact(kind=LineKind.index, label="Values", series=Series())
    bar = BarArtifact(series=Series())
    if rows:
        if selection.date_column and selection.value_column:
            line = LineArtifact(
                kind=LineKind.month,
                label=selection.value_column,
                series=aggregate_by_month(rows, selection.date_column, selection.value_column),
            )
        else:
            line = LineArtifact(
                kind=LineKind.index,
                label=selection.value_column or "Values",
                series=index_series(rows, selection.value_column),
            )

        if selection.category_column:
            series = top_categories(rows, selection.category_column)
        else:
            series = placeholder_categories()
        bar = BarArtifact(series=series)

    logger.info(
        "Visuals: rows=%d date=%s value=%s category=%s",
        len(rows), selection.date_column, selection.value_column, selection.category_column,
    )

    return VisualizationState(
        classification=classification,
        selection=selection,
        options=column_options(classification),
        kpis=kpis,
        kpi_display=format_kpis(kpis, selection.date_column),
        line=line,
        bar=bar,
        table=preview_table(rows, table_rows),
        report=build_report_summary(rows, classification),
    )
