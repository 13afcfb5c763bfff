"""
KPI skill: row count, sum and average of one numeric column.
"""

from __future__ import annotations

from typing import Optional

from core.models import NOT_APPLICABLE, Dataset, KpiDisplay, KpiSummary
from core.utils import number_or_zero

NA_TEXT = "N/A"
NO_DATE_TEXT = "No date"


def summarize_kpis(rows: Dataset, numeric_column: Optional[str]) -> KpiSummary:
    """
    Count every row; sum/average the numeric column with zero-on-failure.

    Sum and average are "not applicable" (never 0) when there is no numeric
    column or no rows to read it from.
    """
    count = len(rows)
    if not numeric_column or count == 0:
        return KpiSummary(count=count)

    total = sum(number_or_zero(row.get(numeric_column)) for row in rows)
    average = total / count if count else 0.0
    return KpiSummary(count=count, sum=total, average=average)


def _format_sum(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def format_kpis(summary: KpiSummary, date_column: Optional[str]) -> KpiDisplay:
    """Presentation strings: grouped thousands for the sum, 2 decimals for the average."""
    if summary.sum == NOT_APPLICABLE:
        sum_text = NA_TEXT
    else:
        sum_text = _format_sum(summary.sum)
    if summary.average == NOT_APPLICABLE:
        avg_text = NA_TEXT
    else:
        avg_text = f"{summary.average:.2f}"
    return KpiDisplay(
        count=str(summary.count),
        sum=sum_text,
        average=avg_text,
        date=date_column or NO_DATE_TEXT,
    )
