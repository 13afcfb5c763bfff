"""
Time-series skill: month buckets and the row-index fallback.
"""

from __future__ import annotations

from typing import Dict, Optional

from core.models import Dataset, Series
from core.utils import month_key, number_or_zero, parse_date

INDEX_SERIES_LIMIT = 200


def aggregate_by_month(rows: Dataset, date_column: str, value_column: str) -> Series:
    """
    Sum `value_column` per calendar month of `date_column`.

    Rows whose date does not parse are dropped without a diagnostic; values
    that do not parse count as 0. Buckets come back in chronological order.
    """
    buckets: Dict[str, float] = {}
    for row in rows:
        when = parse_date(row.get(date_column))
        if when is None:
            continue
        key = month_key(when)
        buckets[key] = buckets.get(key, 0.0) + number_or_zero(row.get(value_column))

    keys = sorted(buckets)
    return Series(labels=keys, values=[buckets[k] for k in keys])


def index_series(
    rows: Dataset,
    value_column: Optional[str],
    limit: int = INDEX_SERIES_LIMIT,
) -> Series:
    """Plot the value column against the 1-based row index (first `limit` rows)."""
    head = rows[:limit]
    labels = [str(i + 1) for i in range(len(head))]
    if value_column is None:
        values = [0.0] * len(head)
    else:
        values = [number_or_zero(row.get(value_column)) for row in head]
    return Series(labels=labels, values=values)
