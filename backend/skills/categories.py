"""
Category frequency skill: ranks the most common values of a column.
"""

from __future__ import annotations

import numbers
from typing import Any, Dict

from core.models import Dataset, Series
from core.utils import cell_text

TOP_CATEGORIES = 12
MISSING_LABEL = "—"
NO_CATEGORY_LABEL = "No category"


def _category_key(value: Any) -> Any:
    if value is None:
        return MISSING_LABEL
    if isinstance(value, str):
        return value
    # 1 and 1.0 are one category, True is not; Python hashes all three alike
    if isinstance(value, bool):
        return ("bool", value)
    if isinstance(value, numbers.Real):
        return ("number", value)
    return (type(value).__name__, value)


def top_categories(rows: Dataset, category_column: str, limit: int = TOP_CATEGORIES) -> Series:
    """
    Count rows per distinct value and keep the `limit` most frequent.

    Missing values are counted under an em-dash label. Ties keep the order in
    which values were first seen.
    """
    counts: Dict[Any, int] = {}
    labels: Dict[Any, str] = {}
    for row in rows:
        value = row.get(category_column)
        key = _category_key(value)
        if key not in counts:
            counts[key] = 0
            labels[key] = MISSING_LABEL if value is None else cell_text(value)
        counts[key] += 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]
    return Series(
        labels=[labels[key] for key, _ in ranked],
        values=[float(n) for _, n in ranked],
    )


def placeholder_categories() -> Series:
    """Single zero bucket shown when no category column is available."""
    return Series(labels=[NO_CATEGORY_LABEL], values=[0.0])
