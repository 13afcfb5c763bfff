"""
Core Pydantic models for the dashboard engine.

All domain types live here so every module shares the same vocabulary.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

# A row is a field-name -> cell mapping; a dataset is an ordered list of rows.
Row = Dict[str, Any]
Dataset = List[Row]

NOT_APPLICABLE = "not applicable"
NotApplicable = Literal["not applicable"]


# ---------------------------------------------------------------------------
# Column classification
# ---------------------------------------------------------------------------

class ColumnKind(str, Enum):
    date = "date"
    numeric = "numeric"
    string = "string"


class ColumnProfile(BaseModel):
    name: str
    kind: ColumnKind


class ColumnClassification(BaseModel):
    date_columns: List[str] = Field(default_factory=list)
    numeric_columns: List[str] = Field(default_factory=list)
    string_columns: List[str] = Field(default_factory=list)
    all_columns: List[str] = Field(default_factory=list)

    def profiles(self) -> List[ColumnProfile]:
        """One ColumnProfile per column, in working-column order."""
        kinds: Dict[str, ColumnKind] = {}
        for name in self.date_columns:
            kinds[name] = ColumnKind.date
        for name in self.numeric_columns:
            kinds[name] = ColumnKind.numeric
        for name in self.string_columns:
            kinds[name] = ColumnKind.string
        return [ColumnProfile(name=c, kind=kinds[c]) for c in self.all_columns]


class ColumnSelection(BaseModel):
    """Resolved column choices for one update cycle (None = unavailable)."""
    date_column: Optional[str] = None
    value_column: Optional[str] = None
    category_column: Optional[str] = None


class ColumnOptions(BaseModel):
    """Columns offered by each selector."""
    date: List[str] = Field(default_factory=list)
    value: List[str] = Field(default_factory=list)
    category: List[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Aggregation outputs
# ---------------------------------------------------------------------------

class Series(BaseModel):
    labels: List[str] = Field(default_factory=list)
    values: List[float] = Field(default_factory=list)


class LineKind(str, Enum):
    month = "month"
    index = "index"


class LineArtifact(BaseModel):
    kind: LineKind
    label: str
    series: Series


class BarArtifact(BaseModel):
    label: str = "Count"
    series: Series


class KpiSummary(BaseModel):
    count: int = Field(0, ge=0)
    sum: Union[float, NotApplicable] = NOT_APPLICABLE
    average: Union[float, NotApplicable] = NOT_APPLICABLE


class KpiDisplay(BaseModel):
    count: str
    sum: str
    average: str
    date: str


# ---------------------------------------------------------------------------
# Tables & reports
# ---------------------------------------------------------------------------

class TablePreview(BaseModel):
    columns: List[str] = Field(default_factory=list)
    rows: List[List[str]] = Field(default_factory=list)
    total_rows: int = 0


class ReportSummary(BaseModel):
    row_count: int = 0
    columns: List[str] = Field(default_factory=list)
    date_columns: List[str] = Field(default_factory=list)
    numeric_columns: List[str] = Field(default_factory=list)
    string_columns: List[str] = Field(default_factory=list)
    text: str = "No data uploaded."


class VisualizationState(BaseModel):
    """Everything the display needs for one update cycle; replaced wholesale."""
    classification: ColumnClassification
    selection: ColumnSelection
    options: ColumnOptions
    kpis: KpiSummary
    kpi_display: KpiDisplay
    line: LineArtifact
    bar: BarArtifact
    table: TablePreview
    report: ReportSummary
