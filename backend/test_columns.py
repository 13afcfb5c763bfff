"""
Tests for column classification and the column-selection policy.
"""

import pytest

from core.models import ColumnKind
from core.utils import parse_date, parse_number
from skills.columns import classify_cell, classify_columns, column_profiles
from skills.selection import column_options, select_columns


class TestCellParsing:
    """Tests for the per-cell date / number rules."""

    @pytest.mark.parametrize("value,expected", [
        ("10", 10.0),
        (" 2.5 ", 2.5),
        ("-3e2", -300.0),
        (7, 7.0),
        (True, 1.0),
        ("", None),
        ("x", None),
        ("inf", None),
        ("1,000", None),
        (None, None),
        (float("nan"), None),
    ])
    def test_parse_number(self, value, expected):
        assert parse_number(value) == expected

    def test_iso_dates_parse(self):
        parsed = parse_date("2023-01-15")
        assert (parsed.year, parsed.month, parsed.day) == (2023, 1, 15)

    def test_four_digit_year_is_a_date(self):
        parsed = parse_date("2021")
        assert (parsed.year, parsed.month) == (2021, 1)

    @pytest.mark.parametrize("value", ["10", "3.5", "alice", "", None, 2021, 45000.0])
    def test_non_dates(self, value):
        assert parse_date(value) is None

    @pytest.mark.parametrize("value", ["09:15", "14:30", "10am", "3rd", "12-05", "Jan 5", "March 2023"])
    def test_partial_dates_are_not_dates(self, value):
        """Text missing its year, month or day is not completed from the clock."""
        assert parse_date(value) is None

    def test_named_month_with_full_date(self):
        parsed = parse_date("5 Jan 2023")
        assert (parsed.year, parsed.month, parsed.day) == (2023, 1, 5)

    def test_cell_priority(self):
        """A year is both numeric-looking and a date; date wins."""
        assert classify_cell("2021") == ColumnKind.date
        assert classify_cell("42") == ColumnKind.numeric
        assert classify_cell("north") == ColumnKind.string


class TestClassifyColumns:
    """Tests for column-level classification over the sample."""

    @pytest.fixture
    def rows(self):
        return [
            {"date": "2023-01-15", "region": "north", "amount": "10"},
            {"date": "2023-01-20", "region": "south", "amount": "5"},
            {"date": "2023-02-01", "region": "north", "amount": "x"},
        ]

    def test_basic_split(self, rows):
        result = classify_columns(rows)
        assert result.date_columns == ["date"]
        assert result.numeric_columns == ["amount"]
        assert result.string_columns == ["region"]
        assert result.all_columns == ["date", "region", "amount"]

    def test_empty_dataset(self):
        result = classify_columns([])
        assert result.date_columns == []
        assert result.numeric_columns == []
        assert result.string_columns == []
        assert result.all_columns == []

    def test_idempotent(self, rows):
        assert classify_columns(rows) == classify_columns(rows)

    def test_year_column_prefers_date(self):
        """Numeric-looking year strings still land in the date list."""
        rows = [{"year": str(2000 + i)} for i in range(10)]
        result = classify_columns(rows)
        assert result.date_columns == ["year"]
        assert result.numeric_columns == []

    def test_threshold_counts_non_empty_cells(self):
        """3 numbers out of 10 rows meets the 30% bar; 2 does not."""
        three = [{"v": "1"}, {"v": "2"}, {"v": "3"}] + [{"v": ""}] * 7
        two = [{"v": "1"}, {"v": "2"}] + [{"v": None}] * 8
        assert classify_columns(three).numeric_columns == ["v"]
        assert classify_columns(two).string_columns == ["v"]

    def test_sparse_column_still_qualifies(self):
        rows = [{"v": "5"}, {"v": None}, {"v": ""}]
        assert classify_columns(rows).numeric_columns == ["v"]

    def test_all_blank_column_is_string(self):
        rows = [{"v": None}, {"v": ""}]
        assert classify_columns(rows).string_columns == ["v"]

    def test_date_checked_before_numeric(self):
        rows = (
            [{"v": "2023-05-01"}] * 3
            + [{"v": "12"}] * 4
            + [{"v": "other"}] * 3
        )
        assert classify_columns(rows).date_columns == ["v"]

    def test_rows_beyond_sample_are_ignored(self):
        rows = [{"v": "text"}] * 30 + [{"v": "1"}] * 100
        assert classify_columns(rows).string_columns == ["v"]

    def test_known_limitation_first_row_keys_only(self):
        """Keys introduced after the first row are not classified."""
        rows = [{"a": "1"}, {"a": "2", "b": "late"}]
        result = classify_columns(rows)
        assert result.all_columns == ["a"]
        assert "b" not in result.string_columns

    def test_time_only_column_is_not_date(self):
        rows = [{"t": "09:15", "v": "1"}, {"t": "14:30", "v": "2"}]
        assert classify_columns(rows).date_columns == []

    def test_column_profiles(self, rows):
        profiles = column_profiles(rows)
        assert [(p.name, p.kind) for p in profiles] == [
            ("date", ColumnKind.date),
            ("region", ColumnKind.string),
            ("amount", ColumnKind.numeric),
        ]


class TestColumnSelection:
    """Tests for the shared default-column policy."""

    def test_defaults_from_classification(self):
        rows = [{"d": "2023-01-01", "name": "a", "qty": "3"}]
        sel = select_columns(rows, classify_columns(rows))
        assert sel.date_column == "d"
        assert sel.value_column == "qty"
        assert sel.category_column == "name"

    def test_user_choice_wins(self):
        rows = [{"d": "2023-01-01", "name": "a", "qty": "3", "other": "b"}]
        sel = select_columns(rows, classify_columns(rows), category_column="other")
        assert sel.category_column == "other"

    def test_unknown_user_choice_falls_back(self):
        rows = [{"d": "2023-01-01", "qty": "3"}]
        sel = select_columns(rows, classify_columns(rows), value_column="missing")
        assert sel.value_column == "qty"

    def test_value_falls_back_to_native_number(self):
        """With no numeric column, the first native number in row one is used."""
        rows = [{"when": "2023-01-01", "n": 2023}] + [{"when": "2023-02-01", "n": None}] * 9
        classification = classify_columns(rows)
        assert classification.numeric_columns == []
        sel = select_columns(rows, classification)
        assert sel.value_column == "n"

    def test_category_falls_back_to_text_cell(self):
        rows = [{"d": "2023-01-01", "n": "4"}]
        sel = select_columns(rows, classify_columns(rows))
        assert sel.category_column == "d"

    def test_nothing_to_select(self):
        sel = select_columns([], classify_columns([]))
        assert sel.date_column is None
        assert sel.value_column is None
        assert sel.category_column is None

    def test_options_fall_back_to_all_columns(self):
        rows = [{"d": "2023-01-01", "name": "a"}]
        options = column_options(classify_columns(rows))
        assert options.date == ["d"]
        assert options.value == ["d", "name"]
        assert options.category == ["name"]
