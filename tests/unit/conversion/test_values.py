"""Tests for cell value classification and rendering."""

from datetime import date, datetime, time, timedelta
from decimal import Decimal

import pytest

from formatconverter.conversion.values import NULL, CellKind, CellValue


class TestClassification:
    """Tests for CellValue.of."""

    @pytest.mark.parametrize(
        "raw,kind",
        [
            (None, CellKind.NULL),
            (True, CellKind.BOOLEAN),
            (0, CellKind.NUMBER),
            (1.5, CellKind.NUMBER),
            (Decimal("2.50"), CellKind.NUMBER),
            (datetime(2024, 1, 2, 3, 4, 5), CellKind.DATETIME),
            (date(2024, 1, 2), CellKind.DATETIME),
            (time(12, 30), CellKind.DATETIME),
            (timedelta(hours=1), CellKind.DURATION),
            ("hello", CellKind.TEXT),
        ],
    )
    def test_native_kinds(self, raw, kind):
        assert CellValue.of(raw).kind is kind

    def test_bool_is_not_a_number(self):
        """bool is an int subclass but must stay BOOLEAN."""
        assert CellValue.of(False) == CellValue(CellKind.BOOLEAN, False)

    def test_nested_values_become_compact_json(self):
        cell = CellValue.of({"k": [1, 2]})

        assert cell.kind is CellKind.TEXT
        assert cell.value == '{"k":[1,2]}'

    def test_bytes_become_base64(self):
        assert CellValue.of(b"\x00\x01").value == "AAE="

    def test_existing_cell_is_returned(self):
        cell = CellValue.text("x")
        assert CellValue.of(cell) is cell

    def test_none_is_shared_null(self):
        assert CellValue.of(None) is NULL
        assert NULL.is_null


class TestTextRendering:
    """Tests for CellValue.to_text."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, ""),
            ("abc", "abc"),
            (True, "true"),
            (False, "false"),
            (42, "42"),
            (1.0, "1"),
            (2.5, "2.5"),
            (Decimal("3.10"), "3.10"),
            (datetime(2024, 5, 6, 7, 8, 9), "2024-05-06T07:08:09"),
            (date(2024, 5, 6), "2024-05-06"),
        ],
    )
    def test_to_text(self, raw, expected):
        assert CellValue.of(raw).to_text() == expected

    @pytest.mark.parametrize(
        "delta,expected",
        [
            (timedelta(seconds=5), "0:00:05"),
            (timedelta(days=2, hours=1, minutes=2, seconds=3), "49:02:03"),
            (timedelta(seconds=1, microseconds=500), "0:00:01.000500"),
            (timedelta(minutes=-90), "-1:30:00"),
        ],
    )
    def test_duration_format(self, delta, expected):
        assert CellValue.of(delta).to_text() == expected


class TestJSONRendering:
    """Tests for CellValue.to_json."""

    def test_scalars_stay_native(self):
        assert CellValue.of(None).to_json() is None
        assert CellValue.of(True).to_json() is True
        assert CellValue.of(7).to_json() == 7
        assert CellValue.of("x").to_json() == "x"

    def test_non_finite_numbers_become_null(self):
        assert CellValue.of(float("nan")).to_json() is None
        assert CellValue.of(float("inf")).to_json() is None
        assert CellValue.of(Decimal("NaN")).to_json() is None

    def test_decimal_becomes_json_number(self):
        assert CellValue.of(Decimal("4")).to_json() == 4
        assert CellValue.of(Decimal("4.25")).to_json() == 4.25

    def test_temporal_values_use_text_form(self):
        assert CellValue.of(date(2024, 1, 1)).to_json() == "2024-01-01"
        assert CellValue.of(timedelta(minutes=1)).to_json() == "0:01:00"


class TestExcelRendering:
    """Tests for CellValue.to_excel."""

    def test_null_is_empty_cell(self):
        assert NULL.to_excel() is None

    def test_values_are_text(self):
        assert CellValue.of(3.0).to_excel() == "3"
        assert CellValue.of(True).to_excel() == "true"
