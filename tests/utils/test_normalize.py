import pytest

from sheetmap.utils.normalize import cell_at, to_float, to_text

@pytest.mark.parametrize("cell,expected", [
    ("40.1", 40.1),
    (" -74.2 ", -74.2),
    ("+3", 3.0),
    ("10", 10.0),
    (".5", 0.5),
    ("1e3", 1000.0),
])
def test_to_float_parses_decimal_forms(cell, expected):
    assert to_float(cell) == expected

@pytest.mark.parametrize("cell", ["N/A", "", "   ", None, "not-a-number", "12abc", "nan", "inf", "-Infinity"])
def test_to_float_failures_are_exactly_zero(cell):
    assert to_float(cell) == 0
    assert to_float(cell) == 0.0

def test_to_text_defaults_for_absent_and_empty():
    assert to_text(None, "No") == "No"
    assert to_text("", "No") == "No"
    assert to_text("Yes", "No") == "Yes"
    assert to_text(" ", "No") == " "

def test_cell_at_handles_unmapped_and_short_rows():
    row = ["a", "b"]
    assert cell_at(row, 0) == "a"
    assert cell_at(row, 5) is None
    assert cell_at(row, None) is None
    assert cell_at(row, -1) is None

@pytest.mark.parametrize("cell", ["4_0.1", "1_000", "١٢", "５", "1.2.3", "e5", "--1"])
def test_to_float_rejects_forms_outside_plain_decimals(cell):
    assert to_float(cell) == 0.0

def test_to_float_trailing_dot_and_signed_exponent():
    assert to_float("5.") == 5.0
    assert to_float("-2.5E-1") == -0.25
