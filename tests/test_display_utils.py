import pytest

from blockchart.display_utils import center_line, format_label, stringify


@pytest.mark.parametrize("value, expected", [
    (3, "3"),
    (3.0, "3"),
    (-1.0, "-1"),
    (0.5, "0.5"),
    ("x", "x"),
])
def test_stringify(value, expected):
    assert stringify(value) == expected


@pytest.mark.parametrize("value, expected", [
    (0.0, "0"),
    (12, "12"),
    (1234, "1.23k"),
    (1500000, "1.5M"),
    (-2.5, "-2.5"),
    (-1234, "-1.2k"),
    (2.5e12, "2.5T"),
])
def test_format_label(value, expected):
    assert format_label(value) == expected


def test_center_line():
    assert center_line("ab", 5) == " ab  "
    assert center_line("abcdef", 3) == "abcdef"
