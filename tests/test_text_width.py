import pytest

from blockchart.text_width import get_text_width, strip_ansi


@pytest.mark.parametrize("text, expected", [
    ("", 0),
    ("abc", 3),
    ("\033[31mabc\033[0m", 3),
    ("\033[38;5;208mx\033[39;49m", 1),
    ("e\u0301", 1),  # combining acute accent
    ("a\u200bb", 2),  # zero width space
    ("\ufeffhi", 2),
    ("\u2764\ufe0f", 1),  # variation selector
    ("Year 2001", 9),
])
def test_get_text_width(text, expected):
    assert get_text_width(text) == expected


def test_wide_characters_are_not_special_cased():
    assert get_text_width("\u65e5\u672c") == 2


def test_strip_ansi_keeps_text():
    assert strip_ansi("\033[40m\033[37m a \033[0m") == " a "
