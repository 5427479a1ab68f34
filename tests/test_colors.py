import pytest

from blockchart.colors import (
    COLOR_MAP,
    DEFAULT_COLOR_SEQUENCE,
    Color,
    default_color_cycle,
    lookup,
    resolve_text_color,
)


def test_every_color_has_an_entry():
    assert set(COLOR_MAP) == set(Color)
    assert len(COLOR_MAP) == 17


def test_lookup():
    assert lookup(Color.Red) == ('\033[31m', '\033[41m')
    assert lookup('bright_blue') == ('\033[94m', '\033[104m')
    assert lookup('default') == ('\033[39m', '\033[49m')


def test_lookup_unknown_color():
    with pytest.raises(ValueError):
        lookup('purple')


@pytest.mark.parametrize("background, text, expected", [
    ('white', None, Color.Black),
    ('default', None, Color.Default),
    ('black', None, Color.White),
    ('blue', None, Color.White),
    ('white', 'red', Color.Red),
])
def test_resolve_text_color(background, text, expected):
    assert resolve_text_color(background, text) == expected


def test_default_cycle_skips_background():
    assert default_color_cycle('black') == list(DEFAULT_COLOR_SEQUENCE[:-1])
    assert Color.Green not in default_color_cycle(Color.Green)
    assert default_color_cycle('gray') == list(DEFAULT_COLOR_SEQUENCE)
    assert default_color_cycle('default') == list(DEFAULT_COLOR_SEQUENCE)
