import pytest

from blockchart.text_width import strip_ansi
from blockchart.wrap_text import wrap_colored_text, wrap_text


BG = '\033[40m'
WHITE = '\033[37m'
RED = '\033[31m'
NORMAL = '\033[0m'


def test_wrap_breaks_at_width():
    wrapped = wrap_text("a b c", 3, 'left')
    assert wrapped.lines == ["a b", "c  "]
    assert wrapped.max_width == 3


def test_oversized_word_stays_alone():
    wrapped = wrap_text("abcdef gh", 4)
    assert wrapped.lines == ["abcdef", "gh  "]
    assert wrapped.max_width == 6


def test_oversized_word_on_first_line_only():
    wrapped = wrap_text("ab cdefgh", 4)
    assert wrapped.lines == ["ab  ", "cdefgh"]


def test_newlines_always_break():
    assert wrap_text("a\n\nb", 2).lines == ["a ", "  ", "b "]


def test_empty_text():
    assert wrap_text("", 5) == ([], 0)


@pytest.mark.parametrize("align, expected", [
    ('left', "ab   "),
    ('right', "   ab"),
    ('center', " ab  "),
])
def test_alignment(align, expected):
    assert wrap_text("ab", 5, align).lines == [expected]


def test_margin_narrows_lines():
    wrapped = wrap_text("aa bb", 6, margin=2)
    assert wrapped.lines == ["aa    ", "bb    "]
    assert wrapped.max_width == 2


def test_separators_are_collapsed_at_line_start():
    assert wrap_text("   a", 3).lines == ["a  "]


def test_unicode_separators():
    assert wrap_text("a　b", 1).lines == ["a", "b"]
    assert wrap_text("a\tb", 3).lines == ["a b"]


def test_measures_with_text_width():
    wrapped = wrap_text("aa bb", 4, text_width=lambda s: 2 * len(s))
    assert wrapped.lines == ["aa", "bb"]
    assert wrapped.max_width == 4


def test_escapes_take_no_room():
    wrapped = wrap_text("\033[31mab\033[0m cd", 5)
    assert len(wrapped.lines) == 1
    assert strip_ansi(wrapped.lines[0]) == "ab cd"


@pytest.mark.parametrize("align", ['left', 'right', 'center'])
def test_rewrapping_is_stable(align):
    text = "the quick brown fox jumps over the lazy dog"
    first = wrap_text(text, 10, align)
    second = wrap_text('\n'.join(first.lines), 10, align)
    assert second == first


def test_colored_items_share_a_line():
    lines = wrap_colored_text([('abc', 'red'), ('de', None)], width=12)
    assert lines == [
        f"{BG}{WHITE} {RED}abc{WHITE}  {WHITE}de    {NORMAL}"
    ]


def test_colored_items_overflow_to_next_line():
    lines = wrap_colored_text(['aaaa', 'bbbb'], width=8)
    assert [strip_ansi(line) for line in lines] == [" aaaa   ", " bbbb   "]
    assert all(line.startswith(BG + WHITE) and line.endswith(NORMAL) for line in lines)


def test_wide_item_is_word_wrapped_in_its_color():
    lines = wrap_colored_text([('hello big world', 'red')], width=8)
    assert [strip_ansi(line) for line in lines] == [" hello  ", " big    ", " world  "]
    assert all(RED in line for line in lines)


def test_empty_items_are_skipped():
    lines = wrap_colored_text([('', 'red'), (None,), 'x'], width=4)
    assert [strip_ansi(line) for line in lines] == [" x  "]


def test_no_items():
    assert wrap_colored_text([], width=10) == []


def test_white_background_uses_black_text():
    lines = wrap_colored_text(['a'], width=3, background_color='white')
    assert lines == ['\033[47m\033[30m \033[30ma \033[0m']


def test_spacing_and_margin():
    lines = wrap_colored_text(['a', 'b'], width=8, margin=0, spacing=1)
    assert [strip_ansi(line) for line in lines] == ["a b     "]


def test_unknown_color():
    with pytest.raises(ValueError):
        wrap_colored_text([('a', 'purple')])


def test_unbreakable_word_is_cut_to_the_line():
    lines = wrap_colored_text([('abcdefghij', 'red')], width=6)
    assert [strip_ansi(line) for line in lines] == [" abcd ", " efgh ", " ij   "]
    assert all(RED in line for line in lines)


def test_footnote_with_long_word_keeps_the_width():
    lines = wrap_colored_text(['[1] Supercalifragilisticexpialidocious'], width=20)
    assert [strip_ansi(line) for line in lines] == [
        " [1]                ",
        " Supercalifragilist ",
        " icexpialidocious   ",
    ]


def test_tiny_width_drops_the_margin():
    lines = wrap_colored_text(['ab'], width=1)
    assert [strip_ansi(line) for line in lines] == ["a", "b"]
