import re
import unicodedata


ANSI_SGR_REGEX = re.compile(r'\x1b\[\d*(?:;\d+)*m')

# ZWSP/ZWNJ/ZWJ and directional marks, word joiner and invisible operators,
# variation selectors, BOM
ZERO_WIDTH_REGEX = re.compile(r'[\u200b-\u200f\u2060-\u2064\ufe00-\ufe0f\ufeff]')

ZERO_WIDTH_CATEGORIES = frozenset(('Mn', 'Me'))


def strip_ansi(text: str) -> str:
    return ANSI_SGR_REGEX.sub('', text)


def get_text_width(text: str) -> int:
    """
    Number of terminal columns `text` is expected to occupy.

    Color/style escapes and zero-width or combining codepoints count as 0,
    everything else counts as 1. Wide (CJK, emoji) characters are not
    special-cased, so this is an approximation; pass a better measurer as
    `text_width` wherever one is accepted.
    """
    text = ZERO_WIDTH_REGEX.sub('', strip_ansi(text))
    return sum(
        1
        for ch in text
        if unicodedata.category(ch) not in ZERO_WIDTH_CATEGORIES
    )
