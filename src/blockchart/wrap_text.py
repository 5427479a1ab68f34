import re
from typing import Callable
from typing import Iterator
from typing import List
from typing import Literal
from typing import NamedTuple
from typing import Optional
from typing import Sequence
from typing import TypeAlias
from typing import Tuple

from .colors import COLOR_MAP
from .colors import NORMAL
from .colors import Color
from .colors import resolve_text_color
from .text_width import get_text_width
from .options import WrapColoredTextOptions


Align: TypeAlias = Literal['left', 'right', 'center']
TextWidth: TypeAlias = Callable[[str], int]
ColoredItem: TypeAlias = Tuple[Optional[str], Optional[Color | str]] | Tuple[Optional[str]] | str

SPACE_CHARS = r' \t\r\v\u2000-\u200b\u205f\u3000'
WORD_REGEX = re.compile(rf'[^{SPACE_CHARS}]+')
SPACE_REGEX = re.compile(rf'[\n{SPACE_CHARS}]+')


class WrappedText(NamedTuple):
    lines: List[str]
    # widest line content, can exceed the requested width if a word didn't fit
    max_width: int


def align_line(line: str, line_width: int, width: int, align: Align) -> str:
    space = max(width - line_width, 0)
    if align == 'right':
        return ' ' * space + line
    if align == 'center':
        lpad = space // 2
        return ' ' * lpad + line + ' ' * (space - lpad)
    return line + ' ' * space


def wrap_text(
    text: str,
    width: int,
    align: Align = 'left',
    margin: int = 0,
    text_width: TextWidth = get_text_width,
) -> WrappedText:
    """
    Greedy word wrap measured with `text_width`.

    Words are kept on the current line while they fit into `width - margin`
    columns. A line is never broken while it's empty, so a single word that
    is too long ends up alone on an overflowing line; `max_width` reports
    that. Newlines always break, even on an empty line. Every line is padded
    to `width` as per `align`.
    """
    max_line_width = width - margin
    lines: List[str] = []
    max_width = 0
    buf: List[str] = []
    line_width = 0

    def flush():
        nonlocal buf, line_width, max_width
        lines.append(align_line(''.join(buf), line_width, width, align))
        max_width = max(max_width, line_width)
        buf = []
        line_width = 0

    for index, paragraph in enumerate(text.split('\n')):
        if index > 0:
            flush()

        prev_end = 0
        for match in WORD_REGEX.finditer(paragraph):
            space = paragraph[prev_end:match.start()]
            prev_end = match.end()
            word = match.group()
            word_width = text_width(word)
            space_width = text_width(space) if buf else 0

            if buf and line_width + space_width + word_width > max_line_width:
                flush()
                space_width = 0

            if buf:
                buf.append(' ' * space_width)
            buf.append(word)
            line_width += space_width + word_width

    if buf:
        flush()

    return WrappedText(lines, max_width)


def _split_words(text: str):
    """ yields (word, following whitespace) """
    prev_index = 0
    for match in SPACE_REGEX.finditer(text):
        yield text[prev_index:match.start()], match.group()
        prev_index = match.end()
    if prev_index < len(text):
        yield text[prev_index:], ''


def _break_word(word: str, max_width: int, text_width: TextWidth) -> Iterator[str]:
    """ cuts `word` into pieces of at most `max_width` columns, at least one character each """
    if text_width(word) <= max_width:
        yield word
        return
    chunk = ''
    for char in word:
        if chunk and text_width(chunk + char) > max_width:
            yield chunk
            chunk = ''
        chunk += char
    if chunk:
        yield chunk


def wrap_colored_text(
    items: Sequence[ColoredItem],
    options: Optional[WrapColoredTextOptions] = None,
    **kwargs,
) -> List[str]:
    """
    Pack labeled items onto lines of `width` columns.

    Each line starts with the background and text color, is padded to the
    full width and ends with a reset, so lines can be stacked under a chart
    without leaking style. Items that are wider than a line by themselves get
    word wrapped in their own color.
    """
    options = WrapColoredTextOptions.parse(options, **kwargs)
    width = options.width
    # a line keeps at least one column for text
    margin = min(options.margin, max(width - 1, 0))
    spacing = options.spacing
    text_width = options.text_width
    text_color = resolve_text_color(options.background_color, options.text_color)
    text_fg = COLOR_MAP[text_color][0]
    bg = COLOR_MAP[options.background_color][1]

    line_start = f"{bg}{text_fg}{' ' * margin}"
    sep = f"{text_fg}{' ' * spacing}"
    rem_width = width - margin

    lines: List[str] = []
    buf: List[str] = []
    line_width = 0

    def flush():
        nonlocal buf, line_width
        buf.append(' ' * max(width - line_width, 0))
        buf.append(NORMAL)
        lines.append(''.join(buf))
        buf = []
        line_width = 0

    for item in items:
        if isinstance(item, str):
            text, color = item, None
        else:
            text, color = (tuple(item) + (None, None))[:2]

        if not text:
            continue

        item_fg = COLOR_MAP[Color(color)][0] if color else text_fg
        item_width = text_width(text)

        next_line_width = line_width + (spacing if buf else margin) + item_width
        if next_line_width <= rem_width:
            buf.extend((sep if buf else line_start, item_fg, text))
            line_width = next_line_width
            continue

        if buf:
            flush()

        if margin + item_width <= rem_width:
            buf.extend((line_start, item_fg, text))
            line_width = margin + item_width
            continue

        # too wide for any line, break it up into words
        for word, space in _split_words(text):
            for chunk in _break_word(word, rem_width - margin, text_width):
                chunk_width = text_width(chunk)
                next_line_width = line_width + (0 if buf else margin) + chunk_width

                if buf and next_line_width > rem_width:
                    flush()
                    next_line_width = margin + chunk_width

                if not buf:
                    buf.extend((line_start, item_fg))
                buf.append(chunk)
                line_width = next_line_width

            space_width = text_width(space)
            if line_width + space_width <= rem_width:
                buf.append(' ' * space_width)
                line_width += space_width
            else:
                flush()

    if buf:
        flush()

    return lines
