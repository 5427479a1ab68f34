from typing import Any

from .text_width import get_text_width


def stringify(v: Any) -> str:
    """ str() but whole floats drop their trailing .0 """
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)


""" (threshold, suffix) for compact labels, largest first """
LABEL_UNITS = ((1e12, 'T'), (1e9, 'B'), (1e6, 'M'), (1e3, 'k'))


def format_label(value: float, max_width: int = 5) -> str:
    """
    Compact y axis label, e.g. 1234 -> "1.23k", 1500000 -> "1.5M".

    Decimals are dropped one at a time until the label fits in `max_width`
    characters; a label that can't fit is rounded to a whole number.
    """
    scaled, suffix = value, ''
    for threshold, unit in LABEL_UNITS:
        if abs(value) >= threshold:
            scaled, suffix = value / threshold, unit
            break

    for digits in range(max_width, -1, -1):
        label = stringify(float(round(scaled, digits))) + suffix
        if len(label) <= max_width:
            return label
    return f"{round(scaled)}{suffix}"


def center_line(line: str, width: int, text_width=get_text_width) -> str:
    line_width = text_width(line)
    if line_width >= width:
        return line
    space = width - line_width
    lpad = space // 2
    return ' ' * lpad + line + ' ' * (space - lpad)
