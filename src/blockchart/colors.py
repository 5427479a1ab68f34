from enum import Enum
from typing import Dict
from typing import List
from typing import Optional
from typing import Tuple


class Color(str, Enum):
    Black = 'black'
    Red = 'red'
    Green = 'green'
    Yellow = 'yellow'
    Blue = 'blue'
    Magenta = 'magenta'
    Cyan = 'cyan'
    White = 'white'
    Gray = 'gray'
    BrightRed = 'bright_red'
    BrightGreen = 'bright_green'
    BrightYellow = 'bright_yellow'
    BrightBlue = 'bright_blue'
    BrightMagenta = 'bright_magenta'
    BrightCyan = 'bright_cyan'
    BrightWhite = 'bright_white'
    Default = 'default'

    def __str__(self):
        return self.value


NORMAL = '\033[0m'

""" (foreground, background) SGR escape for every color """
COLOR_MAP: Dict[Color, Tuple[str, str]] = {
    Color.Black:         ('\033[30m', '\033[40m'),
    Color.Red:           ('\033[31m', '\033[41m'),
    Color.Green:         ('\033[32m', '\033[42m'),
    Color.Yellow:        ('\033[33m', '\033[43m'),
    Color.Blue:          ('\033[34m', '\033[44m'),
    Color.Magenta:       ('\033[35m', '\033[45m'),
    Color.Cyan:          ('\033[36m', '\033[46m'),
    Color.White:         ('\033[37m', '\033[47m'),
    Color.Gray:          ('\033[90m', '\033[100m'),
    Color.BrightRed:     ('\033[91m', '\033[101m'),
    Color.BrightGreen:   ('\033[92m', '\033[102m'),
    Color.BrightYellow:  ('\033[93m', '\033[103m'),
    Color.BrightBlue:    ('\033[94m', '\033[104m'),
    Color.BrightMagenta: ('\033[95m', '\033[105m'),
    Color.BrightCyan:    ('\033[96m', '\033[106m'),
    Color.BrightWhite:   ('\033[97m', '\033[107m'),
    Color.Default:       ('\033[39m', '\033[49m'),
}

""" Colors handed out to series that don't bring their own """
DEFAULT_COLOR_SEQUENCE: Tuple[Color, ...] = (
    Color.Red,
    Color.Green,
    Color.Yellow,
    Color.Blue,
    Color.Magenta,
    Color.Cyan,
    Color.White,
    Color.Black,
)


def lookup(color: Color | str) -> Tuple[str, str]:
    """ Returns (foreground, background) escapes. Raises ValueError for unknown colors. """
    return COLOR_MAP[Color(color)]


def resolve_text_color(
    background_color: Color | str,
    text_color: Optional[Color | str] = None,
) -> Color:
    if text_color is not None:
        return Color(text_color)
    background_color = Color(background_color)
    if background_color == Color.White:
        return Color.Black
    if background_color == Color.Default:
        return Color.Default
    return Color.White


def default_color_cycle(background_color: Color | str) -> List[Color]:
    """ The default sequence minus the background, so no bar is invisible. """
    background_color = Color(background_color)
    return [c for c in DEFAULT_COLOR_SEQUENCE if c != background_color]
