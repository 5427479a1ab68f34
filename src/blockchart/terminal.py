"""Terminal glue for full screen rendering: cursor, raw input, clearing."""

import os
import select
import shutil
import sys
from contextlib import contextmanager
from typing import Iterator, List, TextIO


CLEAR = '\033[1;1H\033[2J'
HIDE_CURSOR = '\033[?25l'
SHOW_CURSOR = '\033[?25h'
ENABLE_LINE_WRAP = '\033[?7h'

ESCAPE = 0x1b
CTRL_C = 0x03
QUIT = ord('q')


def is_exit_key(data: bytes) -> bool:
    """ Escape, q or Ctrl-C anywhere in the input """
    return any(b in data for b in (ESCAPE, QUIT, CTRL_C))


class Terminal:
    def __init__(self, stdout: TextIO, stdin: TextIO):
        self.stdout = stdout
        self.stdin = stdin

    def size(self) -> os.terminal_size:
        """ (columns, lines), 80x40 when it can't be determined """
        return shutil.get_terminal_size((80, 40))

    def write_frame(self, lines: List[str]):
        self.stdout.write(CLEAR + '\n'.join(lines))
        self.stdout.flush()

    def read_keys(self) -> bytes:
        """ Whatever input is pending, without blocking """
        if not self.stdin.isatty():
            return b''
        fd = self.stdin.fileno()
        readable, _, _ = select.select([fd], [], [], 0)
        if not readable:
            return b''
        return os.read(fd, 1024)


@contextmanager
def terminal_session(stdout: TextIO = sys.stdout, stdin: TextIO = sys.stdin) -> Iterator[Terminal]:
    """
    Hide the cursor and put a tty stdin into cbreak mode, so single key
    presses can be read; both are restored on exit.
    """
    saved_attrs = None
    if stdin.isatty():
        import termios
        import tty
        fd = stdin.fileno()
        saved_attrs = termios.tcgetattr(fd)
        tty.setcbreak(fd)

    stdout.write(HIDE_CURSOR + ENABLE_LINE_WRAP)
    stdout.flush()
    try:
        yield Terminal(stdout, stdin)
    finally:
        if saved_attrs is not None:
            import termios
            termios.tcsetattr(stdin.fileno(), termios.TCSADRAIN, saved_attrs)
        stdout.write(SHOW_CURSOR + '\n')
        stdout.flush()
