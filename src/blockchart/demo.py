"""Animated demo: seven oscillating series, cycling through orientations,
backgrounds and label positions."""

import math
import signal
import time
from typing import Callable, List

from .bar_chart import unicode_bar_chart
from .colors import Color
from .display_utils import center_line
from .frame_clock import FrameClock
from .series import DataSeries
from .terminal import Terminal, is_exit_key, terminal_session


TAU = 2 * math.pi
EXIT_MESSAGE = 'Press Escape to exit.'


def make_series(x_size: int, f: Callable[[int], float]) -> List[float]:
    return [f(x) for x in range(x_size)]


def demo_series(now: float, x_size: int = 4) -> List[DataSeries]:
    """ `now` is in hundredths of a second """
    def wave(period: float, x: int) -> float:
        return (TAU * ((now / period) + (x / x_size))) % TAU

    return [
        DataSeries(
            label='Data Series #1',
            data=make_series(x_size, lambda x: math.sin(wave(10_000, x)) + 0.5),
        ),
        DataSeries(
            label='Data Series #2',
            data=make_series(x_size, lambda x: max(math.sin(wave(5_000, x)) * 1.1, 0)),
        ),
        DataSeries(
            label='Data Series #3',
            data=make_series(x_size, lambda x: math.cos(wave(2_000, x)) * 0.75 + 1),
        ),
        DataSeries(
            label='Data Series #4',
            data=make_series(x_size, lambda x: math.sin(wave(3_000, x)) * 0.5 + 0.4),
        ),
        DataSeries(
            label='Data Series #5',
            data=make_series(x_size, lambda x: math.sin(wave(2_500, x))),
        ),
        DataSeries(
            label='Data Series #6',
            data=make_series(x_size, lambda x: ((now / 3_500) + x) % 2 - 1),
        ),
        DataSeries(
            label='Data Series #7',
            data=make_series(x_size, lambda x: x / 2 - 1 / 4),
        ),
    ]


def demo_frame(now: float, width: int, height: int, x_size: int = 4) -> List[str]:
    """ One frame of the demo, chart plus the exit hint, `height` lines total """
    orientation = 'horizontal' if (now + 1_500) % 5_000 > 2_500 else 'vertical'
    background_color = Color.Black if now % 2_500 > 1_250 else Color.White
    y_label_position = 'before' if (now + 500) % 2_500 > 1_250 else 'after'
    x_label_position = 'before' if (now + 1_000) % 2_500 > 1_250 else 'after'

    lines = unicode_bar_chart(
        demo_series(now, x_size),
        y_range=(-1, 2),
        x_label=lambda x: f"Year {2001 + x + x * x}",
        y_label=lambda y: f"{y:.3f}",
        y_label_position=y_label_position,
        x_label_position=x_label_position,
        width=width,
        height=height - 2,
        orientation=orientation,
        background_color=background_color,
    )
    lines.append('')
    lines.append(center_line(EXIT_MESSAGE, width))
    return lines


def run_demo(fps: float = 60.0, x_size: int = 4, terminal: Terminal | None = None):
    """ Redraw until an exit key, Ctrl-C or SIGTERM """
    stopped = False

    def stop(signum, frame):
        nonlocal stopped
        stopped = True

    previous_handler = signal.signal(signal.SIGTERM, stop)
    clock = FrameClock(fps)
    try:
        with terminal_session() as session:
            terminal = terminal or session
            clock.start()
            while not stopped:
                if is_exit_key(terminal.read_keys()):
                    break
                columns, rows = terminal.size()
                now = time.time() * 100
                terminal.write_frame(demo_frame(now, columns, rows, x_size))
                clock.tick()
    except KeyboardInterrupt:
        pass
    finally:
        signal.signal(signal.SIGTERM, previous_handler)
