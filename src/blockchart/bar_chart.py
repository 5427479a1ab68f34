"""Unicode block character bar charts for fixed size terminals.

The chart is built in a fixed pipeline: normalize the series, reserve the
legend footer, resolve the value domain, budget space for axis labels, then
rasterize every value in eighths of a character cell. Each step only hands
plain data to the next one.
"""

import math
from typing import Any, Callable, Iterable, List, NamedTuple, Optional, Sequence

from .colors import COLOR_MAP
from .colors import NORMAL
from .colors import Color
from .colors import resolve_text_color
from .display_utils import stringify
from .options import BarChartOptions
from .options import LabelPosition
from .series import DataSeries
from .series import NormalizedSeries
from .series import normalize_series
from .wrap_text import align_line
from .wrap_text import wrap_colored_text
from .wrap_text import wrap_text


EIGHTHS = 8


class Glyphs:
    # index n fills n eighths of the cell, from the bottom
    VerticalRamp = ' ▁▂▃▄▅▆▇█'
    # index n fills n eighths of the cell, from the left
    HorizontalRamp = ' ▏▎▍▌▋▊▉█'
    Full = '█'


class Cell(NamedTuple):
    glyph: str
    # drawn in the background color on top of the bar color
    inverted: bool = False


FULL_CELL = Cell(Glyphs.Full)


class ChartStyle(NamedTuple):
    bg: str
    # the background color as a foreground, for inverted cells
    bg_inv: str
    text_fg: str

    @staticmethod
    def from_options(options: BarChartOptions) -> 'ChartStyle':
        text_color = resolve_text_color(options.background_color, options.text_color)
        bg_inv, bg = COLOR_MAP[options.background_color]
        return ChartStyle(bg=bg, bg_inv=bg_inv, text_fg=COLOR_MAP[text_color][0])

    def line(self, content: str) -> str:
        return f"{self.bg}{self.text_fg}{content}{NORMAL}"

    def blank_line(self, width: int) -> str:
        return self.line(' ' * width)

    def paint(self, cell: Optional[Cell], color: Color, repeat: int = 1) -> str:
        if cell is None:
            return ' ' * repeat
        fg, bg = COLOR_MAP[color]
        glyphs = cell.glyph * repeat
        if cell.inverted:
            return f"{self.bg_inv}{bg}{glyphs}{self.text_fg}{self.bg}"
        return f"{fg}{glyphs}{self.text_fg}"


class Domain(NamedTuple):
    y_start: float
    y_end: float

    @property
    def size(self) -> float:
        return self.y_end - self.y_start

    @property
    def zero(self) -> float:
        """ offset of the baseline from the start of the range """
        return -self.y_start


class BarGeometry(NamedTuple):
    series_count: int
    bar_width: int
    # gap before every group of bars
    space: int
    # left over after the last group
    end_space: int

    @property
    def group_size(self) -> int:
        return self.series_count * self.bar_width + self.space


class AxisLabel(NamedTuple):
    value: Any
    text: str
    width: int


class XLabelLayout(NamedTuple):
    # rows next to the chart, either full labels or footnote markers
    band: List[str]
    # footnote list for the footer, empty when the full labels fit
    footnotes: List[str]


def resolve_domain(
    y_range: Optional[Sequence[float]],
    y_min: float,
    y_max: float,
) -> Domain:
    """ Use y_range as is, otherwise the data range extended to include 0 """
    if y_range is not None:
        y_start, y_end = y_range
        return Domain(y_start, y_end)
    return Domain(min(0, y_min), max(0, y_max))


def compute_geometry(
    extent: int,
    series_count: int,
    x_size: int,
    bar_width: Optional[int] = None,
) -> Optional[BarGeometry]:
    """
    Split `extent` cells into x_size groups of series_count bars. Returns None
    if not even one cell per bar fits.
    """
    if extent <= 0 or series_count <= 0 or x_size <= 0:
        return None
    if bar_width is None:
        bar_width = max(extent // (1 + (series_count + 1) * x_size), 1)
    bars = series_count * bar_width * x_size
    if bars > extent:
        return None
    space = max((extent - bars) // (x_size + 1), 0)
    end_space = extent - x_size * (series_count * bar_width + space)
    return BarGeometry(series_count, bar_width, space, end_space)


def to_eighths(value: float, domain: Domain, cells: int) -> int:
    """ Bar length in eighths of a cell. Rounds away from 0 so only 0 is empty. """
    sub_cells = value / domain.size * cells * EIGHTHS
    if sub_cells < 0:
        return math.floor(sub_cells)
    return math.ceil(sub_cells)


def baseline_cell(domain: Domain, cells: int) -> int:
    """ Index of the first cell above zero, counting from the low end """
    return int(int(cells * EIGHTHS * domain.zero / domain.size) / EIGHTHS)


def value_cell(value: float, domain: Domain, cells: int) -> int:
    """ Index of the cell holding `value`, counting from the low end """
    index = int(cells * EIGHTHS * (value - domain.y_start) / domain.size) // EIGHTHS
    return min(max(index, 0), cells - 1)


def bar_cells(eighths: int, baseline: int, cells: int, ramp: str) -> List[Optional[Cell]]:
    """
    The cells of one bar along its length, index 0 at the low value end.
    Bars grow away from the baseline; anything past the chart is clipped.
    """
    result: List[Optional[Cell]] = [None] * cells
    full, partial = divmod(abs(eighths), EIGHTHS)

    if eighths >= 0:
        for index in range(max(baseline, 0), min(baseline + full, cells)):
            result[index] = FULL_CELL
        tip = baseline + full
        if partial and 0 <= tip < cells:
            result[tip] = Cell(ramp[partial])
    else:
        for index in range(max(baseline - full, 0), min(baseline, cells)):
            result[index] = FULL_CELL
        tip = baseline - full - 1
        if partial and 0 <= tip < cells:
            # fill the low side with background so the bar color hangs from the top
            result[tip] = Cell(ramp[EIGHTHS - partial], inverted=True)

    return result


def label_formatter(option) -> Optional[Callable[[Any], str]]:
    if option is True:
        return stringify
    if callable(option):
        return option
    return None


def y_label_values(
    domain: Domain,
    normalized: NormalizedSeries,
    include_min: bool,
    include_max: bool,
) -> List[float]:
    """ Values to label, most important first """
    candidates = [domain.y_end, domain.y_start, 0]
    if include_max:
        candidates.append(normalized.y_max)
    if include_min:
        candidates.append(normalized.y_min)

    values: List[float] = []
    for v in candidates:
        if domain.y_start <= v <= domain.y_end and v not in values:
            values.append(v)
    return values


def make_labels(
    values: Iterable[Any],
    formatter: Callable[[Any], str],
    text_width: Callable[[str], int],
) -> List[AxisLabel]:
    labels = []
    for value in values:
        text = formatter(value)
        labels.append(AxisLabel(value, text, text_width(text)))
    return labels


def footnote_block(labels: Sequence[str], options: BarChartOptions, style: ChartStyle) -> List[str]:
    return [style.blank_line(options.width)] + wrap_colored_text(
        [f"[{x + 1}] {label}" for x, label in enumerate(labels)],
        **options.wrap_options(),
    )


def blank_canvas(options: BarChartOptions, style: ChartStyle, footer: List[str]) -> List[str]:
    """ Background only lines, with the footer if it leaves room for at least one line """
    if options.width <= 0 or options.height <= 0:
        return []
    blank = style.blank_line(options.width)
    if len(footer) < options.height:
        return [blank] * (options.height - len(footer)) + footer
    return [blank] * options.height


def rasterize_horizontal(
    series: Sequence[DataSeries],
    x_size: int,
    domain: Domain,
    geometry: BarGeometry,
    chart_height: int,
    style: ChartStyle,
) -> List[str]:
    """ Rows (top to bottom) of upward growing bars """
    baseline = baseline_cell(domain, chart_height)
    rows: List[List[str]] = [[] for _ in range(chart_height)]
    gap = ' ' * geometry.space

    for x in range(x_size):
        for index, item in enumerate(series):
            eighths = to_eighths(item.value_at(x), domain, chart_height)
            cells = bar_cells(eighths, baseline, chart_height, Glyphs.VerticalRamp)
            lead = gap if index == 0 else ''
            for row, cell in enumerate(reversed(cells)):
                rows[row].append(lead + style.paint(cell, item.color, geometry.bar_width))

    end = ' ' * geometry.end_space
    return [''.join(row) + end for row in rows]


def rasterize_vertical(
    series: Sequence[DataSeries],
    x_size: int,
    domain: Domain,
    geometry: BarGeometry,
    chart_width: int,
    style: ChartStyle,
) -> List[str]:
    """ Rows (top to bottom) of rightward growing bars, bar_width rows per bar """
    baseline = baseline_cell(domain, chart_width)
    blank = ' ' * chart_width
    rows: List[str] = []

    for x in range(x_size):
        rows.extend([blank] * geometry.space)
        for item in series:
            eighths = to_eighths(item.value_at(x), domain, chart_width)
            cells = bar_cells(eighths, baseline, chart_width, Glyphs.HorizontalRamp)
            row = ''.join(style.paint(cell, item.color) for cell in cells)
            rows.extend([row] * geometry.bar_width)

    rows.extend([blank] * geometry.end_space)
    return rows


def y_label_column(
    labels: Sequence[AxisLabel],
    domain: Domain,
    chart_height: int,
    column_width: int,
    position: LabelPosition,
) -> List[str]:
    """ One cell per chart row, labels on the row of their value. First label on a row wins. """
    column = [' ' * column_width] * chart_height
    claimed = set()
    for label in labels:
        row = chart_height - 1 - value_cell(label.value, domain, chart_height)
        if row in claimed:
            continue
        claimed.add(row)
        pad = ' ' * (column_width - 1 - label.width)
        if position == 'before':
            column[row] = f"{pad}{label.text} "
        else:
            column[row] = f" {label.text}{pad}"
    return column


def y_label_row(labels: Sequence[AxisLabel], domain: Domain, chart_width: int) -> str:
    """
    Labels centered under the column of their value, kept inside the chart.
    A label that would touch an earlier one is dropped.
    """
    placed = []
    for label in labels:
        if label.width > chart_width:
            continue
        col = value_cell(label.value, domain, chart_width)
        start = min(max(col - label.width // 2, 0), chart_width - label.width)
        end = start + label.width
        if any(start <= other_end and other_start <= end for other_start, other_end, _ in placed):
            continue
        placed.append((start, end, label))

    parts = []
    pos = 0
    for start, end, label in sorted(placed, key=lambda p: p[0]):
        parts.append(' ' * (start - pos))
        parts.append(label.text)
        pos = end
    parts.append(' ' * (chart_width - pos))
    return ''.join(parts)


def horizontal_x_labels(
    labels: Sequence[str],
    geometry: BarGeometry,
    options: BarChartOptions,
    style: ChartStyle,
    prefix_width: int,
) -> XLabelLayout:
    """
    Full labels centered under each group if they wrap into the group width
    with a column to spare on each side, else numbered markers plus footnotes.
    """
    text_width = options.text_width
    group_size = geometry.group_size
    wrapped = [wrap_text(label, group_size, 'center', 2, text_width) for label in labels]

    if all(w.max_width <= group_size - 2 for w in wrapped):
        slots = [w.lines for w in wrapped]
        footnotes = []
    else:
        markers = [stringify(x + 1) for x in range(len(labels))]
        if any(text_width(m) > group_size for m in markers):
            return XLabelLayout([], [])
        slots = [[align_line(m, text_width(m), group_size, 'center')] for m in markers]
        footnotes = footnote_block(labels, options, style)

    band_height = max((len(slot) for slot in slots), default=0)
    lead = ' ' * math.ceil(geometry.space / 2)
    used = prefix_width + len(lead) + len(slots) * group_size
    tail = ' ' * max(options.width - used, 0)
    blank_slot = ' ' * group_size
    after = options.resolved_x_label_position == 'after'

    band = []
    for i in range(band_height):
        parts = [' ' * prefix_width, lead]
        for slot in slots:
            # hug the chart: top aligned below it, bottom aligned above it
            offset = i if after else i - (band_height - len(slot))
            parts.append(slot[offset] if 0 <= offset < len(slot) else blank_slot)
        parts.append(tail)
        band.append(style.line(''.join(parts)))

    return XLabelLayout(band, footnotes)


def render_horizontal(
    normalized: NormalizedSeries,
    domain: Domain,
    options: BarChartOptions,
    style: ChartStyle,
    legend: List[str],
) -> Optional[List[str]]:
    text_width = options.text_width
    series = normalized.series
    y_position = options.resolved_y_label_position

    y_formatter = label_formatter(options.y_label)
    y_labels = []
    if y_formatter:
        values = y_label_values(domain, normalized, options.y_label_min, options.y_label_max)
        y_labels = make_labels(values, y_formatter, text_width)
    label_column_width = max(label.width for label in y_labels) + 1 if y_labels else 0

    chart_width = options.width - label_column_width
    geometry = compute_geometry(chart_width, len(series), normalized.x_size, options.bar_width)
    if geometry is None:
        return None

    header: List[str] = []
    footer: List[str] = []
    x_formatter = label_formatter(options.x_label)
    if x_formatter:
        x_labels = [x_formatter(x) for x in range(normalized.x_size)]
        prefix_width = label_column_width if y_position == 'before' else 0
        layout = horizontal_x_labels(x_labels, geometry, options, style, prefix_width)
        if options.resolved_x_label_position == 'before':
            header.extend(layout.band)
        else:
            footer.extend(layout.band)
        footer.extend(layout.footnotes)
    footer.extend(legend)

    chart_height = options.height - len(header) - len(footer)
    if chart_height <= 0:
        return None

    rows = rasterize_horizontal(series, normalized.x_size, domain, geometry, chart_height, style)

    if y_labels:
        column = y_label_column(y_labels, domain, chart_height, label_column_width, y_position)
        if y_position == 'before':
            rows = [c + r for c, r in zip(column, rows)]
        else:
            rows = [r + c for c, r in zip(column, rows)]

    return header + [style.line(row) for row in rows] + footer


def render_vertical(
    normalized: NormalizedSeries,
    domain: Domain,
    options: BarChartOptions,
    style: ChartStyle,
    legend: List[str],
) -> Optional[List[str]]:
    width = options.width
    text_width = options.text_width
    series = normalized.series
    x_size = normalized.x_size
    y_position = options.resolved_y_label_position
    x_position = options.resolved_x_label_position
    align = 'right' if x_position == 'before' else 'left'

    y_formatter = label_formatter(options.y_label)
    x_formatter = label_formatter(options.x_label)
    x_labels = [x_formatter(x) for x in range(x_size)] if x_formatter else []

    column_content = 0
    if x_labels:
        widest = max(text_width(label) for label in x_labels)
        column_content = min(widest, max(width // 3 - 1, 1))
    column_width = column_content + 1 if x_labels else 0

    chart_width = width - column_width
    chart_height = options.height - (1 if y_formatter else 0) - len(legend)
    geometry = compute_geometry(chart_height, len(series), x_size, options.bar_width)
    if geometry is None or chart_width <= 0:
        return None

    slots: List[List[str]] = []
    footnotes: List[str] = []
    if x_labels:
        wrapped = [wrap_text(label, column_content, align, 0, text_width) for label in x_labels]
        rows_per_label = len(series) * geometry.bar_width
        if all(
            w.max_width <= column_content and len(w.lines) <= rows_per_label
            for w in wrapped
        ):
            slots = [w.lines for w in wrapped]
        else:
            markers = [stringify(x + 1) for x in range(x_size)]
            column_content = max(text_width(m) for m in markers)
            column_width = column_content + 1
            slots = [[align_line(m, text_width(m), column_content, align)] for m in markers]
            footnotes = footnote_block(x_labels, options, style)

            # one more pass with the space the footnotes took
            chart_width = width - column_width
            chart_height -= len(footnotes)
            geometry = compute_geometry(chart_height, len(series), x_size, options.bar_width)
            if geometry is None or chart_width <= 0:
                return None

    rows = rasterize_vertical(series, x_size, domain, geometry, chart_width, style)

    if x_labels:
        column = [' ' * column_content] * chart_height
        for x, slot in enumerate(slots):
            start = x * geometry.group_size + geometry.space
            for i, line in enumerate(slot):
                column[start + i] = line
        if x_position == 'before':
            rows = [f"{c} {r}" for c, r in zip(column, rows)]
        else:
            rows = [f"{r} {c}" for c, r in zip(column, rows)]

    header: List[str] = []
    footer: List[str] = []
    if y_formatter:
        values = y_label_values(domain, normalized, options.y_label_min, options.y_label_max)
        y_labels = make_labels(values, y_formatter, text_width)
        row = y_label_row(y_labels, domain, chart_width)
        if x_labels and x_position == 'before':
            row = ' ' * column_width + row
        elif x_labels:
            row = row + ' ' * column_width
        if y_position == 'before':
            header.append(style.line(row))
        else:
            footer.append(style.line(row))
    footer.extend(footnotes)
    footer.extend(legend)

    return header + [style.line(row) for row in rows] + footer


def unicode_bar_chart(
    data: Iterable,
    options: Optional[BarChartOptions | dict] = None,
    **kwargs,
) -> List[str]:
    """
    Render series as a bar chart of exactly `height` terminal lines, each
    `width` columns wide and fully styled (background, foreground, reset).

    `data` items can be DataSeries, {data, label, color} mappings or plain
    sequences of numbers. Options come from a BarChartOptions, a dict,
    keyword arguments, or a mix (keywords win).

    Nothing here raises for the shape of the data: with no data, a
    degenerate range, or no room for the chart, background only lines are
    returned instead (with the legend, if it fits).
    """
    options = BarChartOptions.parse(options, **kwargs)
    if options.width <= 0 or options.height <= 0:
        return []

    style = ChartStyle.from_options(options)
    normalized = normalize_series(data, options.background_color)

    legend = [style.blank_line(options.width)] + wrap_colored_text(
        [(item.label, item.color) for item in normalized.series],
        **options.wrap_options(),
    )

    if normalized.x_size == 0 or not normalized.has_values:
        return blank_canvas(options, style, legend)

    domain = resolve_domain(options.y_range, normalized.y_min, normalized.y_max)
    if domain.size <= 0:
        return blank_canvas(options, style, legend)

    if options.orientation == 'horizontal':
        lines = render_horizontal(normalized, domain, options, style, legend)
    else:
        lines = render_vertical(normalized, domain, options, style, legend)

    if lines is None:
        return blank_canvas(options, style, legend)
    return lines


class BarChart:
    """
    Collects series, then renders them with unicode_bar_chart.

        chart = BarChart(y_label=True)
        chart.add_series([1, 2, 3], label='requests')
        print(chart.render(width=40, height=10))
    """

    def __init__(self, **options):
        self.series: List[DataSeries] = []
        self.options = BarChartOptions.parse(options)

    def add_series(
        self,
        values,
        *,
        label: Optional[str] = None,
        color: Optional[Color | str] = None,
    ) -> 'BarChart':
        self.series.append(DataSeries(
            data=list(values),
            label=label,
            color=Color(color) if color else None,
        ))
        return self

    def render_lines(self, **overrides) -> List[str]:
        return unicode_bar_chart(self.series, self.options, **overrides)

    def render(self, **overrides) -> str:
        return '\n'.join(self.render_lines(**overrides))
