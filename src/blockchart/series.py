import math
from collections.abc import Mapping
from typing import Iterable
from typing import List
from typing import NamedTuple
from typing import Optional
from typing import Sequence
from typing import TypeAlias

from .colors import Color
from .colors import default_color_cycle


Number: TypeAlias = int | float


class DataSeries(NamedTuple):
    data: Sequence[Optional[Number]]
    label: Optional[str] = None
    color: Optional[Color] = None

    def value_at(self, x: int) -> float:
        """ missing points (past the end, None, NaN, infinities) count as 0 """
        if x >= len(self.data):
            return 0.0
        value = self.data[x]
        if value is None or not math.isfinite(value):
            return 0.0
        return value

    def present_values(self) -> Iterable[Number]:
        return (
            v for v in self.data
            if v is not None and math.isfinite(v)
        )


class NormalizedSeries(NamedTuple):
    series: List[DataSeries]
    x_size: int
    y_min: float
    y_max: float

    @property
    def has_values(self) -> bool:
        return self.y_min <= self.y_max


def as_data_series(item) -> DataSeries:
    """ Accepts a DataSeries, a {data, label, color} mapping, or a bare sequence of numbers """
    if isinstance(item, DataSeries):
        return item
    if isinstance(item, Mapping):
        color = item.get('color')
        return DataSeries(
            data=item['data'],
            label=item.get('label'),
            color=Color(color) if color else None,
        )
    if isinstance(item, (str, bytes)):
        raise TypeError(f'Expected a sequence of numbers, got {item!r}')
    return DataSeries(data=item)


def next_color(previous: Optional[Color], cycle: Sequence[Color]) -> Color:
    """ The color after `previous` in the cycle, or the first one if it's not in there. """
    if previous in cycle:
        return cycle[(cycle.index(previous) + 1) % len(cycle)]
    return cycle[0]


def normalize_series(
    data: Iterable,
    background_color: Color | str = Color.Black,
) -> NormalizedSeries:
    """
    Give every series a color and find the shared x size and y extremes.

    A series without a color gets the one following its predecessor's color
    in the default cycle, with the background color left out of the cycle.
    Input records are never modified; colored copies are returned instead.
    """
    cycle = default_color_cycle(background_color)
    series: List[DataSeries] = []
    previous: Optional[Color] = None
    x_size = 0
    y_min = math.inf
    y_max = -math.inf

    for item in data:
        item = as_data_series(item)
        if item.color is None:
            item = item._replace(color=next_color(previous, cycle))
        else:
            item = item._replace(color=Color(item.color))
        previous = item.color

        x_size = max(x_size, len(item.data))
        y_min = min(y_min, *item.present_values(), math.inf)
        y_max = max(y_max, *item.present_values(), -math.inf)
        series.append(item)

    return NormalizedSeries(series, x_size, y_min, y_max)
