"""Option models for charts and colored text wrapping.

Options can be given as a model instance, a plain dict (e.g. loaded from a
chart definition file) or keyword arguments; `parse` merges them.
"""

import math
from typing import Any, Callable, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator

from .colors import Color
from .text_width import get_text_width


Orientation = Literal['horizontal', 'vertical']
LabelPosition = Literal['before', 'after']
LabelFormatter = Callable[[Any], str]


class _Options(BaseModel):
    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, options: Any = None, **kwargs):
        if isinstance(options, cls) and not kwargs:
            return options
        if options is None:
            options = {}
        elif isinstance(options, BaseModel):
            options = options.model_dump(exclude_unset=True)
        elif not isinstance(options, dict):
            raise TypeError(f"Unknown options: {options!r}. Please provide an options dict or {cls.__name__}.")
        return cls(**{**options, **kwargs})


class WrapColoredTextOptions(_Options):
    width: int = 80
    text_width: Callable[[str], int] = get_text_width
    text_color: Optional[Color] = None
    background_color: Color = Color.Black
    margin: int = 1
    spacing: int = 2


class BarChartOptions(_Options):
    """Configuration for `unicode_bar_chart`. Every field is optional."""

    # False: no labels, True: str(value), or a formatter callable
    y_label: bool | LabelFormatter = False
    x_label: bool | LabelFormatter = False
    # also label the observed data minimum / maximum on the y axis
    y_label_min: bool = True
    y_label_max: bool = True
    # None picks the default for the orientation
    y_label_position: Optional[LabelPosition] = None
    x_label_position: Optional[LabelPosition] = None
    width: int = 80
    height: int = 40
    bar_width: Optional[int] = None
    y_range: Optional[Tuple[float, float]] = None
    orientation: Orientation = 'horizontal'
    text_color: Optional[Color] = None
    background_color: Color = Color.Black
    text_width: Callable[[str], int] = get_text_width

    @model_validator(mode="after")
    def validate_options(self):
        if self.bar_width is not None and self.bar_width < 1:
            raise ValueError(f'bar_width must be at least 1, got {self.bar_width}')
        if self.y_range is not None and not all(math.isfinite(v) for v in self.y_range):
            raise ValueError(f'y_range must be finite, got {self.y_range!r}')
        return self

    @property
    def resolved_y_label_position(self) -> LabelPosition:
        if self.y_label_position:
            return self.y_label_position
        return 'before' if self.orientation == 'horizontal' else 'after'

    @property
    def resolved_x_label_position(self) -> LabelPosition:
        if self.x_label_position:
            return self.x_label_position
        return 'after' if self.orientation == 'horizontal' else 'before'

    def wrap_options(self) -> Dict[str, Any]:
        """ options to use for the legend and footnotes """
        return dict(
            width=self.width,
            text_width=self.text_width,
            text_color=self.text_color,
            background_color=self.background_color,
        )
