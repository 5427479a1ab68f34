"""Chart definition files.

A chart definition is a YAML (or JSON) document holding the series and the
chart options:

    height: 20
    y_range: [0, 10]
    y_label: true
    x_labels: [Q1, Q2, Q3]
    series:
      - label: Revenue
        color: green
        data: [1, 2, 3]
      - [4, 5, 6]

String values of the form $ENVVAR are replaced with the environment variable.
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import simplejson as json
import yaml
from pydantic import BaseModel, model_validator

from .colors import Color
from .display_utils import format_label, stringify
from .options import BarChartOptions
from .series import DataSeries


class SeriesConfig(BaseModel):
    label: Optional[str] = None
    color: Optional[Color] = None
    data: List[Optional[float]]

    @model_validator(mode="before")
    @classmethod
    def from_bare_list(cls, value: Any) -> Any:
        if isinstance(value, list):
            return {'data': value}
        return value

    def to_series(self) -> DataSeries:
        return DataSeries(data=self.data, label=self.label, color=self.color)


class ChartDefinition(BaseModel):
    """Series plus everything BarChartOptions takes, except callables."""
    series: List[SeriesConfig] = []

    # names for the x positions; positions past the end are numbered
    x_labels: Optional[List[str]] = None
    y_label: bool = False
    y_label_format: Literal['plain', 'compact'] = 'plain'
    y_label_min: bool = True
    y_label_max: bool = True
    y_label_position: Optional[Literal['before', 'after']] = None
    x_label_position: Optional[Literal['before', 'after']] = None
    width: Optional[int] = None
    height: Optional[int] = None
    bar_width: Optional[int] = None
    y_range: Optional[List[float]] = None
    orientation: Literal['horizontal', 'vertical'] = 'horizontal'
    text_color: Optional[Color] = None
    background_color: Color = Color.Black

    @model_validator(mode="after")
    def validate_y_range(self):
        if self.y_range is not None and len(self.y_range) != 2:
            raise ValueError(f'y_range must be [min, max], got {self.y_range!r}')
        return self

    def get_series(self) -> List[DataSeries]:
        return [s.to_series() for s in self.series]

    def x_label_for(self, x: int) -> str:
        if self.x_labels and x < len(self.x_labels):
            return self.x_labels[x]
        return stringify(x + 1)

    def get_options(self, **overrides) -> BarChartOptions:
        """ BarChartOptions for this chart, `overrides` that are None are ignored """
        opts: Dict[str, Any] = self.model_dump(
            exclude={'series', 'x_labels', 'y_label_format'},
            exclude_none=True,
        )
        if self.y_label:
            opts['y_label'] = format_label if self.y_label_format == 'compact' else True
        if self.x_labels is not None:
            opts['x_label'] = self.x_label_for
        opts.update({k: v for k, v in overrides.items() if v is not None})
        return BarChartOptions(**opts)


ENV_VAR_REGEX = re.compile(r"\$(\w+)")


def _substitute_env_vars(value: Any) -> Any:
    """
    Replace every "$NAME" string in a loaded chart definition with the
    environment variable NAME, at any depth.

    Raises:
        KeyError: If a referenced environment variable is not set
    """
    if isinstance(value, dict):
        return {key: _substitute_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]
    if not isinstance(value, str):
        return value

    match = ENV_VAR_REGEX.fullmatch(value)
    if match is None:
        return value
    name = match.group(1)
    if name not in os.environ:
        raise KeyError(f"Chart definition references ${name}, which is not set")
    return os.environ[name]


def parse_config(config_path: str | Path) -> ChartDefinition:
    """
    Parse a YAML or JSON chart definition file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the definition is invalid
        KeyError: If a required environment variable is not set
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Chart file not found: {config_path}")

    with open(config_path, "r") as f:
        if config_path.suffix.lower() == '.json':
            raw_config = json.load(f)
        else:
            raw_config = yaml.safe_load(f)

    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ValueError(f"Chart file {config_path} must contain a mapping, found {type(raw_config).__name__}")

    return config_from_dict(_substitute_env_vars(raw_config))


def config_from_dict(config: Dict[str, Any]) -> ChartDefinition:
    return ChartDefinition(**config)


def load_config(config_path: str | Path = "chart.yaml") -> ChartDefinition:
    """ parse_config with a default path of ./chart.yaml """
    return parse_config(config_path)
