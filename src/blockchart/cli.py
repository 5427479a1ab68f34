import shutil
from importlib.metadata import version
from pathlib import Path
from typing import List, Optional

import humanize
import simplejson as json
import typer
from rich.console import Console
from rich.markup import escape
from tabulate import tabulate
from typing_extensions import Annotated

from .bar_chart import unicode_bar_chart
from .colors import Color
from .config import ChartDefinition, load_config
from .demo import run_demo
from .series import normalize_series
from .wrap_text import wrap_text


app = typer.Typer()
err_console = Console(stderr=True)


def version_callback(value: bool):
    if value:
        typer.echo(version('blockchart'))
        raise typer.Exit()


@app.callback()
def version_arg(
    version: Annotated[bool, typer.Option(
        '--version',
        help="Show the current version and exit.",
        callback=version_callback,
        is_eager=True,
    )] = False,
):
    pass


def _get_chart_from_path(chart_path: Path) -> ChartDefinition:
    if not chart_path.is_file():
        err_console.print(f"Could not find chart file [red]{escape(str(chart_path))}[/red].")
        raise typer.Exit(code=1)
    try:
        return load_config(chart_path)
    except (ValueError, KeyError) as e:
        err_console.print(f"Invalid chart file [red]{escape(str(chart_path))}[/red]:\n{escape(str(e))}")
        raise typer.Exit(code=1)


chart_path_arg = typer.Argument(help="A YAML or JSON chart definition.")


@app.command()
def render(
    chart_path: Annotated[Path, chart_path_arg],
    width: Annotated[Optional[int], typer.Option(help="Columns. Defaults to the chart file, then the terminal width.")] = None,
    height: Annotated[Optional[int], typer.Option(help="Lines. Defaults to the chart file, then the terminal height.")] = None,
    orientation: Annotated[Optional[str], typer.Option(help="horizontal or vertical")] = None,
    background: Annotated[Optional[Color], typer.Option(help="Background color.")] = None,
    as_json: Annotated[bool, typer.Option('--json', help="Print the lines as a JSON array.")] = False,
):
    """
    Render a chart definition file.
    """
    chart = _get_chart_from_path(chart_path)
    columns, rows = shutil.get_terminal_size((80, 40))
    try:
        options = chart.get_options(
            width=width or chart.width or columns,
            height=height or chart.height or rows,
            orientation=orientation,
            background_color=background,
        )
    except ValueError as e:
        err_console.print(f"Invalid chart options:\n{escape(str(e))}")
        raise typer.Exit(code=1)

    lines = unicode_bar_chart(chart.get_series(), options)
    if as_json:
        typer.echo(json.dumps(lines))
    else:
        typer.echo('\n'.join(lines))


@app.command()
def inspect(
    chart_path: Annotated[Path, chart_path_arg],
):
    """
    Show the series of a chart file with their resolved colors.
    """
    chart = _get_chart_from_path(chart_path)
    normalized = normalize_series(chart.get_series(), chart.background_color)
    print(
        tabulate(
            [
                [
                    index + 1,
                    item.label or '--',
                    item.color.value,
                    humanize.intcomma(len(item.data)),
                    min(item.present_values(), default='--'),
                    max(item.present_values(), default='--'),
                ]
                for index, item in enumerate(normalized.series)
            ],
            headers=[
                "#",
                "Label",
                "Color",
                "Points",
                "Min",
                "Max",
            ],
        )
    )


@app.command()
def wrap(
    text: Annotated[List[str], typer.Argument(help="Text to wrap. Joined with spaces.")],
    width: Annotated[int, typer.Option(help="Line width.")] = 40,
    align: Annotated[str, typer.Option(help="left, right or center")] = 'left',
    margin: Annotated[int, typer.Option(help="Columns kept free of text.")] = 0,
):
    """
    Word wrap text the way chart labels are wrapped.
    """
    if align not in ('left', 'right', 'center'):
        err_console.print(f"Unknown alignment [red]{escape(align)}[/red]. Use left, right or center.")
        raise typer.Exit(code=1)
    wrapped = wrap_text(' '.join(text), width, align, margin)
    for line in wrapped.lines:
        typer.echo(f"|{line}|")


@app.command()
def demo(
    fps: Annotated[float, typer.Option(help="Frames per second.")] = 60.0,
    points: Annotated[int, typer.Option(help="Data points per series.")] = 4,
):
    """
    Animated demo. Press Escape or q to exit.
    """
    if fps <= 0 or points <= 0:
        err_console.print("--fps and --points must be positive.")
        raise typer.Exit(code=1)
    run_demo(fps=fps, x_size=points)


def main():
    app()


if __name__ == "__main__":
    main()
