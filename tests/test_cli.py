import pytest
import simplejson as json
from typer.testing import CliRunner

from blockchart.cli import app


runner = CliRunner()


@pytest.fixture
def chart_file(tmp_path):
    path = tmp_path / "chart.yaml"
    path.write_text(
        "y_label: true\n"
        "series:\n"
        "  - label: Revenue\n"
        "    data: [1, 2, 3]\n"
        "  - label: Costs\n"
        "    data: [3, 1, null]\n"
    )
    return path


def test_render(chart_file):
    result = runner.invoke(app, ["render", str(chart_file), "--width", "20", "--height", "6"])
    assert result.exit_code == 0, result.output
    assert len(result.output.splitlines()) == 6


def test_render_json(chart_file):
    result = runner.invoke(app, [
        "render", str(chart_file), "--width", "30", "--height", "8",
        "--orientation", "vertical", "--background", "white", "--json",
    ])
    assert result.exit_code == 0, result.output
    lines = json.loads(result.output)
    assert len(lines) == 8
    assert all(isinstance(line, str) for line in lines)


def test_render_invalid_option(chart_file):
    result = runner.invoke(app, ["render", str(chart_file), "--orientation", "diagonal"])
    assert result.exit_code == 1


def test_render_missing_file(tmp_path):
    result = runner.invoke(app, ["render", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 1


def test_render_invalid_file(tmp_path):
    path = tmp_path / "chart.yaml"
    path.write_text("orientation: diagonal\n")
    result = runner.invoke(app, ["render", str(path)])
    assert result.exit_code == 1


def test_inspect(chart_file):
    result = runner.invoke(app, ["inspect", str(chart_file)])
    assert result.exit_code == 0, result.output
    assert "Revenue" in result.output
    assert "red" in result.output
    assert "green" in result.output


def test_wrap():
    result = runner.invoke(app, ["wrap", "a", "b", "c", "--width", "3"])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines()[0] == "|a b|"


def test_wrap_bad_alignment():
    result = runner.invoke(app, ["wrap", "a", "--align", "justify"])
    assert result.exit_code == 1
