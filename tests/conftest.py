import pytest

from blockchart.text_width import strip_ansi


@pytest.fixture
def visible():
    """ lines without their escapes """
    def _visible(lines):
        return [strip_ansi(line) for line in lines]
    return _visible
