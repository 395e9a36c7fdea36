import io
import re

import pytest

from deathstar.screen import Color, Screen


class _FakeTerminal:
    normal = "<normal>"
    home = "<home>"
    clear = "<clear>"

    def move_xy(self, x, y):
        return f"<{x},{y}>"

    def color(self, n):
        return f"<fg{n}>"

    def on_color(self, n):
        return f"<bg{n}>"


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def screen(stream):
    return Screen(_FakeTerminal(), stream)


def _render(screen, stream):
    screen.flush()
    return stream.getvalue()


def test_nothing_written_before_flush(screen, stream):
    screen.write(3, 4, "hello")
    assert stream.getvalue() == ""
    output = _render(screen, stream)
    assert output == "<3,4>hello"


def test_write_with_colors_emits_style(screen, stream):
    screen.write(1, 2, "x", Color.RED1, Color.GRAY1)
    assert screen.fg is Color.RED1
    output = _render(screen, stream)
    assert output == "<1,2><normal><fg1><bg7>x"


def test_colors_persist_between_writes(screen, stream):
    screen.write(0, 0, "a", Color.CYAN1, Color.BLACK)
    screen.write(0, 1, "b", fg=Color.YELLOW1)
    screen.flush()
    assert stream.getvalue().endswith("<0,1><normal><fg3><bg0>b")
    assert screen.bg is Color.BLACK
    assert screen.fg is Color.YELLOW1


def test_clear_and_move(screen, stream):
    screen.clear()
    screen.move(5, 6)
    output = _render(screen, stream)
    assert output == "<home><clear><5,6>"


def test_flush_empties_buffer(screen, stream):
    screen.write(0, 0, "once")
    first = _render(screen, stream)
    second = _render(screen, stream)
    assert first == "<0,0>once"
    assert second == first


def test_integer_colors_accepted(screen):
    screen.write(0, 0, "", 4, 7)
    assert screen.fg is Color.RED1
    assert screen.bg is Color.GRAY1


@pytest.mark.parametrize(
    "color, ansi",
    [(Color.BLACK, 0), (Color.BLUE1, 4), (Color.GREEN1, 2), (Color.WHITE, 15)],
)
def test_ansi_mapping(color, ansi):
    assert color.ansi == ansi


def test_every_color_reaches_a_distinct_terminal_color(screen, stream):
    colors = list(Color)
    for color in colors:
        screen.write(0, 0, "x", color, Color.BLACK)
    output = _render(screen, stream)
    codes = [int(code) for code in re.findall(r"<fg(\d+)>", output)]
    assert sorted(codes) == list(range(16))
    assert all((code & 8) == (color & 8) for color, code in zip(colors, codes))