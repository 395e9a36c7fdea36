"""Positioned, coloured text output on a terminal."""

from __future__ import annotations

import sys
from enum import IntEnum


class Color(IntEnum):
    """Console palette: bit 1 blue, bit 2 green, bit 4 red, bit 8 bright."""

    BLACK = 0
    BLUE1 = 1
    GREEN1 = 2
    CYAN1 = 3
    RED1 = 4
    MAGENTA1 = 5
    YELLOW1 = 6
    GRAY1 = 7
    GRAY2 = 8
    BLUE2 = 9
    GREEN2 = 10
    CYAN2 = 11
    RED2 = 12
    MAGENTA2 = 13
    YELLOW2 = 14
    WHITE = 15

    @property
    def ansi(self):
        """The matching index in the ANSI 16-colour palette."""
        value = int(self)
        return ((value & 1) << 2) | (value & 2) | ((value & 4) >> 2) | (value & 8)


class Screen:
    """Collects drawing commands and sends them to the stream on flush."""

    def __init__(self, terminal=None, stream=None):
        if terminal is None:
            import blessed

            terminal = blessed.Terminal()
        self.terminal = terminal
        self.stream = stream if stream is not None else sys.stdout
        self.fg = Color.GRAY1
        self.bg = Color.BLACK
        self._pending = []

    def _style(self):
        term = self.terminal
        return term.normal + term.color(self.fg.ansi) + term.on_color(self.bg.ansi)

    def write(self, x, y, text, fg=None, bg=None):
        """Draw text at column x, row y; given colours stay in effect afterwards."""
        parts = [self.terminal.move_xy(x, y)]
        if fg is not None or bg is not None:
            if fg is not None:
                self.fg = Color(fg)
            if bg is not None:
                self.bg = Color(bg)
            parts.append(self._style())
        parts.append(text)
        self._pending.append("".join(parts))

    def move(self, x, y):
        """Place the cursor at column x, row y."""
        self._pending.append(self.terminal.move_xy(x, y))

    def clear(self):
        """Blank the whole screen."""
        self._pending.append(self.terminal.home + self.terminal.clear)

    def flush(self):
        """Send everything drawn so far to the stream."""
        if self._pending:
            self.stream.write("".join(self._pending))
            self._pending = []
        self.stream.flush()