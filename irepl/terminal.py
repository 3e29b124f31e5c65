"""ANSI control sequences written to a terminal stream."""

from __future__ import annotations

import os
import select
import sys
from enum import Enum
from typing import TextIO

from .api import Color

_CSI = "\x1b["

_COLOR_CODES = {
    Color.BLACK: 0,
    Color.DARK_RED: 1,
    Color.DARK_GREEN: 2,
    Color.DARK_YELLOW: 3,
    Color.DARK_BLUE: 4,
    Color.DARK_MAGENTA: 5,
    Color.DARK_CYAN: 6,
    Color.GREY: 7,
    Color.DARK_GREY: 8,
    Color.RED: 9,
    Color.GREEN: 10,
    Color.YELLOW: 11,
    Color.BLUE: 12,
    Color.MAGENTA: 13,
    Color.CYAN: 14,
    Color.WHITE: 15,
}


class ClearType(Enum):
    """Which part of the screen a clear affects."""

    ALL = "2J"
    PURGE = "3J"
    FROM_CURSOR_DOWN = "J"
    FROM_CURSOR_UP = "1J"
    CURRENT_LINE = "2K"
    UNTIL_NEW_LINE = "K"


def _color_sequence(color: Color, layer: str) -> str:
    if color is Color.RESET:
        return f"{_CSI}{layer}9m"
    return f"{_CSI}{layer}8;5;{_COLOR_CODES[color]}m"


class Terminal:
    """Writes cursor, colour and screen commands to a text stream without flushing."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def _queue(self, text: str) -> None:
        self.stream.write(text)

    def flush(self) -> None:
        self.stream.flush()

    def save_position(self) -> None:
        self._queue("\x1b7")

    def restore_position(self) -> None:
        self._queue("\x1b8")

    def move_up(self, n: int) -> None:
        self._queue(f"{_CSI}{n}A")

    def move_down(self, n: int) -> None:
        self._queue(f"{_CSI}{n}B")

    def show(self) -> None:
        self._queue(f"{_CSI}?25h")

    def hide(self) -> None:
        self._queue(f"{_CSI}?25l")

    def goto(self, x: int, y: int) -> None:
        """Move to column x, row y, both counted from zero."""
        self._queue(f"{_CSI}{y + 1};{x + 1}H")

    def size(self) -> tuple[int, int]:
        """The terminal's (width, height); raises OSError when there is no terminal."""
        try:
            fd = self.stream.fileno()
        except (AttributeError, OSError, ValueError):
            fd = 1
        width, height = os.get_terminal_size(fd)
        return width, height

    def position(self) -> tuple[int, int]:
        """Ask the terminal for the cursor's (column, row), counted from zero."""
        if os.name != "posix" or not sys.stdin.isatty():
            raise OSError("the cursor position cannot be queried")
        import termios
        import tty

        fd = sys.stdin.fileno()
        saved = termios.tcgetattr(fd)
        reply = ""
        try:
            tty.setraw(fd)
            sys.stdout.write(f"{_CSI}6n")
            sys.stdout.flush()
            while not reply.endswith("R"):
                ready, _, _ = select.select([fd], [], [], 2.0)
                if not ready:
                    raise OSError("the terminal did not report the cursor position")
                reply += os.read(fd, 1).decode("ascii", "replace")
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)
        try:
            row, col = reply[reply.rindex("[") + 1 : -1].split(";")
            return int(col) - 1, int(row) - 1
        except ValueError:
            raise OSError("malformed cursor position report") from None

    def scroll_up(self, n: int) -> None:
        self._queue(f"{_CSI}{n}S")

    def clear(self, clear_type: ClearType) -> None:
        self._queue(f"{_CSI}{clear_type.value}")

    def write(self, value: object) -> None:
        self._queue(str(value))

    def write_with_color(self, value: object, color: Color) -> None:
        """Write value in color, then reset the colour."""
        self.set_fg(color)
        self.write(value)
        self.reset_color()

    def reset_color(self) -> None:
        self._queue(f"{_CSI}0m")

    def set_fg(self, color: Color) -> None:
        self._queue(_color_sequence(color, "3"))

    def set_bg(self, color: Color) -> None:
        self._queue(_color_sequence(color, "4"))

    def set_title(self, title: str) -> None:
        self._queue(f"\x1b]0;{title}\x07")