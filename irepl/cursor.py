"""Tracking the terminal cursor over a multi-row input area."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from .bound import Bound
from .terminal import Terminal

_FALLBACK_SIZE = (400, 400)


@dataclass
class CursorPosition:
    """Where the cursor is and where the current input starts, as (column, row)."""

    current_pos: tuple[int, int] = (0, 0)
    starting_pos: tuple[int, int] = (0, 0)


class Cursor:
    """A cursor over input drawn after a prompt, wrapping at per-row bounds.

    Every movement is mirrored on the terminal as a queued control sequence.
    """

    def __init__(
        self,
        terminal: Terminal | None = None,
        prompt_len: int = 0,
        size: tuple[int, int] | None = None,
        position: tuple[int, int] | None = None,
    ) -> None:
        self.terminal = terminal if terminal is not None else Terminal()
        self.prompt_len = prompt_len
        if size is None:
            try:
                size = self.terminal.size()
            except OSError:
                size = _FALLBACK_SIZE
        if position is None:
            try:
                position = self.terminal.position()
            except OSError:
                position = (0, 0)
        self.pos = CursorPosition(tuple(position), (0, position[1]))
        self._saved = replace(self.pos)
        self.bound = Bound(*size)

    @property
    def width(self) -> int:
        return self.bound.width

    @property
    def height(self) -> int:
        return self.bound.height

    @property
    def current_pos(self) -> tuple[int, int]:
        return self.pos.current_pos

    @current_pos.setter
    def current_pos(self, value: tuple[int, int]) -> None:
        self.pos.current_pos = tuple(value)

    @property
    def starting_pos(self) -> tuple[int, int]:
        return self.pos.starting_pos

    @starting_pos.setter
    def starting_pos(self, value: tuple[int, int]) -> None:
        self.pos.starting_pos = tuple(value)

    def save_position(self) -> None:
        """Remember the position, here and on the terminal."""
        self._saved = replace(self.pos)
        self.terminal.save_position()

    def restore_position(self) -> None:
        """Return to the last saved position."""
        self.pos = replace(self._saved)
        self.terminal.restore_position()

    def move_right_unbounded(self) -> None:
        """Move right, wrapping only at the terminal's last column."""
        self._move_right_inner(self.bound.width - 1)

    def move_right(self) -> None:
        """Move right, wrapping at the current row's bound."""
        self._move_right_inner(self.current_row_bound())

    def move_right_inner_optimized(self) -> None:
        """Move right after a character was printed; only a wrap moves the terminal cursor."""
        x, y = self.pos.current_pos
        if x == self.bound.width - 1:
            self.pos.current_pos = (self.prompt_len, y + 1)
            self.goto_internal_pos()
        else:
            self.pos.current_pos = (x + 1, y)

    def _move_right_inner(self, bound: int) -> None:
        x, y = self.pos.current_pos
        if x == bound:
            self.pos.current_pos = (self.prompt_len, y + 1)
        else:
            self.pos.current_pos = (x + 1, y)
        self.goto_internal_pos()

    def move_left(self) -> None:
        """Move left, wrapping to the end of the previous row at the input start."""
        x, y = self.pos.current_pos
        if x == self.prompt_len:
            self.pos.current_pos = (self.previous_row_bound(), y - 1)
        else:
            self.pos.current_pos = (x - 1, y)
        self.goto_internal_pos()

    def move_up_bounded(self, count: int) -> None:
        """Move up and keep the column within the new row's bound."""
        self.move_up(count)
        x, y = self.pos.current_pos
        self.pos.current_pos = (min(x, self.current_row_bound()), y)
        self.goto_internal_pos()

    def move_up(self, count: int) -> None:
        """Move up count rows, stopping at the top row."""
        x, y = self.pos.current_pos
        self.pos.current_pos = (x, max(y - count, 0))
        self.terminal.move_up(count)

    def move_down_bounded(self, count: int, buffer: Iterable[str]) -> None:
        """Move down, staying within the row bound and the end of the input."""
        self.move_down(count)
        x, y = self.pos.current_pos
        x = min(x, self.current_row_bound())
        last_x, last_y = self.input_last_pos(buffer)
        if y >= last_y and x >= last_x:
            x, y = last_x, last_y
        self.pos.current_pos = (x, y)
        self.goto_internal_pos()

    def move_down(self, count: int) -> None:
        x, y = self.pos.current_pos
        self.pos.current_pos = (x, y + count)
        self.terminal.move_down(count)

    def use_current_row_as_starting_row(self) -> None:
        self.pos.starting_pos = (self.pos.starting_pos[0], self.pos.current_pos[1])

    def previous_row_bound(self) -> int:
        """The bound of the row above; there is none above the top row."""
        row = self.pos.current_pos[1]
        if row == 0:
            raise IndexError("the cursor is on the first row")
        return self.bound.get_bound(row - 1)

    def current_row_bound(self) -> int:
        return self.bound.get_bound(self.pos.current_pos[1])

    def reset_bound(self) -> None:
        self.bound.reset()

    def bound_current_row_at_current_col(self) -> None:
        """Make the current column the last one of the current row."""
        x, y = self.pos.current_pos
        self.bound.set_bound(y, x)

    def screen_height_overflow_by_new_lines(
        self, buffer: Iterable[str], new_lines: int
    ) -> int:
        """How many rows adding new_lines to the input would push past the screen."""
        return max(new_lines + self.input_last_pos(buffer)[1] - (self.bound.height - 1), 0)

    def goto_internal_pos(self) -> None:
        """Move the terminal cursor to the tracked position."""
        self.terminal.goto(*self.pos.current_pos)

    def goto(self, x: int, y: int) -> None:
        self.pos.current_pos = (x, y)
        self.goto_internal_pos()

    def hide(self) -> None:
        self.terminal.hide()

    def show(self) -> None:
        self.terminal.show()

    def goto_start(self) -> None:
        """Go to where the input area starts, before the prompt."""
        self.pos.current_pos = self.pos.starting_pos
        self.goto_internal_pos()

    def goto_input_start_col(self) -> None:
        """Go to the first input column, just after the prompt."""
        start_x, start_y = self.pos.starting_pos
        self.pos.current_pos = (start_x + self.prompt_len, start_y)
        self.goto_internal_pos()

    def is_at_last_terminal_col(self) -> bool:
        return self.pos.current_pos[0] == self.bound.width - 1

    def is_at_last_terminal_row(self) -> bool:
        return self.pos.current_pos[1] == self.bound.height - 1

    def is_at_line_end(self) -> bool:
        return self.pos.current_pos[0] == self.current_row_bound()

    def is_at_line_start(self) -> bool:
        return self.pos.current_pos[0] == self.prompt_len

    def is_at_col(self, col: int) -> bool:
        return self.pos.current_pos[0] == col

    def buffer_pos_to_cursor_pos(self, buffer: Iterable[str]) -> tuple[int, int]:
        """Where the end of the buffer falls, relative to the input start."""
        chars = list(buffer)
        max_line_chars = self.bound.width - self.prompt_len
        y = chars.count("\n")
        x = 0
        for c in chars:
            x = 0 if c == "\n" else x + 1
            if x == max_line_chars:
                x = 0
                y += 1
        return x, y

    def input_last_pos(self, buffer: Iterable[str]) -> tuple[int, int]:
        """The screen position just after the end of the buffer."""
        rel_x, rel_y = self.buffer_pos_to_cursor_pos(buffer)
        return rel_x + self.prompt_len, rel_y + self.pos.starting_pos[1]

    def move_to_input_last_row(self, buffer: Iterable[str]) -> None:
        self.goto(0, self.input_last_pos(buffer)[1])

    def goto_last_row(self, buffer: Iterable[str]) -> None:
        """Go to the input's last row, keeping the column within its bound."""
        x = self.pos.current_pos[0]
        y = self.input_last_pos(buffer)[1]
        self.pos.current_pos = (x, y)
        self.pos.current_pos = (min(x, self.current_row_bound()), y)
        self.goto_internal_pos()

    def is_at_first_input_line(self) -> bool:
        return self.pos.current_pos[1] == self.pos.starting_pos[1]

    def is_at_last_input_line(self, buffer: Iterable[str]) -> bool:
        return self.pos.current_pos[1] == self.input_last_pos(buffer)[1]

    def cursor_pos_to_buffer_pos(self) -> int:
        """The buffer index the cursor stands on."""
        x, y = self.pos.current_pos
        return (
            x
            - self.prompt_len
            + self.bound.bounds_sum(self.pos.starting_pos[1], y, self.prompt_len)
        )

    def goto_next_row_terminal_start(self) -> None:
        self.goto(0, self.pos.current_pos[1] + 1)

    def update_dimensions(self, width: int, height: int) -> None:
        """Adopt a new terminal size, resetting all row bounds."""
        self.bound = Bound(width, height)