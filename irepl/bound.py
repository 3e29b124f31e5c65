"""Per-row column limits of the input area."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Bound:
    """The last usable column of each terminal row."""

    width: int
    height: int
    bound: list[int] = field(init=False)

    def __post_init__(self) -> None:
        if self.width < 1:
            raise ValueError("width must be at least 1")
        if self.height < 0:
            raise ValueError("height must not be negative")
        self.bound = [self.width - 1] * self.height

    def reset(self) -> None:
        """Give every row the full terminal width again."""
        self.bound = [self.width - 1] * self.height

    def get_bound(self, row: int) -> int:
        """The row's last column; rows outside the screen use the full width."""
        if 0 <= row < len(self.bound):
            return self.bound[row]
        return self.width - 1

    def set_bound(self, row: int, col: int) -> None:
        if not 0 <= row < len(self.bound):
            raise IndexError("row is outside the screen")
        self.bound[row] = col

    def insert_bound(self, row: int, col: int) -> None:
        """Insert a row bound, rotating the last bound into row 0."""
        if not 0 <= row <= len(self.bound):
            raise IndexError("row is outside the screen")
        self.bound.insert(row, col)
        self.bound[0] = self.bound.pop()

    def bounds_sum(self, start_row: int, end_row: int, prompt_len: int) -> int:
        """Number of input cells in rows start_row up to, not including, end_row."""
        return sum(b + 1 - prompt_len for b in self.bound[start_row:end_row])