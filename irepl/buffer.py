"""An editable line buffer of characters with an insertion position."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class Buffer:
    """Characters being edited, with `pos` marking where the next one goes."""

    def __init__(self, text: Iterable[str] = "") -> None:
        self.chars: list[str] = list(text)
        self.pos = 0

    def __len__(self) -> int:
        return len(self.chars)

    def __iter__(self) -> Iterator[str]:
        return iter(self.chars)

    def __str__(self) -> str:
        return "".join(self.chars)

    def __repr__(self) -> str:
        return f"Buffer({str(self)!r}, pos={self.pos})"

    def copy(self) -> Buffer:
        """An independent copy with the same position."""
        other = Buffer(self.chars)
        other.pos = self.pos
        return other

    def insert(self, c: str) -> None:
        """Insert a character at the position and move past it."""
        if self.pos > len(self.chars):
            raise IndexError("insertion position is past the end of the buffer")
        self.chars.insert(self.pos, c)
        self.move_forward()

    def insert_str(self, s: str) -> None:
        """Insert each character of s in turn."""
        for c in s:
            self.insert(c)

    def remove_current_char(self) -> str | None:
        """Remove and return the character at the position, if there is one."""
        if 0 <= self.pos < len(self.chars):
            return self.chars.pop(self.pos)
        return None

    def next_char(self) -> str | None:
        """The character after the position."""
        return self.get(self.pos + 1)

    def current_char(self) -> str | None:
        """The character at the position."""
        return self.get(self.pos)

    def previous_char(self) -> str | None:
        """The character before the position."""
        if self.pos > 0:
            return self.get(self.pos - 1)
        return None

    def move_forward(self) -> None:
        """Advance the position by one."""
        self.pos += 1

    def move_backward(self) -> None:
        """Step the position back by one, stopping at the start."""
        if self.pos != 0:
            self.pos -= 1

    def clear(self) -> None:
        """Empty the buffer and return to the start."""
        self.chars.clear()
        self.pos = 0

    def is_at_string_line_start(self) -> bool:
        """True when only whitespace precedes the position on its line."""
        if not self.chars:
            return True
        before = "".join(self.chars[: self.pos])
        line = before.rsplit("\n", 1)[-1]
        return all(c.isspace() for c in line)

    def is_at_start(self) -> bool:
        return self.pos == 0

    def is_at_end(self) -> bool:
        return self.pos == len(self.chars)

    def goto_start(self) -> None:
        self.pos = 0

    def goto_end(self) -> None:
        self.pos = len(self.chars)

    def push_str(self, s: str) -> None:
        """Append s and move the position to the end."""
        self.chars.extend(s)
        self.pos = len(self.chars)

    def get(self, idx: int) -> str | None:
        """The character at idx, or None when idx is out of range."""
        if 0 <= idx < len(self.chars):
            return self.chars[idx]
        return None

    def last(self) -> str | None:
        """The final character, or None when empty."""
        return self.chars[-1] if self.chars else None

    def take(self) -> list[str]:
        """Return the characters and leave the buffer empty."""
        chars, self.chars = self.chars, []
        self.pos = 0
        return chars