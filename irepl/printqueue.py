"""Queues of coloured text pieces waiting to be printed."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .api import Color


@dataclass(frozen=True)
class PrinterItem:
    """A piece of text in one colour, or a line break."""

    text: str = ""
    color: Color = Color.WHITE
    is_new_line: bool = False

    @classmethod
    def new_line(cls) -> PrinterItem:
        return cls(is_new_line=True)

    @classmethod
    def char(cls, c: str, color: Color) -> PrinterItem:
        if len(c) != 1:
            raise ValueError("a character item holds exactly one character")
        return cls(c, color)

    @classmethod
    def string(cls, text: str, color: Color) -> PrinterItem:
        return cls(text, color)

    @classmethod
    def slice(cls, text: str, start: int, stop: int, color: Color) -> PrinterItem:
        """An item holding text[start:stop]; the range must lie within text."""
        if not 0 <= start <= stop <= len(text):
            raise IndexError("slice range is outside the text")
        return cls(text[start:stop], color)


class PrintQueue:
    """Items printed in order; iterating consumes them from the front."""

    def __init__(self, items: Iterable[PrinterItem] | PrinterItem = ()) -> None:
        if isinstance(items, PrinterItem):
            items = (items,)
        self.items: deque[PrinterItem] = deque(items)

    def __iter__(self) -> Iterator[PrinterItem]:
        return self

    def __next__(self) -> PrinterItem:
        if not self.items:
            raise StopIteration
        return self.items.popleft()

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f"PrintQueue({list(self.items)!r})"

    def copy(self) -> PrintQueue:
        return PrintQueue(self.items)

    def add_new_line(self, num: int) -> None:
        """Append num line breaks."""
        self.items.extend(PrinterItem.new_line() for _ in range(num))

    def push(self, item: PrinterItem) -> None:
        self.items.append(item)

    def push_front(self, item: PrinterItem) -> None:
        self.items.appendleft(item)

    def append(self, other: PrintQueue) -> None:
        """Move all of other's items to the end of this queue."""
        self.items.extend(other.items)
        other.items.clear()

    def is_empty(self) -> bool:
        return not self.items


def default_process_fn(buffer: Iterable[str]) -> PrintQueue:
    """Render each character in white, turning newlines into line breaks."""
    queue = PrintQueue()
    for c in buffer:
        if c == "\n":
            queue.push(PrinterItem.new_line())
        else:
            queue.push(PrinterItem.char(c, Color.WHITE))
    return queue