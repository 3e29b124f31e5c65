import pytest

from irepl.api import Color
from irepl.buffer import Buffer
from irepl.printqueue import PrinterItem, PrintQueue, default_process_fn


def test_default_process_fn_splits_lines():
    queue = default_process_fn(Buffer("alloc\nprint"))
    items = list(queue)
    assert len(items) == len("alloc\nprint")
    assert items[5].is_new_line
    assert all(not i.is_new_line for idx, i in enumerate(items) if idx != 5)
    assert "".join(i.text for i in items if not i.is_new_line) == "allocprint"
    assert {i.color for i in items if not i.is_new_line} == {Color.WHITE}


def test_iteration_consumes_queue():
    queue = default_process_fn(Buffer("ab"))
    assert len(list(queue)) == 2
    assert queue.is_empty()
    assert list(queue) == []


def test_push_and_push_front_order():
    queue = PrintQueue()
    queue.push(PrinterItem.string("b", Color.RED))
    queue.push_front(PrinterItem.string("a", Color.BLUE))
    queue.push(PrinterItem.new_line())
    items = list(queue)
    assert [i.text for i in items[:2]] == ["a", "b"]
    assert items[2].is_new_line


def test_add_new_line():
    queue = PrintQueue()
    queue.add_new_line(3)
    assert len(queue) == 3
    assert all(item.is_new_line for item in queue)


def test_append_moves_items():
    first = PrintQueue(PrinterItem.string("x", Color.RED))
    second = PrintQueue([PrinterItem.string("y", Color.RED), PrinterItem.new_line()])
    first.append(second)
    assert second.is_empty()
    assert len(first) == 3
    assert [i.text for i in first][:2] == ["x", "y"]


def test_queue_from_single_item():
    item = PrinterItem.char("z", Color.GREEN)
    assert list(PrintQueue(item)) == [item]


def test_copy_leaves_original():
    queue = default_process_fn("abc")
    dup = queue.copy()
    assert len(list(dup)) == 3
    assert len(queue) == 3


def test_slice_item():
    item = PrinterItem.slice("hello world", 6, 11, Color.CYAN)
    assert item.text == "world"
    assert item.color is Color.CYAN
    with pytest.raises(IndexError):
        PrinterItem.slice("abc", 2, 5, Color.CYAN)
    with pytest.raises(IndexError):
        PrinterItem.slice("abc", 2, 1, Color.CYAN)


def test_char_item_needs_one_character():
    with pytest.raises(ValueError):
        PrinterItem.char("ab", Color.RED)
    with pytest.raises(ValueError):
        PrinterItem.char("", Color.RED)