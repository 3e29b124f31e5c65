from dataclasses import dataclass
from types import SimpleNamespace

import pytest

from irepl.api import Command, CommandKind, InputEvent, Shutdown, Startup
from irepl.scripts.vim import Mode, State, Vim


@dataclass
class _Key:
    code: object
    modifiers: object = None


class _Mouse:
    column = 1
    row = 1


GLOBALS = SimpleNamespace(cursor_position=(0, 0), prompt_position=(0, 0))


def press(vim, code, modifiers=None, global_vars=GLOBALS):
    return vim.handle_input_event(InputEvent(global_vars, _Key(code, modifiers)))


def cmd(kind, *args):
    return Command(kind, args)


def multiple(*commands):
    return Command(CommandKind.MULTIPLE, (list(commands),))


CONTINUE = cmd(CommandKind.CONTINUE)


def test_basic_motions():
    vim = Vim()
    assert press(vim, "h") == cmd(CommandKind.HANDLE_LEFT)
    assert press(vim, "j") == cmd(CommandKind.HANDLE_DOWN)
    assert press(vim, "k") == cmd(CommandKind.HANDLE_UP)
    assert press(vim, "l") == cmd(CommandKind.HANDLE_RIGHT)
    assert press(vim, "$") == cmd(CommandKind.HANDLE_END)
    assert press(vim, "^") == cmd(CommandKind.HANDLE_HOME)


def test_insert_mode_passes_characters_through():
    vim = Vim()
    assert press(vim, "i") == cmd(CommandKind.SET_THIN_CURSOR)
    assert vim.mode is Mode.INSERT
    assert press(vim, "x") == cmd(CommandKind.HANDLE_CHARACTER, "x")


def test_escape_returns_to_normal_mode():
    vim = Vim()
    press(vim, "i")
    assert press(vim, "esc") == cmd(CommandKind.SET_WIDE_CURSOR)
    assert vim.mode is Mode.NORMAL
    assert press(vim, "h") == cmd(CommandKind.HANDLE_LEFT)


def test_delete_word():
    vim = Vim()
    assert press(vim, "d") == CONTINUE
    assert vim.state is State.DELETE
    assert press(vim, "w") == cmd(CommandKind.DELETE_NEXT_WORD)
    assert vim.state is State.EMPTY


def test_delete_line():
    vim = Vim()
    press(vim, "d")
    assert press(vim, "d") == multiple(
        cmd(CommandKind.HANDLE_HOME), cmd(CommandKind.DELETE_UNTIL_CHAR, "\n", True)
    )
    assert vim.state is State.EMPTY


def test_change_inner_enters_insert_mode():
    vim = Vim()
    press(vim, "c")
    press(vim, "i")
    assert vim.state is State.CHANGE_INNER
    result = press(vim, "(")
    assert result == multiple(
        cmd(CommandKind.SET_THIN_CURSOR),
        cmd(CommandKind.MOVE_BACKWARD_TILL_CHAR, "("),
        cmd(CommandKind.HANDLE_RIGHT),
        cmd(CommandKind.DELETE_UNTIL_CHAR, "(", False),
    )
    assert vim.mode is Mode.INSERT
    assert vim.state is State.EMPTY


def test_delete_inner_stays_in_normal_mode():
    vim = Vim()
    press(vim, "d")
    press(vim, "i")
    assert press(vim, '"') == multiple(
        cmd(CommandKind.MOVE_BACKWARD_TILL_CHAR, '"'),
        cmd(CommandKind.HANDLE_RIGHT),
        cmd(CommandKind.DELETE_UNTIL_CHAR, '"', False),
    )
    assert vim.mode is Mode.NORMAL


def test_find_forward_and_backward():
    vim = Vim()
    press(vim, "f")
    assert press(vim, "f") == cmd(CommandKind.MOVE_FORWARD_TILL_CHAR, "f")
    press(vim, "F", "shift")
    assert press(vim, "z") == cmd(CommandKind.MOVE_BACKWARD_TILL_CHAR, "z")


def test_replace_character():
    vim = Vim()
    assert press(vim, "r") == CONTINUE
    assert press(vim, "q") == multiple(
        cmd(CommandKind.HANDLE_DELETE),
        cmd(CommandKind.HANDLE_CHARACTER, "q"),
        cmd(CommandKind.HANDLE_LEFT),
    )
    assert vim.state is State.EMPTY


def test_gg_moves_up_to_prompt_row():
    vim = Vim()
    global_vars = SimpleNamespace(cursor_position=(4, 5), prompt_position=(0, 2))
    assert press(vim, "g", global_vars=global_vars) == CONTINUE
    result = press(vim, "g", global_vars=global_vars)
    assert result == multiple(*[cmd(CommandKind.HANDLE_UP)] * 3)


def test_unrelated_key_drops_pending_state():
    vim = Vim()
    press(vim, "g")
    assert press(vim, "d") == CONTINUE
    assert vim.state is State.EMPTY


def test_control_modifier_is_ignored_and_resets_state():
    vim = Vim()
    press(vim, "d")
    assert press(vim, "c", "control") is None
    assert vim.state is State.EMPTY


def test_shift_modifier_is_accepted():
    vim = Vim()
    assert press(vim, "A", "shift") == multiple(
        cmd(CommandKind.SET_THIN_CURSOR), cmd(CommandKind.HANDLE_END)
    )
    assert vim.mode is Mode.INSERT


def test_capital_g_depends_on_delete():
    vim = Vim()
    assert press(vim, "G") == cmd(CommandKind.GO_TO_LAST_ROW)
    press(vim, "d")
    assert press(vim, "G") == cmd(CommandKind.DELETE_TILL_END)


def test_unknown_key_continues():
    vim = Vim()
    assert press(vim, "z") == CONTINUE


def test_non_key_event_is_ignored():
    vim = Vim()
    assert vim.handle_input_event(InputEvent(GLOBALS, _Mouse())) is None


def test_start_up_and_clean_up_reset():
    vim = Vim()
    press(vim, "i")
    assert vim.run(Startup(GLOBALS)) == cmd(CommandKind.SET_WIDE_CURSOR)
    assert vim.mode is Mode.NORMAL
    press(vim, "d")
    assert vim.run(Shutdown(GLOBALS)) == cmd(CommandKind.SET_WIDE_CURSOR)
    assert vim.state is State.EMPTY


def test_run_dispatches_input_events():
    vim = Vim()
    assert vim.run(InputEvent(GLOBALS, _Key("x"))) == multiple(
        cmd(CommandKind.HANDLE_DELETE), cmd(CommandKind.PRINT_INPUT)
    )


def test_run_rejects_other_hooks():
    with pytest.raises(ValueError):
        Vim().run("not a hook")