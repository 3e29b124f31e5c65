"""A script that gives the input line a small set of vi-style modal key bindings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from ..api import Command, CommandKind, InputEvent, Shutdown, Startup


class State(Enum):
    """A pending operator or motion waiting for its next key."""

    EMPTY = auto()
    CHANGE = auto()
    CHANGE_INNER = auto()
    DELETE = auto()
    DELETE_INNER = auto()
    GOTO = auto()
    FIND_FORWARD = auto()
    FIND_BACKWARD = auto()
    REPLACE = auto()


class Mode(Enum):
    NORMAL = auto()
    INSERT = auto()


def _cmd(kind: CommandKind, *args: object) -> Command:
    return Command(kind, args)


def _multiple(*commands: Command) -> Command:
    return Command(CommandKind.MULTIPLE, (list(commands),))


_CONTINUE = _cmd(CommandKind.CONTINUE)
_THIN = _cmd(CommandKind.SET_THIN_CURSOR)
_WIDE = _cmd(CommandKind.SET_WIDE_CURSOR)
_LEFT = _cmd(CommandKind.HANDLE_LEFT)
_RIGHT = _cmd(CommandKind.HANDLE_RIGHT)
_UP = _cmd(CommandKind.HANDLE_UP)
_DOWN = _cmd(CommandKind.HANDLE_DOWN)
_HOME = _cmd(CommandKind.HANDLE_HOME)
_END = _cmd(CommandKind.HANDLE_END)
_DELETE = _cmd(CommandKind.HANDLE_DELETE)
_CTRL_LEFT = _cmd(CommandKind.HANDLE_CTRL_LEFT)
_CTRL_RIGHT = _cmd(CommandKind.HANDLE_CTRL_RIGHT)
_DELETE_NEXT_WORD = _cmd(CommandKind.DELETE_NEXT_WORD)


def _char_of(event: object) -> str | None:
    code = getattr(event, "code", None)
    for candidate in (getattr(event, "char", None), code, getattr(code, "char", None)):
        if (
            isinstance(candidate, str)
            and not isinstance(candidate, Enum)
            and len(candidate) == 1
        ):
            return candidate
    return None


def _is_escape(code: object) -> bool:
    names = (getattr(code, "name", None), getattr(code, "value", None), code)
    return any(isinstance(n, str) and n.lower() in {"esc", "escape"} for n in names)


def _is_shift(modifier: object) -> bool:
    name = getattr(modifier, "name", modifier)
    return isinstance(name, str) and name.lower() == "shift"


def _is_plain(modifiers: object) -> bool:
    """True when no modifier, or only shift, is held."""
    if not modifiers:
        return True
    if isinstance(modifiers, (set, frozenset, list, tuple)):
        return all(_is_shift(m) for m in modifiers)
    return _is_shift(modifiers)


@dataclass
class Vim:
    """Normal and insert modes with pending operators such as `d`, `c`, `f` and `r`."""

    NAME = "Vim"
    HOOKS = (InputEvent.NAME, Shutdown.NAME, Startup.NAME)
    VERSION_REQUIREMENT = ">=1.34.0"

    state: State = State.EMPTY
    mode: Mode = Mode.NORMAL

    def _reset(self) -> Command:
        self.state = State.EMPTY
        self.mode = Mode.NORMAL
        return _WIDE

    def start_up(self, hook: Startup) -> Command:
        """Start in normal mode with a wide cursor."""
        return self._reset()

    def clean_up(self, hook: Shutdown) -> Command:
        """Leave in normal mode with a wide cursor."""
        return self._reset()

    def handle_input_event(self, hook: InputEvent) -> Command | None:
        """Translate one key event into a REPL command; None lets the REPL handle it."""
        match hook:
            case InputEvent(global_vars, event):
                pass
            case _:
                raise ValueError(f"unsupported hook: {type(hook).__name__}")
        command = self._dispatch(global_vars, event)
        if command != _CONTINUE:
            self.state = State.EMPTY
        return command

    def _dispatch(self, global_vars: object, event: object) -> Command | None:
        if not hasattr(event, "code"):
            return None
        char = _char_of(event)
        if char is not None:
            if not _is_plain(getattr(event, "modifiers", None)):
                return None
            if self.mode is Mode.INSERT:
                return _cmd(CommandKind.HANDLE_CHARACTER, char)
            pending = self._pending(char)
            if pending is not None:
                return pending
            return self._normal(char, global_vars)
        if _is_escape(getattr(event, "code")):
            self.mode = Mode.NORMAL
            return _WIDE
        return None

    def _pending(self, c: str) -> Command | None:
        match self.state:
            case State.FIND_FORWARD:
                return _cmd(CommandKind.MOVE_FORWARD_TILL_CHAR, c)
            case State.FIND_BACKWARD:
                return _cmd(CommandKind.MOVE_BACKWARD_TILL_CHAR, c)
            case State.REPLACE:
                return _multiple(_DELETE, _cmd(CommandKind.HANDLE_CHARACTER, c), _LEFT)
            case State.CHANGE_INNER:
                self.mode = Mode.INSERT
                return _multiple(
                    _THIN,
                    _cmd(CommandKind.MOVE_BACKWARD_TILL_CHAR, c),
                    _RIGHT,
                    _cmd(CommandKind.DELETE_UNTIL_CHAR, c, False),
                )
            case State.DELETE_INNER:
                return _multiple(
                    _cmd(CommandKind.MOVE_BACKWARD_TILL_CHAR, c),
                    _RIGHT,
                    _cmd(CommandKind.DELETE_UNTIL_CHAR, c, False),
                )
        return None

    def _begin(self, state: State) -> Command:
        """Start a pending state from empty; any other state is dropped."""
        self.state = state if self.state is State.EMPTY else State.EMPTY
        return _CONTINUE

    def _insert(self, *commands: Command) -> Command:
        self.mode = Mode.INSERT
        return _multiple(_THIN, *commands)

    def _normal(self, c: str, global_vars: object) -> Command:
        match c:
            case "h":
                return _LEFT
            case "j":
                return _DOWN
            case "k":
                return _UP
            case "l":
                return _RIGHT
            case "b":
                if self.state is State.DELETE:
                    return _multiple(_CTRL_LEFT, _DELETE_NEXT_WORD)
                if self.state is State.CHANGE:
                    return self._insert(_CTRL_LEFT, _DELETE_NEXT_WORD)
                return _CTRL_LEFT
            case "w":
                if self.state is State.DELETE:
                    return _DELETE_NEXT_WORD
                if self.state is State.CHANGE:
                    return self._insert(_DELETE_NEXT_WORD)
                return _CTRL_RIGHT
            case "g":
                if self.state is State.GOTO:
                    self.state = State.EMPTY
                    rows = global_vars.cursor_position[1] - global_vars.prompt_position[1]
                    return _multiple(*[_UP] * rows)
                return self._begin(State.GOTO)
            case "G":
                if self.state is State.DELETE:
                    return _cmd(CommandKind.DELETE_TILL_END)
                return _cmd(CommandKind.GO_TO_LAST_ROW)
            case "r":
                if self.state is State.EMPTY:
                    self.state = State.REPLACE
                return _CONTINUE
            case "x":
                return _multiple(_DELETE, _cmd(CommandKind.PRINT_INPUT))
            case "$":
                return _END
            case "^":
                return _HOME
            case "f":
                return self._begin(State.FIND_FORWARD)
            case "F":
                return self._begin(State.FIND_BACKWARD)
            case "i":
                if self.state is State.CHANGE:
                    self.state = State.CHANGE_INNER
                    return _CONTINUE
                if self.state is State.DELETE:
                    self.state = State.DELETE_INNER
                    return _CONTINUE
                self.mode = Mode.INSERT
                return _THIN
            case "I":
                return self._insert(_HOME)
            case "o":
                return self._insert(_END, _cmd(CommandKind.HANDLE_ALT_ENTER))
            case "a":
                return self._insert(_RIGHT)
            case "A":
                return self._insert(_END)
            case "d":
                if self.state is State.DELETE:
                    self.state = State.EMPTY
                    return _multiple(_HOME, _cmd(CommandKind.DELETE_UNTIL_CHAR, "\n", True))
                return self._begin(State.DELETE)
            case "D":
                return _cmd(CommandKind.DELETE_UNTIL_CHAR, "\n", False)
            case "c":
                if self.state is State.CHANGE:
                    self.state = State.EMPTY
                    return self._insert(
                        _HOME, _cmd(CommandKind.DELETE_UNTIL_CHAR, "\n", False)
                    )
                return self._begin(State.CHANGE)
            case "C":
                return self._insert(_cmd(CommandKind.DELETE_UNTIL_CHAR, "\n", False))
        return _CONTINUE

    def run(self, hook: InputEvent | Shutdown | Startup) -> Command | None:
        """Answer one hook."""
        match hook:
            case InputEvent():
                return self.handle_input_event(hook)
            case Shutdown():
                return self.clean_up(hook)
            case Startup():
                return self.start_up(hook)
            case _:
                raise ValueError(f"unsupported hook: {type(hook).__name__}")