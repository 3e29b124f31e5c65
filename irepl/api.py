"""Types exchanged between the REPL and its scripts: events, commands, hooks and shared state."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum, IntFlag
from pathlib import Path
from typing import Any, ClassVar


class Color(Enum):
    """Terminal foreground colours."""

    RESET = "Reset"
    BLACK = "Black"
    DARK_GREY = "DarkGrey"
    RED = "Red"
    DARK_RED = "DarkRed"
    GREEN = "Green"
    DARK_GREEN = "DarkGreen"
    YELLOW = "Yellow"
    DARK_YELLOW = "DarkYellow"
    BLUE = "Blue"
    DARK_BLUE = "DarkBlue"
    MAGENTA = "Magenta"
    DARK_MAGENTA = "DarkMagenta"
    CYAN = "Cyan"
    DARK_CYAN = "DarkCyan"
    WHITE = "White"
    GREY = "Grey"


class KeyCode(Enum):
    """Keys a key event can carry; CHAR and F take extra data on the event."""

    BACKSPACE = "Backspace"
    ENTER = "Enter"
    LEFT = "Left"
    RIGHT = "Right"
    UP = "Up"
    DOWN = "Down"
    HOME = "Home"
    END = "End"
    PAGE_UP = "PageUp"
    PAGE_DOWN = "PageDown"
    TAB = "Tab"
    BACK_TAB = "BackTab"
    DELETE = "Delete"
    INSERT = "Insert"
    F = "F"
    CHAR = "Char"
    NULL = "Null"
    ESC = "Esc"


class KeyModifiers(IntFlag):
    """Modifier keys held during a key event."""

    NONE = 0
    SHIFT = 0b001
    CONTROL = 0b010
    ALT = 0b100


@dataclass(frozen=True)
class KeyEvent:
    """A key press; `char` is set for CHAR keys and `number` for function keys."""

    code: KeyCode
    modifiers: KeyModifiers = KeyModifiers.NONE
    char: str | None = None
    number: int | None = None

    def __post_init__(self) -> None:
        if self.code is KeyCode.CHAR and (self.char is None or len(self.char) != 1):
            raise ValueError("a character key needs exactly one character")
        if self.code is KeyCode.F and self.number is None:
            raise ValueError("a function key needs its number")


@dataclass(frozen=True)
class MouseEvent:
    """A mouse action at a terminal cell."""

    kind: str
    column: int
    row: int
    modifiers: KeyModifiers = KeyModifiers.NONE


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal was resized."""

    width: int
    height: int


class CommandKind(Enum):
    """Every action a script can ask the REPL to perform."""

    ACCEPT_SUGGESTION = "AcceptSuggestion"
    CONTINUE = "Continue"
    DELETE_NEXT_WORD = "DeleteNextWord"
    DELETE_TILL_END = "DeleteTillEnd"
    DELETE_UNTIL_CHAR = "DeleteUntilChar"
    MOVE_FORWARD_TILL_CHAR = "MoveForwardTillChar"
    MOVE_BACKWARD_TILL_CHAR = "MoveBackwardTillChar"
    PARSE = "Parse"
    PRINT_INPUT = "PrintInput"
    PRINT_OUTPUT = "PrintOutput"
    MACRO_RECORD_TOGGLE = "MacroRecordToggle"
    MACRO_PLAY = "MacroPlay"
    MULTIPLE = "Multiple"
    SET_THIN_CURSOR = "SetThinCursor"
    SET_WIDE_CURSOR = "SetWideCursor"
    HANDLE_CHARACTER = "HandleCharacter"
    HANDLE_ENTER = "HandleEnter"
    HANDLE_ALT_ENTER = "HandleAltEnter"
    HANDLE_TAB = "HandleTab"
    HANDLE_BACK_TAB = "HandleBackTab"
    HANDLE_RIGHT = "HandleRight"
    HANDLE_LEFT = "HandleLeft"
    GO_TO_LAST_ROW = "GoToLastRow"
    HANDLE_BACK_SPACE = "HandleBackSpace"
    HANDLE_DELETE = "HandleDelete"
    HANDLE_CTRL_C = "HandleCtrlC"
    HANDLE_CTRL_D = "HandleCtrlD"
    HANDLE_CTRL_E = "HandleCtrlE"
    HANDLE_CTRL_L = "HandleCtrlL"
    HANDLE_CTRL_R = "HandleCtrlR"
    HANDLE_CTRL_Z = "HandleCtrlZ"
    HANDLE_UP = "HandleUp"
    HANDLE_DOWN = "HandleDown"
    HANDLE_CTRL_RIGHT = "HandleCtrlRight"
    HANDLE_CTRL_LEFT = "HandleCtrlLeft"
    HANDLE_HOME = "HandleHome"
    HANDLE_END = "HandleEnd"
    REDO = "Redo"
    REMOVE_RACER_SUGGESTION = "RemoveRacerSugesstion"
    RESET_PROMPT = "ResetPrompt"
    UNDO = "Undo"
    EXIT = "Exit"


_ARITY = {
    CommandKind.DELETE_UNTIL_CHAR: 2,
    CommandKind.MOVE_FORWARD_TILL_CHAR: 1,
    CommandKind.MOVE_BACKWARD_TILL_CHAR: 1,
    CommandKind.PARSE: 1,
    CommandKind.PRINT_OUTPUT: 2,
    CommandKind.MULTIPLE: 1,
    CommandKind.HANDLE_CHARACTER: 1,
    CommandKind.HANDLE_ENTER: 1,
}


def _encode(value: Any) -> Any:
    if isinstance(value, Command):
        return value.to_dict()
    if isinstance(value, Color):
        return value.value
    if isinstance(value, tuple):
        return [_encode(item) for item in value]
    return value


@dataclass(frozen=True)
class Command:
    """A command with its arguments, e.g. Command(CommandKind.PARSE, ("1 + 1",)).

    MULTIPLE takes one argument: a sequence of commands.
    """

    kind: CommandKind
    args: tuple = ()

    def __post_init__(self) -> None:
        args = tuple(tuple(a) if isinstance(a, list) else a for a in self.args)
        object.__setattr__(self, "args", args)
        expected = _ARITY.get(self.kind, 0)
        if len(args) != expected:
            raise ValueError(
                f"{self.kind.value} takes {expected} argument(s), got {len(args)}"
            )

    def to_dict(self) -> dict[str, Any]:
        """A JSON-friendly form of the command."""
        return {"kind": self.kind.value, "args": [_encode(a) for a in self.args]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Command:
        """Rebuild a command from the form produced by to_dict."""
        try:
            kind = CommandKind(data["kind"])
        except KeyError:
            raise ValueError("command data has no kind") from None
        raw = list(data.get("args", []))
        if kind is CommandKind.PRINT_OUTPUT and len(raw) == 2:
            args: tuple = (raw[0], Color(raw[1]))
        elif kind is CommandKind.MULTIPLE and len(raw) == 1:
            args = (tuple(cls.from_dict(item) for item in raw[0]),)
        else:
            args = tuple(raw)
        return cls(kind, args)


@dataclass
class GlobalVariables:
    """REPL state shared with scripts."""

    current_working_dir: Path = field(default_factory=Path.cwd)
    previous_working_dir: Path = field(default_factory=Path.cwd)
    last_loaded_code_path: Path | None = None
    last_output: str | None = None
    operation_number: int = 1
    prompt_position: tuple[int, int] = (0, 0)
    cursor_position: tuple[int, int] = (0, 0)
    prompt_len: int = 0
    pid: int = field(default_factory=os.getpid)
    is_racer_suggestion_active: bool = False

    def update_cwd(self, cwd: str | os.PathLike) -> None:
        """Change directory, remembering the previous one."""
        self.previous_working_dir = self.current_working_dir
        self.current_working_dir = Path(cwd)

    def to_dict(self) -> dict[str, Any]:
        """A JSON-friendly form of the state."""
        return {
            "current_working_dir": str(self.current_working_dir),
            "previous_working_dir": str(self.previous_working_dir),
            "last_loaded_code_path": (
                None if self.last_loaded_code_path is None else str(self.last_loaded_code_path)
            ),
            "last_output": self.last_output,
            "operation_number": self.operation_number,
            "prompt_position": list(self.prompt_position),
            "cursor_position": list(self.cursor_position),
            "prompt_len": self.prompt_len,
            "pid": self.pid,
            "is_racer_suggestion_active": self.is_racer_suggestion_active,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GlobalVariables:
        """Rebuild the state from the form produced by to_dict."""
        loaded = data.get("last_loaded_code_path")
        return cls(
            current_working_dir=Path(data["current_working_dir"]),
            previous_working_dir=Path(data["previous_working_dir"]),
            last_loaded_code_path=None if loaded is None else Path(loaded),
            last_output=data.get("last_output"),
            operation_number=data["operation_number"],
            prompt_position=tuple(data["prompt_position"]),
            cursor_position=tuple(data["cursor_position"]),
            prompt_len=data["prompt_len"],
            pid=data["pid"],
            is_racer_suggestion_active=data["is_racer_suggestion_active"],
        )


@dataclass
class InputEvent:
    """Hook fired on every terminal event; answered with a Command or None."""

    NAME: ClassVar[str] = "InputEvent"
    global_variables: GlobalVariables
    event: KeyEvent | MouseEvent | ResizeEvent


@dataclass
class OutputEvent:
    """Hook fired with each submitted input; answered with a Command or None."""

    NAME: ClassVar[str] = "OutputEvent"
    global_variables: GlobalVariables
    text: str


@dataclass
class SetTitle:
    """Hook asking for a terminal title; answered with a string or None."""

    NAME: ClassVar[str] = "SetTitle"


@dataclass
class SetWelcomeMsg:
    """Hook asking for a welcome message; answered with a string or None."""

    NAME: ClassVar[str] = "SetWelcomeMsg"


@dataclass
class Shutdown:
    """Hook fired when the REPL exits; answered with a Command or None."""

    NAME: ClassVar[str] = "Shutdown"
    global_variables: GlobalVariables


@dataclass
class Startup:
    """Hook fired when the REPL starts; answered with a Command or None."""

    NAME: ClassVar[str] = "Startup"
    global_variables: GlobalVariables


@dataclass
class SetInputPrompt:
    """Hook asking for the input prompt; answered with a string."""

    NAME: ClassVar[str] = "SetInputPrompt"
    global_variables: GlobalVariables


@dataclass
class SetOutputPrompt:
    """Hook asking for the output prompt; answered with a string."""

    NAME: ClassVar[str] = "SetOutputPrompt"
    global_variables: GlobalVariables