"""A script that defines and invokes named code templates with `:fun`."""

from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from pathlib import Path

import platformdirs
import toml

from ..api import Color, Command, CommandKind, OutputEvent, Shutdown


class FunError(Exception):
    """A `:fun` command could not be carried out."""


def _default_path() -> Path:
    return platformdirs.user_config_path() / "irust" / "functions.toml"


def _read_functions(path: Path) -> dict[str, str]:
    try:
        data = toml.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, toml.TomlDecodeError):
        return {}
    if not all(isinstance(value, str) for value in data.values()):
        return {}
    return dict(data)


@dataclass
class Fun:
    """Named templates; `$argN` in a body is replaced by the N-th argument."""

    NAME = "Fun"
    HOOKS = (OutputEvent.NAME, Shutdown.NAME)
    VERSION_REQUIREMENT = ">=1.34.0"

    functions: dict[str, str] = field(default_factory=dict)
    path: Path = field(default_factory=_default_path)

    @classmethod
    def load(cls, path: str | Path | None = None) -> Fun:
        """Load saved templates; a missing or unreadable file gives none."""
        resolved = Path(path) if path is not None else _default_path()
        return cls(_read_functions(resolved), resolved)

    def handle_output_event(self, hook: OutputEvent) -> Command | None:
        """Handle `:fun def NAME BODY` and `:fun NAME ARGS...`; other input is ignored."""
        text = hook.text
        if not (text.startswith(":fun") or text.startswith(":f")):
            return None
        match text.split(" ", 3):
            case [_, "def" | "d", name, body]:
                self.functions[name] = body
                return Command(CommandKind.PRINT_OUTPUT, ("Ok!", Color.BLUE))
            case [_, name, *args]:
                try:
                    function = self.functions[name]
                except KeyError:
                    raise FunError(f"function: `{name}` is not defined") from None
                for idx, arg in enumerate(args):
                    function = function.replace(f"$arg{idx}", arg, 1)
                return Command(CommandKind.PARSE, (function,))
            case _:
                raise FunError("Incorrect usage of `fun`")

    def clean_up(self, hook: Shutdown) -> None:
        """Save the templates; failures to save are ignored."""
        with contextlib.suppress(OSError):
            self.path.write_text(toml.dumps(self.functions), encoding="utf-8")
        return None

    def run(self, hook: OutputEvent | Shutdown) -> Command | None:
        """Answer one hook; errors are reported as red output."""
        match hook:
            case OutputEvent():
                try:
                    return self.handle_output_event(hook)
                except FunError as error:
                    return Command(CommandKind.PRINT_OUTPUT, (f"{error}\n", Color.RED))
            case Shutdown():
                return self.clean_up(hook)
            case _:
                raise ValueError(f"unsupported hook: {type(hook).__name__}")