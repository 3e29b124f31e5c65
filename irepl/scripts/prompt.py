"""A script that numbers the input and output prompts by operation."""

from __future__ import annotations

from enum import Enum

from ..api import (
    Command,
    CommandKind,
    GlobalVariables,
    SetInputPrompt,
    SetOutputPrompt,
    Shutdown,
)


class PromptType(Enum):
    IN = "In"
    OUT = "Out"

    def __str__(self) -> str:
        return self.value


class Prompt:
    """Answers prompt hooks with `In [n]: ` and `Out [n]: `."""

    NAME = "prompt"
    HOOKS = (SetInputPrompt.NAME, SetOutputPrompt.NAME, Shutdown.NAME)
    VERSION_REQUIREMENT = ">=1.34.0"

    def prompt(self, global_vars: GlobalVariables, ptype: PromptType) -> str:
        return f"{ptype} [{global_vars.operation_number}]: "

    def clean_up(self) -> Command:
        """Ask the REPL to go back to its own prompt."""
        return Command(CommandKind.RESET_PROMPT)

    def run(self, hook: SetInputPrompt | SetOutputPrompt | Shutdown) -> str | Command:
        """Answer one hook."""
        match hook:
            case SetInputPrompt(global_variables=global_vars):
                return self.prompt(global_vars, PromptType.IN)
            case SetOutputPrompt(global_variables=global_vars):
                return self.prompt(global_vars, PromptType.OUT)
            case Shutdown():
                return self.clean_up()
            case _:
                raise ValueError(f"unsupported hook: {type(hook).__name__}")