"""A REPL that keeps its session as the body of a generated main function."""

from __future__ import annotations

import re
import subprocess
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import TypeVar

from .cargo import (
    InteractiveFunction,
    ReplPaths,
    cargo_add,
    cargo_add_sync,
    cargo_build,
    cargo_build_output,
    cargo_check_output,
    cargo_fmt,
    cargo_new,
    cargo_rm_sync,
    cargo_run,
    default_paths,
)
from .options import Edition, Executor, MainResult, ToolChain

T = TypeVar("T")

DEFAULT_EVALUATOR: tuple[str, str] = ('println!("{:?}", {\n', "\n});")

_CRATE_ATTRIBUTE = "#!"
_FOOTER_NOTE = " // Do not write past this line (it will corrupt the repl)"
_LINE_NUMBER = re.compile(r"\+?[0-9]+")


class ReplError(Exception):
    """A REPL operation could not be carried out."""


@dataclass
class EvalConfig:
    """Options for one evaluation."""

    input: object
    interactive_function: InteractiveFunction | None = None
    color: bool = False
    evaluator: Sequence[str] = DEFAULT_EVALUATOR


@dataclass(frozen=True)
class EvalResult:
    """Output and exit status of an evaluation."""

    output: str
    status: int

    @property
    def success(self) -> bool:
        return self.status == 0


def _split_lines(text: str) -> list[str]:
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class Repl:
    """Session code held as lines of a main function in a host crate."""

    def __init__(
        self,
        toolchain: ToolChain = ToolChain.DEFAULT,
        executor: Executor = Executor.SYNC,
        main_result: MainResult = MainResult.UNIT,
        edition: Edition = Edition.E2021,
        paths: ReplPaths | None = None,
    ) -> None:
        self.toolchain = toolchain
        self._executor = executor
        self._main_result = main_result
        self._edition = edition
        self.paths = paths if paths is not None else default_paths()
        self._body: list[str] = []
        self._cursor = 0
        self._initialise()

    @property
    def executor(self) -> Executor:
        return self._executor

    @property
    def main_result(self) -> MainResult:
        return self._main_result

    @property
    def edition(self) -> Edition:
        return self._edition

    def _initialise(self) -> None:
        cargo_new(self._edition, self.paths)
        dependency = self._executor.dependency()
        if dependency is not None:
            cargo_add_sync(dependency, self.paths)
        cargo_build(self.toolchain, self.paths)
        header, footer = self._delimiters()
        self._body = [header, footer, "}"]
        self._cursor = 1

    def _delimiters(self) -> tuple[str, str]:
        header = (
            self._executor.main_signature() + " -> " + self._main_result.type_name() + "{"
        )
        return header, self._main_result.instance() + _FOOTER_NOTE

    def _replace_delimiters(self) -> None:
        header, footer = self._delimiters()
        self._body[0] = header
        self._body[-2] = footer

    def set_executor(self, executor: Executor) -> None:
        """Switch executor, swapping its crate dependency and the main signature."""
        old = self._executor.dependency()
        if old is not None:
            cargo_rm_sync(old[0], self.paths)
        self._executor = executor
        new = executor.dependency()
        if new is not None:
            cargo_add_sync(new, self.paths)
        self._replace_delimiters()

    def set_main_result(self, main_result: MainResult) -> None:
        """Change the main function's return type."""
        self._main_result = main_result
        self._replace_delimiters()

    def update_from_extern_main_file(self) -> None:
        """Reload the body from the file edited by external editors."""
        text = self.paths.main_file_extern.read_bytes().decode("utf-8")
        lines = _split_lines(text)
        if len(lines) < 2:
            raise ReplError("main.rs file corrupted, resetting irust..")
        self._body = lines
        self._cursor = len(lines) - 2

    def insert(self, input: object) -> None:
        """Insert code at the cursor; crate attributes go to the top of the file."""
        text = str(input)
        outside_main = text.lstrip().startswith(_CRATE_ATTRIBUTE)
        for line in _split_lines(text):
            self._body.insert(0 if outside_main else self._cursor, line)
            self._cursor += 1

    def reset(self) -> None:
        """Recreate the host crate and start with an empty body."""
        self._initialise()

    def show(self) -> str:
        """The current code, formatted if rustfmt is available."""
        code = "\n".join(self._body)
        try:
            code = cargo_fmt(code, self.paths)
        except OSError:
            pass
        return f"Current Repl Code:\n{code}"

    def eval(self, input: object) -> EvalResult:
        """Evaluate an expression and return what it prints."""
        return self._eval_inner(input, None, False, DEFAULT_EVALUATOR)

    def eval_with_configuration(self, eval_config: EvalConfig) -> EvalResult:
        """Evaluate with the options of an EvalConfig."""
        return self._eval_inner(
            eval_config.input,
            eval_config.interactive_function,
            eval_config.color,
            eval_config.evaluator,
        )

    def _eval_inner(
        self,
        input: object,
        interactive_function: InteractiveFunction | None,
        color: bool,
        evaluator: Sequence[str],
    ) -> EvalResult:
        statement = f"{evaluator[0]}{input}{evaluator[1]}"
        toolchain = self.toolchain
        status, output = self.eval_in_tmp_repl(
            statement,
            lambda: cargo_run(color, False, toolchain, interactive_function, self.paths),
        )
        return EvalResult(output[:-1], status)

    def eval_build(self, input: object) -> EvalResult:
        """Build with the input added and return the build result."""
        toolchain = self.toolchain
        status, output = self.eval_in_tmp_repl(
            str(input), lambda: cargo_build_output(True, False, toolchain, self.paths)
        )
        return EvalResult(output, status)

    def eval_check(self, buffer: str) -> EvalResult:
        """Check with the buffer added and return the check result."""
        toolchain = self.toolchain
        status, output = self.eval_in_tmp_repl(
            buffer, lambda: cargo_check_output(toolchain, self.paths)
        )
        return EvalResult(output, status)

    def eval_in_tmp_repl(self, input: str, f: Callable[[], T]) -> T:
        """Run f with the input temporarily inserted and written out."""
        saved_body, saved_cursor = list(self._body), self._cursor
        self.insert(input)
        try:
            self.write()
            return f()
        finally:
            self._body, self._cursor = saved_body, saved_cursor

    def add_dep(self, dep: Sequence[str]) -> subprocess.Popen:
        """Start adding a dependency with cargo-add."""
        return cargo_add(dep, self.paths)

    def build(self) -> subprocess.Popen:
        """Start building the host crate in the background."""
        return cargo_build(self.toolchain, self.paths)

    def write(self) -> None:
        """Write the body to the crate's main file."""
        self.paths.main_file.write_bytes("\n".join(self._body).encode("utf-8"))

    def write_to_extern(self) -> None:
        """Write the body to the file used by external editors."""
        self.paths.main_file_extern.write_bytes("\n".join(self._body).encode("utf-8"))

    def write_lib(self) -> None:
        """Write the body without the main function wrapper as the crate's library."""
        body = list(self._body)
        del body[body.index(self._delimiters()[0])]
        del body[-2:]
        self.paths.lib_file.write_bytes("\n".join(body).encode("utf-8"))

    def pop(self) -> None:
        """Remove the line just before the cursor."""
        if len(self._body) > 2:
            del self._body[self._cursor - 1]
            self._cursor -= 1

    def delete(self, line_num: str) -> None:
        """Remove a body line by its number; the header and footer cannot be removed."""
        if _LINE_NUMBER.fullmatch(line_num):
            number = int(line_num)
            if number != 0 and number + 1 < len(self._body):
                del self._body[number]
                self._cursor -= 1
                return
        raise ReplError("Incorrect line number")

    def lines(self) -> Iterator[str]:
        """The lines of the generated code."""
        return iter(self._body)

    def lines_count(self) -> int:
        """Number of lines, not counting the closing brace."""
        return len(self._body) - 1