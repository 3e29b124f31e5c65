"""A script that forwards REPL input to an IPython process and prints its answers."""

from __future__ import annotations

import codecs
import contextlib
import os
import queue
import subprocess
import threading
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import IO

from ..api import (
    Color,
    Command,
    CommandKind,
    OutputEvent,
    SetTitle,
    SetWelcomeMsg,
    Shutdown,
    Startup,
)

DEFAULT_COMMAND = ("ipython",)
_ANSWER_WAIT = 0.2
_PROMPT_DELIMITER = "\nIn "


def _lines(text: str) -> list[str]:
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def postprocess_output(out: str) -> str:
    """Drop the trailing prompt line and any continuation prompts, then trim."""
    lines = _lines(out)
    if lines:
        lines.pop()
    text = "\n".join(lines)
    if "...:" in text:
        text = text.rsplit("...:", 1)[-1]
    return text.strip()


def _read_outputs(stream: IO[bytes], outputs: queue.Queue) -> None:
    fd = stream.fileno()
    with contextlib.suppress(OSError):
        # The banner and the first prompt.
        os.read(fd, 512)
        os.read(fd, 512)
    outputs.put("")

    decoder = codecs.getincrementaldecoder("utf-8")("replace")
    pending = ""
    while True:
        try:
            chunk = os.read(fd, 512)
        except OSError:
            break
        if not chunk:
            break
        pending += decoder.decode(chunk)
        if _PROMPT_DELIMITER not in pending:
            continue
        outputs.put(postprocess_output(pending))
        pending = ""


@dataclass(eq=False)
class IPython:
    """Runs input that is not a REPL command through an IPython session."""

    NAME = "IPython"
    HOOKS = (
        SetTitle.NAME,
        SetWelcomeMsg.NAME,
        OutputEvent.NAME,
        Startup.NAME,
        Shutdown.NAME,
    )
    VERSION_REQUIREMENT = ">=1.34.0"

    command: tuple[str, ...] = DEFAULT_COMMAND
    process: subprocess.Popen | None = None
    _outputs: queue.Queue | None = field(default=None, repr=False)

    @classmethod
    def start(cls, command: Sequence[str] = DEFAULT_COMMAND) -> IPython:
        """Start the shell and wait until it has printed its first prompt."""
        process = subprocess.Popen(
            list(command), stdin=subprocess.PIPE, stdout=subprocess.PIPE
        )
        outputs: queue.Queue = queue.Queue()
        threading.Thread(
            target=_read_outputs, args=(process.stdout, outputs), daemon=True
        ).start()
        outputs.get()
        return cls(tuple(command), process, outputs)

    def _adopt(self, other: IPython) -> None:
        self.command, self.process, self._outputs = (
            other.command,
            other.process,
            other._outputs,
        )

    def handle_output_event(self, hook: OutputEvent) -> Command | None:
        """Send the input to the shell and print its answer; `:` commands are left alone."""
        text = hook.text
        if text.startswith(":"):
            return None
        if self.process is None or self._outputs is None:
            self._adopt(type(self).start(self.command))

        stdin = self.process.stdin
        stdin.write((text + "\n").encode("utf-8"))
        stdin.flush()
        try:
            out = self._outputs.get(timeout=_ANSWER_WAIT)
        except queue.Empty:
            out = ""
        # An empty answer means a statement was run.
        return Command(CommandKind.PRINT_OUTPUT, ((out or "()") + "\n", Color.BLUE))

    def clean_up(self) -> None:
        """Ask the shell to exit; it may already be gone."""
        if self.process is None or self.process.stdin is None:
            return
        with contextlib.suppress(OSError, ValueError):
            self.process.stdin.write(b"exit\n")
            self.process.stdin.flush()

    def run(self, hook: object) -> Command | str | None:
        """Answer one hook."""
        match hook:
            case OutputEvent():
                return self.handle_output_event(hook)
            case SetTitle() | SetWelcomeMsg():
                return "IPython"
            case Startup():
                self.clean_up()
                self._adopt(type(self).start(self.command))
                return None
            case Shutdown():
                self.clean_up()
                return None
            case _:
                raise ValueError(f"unsupported hook: {type(hook).__name__}")