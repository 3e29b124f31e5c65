"""Collecting a child's output while a callback interacts with the running process."""

from __future__ import annotations

import contextlib
import subprocess
import threading
from collections.abc import Callable
from typing import IO

__all__ = ["interactive_output", "stdout_and_stderr"]


def stdout_and_stderr(stdout: bytes | None, stderr: bytes | None) -> str:
    """Decode stdout if it holds anything, else stderr; invalid UTF-8 gives ''."""
    out = stdout if stdout else (stderr or b"")
    try:
        return out.decode("utf-8")
    except UnicodeDecodeError:
        return ""


def _drain(stream: IO[bytes], sink: list[bytes]) -> None:
    sink.append(stream.read())
    stream.close()


def interactive_output(
    process: subprocess.Popen,
    function: Callable[[subprocess.Popen], None] | None = None,
) -> subprocess.CompletedProcess:
    """Wait for a process with piped stdout and stderr and collect both.

    While the process runs, `function` (if given) is called repeatedly with
    it, so it can feed input or kill it. An exception from `function` is
    propagated and the process is left as it is.
    """
    if process.stdout is None or process.stderr is None:
        raise ValueError("the process needs piped stdout and stderr")

    out: list[bytes] = []
    err: list[bytes] = []
    readers = [
        threading.Thread(target=_drain, args=(process.stdout, out), daemon=True),
        threading.Thread(target=_drain, args=(process.stderr, err), daemon=True),
    ]
    for reader in readers:
        reader.start()

    if function is None:
        process.wait()
    else:
        while process.poll() is None:
            function(process)

    for reader in readers:
        reader.join()
    if process.stdin is not None:
        with contextlib.suppress(OSError):
            process.stdin.close()

    return subprocess.CompletedProcess(process.args, process.wait(), out[0], err[0])