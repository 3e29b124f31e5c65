"""String helpers for command lines, code snippets and process output."""

from __future__ import annotations

from itertools import zip_longest
from typing import BinaryIO

_MAIN_FN = "fn main() {"


def split_args(s: str) -> list[str]:
    """Split on spaces, keeping double-quoted runs together and dropping the quotes."""
    args: list[str] = []
    current: list[str] = []
    quoted = False
    for ch in s:
        if ch == " ":
            if not quoted and current:
                args.append("".join(current))
                current.clear()
            else:
                current.append(" ")
        elif ch == '"':
            quoted = not quoted
        else:
            current.append(ch)
    if current:
        args.append("".join(current))
    return args


def stdout_and_stderr(stdout: bytes, stderr: bytes) -> str:
    """Decode stdout if it is non-empty, otherwise stderr; invalid UTF-8 gives ''."""
    out = stdout if stdout else stderr
    try:
        return out.decode("utf-8")
    except UnicodeDecodeError:
        return ""


def _lines(s: str) -> list[str]:
    lines = s.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _strip_line_comment(line: str) -> str:
    quote = False
    double_quote = False
    kept: list[str] = []
    for ch, nxt in zip_longest(line, line[1:]):
        if ch == "/" and nxt == "/":
            if not quote and not double_quote:
                break
            continue
        if ch == "'":
            quote = not quote
        elif ch == '"':
            double_quote = not double_quote
        kept.append(ch)
    return "".join(kept)


def remove_comments(s: str) -> str:
    """Drop `//` comments outside of quotes; every kept line ends with a newline."""
    return "".join(
        _strip_line_comment(line) + "\n"
        for line in _lines(s)
        if not line.lstrip().startswith("//")
    )


def balanced_quotes(s: str) -> bool:
    """True when the total count of single and double quotes is even."""
    return sum(ch in "\"'" for ch in s) % 2 == 0


def remove_main(script: str) -> str:
    """Unwrap the body of `fn main() {...}`, after removing comments."""
    script = remove_comments(script)
    main_start = script.find(_MAIN_FN)
    if main_start == -1 or not balanced_quotes(script[:main_start]):
        return script

    open_tag = main_start + len(_MAIN_FN)
    depth = 1
    close_tag = None
    for offset, ch in enumerate(script[open_tag + 1:], start=open_tag + 1):
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                close_tag = offset
                break
    if close_tag is None:
        return script

    script = script[:close_tag] + script[close_tag + 1:]
    return script[:main_start] + script[open_tag + 1:]


def insert_at_char_idx(buffer: str, idx: int, character: str) -> str:
    """Return buffer with character inserted at character index idx."""
    if idx > len(buffer):
        raise IndexError("insertion index out of range")
    return buffer[:idx] + character + buffer[idx:]


def remove_at_char_idx(buffer: str, idx: int) -> tuple[str, str | None]:
    """Return the buffer without the character at idx, and that character (None if absent)."""
    if 0 <= idx < len(buffer):
        return buffer[:idx] + buffer[idx + 1:], buffer[idx]
    return buffer, None


def chars_count(buffer: str) -> int:
    """Number of characters in buffer."""
    return len(buffer)


def new_lines_count(buffer: str) -> int:
    """Number of newline characters in buffer."""
    return buffer.count("\n")


def is_multiline(string: str) -> bool:
    """True when the string holds more than one newline."""
    return string.count("\n") > 1


def strings_unique(s1: str, s2: str) -> str:
    """Strip from s2 the longest prefix that s1 already ends with.

    If no prefix overlaps and s1 ends with an alphanumeric character, the
    result is empty.
    """
    for idx in range(len(s2), 0, -1):
        if s1.endswith(s2[:idx]):
            return s2[idx:]
    if s1 and s1[-1].isalnum():
        return ""
    return s2


def unmatched_brackets(s: str) -> bool:
    """True when (), [] or {} outside of quotes and comments do not balance."""
    s = remove_comments(s)
    depth = dict.fromkeys("([{", 0)
    closing = {")": "(", "]": "[", "}": "{"}
    quote = False
    double_quote = False
    previous = " "
    for ch in s:
        if ch in depth:
            if not quote and not double_quote:
                depth[ch] += 1
        elif ch in closing:
            if not quote and not double_quote:
                depth[closing[ch]] -= 1
        elif ch == '"':
            if previous != "\\":
                double_quote = not double_quote
        elif ch == "'":
            if previous != "\\":
                quote = not quote
        previous = ch
    return any(depth.values())


def read_until_bytes(stream: BinaryIO, delim: bytes) -> bytes:
    """Read chunks until the data read so far ends with delim or the stream ends."""
    read = getattr(stream, "read1", stream.read)
    data = bytearray()
    while True:
        chunk = read(512)
        data += chunk
        if not chunk or data.endswith(delim):
            return bytes(data)