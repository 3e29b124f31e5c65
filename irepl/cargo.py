"""Driving cargo and rustfmt on the host crate that backs the REPL."""

from __future__ import annotations

import contextlib
import os
import shutil
import subprocess
import tempfile
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .options import Edition, ToolChain
from .process import interactive_output, stdout_and_stderr

CRATE_NAME = "irust_host_repl"
_MAIN_SRC = "fn main() {\n\n}"
_EXE_SUFFIX = ".exe" if os.name == "nt" else ""

InteractiveFunction = Callable[[subprocess.Popen], None]


class CargoError(RuntimeError):
    """A cargo command needed by the REPL failed."""


@dataclass(frozen=True)
class ReplPaths:
    """Locations of the host crate and its build output."""

    root: Path
    target_dir: Path

    @property
    def cargo_toml(self) -> Path:
        return self.root / "Cargo.toml"

    @property
    def src_dir(self) -> Path:
        return self.root / "src"

    @property
    def main_file(self) -> Path:
        return self.src_dir / "main.rs"

    @property
    def main_file_extern(self) -> Path:
        return self.src_dir / "main_extern.rs"

    @property
    def lib_file(self) -> Path:
        return self.src_dir / "lib.rs"

    @property
    def fmt_file(self) -> Path:
        return self.root / "fmt_file"

    @property
    def exe_path(self) -> Path:
        return self.target_dir / "debug" / (CRATE_NAME + _EXE_SUFFIX)

    @property
    def release_exe_path(self) -> Path:
        return self.target_dir / "release" / (CRATE_NAME + _EXE_SUFFIX)


def default_paths() -> ReplPaths:
    """The host crate in the temp directory; CARGO_TARGET_DIR overrides the target dir."""
    root = Path(tempfile.gettempdir()) / CRATE_NAME
    target = os.environ.get("CARGO_TARGET_DIR")
    return ReplPaths(root, Path(target) if target else root / "target")


def _resolve(paths: ReplPaths | None) -> ReplPaths:
    return paths if paths is not None else default_paths()


def _write(path: Path, text: str) -> None:
    path.write_bytes(text.encode("utf-8"))


def cargo_new(edition: Edition, paths: ReplPaths | None = None) -> None:
    """Create a fresh host crate with an empty main function."""
    paths = _resolve(paths)
    with contextlib.suppress(OSError):
        paths.src_dir.mkdir(parents=True, exist_ok=True)
    _write(
        paths.cargo_toml,
        f'[package]\nname = "{CRATE_NAME}"\nversion = "0.1.0"\nedition = "{edition}"',
    )
    _write(paths.main_file, _MAIN_SRC)
    shutil.copyfile(paths.main_file, paths.main_file_extern)
    with contextlib.suppress(OSError):
        paths.lib_file.unlink()


def _cargo_invocation(
    cmd: str, toolchain: ToolChain, paths: ReplPaths, extra: Sequence[str] = ()
) -> tuple[list[str], dict]:
    args = ["cargo"]
    if toolchain is not ToolChain.DEFAULT:
        args.append(toolchain.as_arg())
    args += [cmd, *extra]
    env = {**os.environ, "CARGO_TARGET_DIR": str(paths.target_dir)}
    return args, {"env": env, "cwd": paths.root}


def _cargo_output(
    cmd: str, toolchain: ToolChain, paths: ReplPaths, extra: Sequence[str] = ()
) -> tuple[int, str]:
    args, options = _cargo_invocation(cmd, toolchain, paths, extra)
    completed = subprocess.run(args, capture_output=True, **options)
    return completed.returncode, stdout_and_stderr(completed.stdout, completed.stderr)


def _cargo_spawn(cmd: str, toolchain: ToolChain, paths: ReplPaths) -> subprocess.Popen:
    args, options = _cargo_invocation(cmd, toolchain, paths)
    return subprocess.Popen(
        args, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL, **options
    )


def cargo_run(
    color: bool,
    release: bool,
    toolchain: ToolChain,
    interactive_function: InteractiveFunction | None = None,
    paths: ReplPaths | None = None,
) -> tuple[int, str]:
    """Build the crate and, if that works, run the binary directly.

    Returns the build status with either the build output or the program output.
    """
    paths = _resolve(paths)
    status, output = cargo_build_output(color, release, toolchain, paths)
    if status != 0:
        return status, output
    exe = paths.release_exe_path if release else paths.exe_path
    process = subprocess.Popen(
        [str(exe)],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    result = interactive_output(process, interactive_function)
    return status, stdout_and_stderr(result.stdout, result.stderr)


def cargo_add(dep: Sequence[str], paths: ReplPaths | None = None) -> subprocess.Popen:
    """Start cargo-add with the given arguments."""
    paths = _resolve(paths)
    return subprocess.Popen(
        ["cargo-add", "add", *dep],
        cwd=paths.root,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.PIPE,
    )


def cargo_add_sync(dep: Sequence[str], paths: ReplPaths | None = None) -> None:
    """Run cargo-add to completion; raise CargoError if it fails."""
    paths = _resolve(paths)
    completed = subprocess.run(
        ["cargo-add", "add", *dep],
        cwd=paths.root,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.PIPE,
    )
    if completed.returncode != 0:
        raise CargoError(f"Failed to add dependency: {list(dep)!r}")


def cargo_rm_sync(dep: str, paths: ReplPaths | None = None) -> None:
    """Run cargo-rm to completion; a missing dependency is not an error."""
    paths = _resolve(paths)
    subprocess.run(
        ["cargo-rm", "rm", dep],
        cwd=paths.root,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.PIPE,
    )


def cargo_check(toolchain: ToolChain, paths: ReplPaths | None = None) -> subprocess.Popen:
    """Start `cargo check` in the background with its output discarded."""
    return _cargo_spawn("check", toolchain, _resolve(paths))


def cargo_check_output(
    toolchain: ToolChain, paths: ReplPaths | None = None
) -> tuple[int, str]:
    """Run `cargo check` with colour and return its status and output."""
    return _cargo_output("check", toolchain, _resolve(paths), ["--color", "always"])


def cargo_build(toolchain: ToolChain, paths: ReplPaths | None = None) -> subprocess.Popen:
    """Start `cargo build` in the background with its output discarded."""
    return _cargo_spawn("build", toolchain, _resolve(paths))


def cargo_build_output(
    color: bool, release: bool, toolchain: ToolChain, paths: ReplPaths | None = None
) -> tuple[int, str]:
    """Run `cargo build` and return its status and output."""
    extra = ["--release"] if release else []
    extra += ["--color", "always" if color else "never"]
    return _cargo_output("build", toolchain, _resolve(paths), extra)


def cargo_bench(toolchain: ToolChain, paths: ReplPaths | None = None) -> str:
    """Run `cargo bench` and return its output."""
    return _cargo_output("bench", toolchain, _resolve(paths), ["--color", "always"])[1]


def cargo_fmt(code: str, paths: ReplPaths | None = None) -> str:
    """Format code with rustfmt if it is available; otherwise return it unchanged."""
    paths = _resolve(paths)
    fmt_path = paths.fmt_file
    with contextlib.suppress(OSError):
        fmt_path.unlink()
    _write(fmt_path, code)
    cargo_fmt_file(fmt_path)
    return fmt_path.read_bytes().decode("utf-8")


def cargo_asm(fn_name: str, toolchain: ToolChain, paths: ReplPaths | None = None) -> str:
    """Return the assembly cargo-asm produces for a function of the library."""
    extra = ["--lib", f"{CRATE_NAME}::{fn_name}", "--rust"]
    return _cargo_output("asm", toolchain, _resolve(paths), extra)[1]


def cargo_fmt_file(file: str | os.PathLike) -> None:
    """Format a file in place with rustfmt; a missing rustfmt is ignored."""
    with contextlib.suppress(OSError):
        subprocess.run(
            ["rustfmt", "--config", "empty_item_single_line=false", str(file)],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )