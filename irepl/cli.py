"""Evaluate one snippet of code in a fresh REPL, optionally with dependencies."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .repl import EvalConfig, Repl
from .textutils import split_args


def _evaluate(deps: str | None, code: str) -> str:
    repl = Repl()
    if deps is not None:
        repl.add_dep(split_args(deps)).wait()
    result = repl.eval_with_configuration(EvalConfig(input=code, color=True))
    return result.output


def main(argv: Sequence[str] | None = None) -> int:
    """Run `[DEPS] CODE`: DEPS are cargo-add arguments, CODE the expression to print."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        raise SystemExit("No code provided")
    if len(args) > 2:
        raise SystemExit("Extra arguments provided")
    deps = args[0] if len(args) == 2 else None
    print(_evaluate(deps, args[-1]))
    return 0


if __name__ == "__main__":
    sys.exit(main())