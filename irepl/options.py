"""Settings that shape the generated host crate: edition, executor, main result and toolchain."""

from __future__ import annotations

from enum import Enum


class Edition(Enum):
    """Language edition written into the host crate manifest. The default is E2021."""

    E2015 = "2015"
    E2018 = "2018"
    E2021 = "2021"

    @classmethod
    def parse(cls, s: str) -> Edition:
        """Parse an edition name, case-insensitively."""
        try:
            return cls(s.lower())
        except ValueError:
            raise ValueError("Unknown edition") from None

    def __str__(self) -> str:
        return self.value


class Executor(Enum):
    """How the generated main function is run. The default is SYNC."""

    SYNC = "sync"
    TOKIO = "tokio"
    ASYNC_STD = "async_std"

    @classmethod
    def parse(cls, s: str) -> Executor:
        """Parse an executor name; the match is exact."""
        try:
            return cls(s)
        except ValueError:
            raise ValueError("Unknown executor") from None

    def main_signature(self) -> str:
        """The main function signature, without its return type."""
        match self:
            case Executor.SYNC:
                return "fn main()"
            case Executor.TOKIO:
                return "#[tokio::main]async fn main()"
            case Executor.ASYNC_STD:
                return "#[async_std::main]async fn main()"

    def dependency(self) -> list[str] | None:
        """Arguments for cargo-add; the first item is the crate name."""
        match self:
            case Executor.SYNC:
                return None
            case Executor.TOKIO:
                return ["tokio", "--features", '"macros" "rt-multi-thread"']
            case Executor.ASYNC_STD:
                return ["async_std", "--features", "attributes"]

    def __str__(self) -> str:
        return self.value


class MainResult(Enum):
    """Return type of the generated main function. The default is UNIT."""

    UNIT = "unit"
    RESULT = "result"

    @classmethod
    def parse(cls, s: str) -> MainResult:
        """Parse a main result name, case-insensitively."""
        try:
            return cls(s.lower())
        except ValueError:
            raise ValueError("Unknown main result type") from None

    def type_name(self) -> str:
        """The return type as written in the signature."""
        if self is MainResult.UNIT:
            return "()"
        return "Result<(), Box<dyn std::error::Error>>"

    def instance(self) -> str:
        """The value that ends the main function body."""
        if self is MainResult.UNIT:
            return "()"
        return "Ok(())"

    def __str__(self) -> str:
        if self is MainResult.UNIT:
            return "Unit"
        return "Result<(), Box<dyn std::error::Error>>"


class ToolChain(Enum):
    """Which toolchain cargo is invoked with. The default is DEFAULT (no override)."""

    STABLE = "stable"
    BETA = "beta"
    NIGHTLY = "nightly"
    DEFAULT = "default"

    @classmethod
    def parse(cls, s: str) -> ToolChain:
        """Parse a toolchain name, case-insensitively."""
        try:
            return cls(s.lower())
        except ValueError:
            raise ValueError("Unknown toolchain") from None

    def as_arg(self) -> str:
        """The `+toolchain` argument for cargo; the default toolchain has none."""
        if self is ToolChain.DEFAULT:
            raise ValueError("the default toolchain takes no cargo argument")
        return "+" + self.value

    def __str__(self) -> str:
        return self.value