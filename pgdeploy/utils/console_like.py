from __future__ import annotations

from typing import Protocol

from rich.console import ConsoleRenderable


class ConsoleLike(Protocol):
    """Output sink the lifecycle manager and appliers write to.

    Status lines go through info/ok/warn/error; rendered YAML and pod log
    lines go through raw, unformatted.
    """

    def print(self, msg: ConsoleRenderable | str | None = None) -> None: ...

    def raw(self, text: str) -> None: ...

    def info(self, msg: str) -> None: ...

    def warn(self, msg: str) -> None: ...

    def error(self, msg: str) -> None: ...

    def ok(self, msg: str) -> None: ...


class StdoutConsole:
    """Plain-text sink for running a LifecycleManager outside the CLI."""

    def print(self, msg: ConsoleRenderable | str | None = None) -> None:
        print("" if msg is None else msg)

    def raw(self, text: str) -> None:
        print(text)

    def info(self, msg: str) -> None:
        print(f"[INFO] {msg}")

    def warn(self, msg: str) -> None:
        print(f"[WARNING] {msg}")

    def error(self, msg: str) -> None:
        print(f"[ERROR] {msg}")

    def ok(self, msg: str) -> None:
        print(f"[SUCCESS] {msg}")


def coalesce_console(console: ConsoleLike | None) -> ConsoleLike:
    """Return console, or a StdoutConsole when none was given."""
    return console if console is not None else StdoutConsole()
