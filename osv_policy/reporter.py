"""Reporters receiving the informational lines emitted while applying policy."""
from __future__ import annotations

from typing import Optional, Protocol

from rich.console import Console
from rich.markup import escape


class Reporter(Protocol):
    """Collaborator that receives human-readable diagnostic lines."""

    def infof(self, message: str) -> None: ...

    def warnf(self, message: str) -> None: ...

    def errorf(self, message: str) -> None: ...


class ConsoleReporter:
    """Reporter printing through a Rich console.

    Diagnostics go to stderr by default so they never mix with report
    content written to stdout.
    """

    def __init__(self, console: Optional[Console] = None, quiet: bool = False) -> None:
        """Initialize the reporter.

        Args:
            console: Optional Rich Console instance. If not provided,
                a stderr Console will be created.
            quiet: Suppress informational lines (warnings and errors still print).
        """
        self._console = console if console is not None else Console(stderr=True)
        self._quiet = quiet

    def infof(self, message: str) -> None:
        if self._quiet:
            return
        self._console.print(escape(message))

    def warnf(self, message: str) -> None:
        self._console.print(f"[yellow]{escape(message)}[/yellow]")

    def errorf(self, message: str) -> None:
        self._console.print(f"[red bold]{escape(message)}[/red bold]")


class VoidReporter:
    """Reporter that discards everything."""

    def infof(self, message: str) -> None:
        pass

    def warnf(self, message: str) -> None:
        pass

    def errorf(self, message: str) -> None:
        pass
