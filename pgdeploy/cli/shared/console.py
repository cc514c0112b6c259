"""Shared console output for CLI commands.

This module provides the console wrapper used by every command,
including status lines, the confirmation prompt, and error handling.
"""

from collections.abc import Callable

import typer
from rich.console import Console, ConsoleRenderable
from rich.panel import Panel

from pgdeploy.infra.errors import DeploymentError


class CLIConsole:
    """Rich console wrapper for consistent CLI output."""

    def __init__(self) -> None:
        """Initialize the CLI console."""
        self.console = Console()

    def print(self, msg: ConsoleRenderable | str | None = None) -> None:
        self.console.print(msg)

    def raw(self, text: str) -> None:
        """Write text without markup, highlighting or wrapping (YAML, log lines)."""
        self.console.out(text, highlight=False)

    def info(self, msg: str) -> None:
        self.console.print(f"[blue]\\[INFO][/blue] {msg}")

    def ok(self, msg: str) -> None:
        self.console.print(f"[green]\\[SUCCESS][/green] {msg}")

    def error(self, msg: str) -> None:
        self.console.print(f"[red]\\[ERROR][/red] {msg}")

    def warn(self, msg: str) -> None:
        self.console.print(f"[yellow]\\[WARNING][/yellow] {msg}")

    def confirm_action(self, question: str, force: bool = False) -> bool:
        """Prompt the user with a yes/no question, defaulting to no.

        Args:
            question: Question to ask (e.g., "Delete Postgres resources in globeco?")
            force: If True, skip the prompt

        Returns:
            True if the user answered y/yes, False otherwise
        """
        if force:
            return True

        try:
            response = self.console.input(f"[bold]{question}[/bold] \\[y/N]: ")
            return response.strip().lower() in ("y", "yes")
        except (KeyboardInterrupt, EOFError):
            self.console.print("\n[dim]Cancelled.[/dim]")
            return False

    def handle_error(
        self, message: str, details: str | None = None, exit_code: int = 1
    ) -> None:
        """Handle an error by printing a message and exiting.

        Args:
            message: Error message to display
            details: Optional additional details
            exit_code: Exit code to use
        """
        self.error(f"[bold red]{message}[/bold red]")
        if details:
            self.console.print(Panel(details, title="Details", border_style="red"))
        raise typer.Exit(exit_code)


def with_error_handling(func: Callable[..., None]) -> Callable[..., None]:
    """Decorator to wrap command functions with standard error handling.

    Catches common exceptions and formats them consistently.

    Args:
        func: The command function to wrap

    Returns:
        Wrapped function with error handling
    """
    from functools import wraps

    @wraps(func)
    def wrapper(*args: object, **kwargs: object) -> None:
        try:
            func(*args, **kwargs)
        except DeploymentError as e:
            console.handle_error(e.message, e.details)
        except KeyboardInterrupt:
            console.print("\n[dim]Operation cancelled by user.[/dim]")
            raise typer.Exit(130) from None

    return wrapper


# Shared console instance for consistent output
console = CLIConsole()
