"""CLI context: options shared by every command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click
import typer
from pydantic import ValidationError

from pgdeploy.infra.constants import DEFAULT_CONSTANTS
from pgdeploy.lifecycle.context import Command, InvocationContext


@dataclass(frozen=True)
class GlobalOptions:
    """Options given before the command name (or taken from the environment)."""

    namespace: str = DEFAULT_CONSTANTS.DEFAULT_NAMESPACE
    dry_run: bool = False
    force: bool = False
    wait_timeout: int = DEFAULT_CONSTANTS.DEFAULT_WAIT_TIMEOUT
    manifests_dir: Path | None = None


def get_global_options(ctx: typer.Context | None = None) -> GlobalOptions:
    """Return the GlobalOptions from Typer, falling back to defaults."""
    context = ctx or click.get_current_context(silent=True)
    if context and isinstance(context.obj, GlobalOptions):
        return context.obj
    return GlobalOptions()


def build_invocation_context(
    ctx: typer.Context | None,
    command: Command,
    *,
    namespace: str | None = None,
    dry_run: bool = False,
    force: bool = False,
    wait_timeout: int | None = None,
    **extra: object,
) -> InvocationContext:
    """Merge command options over the global ones into an InvocationContext.

    Values given after the command name win; flags are set if given in
    either position.

    Raises:
        typer.BadParameter: If the merged values are invalid
    """
    options = get_global_options(ctx)
    try:
        return InvocationContext(
            command=command,
            namespace=namespace if namespace is not None else options.namespace,
            dry_run=dry_run or options.dry_run,
            force=force or options.force,
            wait_timeout=(
                wait_timeout if wait_timeout is not None else options.wait_timeout
            ),
            manifests_dir=options.manifests_dir,
            **extra,
        )
    except ValidationError as e:
        messages = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise typer.BadParameter(messages) from e
