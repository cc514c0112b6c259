"""Main CLI application module.

Entry point of the pgdeploy command. Options may be given before or after
the command name:

    pgdeploy [-n NAME] [-d] [-f] [-w SECONDS] deploy|destroy|status|logs

Commands:
- deploy: apply the Postgres manifest and its network policy
- destroy: delete them (asks for confirmation unless --force)
- status: list the Postgres resources in the namespace
- logs: print the tail of each database pod's log
"""

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from loguru import logger

from pgdeploy import __version__
from pgdeploy.infra.constants import DEFAULT_CONSTANTS, DeploymentPaths
from pgdeploy.lifecycle import (
    Command,
    InvocationContext,
    LifecycleManager,
    OperationReport,
    create_manager,
)
from pgdeploy.utils.paths import get_project_root

from .context import GlobalOptions, build_invocation_context
from .logging_setup import configure_logging
from .shared.console import console, with_error_handling

app = typer.Typer(
    help="Deploy Postgres resources for the GlobeCo Portfolio Accounting Service.",
    rich_markup_mode="rich",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


# ---------------------------------------------------------------------------
# Shared option declarations (accepted after the command name)
# ---------------------------------------------------------------------------

NamespaceOption = Annotated[
    str | None,
    typer.Option("--namespace", "-n", help="Kubernetes namespace"),
]
DryRunOption = Annotated[
    bool,
    typer.Option("--dry-run", "-d", help="Render manifests without contacting the cluster"),
]
ForceOption = Annotated[
    bool,
    typer.Option("--force", "-f", help="Do not ask for confirmation"),
]
WaitTimeoutOption = Annotated[
    int | None,
    typer.Option("--wait-timeout", "-w", min=1, help="Wait timeout in seconds"),
]


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"pgdeploy {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    namespace: Annotated[
        str,
        typer.Option(
            "--namespace", "-n", envvar="NAMESPACE", help="Kubernetes namespace"
        ),
    ] = DEFAULT_CONSTANTS.DEFAULT_NAMESPACE,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-d",
            envvar="DRY_RUN",
            help="Render manifests without contacting the cluster",
        ),
    ] = False,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", envvar="FORCE", help="Do not ask for confirmation"),
    ] = False,
    wait_timeout: Annotated[
        int,
        typer.Option(
            "--wait-timeout",
            "-w",
            envvar="WAIT_TIMEOUT",
            min=1,
            help="Wait timeout in seconds",
        ),
    ] = DEFAULT_CONSTANTS.DEFAULT_WAIT_TIMEOUT,
    manifests_dir: Annotated[
        Path | None,
        typer.Option(
            "--manifests-dir",
            envvar="PGDEPLOY_MANIFESTS_DIR",
            file_okay=False,
            help="Directory holding postgres.yaml and network-policy.yaml",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log kubectl calls to stderr"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit",
        ),
    ] = False,
) -> None:
    """Deploy, destroy, inspect and tail logs of the Postgres resources."""
    configure_logging(verbose)
    ctx.obj = GlobalOptions(
        namespace=namespace,
        dry_run=dry_run,
        force=force,
        wait_timeout=wait_timeout,
        manifests_dir=manifests_dir,
    )

    if ctx.invoked_subcommand is None:
        console.error("No command given")
        console.print(ctx.get_help())
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_manager(ictx: InvocationContext) -> LifecycleManager:
    logger.debug(f"Invocation: {ictx.model_dump()}")
    return create_manager(ictx, console=console)


def _finish(report: OperationReport) -> None:
    for step in report.steps:
        logger.debug(f"{report.operation}: {step.name} -> {step.outcome.value}")
    if report.exit_code:
        raise typer.Exit(report.exit_code)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
@with_error_handling
def deploy(
    ctx: typer.Context,
    namespace: NamespaceOption = None,
    dry_run: DryRunOption = False,
    force: ForceOption = False,
    wait_timeout: WaitTimeoutOption = None,
    wait: Annotated[
        bool,
        typer.Option("--wait", help="Wait for the database pods to become ready"),
    ] = False,
) -> None:
    """Apply the Postgres manifest and the Postgres network policy."""
    ictx = build_invocation_context(
        ctx,
        Command.DEPLOY,
        namespace=namespace,
        dry_run=dry_run,
        force=force,
        wait_timeout=wait_timeout,
        wait=wait,
    )
    _finish(_get_manager(ictx).deploy())


@app.command()
@with_error_handling
def destroy(
    ctx: typer.Context,
    namespace: NamespaceOption = None,
    dry_run: DryRunOption = False,
    force: ForceOption = False,
    wait_timeout: WaitTimeoutOption = None,
) -> None:
    """Delete the Postgres resources (asks first unless --force)."""
    ictx = build_invocation_context(
        ctx,
        Command.DESTROY,
        namespace=namespace,
        dry_run=dry_run,
        force=force,
        wait_timeout=wait_timeout,
    )
    _finish(_get_manager(ictx).destroy(confirm=console.confirm_action))


@app.command()
@with_error_handling
def status(
    ctx: typer.Context,
    namespace: NamespaceOption = None,
    dry_run: DryRunOption = False,
    force: ForceOption = False,
    wait_timeout: WaitTimeoutOption = None,
) -> None:
    """List the Postgres deployments, services, PVCs, config maps and secrets."""
    ictx = build_invocation_context(
        ctx,
        Command.STATUS,
        namespace=namespace,
        dry_run=dry_run,
        force=force,
        wait_timeout=wait_timeout,
    )
    _finish(_get_manager(ictx).status())


@app.command()
@with_error_handling
def logs(
    ctx: typer.Context,
    namespace: NamespaceOption = None,
    dry_run: DryRunOption = False,
    force: ForceOption = False,
    wait_timeout: WaitTimeoutOption = None,
    tail: Annotated[
        int,
        typer.Option("--tail", min=1, help="Lines of log to show per pod"),
    ] = DEFAULT_CONSTANTS.DEFAULT_LOG_TAIL,
) -> None:
    """Print the last lines of every database pod's log."""
    ictx = build_invocation_context(
        ctx,
        Command.LOGS,
        namespace=namespace,
        dry_run=dry_run,
        force=force,
        wait_timeout=wait_timeout,
        log_tail=tail,
    )
    _finish(_get_manager(ictx).logs())


def main() -> None:
    """Main entry point for the CLI."""
    # Real environment variables take precedence over .env
    load_dotenv(DeploymentPaths(get_project_root()).env_file, override=False)
    app()


if __name__ == "__main__":
    main()
