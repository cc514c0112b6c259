"""Tests for merging global and per-command options."""

from pathlib import Path
from unittest.mock import Mock

import pytest
import typer
from pydantic import ValidationError

from pgdeploy.cli.context import GlobalOptions, build_invocation_context, get_global_options
from pgdeploy.lifecycle import Command


def _typer_ctx(options: GlobalOptions | None) -> Mock:
    ctx = Mock(spec=typer.Context)
    ctx.obj = options
    return ctx


def test_global_options_are_immutable():
    options = GlobalOptions()

    with pytest.raises(AttributeError):
        options.namespace = "other"  # type: ignore[misc]


def test_get_global_options_from_typer_context():
    options = GlobalOptions(namespace="from-ctx")

    assert get_global_options(_typer_ctx(options)) is options


def test_get_global_options_without_context_uses_defaults():
    options = get_global_options(None)

    assert options == GlobalOptions()
    assert options.namespace == "globeco"
    assert options.wait_timeout == 600


def test_global_values_used_when_command_gives_none():
    ctx = _typer_ctx(
        GlobalOptions(
            namespace="before",
            dry_run=True,
            wait_timeout=30,
            manifests_dir=Path("/manifests"),
        )
    )

    ictx = build_invocation_context(ctx, Command.DEPLOY)

    assert ictx.command is Command.DEPLOY
    assert ictx.namespace == "before"
    assert ictx.dry_run is True
    assert ictx.force is False
    assert ictx.wait_timeout == 30
    assert ictx.manifests_dir == Path("/manifests")


def test_command_values_win():
    ctx = _typer_ctx(GlobalOptions(namespace="before", wait_timeout=30))

    ictx = build_invocation_context(
        ctx, Command.DESTROY, namespace="after", force=True, wait_timeout=45
    )

    assert ictx.namespace == "after"
    assert ictx.force is True
    assert ictx.wait_timeout == 45
    assert ictx.wait_timeout_arg == "45s"


def test_extra_fields_pass_through():
    ictx = build_invocation_context(_typer_ctx(None), Command.LOGS, log_tail=5)

    assert ictx.log_tail == 5
    assert ictx.namespace == "globeco"


def test_invalid_namespace_becomes_bad_parameter():
    with pytest.raises(typer.BadParameter) as excinfo:
        build_invocation_context(_typer_ctx(None), Command.STATUS, namespace="Not_Valid")

    assert "namespace" in str(excinfo.value)


def test_invocation_context_is_frozen():
    ictx = build_invocation_context(_typer_ctx(None), Command.STATUS)

    with pytest.raises(ValidationError):
        ictx.namespace = "other"  # type: ignore[misc]
