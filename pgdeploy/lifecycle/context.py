"""Invocation context for a single run of the tool."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pgdeploy.infra.constants import DEFAULT_CONSTANTS


class Command(str, Enum):
    """Lifecycle commands."""

    DEPLOY = "deploy"
    DESTROY = "destroy"
    STATUS = "status"
    LOGS = "logs"


class InvocationContext(BaseModel):
    """Resolved options for one run.

    Built once from command-line options and environment defaults, then
    passed explicitly to every lifecycle operation. Immutable.
    """

    model_config = ConfigDict(frozen=True)

    command: Command
    namespace: str = DEFAULT_CONSTANTS.DEFAULT_NAMESPACE
    dry_run: bool = False
    force: bool = False
    wait_timeout: int = Field(default=DEFAULT_CONSTANTS.DEFAULT_WAIT_TIMEOUT, gt=0)
    wait: bool = False
    log_tail: int = Field(default=DEFAULT_CONSTANTS.DEFAULT_LOG_TAIL, gt=0)
    manifests_dir: Path | None = None

    @field_validator("namespace")
    @classmethod
    def _validate_namespace(cls, value: str) -> str:
        if not DEFAULT_CONSTANTS.NAMESPACE_PATTERN.match(value):
            raise ValueError(
                f"'{value}' is not a valid namespace name "
                "(lowercase alphanumerics and '-', at most 63 characters)"
            )
        return value

    @property
    def wait_timeout_arg(self) -> str:
        """Timeout formatted for kubectl (e.g. "600s")."""
        return f"{self.wait_timeout}s"
