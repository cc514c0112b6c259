"""Per-step results and the policy deciding which failures are fatal."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pgdeploy.infra.k8s.types import CommandResult


class StepOutcome(str, Enum):
    """Outcome of a single cluster call."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"  # Target already absent; never an error
    SKIPPED = "skipped"  # Nothing to do (missing file, no matching document)
    FAILED = "failed"


@dataclass
class StepResult:
    """Result of one step of a lifecycle operation.

    Attributes:
        name: Step identifier shown to the user (e.g. "apply postgres.yaml")
        outcome: What happened
        required: Whether a failure of this step fails the whole command
        detail: Extra information (stderr, skip reason)
    """

    name: str
    outcome: StepOutcome
    required: bool = False
    detail: str = ""

    @property
    def failed(self) -> bool:
        return self.outcome is StepOutcome.FAILED

    @property
    def fatal(self) -> bool:
        return self.required and self.failed

    @classmethod
    def from_command(
        cls,
        name: str,
        result: CommandResult,
        *,
        required: bool = False,
        allow_not_found: bool = False,
    ) -> StepResult:
        """Classify a kubectl CommandResult.

        A "not found" error is NOT_FOUND only when allow_not_found is set
        (deletes); for any other call it is a failure.
        """
        if result.success:
            outcome = StepOutcome.SUCCESS
        elif allow_not_found and result.not_found:
            outcome = StepOutcome.NOT_FOUND
        else:
            outcome = StepOutcome.FAILED
        detail = (result.stderr or result.stdout).strip() if not result.success else ""
        return cls(name=name, outcome=outcome, required=required, detail=detail)


@dataclass
class OperationReport:
    """Collected step results of one lifecycle operation."""

    operation: str
    steps: list[StepResult] = field(default_factory=list)
    cancelled: bool = False

    def add(self, step: StepResult) -> StepResult:
        self.steps.append(step)
        return step

    @property
    def fatal_steps(self) -> list[StepResult]:
        return [step for step in self.steps if step.fatal]

    @property
    def warnings(self) -> list[StepResult]:
        """Failed steps that do not fail the command."""
        return [step for step in self.steps if step.failed and not step.required]

    @property
    def succeeded(self) -> bool:
        return not self.fatal_steps

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1
