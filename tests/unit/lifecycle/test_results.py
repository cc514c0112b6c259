"""Tests for step results and the fatality policy."""

from pgdeploy.infra.k8s import CommandResult
from pgdeploy.lifecycle.results import OperationReport, StepOutcome, StepResult


class TestStepResultFromCommand:
    """Tests for classifying kubectl results."""

    def test_success(self) -> None:
        step = StepResult.from_command("apply", CommandResult(success=True, stdout="ok"))
        assert step.outcome is StepOutcome.SUCCESS
        assert step.detail == ""

    def test_not_found_on_delete_is_tolerated(self) -> None:
        result = CommandResult(
            success=False,
            stderr='Error from server (NotFound): networkpolicies "x" not found',
            returncode=1,
        )
        step = StepResult.from_command(
            "delete", result, required=True, allow_not_found=True
        )
        assert step.outcome is StepOutcome.NOT_FOUND
        assert step.fatal is False

    def test_not_found_without_allowance_is_a_failure(self) -> None:
        result = CommandResult(
            success=False,
            stderr='Error from server (NotFound): namespaces "test-ns" not found',
            returncode=1,
        )
        step = StepResult.from_command("apply", result, required=True)
        assert step.outcome is StepOutcome.FAILED
        assert step.fatal is True

    def test_failure_keeps_stderr(self) -> None:
        result = CommandResult(success=False, stderr="connection refused\n", returncode=1)
        step = StepResult.from_command("apply", result)
        assert step.outcome is StepOutcome.FAILED
        assert step.detail == "connection refused"


class TestOperationReport:
    """Tests for OperationReport."""

    def test_empty_report_succeeds(self) -> None:
        report = OperationReport("status")
        assert report.succeeded is True
        assert report.exit_code == 0

    def test_optional_failure_is_a_warning(self) -> None:
        report = OperationReport("deploy")
        report.add(StepResult("apply policy", StepOutcome.FAILED, required=False))

        assert report.succeeded is True
        assert [step.name for step in report.warnings] == ["apply policy"]

    def test_required_failure_is_fatal(self) -> None:
        report = OperationReport("deploy")
        report.add(StepResult("apply postgres", StepOutcome.FAILED, required=True))
        report.add(StepResult("apply policy", StepOutcome.SUCCESS))

        assert report.succeeded is False
        assert report.exit_code == 1
        assert [step.name for step in report.fatal_steps] == ["apply postgres"]

    def test_required_skip_is_not_fatal(self) -> None:
        report = OperationReport("deploy")
        report.add(StepResult("apply postgres", StepOutcome.SKIPPED, required=True))
        assert report.succeeded is True
