"""Deployment lifecycle manager.

Runs the four lifecycle operations (deploy, destroy, status, logs) against
the Postgres resource set in one namespace. Every operation is a linear
sequence of independent, idempotent kubectl calls; each call is recorded
as a StepResult and the caller decides the exit code from the report.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from loguru import logger
from rich.table import Table

from pgdeploy.infra.constants import (
    DEFAULT_CONSTANTS,
    DeploymentConstants,
    DeploymentPaths,
)
from pgdeploy.infra.errors import KubectlError, ManifestError
from pgdeploy.infra.k8s import CommandRunner, KubectlCommands
from pgdeploy.utils.console_like import ConsoleLike, coalesce_console
from pgdeploy.utils.paths import get_project_root

from .appliers import ClusterApplier, ManifestApplier, RenderApplier
from .context import InvocationContext
from .manifests import ManifestRef
from .results import OperationReport, StepOutcome, StepResult

ConfirmFn = Callable[[str], bool]

_ACTION_PAST = {"apply": "applied", "delete": "deleted"}


class LifecycleManager:
    """Deploys, destroys, inspects and tails logs of the Postgres resources.

    Attributes:
        ctx: Resolved invocation options
        kubectl: kubectl wrapper used for reads (and by ClusterApplier for writes)
        applier: Mutation mode; RenderApplier in dry-run, ClusterApplier otherwise
        paths: Manifest locations
    """

    def __init__(
        self,
        ctx: InvocationContext,
        kubectl: KubectlCommands,
        applier: ManifestApplier,
        paths: DeploymentPaths,
        *,
        console: ConsoleLike | None = None,
        constants: DeploymentConstants = DEFAULT_CONSTANTS,
    ) -> None:
        self.ctx = ctx
        self.kubectl = kubectl
        self.applier = applier
        self.paths = paths
        self.console = coalesce_console(console)
        self.constants = constants

    # =========================================================================
    # Manifest references
    # =========================================================================

    @property
    def postgres_manifest(self) -> ManifestRef:
        return ManifestRef(self.paths.postgres_manifest)

    @property
    def network_policy(self) -> ManifestRef:
        return ManifestRef(
            self.paths.network_policy_manifest, self.constants.NETWORK_POLICY_NAME
        )

    # =========================================================================
    # Operations
    # =========================================================================

    def deploy(self) -> OperationReport:
        """Apply the Postgres manifest and the Postgres network policy.

        The primary manifest is required; the network policy is optional
        and its failure only produces a warning.
        """
        report = OperationReport("deploy")
        namespace = self.ctx.namespace
        self.console.info(f"Deploying Postgres resources to namespace {namespace}")

        primary = report.add(
            self._mutate(self.postgres_manifest, "apply", required=True)
        )
        report.add(self._mutate(self.network_policy, "apply", required=False))

        if self.ctx.wait and self.applier.mutates_cluster and not primary.failed:
            report.add(self._wait_for_database())

        if report.succeeded:
            self.console.ok("Postgres deployment complete")
        else:
            self.console.error("Postgres deployment failed")
        return report

    def destroy(self, confirm: ConfirmFn | None = None) -> OperationReport:
        """Delete the Postgres manifest's resources and the network policy.

        Args:
            confirm: Called with a question when neither force nor dry-run
                     is set; a False return (or no callback) cancels the run.
        """
        report = OperationReport("destroy")
        namespace = self.ctx.namespace
        self.console.info(f"Deleting Postgres resources from namespace {namespace}")

        if not (self.ctx.force or self.ctx.dry_run):
            question = f"Delete Postgres resources in {namespace}?"
            if confirm is None or not confirm(question):
                self.console.info("Cancelled")
                report.cancelled = True
                return report

        report.add(self._mutate(self.postgres_manifest, "delete", required=False))
        report.add(self._mutate(self.network_policy, "delete", required=False))

        if self.applier.mutates_cluster:
            self.console.ok("Postgres resources deleted")
        else:
            self.console.info("Dry run complete, no resources deleted")
        return report

    def status(self) -> OperationReport:
        """Print the Postgres resources currently in the namespace.

        Prints nothing when no resource matches.
        """
        report = OperationReport("status")
        resource_types = self.constants.STATUS_RESOURCE_TYPES
        try:
            resources = self.kubectl.list_resources(resource_types, self.ctx.namespace)
        except KubectlError as e:
            logger.warning(f"{e.message}: {e.stderr.strip()}")
            self.console.warn(e.message)
            report.add(StepResult("list resources", StepOutcome.FAILED, detail=e.stderr))
            return report

        matches = [
            resource
            for resource in resources
            if self.constants.STATUS_NAME_FILTER in resource.name
        ]
        logger.debug(f"{len(matches)} of {len(resources)} resources match")
        if matches:
            table = Table(title=f"Postgres resources in {self.ctx.namespace}")
            table.add_column("Kind", style="cyan")
            table.add_column("Name")
            table.add_column("Age", justify="right")
            for resource in matches:
                table.add_row(resource.kind, resource.name, resource.age)
            self.console.print(table)

        report.add(
            StepResult("list resources", StepOutcome.SUCCESS, detail=str(len(matches)))
        )
        return report

    def logs(self) -> OperationReport:
        """Print the tail of every database pod's log, one pod at a time."""
        report = OperationReport("logs")
        namespace = self.ctx.namespace
        try:
            pods = self.kubectl.get_pod_names(
                namespace, self.constants.DATABASE_POD_LABEL
            )
        except KubectlError as e:
            logger.warning(f"{e.message}: {e.stderr.strip()}")
            self.console.warn(e.message)
            report.add(StepResult("list pods", StepOutcome.FAILED, detail=e.stderr))
            return report

        for pod in pods:
            self.console.raw(f"=== Logs from {pod} ===")
            result = self.kubectl.stream_logs(
                pod, namespace, tail=self.ctx.log_tail, on_output=self.console.raw
            )
            step = report.add(StepResult.from_command(f"logs {pod}", result))
            if step.failed:
                self.console.warn(f"Could not read logs from {pod}")
        return report

    # =========================================================================
    # Steps
    # =========================================================================

    def _load(
        self, ref: ManifestRef, step: str, *, required: bool
    ) -> list[dict[str, Any]] | StepResult:
        """Load a manifest's selected documents, or the StepResult explaining why not."""
        if not ref.exists():
            self.console.warn(f"File not found: {ref.path}")
            return StepResult(
                step, StepOutcome.SKIPPED, required=required, detail="file not found"
            )
        try:
            documents = ref.select()
        except ManifestError as e:
            self.console.error(f"{e.message}: {e.details}")
            return StepResult(
                step, StepOutcome.FAILED, required=required, detail=e.details or ""
            )
        if not documents:
            logger.info(f"No documents selected from {ref.path}")
            return StepResult(
                step,
                StepOutcome.SKIPPED,
                required=required,
                detail="no matching document",
            )
        return documents

    def _mutate(self, ref: ManifestRef, action: str, *, required: bool) -> StepResult:
        step = f"{action} {ref.label}"
        loaded = self._load(ref, step, required=required)
        if isinstance(loaded, StepResult):
            return loaded

        if action == "apply":
            self.console.info(f"Applying {ref.label}...")
            result = self.applier.apply(
                step, loaded, self.ctx.namespace, required=required
            )
        else:
            result = self.applier.delete(
                step, loaded, self.ctx.namespace, required=required
            )

        self._report_step(result)
        if result.outcome is StepOutcome.SUCCESS and self.applier.mutates_cluster:
            self.console.ok(f"{ref.label} {_ACTION_PAST[action]}")
        return result

    def _wait_for_database(self) -> StepResult:
        self.console.info(
            f"Waiting up to {self.ctx.wait_timeout_arg} for database pods to be ready..."
        )
        result = self.kubectl.wait_for_pods(
            self.ctx.namespace,
            self.constants.DATABASE_POD_LABEL,
            timeout=self.ctx.wait_timeout_arg,
        )
        step = StepResult.from_command("wait for database", result, required=True)
        self._report_step(step)
        return step

    def _report_step(self, step: StepResult) -> None:
        if step.outcome is StepOutcome.SUCCESS:
            logger.info(f"{step.name}: ok")
        elif step.outcome is StepOutcome.NOT_FOUND:
            logger.info(f"{step.name}: already absent")
        elif step.required:
            logger.error(f"{step.name} failed: {step.detail}")
            self.console.error(f"{step.name} failed")
            if step.detail:
                self.console.raw(step.detail)
        else:
            logger.warning(f"{step.name} failed (ignored): {step.detail}")
            self.console.warn(f"{step.name} failed, continuing")


def create_manager(
    ctx: InvocationContext,
    console: ConsoleLike | None = None,
    paths: DeploymentPaths | None = None,
) -> LifecycleManager:
    """Build a manager with the applier matching the run mode.

    Args:
        ctx: Resolved invocation options
        console: Output sink (defaults to plain stdout)
        paths: Manifest locations (defaults to the manifests bundled with
               the package, or ctx.manifests_dir when set)

    Returns:
        LifecycleManager using RenderApplier when ctx.dry_run, else ClusterApplier
    """
    project_root = get_project_root()
    paths = paths or DeploymentPaths(project_root, ctx.manifests_dir)
    kubectl = KubectlCommands(CommandRunner(project_root))
    console = coalesce_console(console)

    applier: ManifestApplier
    if ctx.dry_run:
        applier = RenderApplier(console)
    else:
        applier = ClusterApplier(kubectl)

    return LifecycleManager(ctx, kubectl, applier, paths, console=console)
