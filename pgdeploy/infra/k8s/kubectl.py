"""Kubectl command abstractions.

This module provides the kubectl operations the lifecycle manager needs:
apply, delete, get, logs and wait. Mutations return CommandResult so the
caller decides how to treat failures; reads raise KubectlError because a
failed read has no usable output.
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable

from pgdeploy.infra.errors import KubectlError

from .runner import CommandRunner
from .types import ClusterResource, CommandResult


class KubectlCommands:
    """Kubectl-related shell commands.

    Provides operations for:
    - Applying manifests passed on stdin
    - Deleting manifest resources with ignore-not-found semantics
    - Listing resources and pods
    - Streaming pod logs
    - Waiting for pods to reach a condition
    """

    def __init__(self, runner: CommandRunner, binary: str | None = None) -> None:
        """Initialize kubectl commands.

        Args:
            runner: Command runner used for execution
            binary: kubectl executable (defaults to $KUBECTL or "kubectl")
        """
        self._runner = runner
        self.binary = binary or os.environ.get("KUBECTL", "kubectl")

    def _run(self, args: list[str], *, input_data: str | None = None) -> CommandResult:
        return self._runner.run([self.binary, *args], input_data=input_data)

    # =========================================================================
    # Resource Mutation
    # =========================================================================

    def apply_content(self, content: str, namespace: str) -> CommandResult:
        """Apply manifest YAML passed on stdin."""
        return self._run(["apply", "-f", "-", "-n", namespace], input_data=content)

    def delete_content(self, content: str, namespace: str) -> CommandResult:
        """Delete the resources of manifest YAML passed on stdin."""
        return self._run(
            ["delete", "-f", "-", "-n", namespace, "--ignore-not-found=true"],
            input_data=content,
        )

    # =========================================================================
    # Resource Queries
    # =========================================================================

    def list_resources(
        self, resource_types: str, namespace: str
    ) -> list[ClusterResource]:
        """List resources of the given comma-separated types in a namespace.

        Raises:
            KubectlError: If kubectl fails or returns unparseable output
        """
        result = self._run(["get", resource_types, "-n", namespace, "-o", "json"])
        if not result.success:
            raise KubectlError(
                f"Failed to list {resource_types} in {namespace}",
                stderr=result.stderr,
                returncode=result.returncode,
            )
        if not result.stdout.strip():
            return []
        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise KubectlError(f"Unexpected kubectl output: {e}") from e
        return [ClusterResource.from_item(item) for item in data.get("items", [])]

    def get_pod_names(self, namespace: str, label_selector: str) -> list[str]:
        """Get `pod/<name>` references for pods matching a label selector.

        Raises:
            KubectlError: If kubectl fails
        """
        result = self._run(
            ["get", "pods", "-n", namespace, "-l", label_selector, "-o", "name"]
        )
        if not result.success:
            raise KubectlError(
                f"Failed to list pods in {namespace}",
                stderr=result.stderr,
                returncode=result.returncode,
            )
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    # =========================================================================
    # Pod Operations
    # =========================================================================

    def stream_logs(
        self,
        pod: str,
        namespace: str,
        *,
        tail: int = 100,
        on_output: Callable[[str], None] | None = None,
    ) -> CommandResult:
        """Stream the last `tail` lines of a pod's log."""
        return self._runner.run_streaming(
            [self.binary, "logs", pod, "-n", namespace, f"--tail={tail}"],
            on_output=on_output,
        )

    def wait_for_pods(
        self,
        namespace: str,
        label_selector: str,
        *,
        condition: str = "ready",
        timeout: str = "600s",
    ) -> CommandResult:
        """Wait for pods matching a selector to reach a condition."""
        return self._run(
            [
                "wait",
                "--for",
                f"condition={condition}",
                "pod",
                "-l",
                label_selector,
                "-n",
                namespace,
                f"--timeout={timeout}",
            ]
        )
