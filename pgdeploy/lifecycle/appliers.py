"""Mutation modes for the lifecycle manager.

A manager is built with exactly one applier:

- ClusterApplier: sends rendered documents to kubectl (apply / delete)
- RenderApplier: dry-run; renders documents locally and prints them,
  never invoking kubectl
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from loguru import logger

from pgdeploy.infra.k8s.kubectl import KubectlCommands
from pgdeploy.utils.console_like import ConsoleLike

from .manifests import describe, render
from .results import StepOutcome, StepResult


class ManifestApplier(ABC):
    """Applies or deletes a set of manifest documents in a namespace."""

    #: Whether this applier changes cluster state
    mutates_cluster: bool = True

    @abstractmethod
    def apply(
        self,
        step: str,
        documents: list[dict[str, Any]],
        namespace: str,
        *,
        required: bool = False,
    ) -> StepResult:
        """Create or update the documents' resources."""
        ...

    @abstractmethod
    def delete(
        self,
        step: str,
        documents: list[dict[str, Any]],
        namespace: str,
        *,
        required: bool = False,
    ) -> StepResult:
        """Delete the documents' resources, treating absent ones as deleted."""
        ...


class ClusterApplier(ManifestApplier):
    """Applies documents to the cluster through kubectl."""

    mutates_cluster = True

    def __init__(self, kubectl: KubectlCommands) -> None:
        self.kubectl = kubectl

    def apply(
        self,
        step: str,
        documents: list[dict[str, Any]],
        namespace: str,
        *,
        required: bool = False,
    ) -> StepResult:
        result = self.kubectl.apply_content(render(documents, namespace), namespace)
        return StepResult.from_command(step, result, required=required)

    def delete(
        self,
        step: str,
        documents: list[dict[str, Any]],
        namespace: str,
        *,
        required: bool = False,
    ) -> StepResult:
        result = self.kubectl.delete_content(render(documents, namespace), namespace)
        return StepResult.from_command(
            step, result, required=required, allow_not_found=True
        )


class RenderApplier(ManifestApplier):
    """Dry-run applier: prints what would be sent, contacts nothing."""

    mutates_cluster = False

    def __init__(self, console: ConsoleLike) -> None:
        self.console = console

    def apply(
        self,
        step: str,
        documents: list[dict[str, Any]],
        namespace: str,
        *,
        required: bool = False,
    ) -> StepResult:
        logger.debug(f"Rendering {len(documents)} document(s) for {step}")
        self.console.raw("---")
        self.console.raw(render(documents, namespace).rstrip("\n"))
        return StepResult(step, StepOutcome.SUCCESS, required=required)

    def delete(
        self,
        step: str,
        documents: list[dict[str, Any]],
        namespace: str,
        *,
        required: bool = False,
    ) -> StepResult:
        for doc in documents:
            self.console.raw(f"{describe(doc)} deleted (dry run) in {namespace}")
        return StepResult(step, StepOutcome.SUCCESS, required=required)
