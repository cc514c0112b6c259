"""Postgres deployment lifecycle: deploy, destroy, status and logs."""

from .appliers import ClusterApplier, ManifestApplier, RenderApplier
from .context import Command, InvocationContext
from .manager import LifecycleManager, create_manager
from .manifests import ManifestRef
from .results import OperationReport, StepOutcome, StepResult

__all__ = [
    "ClusterApplier",
    "Command",
    "InvocationContext",
    "LifecycleManager",
    "ManifestApplier",
    "ManifestRef",
    "OperationReport",
    "RenderApplier",
    "StepOutcome",
    "StepResult",
    "create_manager",
]
