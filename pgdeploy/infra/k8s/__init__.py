"""Kubernetes infrastructure layer.

Thin wrappers over the kubectl binary.

Example:
    from pgdeploy.infra.k8s import CommandRunner, KubectlCommands

    kubectl = KubectlCommands(CommandRunner(Path(".")))
    pods = kubectl.get_pod_names("globeco", "app.kubernetes.io/component=database")
"""

from .kubectl import KubectlCommands
from .runner import CommandRunner
from .types import ClusterResource, CommandResult, parse_timestamp

__all__ = [
    "KubectlCommands",
    "CommandRunner",
    "ClusterResource",
    "CommandResult",
    "parse_timestamp",
]
