"""Exception types shared by the CLI and the lifecycle manager."""

from __future__ import annotations


class DeploymentError(Exception):
    """Raised when a deployment operation fails."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ClusterUnavailableError(DeploymentError):
    """Raised when the kubectl binary cannot be executed at all."""


class KubectlError(DeploymentError):
    """Raised when a kubectl read fails and its output cannot be used."""

    def __init__(self, message: str, stderr: str = "", returncode: int = 1):
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(message, details=stderr.strip() or None)


class ManifestError(DeploymentError):
    """Raised when a manifest file cannot be parsed."""
