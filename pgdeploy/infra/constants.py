"""Deployment constants and configuration.

This module centralizes all magic strings, paths, and configuration values
used by the Postgres lifecycle commands.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from pgdeploy.utils.paths import get_package_root


@dataclass(frozen=True)
class DeploymentConstants:
    """Constants for the Postgres resource set.

    All attributes are class-level and immutable.
    """

    # Kubernetes identifiers
    DEFAULT_NAMESPACE: str = "globeco"
    NETWORK_POLICY_NAME: str = "postgresql-policy"
    DATABASE_POD_LABEL: str = "app.kubernetes.io/component=database"

    # Resource kinds listed by `status`, filtered by name substring
    STATUS_RESOURCE_TYPES: str = "deployment,svc,pvc,configmap,secret"
    STATUS_NAME_FILTER: str = "postgresql"

    # Timeouts and limits
    DEFAULT_WAIT_TIMEOUT: int = 600
    DEFAULT_LOG_TAIL: int = 100

    # Bundled manifests, relative to the pgdeploy package
    MANIFESTS_DIR: str = "deployments"
    POSTGRES_MANIFEST: str = "postgres.yaml"
    NETWORK_POLICY_MANIFEST: str = "network-policy.yaml"

    # Kubernetes DNS-1123 label (namespace names)
    NAMESPACE_PATTERN: re.Pattern[str] = re.compile(
        r"^[a-z0-9]([-a-z0-9]{0,61}[a-z0-9])?$"
    )


class DeploymentPaths:
    """Path resolver for the manifests the tool consumes."""

    def __init__(self, project_root: Path, manifests_dir: Path | None = None) -> None:
        """Initialize deployment paths.

        Args:
            project_root: Directory the tool runs from (holds the optional .env)
            manifests_dir: Override for the manifests bundled with the package
        """
        self._project_root = project_root
        self._constants = DEFAULT_CONSTANTS
        self.manifests = (
            manifests_dir or get_package_root() / self._constants.MANIFESTS_DIR
        )

    @property
    def project_root(self) -> Path:
        """Get path to the project root."""
        return self._project_root

    @property
    def postgres_manifest(self) -> Path:
        """Get path to the primary Postgres manifest."""
        return self.manifests / self._constants.POSTGRES_MANIFEST

    @property
    def network_policy_manifest(self) -> Path:
        """Get path to the multi-document network policy manifest."""
        return self.manifests / self._constants.NETWORK_POLICY_MANIFEST

    @property
    def env_file(self) -> Path:
        """Get path to .env file."""
        return self._project_root / ".env"


DEFAULT_CONSTANTS = DeploymentConstants()
