from pathlib import Path
from unittest.mock import Mock

import pytest

from pgdeploy.infra.constants import DeploymentPaths
from pgdeploy.infra.k8s import CommandResult, KubectlCommands

POSTGRES_MANIFEST = """\
apiVersion: v1
kind: PersistentVolumeClaim
metadata:
  name: postgresql-pvc
  namespace: globeco
spec:
  accessModes:
    - ReadWriteOnce
---
apiVersion: apps/v1
kind: Deployment
metadata:
  name: postgresql
  namespace: globeco
spec:
  replicas: 1
"""

NETWORK_POLICY_MANIFEST = """\
apiVersion: networking.k8s.io/v1
kind: NetworkPolicy
metadata:
  name: portfolio-accounting-api-policy
  namespace: globeco
spec:
  podSelector: {}
---
apiVersion: networking.k8s.io/v1
kind: NetworkPolicy
metadata:
  name: postgresql-policy
  namespace: globeco
spec:
  podSelector:
    matchLabels:
      app.kubernetes.io/component: database
---
apiVersion: networking.k8s.io/v1
kind: NetworkPolicy
metadata:
  name: hazelcast-policy
  namespace: globeco
spec:
  podSelector: {}
"""


class RecordingConsole:
    """ConsoleLike that keeps every message for assertions."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, object]] = []

    def _record(self, kind: str, msg: object) -> None:
        self.messages.append((kind, msg))

    def print(self, msg=None) -> None:
        self._record("print", msg)

    def raw(self, text: str) -> None:
        self._record("raw", text)

    def info(self, msg: str) -> None:
        self._record("info", msg)

    def warn(self, msg: str) -> None:
        self._record("warn", msg)

    def error(self, msg: str) -> None:
        self._record("error", msg)

    def ok(self, msg: str) -> None:
        self._record("ok", msg)

    def of_kind(self, kind: str) -> list[object]:
        return [msg for k, msg in self.messages if k == kind]


@pytest.fixture
def manifests_dir(tmp_path: Path) -> Path:
    """A manifests directory with both manifest files."""
    directory = tmp_path / "deployments"
    directory.mkdir()
    (directory / "postgres.yaml").write_text(POSTGRES_MANIFEST)
    (directory / "network-policy.yaml").write_text(NETWORK_POLICY_MANIFEST)
    return directory


@pytest.fixture
def paths(tmp_path: Path, manifests_dir: Path) -> DeploymentPaths:
    return DeploymentPaths(tmp_path, manifests_dir)


@pytest.fixture
def recording_console() -> RecordingConsole:
    return RecordingConsole()


@pytest.fixture
def kubectl() -> Mock:
    """KubectlCommands mock whose calls all succeed with empty output."""
    mock = Mock(spec=KubectlCommands)
    mock.apply_content.return_value = CommandResult(success=True)
    mock.delete_content.return_value = CommandResult(success=True)
    mock.wait_for_pods.return_value = CommandResult(success=True)
    mock.stream_logs.return_value = CommandResult(success=True)
    mock.list_resources.return_value = []
    mock.get_pod_names.return_value = []
    return mock
