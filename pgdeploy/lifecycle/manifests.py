"""Multi-document manifest loading and selection.

Manifests are treated as opaque resource definitions: they are split on
document boundaries, optionally filtered by `metadata.name`, and rendered
back to YAML for kubectl. No schema validation is performed.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from pgdeploy.infra.errors import ManifestError

# Kinds that must not carry metadata.namespace
CLUSTER_SCOPED_KINDS = frozenset(
    {
        "ClusterRole",
        "ClusterRoleBinding",
        "CustomResourceDefinition",
        "Namespace",
        "PersistentVolume",
        "PriorityClass",
        "StorageClass",
    }
)


@dataclass(frozen=True)
class ManifestRef:
    """A manifest file plus the logical resource selected from it.

    Attributes:
        path: Path to a (possibly multi-document) YAML file
        name: metadata.name of the documents to select, or None for all
    """

    path: Path
    name: str | None = None

    @property
    def label(self) -> str:
        """Short description used in console output."""
        if self.name:
            return f"{self.name} ({self.path.name})"
        return self.path.name

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> list[dict[str, Any]]:
        """Load every document in the file.

        Empty documents (stray separators, comment-only blocks) are dropped.

        Raises:
            FileNotFoundError: If the file does not exist
            ManifestError: If the YAML cannot be parsed or a document is not a mapping
        """
        text = self.path.read_text(encoding="utf-8")
        return parse_documents(text, source=str(self.path))

    def select(self) -> list[dict[str, Any]]:
        """Load the documents this reference points at."""
        documents = self.load()
        if self.name is None:
            return documents
        return [doc for doc in documents if document_name(doc) == self.name]


def parse_documents(text: str, *, source: str = "<string>") -> list[dict[str, Any]]:
    """Split YAML text on document boundaries.

    Args:
        text: YAML stream, documents separated by `---`
        source: Name used in error messages

    Returns:
        Non-empty documents, in file order

    Raises:
        ManifestError: If parsing fails or a document is not a mapping
    """
    try:
        loaded = list(yaml.safe_load_all(text))
    except yaml.YAMLError as e:
        raise ManifestError(f"Error parsing {source}", details=str(e)) from e

    documents: list[dict[str, Any]] = []
    for index, doc in enumerate(loaded):
        if doc is None:
            continue
        if not isinstance(doc, dict):
            raise ManifestError(
                f"Document {index} in {source} is not a mapping",
                details=f"Got {type(doc).__name__}",
            )
        documents.append(doc)
    return documents


def document_name(doc: dict[str, Any]) -> str | None:
    metadata = doc.get("metadata")
    if isinstance(metadata, dict):
        return metadata.get("name")
    return None


def describe(doc: dict[str, Any]) -> str:
    """Return `Kind/name` for a document."""
    return f"{doc.get('kind', 'Unknown')}/{document_name(doc) or '<unnamed>'}"


def render(documents: list[dict[str, Any]], namespace: str) -> str:
    """Render documents as a YAML stream targeted at a namespace.

    Namespaced documents get `metadata.namespace` set to the target
    namespace, so kubectl never sees a namespace mismatch. The input
    documents are not modified.
    """
    rendered = []
    for doc in documents:
        doc = copy.deepcopy(doc)
        if doc.get("kind") not in CLUSTER_SCOPED_KINDS:
            metadata = doc.setdefault("metadata", {})
            metadata["namespace"] = namespace
        rendered.append(doc)
    return yaml.safe_dump_all(rendered, sort_keys=False, default_flow_style=False)
