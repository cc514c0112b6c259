"""Tests for multi-document manifest parsing and selection."""

from pathlib import Path

import pytest
import yaml

from pgdeploy.infra.errors import ManifestError
from pgdeploy.lifecycle.manifests import (
    ManifestRef,
    describe,
    document_name,
    parse_documents,
    render,
)


class TestParseDocuments:
    """Tests for parse_documents."""

    def test_splits_on_document_separator(self) -> None:
        docs = parse_documents("kind: A\n---\nkind: B\n")
        assert [doc["kind"] for doc in docs] == ["A", "B"]

    def test_drops_empty_documents(self) -> None:
        """Leading, trailing and doubled separators do not produce documents."""
        docs = parse_documents("---\nkind: A\n---\n---\n# only a comment\n---\n")
        assert docs == [{"kind": "A"}]

    def test_invalid_yaml_raises_manifest_error(self) -> None:
        with pytest.raises(ManifestError) as excinfo:
            parse_documents("kind: [unclosed\n", source="broken.yaml")
        assert "broken.yaml" in excinfo.value.message

    def test_non_mapping_document_raises(self) -> None:
        with pytest.raises(ManifestError, match="not a mapping"):
            parse_documents("- just\n- a list\n")


class TestManifestRef:
    """Tests for ManifestRef loading and selection."""

    def test_select_by_name_returns_only_that_document(self, manifests_dir: Path) -> None:
        ref = ManifestRef(manifests_dir / "network-policy.yaml", "postgresql-policy")

        docs = ref.select()

        assert len(docs) == 1
        assert docs[0]["metadata"]["name"] == "postgresql-policy"
        # The whole document is kept, not only up to the marker line
        assert docs[0]["spec"]["podSelector"]["matchLabels"] == {
            "app.kubernetes.io/component": "database"
        }

    def test_select_without_name_returns_all_documents(self, manifests_dir: Path) -> None:
        ref = ManifestRef(manifests_dir / "postgres.yaml")
        assert [document_name(doc) for doc in ref.select()] == [
            "postgresql-pvc",
            "postgresql",
        ]

    def test_select_unknown_name_returns_empty(self, manifests_dir: Path) -> None:
        ref = ManifestRef(manifests_dir / "network-policy.yaml", "redis-policy")
        assert ref.select() == []

    def test_name_in_comment_does_not_match(self, tmp_path: Path) -> None:
        """Only metadata.name counts, not text appearing elsewhere."""
        manifest = tmp_path / "policies.yaml"
        manifest.write_text(
            "kind: NetworkPolicy\n"
            "metadata:\n"
            "  name: other-policy\n"
            "  # name: postgresql-policy\n"
        )
        assert ManifestRef(manifest, "postgresql-policy").select() == []

    def test_exists(self, tmp_path: Path) -> None:
        assert ManifestRef(tmp_path / "missing.yaml").exists() is False

    def test_label(self, tmp_path: Path) -> None:
        assert ManifestRef(tmp_path / "postgres.yaml").label == "postgres.yaml"
        assert (
            ManifestRef(tmp_path / "network-policy.yaml", "postgresql-policy").label
            == "postgresql-policy (network-policy.yaml)"
        )


class TestRender:
    """Tests for render."""

    def test_sets_target_namespace(self) -> None:
        docs = [{"kind": "Service", "metadata": {"name": "db", "namespace": "globeco"}}]

        rendered = list(yaml.safe_load_all(render(docs, "test-ns")))

        assert rendered[0]["metadata"]["namespace"] == "test-ns"
        # Input is left untouched
        assert docs[0]["metadata"]["namespace"] == "globeco"

    def test_cluster_scoped_kinds_get_no_namespace(self) -> None:
        docs = [{"kind": "Namespace", "metadata": {"name": "test-ns"}}]

        rendered = list(yaml.safe_load_all(render(docs, "test-ns")))

        assert "namespace" not in rendered[0]["metadata"]

    def test_preserves_document_order(self) -> None:
        docs = [
            {"kind": "PersistentVolumeClaim", "metadata": {"name": "a"}},
            {"kind": "Deployment", "metadata": {"name": "b"}},
        ]

        rendered = list(yaml.safe_load_all(render(docs, "ns")))

        assert [describe(doc) for doc in rendered] == [
            "PersistentVolumeClaim/a",
            "Deployment/b",
        ]


def test_describe_unnamed_document() -> None:
    assert describe({"kind": "ConfigMap"}) == "ConfigMap/<unnamed>"
