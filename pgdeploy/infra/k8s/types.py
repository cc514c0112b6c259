"""Data types for kubectl command results.

This module contains all dataclasses used across the kubectl wrappers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass
class CommandResult:
    """Result of a command execution."""

    success: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0

    @property
    def not_found(self) -> bool:
        """Whether kubectl reported the target as absent."""
        return not self.success and (
            "NotFound" in self.stderr or "not found" in self.stderr
        )


@dataclass
class ClusterResource:
    """A resource as listed by `kubectl get -o json`.

    Attributes:
        kind: Resource kind (Deployment, Service, ...)
        name: metadata.name
        created_at: metadata.creationTimestamp, if it could be parsed
    """

    kind: str
    name: str
    created_at: datetime | None = None

    @classmethod
    def from_item(cls, item: dict) -> ClusterResource:
        """Build a ClusterResource from one entry of a List's `items`."""
        metadata = item.get("metadata") or {}
        return cls(
            kind=item.get("kind", ""),
            name=metadata.get("name", ""),
            created_at=parse_timestamp(metadata.get("creationTimestamp")),
        )

    @property
    def age(self) -> str:
        """Human-readable age in the style of `kubectl get`."""
        if self.created_at is None:
            return "<unknown>"
        seconds = int((datetime.now(UTC) - self.created_at).total_seconds())
        if seconds < 120:
            return f"{max(seconds, 0)}s"
        if seconds < 7200:
            return f"{seconds // 60}m"
        if seconds < 172800:
            return f"{seconds // 3600}h"
        return f"{seconds // 86400}d"


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an RFC 3339 timestamp as emitted by the API server.

    Args:
        value: Timestamp such as "2024-01-15T10:30:00Z"

    Returns:
        Timezone-aware datetime, or None if value is missing or malformed
    """
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
