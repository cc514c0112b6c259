"""Postgres resource lifecycle manager for Kubernetes namespaces."""

__version__ = "0.1.0"
