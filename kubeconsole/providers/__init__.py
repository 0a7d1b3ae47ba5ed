"""Bundled data providers."""

from kubeconsole.providers.file_provider import FileSnapshotProvider

__all__ = [
    "FileSnapshotProvider",
]
