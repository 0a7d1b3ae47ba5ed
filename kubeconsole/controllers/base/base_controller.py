"""Collaborator interfaces with worker-friendly patterns for kubeconsole.

This module defines the narrow interfaces the console consumes (snapshots,
logs, describe/YAML) and the result wrapper used by Textual workers so the UI
stays responsive while a provider is busy.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any

from kubeconsole.constants.enums import ResourceKind
from kubeconsole.controllers.base.errors import KubeConsoleError
from kubeconsole.models.core.cluster_snapshot import ClusterSnapshot

logger = logging.getLogger(__name__)


@dataclass
class WorkerResult:
    """Result wrapper for worker operations."""

    success: bool
    data: Any | None = None
    error: str | None = None
    duration_ms: float = 0.0


class AsyncControllerMixin:
    """Mixin providing worker-friendly async patterns for providers.

    Providers mixing this in can be awaited from Textual workers through
    :meth:`run_timed`, which never raises for expected provider failures.
    """

    def __init__(self) -> None:
        """Initialize the async controller mixin."""
        self._load_start_time: float | None = None

    async def run_timed(self, operation: Awaitable[Any]) -> WorkerResult:
        """Await ``operation`` and wrap its outcome in a :class:`WorkerResult`."""
        self._load_start_time = time.monotonic()
        try:
            data = await operation
        except KubeConsoleError as exc:
            duration_ms = (time.monotonic() - self._load_start_time) * 1000
            logger.warning("Provider operation failed after %.0fms: %s", duration_ms, exc)
            return WorkerResult(success=False, error=str(exc), duration_ms=duration_ms)
        duration_ms = (time.monotonic() - self._load_start_time) * 1000
        return WorkerResult(success=True, data=data, duration_ms=duration_ms)


class DataProvider(AsyncControllerMixin, ABC):
    """Source of cluster snapshots.

    Subclasses should implement the abstract methods to provide
    specific data fetching functionality.
    """

    @abstractmethod
    async def get_snapshot(self) -> ClusterSnapshot:
        """Return the latest cluster snapshot.

        Raises:
            DataFetchError: If no snapshot can be produced.
        """
        ...

    @abstractmethod
    async def force_refresh(self) -> None:
        """Invalidate any cached snapshot so the next read is fresh.

        Raises:
            DataFetchError: If the refresh cannot be triggered.
        """
        ...


class LogSource(ABC):
    """Source of container logs."""

    @abstractmethod
    async def fetch_log(self, pod_key: str, container: str, tail_lines: int) -> str:
        """Return the last ``tail_lines`` lines of a container log.

        Raises:
            LogFetchError: If the log cannot be read.
        """
        ...


class ResourceInspector(ABC):
    """Optional describe/YAML capability."""

    @abstractmethod
    async def describe(self, kind: ResourceKind, key: str) -> str:
        ...

    @abstractmethod
    async def get_yaml(self, kind: ResourceKind, key: str) -> str:
        ...
