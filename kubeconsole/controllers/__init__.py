"""Controllers module for the kubeconsole TUI.

This module provides the data-source interfaces, the metric history and the
log-tailing subsystem. The view controller lives in
:mod:`kubeconsole.controllers.view` and is imported from there.
"""

from __future__ import annotations

# Base classes
from kubeconsole.controllers.base import (
    AsyncControllerMixin,
    DataProvider,
    KubeConsoleError,
    LogSource,
    ProviderCapabilities,
    ResourceInspector,
    UnsupportedOperationError,
    WorkerResult,
)

# Logs domain
from kubeconsole.controllers.logs import LogSession, LogStream

# Metrics domain
from kubeconsole.controllers.metrics import MetricsHistory

__all__ = [
    # Base
    "AsyncControllerMixin",
    "DataProvider",
    "KubeConsoleError",
    "LogSource",
    "ProviderCapabilities",
    "ResourceInspector",
    "UnsupportedOperationError",
    "WorkerResult",
    # Logs
    "LogSession",
    "LogStream",
    # Metrics
    "MetricsHistory",
]
