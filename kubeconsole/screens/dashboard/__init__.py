"""Dashboard screen."""

from kubeconsole.screens.dashboard.dashboard_screen import DashboardScreen
from kubeconsole.screens.dashboard.presenter import (
    CommandOutputLoaded,
    DashboardPresenter,
    ExportCompleted,
    LogsLoaded,
    SnapshotLoaded,
)

__all__ = [
    "CommandOutputLoaded",
    "DashboardPresenter",
    "DashboardScreen",
    "ExportCompleted",
    "LogsLoaded",
    "SnapshotLoaded",
]
