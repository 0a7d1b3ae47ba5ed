"""kubeconsole TUI screens.

Domain Structure:
    - dashboard/ - The single dashboard screen and its presenter

Example Usage:
    from kubeconsole.screens.dashboard import DashboardScreen
"""

from __future__ import annotations

from kubeconsole.screens.dashboard import DashboardPresenter, DashboardScreen

__all__ = [
    "DashboardPresenter",
    "DashboardScreen",
]
