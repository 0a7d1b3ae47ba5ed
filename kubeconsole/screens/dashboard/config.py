"""Dashboard screen configuration - widget IDs, view titles and column definitions."""

from __future__ import annotations

from kubeconsole.constants.enums import LogLevel, Trend, ViewType

# =============================================================================
# Widget IDs
# =============================================================================

HEADER_ID = "dashboard-header"
BODY_ID = "dashboard-body"
FOOTER_ID = "dashboard-footer"

# =============================================================================
# View titles
# =============================================================================

VIEW_TITLES: dict[ViewType, str] = {
    ViewType.OVERVIEW: "Overview",
    ViewType.NODES: "Nodes",
    ViewType.PODS: "Pods",
    ViewType.WORKLOADS: "Workloads",
    ViewType.NETWORK: "Network",
    ViewType.STORAGE: "Storage",
    ViewType.EVENTS: "Events",
    ViewType.ALERTS: "Alerts",
    ViewType.QUEUES: "Queues",
    ViewType.TOPOLOGY: "Topology",
    ViewType.NODE_DETAIL: "Node",
    ViewType.POD_DETAIL: "Pod",
    ViewType.EVENT_DETAIL: "Event",
    ViewType.JOB_DETAIL: "Job",
    ViewType.SERVICE_DETAIL: "Service",
    ViewType.DEPLOYMENT_DETAIL: "Deployment",
    ViewType.STATEFULSET_DETAIL: "StatefulSet",
    ViewType.DAEMONSET_DETAIL: "DaemonSet",
    ViewType.CRONJOB_DETAIL: "CronJob",
    ViewType.PV_DETAIL: "PersistentVolume",
    ViewType.PVC_DETAIL: "PersistentVolumeClaim",
    ViewType.VOLCANO_JOB_DETAIL: "Volcano Job",
    ViewType.QUEUE_DETAIL: "Queue",
    ViewType.TOPOLOGY_DETAIL: "Super Pod",
}

# =============================================================================
# Table Column Definitions: list[tuple[str, int]] = [(name, width), ...]
# =============================================================================

NODE_COLUMNS: list[tuple[str, int]] = [
    ("Name", 30),
    ("Status", 10),
    ("Roles", 14),
    ("CPU", 14),
    ("Memory", 16),
    ("Pods", 8),
    ("NPU", 8),
]

POD_COLUMNS: list[tuple[str, int]] = [
    ("Namespace", 18),
    ("Name", 36),
    ("Ready", 7),
    ("Status", 12),
    ("Restarts", 9),
    ("Node", 20),
    ("CPU", 8),
    ("Memory", 10),
]

EVENT_COLUMNS: list[tuple[str, int]] = [
    ("Type", 8),
    ("Reason", 18),
    ("Object", 30),
    ("Count", 6),
    ("Age", 6),
    ("Message", 50),
]

ALERT_COLUMNS: list[tuple[str, int]] = [
    ("Severity", 9),
    ("Type", 16),
    ("Resource", 30),
    ("Message", 60),
]

WORKLOAD_COLUMNS: list[tuple[str, int]] = [
    ("Kind", 12),
    ("Namespace", 18),
    ("Name", 36),
    ("Status", 24),
]

SERVICE_COLUMNS: list[tuple[str, int]] = [
    ("Namespace", 18),
    ("Name", 30),
    ("Type", 12),
    ("Cluster IP", 16),
    ("Ports", 30),
    ("Endpoints", 9),
]

STORAGE_COLUMNS: list[tuple[str, int]] = [
    ("Kind", 5),
    ("Name", 36),
    ("Status", 10),
    ("Capacity", 10),
    ("Storage Class", 16),
    ("Claim / Volume", 30),
]

QUEUE_COLUMNS: list[tuple[str, int]] = [
    ("Name", 20),
    ("State", 8),
    ("Weight", 7),
    ("Running", 8),
    ("Pending", 8),
    ("NPU Alloc/Deserved", 20),
]

TOPOLOGY_COLUMNS: list[tuple[str, int]] = [
    ("Super Pod", 20),
    ("Nodes", 6),
    ("NPU Alloc/Cap", 14),
    ("Members", 60),
]

JOB_POD_COLUMNS: list[tuple[str, int]] = [
    ("Name", 40),
    ("Status", 12),
    ("Restarts", 9),
    ("Node", 24),
]

VIEW_COLUMNS: dict[ViewType, list[tuple[str, int]]] = {
    ViewType.NODES: NODE_COLUMNS,
    ViewType.PODS: POD_COLUMNS,
    ViewType.EVENTS: EVENT_COLUMNS,
    ViewType.ALERTS: ALERT_COLUMNS,
    ViewType.WORKLOADS: WORKLOAD_COLUMNS,
    ViewType.NETWORK: SERVICE_COLUMNS,
    ViewType.STORAGE: STORAGE_COLUMNS,
    ViewType.QUEUES: QUEUE_COLUMNS,
    ViewType.TOPOLOGY: TOPOLOGY_COLUMNS,
}

# =============================================================================
# Styles
# =============================================================================

SELECTED_ROW_STYLE = "reverse"
MUTED_STYLE = "dim"
ERROR_STYLE = "bold red"
BANNER_STYLE = "bold white on red"
STATUS_STYLE = "bold green"
SPARKLINE_STYLE = "cyan"

TREND_GLYPHS: dict[Trend, tuple[str, str]] = {
    Trend.UP: ("↑", "red"),
    Trend.DOWN: ("↓", "green"),
    Trend.STABLE: ("→", "dim"),
}

LOG_LEVEL_STYLES: dict[LogLevel, str] = {
    LogLevel.ERROR: "red",
    LogLevel.WARNING: "yellow",
    LogLevel.INFO: "",
    LogLevel.DEBUG: "dim",
    LogLevel.SUCCESS: "green",
    LogLevel.PLAIN: "",
}

STATUS_STYLES: dict[str, str] = {
    "Ready": "green",
    "Running": "green",
    "Succeeded": "cyan",
    "Completed": "cyan",
    "Bound": "green",
    "Pending": "yellow",
    "Warning": "yellow",
    "Failed": "red",
    "NotReady": "red",
    "Critical": "bold red",
}
