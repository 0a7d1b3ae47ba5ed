"""All enum definitions for the console.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# View Enums
# =============================================================================


class ViewType(Enum):
    """Views the dashboard can show. Exactly one is active at a time."""

    OVERVIEW = "overview"
    NODES = "nodes"
    PODS = "pods"
    WORKLOADS = "workloads"
    NETWORK = "network"
    STORAGE = "storage"
    EVENTS = "events"
    ALERTS = "alerts"
    QUEUES = "queues"
    TOPOLOGY = "topology"

    NODE_DETAIL = "node_detail"
    POD_DETAIL = "pod_detail"
    EVENT_DETAIL = "event_detail"
    JOB_DETAIL = "job_detail"
    SERVICE_DETAIL = "service_detail"
    DEPLOYMENT_DETAIL = "deployment_detail"
    STATEFULSET_DETAIL = "statefulset_detail"
    DAEMONSET_DETAIL = "daemonset_detail"
    CRONJOB_DETAIL = "cronjob_detail"
    PV_DETAIL = "pv_detail"
    PVC_DETAIL = "pvc_detail"
    VOLCANO_JOB_DETAIL = "volcano_job_detail"
    QUEUE_DETAIL = "queue_detail"
    TOPOLOGY_DETAIL = "topology_detail"

    @property
    def is_detail(self) -> bool:
        return self.value.endswith("_detail")


class WorkloadSection(Enum):
    """Sub-lists concatenated by the workloads view, in display order."""

    VOLCANO_JOB = "volcanojob"
    JOB = "job"
    SERVICE = "service"
    DEPLOYMENT = "deployment"
    STATEFULSET = "statefulset"
    DAEMONSET = "daemonset"
    CRONJOB = "cronjob"


class StorageSection(Enum):
    """Sub-lists concatenated by the storage view."""

    PV = "pv"
    PVC = "pvc"


# =============================================================================
# Sorting Enums
# =============================================================================


class SortField(Enum):
    """Sortable list columns."""

    NAME = "name"
    CPU = "cpu"
    MEMORY = "memory"
    PODS = "pods"
    NAMESPACE = "namespace"
    RESTARTS = "restarts"
    LAST_SEEN = "last_seen"


class SortOrder(Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


# =============================================================================
# Metrics Enums
# =============================================================================


class Trend(Enum):
    """Coarse direction of a metric relative to its own recent history."""

    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class MetricField(Enum):
    """Gauge fields that support trend classification."""

    CPU = "cpu"
    MEMORY = "memory"
    NPU_ALLOCATED = "npu_allocated"


class CounterField(Enum):
    """Monotonic byte counters that support rate estimation."""

    NETWORK_RX = "network_rx"
    NETWORK_TX = "network_tx"


# =============================================================================
# Log Stream Enums
# =============================================================================


class LogState(Enum):
    """Lifecycle of a log-tailing session."""

    IDLE = "idle"
    LOADING = "loading"
    STREAMING = "streaming"
    SEARCH_ACTIVE = "search_active"
    ERROR = "error"


class LogLevel(Enum):
    """Severity detected in a log line, used for highlighting."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    DEBUG = "debug"
    SUCCESS = "success"
    PLAIN = "plain"


# =============================================================================
# Action Enums
# =============================================================================


class ActionType(Enum):
    """Entries of the detail-view action menu."""

    VIEW_LOGS = "view_logs"
    DESCRIBE = "describe"
    GET_YAML = "get_yaml"
    COPY_NAME = "copy_name"
    COPY_NAMESPACE_NAME = "copy_namespace_name"
    SHOW_EVENTS = "show_events"


class ResourceKind(Enum):
    """Resource kinds addressable by describe/YAML commands."""

    NODE = "Node"
    POD = "Pod"


class ExportFormat(Enum):
    """Export file formats."""

    CSV = "csv"
    JSON = "json"


# =============================================================================
# Settings Enums
# =============================================================================


class ColorMode(Enum):
    """Terminal color preference."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


class AlertSeverity(Enum):
    """Alert severity levels reported in the cluster summary."""

    INFO = "Info"
    WARNING = "Warning"
    CRITICAL = "Critical"


__all__ = [
    "ActionType",
    "AlertSeverity",
    "ColorMode",
    "CounterField",
    "ExportFormat",
    "LogLevel",
    "LogState",
    "MetricField",
    "ResourceKind",
    "SortField",
    "SortOrder",
    "StorageSection",
    "Trend",
    "ViewType",
    "WorkloadSection",
]
