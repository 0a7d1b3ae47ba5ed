"""Scalar constants for the console.

All application-level constants with proper type hints using Final.
"""

from typing import Final

from kubeconsole.constants.enums import ActionType, ViewType, WorkloadSection

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "kubeconsole"
APP_VERSION: Final = "0.4.0"

# ============================================================================
# Configuration lookup
# ============================================================================

CONFIG_ENV_PREFIX: Final = "KUBECONSOLE"
CONFIG_FILE_NAME: Final = "config.yaml"
CONFIG_SEARCH_DIRS: Final = (
    "./config",
    "~/.kubeconsole",
    "/etc/kubeconsole",
)

# ============================================================================
# View navigation
# ============================================================================

# Digit keys and tab cycling follow this order.
PRIMARY_VIEW_ORDER: Final = (
    ViewType.OVERVIEW,
    ViewType.NODES,
    ViewType.PODS,
    ViewType.WORKLOADS,
    ViewType.NETWORK,
    ViewType.STORAGE,
    ViewType.EVENTS,
    ViewType.ALERTS,
    ViewType.QUEUES,
    ViewType.TOPOLOGY,
)

VIEW_DIGITS: Final = {
    "1": ViewType.OVERVIEW,
    "2": ViewType.NODES,
    "3": ViewType.PODS,
    "4": ViewType.WORKLOADS,
    "5": ViewType.NETWORK,
    "6": ViewType.STORAGE,
    "7": ViewType.EVENTS,
    "8": ViewType.ALERTS,
    "9": ViewType.QUEUES,
    "0": ViewType.TOPOLOGY,
}

DETAIL_PARENT_VIEW: Final = {
    ViewType.NODE_DETAIL: ViewType.NODES,
    ViewType.POD_DETAIL: ViewType.PODS,
    ViewType.EVENT_DETAIL: ViewType.EVENTS,
    ViewType.JOB_DETAIL: ViewType.WORKLOADS,
    ViewType.VOLCANO_JOB_DETAIL: ViewType.WORKLOADS,
    ViewType.SERVICE_DETAIL: ViewType.WORKLOADS,
    ViewType.DEPLOYMENT_DETAIL: ViewType.WORKLOADS,
    ViewType.STATEFULSET_DETAIL: ViewType.WORKLOADS,
    ViewType.DAEMONSET_DETAIL: ViewType.WORKLOADS,
    ViewType.CRONJOB_DETAIL: ViewType.WORKLOADS,
    ViewType.PV_DETAIL: ViewType.STORAGE,
    ViewType.PVC_DETAIL: ViewType.STORAGE,
    ViewType.QUEUE_DETAIL: ViewType.QUEUES,
    ViewType.TOPOLOGY_DETAIL: ViewType.TOPOLOGY,
}

WORKLOAD_SECTION_ORDER: Final = (
    WorkloadSection.VOLCANO_JOB,
    WorkloadSection.JOB,
    WorkloadSection.SERVICE,
    WorkloadSection.DEPLOYMENT,
    WorkloadSection.STATEFULSET,
    WorkloadSection.DAEMONSET,
    WorkloadSection.CRONJOB,
)

WORKLOAD_SECTION_DETAIL_VIEW: Final = {
    WorkloadSection.VOLCANO_JOB: ViewType.VOLCANO_JOB_DETAIL,
    WorkloadSection.JOB: ViewType.JOB_DETAIL,
    WorkloadSection.SERVICE: ViewType.SERVICE_DETAIL,
    WorkloadSection.DEPLOYMENT: ViewType.DEPLOYMENT_DETAIL,
    WorkloadSection.STATEFULSET: ViewType.STATEFULSET_DETAIL,
    WorkloadSection.DAEMONSET: ViewType.DAEMONSET_DETAIL,
    WorkloadSection.CRONJOB: ViewType.CRONJOB_DETAIL,
}

LINE_SCROLL_VIEWS: Final = frozenset({ViewType.OVERVIEW, ViewType.NETWORK})
EXPORTABLE_VIEWS: Final = frozenset(
    {ViewType.NODES, ViewType.PODS, ViewType.EVENTS, ViewType.NETWORK}
)
ACTION_MENU_VIEWS: Final = frozenset({ViewType.POD_DETAIL, ViewType.NODE_DETAIL})

POD_ACTIONS: Final = (
    ActionType.VIEW_LOGS,
    ActionType.DESCRIBE,
    ActionType.GET_YAML,
    ActionType.COPY_NAME,
    ActionType.COPY_NAMESPACE_NAME,
    ActionType.SHOW_EVENTS,
)
NODE_ACTIONS: Final = (
    ActionType.DESCRIBE,
    ActionType.GET_YAML,
    ActionType.COPY_NAME,
    ActionType.SHOW_EVENTS,
)

ACTION_LABELS: Final = {
    ActionType.VIEW_LOGS: "View Logs",
    ActionType.DESCRIBE: "Describe",
    ActionType.GET_YAML: "Get YAML",
    ActionType.COPY_NAME: "Copy Name",
    ActionType.COPY_NAMESPACE_NAME: "Copy Namespace/Name",
    ActionType.SHOW_EVENTS: "Show Events",
}

# ============================================================================
# Filters and search
# ============================================================================

ALL_NAMESPACES_LABEL: Final = "All"
LIST_SEARCH_EXTRA_CHARS: Final = frozenset("-_.")
LOG_SEARCH_MIN_CHAR: Final = " "
LOG_SEARCH_MAX_CHAR: Final = "~"

# ============================================================================
# Kubernetes conventions
# ============================================================================

VOLCANO_JOB_NAME_LABEL: Final = "volcano.sh/job-name"

# Job pods are listed by phase: failures first, then live, then finished.
POD_PHASE_PRIORITY: Final = {
    "Failed": 0,
    "Running": 1,
    "Pending": 2,
    "Succeeded": 3,
}
POD_PHASE_PRIORITY_OTHER: Final = 4

# ============================================================================
# Status messages
# ============================================================================

MSG_EXPORT_SUCCESS: Final = "Exported {count} items to: {path}"
MSG_EXPORT_FAILED: Final = "Export failed: {error}"
MSG_COPY_SUCCESS: Final = "Copied: {text}"
MSG_COPY_FAILED: Final = "Copy failed: {error}"
MSG_NO_CONTAINERS: Final = "No containers available"
MSG_DESCRIBE_UNSUPPORTED: Final = "API client does not support describe functionality"
MSG_YAML_UNSUPPORTED: Final = "API client does not support YAML export"
MSG_LOGS_UNSUPPORTED: Final = "API client does not support log streaming"

TITLE_ERROR: Final = "Error"
TITLE_DESCRIBE_ERROR: Final = "Describe Error"
TITLE_YAML_ERROR: Final = "Get YAML Error"
TITLE_DESCRIBE_POD: Final = "Describe Pod: {namespace}/{name}"
TITLE_DESCRIBE_NODE: Final = "Describe Node: {name}"
TITLE_YAML_POD: Final = "YAML: {namespace}/{name}"
TITLE_YAML_NODE: Final = "YAML: {name}"

__all__ = [
    "ACTION_LABELS",
    "ACTION_MENU_VIEWS",
    "ALL_NAMESPACES_LABEL",
    "APP_TITLE",
    "APP_VERSION",
    "CONFIG_ENV_PREFIX",
    "CONFIG_FILE_NAME",
    "CONFIG_SEARCH_DIRS",
    "DETAIL_PARENT_VIEW",
    "EXPORTABLE_VIEWS",
    "LINE_SCROLL_VIEWS",
    "LIST_SEARCH_EXTRA_CHARS",
    "LOG_SEARCH_MAX_CHAR",
    "LOG_SEARCH_MIN_CHAR",
    "MSG_COPY_FAILED",
    "MSG_COPY_SUCCESS",
    "MSG_DESCRIBE_UNSUPPORTED",
    "MSG_EXPORT_FAILED",
    "MSG_EXPORT_SUCCESS",
    "MSG_LOGS_UNSUPPORTED",
    "MSG_NO_CONTAINERS",
    "MSG_YAML_UNSUPPORTED",
    "NODE_ACTIONS",
    "POD_ACTIONS",
    "POD_PHASE_PRIORITY",
    "POD_PHASE_PRIORITY_OTHER",
    "PRIMARY_VIEW_ORDER",
    "TITLE_DESCRIBE_ERROR",
    "TITLE_DESCRIBE_NODE",
    "TITLE_DESCRIBE_POD",
    "TITLE_ERROR",
    "TITLE_YAML_ERROR",
    "TITLE_YAML_NODE",
    "TITLE_YAML_POD",
    "VIEW_DIGITS",
    "VOLCANO_JOB_NAME_LABEL",
    "WORKLOAD_SECTION_DETAIL_VIEW",
    "WORKLOAD_SECTION_ORDER",
]
