"""Filtered and sorted entity lists for each view.

Everything here is derived on demand from the current snapshot and the
controller state. Nothing is cached, so Enter and the renderer always see the
same list for the same state.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any, Final

from kubeconsole.constants.enums import SortField, SortOrder, StorageSection, ViewType, WorkloadSection
from kubeconsole.constants.limits import (
    COMMAND_OUTPUT_MARGIN,
    DETAIL_PAGE_MARGIN,
    JOB_PODS_DISPLAY_MAX,
    LIST_PAGE_MARGIN,
    PAGE_SIZE_MIN,
)
from kubeconsole.constants.values import POD_PHASE_PRIORITY, POD_PHASE_PRIORITY_OTHER, VOLCANO_JOB_NAME_LABEL
from kubeconsole.controllers.metrics.history import as_utc
from kubeconsole.models.core.cluster_resources import (
    EventInfo,
    JobInfo,
    NodeInfo,
    PodInfo,
    SuperPodInfo,
    VolcanoJobInfo,
)
from kubeconsole.models.core.cluster_snapshot import ClusterSnapshot
from kubeconsole.models.state.controller_state import ControllerState, ListFilters, SortKey

# ============================================================================
# Sort cycles
# ============================================================================

NODE_SORT_CYCLE: Final = (
    SortKey(SortField.NAME, SortOrder.ASC),
    SortKey(SortField.CPU, SortOrder.DESC),
    SortKey(SortField.MEMORY, SortOrder.DESC),
    SortKey(SortField.PODS, SortOrder.DESC),
)

POD_SORT_CYCLE: Final = (
    SortKey(SortField.NAME, SortOrder.ASC),
    SortKey(SortField.NAMESPACE, SortOrder.ASC),
    SortKey(SortField.RESTARTS, SortOrder.DESC),
)

_NODE_SORT_VALUES: Final = {
    SortField.NAME: lambda node: node.name,
    SortField.CPU: lambda node: node.cpu_usage,
    SortField.MEMORY: lambda node: node.memory_usage,
    SortField.PODS: lambda node: node.pod_count,
}

_POD_SORT_VALUES: Final = {
    SortField.NAME: lambda pod: pod.name,
    SortField.NAMESPACE: lambda pod: (pod.namespace, pod.name),
    SortField.RESTARTS: lambda pod: pod.restart_count,
}


def next_sort_key(cycle: Sequence[SortKey], current: SortKey) -> SortKey:
    """Step to the entry after ``current``; unknown keys restart the cycle."""
    try:
        position = cycle.index(current)
    except ValueError:
        return cycle[0]
    return cycle[(position + 1) % len(cycle)]


def _ordered(items: list[Any], values: dict[SortField, Any], key: SortKey) -> list[Any]:
    value_of = values.get(key.field, values[SortField.NAME])
    # Stable tie-break on name, then the requested order on top of it.
    items = sorted(items, key=lambda item: item.name)
    return sorted(items, key=value_of, reverse=key.order is SortOrder.DESC)


# ============================================================================
# Primary lists
# ============================================================================


def filtered_nodes(snapshot: ClusterSnapshot | None, filters: ListFilters, sort_key: SortKey) -> list[NodeInfo]:
    if snapshot is None:
        return []
    needle = filters.search_text.lower()
    nodes = [
        node
        for node in snapshot.nodes
        if (not filters.status or node.status == filters.status)
        and (not filters.role or filters.role in node.roles)
        and (not needle or needle in node.name.lower())
    ]
    return _ordered(nodes, _NODE_SORT_VALUES, sort_key)


def filtered_pods(snapshot: ClusterSnapshot | None, filters: ListFilters, sort_key: SortKey) -> list[PodInfo]:
    if snapshot is None:
        return []
    needle = filters.search_text.lower()
    pods = [
        pod
        for pod in snapshot.pods
        if (not filters.namespace or pod.namespace == filters.namespace)
        and (not filters.status or pod.phase == filters.status)
        and (not needle or needle in pod.name.lower())
    ]
    return _ordered(pods, _POD_SORT_VALUES, sort_key)


def _event_time(event: EventInfo) -> float:
    stamp = event.last_timestamp or event.first_timestamp
    if stamp is None:
        return float("-inf")
    return as_utc(stamp).timestamp()


def filtered_events(snapshot: ClusterSnapshot | None, filters: ListFilters) -> list[EventInfo]:
    """Events matching the type filter and search text, newest first."""
    if snapshot is None:
        return []
    needle = filters.search_text.lower()
    events = [
        event
        for event in snapshot.events
        if (not filters.event_type or event.type == filters.event_type)
        and (
            not needle
            or needle in event.reason.lower()
            or needle in event.message.lower()
            or needle in event.involved_object.lower()
        )
    ]
    return sorted(events, key=_event_time, reverse=True)


# ============================================================================
# Composite lists
# ============================================================================


def workload_sections(snapshot: ClusterSnapshot | None) -> list[tuple[WorkloadSection, list[Any]]]:
    """Workload sub-lists in display order, sized from ``snapshot`` as it is now."""
    if snapshot is None:
        return []
    return [
        (WorkloadSection.VOLCANO_JOB, list(snapshot.volcano_jobs)),
        (WorkloadSection.JOB, list(snapshot.jobs)),
        (WorkloadSection.SERVICE, list(snapshot.services)),
        (WorkloadSection.DEPLOYMENT, list(snapshot.deployments)),
        (WorkloadSection.STATEFULSET, list(snapshot.statefulsets)),
        (WorkloadSection.DAEMONSET, list(snapshot.daemonsets)),
        (WorkloadSection.CRONJOB, list(snapshot.cronjobs)),
    ]


def resolve_workload(snapshot: ClusterSnapshot | None, index: int) -> tuple[WorkloadSection, Any] | None:
    """Map a flat workloads index onto ``(section, entity)``."""
    if index < 0:
        return None
    offset = index
    for section, items in workload_sections(snapshot):
        if offset < len(items):
            return section, items[offset]
        offset -= len(items)
    return None


def storage_items(snapshot: ClusterSnapshot | None) -> list[tuple[StorageSection, Any]]:
    if snapshot is None:
        return []
    items: list[tuple[StorageSection, Any]] = [(StorageSection.PV, pv) for pv in snapshot.pvs]
    items.extend((StorageSection.PVC, pvc) for pvc in snapshot.pvcs)
    return items


def super_pods(snapshot: ClusterSnapshot | None) -> list[SuperPodInfo]:
    """Group nodes by super-pod id, ordered by id."""
    if snapshot is None:
        return []
    groups: dict[str, SuperPodInfo] = {}
    for node in snapshot.nodes:
        if not node.super_pod_id:
            continue
        group = groups.setdefault(node.super_pod_id, SuperPodInfo(id=node.super_pod_id))
        group.node_names.append(node.name)
        group.npu_capacity += node.npu_capacity
        group.npu_allocated += node.npu_allocated
    for group in groups.values():
        group.node_names.sort()
    return [groups[key] for key in sorted(groups)]


def _job_pod_order(pod: PodInfo) -> tuple[int, float, str]:
    created = as_utc(pod.creation_timestamp).timestamp() if pod.creation_timestamp else float("-inf")
    return (POD_PHASE_PRIORITY.get(pod.phase, POD_PHASE_PRIORITY_OTHER), created, pod.name)


def job_pods(snapshot: ClusterSnapshot | None, job: JobInfo | None) -> list[PodInfo]:
    """Pods owned by ``job``: failures first, then running, pending, succeeded."""
    if snapshot is None or job is None:
        return []
    prefix = f"{job.name}-"
    pods = [pod for pod in snapshot.pods if pod.namespace == job.namespace and pod.name.startswith(prefix)]
    return sorted(pods, key=_job_pod_order)


def volcano_job_pods(snapshot: ClusterSnapshot | None, job: VolcanoJobInfo | None) -> list[PodInfo]:
    """Pods of a Volcano job, matched by job-name label or name prefix."""
    if snapshot is None or job is None:
        return []
    prefix = f"{job.name}-"
    pods = [
        pod
        for pod in snapshot.pods
        if pod.namespace == job.namespace
        and (pod.labels.get(VOLCANO_JOB_NAME_LABEL) == job.name or pod.name.startswith(prefix))
    ]
    return sorted(pods, key=_job_pod_order)


def displayed_job_pods(pods: list[PodInfo]) -> list[PodInfo]:
    return pods[:JOB_PODS_DISPLAY_MAX]


# ============================================================================
# Per-view projections
# ============================================================================


def view_items(state: ControllerState, view: ViewType | None = None) -> list[Any]:
    """Selectable rows of a list view under the current filters and sort."""
    view = view or state.view
    snapshot = state.snapshot
    if snapshot is None:
        return []
    if view is ViewType.NODES:
        return filtered_nodes(snapshot, state.filters, state.sort.nodes)
    if view is ViewType.PODS:
        return filtered_pods(snapshot, state.filters, state.sort.pods)
    if view is ViewType.EVENTS:
        return filtered_events(snapshot, state.filters)
    if view is ViewType.ALERTS:
        return list(snapshot.alerts)
    if view is ViewType.WORKLOADS:
        return [entity for _, items in workload_sections(snapshot) for entity in items]
    if view is ViewType.NETWORK:
        return list(snapshot.services)
    if view is ViewType.STORAGE:
        return [entity for _, entity in storage_items(snapshot)]
    if view is ViewType.QUEUES:
        return list(snapshot.queues)
    if view is ViewType.TOPOLOGY:
        return super_pods(snapshot)
    return []


def item_count(state: ControllerState) -> int:
    """Number of selectable rows, or of scrollable lines for the overview."""
    if state.view is ViewType.OVERVIEW:
        return max(0, state.content_lines)
    return len(view_items(state))


def page_size(height: int) -> int:
    return max(PAGE_SIZE_MIN, height - LIST_PAGE_MARGIN)


def detail_page_size(height: int) -> int:
    return max(PAGE_SIZE_MIN, height - DETAIL_PAGE_MARGIN)


def command_output_page_size(height: int) -> int:
    return max(PAGE_SIZE_MIN, height - COMMAND_OUTPUT_MARGIN)


# ============================================================================
# Export rows
# ============================================================================


def _iso(value: datetime | None) -> str:
    return value.isoformat() if value else ""


def export_rows(state: ControllerState) -> list[dict[str, Any]]:
    """Rows written by the exporter for the current view."""
    items = view_items(state)
    if state.view is ViewType.NODES:
        return [
            {
                "name": node.name,
                "status": node.status,
                "roles": ",".join(node.roles) or "<none>",
                "cpu": node.cpu_usage,
                "memory": node.memory_usage,
                "pods": node.pod_count,
                "created": _iso(node.creation_timestamp),
            }
            for node in items
        ]
    if state.view is ViewType.PODS:
        return [
            {
                "namespace": pod.namespace,
                "name": pod.name,
                "phase": pod.phase,
                "node": pod.node,
                "cpu": pod.cpu_usage,
                "memory": pod.memory_usage,
                "restarts": pod.restart_count,
                "created": _iso(pod.creation_timestamp),
            }
            for pod in items
        ]
    if state.view is ViewType.EVENTS:
        return [
            {
                "type": event.type,
                "reason": event.reason,
                "object": event.involved_object,
                "message": event.message,
                "count": event.count,
                "last_seen": _iso(event.last_timestamp),
            }
            for event in items
        ]
    if state.view is ViewType.NETWORK:
        return [
            {
                "namespace": service.namespace,
                "name": service.name,
                "type": service.type,
                "cluster_ip": service.cluster_ip,
                "external_ip": ",".join(service.external_ips) or "<none>",
                "ports": ",".join(f"{port.port}/{port.protocol}" for port in service.ports) or "<none>",
                "created": _iso(service.creation_timestamp),
            }
            for service in items
        ]
    return []
