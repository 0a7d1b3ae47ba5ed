"""Snapshot provider backed by a YAML file.

The file mirrors :class:`ClusterSnapshot` with Kubernetes quantity strings
("500m", "4Gi") for CPU, memory and storage. An optional ``logs`` mapping
keyed by ``namespace/pod/container`` (or ``namespace/pod``) feeds the log
viewer. The file is re-read whenever the cache expires or a refresh is
forced, so editing it while the console runs simulates a live cluster.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from kubeconsole.constants.enums import AlertSeverity, ResourceKind
from kubeconsole.controllers.base.base_controller import DataProvider, LogSource, ResourceInspector
from kubeconsole.controllers.base.errors import DataFetchError, LogFetchError
from kubeconsole.models.cache.data_cache import DataCache
from kubeconsole.models.core.cluster_snapshot import Alert, ClusterSnapshot, ClusterSummary
from kubeconsole.utils.resource_parser import parse_count, parse_cpu_millicores, parse_memory_bytes

logger = logging.getLogger(__name__)

_SNAPSHOT_KEY = "snapshot"

_CPU_FIELDS = (
    "cpu_capacity",
    "cpu_allocatable",
    "cpu_usage",
    "cpu_request",
    "cpu_limit",
    "cpu_deserved",
    "cpu_allocated",
)
_MEMORY_FIELDS = (
    "memory_capacity",
    "memory_allocatable",
    "memory_usage",
    "memory_request",
    "memory_limit",
    "capacity",
    "requested_storage",
    "used_bytes",
    "memory_deserved",
    "memory_allocated",
)
_COUNT_FIELDS = (
    "pod_capacity",
    "pod_allocatable",
    "npu_capacity",
    "npu_allocatable",
    "npu_allocated",
    "npu_request",
    "npu_deserved",
)

_RESTART_ALERT_THRESHOLD = 5


def _normalize_quantities(entry: dict[str, Any]) -> dict[str, Any]:
    """Convert quantity strings in one resource mapping to model units."""
    data = dict(entry)
    for key in _CPU_FIELDS:
        if key in data:
            data[key] = parse_cpu_millicores(data[key])
    for key in _MEMORY_FIELDS:
        if key in data:
            data[key] = parse_memory_bytes(data[key])
    for key in _COUNT_FIELDS:
        if key in data:
            data[key] = parse_count(data[key])
    return data


def _normalize_pod(entry: dict[str, Any]) -> dict[str, Any]:
    data = _normalize_quantities(entry)
    containers = [_normalize_quantities(c) for c in data.pop("container_states", []) or []]
    data["container_states"] = containers
    if containers:
        data.setdefault("containers", len(containers))
        data.setdefault("ready_containers", sum(1 for c in containers if c.get("ready")))
        data.setdefault("restart_count", sum(int(c.get("restart_count", 0)) for c in containers))
    return data


def build_summary(snapshot: ClusterSnapshot, refresh_time: datetime) -> ClusterSummary:
    """Cluster totals and alerts derived from the resource lists."""
    alerts: list[Alert] = []
    for node in snapshot.nodes:
        if node.status != "Ready":
            alerts.append(
                Alert(
                    severity=AlertSeverity.CRITICAL,
                    category="node",
                    alert_type="NodeNotReady",
                    resource_type="Node",
                    resource_name=node.name,
                    message=f"Node {node.name} is {node.status}",
                    timestamp=refresh_time,
                )
            )
    for pod in snapshot.pods:
        if pod.phase == "Failed":
            alerts.append(
                Alert(
                    severity=AlertSeverity.WARNING,
                    category="pod",
                    alert_type="PodFailed",
                    resource_type="Pod",
                    resource_name=pod.name,
                    namespace=pod.namespace,
                    message=f"Pod {pod.entity_key()} failed: {pod.reason or 'unknown reason'}",
                    timestamp=refresh_time,
                )
            )
        elif pod.restart_count >= _RESTART_ALERT_THRESHOLD:
            alerts.append(
                Alert(
                    severity=AlertSeverity.WARNING,
                    category="pod",
                    alert_type="HighRestarts",
                    resource_type="Pod",
                    resource_name=pod.name,
                    namespace=pod.namespace,
                    message=f"Pod {pod.entity_key()} restarted {pod.restart_count} times",
                    value=str(pod.restart_count),
                    threshold=str(_RESTART_ALERT_THRESHOLD),
                    timestamp=refresh_time,
                )
            )

    nodes = snapshot.nodes
    pods = snapshot.pods
    return ClusterSummary(
        total_nodes=len(nodes),
        ready_nodes=sum(1 for n in nodes if n.status == "Ready"),
        total_pods=len(pods),
        running_pods=sum(1 for p in pods if p.phase == "Running"),
        pending_pods=sum(1 for p in pods if p.phase == "Pending"),
        failed_pods=sum(1 for p in pods if p.phase == "Failed"),
        total_events=len(snapshot.events),
        warning_events=sum(1 for e in snapshot.events if e.type == "Warning"),
        cpu_capacity=sum(n.cpu_capacity for n in nodes),
        cpu_allocatable=sum(n.cpu_allocatable for n in nodes),
        cpu_used=sum(n.cpu_usage for n in nodes),
        memory_capacity=sum(n.memory_capacity for n in nodes),
        memory_allocatable=sum(n.memory_allocatable for n in nodes),
        memory_used=sum(n.memory_usage for n in nodes),
        npu_capacity=sum(n.npu_capacity for n in nodes),
        npu_allocatable=sum(n.npu_allocatable for n in nodes),
        npu_allocated=sum(n.npu_allocated for n in nodes),
        npu_resource_name=next((n.npu_resource_name for n in nodes if n.npu_resource_name), ""),
        hyper_node_count=len({n.hyper_node_id for n in nodes if n.hyper_node_id}),
        super_pod_count=len({n.super_pod_id for n in nodes if n.super_pod_id}),
        last_refresh_time=refresh_time,
        alerts=alerts,
    )


class FileSnapshotProvider(DataProvider, LogSource, ResourceInspector):
    """Reads cluster snapshots, logs and resource manifests from YAML."""

    def __init__(self, path: str | Path, cache: DataCache | None = None) -> None:
        super().__init__()
        self.path = Path(path).expanduser()
        self._cache = cache or DataCache()
        self._logs: dict[str, str] = {}

    # ------------------------------------------------------------------
    # DataProvider
    # ------------------------------------------------------------------

    async def get_snapshot(self) -> ClusterSnapshot:
        return await self._cache.get_or_load(_SNAPSHOT_KEY, self._load)

    async def force_refresh(self) -> None:
        await self._cache.clear(_SNAPSHOT_KEY)

    async def _load(self) -> ClusterSnapshot:
        return await asyncio.to_thread(self._read)

    def _read(self) -> ClusterSnapshot:
        try:
            raw = self.path.read_text(encoding="utf-8")
            modified = datetime.fromtimestamp(self.path.stat().st_mtime, tz=timezone.utc)
            document = yaml.safe_load(raw) or {}
        except (OSError, yaml.YAMLError) as e:
            raise DataFetchError(f"Cannot read snapshot {self.path}: {e}") from e
        if not isinstance(document, dict):
            raise DataFetchError(f"Snapshot {self.path} must contain a mapping")
        return self.parse_document(document, modified)

    def parse_document(self, document: dict[str, Any], default_time: datetime) -> ClusterSnapshot:
        """Build a snapshot from an already-loaded YAML mapping.

        Raises:
            DataFetchError: If the mapping does not describe a valid snapshot.
        """
        data = dict(document)
        self._logs = {str(k): str(v) for k, v in (data.pop("logs", None) or {}).items()}
        refresh_time = data.pop("refresh_time", None) or default_time
        data.pop("summary", None)
        data["nodes"] = [_normalize_quantities(n) for n in data.get("nodes") or []]
        data["pods"] = [_normalize_pod(p) for p in data.get("pods") or []]
        for kind in ("pvs", "pvcs", "queues"):
            data[kind] = [_normalize_quantities(item) for item in data.get(kind) or []]
        try:
            snapshot = ClusterSnapshot.model_validate(data)
            if isinstance(refresh_time, str):
                refresh_time = datetime.fromisoformat(refresh_time)
        except (ValidationError, ValueError) as e:
            raise DataFetchError(f"Invalid snapshot {self.path}: {e}") from e
        snapshot.summary = build_summary(snapshot, refresh_time)
        logger.debug(
            "Loaded snapshot with %d nodes and %d pods from %s",
            len(snapshot.nodes),
            len(snapshot.pods),
            self.path,
        )
        return snapshot

    # ------------------------------------------------------------------
    # LogSource
    # ------------------------------------------------------------------

    async def fetch_log(self, pod_key: str, container: str, tail_lines: int) -> str:
        await self.get_snapshot()
        text = self._logs.get(f"{pod_key}/{container}")
        if text is None:
            text = self._logs.get(pod_key)
        if text is None:
            raise LogFetchError(f"No logs for {pod_key} container {container}")
        lines = text.rstrip("\n").split("\n")
        return "\n".join(lines[-tail_lines:]) if tail_lines > 0 else ""

    # ------------------------------------------------------------------
    # ResourceInspector
    # ------------------------------------------------------------------

    async def _find(self, kind: ResourceKind, key: str) -> dict[str, Any]:
        snapshot = await self.get_snapshot()
        items = snapshot.pods if kind is ResourceKind.POD else snapshot.nodes
        for item in items:
            if item.entity_key() == key:
                return item.model_dump(mode="json", exclude_defaults=True)
        raise DataFetchError(f"{kind.value} {key} not found")

    async def describe(self, kind: ResourceKind, key: str) -> str:
        data = await self._find(kind, key)
        lines = [f"Kind:  {kind.value}"]
        for name, value in data.items():
            label = name.replace("_", " ").title()
            if isinstance(value, (dict, list)):
                lines.append(f"{label}:")
                dumped = yaml.safe_dump(value, sort_keys=False, default_flow_style=False).rstrip("\n")
                lines.extend(f"  {line}" for line in dumped.split("\n"))
            else:
                lines.append(f"{label}:  {value}")
        return "\n".join(lines)

    async def get_yaml(self, kind: ResourceKind, key: str) -> str:
        data = await self._find(kind, key)
        manifest = {"apiVersion": "v1", "kind": kind.value, **data}
        return yaml.safe_dump(manifest, sort_keys=False)
