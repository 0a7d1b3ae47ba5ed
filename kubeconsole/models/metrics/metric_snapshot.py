"""Metric samples recorded from accepted cluster snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class NodeMetric:
    """Per-node counters captured at one refresh."""

    cpu: int  # millicores
    memory: int  # bytes
    network_rx: int
    network_tx: int
    timestamp: datetime
    npu_capacity: int = 0
    npu_allocated: int = 0
    npu_allocatable: int = 0


@dataclass(frozen=True)
class PodMetric:
    """Per-pod counters captured at one refresh."""

    cpu: int
    memory: int
    network_rx: int
    network_tx: int
    timestamp: datetime


@dataclass(frozen=True)
class MetricSnapshot:
    """All metric samples from one accepted refresh, keyed by entity identity."""

    timestamp: datetime
    nodes: dict[str, NodeMetric] = field(default_factory=dict)
    pods: dict[str, PodMetric] = field(default_factory=dict)
    cluster_npu_capacity: int = 0
    cluster_npu_allocated: int = 0
    cluster_npu_allocatable: int = 0
