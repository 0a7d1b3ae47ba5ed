"""Bounded metric history with trend and throughput-rate derivation.

The history holds at most ``METRICS_HISTORY_CAPACITY`` snapshots in FIFO
order. It is mutated only by :meth:`MetricsHistory.ingest`; every other method
is a read-only projection, so the renderer may query it freely between events.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterator
from datetime import datetime, timedelta, timezone

from kubeconsole.constants.enums import CounterField, MetricField, Trend
from kubeconsole.constants.limits import (
    CPU_TREND_FLOOR_MILLICORES,
    MEMORY_TREND_FLOOR_BYTES,
    METRICS_HISTORY_CAPACITY,
    NPU_TREND_FLOOR,
    RATE_MIN_SNAPSHOTS,
    TREND_MIN_SNAPSHOTS,
    TREND_THRESHOLD_RATIO,
)
from kubeconsole.constants.timeouts import RATE_WINDOW_SECONDS
from kubeconsole.models.core.cluster_snapshot import ClusterSnapshot
from kubeconsole.models.metrics.metric_snapshot import (
    MetricSnapshot,
    NodeMetric,
    PodMetric,
)

logger = logging.getLogger(__name__)

_TREND_FLOORS: dict[MetricField, float] = {
    MetricField.CPU: CPU_TREND_FLOOR_MILLICORES,
    MetricField.MEMORY: MEMORY_TREND_FLOOR_BYTES,
    MetricField.NPU_ALLOCATED: NPU_TREND_FLOOR,
}

# Allocation counts are discrete: any change from the mean is a trend.
_TREND_RATIOS: dict[MetricField, float] = {
    MetricField.CPU: TREND_THRESHOLD_RATIO,
    MetricField.MEMORY: TREND_THRESHOLD_RATIO,
    MetricField.NPU_ALLOCATED: 0.0,
}

_GIB = 1024**3
_MIB = 1024**2

MetricLookup = Callable[[MetricSnapshot], NodeMetric | PodMetric | None]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _gauge(metric: NodeMetric | PodMetric, field: MetricField) -> int:
    if field is MetricField.CPU:
        return metric.cpu
    if field is MetricField.MEMORY:
        return metric.memory
    return getattr(metric, "npu_allocated", 0)


def _counter(metric: NodeMetric | PodMetric, counter: CounterField) -> int:
    if counter is CounterField.NETWORK_RX:
        return metric.network_rx
    return metric.network_tx


def classify_trend(
    history_values: list[float],
    current: float,
    floor: float,
    ratio: float = TREND_THRESHOLD_RATIO,
) -> Trend:
    """Compare ``current`` with the mean of ``history_values``.

    The band around the mean is ``ratio`` of the mean (5% by default), but
    never narrower than ``floor``. With a zero ratio and a zero floor any
    deviation is significant.
    """
    if not history_values:
        return Trend.STABLE
    mean = sum(history_values) / len(history_values)
    threshold = max(mean * ratio, floor)
    if current > mean + threshold:
        return Trend.UP
    if current < mean - threshold:
        return Trend.DOWN
    return Trend.STABLE


class MetricsHistory:
    """Ring buffer of metric snapshots keyed by entity identity."""

    def __init__(
        self,
        capacity: int = METRICS_HISTORY_CAPACITY,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._snapshots: deque[MetricSnapshot] = deque(maxlen=capacity)
        self._clock = clock
        self._last_accepted: datetime | None = None

    def __len__(self) -> int:
        return len(self._snapshots)

    def __iter__(self) -> Iterator[MetricSnapshot]:
        return iter(self._snapshots)

    @property
    def capacity(self) -> int:
        return self._snapshots.maxlen or METRICS_HISTORY_CAPACITY

    @property
    def snapshots(self) -> tuple[MetricSnapshot, ...]:
        return tuple(self._snapshots)

    @property
    def last_accepted(self) -> datetime | None:
        return self._last_accepted

    @property
    def latest(self) -> MetricSnapshot | None:
        return self._snapshots[-1] if self._snapshots else None

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def ingest(self, snapshot: ClusterSnapshot) -> bool:
        """Record ``snapshot`` if it is newer than the last accepted one.

        The source refresh time is used when present, the local clock
        otherwise. Providers that serve the same cached snapshot on several
        poll ticks therefore add a single entry.

        Returns:
            True if the snapshot was appended.
        """
        refresh_time = snapshot.refresh_time
        timestamp = as_utc(refresh_time) if refresh_time else as_utc(self._clock())
        if self._last_accepted is not None and timestamp <= self._last_accepted:
            logger.debug("Skipping metric snapshot at %s (not newer)", timestamp)
            return False

        self._snapshots.append(self.build_snapshot(snapshot, timestamp))
        self._last_accepted = timestamp
        return True

    @staticmethod
    def build_snapshot(snapshot: ClusterSnapshot, timestamp: datetime) -> MetricSnapshot:
        """Extract per-entity counters from a cluster snapshot."""
        nodes: dict[str, NodeMetric] = {}
        npu_capacity = npu_allocated = npu_allocatable = 0
        for node in snapshot.nodes:
            sample_time = as_utc(node.network_timestamp) if node.network_timestamp else timestamp
            nodes[node.entity_key()] = NodeMetric(
                cpu=node.cpu_usage,
                memory=node.memory_usage,
                network_rx=node.network_rx_bytes,
                network_tx=node.network_tx_bytes,
                timestamp=sample_time,
                npu_capacity=node.npu_capacity,
                npu_allocated=node.npu_allocated,
                npu_allocatable=node.npu_allocatable,
            )
            npu_capacity += node.npu_capacity
            npu_allocated += node.npu_allocated
            npu_allocatable += node.npu_allocatable

        pods: dict[str, PodMetric] = {}
        for pod in snapshot.pods:
            sample_time = as_utc(pod.network_timestamp) if pod.network_timestamp else timestamp
            pods[pod.entity_key()] = PodMetric(
                cpu=pod.cpu_usage,
                memory=pod.memory_usage,
                network_rx=pod.network_rx_bytes,
                network_tx=pod.network_tx_bytes,
                timestamp=sample_time,
            )

        return MetricSnapshot(
            timestamp=timestamp,
            nodes=nodes,
            pods=pods,
            cluster_npu_capacity=npu_capacity,
            cluster_npu_allocated=npu_allocated,
            cluster_npu_allocatable=npu_allocatable,
        )

    # ------------------------------------------------------------------
    # Trends
    # ------------------------------------------------------------------

    def node_trend(self, node_name: str, field: MetricField, current: float) -> Trend:
        return self._trend(lambda snap: snap.nodes.get(node_name), field, current)

    def pod_trend(self, pod_key: str, field: MetricField, current: float) -> Trend:
        if field is MetricField.NPU_ALLOCATED:
            return Trend.STABLE
        return self._trend(lambda snap: snap.pods.get(pod_key), field, current)

    def cluster_npu_trend(self, current: float) -> Trend:
        if len(self._snapshots) < TREND_MIN_SNAPSHOTS:
            return Trend.STABLE
        previous = [snap.cluster_npu_allocated for snap in list(self._snapshots)[:-1]]
        npu = MetricField.NPU_ALLOCATED
        return classify_trend(previous, current, _TREND_FLOORS[npu], _TREND_RATIOS[npu])

    def _trend(self, lookup: MetricLookup, field: MetricField, current: float) -> Trend:
        if len(self._snapshots) < TREND_MIN_SNAPSHOTS:
            return Trend.STABLE
        previous: list[float] = []
        for snap in list(self._snapshots)[:-1]:
            metric = lookup(snap)
            if metric is not None:
                previous.append(_gauge(metric, field))
        return classify_trend(previous, current, _TREND_FLOORS[field], _TREND_RATIOS[field])

    # ------------------------------------------------------------------
    # Rates
    # ------------------------------------------------------------------

    def node_rate(self, node_name: str, counter: CounterField) -> float:
        """Smoothed bytes/s for a node counter."""
        return self._rate(lambda snap: snap.nodes.get(node_name), counter)

    def pod_rate(self, pod_key: str, counter: CounterField) -> float:
        """Smoothed bytes/s for a pod counter."""
        return self._rate(lambda snap: snap.pods.get(pod_key), counter)

    def cluster_rate(self, counter: CounterField) -> float:
        """Sum of node rates over the nodes in the newest snapshot."""
        latest = self.latest
        if latest is None or len(self._snapshots) < RATE_MIN_SNAPSHOTS:
            return 0.0
        return sum(self.node_rate(name, counter) for name in latest.nodes)

    def _rate(self, lookup: MetricLookup, counter: CounterField) -> float:
        if len(self._snapshots) < RATE_MIN_SNAPSHOTS:
            return 0.0

        snapshots = list(self._snapshots)
        current_snap = snapshots[-1]
        current = lookup(current_snap)
        if current is None:
            return 0.0

        cutoff = current_snap.timestamp - timedelta(seconds=RATE_WINDOW_SECONDS)
        rates: list[float] = []
        for candidate_snap in reversed(snapshots[:-1]):
            if candidate_snap.timestamp < cutoff:
                break
            candidate = lookup(candidate_snap)
            if candidate is None:
                continue
            delta = _counter(current, counter) - _counter(candidate, counter)
            # Zero means idle between samples; negative means the counter reset.
            if delta <= 0:
                continue
            elapsed = self._elapsed(current, candidate, current_snap, candidate_snap)
            if elapsed <= 0:
                continue
            rates.append(delta / elapsed)

        if not rates:
            return 0.0
        return sum(rates) / len(rates)

    @staticmethod
    def _elapsed(
        current: NodeMetric | PodMetric,
        previous: NodeMetric | PodMetric,
        current_snap: MetricSnapshot,
        previous_snap: MetricSnapshot,
    ) -> float:
        elapsed = (current.timestamp - previous.timestamp).total_seconds()
        if elapsed <= 0:
            elapsed = (current_snap.timestamp - previous_snap.timestamp).total_seconds()
        return elapsed

    # ------------------------------------------------------------------
    # History projections
    # ------------------------------------------------------------------

    def node_cpu_history(self, node_name: str) -> list[float]:
        """CPU usage in cores for every snapshot containing the node."""
        return [
            snap.nodes[node_name].cpu / 1000
            for snap in self._snapshots
            if node_name in snap.nodes
        ]

    def node_memory_history(self, node_name: str) -> list[float]:
        """Memory usage in GiB."""
        return [
            snap.nodes[node_name].memory / _GIB
            for snap in self._snapshots
            if node_name in snap.nodes
        ]

    def pod_cpu_history(self, pod_key: str) -> list[float]:
        return [
            snap.pods[pod_key].cpu / 1000
            for snap in self._snapshots
            if pod_key in snap.pods
        ]

    def pod_memory_history(self, pod_key: str) -> list[float]:
        """Memory usage in MiB."""
        return [
            snap.pods[pod_key].memory / _MIB
            for snap in self._snapshots
            if pod_key in snap.pods
        ]

    def node_network_history(self, node_name: str, counter: CounterField) -> list[float]:
        return self._rate_history(lambda snap: snap.nodes.get(node_name), counter)

    def pod_network_history(self, pod_key: str, counter: CounterField) -> list[float]:
        return self._rate_history(lambda snap: snap.pods.get(pod_key), counter)

    def _rate_history(self, lookup: MetricLookup, counter: CounterField) -> list[float]:
        """Bytes/s between each pair of consecutive snapshots."""
        history: list[float] = []
        snapshots = list(self._snapshots)
        for previous_snap, current_snap in zip(snapshots, snapshots[1:]):
            previous = lookup(previous_snap)
            current = lookup(current_snap)
            if previous is None or current is None:
                continue
            elapsed = self._elapsed(current, previous, current_snap, previous_snap)
            if elapsed <= 0:
                continue
            delta = _counter(current, counter) - _counter(previous, counter)
            history.append(delta / elapsed if delta >= 0 else 0.0)
        return history

    def node_npu_allocated_history(self, node_name: str) -> list[float]:
        return [
            float(snap.nodes[node_name].npu_allocated)
            for snap in self._snapshots
            if node_name in snap.nodes
        ]

    def node_npu_utilization_history(self, node_name: str) -> list[float]:
        history: list[float] = []
        for snap in self._snapshots:
            metric = snap.nodes.get(node_name)
            if metric is None:
                continue
            if metric.npu_allocatable > 0:
                history.append(metric.npu_allocated / metric.npu_allocatable * 100)
            else:
                history.append(0.0)
        return history

    def cluster_npu_allocated_history(self) -> list[float]:
        return [float(snap.cluster_npu_allocated) for snap in self._snapshots]

    def cluster_npu_utilization_history(self) -> list[float]:
        return [
            snap.cluster_npu_allocated / snap.cluster_npu_allocatable * 100
            if snap.cluster_npu_allocatable > 0
            else 0.0
            for snap in self._snapshots
        ]
