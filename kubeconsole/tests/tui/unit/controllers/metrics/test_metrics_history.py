"""Tests for the bounded metric history.

Tests cover:
- Ingestion, deduplication and FIFO eviction
- Trend classification with relative threshold and absolute floors
- Windowed throughput rates with zero-delta and counter-reset skipping
- History projections used by the detail views
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from kubeconsole.constants.enums import CounterField, MetricField, Trend
from kubeconsole.controllers.metrics.history import MetricsHistory, as_utc, classify_trend
from kubeconsole.models.core.cluster_resources import NodeInfo, PodInfo
from kubeconsole.models.core.cluster_snapshot import ClusterSnapshot, ClusterSummary

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)
MIB = 1024 * 1024


def snapshot_at(
    seconds: float,
    *,
    cpu: int = 0,
    memory: int = 0,
    rx: int = 0,
    tx: int = 0,
    npu_allocated: int = 0,
) -> ClusterSnapshot:
    """One node and one pod sharing the same counters, refreshed at ``T0 + seconds``."""
    node = NodeInfo(
        name="node-a",
        cpu_usage=cpu,
        memory_usage=memory,
        network_rx_bytes=rx,
        network_tx_bytes=tx,
        npu_capacity=8,
        npu_allocatable=8,
        npu_allocated=npu_allocated,
    )
    pod = PodInfo(
        name="web-1",
        namespace="prod",
        cpu_usage=cpu,
        memory_usage=memory,
        network_rx_bytes=rx,
        network_tx_bytes=tx,
    )
    summary = ClusterSummary(last_refresh_time=T0 + timedelta(seconds=seconds))
    return ClusterSnapshot(nodes=[node], pods=[pod], summary=summary)


def history_of(*snapshots: ClusterSnapshot) -> MetricsHistory:
    history = MetricsHistory()
    for snapshot in snapshots:
        history.ingest(snapshot)
    return history


# =============================================================================
# Ingestion
# =============================================================================


@pytest.mark.unit
@pytest.mark.fast
class TestIngest:
    """Tests for MetricsHistory.ingest."""

    def test_first_snapshot_is_accepted(self) -> None:
        history = MetricsHistory()
        assert history.ingest(snapshot_at(0, cpu=100)) is True
        assert len(history) == 1
        assert history.last_accepted == T0

    def test_same_refresh_time_is_skipped(self) -> None:
        """A cached snapshot served on two poll ticks is recorded once."""
        history = MetricsHistory()
        snapshot = snapshot_at(0, cpu=100)
        assert history.ingest(snapshot) is True
        assert history.ingest(snapshot) is False
        assert len(history) == 1

    def test_older_refresh_time_is_skipped(self) -> None:
        history = history_of(snapshot_at(10))
        assert history.ingest(snapshot_at(5)) is False
        assert history.last_accepted == T0 + timedelta(seconds=10)

    def test_capacity_evicts_oldest(self) -> None:
        history = history_of(*(snapshot_at(i, cpu=i) for i in range(11)))
        assert len(history) == 10
        assert history.snapshots[0].timestamp == T0 + timedelta(seconds=1)
        assert history.latest is not None
        assert history.latest.timestamp == T0 + timedelta(seconds=10)

    def test_local_clock_used_without_refresh_time(self) -> None:
        ticks = iter([T0, T0 + timedelta(seconds=2)])
        history = MetricsHistory(clock=lambda: next(ticks))
        assert history.ingest(ClusterSnapshot(nodes=[NodeInfo(name="n")])) is True
        assert history.ingest(ClusterSnapshot(nodes=[NodeInfo(name="n")])) is True
        assert [s.timestamp for s in history] == [T0, T0 + timedelta(seconds=2)]

    def test_naive_refresh_time_is_treated_as_utc(self) -> None:
        naive = datetime(2026, 1, 1, 0, 0, 30)
        history = history_of(snapshot_at(0))
        snapshot = ClusterSnapshot(summary=ClusterSummary(last_refresh_time=naive))
        assert history.ingest(snapshot) is True
        assert history.last_accepted == as_utc(naive)

    def test_build_snapshot_sums_cluster_npu(self) -> None:
        snapshot = ClusterSnapshot(
            nodes=[
                NodeInfo(name="a", npu_capacity=8, npu_allocatable=8, npu_allocated=3),
                NodeInfo(name="b", npu_capacity=8, npu_allocatable=6, npu_allocated=5),
            ]
        )
        metrics = MetricsHistory.build_snapshot(snapshot, T0)
        assert metrics.cluster_npu_capacity == 16
        assert metrics.cluster_npu_allocatable == 14
        assert metrics.cluster_npu_allocated == 8
        assert set(metrics.nodes) == {"a", "b"}


# =============================================================================
# Trends
# =============================================================================


@pytest.mark.unit
@pytest.mark.fast
class TestClassifyTrend:
    """Tests for classify_trend."""

    def test_empty_history_is_stable(self) -> None:
        assert classify_trend([], 100, 0) is Trend.STABLE

    def test_floor_dominates_small_means(self) -> None:
        # mean 10, 5% is 0.5, the floor of 10 wins: 50 > 20
        assert classify_trend([10, 10, 10, 10], 50, 10) is Trend.UP
        assert classify_trend([10, 10, 10, 10], 19, 10) is Trend.STABLE

    def test_relative_threshold_without_floor(self) -> None:
        assert classify_trend([100, 100], 106, 0) is Trend.UP
        assert classify_trend([100, 100], 94, 0) is Trend.DOWN
        assert classify_trend([100, 100], 104, 0) is Trend.STABLE

    def test_zero_ratio_and_floor_flags_any_change(self) -> None:
        assert classify_trend([40, 40, 40], 41, 0, ratio=0.0) is Trend.UP
        assert classify_trend([40, 40, 40], 39, 0, ratio=0.0) is Trend.DOWN
        assert classify_trend([40, 40, 40], 40, 0, ratio=0.0) is Trend.STABLE


@pytest.mark.unit
@pytest.mark.fast
class TestTrends:
    """Tests for node, pod and cluster trends."""

    def test_worked_example_goes_up(self) -> None:
        history = history_of(*(snapshot_at(i, cpu=10) for i in range(4)), snapshot_at(4, cpu=50))
        assert history.node_trend("node-a", MetricField.CPU, 50) is Trend.UP
        assert history.pod_trend("prod/web-1", MetricField.CPU, 50) is Trend.UP

    def test_fewer_than_three_snapshots_is_stable(self) -> None:
        history = history_of(snapshot_at(0, cpu=10), snapshot_at(1, cpu=5000))
        assert history.node_trend("node-a", MetricField.CPU, 5000) is Trend.STABLE

    def test_memory_floor_absorbs_small_changes(self) -> None:
        history = history_of(*(snapshot_at(i, memory=100 * MIB) for i in range(4)))
        assert history.node_trend("node-a", MetricField.MEMORY, 108 * MIB) is Trend.STABLE
        assert history.node_trend("node-a", MetricField.MEMORY, 111 * MIB) is Trend.UP
        assert history.node_trend("node-a", MetricField.MEMORY, 89 * MIB) is Trend.DOWN

    def test_npu_has_no_floor(self) -> None:
        history = history_of(*(snapshot_at(i, npu_allocated=4) for i in range(3)))
        assert history.node_trend("node-a", MetricField.NPU_ALLOCATED, 5) is Trend.UP
        assert history.node_trend("node-a", MetricField.NPU_ALLOCATED, 4) is Trend.STABLE

    def test_npu_change_of_one_is_a_trend_at_any_scale(self) -> None:
        """5% of a mean of 40 would hide a single extra chip."""
        history = history_of(*(snapshot_at(i, npu_allocated=40) for i in range(4)))
        assert history.node_trend("node-a", MetricField.NPU_ALLOCATED, 41) is Trend.UP
        assert history.node_trend("node-a", MetricField.NPU_ALLOCATED, 39) is Trend.DOWN
        assert history.cluster_npu_trend(41) is Trend.UP
        assert history.cluster_npu_trend(40) is Trend.STABLE

    def test_pod_npu_trend_is_always_stable(self) -> None:
        history = history_of(*(snapshot_at(i) for i in range(4)))
        assert history.pod_trend("prod/web-1", MetricField.NPU_ALLOCATED, 100) is Trend.STABLE

    def test_cluster_npu_trend(self) -> None:
        history = history_of(*(snapshot_at(i, npu_allocated=2) for i in range(3)))
        assert history.cluster_npu_trend(1) is Trend.DOWN
        assert history.cluster_npu_trend(2) is Trend.STABLE

    def test_unknown_entity_is_stable(self) -> None:
        history = history_of(*(snapshot_at(i, cpu=10) for i in range(4)))
        assert history.node_trend("missing", MetricField.CPU, 9000) is Trend.STABLE


# =============================================================================
# Rates
# =============================================================================


@pytest.mark.unit
@pytest.mark.fast
class TestRates:
    """Tests for windowed throughput rates."""

    def test_single_snapshot_has_no_rate(self) -> None:
        history = history_of(snapshot_at(0, rx=1000))
        assert history.node_rate("node-a", CounterField.NETWORK_RX) == 0.0

    def test_zero_delta_pair_is_skipped(self) -> None:
        """An idle newest pair falls back to an older sample instead of reporting 0."""
        history = history_of(
            snapshot_at(0, rx=1000),
            snapshot_at(5, rx=3000),
            snapshot_at(10, rx=3000),
        )
        # current vs t=5 has delta 0, current vs t=0 is 2000 bytes over 10s
        assert history.node_rate("node-a", CounterField.NETWORK_RX) == pytest.approx(200.0)

    def test_rates_are_averaged_over_the_window(self) -> None:
        history = history_of(
            snapshot_at(0, rx=1000),
            snapshot_at(5, rx=1000),
            snapshot_at(15, rx=3000),
        )
        # 2000/10 and 2000/15
        expected = (200.0 + 2000 / 15) / 2
        assert history.node_rate("node-a", CounterField.NETWORK_RX) == pytest.approx(expected)

    def test_counter_reset_is_skipped(self) -> None:
        history = history_of(
            snapshot_at(0, tx=1000),
            snapshot_at(5, tx=9000),
            snapshot_at(10, tx=2000),
        )
        # t=5 is newer than current's counter (reset); t=0 gives 1000/10
        assert history.pod_rate("prod/web-1", CounterField.NETWORK_TX) == pytest.approx(100.0)

    def test_only_resets_yield_zero(self) -> None:
        history = history_of(snapshot_at(0, rx=5000), snapshot_at(5, rx=100))
        assert history.node_rate("node-a", CounterField.NETWORK_RX) == 0.0

    def test_samples_outside_window_are_ignored(self) -> None:
        history = history_of(snapshot_at(0, rx=0), snapshot_at(30, rx=3000))
        assert history.node_rate("node-a", CounterField.NETWORK_RX) == 0.0

    def test_sample_timestamps_take_precedence(self) -> None:
        first = snapshot_at(0, rx=0)
        second = snapshot_at(20, rx=1000)
        first.nodes[0].network_timestamp = T0
        second.nodes[0].network_timestamp = T0 + timedelta(seconds=4)
        history = history_of(first, second)
        assert history.node_rate("node-a", CounterField.NETWORK_RX) == pytest.approx(250.0)

    def test_missing_entity_has_no_rate(self) -> None:
        history = history_of(snapshot_at(0, rx=0), snapshot_at(5, rx=500))
        assert history.pod_rate("prod/missing", CounterField.NETWORK_RX) == 0.0

    def test_cluster_rate_sums_nodes(self) -> None:
        def two_nodes(seconds: float, rx: int) -> ClusterSnapshot:
            return ClusterSnapshot(
                nodes=[NodeInfo(name="a", network_rx_bytes=rx), NodeInfo(name="b", network_rx_bytes=rx * 2)],
                summary=ClusterSummary(last_refresh_time=T0 + timedelta(seconds=seconds)),
            )

        history = history_of(two_nodes(0, 0), two_nodes(10, 1000))
        assert history.cluster_rate(CounterField.NETWORK_RX) == pytest.approx(300.0)


# =============================================================================
# History projections
# =============================================================================


@pytest.mark.unit
@pytest.mark.fast
class TestHistoryProjections:
    """Tests for the per-entity history series."""

    def test_cpu_history_in_cores(self) -> None:
        history = history_of(snapshot_at(0, cpu=500), snapshot_at(1, cpu=1500))
        assert history.node_cpu_history("node-a") == [0.5, 1.5]
        assert history.pod_cpu_history("prod/web-1") == [0.5, 1.5]

    def test_memory_history_units(self) -> None:
        history = history_of(snapshot_at(0, memory=1024**3))
        assert history.node_memory_history("node-a") == [1.0]
        assert history.pod_memory_history("prod/web-1") == [1024.0]

    def test_network_history_clamps_resets_to_zero(self) -> None:
        history = history_of(snapshot_at(0, rx=0), snapshot_at(10, rx=1000), snapshot_at(20, rx=10))
        assert history.node_network_history("node-a", CounterField.NETWORK_RX) == [100.0, 0.0]

    def test_npu_histories(self) -> None:
        history = history_of(snapshot_at(0, npu_allocated=2), snapshot_at(1, npu_allocated=4))
        assert history.node_npu_allocated_history("node-a") == [2.0, 4.0]
        assert history.node_npu_utilization_history("node-a") == [25.0, 50.0]
        assert history.cluster_npu_allocated_history() == [2.0, 4.0]
        assert history.cluster_npu_utilization_history() == [25.0, 50.0]
