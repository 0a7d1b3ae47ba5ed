"""Shared fixtures: small but complete cluster snapshots."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from kubeconsole.models.core.cluster_resources import (
    ContainerState,
    DeploymentInfo,
    EventInfo,
    JobInfo,
    NodeInfo,
    PodInfo,
    PVCInfo,
    PVInfo,
    QueueInfo,
    ServiceInfo,
    ServicePort,
    VolcanoJobInfo,
)
from kubeconsole.models.core.cluster_snapshot import ClusterSnapshot
from kubeconsole.providers.file_provider import build_summary

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _pod(namespace: str, name: str, phase: str, restarts: int, container: str | None) -> PodInfo:
    states = [ContainerState(name=container, restart_count=restarts, ready=True)] if container else []
    return PodInfo(
        name=name,
        namespace=namespace,
        phase=phase,
        node="node-a",
        restart_count=restarts,
        containers=len(states),
        ready_containers=len(states),
        container_states=states,
        creation_timestamp=T0,
    )


@pytest.fixture
def cluster_snapshot() -> ClusterSnapshot:
    """Three nodes, five pods in three namespaces and one of each workload."""
    snapshot = ClusterSnapshot(
        nodes=[
            NodeInfo(name="node-a", status="Ready", roles=["worker"], cpu_usage=500, memory_usage=2 * 1024**3,
                     cpu_capacity=4000, memory_capacity=16 * 1024**3, pod_count=3),
            NodeInfo(name="node-b", status="Ready", roles=["control-plane"], cpu_usage=1500,
                     memory_usage=1024**3, cpu_capacity=4000, memory_capacity=16 * 1024**3, pod_count=1),
            NodeInfo(name="node-c", status="NotReady", roles=["worker"], cpu_usage=100,
                     memory_usage=4 * 1024**3, cpu_capacity=4000, memory_capacity=16 * 1024**3, pod_count=7),
        ],
        pods=[
            _pod("default", "api-0", "Running", 0, "api"),
            _pod("default", "api-1", "Running", 2, None),
            _pod("batch", "train-abc", "Failed", 7, "trainer"),
            _pod("batch", "train-def", "Running", 0, "trainer"),
            _pod("kube-system", "coredns-1", "Running", 1, "coredns"),
        ],
        events=[
            EventInfo(type="Normal", reason="Scheduled", message="assigned default/api-0",
                      involved_object="Pod/api-0", last_timestamp=T0 + timedelta(seconds=10)),
            EventInfo(type="Warning", reason="FailedMount", message="volume not ready",
                      involved_object="Pod/coredns-1", last_timestamp=T0 + timedelta(seconds=20)),
            EventInfo(type="Warning", reason="BackOff", message="back-off restarting container",
                      involved_object="Pod/train-abc", last_timestamp=T0 + timedelta(seconds=30)),
        ],
        services=[
            ServiceInfo(name="svc-api", namespace="default", cluster_ip="10.0.0.1",
                        ports=[ServicePort(port=80)]),
        ],
        pvs=[PVInfo(name="pv-1", status="Bound", claim="default/data-claim", capacity=10 * 1024**3)],
        pvcs=[PVCInfo(name="data-claim", namespace="default", status="Bound", volume="pv-1")],
        deployments=[DeploymentInfo(name="api", namespace="default", replicas=2, ready_replicas=2)],
        jobs=[JobInfo(name="train", namespace="batch", completions=1, failed=1)],
        volcano_jobs=[VolcanoJobInfo(name="dist", namespace="batch", status="Running")],
    )
    snapshot.summary = build_summary(snapshot, T0)
    return snapshot


@pytest.fixture
def volcano_snapshot() -> ClusterSnapshot:
    """NPU nodes grouped into two super-pods plus Volcano queues."""
    snapshot = ClusterSnapshot(
        nodes=[
            NodeInfo(name="npu-1", status="Ready", npu_capacity=8, npu_allocatable=8, npu_allocated=4,
                     super_pod_id="sp-1"),
            NodeInfo(name="npu-2", status="Ready", npu_capacity=8, npu_allocatable=8, npu_allocated=8,
                     super_pod_id="sp-1"),
            NodeInfo(name="npu-3", status="Ready", npu_capacity=8, npu_allocatable=8, npu_allocated=0,
                     super_pod_id="sp-2"),
        ],
        queues=[QueueInfo(name="default", state="Open"), QueueInfo(name="research", state="Open")],
    )
    snapshot.summary = build_summary(snapshot, T0)
    return snapshot
