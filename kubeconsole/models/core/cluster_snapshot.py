"""Point-in-time cluster snapshot models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from kubeconsole.constants.enums import AlertSeverity
from kubeconsole.models.core.cluster_resources import (
    CronJobInfo,
    DaemonSetInfo,
    DeploymentInfo,
    EventInfo,
    JobInfo,
    NodeInfo,
    PodInfo,
    PVCInfo,
    PVInfo,
    QueueInfo,
    ServiceInfo,
    StatefulSetInfo,
    VolcanoJobInfo,
)


class Alert(BaseModel):
    """Alert raised from cluster state."""

    severity: AlertSeverity = AlertSeverity.WARNING
    category: str = ""
    alert_type: str = ""
    resource_type: str = ""
    resource_name: str = ""
    namespace: str = ""
    message: str = ""
    value: str = ""
    threshold: str = ""
    recommended_action: str = ""
    timestamp: datetime | None = None


class ClusterSummary(BaseModel):
    """High-level cluster counters computed by the data provider."""

    total_nodes: int = 0
    ready_nodes: int = 0
    total_pods: int = 0
    running_pods: int = 0
    pending_pods: int = 0
    failed_pods: int = 0
    total_events: int = 0
    warning_events: int = 0

    cpu_capacity: int = 0
    cpu_allocatable: int = 0
    cpu_used: int = 0
    memory_capacity: int = 0
    memory_allocatable: int = 0
    memory_used: int = 0

    npu_capacity: int = 0
    npu_allocatable: int = 0
    npu_allocated: int = 0
    npu_resource_name: str = ""

    hyper_node_count: int = 0
    super_pod_count: int = 0

    last_refresh_time: datetime | None = None
    alerts: list[Alert] = Field(default_factory=list)


class ClusterSnapshot(BaseModel):
    """Everything the console knows about the cluster at one refresh."""

    nodes: list[NodeInfo] = Field(default_factory=list)
    pods: list[PodInfo] = Field(default_factory=list)
    events: list[EventInfo] = Field(default_factory=list)
    services: list[ServiceInfo] = Field(default_factory=list)
    pvs: list[PVInfo] = Field(default_factory=list)
    pvcs: list[PVCInfo] = Field(default_factory=list)
    deployments: list[DeploymentInfo] = Field(default_factory=list)
    statefulsets: list[StatefulSetInfo] = Field(default_factory=list)
    daemonsets: list[DaemonSetInfo] = Field(default_factory=list)
    jobs: list[JobInfo] = Field(default_factory=list)
    cronjobs: list[CronJobInfo] = Field(default_factory=list)
    volcano_jobs: list[VolcanoJobInfo] = Field(default_factory=list)
    queues: list[QueueInfo] = Field(default_factory=list)
    summary: ClusterSummary | None = None

    @property
    def refresh_time(self) -> datetime | None:
        """Source-provided refresh time, if the provider reported one."""
        if self.summary is None:
            return None
        return self.summary.last_refresh_time

    @property
    def alerts(self) -> list[Alert]:
        if self.summary is None:
            return []
        return self.summary.alerts

    def has_volcano_queues(self) -> bool:
        return len(self.queues) > 0

    def has_npu(self) -> bool:
        return self.summary is not None and self.summary.npu_capacity > 0

    def has_super_pod_topology(self) -> bool:
        return (
            self.summary is not None
            and self.summary.npu_capacity > 0
            and self.summary.super_pod_count > 0
        )

    def namespaces(self) -> list[str]:
        """Sorted unique namespaces of all pods."""
        return sorted({pod.namespace for pod in self.pods})
