"""Cluster resource models carried by a snapshot."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


def namespaced_key(namespace: str, name: str) -> str:
    """Return the ``namespace/name`` identity used for namespaced resources."""
    return f"{namespace}/{name}"


class NamespacedResource(BaseModel):
    """Common fields of every namespaced resource."""

    name: str
    namespace: str = "default"
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    creation_timestamp: datetime | None = None

    def entity_key(self) -> str:
        return namespaced_key(self.namespace, self.name)


class NodeInfo(BaseModel):
    """Node with capacity, usage and accelerator information."""

    name: str
    internal_ip: str = ""
    external_ip: str = ""
    roles: list[str] = Field(default_factory=list)
    status: str = "Unknown"
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    creation_timestamp: datetime | None = None

    cpu_capacity: int = 0  # millicores
    memory_capacity: int = 0  # bytes
    pod_capacity: int = 0
    cpu_allocatable: int = 0
    memory_allocatable: int = 0
    pod_allocatable: int = 0

    cpu_usage: int = 0  # millicores
    memory_usage: int = 0  # bytes
    pod_count: int = 0

    network_rx_bytes: int = 0
    network_tx_bytes: int = 0
    network_timestamp: datetime | None = None

    memory_pressure: bool = False
    disk_pressure: bool = False
    pid_pressure: bool = False
    has_kubelet_metrics: bool = False
    kubelet_error: str = ""

    npu_capacity: int = 0
    npu_allocatable: int = 0
    npu_allocated: int = 0
    npu_resource_name: str = ""
    npu_chip_type: str = ""

    hyper_node_id: str = ""
    hyper_cluster_id: str = ""
    super_pod_id: str = ""

    def entity_key(self) -> str:
        return self.name

    @property
    def cpu_usage_percent(self) -> float:
        if self.cpu_capacity <= 0:
            return 0.0
        return self.cpu_usage / self.cpu_capacity * 100

    @property
    def memory_usage_percent(self) -> float:
        if self.memory_capacity <= 0:
            return 0.0
        return self.memory_usage / self.memory_capacity * 100


class ContainerState(BaseModel):
    """Status and resources of one container in a pod."""

    name: str
    image: str = ""
    ready: bool = False
    restart_count: int = 0
    state: str = ""  # Running, Waiting, Terminated
    reason: str = ""
    message: str = ""
    exit_code: int = 0
    cpu_usage: int = 0
    memory_usage: int = 0
    cpu_request: int = 0
    cpu_limit: int = 0
    memory_request: int = 0
    memory_limit: int = 0


class PodInfo(NamespacedResource):
    """Pod with phase, container states and usage counters."""

    node: str = ""
    phase: str = "Unknown"
    reason: str = ""
    message: str = ""
    host_ip: str = ""
    pod_ip: str = ""
    qos_class: str = ""
    start_time: datetime | None = None

    containers: int = 0
    ready_containers: int = 0
    restart_count: int = 0
    container_states: list[ContainerState] = Field(default_factory=list)

    cpu_request: int = 0
    cpu_limit: int = 0
    memory_request: int = 0
    memory_limit: int = 0
    npu_request: int = 0

    cpu_usage: int = 0
    memory_usage: int = 0
    network_rx_bytes: int = 0
    network_tx_bytes: int = 0
    network_timestamp: datetime | None = None


class EventInfo(BaseModel):
    """Cluster event."""

    type: str = "Normal"
    reason: str = ""
    message: str = ""
    count: int = 1
    first_timestamp: datetime | None = None
    last_timestamp: datetime | None = None
    involved_object: str = ""  # e.g. "Pod/mypod"
    involved_namespace: str = ""
    source: str = ""

    def entity_key(self) -> str:
        stamp = self.last_timestamp.isoformat() if self.last_timestamp else ""
        return f"{self.involved_namespace}/{self.involved_object}/{self.reason}/{stamp}"


class ServicePort(BaseModel):
    """Port exposed by a service."""

    name: str = ""
    protocol: str = "TCP"
    port: int = 0
    target_port: str = ""
    node_port: int = 0


class ServiceInfo(NamespacedResource):
    """Service with endpoint count."""

    type: str = "ClusterIP"
    cluster_ip: str = ""
    external_ips: list[str] = Field(default_factory=list)
    ports: list[ServicePort] = Field(default_factory=list)
    selector: dict[str, str] = Field(default_factory=dict)
    load_balancer_ip: str = ""
    endpoint_count: int = 0


class PVInfo(BaseModel):
    """Persistent volume."""

    name: str
    capacity: int = 0  # bytes
    storage_class: str = ""
    access_modes: list[str] = Field(default_factory=list)
    reclaim_policy: str = ""
    status: str = ""
    claim: str = ""
    volume_mode: str = ""
    volume_type: str = ""
    creation_timestamp: datetime | None = None

    def entity_key(self) -> str:
        return self.name


class PVCInfo(NamespacedResource):
    """Persistent volume claim."""

    status: str = ""
    volume: str = ""
    capacity: int = 0
    requested_storage: int = 0
    storage_class: str = ""
    access_modes: list[str] = Field(default_factory=list)
    used_bytes: int = 0


class DeploymentInfo(NamespacedResource):
    """Deployment replica status."""

    replicas: int = 0
    ready_replicas: int = 0
    available_replicas: int = 0
    updated_replicas: int = 0
    strategy: str = ""


class StatefulSetInfo(NamespacedResource):
    """StatefulSet replica status."""

    replicas: int = 0
    ready_replicas: int = 0
    current_replicas: int = 0
    updated_replicas: int = 0


class DaemonSetInfo(NamespacedResource):
    """DaemonSet scheduling status."""

    desired_number_scheduled: int = 0
    current_number_scheduled: int = 0
    number_ready: int = 0
    number_available: int = 0


class JobInfo(NamespacedResource):
    """Batch job completion status."""

    completions: int = 0
    succeeded: int = 0
    failed: int = 0
    active: int = 0
    start_time: datetime | None = None
    completion_time: datetime | None = None


class CronJobInfo(NamespacedResource):
    """CronJob schedule."""

    schedule: str = ""
    suspend: bool = False
    active: int = 0
    last_schedule_time: datetime | None = None


class VolcanoTaskInfo(BaseModel):
    """Task template of a Volcano job."""

    name: str
    replicas: int = 0
    min_available: int = 0
    npu_request: int = 0


class VolcanoJobInfo(NamespacedResource):
    """Volcano batch job."""

    status: str = ""
    queue: str = ""
    min_available: int = 0
    replicas: int = 0
    running: int = 0
    succeeded: int = 0
    failed: int = 0
    pending: int = 0
    npu_requested: int = 0
    start_time: datetime | None = None
    completion_time: datetime | None = None
    tasks: list[VolcanoTaskInfo] = Field(default_factory=list)


class QueueInfo(BaseModel):
    """Volcano scheduling queue."""

    name: str
    parent: str = ""
    state: str = ""
    weight: int = 0
    reclaimable: bool = False
    cpu_deserved: int = 0
    memory_deserved: int = 0
    npu_deserved: int = 0
    cpu_allocated: int = 0
    memory_allocated: int = 0
    npu_allocated: int = 0
    running_jobs: int = 0
    pending_jobs: int = 0
    total_jobs: int = 0

    def entity_key(self) -> str:
        return self.name


class SuperPodInfo(BaseModel):
    """Group of nodes sharing a super-pod id, derived from node labels."""

    id: str
    node_names: list[str] = Field(default_factory=list)
    npu_capacity: int = 0
    npu_allocated: int = 0

    @property
    def node_count(self) -> int:
        return len(self.node_names)

    def entity_key(self) -> str:
        return self.id
