"""Cluster resource and snapshot models."""

from kubeconsole.models.core.cluster_resources import (
    ContainerState,
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
    ServicePort,
    StatefulSetInfo,
    SuperPodInfo,
    VolcanoJobInfo,
    VolcanoTaskInfo,
    namespaced_key,
)
from kubeconsole.models.core.cluster_snapshot import (
    Alert,
    ClusterSnapshot,
    ClusterSummary,
)

__all__ = [
    "Alert",
    "ClusterSnapshot",
    "ClusterSummary",
    "ContainerState",
    "CronJobInfo",
    "DaemonSetInfo",
    "DeploymentInfo",
    "EventInfo",
    "JobInfo",
    "NodeInfo",
    "PVCInfo",
    "PVInfo",
    "PodInfo",
    "QueueInfo",
    "ServiceInfo",
    "ServicePort",
    "StatefulSetInfo",
    "SuperPodInfo",
    "VolcanoJobInfo",
    "VolcanoTaskInfo",
    "namespaced_key",
]
