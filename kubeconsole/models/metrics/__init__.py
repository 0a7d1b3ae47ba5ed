"""Metric sample models."""

from kubeconsole.models.metrics.metric_snapshot import (
    MetricSnapshot,
    NodeMetric,
    PodMetric,
)

__all__ = [
    "MetricSnapshot",
    "NodeMetric",
    "PodMetric",
]
