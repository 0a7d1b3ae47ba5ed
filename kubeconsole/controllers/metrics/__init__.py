"""Metric history and derived signals."""

from kubeconsole.controllers.metrics.history import MetricsHistory, classify_trend

__all__ = [
    "MetricsHistory",
    "classify_trend",
]
