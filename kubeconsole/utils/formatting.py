"""Human-readable formatting of cluster quantities."""

from __future__ import annotations

from datetime import datetime, timedelta

from kubeconsole.controllers.metrics.history import as_utc

_BINARY_UNITS = (
    (1024**4, "Ti"),
    (1024**3, "Gi"),
    (1024**2, "Mi"),
    (1024, "Ki"),
)


def format_cpu(millicores: int) -> str:
    """Cores with one decimal from 1 core up, millicores below."""
    if millicores == 0:
        return "0"
    if millicores >= 1000:
        return f"{millicores / 1000:.1f}"
    return f"{millicores}m"


def format_memory(num_bytes: int | float) -> str:
    if num_bytes == 0:
        return "0"
    for size, suffix in _BINARY_UNITS:
        if num_bytes >= size:
            return f"{num_bytes / size:.1f}{suffix}"
    return f"{int(num_bytes)}B"


def format_rate(bytes_per_second: float) -> str:
    if bytes_per_second <= 0:
        return "0B/s"
    return f"{format_memory(bytes_per_second)}/s"


def format_percent(value: float) -> str:
    if value == 0:
        return "0%"
    return f"{value:.1f}%"


def format_age(delta: timedelta) -> str:
    seconds = max(0, int(delta.total_seconds()))
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m"
    if seconds < 86400:
        return f"{seconds // 3600}h"
    return f"{seconds // 86400}d"


def age_since(timestamp: datetime | None, now: datetime) -> str:
    if timestamp is None:
        return "-"
    return format_age(as_utc(now) - as_utc(timestamp))


def truncate(text: str, limit: int) -> str:
    if limit <= 0 or len(text) <= limit:
        return text
    if limit <= 3:
        return text[:limit]
    return text[: limit - 3] + "..."


def progress_bar(percent: float, width: int = 20) -> str:
    filled = min(width, max(0, int(percent / 100.0 * width)))
    return "█" * filled + "░" * (width - filled)


_SPARK_BLOCKS = "▁▂▃▄▅▆▇█"


def sparkline(values: list[float], width: int = 40) -> str:
    """One block per value over the last ``width`` values, scaled min to max.

    A flat series renders as the lowest block.
    """
    points = values[-width:] if width > 0 else []
    if not points:
        return ""
    low = min(points)
    span = max(points) - low
    if span <= 0:
        return _SPARK_BLOCKS[0] * len(points)
    top = len(_SPARK_BLOCKS) - 1
    return "".join(_SPARK_BLOCKS[round((value - low) / span * top)] for value in points)
