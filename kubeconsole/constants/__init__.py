"""Constants module for kubeconsole.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants and navigation tables
- timeouts.py: Timeout and interval values (seconds)
- limits.py: Limit values, thresholds and viewport margins
- defaults.py: Default values for settings
- patterns.py: Log line classification patterns

Note: Keyboard bindings are defined in kubeconsole.keyboard module.
"""

from kubeconsole.constants.defaults import (
    LOG_TAIL_LINES_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
)
from kubeconsole.constants.enums import (
    ActionType,
    CounterField,
    LogLevel,
    LogState,
    MetricField,
    SortField,
    SortOrder,
    Trend,
    ViewType,
    WorkloadSection,
)
from kubeconsole.constants.limits import (
    LOG_MAX_LINES,
    METRICS_HISTORY_CAPACITY,
)
from kubeconsole.constants.timeouts import (
    LOG_REFRESH_INTERVAL,
    RATE_WINDOW_SECONDS,
)
from kubeconsole.constants.values import (
    APP_TITLE,
    APP_VERSION,
    PRIMARY_VIEW_ORDER,
)

__all__ = [
    "APP_TITLE",
    "APP_VERSION",
    "LOG_MAX_LINES",
    "LOG_REFRESH_INTERVAL",
    "LOG_TAIL_LINES_DEFAULT",
    "METRICS_HISTORY_CAPACITY",
    "PRIMARY_VIEW_ORDER",
    "RATE_WINDOW_SECONDS",
    "REFRESH_INTERVAL_DEFAULT",
    "ActionType",
    "CounterField",
    "LogLevel",
    "LogState",
    "MetricField",
    "SortField",
    "SortOrder",
    "Trend",
    "ViewType",
    "WorkloadSection",
]
