"""Limit and threshold constants for the console.

All limit values, thresholds, and viewport margins.
"""

from typing import Final

# ============================================================================
# Metrics history
# ============================================================================

METRICS_HISTORY_CAPACITY: Final = 10
TREND_MIN_SNAPSHOTS: Final = 3
RATE_MIN_SNAPSHOTS: Final = 2
TREND_THRESHOLD_RATIO: Final = 0.05
CPU_TREND_FLOOR_MILLICORES: Final = 10
MEMORY_TREND_FLOOR_BYTES: Final = 10 * 1024 * 1024
NPU_TREND_FLOOR: Final = 0

# ============================================================================
# Log viewer
# ============================================================================

LOG_MAX_LINES: Final = 10_000
LOG_AUTO_SCROLL_MARGIN: Final = 5

# ============================================================================
# Viewport margins (rows reserved for header, footer and chrome)
# ============================================================================

LIST_PAGE_MARGIN: Final = 10
DETAIL_PAGE_MARGIN: Final = 10
LOG_VIEW_MARGIN: Final = 8
LOG_PAGE_MARGIN: Final = 10
COMMAND_OUTPUT_MARGIN: Final = 6
PAGE_SIZE_MIN: Final = 1

# ============================================================================
# Display limits
# ============================================================================

JOB_PODS_DISPLAY_MAX: Final = 50
BASE_TAB_VIEW_COUNT: Final = 8

# ============================================================================
# Validation limits
# ============================================================================

MAX_CONCURRENT_MIN: Final = 1
LOG_TAIL_LINES_MIN: Final = 1

__all__ = [
    "BASE_TAB_VIEW_COUNT",
    "COMMAND_OUTPUT_MARGIN",
    "CPU_TREND_FLOOR_MILLICORES",
    "DETAIL_PAGE_MARGIN",
    "JOB_PODS_DISPLAY_MAX",
    "LIST_PAGE_MARGIN",
    "LOG_AUTO_SCROLL_MARGIN",
    "LOG_MAX_LINES",
    "LOG_PAGE_MARGIN",
    "LOG_TAIL_LINES_MIN",
    "LOG_VIEW_MARGIN",
    "MAX_CONCURRENT_MIN",
    "MEMORY_TREND_FLOOR_BYTES",
    "METRICS_HISTORY_CAPACITY",
    "NPU_TREND_FLOOR",
    "PAGE_SIZE_MIN",
    "RATE_MIN_SNAPSHOTS",
    "TREND_MIN_SNAPSHOTS",
    "TREND_THRESHOLD_RATIO",
]
