"""Default values for settings.

All default values used in AppSettings model and validation fallback values.
"""

from typing import Final

# ============================================================================
# Refresh defaults
# ============================================================================

REFRESH_INTERVAL_DEFAULT: Final = 2.0
REFRESH_TIMEOUT_DEFAULT: Final = 5.0
MAX_CONCURRENT_DEFAULT: Final = 10

# ============================================================================
# Cache defaults
# ============================================================================

CACHE_TTL_DEFAULT: Final = 60
CACHE_MAX_ENTRIES_DEFAULT: Final = 1000

# ============================================================================
# UI defaults
# ============================================================================

COLOR_MODE_DEFAULT: Final = "auto"
DEFAULT_VIEW_DEFAULT: Final = "overview"
MAX_ROWS_DEFAULT: Final = 100
LOCALE_DEFAULT: Final = "en"
LOG_TAIL_LINES_DEFAULT: Final = 200
VIEWPORT_HEIGHT_DEFAULT: Final = 40
VIEWPORT_WIDTH_DEFAULT: Final = 120

# ============================================================================
# Logging defaults
# ============================================================================

LOG_LEVEL_DEFAULT: Final = "info"
LOG_FILE_DEFAULT: Final = "/tmp/kubeconsole.log"

# ============================================================================
# Export defaults
# ============================================================================

EXPORT_PATH_DEFAULT: Final = "./exports"

__all__ = [
    "CACHE_MAX_ENTRIES_DEFAULT",
    "CACHE_TTL_DEFAULT",
    "COLOR_MODE_DEFAULT",
    "DEFAULT_VIEW_DEFAULT",
    "EXPORT_PATH_DEFAULT",
    "LOCALE_DEFAULT",
    "LOG_FILE_DEFAULT",
    "LOG_LEVEL_DEFAULT",
    "LOG_TAIL_LINES_DEFAULT",
    "MAX_CONCURRENT_DEFAULT",
    "MAX_ROWS_DEFAULT",
    "REFRESH_INTERVAL_DEFAULT",
    "REFRESH_TIMEOUT_DEFAULT",
    "VIEWPORT_HEIGHT_DEFAULT",
    "VIEWPORT_WIDTH_DEFAULT",
]
