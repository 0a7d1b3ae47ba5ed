"""Timeout constants for the console.

All timeout and interval values for refresh cycles and transient messages.
"""

from typing import Final

# ============================================================================
# Metrics windows (float, in seconds)
# ============================================================================

RATE_WINDOW_SECONDS: Final = 20.0

# ============================================================================
# Refresh cycles (float, in seconds)
# ============================================================================

LOG_REFRESH_INTERVAL: Final = 2.0

# ============================================================================
# Transient status messages (float, in seconds)
# ============================================================================

EXPORT_MESSAGE_TTL: Final = 3.0
COPY_MESSAGE_TTL: Final = 2.0

__all__ = [
    "COPY_MESSAGE_TTL",
    "EXPORT_MESSAGE_TTL",
    "LOG_REFRESH_INTERVAL",
    "RATE_WINDOW_SECONDS",
]
