"""Regular expressions used to classify log lines."""

import re
from typing import Final

from kubeconsole.constants.enums import LogLevel

# Checked in order; the first match wins.
LOG_LEVEL_PATTERNS: Final = (
    (LogLevel.ERROR, re.compile(r"\b(ERROR|ERR|FATAL|CRIT(ICAL)?)\b", re.IGNORECASE)),
    (LogLevel.WARNING, re.compile(r"\bWARN(ING)?\b", re.IGNORECASE)),
    (LogLevel.INFO, re.compile(r"\bINFO\b", re.IGNORECASE)),
    (LogLevel.DEBUG, re.compile(r"\b(DEBUG|TRACE)\b", re.IGNORECASE)),
    (LogLevel.SUCCESS, re.compile(r"\b(SUCCESS|OK)\b", re.IGNORECASE)),
)

__all__ = [
    "LOG_LEVEL_PATTERNS",
]
