"""Log-tailing subsystem."""

from kubeconsole.controllers.logs.log_stream import (
    LogKey,
    LogSession,
    LogStream,
    classify_line,
)

__all__ = [
    "LogKey",
    "LogSession",
    "LogStream",
    "classify_line",
]
