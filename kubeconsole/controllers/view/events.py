"""Input events consumed by the view controller.

Key presses and asynchronous results both arrive as one of these values and
are processed strictly in arrival order.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from kubeconsole.constants.enums import ViewType
from kubeconsole.models.core.cluster_snapshot import ClusterSnapshot

# ============================================================================
# Navigation and mode commands
# ============================================================================


@dataclass(frozen=True)
class SelectView:
    """Digit key: jump to a primary view."""

    digit: str


@dataclass(frozen=True)
class TabCycle:
    pass


@dataclass(frozen=True)
class Enter:
    pass


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class EnterFilter:
    pass


@dataclass(frozen=True)
class ClearFilter:
    pass


@dataclass(frozen=True)
class EnterSearch:
    pass


@dataclass(frozen=True)
class EnterLogs:
    pass


@dataclass(frozen=True)
class EnterActions:
    pass


@dataclass(frozen=True)
class EnterExport:
    pass


@dataclass(frozen=True)
class Sort:
    pass


@dataclass(frozen=True)
class Up:
    pass


@dataclass(frozen=True)
class Down:
    pass


@dataclass(frozen=True)
class PageUp:
    pass


@dataclass(frozen=True)
class PageDown:
    pass


@dataclass(frozen=True)
class TextInput:
    """A printable character typed while a text-entry mode is active."""

    char: str


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class Space:
    pass


@dataclass(frozen=True)
class Refresh:
    pass


@dataclass(frozen=True)
class Quit:
    pass


# ============================================================================
# Viewport
# ============================================================================


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class ContentMeasured:
    """Renderer-reported line count of a line-scrolled view."""

    view: ViewType
    lines: int


# ============================================================================
# Asynchronous results
# ============================================================================


@dataclass(frozen=True)
class SnapshotArrived:
    snapshot: ClusterSnapshot | None
    error: str | None = None


@dataclass(frozen=True)
class LogsFetched:
    pod_key: str
    container: str
    text: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class LogRefreshTick:
    pod_key: str
    container: str


@dataclass(frozen=True)
class CommandOutputReady:
    title: str
    content: str
    error: str | None = None


@dataclass(frozen=True)
class ExportFinished:
    count: int = 0
    path: Path | None = None
    error: str | None = None


@dataclass(frozen=True)
class CopyFinished:
    text: str
    error: str | None = None


@dataclass(frozen=True)
class ClearStatusMessage:
    token: int


Event = (
    SelectView
    | TabCycle
    | Enter
    | Back
    | EnterFilter
    | ClearFilter
    | EnterSearch
    | EnterLogs
    | EnterActions
    | EnterExport
    | Sort
    | Up
    | Down
    | PageUp
    | PageDown
    | TextInput
    | Backspace
    | Space
    | Refresh
    | Quit
    | Resize
    | ContentMeasured
    | SnapshotArrived
    | LogsFetched
    | LogRefreshTick
    | CommandOutputReady
    | ExportFinished
    | CopyFinished
    | ClearStatusMessage
)
