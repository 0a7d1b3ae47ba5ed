"""Side effects requested by the view controller.

The controller never performs I/O. It returns these values and the
application shell executes them, feeding each outcome back as an event.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from kubeconsole.constants.enums import ActionType, ResourceKind, ViewType


@dataclass(frozen=True)
class FetchSnapshot:
    force: bool = False


@dataclass(frozen=True)
class FetchLogs:
    pod_key: str
    container: str
    tail_lines: int


@dataclass(frozen=True)
class StartLogRefresh:
    """Begin the repeating log refresh for one target."""

    pod_key: str
    container: str
    interval: float


@dataclass(frozen=True)
class StopLogRefresh:
    pass


@dataclass(frozen=True)
class RunCommand:
    """Describe or fetch YAML for one resource."""

    action: ActionType
    kind: ResourceKind
    key: str
    title: str


@dataclass(frozen=True)
class ExportView:
    view: ViewType
    rows: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class CopyToClipboard:
    text: str


@dataclass(frozen=True)
class ScheduleStatusClear:
    token: int
    delay: float


@dataclass(frozen=True)
class QuitApp:
    pass


Effect = (
    FetchSnapshot
    | FetchLogs
    | StartLogRefresh
    | StopLogRefresh
    | RunCommand
    | ExportView
    | CopyToClipboard
    | ScheduleStatusClear
    | QuitApp
)
