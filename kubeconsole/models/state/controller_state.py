"""State threaded through the view controller.

``ControllerState`` is a plain value: the controller copies it with
:meth:`ControllerState.clone` before applying an event, so callers holding
the previous state never observe a change.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime

from kubeconsole.constants.defaults import VIEWPORT_HEIGHT_DEFAULT, VIEWPORT_WIDTH_DEFAULT
from kubeconsole.constants.enums import SortField, SortOrder, ViewType
from kubeconsole.controllers.base.errors import SelectionBoundsError
from kubeconsole.controllers.logs.log_stream import LogSession
from kubeconsole.models.core.cluster_resources import (
    CronJobInfo,
    DaemonSetInfo,
    DeploymentInfo,
    EventInfo,
    JobInfo,
    NodeInfo,
    PodInfo,
    PVCInfo,
    PVInfo,
    QueueInfo,
    ServiceInfo,
    StatefulSetInfo,
    SuperPodInfo,
    VolcanoJobInfo,
)
from kubeconsole.models.core.cluster_snapshot import ClusterSnapshot


@dataclass
class ModeFlags:
    """Overlay and context modes. Log modes live on the log session."""

    detail: bool = False
    filter: bool = False
    search: bool = False
    action_menu: bool = False
    command_output: bool = False


@dataclass
class SelectionState:
    selected_index: int = 0
    scroll_offset: int = 0
    detail_scroll_offset: int = 0
    job_pod_index: int = 0
    volcano_job_pod_index: int = 0


@dataclass
class ListFilters:
    namespace: str = ""
    status: str = ""
    role: str = ""
    event_type: str = ""
    search_text: str = ""


@dataclass(frozen=True)
class SortKey:
    field: SortField
    order: SortOrder


@dataclass
class SortState:
    nodes: SortKey = SortKey(SortField.NAME, SortOrder.ASC)
    pods: SortKey = SortKey(SortField.NAME, SortOrder.ASC)


@dataclass
class NavigationMemory:
    """One level of back-navigation memory.

    ``list_*`` hold the list position captured when a detail view was
    opened; the ``from_*`` flags mark a pod detail reached from a job detail.
    """

    list_selected_index: int = 0
    list_scroll_offset: int = 0
    from_job_detail: bool = False
    from_volcano_job_detail: bool = False


@dataclass
class DetailSelection:
    """Entity captured into each detail slot."""

    node: NodeInfo | None = None
    pod: PodInfo | None = None
    event: EventInfo | None = None
    job: JobInfo | None = None
    service: ServiceInfo | None = None
    deployment: DeploymentInfo | None = None
    statefulset: StatefulSetInfo | None = None
    daemonset: DaemonSetInfo | None = None
    cronjob: CronJobInfo | None = None
    pv: PVInfo | None = None
    pvc: PVCInfo | None = None
    volcano_job: VolcanoJobInfo | None = None
    queue: QueueInfo | None = None
    super_pod: SuperPodInfo | None = None


@dataclass(frozen=True)
class CommandOutput:
    title: str
    content: str
    error: str | None = None
    scroll: int = 0

    @property
    def lines(self) -> list[str]:
        return self.content.split("\n")


@dataclass(frozen=True)
class StatusMessage:
    text: str
    token: int


@dataclass(frozen=True)
class Viewport:
    width: int = VIEWPORT_WIDTH_DEFAULT
    height: int = VIEWPORT_HEIGHT_DEFAULT


@dataclass
class ControllerState:
    """Everything the renderer needs to draw a frame."""

    view: ViewType = ViewType.OVERVIEW
    modes: ModeFlags = field(default_factory=ModeFlags)
    selection: SelectionState = field(default_factory=SelectionState)
    filters: ListFilters = field(default_factory=ListFilters)
    sort: SortState = field(default_factory=SortState)
    memory: NavigationMemory = field(default_factory=NavigationMemory)
    detail: DetailSelection = field(default_factory=DetailSelection)
    action_menu_index: int = 0
    command_output: CommandOutput | None = None
    log_session: LogSession | None = None
    logs_error: str | None = None
    snapshot: ClusterSnapshot | None = None
    snapshot_error: str | None = None
    last_update: datetime | None = None
    refresh_count: int = 0
    viewport: Viewport = field(default_factory=Viewport)
    content_lines: int = 0
    export_in_progress: bool = False
    status_message: StatusMessage | None = None
    message_counter: int = 0
    quitting: bool = False

    @property
    def logs_mode(self) -> bool:
        return self.log_session is not None

    @property
    def logs_search_mode(self) -> bool:
        return self.log_session is not None and self.log_session.search_active

    def clone(self) -> ControllerState:
        """Copy with private copies of every mutable part.

        Snapshots and log sessions are treated as immutable and shared.
        """
        cloned = copy.copy(self)
        cloned.modes = copy.copy(self.modes)
        cloned.selection = copy.copy(self.selection)
        cloned.filters = copy.copy(self.filters)
        cloned.sort = copy.copy(self.sort)
        cloned.memory = copy.copy(self.memory)
        cloned.detail = copy.copy(self.detail)
        return cloned

    def assert_invariants(self, item_count: int, page_size: int) -> None:
        """Raise if selection or scroll escaped the bounds of the active list."""
        sel = self.selection
        if not 0 <= sel.selected_index < max(1, item_count):
            raise SelectionBoundsError(
                f"selected_index {sel.selected_index} outside 0..{max(1, item_count) - 1}"
            )
        max_scroll = max(0, item_count - page_size)
        if not 0 <= sel.scroll_offset <= max_scroll:
            raise SelectionBoundsError(f"scroll_offset {sel.scroll_offset} outside 0..{max_scroll}")
        if sel.detail_scroll_offset < 0:
            raise SelectionBoundsError(f"detail_scroll_offset {sel.detail_scroll_offset} is negative")
