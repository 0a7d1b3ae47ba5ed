"""View controller: the dashboard's state machine.

:meth:`ViewController.update` maps ``(state, event)`` to a new state plus the
effects the application shell must run. It performs no I/O and never raises
for a well-formed event; bounds are kept by clamping after every change.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from kubeconsole.constants.enums import ActionType, ResourceKind, StorageSection, ViewType, WorkloadSection
from kubeconsole.constants.limits import BASE_TAB_VIEW_COUNT
from kubeconsole.constants.timeouts import COPY_MESSAGE_TTL, EXPORT_MESSAGE_TTL
from kubeconsole.constants.values import (
    ALL_NAMESPACES_LABEL,
    DETAIL_PARENT_VIEW,
    EXPORTABLE_VIEWS,
    LINE_SCROLL_VIEWS,
    LIST_SEARCH_EXTRA_CHARS,
    MSG_COPY_FAILED,
    MSG_COPY_SUCCESS,
    MSG_DESCRIBE_UNSUPPORTED,
    MSG_EXPORT_FAILED,
    MSG_EXPORT_SUCCESS,
    MSG_LOGS_UNSUPPORTED,
    MSG_NO_CONTAINERS,
    MSG_YAML_UNSUPPORTED,
    NODE_ACTIONS,
    POD_ACTIONS,
    PRIMARY_VIEW_ORDER,
    TITLE_DESCRIBE_NODE,
    TITLE_DESCRIBE_POD,
    TITLE_ERROR,
    TITLE_YAML_NODE,
    TITLE_YAML_POD,
    VIEW_DIGITS,
    WORKLOAD_SECTION_DETAIL_VIEW,
)
from kubeconsole.controllers.base.capabilities import ProviderCapabilities
from kubeconsole.controllers.logs.log_stream import LogSession, LogStream
from kubeconsole.controllers.metrics.history import MetricsHistory
from kubeconsole.controllers.view import events as ev
from kubeconsole.controllers.view.effects import (
    CopyToClipboard,
    Effect,
    ExportView,
    FetchLogs,
    FetchSnapshot,
    QuitApp,
    RunCommand,
    ScheduleStatusClear,
    StartLogRefresh,
    StopLogRefresh,
)
from kubeconsole.controllers.view.lists import (
    NODE_SORT_CYCLE,
    POD_SORT_CYCLE,
    command_output_page_size,
    detail_page_size,
    displayed_job_pods,
    export_rows,
    item_count,
    job_pods,
    next_sort_key,
    page_size,
    resolve_workload,
    storage_items,
    super_pods,
    view_items,
    volcano_job_pods,
)
from kubeconsole.models.core.cluster_resources import NodeInfo, PodInfo
from kubeconsole.models.core.cluster_snapshot import ClusterSnapshot
from kubeconsole.models.state.controller_state import (
    CommandOutput,
    ControllerState,
    DetailSelection,
    NavigationMemory,
    StatusMessage,
    Viewport,
)

logger = logging.getLogger(__name__)

_WORKLOAD_SLOTS: dict[WorkloadSection, str] = {
    WorkloadSection.VOLCANO_JOB: "volcano_job",
    WorkloadSection.JOB: "job",
    WorkloadSection.SERVICE: "service",
    WorkloadSection.DEPLOYMENT: "deployment",
    WorkloadSection.STATEFULSET: "statefulset",
    WorkloadSection.DAEMONSET: "daemonset",
    WorkloadSection.CRONJOB: "cronjob",
}

# Detail slot -> snapshot collection it is re-resolved from.
_SLOT_SOURCES: dict[str, str] = {
    "node": "nodes",
    "pod": "pods",
    "event": "events",
    "job": "jobs",
    "service": "services",
    "deployment": "deployments",
    "statefulset": "statefulsets",
    "daemonset": "daemonsets",
    "cronjob": "cronjobs",
    "pv": "pvs",
    "pvc": "pvcs",
    "volcano_job": "volcano_jobs",
    "queue": "queues",
}


@dataclass
class Transition:
    """Result of one event: the next state and the effects to execute."""

    state: ControllerState
    effects: list[Effect] = field(default_factory=list)


Handler = Callable[[ControllerState, Any, list[Effect]], None]


class ViewController:
    """Pure transition function over :class:`ControllerState`."""

    def __init__(
        self,
        history: MetricsHistory,
        log_stream: LogStream,
        capabilities: ProviderCapabilities | None = None,
    ) -> None:
        self.history = history
        self.log_stream = log_stream
        self.capabilities = capabilities or ProviderCapabilities()
        self._handlers: dict[type, Handler] = {
            ev.SelectView: self._on_select_view,
            ev.TabCycle: self._on_tab_cycle,
            ev.Enter: self._on_enter,
            ev.Back: self._on_back,
            ev.EnterFilter: self._on_enter_filter,
            ev.ClearFilter: self._on_clear_filter,
            ev.EnterSearch: self._on_enter_search,
            ev.EnterLogs: self._on_enter_logs,
            ev.EnterActions: self._on_enter_actions,
            ev.EnterExport: self._on_enter_export,
            ev.Sort: self._on_sort,
            ev.Up: self._on_up,
            ev.Down: self._on_down,
            ev.PageUp: self._on_page_up,
            ev.PageDown: self._on_page_down,
            ev.TextInput: self._on_text_input,
            ev.Backspace: self._on_backspace,
            ev.Space: self._on_space,
            ev.Refresh: self._on_refresh,
            ev.Quit: self._on_quit,
            ev.Resize: self._on_resize,
            ev.ContentMeasured: self._on_content_measured,
            ev.SnapshotArrived: self._on_snapshot,
            ev.LogsFetched: self._on_logs_fetched,
            ev.LogRefreshTick: self._on_log_tick,
            ev.CommandOutputReady: self._on_command_output,
            ev.ExportFinished: self._on_export_finished,
            ev.CopyFinished: self._on_copy_finished,
            ev.ClearStatusMessage: self._on_clear_status,
        }

    def update(self, state: ControllerState, event: ev.Event) -> Transition:
        handler = self._handlers.get(type(event))
        if handler is None:
            logger.debug("Ignoring unknown event %r", event)
            return Transition(state)
        new_state = state.clone()
        effects: list[Effect] = []
        handler(new_state, event, effects)
        return Transition(new_state, effects)

    def initial_effects(self) -> list[Effect]:
        return [FetchSnapshot()]

    def check_invariants(self, state: ControllerState) -> None:
        """Raise ``SelectionBoundsError`` if ``state`` escaped its bounds."""
        state.assert_invariants(item_count(state), page_size(state.viewport.height))

    # ------------------------------------------------------------------
    # Queries used by the renderer
    # ------------------------------------------------------------------

    @staticmethod
    def action_items(state: ControllerState) -> tuple[ActionType, ...]:
        if state.view is ViewType.POD_DETAIL and state.detail.pod is not None:
            return POD_ACTIONS
        if state.view is ViewType.NODE_DETAIL and state.detail.node is not None:
            return NODE_ACTIONS
        return ()

    @staticmethod
    def tab_views(snapshot: ClusterSnapshot | None) -> list[ViewType]:
        views = list(PRIMARY_VIEW_ORDER[:BASE_TAB_VIEW_COUNT])
        if snapshot is not None and snapshot.has_volcano_queues():
            views.append(ViewType.QUEUES)
        if snapshot is not None and snapshot.has_super_pod_topology():
            views.append(ViewType.TOPOLOGY)
        return views

    @staticmethod
    def selected_job_pod(state: ControllerState) -> PodInfo | None:
        if state.view is ViewType.JOB_DETAIL:
            pods = displayed_job_pods(job_pods(state.snapshot, state.detail.job))
            index = state.selection.job_pod_index
        elif state.view is ViewType.VOLCANO_JOB_DETAIL:
            pods = displayed_job_pods(volcano_job_pods(state.snapshot, state.detail.volcano_job))
            index = state.selection.volcano_job_pod_index
        else:
            return None
        if 0 <= index < len(pods):
            return pods[index]
        return None

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _overlay_active(state: ControllerState) -> bool:
        modes = state.modes
        return (
            modes.filter
            or modes.search
            or modes.action_menu
            or modes.command_output
            or state.logs_mode
        )

    @staticmethod
    def _reset_selection(state: ControllerState) -> None:
        state.selection.selected_index = 0
        state.selection.scroll_offset = 0

    def _clamp(self, state: ControllerState) -> None:
        """Pull every index and offset back inside the current bounds."""
        sel = state.selection
        height = state.viewport.height
        count = item_count(state)
        size = page_size(height)
        max_scroll = max(0, count - size)

        if state.view in LINE_SCROLL_VIEWS:
            sel.selected_index = 0
            sel.scroll_offset = min(max(0, sel.scroll_offset), max_scroll)
        else:
            sel.selected_index = min(max(0, sel.selected_index), max(0, count - 1))
            offset = min(max(0, sel.scroll_offset), max_scroll)
            if sel.selected_index < offset:
                offset = sel.selected_index
            elif sel.selected_index >= offset + size:
                offset = sel.selected_index - size + 1
            sel.scroll_offset = min(offset, max_scroll)

        sel.detail_scroll_offset = max(0, sel.detail_scroll_offset)
        job_count = len(displayed_job_pods(job_pods(state.snapshot, state.detail.job)))
        sel.job_pod_index = min(max(0, sel.job_pod_index), max(0, job_count - 1))
        vc_count = len(displayed_job_pods(volcano_job_pods(state.snapshot, state.detail.volcano_job)))
        sel.volcano_job_pod_index = min(max(0, sel.volcano_job_pod_index), max(0, vc_count - 1))

        items = self.action_items(state)
        state.action_menu_index = min(max(0, state.action_menu_index), max(0, len(items) - 1))

        if state.command_output is not None:
            output_max = max(0, len(state.command_output.lines) - command_output_page_size(height))
            scroll = min(max(0, state.command_output.scroll), output_max)
            if scroll != state.command_output.scroll:
                state.command_output = _with_scroll(state.command_output, scroll)

        if state.log_session is not None:
            state.log_session = self.log_stream.clamp(state.log_session, height)

    def _post_status(self, state: ControllerState, text: str, ttl: float, effects: list[Effect]) -> None:
        state.message_counter += 1
        state.status_message = StatusMessage(text=text, token=state.message_counter)
        effects.append(ScheduleStatusClear(token=state.message_counter, delay=ttl))

    def _switch_view(self, state: ControllerState, view: ViewType) -> None:
        state.view = view
        self._reset_selection(state)
        self._clamp(state)

    # ------------------------------------------------------------------
    # View selection
    # ------------------------------------------------------------------

    def _on_select_view(self, state: ControllerState, event: ev.SelectView, effects: list[Effect]) -> None:
        if state.modes.detail or self._overlay_active(state):
            return
        view = VIEW_DIGITS.get(event.digit)
        if view is None:
            return
        snapshot = state.snapshot
        if view is ViewType.QUEUES and (snapshot is None or not snapshot.has_volcano_queues()):
            return
        if view is ViewType.TOPOLOGY and (snapshot is None or not snapshot.has_super_pod_topology()):
            return
        self._switch_view(state, view)

    def _on_tab_cycle(self, state: ControllerState, event: ev.TabCycle, effects: list[Effect]) -> None:
        if state.modes.detail or self._overlay_active(state):
            return
        views = self.tab_views(state.snapshot)
        position = views.index(state.view) if state.view in views else -1
        self._switch_view(state, views[(position + 1) % len(views)])

    # ------------------------------------------------------------------
    # Enter / Back
    # ------------------------------------------------------------------

    def _on_enter(self, state: ControllerState, event: ev.Enter, effects: list[Effect]) -> None:
        if state.modes.action_menu:
            items = self.action_items(state)
            state.modes.action_menu = False
            if 0 <= state.action_menu_index < len(items):
                self._execute_action(state, items[state.action_menu_index], effects)
            return
        if state.modes.filter:
            state.modes.filter = False
            return
        if state.modes.command_output or state.logs_mode:
            return
        if state.modes.search:
            # Confirms the search; the typed text stays applied.
            state.modes.search = False
            self._clamp(state)
            return
        if state.modes.detail:
            self._enter_job_pod(state)
            return
        self._enter_list_item(state)

    def _enter_job_pod(self, state: ControllerState) -> None:
        pod = self.selected_job_pod(state)
        if pod is None:
            return
        if state.view is ViewType.JOB_DETAIL:
            state.memory.from_job_detail = True
        elif state.view is ViewType.VOLCANO_JOB_DETAIL:
            state.memory.from_volcano_job_detail = True
        state.detail.pod = pod
        state.view = ViewType.POD_DETAIL
        state.selection.detail_scroll_offset = 0

    def _open_detail(self, state: ControllerState, view: ViewType, slot: str, entity: Any) -> None:
        sel = state.selection
        state.memory = NavigationMemory(
            list_selected_index=sel.selected_index,
            list_scroll_offset=sel.scroll_offset,
        )
        setattr(state.detail, slot, entity)
        state.view = view
        state.modes.detail = True
        sel.selected_index = 0
        sel.scroll_offset = 0
        sel.detail_scroll_offset = 0
        sel.job_pod_index = 0
        sel.volcano_job_pod_index = 0
        logger.debug("Opened %s", view.value)

    def _enter_list_item(self, state: ControllerState) -> None:
        index = state.selection.selected_index
        snapshot = state.snapshot
        if snapshot is None:
            return
        view = state.view

        if view is ViewType.WORKLOADS:
            resolved = resolve_workload(snapshot, index)
            if resolved is not None:
                section, entity = resolved
                self._open_detail(state, WORKLOAD_SECTION_DETAIL_VIEW[section], _WORKLOAD_SLOTS[section], entity)
            return

        if view is ViewType.STORAGE:
            entries = storage_items(snapshot)
            if 0 <= index < len(entries):
                section, entity = entries[index]
                if section is StorageSection.PV:
                    self._open_detail(state, ViewType.PV_DETAIL, "pv", entity)
                else:
                    self._open_detail(state, ViewType.PVC_DETAIL, "pvc", entity)
            return

        targets = {
            ViewType.NODES: (ViewType.NODE_DETAIL, "node"),
            ViewType.PODS: (ViewType.POD_DETAIL, "pod"),
            ViewType.EVENTS: (ViewType.EVENT_DETAIL, "event"),
            ViewType.QUEUES: (ViewType.QUEUE_DETAIL, "queue"),
            ViewType.TOPOLOGY: (ViewType.TOPOLOGY_DETAIL, "super_pod"),
        }
        if view not in targets:
            return
        items = view_items(state)
        if 0 <= index < len(items):
            detail_view, slot = targets[view]
            self._open_detail(state, detail_view, slot, items[index])

    def _on_back(self, state: ControllerState, event: ev.Back, effects: list[Effect]) -> None:
        modes = state.modes
        if modes.command_output:
            modes.command_output = False
            state.command_output = None
            return
        if state.log_session is not None:
            self._back_from_logs(state, state.log_session, effects)
            return
        if modes.action_menu:
            modes.action_menu = False
            return
        if modes.search:
            modes.search = False
            state.filters.search_text = ""
            self._reset_selection(state)
            self._clamp(state)
            return
        if modes.filter:
            modes.filter = False
            return
        if modes.detail:
            self._back_from_detail(state)

    def _back_from_logs(self, state: ControllerState, session: LogSession, effects: list[Effect]) -> None:
        if session.search_active:
            session = self.log_stream.exit_search(session)
            state.log_session = self.log_stream.clamp(session, state.viewport.height)
            if self.capabilities.supports_logs:
                effects.append(FetchLogs(session.pod_key, session.container, self.log_stream.tail_lines))
            return
        logger.info("Closing log stream for %s", session.pod_key)
        state.log_session = None
        state.logs_error = None
        effects.append(StopLogRefresh())

    def _back_from_detail(self, state: ControllerState) -> None:
        memory = state.memory
        state.logs_error = None
        if memory.from_job_detail and state.detail.job is not None:
            memory.from_job_detail = False
            state.detail.pod = None
            state.view = ViewType.JOB_DETAIL
            state.selection.detail_scroll_offset = 0
            self._clamp(state)
            return
        if memory.from_volcano_job_detail and state.detail.volcano_job is not None:
            memory.from_volcano_job_detail = False
            state.detail.pod = None
            state.view = ViewType.VOLCANO_JOB_DETAIL
            state.selection.detail_scroll_offset = 0
            self._clamp(state)
            return

        state.view = DETAIL_PARENT_VIEW.get(state.view, ViewType.OVERVIEW)
        state.modes.detail = False
        state.detail = DetailSelection()
        sel = state.selection
        sel.detail_scroll_offset = 0
        sel.job_pod_index = 0
        sel.volcano_job_pod_index = 0
        sel.selected_index = memory.list_selected_index
        sel.scroll_offset = memory.list_scroll_offset
        state.memory = NavigationMemory()
        self._clamp(state)

    # ------------------------------------------------------------------
    # Filter, search, sort
    # ------------------------------------------------------------------

    def _on_enter_filter(self, state: ControllerState, event: ev.EnterFilter, effects: list[Effect]) -> None:
        modes = state.modes
        if state.view is not ViewType.PODS or modes.detail or modes.filter or modes.search:
            return
        modes.filter = True

    def _on_clear_filter(self, state: ControllerState, event: ev.ClearFilter, effects: list[Effect]) -> None:
        if state.modes.detail or state.logs_mode:
            return
        filters = state.filters
        filters.namespace = ""
        filters.status = ""
        filters.role = ""
        filters.event_type = ""
        filters.search_text = ""
        state.modes.search = False
        self._reset_selection(state)
        self._clamp(state)

    def _cycle_namespace(self, state: ControllerState, step: int) -> None:
        snapshot = state.snapshot
        options = [ALL_NAMESPACES_LABEL] + (snapshot.namespaces() if snapshot is not None else [])
        current = state.filters.namespace or ALL_NAMESPACES_LABEL
        position = options.index(current) if current in options else 0
        chosen = options[(position + step) % len(options)]
        state.filters.namespace = "" if chosen == ALL_NAMESPACES_LABEL else chosen
        self._reset_selection(state)
        self._clamp(state)

    def _on_enter_search(self, state: ControllerState, event: ev.EnterSearch, effects: list[Effect]) -> None:
        if state.log_session is not None:
            if not state.log_session.search_active:
                state.log_session = self.log_stream.enter_search(state.log_session)
            return
        modes = state.modes
        if modes.detail or modes.filter or modes.search or modes.action_menu or modes.command_output:
            return
        modes.search = True
        state.filters.search_text = ""
        self._reset_selection(state)
        self._clamp(state)

    def _on_sort(self, state: ControllerState, event: ev.Sort, effects: list[Effect]) -> None:
        if state.modes.detail or state.modes.filter:
            return
        if state.view is ViewType.NODES:
            state.sort.nodes = next_sort_key(NODE_SORT_CYCLE, state.sort.nodes)
        elif state.view is ViewType.PODS:
            state.sort.pods = next_sort_key(POD_SORT_CYCLE, state.sort.pods)
        else:
            return
        self._reset_selection(state)
        self._clamp(state)

    # ------------------------------------------------------------------
    # Text entry
    # ------------------------------------------------------------------

    @staticmethod
    def _accepts_list_char(char: str) -> bool:
        return len(char) == 1 and ((char.isascii() and char.isalnum()) or char in LIST_SEARCH_EXTRA_CHARS)

    def _append_text(self, state: ControllerState, char: str) -> None:
        session = state.log_session
        if session is not None:
            if session.search_active:
                state.log_session = self.log_stream.search_input(session, char)
            return
        if not state.modes.search:
            return
        state.filters.search_text += char
        self._reset_selection(state)
        self._clamp(state)

    def _on_text_input(self, state: ControllerState, event: ev.TextInput, effects: list[Effect]) -> None:
        if state.log_session is None and not self._accepts_list_char(event.char):
            return
        self._append_text(state, event.char)

    def _on_space(self, state: ControllerState, event: ev.Space, effects: list[Effect]) -> None:
        self._append_text(state, " ")

    def _on_backspace(self, state: ControllerState, event: ev.Backspace, effects: list[Effect]) -> None:
        session = state.log_session
        if session is not None:
            if session.search_active:
                state.log_session = self.log_stream.search_backspace(session)
            return
        if not state.modes.search or not state.filters.search_text:
            return
        state.filters.search_text = state.filters.search_text[:-1]
        self._reset_selection(state)
        self._clamp(state)

    # ------------------------------------------------------------------
    # Logs
    # ------------------------------------------------------------------

    def _log_target(self, state: ControllerState) -> PodInfo | None:
        if state.view is ViewType.POD_DETAIL:
            return state.detail.pod
        if state.view is ViewType.JOB_DETAIL:
            return self.selected_job_pod(state)
        return None

    def _on_enter_logs(self, state: ControllerState, event: ev.EnterLogs, effects: list[Effect]) -> None:
        if not state.modes.detail or self._overlay_active(state):
            return
        pod = self._log_target(state)
        if pod is not None:
            self._start_logs(state, pod, effects)

    def _start_logs(self, state: ControllerState, pod: PodInfo, effects: list[Effect]) -> None:
        if not pod.container_states:
            state.logs_error = MSG_NO_CONTAINERS
            return
        state.logs_error = None
        pod_key = pod.entity_key()
        container = pod.container_states[0].name
        if not self.capabilities.supports_logs:
            state.log_session = self.log_stream.unsupported(pod_key, container, MSG_LOGS_UNSUPPORTED)
            return
        state.log_session = self.log_stream.open(pod_key, container)
        effects.append(FetchLogs(pod_key, container, self.log_stream.tail_lines))

    def _on_logs_fetched(self, state: ControllerState, event: ev.LogsFetched, effects: list[Effect]) -> None:
        session = state.log_session
        if session is None or not LogStream.is_current(session, (event.pod_key, event.container)):
            logger.debug("Dropping stale log result for %s/%s", event.pod_key, event.container)
            return
        session = self.log_stream.apply_result(session, event.text, event.error, state.viewport.height)
        if not session.auto_refresh:
            session = self.log_stream.start_refresh(session)
            effects.append(StartLogRefresh(session.pod_key, session.container, self.log_stream.refresh_interval))
        state.log_session = session

    def _on_log_tick(self, state: ControllerState, event: ev.LogRefreshTick, effects: list[Effect]) -> None:
        session = state.log_session
        if session is None or not LogStream.is_current(session, (event.pod_key, event.container)):
            return
        if self.log_stream.should_fetch_on_tick(session):
            effects.append(FetchLogs(session.pod_key, session.container, self.log_stream.tail_lines))

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _on_enter_actions(self, state: ControllerState, event: ev.EnterActions, effects: list[Effect]) -> None:
        if not state.modes.detail or self._overlay_active(state):
            return
        if not self.action_items(state):
            return
        state.modes.action_menu = True
        state.action_menu_index = 0

    def _action_target(self, state: ControllerState) -> tuple[ResourceKind, PodInfo | NodeInfo] | None:
        if state.view is ViewType.POD_DETAIL and state.detail.pod is not None:
            return ResourceKind.POD, state.detail.pod
        if state.view is ViewType.NODE_DETAIL and state.detail.node is not None:
            return ResourceKind.NODE, state.detail.node
        return None

    def _execute_action(self, state: ControllerState, action: ActionType, effects: list[Effect]) -> None:
        target = self._action_target(state)
        if target is None:
            return
        kind, entity = target
        logger.debug("Executing %s on %s %s", action.value, kind.value, entity.name)

        if action is ActionType.VIEW_LOGS and isinstance(entity, PodInfo):
            self._start_logs(state, entity, effects)
        elif action in (ActionType.DESCRIBE, ActionType.GET_YAML):
            self._run_command(state, action, kind, entity, effects)
        elif action is ActionType.COPY_NAME:
            effects.append(CopyToClipboard(entity.name))
        elif action is ActionType.COPY_NAMESPACE_NAME and isinstance(entity, PodInfo):
            effects.append(CopyToClipboard(entity.entity_key()))
        elif action is ActionType.SHOW_EVENTS:
            self._show_events(state, entity.name)

    def _run_command(
        self,
        state: ControllerState,
        action: ActionType,
        kind: ResourceKind,
        entity: PodInfo | NodeInfo,
        effects: list[Effect],
    ) -> None:
        describe = action is ActionType.DESCRIBE
        if not self.capabilities.supports_inspect:
            message = MSG_DESCRIBE_UNSUPPORTED if describe else MSG_YAML_UNSUPPORTED
            state.command_output = CommandOutput(title=TITLE_ERROR, content=message, error="unsupported operation")
            state.modes.command_output = True
            return
        if isinstance(entity, PodInfo):
            template = TITLE_DESCRIBE_POD if describe else TITLE_YAML_POD
            title = template.format(namespace=entity.namespace, name=entity.name)
        else:
            template = TITLE_DESCRIBE_NODE if describe else TITLE_YAML_NODE
            title = template.format(name=entity.name)
        effects.append(RunCommand(action=action, kind=kind, key=entity.entity_key(), title=title))

    def _show_events(self, state: ControllerState, name: str) -> None:
        state.view = ViewType.EVENTS
        state.modes.detail = False
        state.detail = DetailSelection()
        state.memory = NavigationMemory()
        state.logs_error = None
        state.selection.detail_scroll_offset = 0
        state.selection.job_pod_index = 0
        state.selection.volcano_job_pod_index = 0
        state.filters.search_text = name
        self._reset_selection(state)
        self._clamp(state)

    def _on_command_output(self, state: ControllerState, event: ev.CommandOutputReady, effects: list[Effect]) -> None:
        state.command_output = CommandOutput(title=event.title, content=event.content, error=event.error)
        state.modes.command_output = True
        state.modes.action_menu = False

    # ------------------------------------------------------------------
    # Export and clipboard
    # ------------------------------------------------------------------

    def _on_enter_export(self, state: ControllerState, event: ev.EnterExport, effects: list[Effect]) -> None:
        modes = state.modes
        if state.view not in EXPORTABLE_VIEWS or modes.detail or modes.filter or modes.search:
            return
        if state.export_in_progress:
            return
        state.export_in_progress = True
        effects.append(ExportView(view=state.view, rows=export_rows(state)))

    def _on_export_finished(self, state: ControllerState, event: ev.ExportFinished, effects: list[Effect]) -> None:
        state.export_in_progress = False
        if event.error is not None:
            text = MSG_EXPORT_FAILED.format(error=event.error)
        else:
            text = MSG_EXPORT_SUCCESS.format(count=event.count, path=event.path)
        self._post_status(state, text, EXPORT_MESSAGE_TTL, effects)

    def _on_copy_finished(self, state: ControllerState, event: ev.CopyFinished, effects: list[Effect]) -> None:
        if event.error is not None:
            text = MSG_COPY_FAILED.format(error=event.error)
        else:
            text = MSG_COPY_SUCCESS.format(text=event.text)
        self._post_status(state, text, COPY_MESSAGE_TTL, effects)

    def _on_clear_status(self, state: ControllerState, event: ev.ClearStatusMessage, effects: list[Effect]) -> None:
        if state.status_message is not None and state.status_message.token == event.token:
            state.status_message = None

    # ------------------------------------------------------------------
    # Navigation keys
    # ------------------------------------------------------------------

    def _move(self, state: ControllerState, step: int) -> None:
        modes = state.modes
        sel = state.selection
        height = state.viewport.height

        if modes.action_menu:
            state.action_menu_index += step
        elif modes.filter:
            self._cycle_namespace(state, step)
            return
        elif modes.command_output and state.command_output is not None:
            state.command_output = _with_scroll(state.command_output, state.command_output.scroll + step)
        elif state.log_session is not None:
            session = state.log_session
            if step < 0:
                state.log_session = self.log_stream.scroll_up(session)
            else:
                state.log_session = self.log_stream.scroll_down(session, height)
        elif state.view is ViewType.JOB_DETAIL:
            sel.job_pod_index += step
        elif state.view is ViewType.VOLCANO_JOB_DETAIL:
            sel.volcano_job_pod_index += step
        elif modes.detail:
            sel.detail_scroll_offset += step
        elif state.view in LINE_SCROLL_VIEWS:
            sel.scroll_offset += step
        else:
            sel.selected_index += step
        self._clamp(state)

    def _on_up(self, state: ControllerState, event: ev.Up, effects: list[Effect]) -> None:
        self._move(state, -1)

    def _on_down(self, state: ControllerState, event: ev.Down, effects: list[Effect]) -> None:
        self._move(state, 1)

    def _page(self, state: ControllerState, direction: int) -> None:
        modes = state.modes
        sel = state.selection
        height = state.viewport.height

        if modes.action_menu or modes.filter:
            return
        if modes.command_output and state.command_output is not None:
            step = command_output_page_size(height) * direction
            state.command_output = _with_scroll(state.command_output, state.command_output.scroll + step)
        elif state.log_session is not None:
            session = state.log_session
            if direction < 0:
                state.log_session = self.log_stream.page_up(session, height)
            else:
                state.log_session = self.log_stream.page_down(session, height)
        elif modes.detail:
            sel.detail_scroll_offset += detail_page_size(height) * direction
        elif state.view in LINE_SCROLL_VIEWS:
            sel.scroll_offset += page_size(height) * direction
        else:
            size = page_size(height)
            sel.selected_index += size * direction
            sel.scroll_offset += size * direction
        self._clamp(state)

    def _on_page_up(self, state: ControllerState, event: ev.PageUp, effects: list[Effect]) -> None:
        self._page(state, -1)

    def _on_page_down(self, state: ControllerState, event: ev.PageDown, effects: list[Effect]) -> None:
        self._page(state, 1)

    # ------------------------------------------------------------------
    # Viewport and lifecycle
    # ------------------------------------------------------------------

    def _on_resize(self, state: ControllerState, event: ev.Resize, effects: list[Effect]) -> None:
        state.viewport = Viewport(width=max(1, event.width), height=max(1, event.height))
        self._clamp(state)

    def _on_content_measured(self, state: ControllerState, event: ev.ContentMeasured, effects: list[Effect]) -> None:
        if event.view is not ViewType.OVERVIEW:
            return
        state.content_lines = max(0, event.lines)
        self._clamp(state)

    def _on_refresh(self, state: ControllerState, event: ev.Refresh, effects: list[Effect]) -> None:
        session = state.log_session
        if session is not None:
            if self.capabilities.supports_logs:
                effects.append(FetchLogs(session.pod_key, session.container, self.log_stream.tail_lines))
            return
        effects.append(FetchSnapshot(force=True))

    def _on_quit(self, state: ControllerState, event: ev.Quit, effects: list[Effect]) -> None:
        state.quitting = True
        effects.append(QuitApp())

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def _on_snapshot(self, state: ControllerState, event: ev.SnapshotArrived, effects: list[Effect]) -> None:
        if event.error is not None or event.snapshot is None:
            state.snapshot_error = event.error or "empty snapshot"
            logger.warning("Snapshot refresh failed: %s", state.snapshot_error)
            return
        snapshot = event.snapshot
        state.snapshot = snapshot
        state.snapshot_error = None
        state.refresh_count += 1
        if self.history.ingest(snapshot):
            state.last_update = self.history.last_accepted
        if state.modes.detail:
            _refresh_detail(state.detail, snapshot)
        self._clamp(state)


def _with_scroll(output: CommandOutput, scroll: int) -> CommandOutput:
    return CommandOutput(title=output.title, content=output.content, error=output.error, scroll=max(0, scroll))


def _refresh_detail(detail: DetailSelection, snapshot: ClusterSnapshot) -> None:
    """Swap each captured entity for its counterpart in ``snapshot``.

    Entities that disappeared keep their last known value.
    """
    for slot, source in _SLOT_SOURCES.items():
        current = getattr(detail, slot)
        if current is None:
            continue
        key = current.entity_key()
        for candidate in getattr(snapshot, source):
            if candidate.entity_key() == key:
                setattr(detail, slot, candidate)
                break
    if detail.super_pod is not None:
        for group in super_pods(snapshot):
            if group.id == detail.super_pod.id:
                detail.super_pod = group
                break
