"""Mode tests for the view controller: filter, search, sort, logs, actions, export."""

from __future__ import annotations

from pathlib import Path

import pytest

from kubeconsole.constants.enums import ActionType, LogState, ResourceKind, SortField, SortOrder, ViewType
from kubeconsole.constants.values import MSG_DESCRIBE_UNSUPPORTED, MSG_LOGS_UNSUPPORTED, MSG_NO_CONTAINERS
from kubeconsole.controllers.base.capabilities import ProviderCapabilities
from kubeconsole.controllers.logs.log_stream import LogStream
from kubeconsole.controllers.metrics.history import MetricsHistory
from kubeconsole.controllers.view import ViewController, view_items
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
from kubeconsole.models.core.cluster_snapshot import ClusterSnapshot
from kubeconsole.models.state.controller_state import ControllerState, SortKey
from kubeconsole.providers.file_provider import FileSnapshotProvider

COREDNS = "kube-system/coredns-1"


def run(
    controller: ViewController, state: ControllerState, *events: ev.Event
) -> tuple[ControllerState, list[Effect]]:
    effects: list[Effect] = []
    for event in events:
        transition = controller.update(state, event)
        state = transition.state
        effects.extend(transition.effects)
    return state, effects


def names(state: ControllerState) -> list[str]:
    return [item.name for item in view_items(state)]


@pytest.fixture
def controller() -> ViewController:
    provider = FileSnapshotProvider("unused.yaml")
    return ViewController(MetricsHistory(), LogStream(), ProviderCapabilities.probe(provider))


@pytest.fixture
def bare_controller() -> ViewController:
    """A controller whose provider offers neither logs nor describe."""
    return ViewController(MetricsHistory(), LogStream(), ProviderCapabilities())


@pytest.fixture
def loaded(controller: ViewController, cluster_snapshot: ClusterSnapshot) -> ControllerState:
    state, _ = run(controller, ControllerState(), ev.SnapshotArrived(cluster_snapshot))
    return state


@pytest.fixture
def coredns_detail(controller: ViewController, loaded: ControllerState) -> ControllerState:
    state, _ = run(controller, loaded, ev.SelectView("3"), ev.Down(), ev.Down(), ev.Enter())
    assert state.detail.pod.name == "coredns-1"
    return state


# =============================================================================
# Filter and search
# =============================================================================


@pytest.mark.unit
@pytest.mark.fast
class TestNamespaceFilter:
    """Tests for the pods namespace filter."""

    def test_cycle_and_confirm(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("3"), ev.EnterFilter())
        assert state.modes.filter is True
        state, _ = run(controller, state, ev.Down())
        assert state.filters.namespace == "batch"
        assert names(state) == ["train-abc", "train-def"]
        state, _ = run(controller, state, ev.Enter())
        assert state.modes.filter is False
        assert state.filters.namespace == "batch"

    def test_up_wraps_to_last_namespace(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("3"), ev.EnterFilter(), ev.Up())
        assert state.filters.namespace == "kube-system"
        state, _ = run(controller, state, ev.Down())
        assert state.filters.namespace == ""

    def test_only_available_in_pods(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("2"), ev.EnterFilter())
        assert state.modes.filter is False

    def test_clear_filter_resets_everything(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("3"), ev.EnterFilter(), ev.Down(), ev.Enter())
        state, _ = run(controller, state, ev.EnterSearch(), ev.TextInput("t"), ev.ClearFilter())
        assert state.filters.namespace == ""
        assert state.filters.search_text == ""
        assert state.modes.search is False
        assert len(names(state)) == 5


@pytest.mark.unit
@pytest.mark.fast
class TestListSearch:
    """Tests for list search text entry."""

    def test_typing_narrows_the_list(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("3"), ev.Down(), ev.Down(), ev.EnterSearch())
        assert state.modes.search is True
        assert state.selection.selected_index == 0
        state, _ = run(controller, state, ev.TextInput("t"))
        assert names(state) == ["train-abc", "train-def"]

    def test_rejected_characters(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("3"), ev.EnterSearch())
        state, _ = run(controller, state, ev.TextInput("a"), ev.TextInput("!"), ev.TextInput("-"), ev.TextInput("é"))
        assert state.filters.search_text == "a-"

    def test_backspace(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("3"), ev.EnterSearch(), ev.TextInput("a"), ev.Backspace())
        assert state.filters.search_text == ""
        state, _ = run(controller, state, ev.Backspace())
        assert state.filters.search_text == ""

    def test_enter_keeps_the_text(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("3"), ev.EnterSearch(), ev.TextInput("t"), ev.Enter())
        assert state.modes.search is False
        assert state.filters.search_text == "t"
        assert state.view is ViewType.PODS

    def test_back_discards_the_text(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("3"), ev.EnterSearch(), ev.TextInput("t"), ev.Back())
        assert state.modes.search is False
        assert state.filters.search_text == ""

    def test_search_blocked_in_detail(self, controller: ViewController, coredns_detail: ControllerState) -> None:
        state, _ = run(controller, coredns_detail, ev.EnterSearch())
        assert state.modes.search is False

    def test_event_search_matches_reason(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("7"), ev.EnterSearch(), *[ev.TextInput(c) for c in "mount"])
        assert [event.reason for event in view_items(state)] == ["FailedMount"]


@pytest.mark.unit
@pytest.mark.fast
class TestSort:
    """Tests for sort cycling."""

    def test_node_cycle(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("2"), ev.Sort())
        assert state.sort.nodes == SortKey(SortField.CPU, SortOrder.DESC)
        assert names(state) == ["node-b", "node-a", "node-c"]
        state, _ = run(controller, state, ev.Sort())
        assert names(state) == ["node-c", "node-a", "node-b"]
        state, _ = run(controller, state, ev.Sort())
        assert names(state) == ["node-c", "node-a", "node-b"]
        state, _ = run(controller, state, ev.Sort())
        assert state.sort.nodes == SortKey(SortField.NAME, SortOrder.ASC)

    def test_pod_cycle(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("3"), ev.Sort())
        assert names(state) == ["train-abc", "train-def", "api-0", "api-1", "coredns-1"]
        state, _ = run(controller, state, ev.Sort())
        assert names(state) == ["train-abc", "api-1", "coredns-1", "api-0", "train-def"]
        state, _ = run(controller, state, ev.Sort())
        assert state.sort.pods == SortKey(SortField.NAME, SortOrder.ASC)

    def test_sort_resets_selection(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("3"), ev.Down(), ev.Sort())
        assert state.selection.selected_index == 0

    def test_sort_ignored_elsewhere(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("7"), ev.Sort())
        assert state.sort.nodes == SortKey(SortField.NAME, SortOrder.ASC)
        assert state.sort.pods == SortKey(SortField.NAME, SortOrder.ASC)


# =============================================================================
# Logs
# =============================================================================


@pytest.mark.unit
@pytest.mark.fast
class TestLogs:
    """Tests for the log session lifecycle."""

    def test_open_fetch_and_refresh(self, controller: ViewController, coredns_detail: ControllerState) -> None:
        state, effects = run(controller, coredns_detail, ev.EnterLogs())
        assert effects == [FetchLogs(COREDNS, "coredns", 200)]
        assert state.logs_mode is True
        assert state.log_session.state is LogState.LOADING

        state, effects = run(controller, state, ev.LogsFetched(COREDNS, "coredns", "one\ntwo"))
        assert effects == [StartLogRefresh(COREDNS, "coredns", 2.0)]
        assert state.log_session.lines == ("one", "two")

        state, effects = run(controller, state, ev.LogsFetched(COREDNS, "coredns", "one\ntwo\nthree"))
        assert effects == []

        state, effects = run(controller, state, ev.LogRefreshTick(COREDNS, "coredns"))
        assert effects == [FetchLogs(COREDNS, "coredns", 200)]

    def test_stale_results_are_dropped(self, controller: ViewController, coredns_detail: ControllerState) -> None:
        state, _ = run(controller, coredns_detail, ev.EnterLogs())
        state, effects = run(controller, state, ev.LogsFetched("default/api-0", "api", "zzz"))
        assert effects == []
        assert state.log_session.received is False
        state, effects = run(controller, state, ev.LogRefreshTick("default/api-0", "api"))
        assert effects == []

    def test_fetch_error(self, controller: ViewController, coredns_detail: ControllerState) -> None:
        state, _ = run(controller, coredns_detail, ev.EnterLogs(), ev.LogsFetched(COREDNS, "coredns", error="boom"))
        assert state.log_session.state is LogState.ERROR
        assert state.log_session.last_error == "boom"

    def test_search_pauses_ticks(self, controller: ViewController, coredns_detail: ControllerState) -> None:
        state, _ = run(controller, coredns_detail, ev.EnterLogs(), ev.LogsFetched(COREDNS, "coredns", "a\nb"))
        state, _ = run(controller, state, ev.EnterSearch(), ev.TextInput("b"))
        assert state.logs_search_mode is True
        assert state.log_session.search_term == "b"
        _, effects = run(controller, state, ev.LogRefreshTick(COREDNS, "coredns"))
        assert effects == []

    def test_back_unwinds_search_then_logs(self, controller: ViewController, coredns_detail: ControllerState) -> None:
        state, _ = run(controller, coredns_detail, ev.EnterLogs(), ev.LogsFetched(COREDNS, "coredns", "a"))
        state, _ = run(controller, state, ev.EnterSearch())
        state, effects = run(controller, state, ev.Back())
        assert state.logs_search_mode is False
        assert state.logs_mode is True
        assert effects == [FetchLogs(COREDNS, "coredns", 200)]

        state, effects = run(controller, state, ev.Back())
        assert state.logs_mode is False
        assert state.view is ViewType.POD_DETAIL
        assert effects == [StopLogRefresh()]

    def test_refresh_targets_logs(self, controller: ViewController, coredns_detail: ControllerState) -> None:
        state, effects = run(controller, coredns_detail, ev.Refresh())
        assert effects == [FetchSnapshot(force=True)]
        state, _ = run(controller, state, ev.EnterLogs())
        _, effects = run(controller, state, ev.Refresh())
        assert effects == [FetchLogs(COREDNS, "coredns", 200)]

    def test_pod_without_containers(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("3"), ev.Down(), ev.Enter())
        assert state.detail.pod.name == "api-1"
        state, effects = run(controller, state, ev.EnterLogs())
        assert effects == []
        assert state.logs_mode is False
        assert state.logs_error == MSG_NO_CONTAINERS
        state, _ = run(controller, state, ev.Back())
        assert state.logs_error is None

    def test_unsupported_provider(self, bare_controller: ViewController, cluster_snapshot: ClusterSnapshot) -> None:
        state, _ = run(
            bare_controller,
            ControllerState(),
            ev.SnapshotArrived(cluster_snapshot),
            ev.SelectView("3"),
            ev.Enter(),
        )
        state, effects = run(bare_controller, state, ev.EnterLogs())
        assert effects == []
        assert state.log_session.state is LogState.ERROR
        assert state.log_session.last_error == MSG_LOGS_UNSUPPORTED
        _, effects = run(bare_controller, state, ev.Refresh())
        assert effects == []

    def test_job_detail_logs_follow_selected_pod(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("4"), ev.Down(), ev.Enter(), ev.Down())
        _, effects = run(controller, state, ev.EnterLogs())
        assert effects == [FetchLogs("batch/train-def", "trainer", 200)]

    def test_logs_require_detail(self, controller: ViewController, loaded: ControllerState) -> None:
        state, effects = run(controller, loaded, ev.SelectView("3"), ev.EnterLogs())
        assert effects == []
        assert state.logs_mode is False


# =============================================================================
# Actions
# =============================================================================


@pytest.mark.unit
@pytest.mark.fast
class TestActions:
    """Tests for the action menu."""

    def _pick(self, controller: ViewController, state: ControllerState, index: int):
        return run(controller, state, ev.EnterActions(), *[ev.Down()] * index, ev.Enter())

    def test_menu_opens_at_top(self, controller: ViewController, coredns_detail: ControllerState) -> None:
        state, _ = run(controller, coredns_detail, ev.EnterActions())
        assert state.modes.action_menu is True
        assert state.action_menu_index == 0
        state, _ = run(controller, state, *[ev.Down()] * 10)
        assert state.action_menu_index == 5
        state, _ = run(controller, state, ev.Back())
        assert state.modes.action_menu is False
        assert state.view is ViewType.POD_DETAIL

    def test_menu_needs_pod_or_node(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("7"), ev.Enter(), ev.EnterActions())
        assert state.modes.action_menu is False

    def test_view_logs(self, controller: ViewController, coredns_detail: ControllerState) -> None:
        state, effects = self._pick(controller, coredns_detail, 0)
        assert state.modes.action_menu is False
        assert effects == [FetchLogs(COREDNS, "coredns", 200)]

    def test_describe_and_yaml(self, controller: ViewController, coredns_detail: ControllerState) -> None:
        _, effects = self._pick(controller, coredns_detail, 1)
        assert effects == [RunCommand(ActionType.DESCRIBE, ResourceKind.POD, COREDNS, f"Describe Pod: {COREDNS}")]
        _, effects = self._pick(controller, coredns_detail, 2)
        assert effects == [RunCommand(ActionType.GET_YAML, ResourceKind.POD, COREDNS, f"YAML: {COREDNS}")]

    def test_node_describe(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("2"), ev.Enter())
        _, effects = self._pick(controller, state, 0)
        assert effects == [RunCommand(ActionType.DESCRIBE, ResourceKind.NODE, "node-a", "Describe Node: node-a")]

    def test_copy_actions(self, controller: ViewController, coredns_detail: ControllerState) -> None:
        _, effects = self._pick(controller, coredns_detail, 3)
        assert effects == [CopyToClipboard("coredns-1")]
        _, effects = self._pick(controller, coredns_detail, 4)
        assert effects == [CopyToClipboard(COREDNS)]

    def test_show_events(self, controller: ViewController, coredns_detail: ControllerState) -> None:
        state, effects = self._pick(controller, coredns_detail, 5)
        assert effects == []
        assert state.view is ViewType.EVENTS
        assert state.modes.detail is False
        assert state.filters.search_text == "coredns-1"
        assert [event.reason for event in view_items(state)] == ["FailedMount"]

    def test_unsupported_describe(self, bare_controller: ViewController, cluster_snapshot: ClusterSnapshot) -> None:
        state, _ = run(
            bare_controller,
            ControllerState(),
            ev.SnapshotArrived(cluster_snapshot),
            ev.SelectView("3"),
            ev.Enter(),
        )
        state, effects = self._pick(bare_controller, state, 1)
        assert effects == []
        assert state.modes.command_output is True
        assert state.command_output.title == "Error"
        assert state.command_output.content == MSG_DESCRIBE_UNSUPPORTED

    def test_command_output_scroll_and_close(
        self, controller: ViewController, coredns_detail: ControllerState
    ) -> None:
        content = "\n".join(f"row {i}" for i in range(100))
        state, _ = run(controller, coredns_detail, ev.CommandOutputReady("Describe Pod", content))
        assert state.modes.command_output is True
        state, _ = run(controller, state, ev.PageDown())
        assert state.command_output.scroll == 34
        state, _ = run(controller, state, ev.PageDown(), ev.Down())
        assert state.command_output.scroll == 66
        state, _ = run(controller, state, ev.Back())
        assert state.modes.command_output is False
        assert state.command_output is None
        assert state.view is ViewType.POD_DETAIL


# =============================================================================
# Export and status messages
# =============================================================================


@pytest.mark.unit
@pytest.mark.fast
class TestExport:
    """Tests for export requests and their status messages."""

    def test_export_pods(self, controller: ViewController, loaded: ControllerState) -> None:
        state, effects = run(controller, loaded, ev.SelectView("3"), ev.EnterExport())
        assert state.export_in_progress is True
        assert len(effects) == 1
        export = effects[0]
        assert isinstance(export, ExportView)
        assert export.view is ViewType.PODS
        assert [row["name"] for row in export.rows][:2] == ["api-0", "api-1"]

        _, again = run(controller, state, ev.EnterExport())
        assert again == []

    def test_export_finished(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SelectView("3"), ev.EnterExport())
        state, effects = run(controller, state, ev.ExportFinished(5, Path("exports/pods.csv")))
        assert state.export_in_progress is False
        assert state.status_message.text == f"Exported 5 items to: {Path('exports/pods.csv')}"
        assert effects == [ScheduleStatusClear(token=1, delay=3.0)]

    def test_export_failure_message(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.ExportFinished(error="disk full"))
        assert state.status_message.text == "Export failed: disk full"

    def test_export_not_offered_everywhere(self, controller: ViewController, loaded: ControllerState) -> None:
        _, effects = run(controller, loaded, ev.EnterExport())
        assert effects == []
        _, effects = run(controller, loaded, ev.SelectView("3"), ev.EnterSearch(), ev.EnterExport())
        assert effects == []

    def test_status_tokens(self, controller: ViewController, loaded: ControllerState) -> None:
        state, effects = run(controller, loaded, ev.CopyFinished("abc"), ev.CopyFinished("def"))
        assert effects == [ScheduleStatusClear(1, 2.0), ScheduleStatusClear(2, 2.0)]
        state, _ = run(controller, state, ev.ClearStatusMessage(1))
        assert state.status_message.text == "Copied: def"
        state, _ = run(controller, state, ev.ClearStatusMessage(2))
        assert state.status_message is None

    def test_copy_failure(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.CopyFinished("x", error="no clipboard"))
        assert state.status_message.text == "Copy failed: no clipboard"


# =============================================================================
# Snapshots and lifecycle
# =============================================================================


@pytest.mark.unit
@pytest.mark.fast
class TestSnapshots:
    """Tests for snapshot arrival and errors."""

    def test_first_snapshot(self, loaded: ControllerState, cluster_snapshot: ClusterSnapshot) -> None:
        assert loaded.snapshot is cluster_snapshot
        assert loaded.refresh_count == 1
        assert loaded.last_update == cluster_snapshot.summary.last_refresh_time

    def test_error_keeps_previous_snapshot(self, controller: ViewController, loaded: ControllerState) -> None:
        state, _ = run(controller, loaded, ev.SnapshotArrived(None, error="timeout"))
        assert state.snapshot is loaded.snapshot
        assert state.snapshot_error == "timeout"
        assert state.refresh_count == 1

    def test_success_clears_error(
        self, controller: ViewController, loaded: ControllerState, cluster_snapshot: ClusterSnapshot
    ) -> None:
        state, _ = run(controller, loaded, ev.SnapshotArrived(None), ev.SnapshotArrived(cluster_snapshot))
        assert state.snapshot_error is None
        assert state.refresh_count == 2

    def test_repeated_snapshot_is_recorded_once(
        self, controller: ViewController, loaded: ControllerState, cluster_snapshot: ClusterSnapshot
    ) -> None:
        run(controller, loaded, ev.SnapshotArrived(cluster_snapshot))
        assert len(controller.history) == 1

    def test_open_detail_follows_new_snapshot(
        self, controller: ViewController, loaded: ControllerState, cluster_snapshot: ClusterSnapshot
    ) -> None:
        state, _ = run(controller, loaded, ev.SelectView("3"), ev.Enter())
        updated = cluster_snapshot.model_copy(deep=True)
        updated.pods[0].restart_count = 9
        state, _ = run(controller, state, ev.SnapshotArrived(updated))
        assert state.detail.pod.name == "api-0"
        assert state.detail.pod.restart_count == 9

    def test_quit(self, controller: ViewController, loaded: ControllerState) -> None:
        state, effects = run(controller, loaded, ev.Quit())
        assert state.quitting is True
        assert effects == [QuitApp()]
