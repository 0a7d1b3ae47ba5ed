"""Main application class for the kubeconsole TUI."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from textual.app import App
from textual.binding import Binding
from textual.events import Resize as ResizeEvent

from kubeconsole.constants import APP_TITLE
from kubeconsole.constants.enums import ActionType, ViewType
from kubeconsole.constants.limits import BASE_TAB_VIEW_COUNT
from kubeconsole.constants.values import (
    MSG_DESCRIBE_UNSUPPORTED,
    MSG_LOGS_UNSUPPORTED,
    MSG_YAML_UNSUPPORTED,
    PRIMARY_VIEW_ORDER,
    TITLE_DESCRIBE_ERROR,
    TITLE_YAML_ERROR,
)
from kubeconsole.controllers import (
    DataProvider,
    LogSource,
    LogStream,
    MetricsHistory,
    ProviderCapabilities,
    ResourceInspector,
    UnsupportedOperationError,
)
from kubeconsole.controllers.base.errors import DataFetchError
from kubeconsole.controllers.view import ViewController
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
from kubeconsole.keyboard.app import APP_BINDINGS
from kubeconsole.keyboard.translator import command_event
from kubeconsole.models.core.cluster_snapshot import ClusterSnapshot
from kubeconsole.models.state.config_manager import AppSettings, ConfigLoadError, ConfigManager
from kubeconsole.models.state.controller_state import ControllerState
from kubeconsole.screens.dashboard import (
    CommandOutputLoaded,
    DashboardPresenter,
    DashboardScreen,
    ExportCompleted,
    LogsLoaded,
    SnapshotLoaded,
)
from kubeconsole.utils.exporter import export_rows
from kubeconsole.utils.task_supervisor import TaskSupervisor

logger = logging.getLogger(__name__)

_POLL_TASK = "snapshot-poll"
_LOG_TASK = "log-refresh"


def initial_view(settings: AppSettings) -> ViewType:
    """Configured start view, limited to the always-available primary views."""
    view = ViewType(settings.ui.default_view)
    return view if view in PRIMARY_VIEW_ORDER[:BASE_TAB_VIEW_COUNT] else ViewType.OVERVIEW


class KubeConsoleApp(App[None]):
    """Terminal dashboard over one data provider."""

    TITLE = APP_TITLE
    BINDINGS: list[Binding] = APP_BINDINGS

    settings: AppSettings
    state: ControllerState

    def __init__(
        self,
        provider: DataProvider,
        settings: AppSettings | None = None,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.settings = settings if settings is not None else self._load_settings()
        self.provider = provider
        self.capabilities = ProviderCapabilities.probe(provider)
        self.history = MetricsHistory()
        self.log_stream = LogStream(tail_lines=self.settings.ui.log_tail_lines)
        self.controller = ViewController(self.history, self.log_stream, self.capabilities)
        self.state = ControllerState(view=initial_view(self.settings))
        self.supervisor = TaskSupervisor(self)
        self.presenter = DashboardPresenter(self.history)

    @staticmethod
    def _load_settings() -> AppSettings:
        try:
            return ConfigManager.load()
        except ConfigLoadError as e:
            logger.warning("Using default settings: %s", e)
            return AppSettings()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def on_mount(self) -> None:
        """Show the dashboard, fetch the first snapshot and start polling."""
        self.push_screen(DashboardScreen(self.presenter))
        self.apply_event(ev.Resize(self.size.width, self.size.height))
        self.run_effects(self.controller.initial_effects())
        self.supervisor.start(
            _POLL_TASK,
            self.settings.refresh.interval,
            lambda: self.run_effects([FetchSnapshot()]),
            while_=lambda: not self.state.quitting,
        )

    def on_unmount(self) -> None:
        self.supervisor.cancel_all()

    def on_resize(self, event: ResizeEvent) -> None:
        self.apply_event(ev.Resize(event.size.width, event.size.height))

    # ------------------------------------------------------------------
    # Event loop
    # ------------------------------------------------------------------

    def apply_event(self, event: ev.Event) -> None:
        """Feed one event to the controller, render, then run its effects."""
        transition = self.controller.update(self.state, event)
        self.state = transition.state
        screen = self.screen if self.screen_stack else None
        if isinstance(screen, DashboardScreen):
            screen.refresh_view(self.state)
        self.run_effects(transition.effects)

    def action_command(self, name: str) -> None:
        """Run a named command from a footer binding."""
        event = command_event(name)
        if event is not None:
            self.apply_event(event)

    def run_effects(self, effects: list[Effect]) -> None:
        for effect in effects:
            logger.debug("Running effect %r", effect)
            if isinstance(effect, FetchSnapshot):
                self.run_worker(self._fetch_snapshot(effect.force), group="snapshot", exclusive=True)
            elif isinstance(effect, FetchLogs):
                self.run_worker(self._fetch_logs(effect), group="logs", exclusive=True)
            elif isinstance(effect, StartLogRefresh):
                self._start_log_refresh(effect)
            elif isinstance(effect, StopLogRefresh):
                self.supervisor.cancel(_LOG_TASK)
            elif isinstance(effect, RunCommand):
                self.run_worker(self._run_command(effect), group="command", exclusive=True)
            elif isinstance(effect, ExportView):
                self.run_worker(self._export(effect), group="export", exclusive=True)
            elif isinstance(effect, CopyToClipboard):
                self.copy_to_clipboard(effect.text)
                self.call_later(self.apply_event, ev.CopyFinished(effect.text))
            elif isinstance(effect, ScheduleStatusClear):
                token = effect.token
                self.set_timer(effect.delay, lambda: self.apply_event(ev.ClearStatusMessage(token)))
            elif isinstance(effect, QuitApp):
                self.supervisor.cancel(_POLL_TASK)
                self.supervisor.cancel(_LOG_TASK)
                self.exit()

    def _start_log_refresh(self, effect: StartLogRefresh) -> None:
        key = (effect.pod_key, effect.container)

        def session_open() -> bool:
            return self.log_stream.is_current(self.state.log_session, key)

        self.supervisor.start(
            _LOG_TASK,
            effect.interval,
            lambda: self.apply_event(ev.LogRefreshTick(effect.pod_key, effect.container)),
            while_=session_open,
        )

    # ------------------------------------------------------------------
    # Workers
    # ------------------------------------------------------------------

    async def _fetch_snapshot(self, force: bool) -> None:
        result = await self.provider.run_timed(self._load_snapshot(force))
        if not result.success:
            self.post_message(SnapshotLoaded(None, result.error))
            return
        logger.debug("Snapshot loaded in %.0fms", result.duration_ms)
        self.post_message(SnapshotLoaded(result.data))

    async def _load_snapshot(self, force: bool) -> ClusterSnapshot:
        timeout = self.settings.refresh.timeout
        if force:
            await self.provider.force_refresh()
        try:
            return await asyncio.wait_for(self.provider.get_snapshot(), timeout)
        except asyncio.TimeoutError:
            raise DataFetchError(f"Snapshot timed out after {timeout}s") from None

    async def _fetch_logs(self, effect: FetchLogs) -> None:
        result = await self.provider.run_timed(self._load_logs(effect))
        if not result.success:
            self.post_message(LogsLoaded(effect.pod_key, effect.container, None, result.error))
            return
        logger.debug("Logs for %s/%s loaded in %.0fms", effect.pod_key, effect.container, result.duration_ms)
        self.post_message(LogsLoaded(effect.pod_key, effect.container, result.data))

    async def _load_logs(self, effect: FetchLogs) -> str:
        source = self.provider
        if not isinstance(source, LogSource):
            raise UnsupportedOperationError(MSG_LOGS_UNSUPPORTED)
        return await source.fetch_log(effect.pod_key, effect.container, effect.tail_lines)

    async def _run_command(self, effect: RunCommand) -> None:
        describe = effect.action is ActionType.DESCRIBE
        result = await self.provider.run_timed(self._load_command_output(effect, describe))
        if not result.success:
            title = TITLE_DESCRIBE_ERROR if describe else TITLE_YAML_ERROR
            self.post_message(CommandOutputLoaded(title, result.error, error=result.error))
            return
        logger.debug("%s finished in %.0fms", effect.title, result.duration_ms)
        self.post_message(CommandOutputLoaded(effect.title, result.data))

    async def _load_command_output(self, effect: RunCommand, describe: bool) -> str:
        inspector = self.provider
        if not isinstance(inspector, ResourceInspector):
            raise UnsupportedOperationError(MSG_DESCRIBE_UNSUPPORTED if describe else MSG_YAML_UNSUPPORTED)
        if describe:
            return await inspector.describe(effect.kind, effect.key)
        return await inspector.get_yaml(effect.kind, effect.key)

    async def _export(self, effect: ExportView) -> None:
        try:
            path = await asyncio.to_thread(
                export_rows, effect.view, effect.rows, Path(self.settings.ui.export_path)
            )
        except OSError as e:
            self.post_message(ExportCompleted(error=str(e)))
            return
        self.post_message(ExportCompleted(len(effect.rows), path))

    # ------------------------------------------------------------------
    # Worker results
    # ------------------------------------------------------------------

    def on_snapshot_loaded(self, message: SnapshotLoaded) -> None:
        self.apply_event(ev.SnapshotArrived(message.snapshot, message.error))

    def on_logs_loaded(self, message: LogsLoaded) -> None:
        self.apply_event(ev.LogsFetched(message.pod_key, message.container, message.text, message.error))

    def on_command_output_loaded(self, message: CommandOutputLoaded) -> None:
        self.apply_event(ev.CommandOutputReady(message.title, message.content, message.error))

    def on_export_completed(self, message: ExportCompleted) -> None:
        self.apply_event(ev.ExportFinished(message.count, message.path, message.error))


__all__ = [
    "KubeConsoleApp",
    "initial_view",
]
