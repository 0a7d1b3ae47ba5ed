"""Dashboard presenter - worker messages and rich rendering of controller state."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from rich.console import Group, RenderableType
from rich.table import Table
from rich.text import Text
from textual.message import Message

from kubeconsole.constants.enums import CounterField, MetricField, StorageSection, Trend, ViewType
from kubeconsole.constants.values import ACTION_LABELS, ALL_NAMESPACES_LABEL, APP_TITLE, DETAIL_PARENT_VIEW
from kubeconsole.controllers.logs.log_stream import LogSession, classify_line, log_viewport_height
from kubeconsole.controllers.metrics.history import MetricsHistory, utc_now
from kubeconsole.controllers.view import ViewController
from kubeconsole.controllers.view.lists import (
    command_output_page_size,
    detail_page_size,
    displayed_job_pods,
    job_pods,
    page_size,
    storage_items,
    view_items,
    volcano_job_pods,
    workload_sections,
)
from kubeconsole.models.core.cluster_resources import NodeInfo, PodInfo
from kubeconsole.models.core.cluster_snapshot import ClusterSnapshot
from kubeconsole.models.state.controller_state import CommandOutput, ControllerState
from kubeconsole.screens.dashboard.config import (
    BANNER_STYLE,
    ERROR_STYLE,
    JOB_POD_COLUMNS,
    LOG_LEVEL_STYLES,
    MUTED_STYLE,
    SELECTED_ROW_STYLE,
    SPARKLINE_STYLE,
    STATUS_STYLE,
    STATUS_STYLES,
    TREND_GLYPHS,
    VIEW_COLUMNS,
    VIEW_TITLES,
)
from kubeconsole.utils.formatting import (
    age_since,
    format_cpu,
    format_memory,
    format_percent,
    format_rate,
    progress_bar,
    sparkline,
    truncate,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Worker Messages
# =============================================================================


class SnapshotLoaded(Message):
    """A snapshot fetch finished, successfully or not."""

    def __init__(self, snapshot: ClusterSnapshot | None, error: str | None = None) -> None:
        super().__init__()
        self.snapshot = snapshot
        self.error = error


class LogsLoaded(Message):
    """A log fetch for one ``(pod, container)`` target finished."""

    def __init__(self, pod_key: str, container: str, text: str | None, error: str | None = None) -> None:
        super().__init__()
        self.pod_key = pod_key
        self.container = container
        self.text = text
        self.error = error


class CommandOutputLoaded(Message):
    """Describe or YAML output is ready to show."""

    def __init__(self, title: str, content: str, error: str | None = None) -> None:
        super().__init__()
        self.title = title
        self.content = content
        self.error = error


class ExportCompleted(Message):
    """An export worker wrote its file or failed."""

    def __init__(self, count: int = 0, path: Path | None = None, error: str | None = None) -> None:
        super().__init__()
        self.count = count
        self.path = path
        self.error = error


# =============================================================================
# Rendering helpers
# =============================================================================


def status_text(value: str) -> Text:
    return Text(value, style=STATUS_STYLES.get(value, ""))


def trend_text(trend: Trend) -> Text:
    glyph, style = TREND_GLYPHS[trend]
    return Text(glyph, style=style)


def history_line(label: str, values: list[float], unit: str) -> Text | None:
    """Sparkline row ending in the latest value, once two samples exist."""
    if len(values) < 2:
        return None
    return Text.assemble(
        (f"{label} history: ", "bold"),
        (sparkline(values), SPARKLINE_STYLE),
        f" {values[-1]:.1f} {unit}",
    )


def _table(columns: list[tuple[str, int]]) -> Table:
    table = Table(expand=True, box=None, show_edge=False, pad_edge=False, header_style="bold")
    for name, width in columns:
        table.add_column(name, max_width=width, no_wrap=True, overflow="ellipsis")
    return table


def _window(items: list[Any], offset: int, size: int) -> list[tuple[int, Any]]:
    return list(enumerate(items))[offset : offset + size]


def _pairs(entity: Any) -> list[Text]:
    """``Label: value`` lines for the scalar fields of a model."""
    lines = []
    for name, value in entity.model_dump(exclude_defaults=True).items():
        if isinstance(value, (dict, list)):
            if not value:
                continue
            if isinstance(value, dict):
                value = ", ".join(f"{k}={v}" for k, v in value.items())
            else:
                value = ", ".join(str(v) for v in value)
        label = name.replace("_", " ").title()
        lines.append(Text.assemble((f"{label}: ", "bold"), str(value)))
    return lines


class DashboardPresenter:
    """Turns a :class:`ControllerState` into header, body and footer renderables."""

    def __init__(self, history: MetricsHistory, clock: Callable[[], datetime] = utc_now) -> None:
        self.history = history
        self._clock = clock

    # ------------------------------------------------------------------
    # Header and footer
    # ------------------------------------------------------------------

    def header(self, state: ControllerState) -> RenderableType:
        tabs = Text(f" {APP_TITLE} ", style="bold reverse")
        for index, view in enumerate(ViewController.tab_views(state.snapshot), start=1):
            label = f" {index % 10}:{VIEW_TITLES[view]} "
            active = view is state.view or DETAIL_PARENT_VIEW.get(state.view) is view
            tabs.append(label, style="bold underline" if active else MUTED_STYLE)
        updated = state.last_update.strftime("%H:%M:%S") if state.last_update else "never"
        tabs.append(f"  updated {updated}  #{state.refresh_count}", style=MUTED_STYLE)
        if state.snapshot_error:
            return Group(tabs, Text(f" {state.snapshot_error} ", style=BANNER_STYLE))
        return tabs

    def footer(self, state: ControllerState) -> Text:
        text = Text()
        if state.logs_search_mode and state.log_session is not None:
            text.append(f"log search: {state.log_session.search_term}_", style="bold")
            text.append("  esc cancel", style=MUTED_STYLE)
        elif state.modes.search:
            text.append(f"/{state.filters.search_text}_", style="bold")
            text.append("  enter confirm  esc cancel", style=MUTED_STYLE)
        elif state.modes.filter:
            namespace = state.filters.namespace or ALL_NAMESPACES_LABEL
            text.append(f"namespace: {namespace}", style="bold")
            text.append("  ↑/↓ cycle  enter apply", style=MUTED_STYLE)
        else:
            hints = "q quit  r refresh  ↑/↓ move  enter open  esc back  / search  s sort  e export"
            if state.view in (ViewType.POD_DETAIL, ViewType.NODE_DETAIL):
                hints = "q quit  a actions  l logs  esc back"
            text.append(hints, style=MUTED_STYLE)
            if state.filters.search_text:
                text.append(f"  search={state.filters.search_text}", style="bold")
            if state.filters.namespace:
                text.append(f"  ns={state.filters.namespace}", style="bold")
        if state.logs_error:
            text.append(f"  {state.logs_error}", style=ERROR_STYLE)
        if state.status_message is not None:
            text.append(f"  {state.status_message.text}", style=STATUS_STYLE)
        return text

    # ------------------------------------------------------------------
    # Body
    # ------------------------------------------------------------------

    def body(self, state: ControllerState) -> RenderableType:
        if state.command_output is not None:
            return self._command_output(state, state.command_output)
        if state.log_session is not None:
            return self._logs(state, state.log_session)
        if state.modes.detail:
            detail = self._detail(state)
            if state.modes.action_menu:
                return Group(detail, Text(""), self._action_menu(state))
            return detail
        if state.snapshot is None:
            return Text("Loading cluster data...", style=MUTED_STYLE)
        if state.view is ViewType.OVERVIEW:
            lines = self.overview_lines(state)
            offset = state.selection.scroll_offset
            return Group(*lines[offset : offset + page_size(state.viewport.height)])
        return self._list(state)

    def _command_output(self, state: ControllerState, output: CommandOutput) -> RenderableType:
        lines = output.lines
        size = command_output_page_size(state.viewport.height)
        title = Text(output.title, style=ERROR_STYLE if output.error else "bold")
        visible = "\n".join(lines[output.scroll : output.scroll + size])
        return Group(title, Text(visible))

    def _logs(self, state: ControllerState, session: LogSession) -> RenderableType:
        title = Text.assemble(
            (f"Logs: {session.pod_key} [{session.container}]", "bold"),
            (f"  {session.state.value}", MUTED_STYLE),
            ("  auto-refresh" if session.auto_refresh else "", MUTED_STYLE),
        )
        if session.last_error is not None:
            return Group(title, Text(session.last_error, style=ERROR_STYLE))
        if not session.received:
            return Group(title, Text("Loading logs...", style=MUTED_STYLE))
        height = log_viewport_height(state.viewport.height)
        rows = session.visible_lines()[session.scroll_offset : session.scroll_offset + height]
        body = Text()
        for number, line in rows:
            body.append(f"{number:>6} ", style=MUTED_STYLE)
            body.append(line, style=LOG_LEVEL_STYLES[classify_line(line)])
            body.append("\n")
        return Group(title, body)

    def _action_menu(self, state: ControllerState) -> RenderableType:
        menu = Text("Actions\n", style="bold")
        for index, action in enumerate(ViewController.action_items(state)):
            style = SELECTED_ROW_STYLE if index == state.action_menu_index else ""
            menu.append(f"  {ACTION_LABELS[action]}\n", style=style)
        return menu

    # ------------------------------------------------------------------
    # Detail views
    # ------------------------------------------------------------------

    def _detail(self, state: ControllerState) -> RenderableType:
        entity = self._detail_entity(state)
        title = Text(f"{VIEW_TITLES[state.view]} detail", style="bold")
        if entity is None:
            return Group(title, Text("Nothing selected", style=MUTED_STYLE))
        lines = _pairs(entity)
        if isinstance(entity, NodeInfo):
            lines.extend(self._node_metrics(entity))
        elif isinstance(entity, PodInfo):
            lines.extend(self._pod_metrics(entity))
        offset = state.selection.detail_scroll_offset
        parts: list[RenderableType] = [title, *lines[offset : offset + detail_page_size(state.viewport.height)]]
        if state.view in (ViewType.JOB_DETAIL, ViewType.VOLCANO_JOB_DETAIL):
            parts.append(self._job_pods(state))
        return Group(*parts)

    @staticmethod
    def _detail_entity(state: ControllerState) -> Any:
        detail = state.detail
        slots = {
            ViewType.POD_DETAIL: detail.pod,
            ViewType.NODE_DETAIL: detail.node,
            ViewType.EVENT_DETAIL: detail.event,
            ViewType.JOB_DETAIL: detail.job,
            ViewType.SERVICE_DETAIL: detail.service,
            ViewType.DEPLOYMENT_DETAIL: detail.deployment,
            ViewType.STATEFULSET_DETAIL: detail.statefulset,
            ViewType.DAEMONSET_DETAIL: detail.daemonset,
            ViewType.CRONJOB_DETAIL: detail.cronjob,
            ViewType.PV_DETAIL: detail.pv,
            ViewType.PVC_DETAIL: detail.pvc,
            ViewType.VOLCANO_JOB_DETAIL: detail.volcano_job,
            ViewType.QUEUE_DETAIL: detail.queue,
            ViewType.TOPOLOGY_DETAIL: detail.super_pod,
        }
        return slots.get(state.view)

    def _node_metrics(self, node: NodeInfo) -> list[Text]:
        name = node.name
        lines = [
            Text.assemble(
                ("CPU usage: ", "bold"),
                f"{format_cpu(node.cpu_usage)} / {format_cpu(node.cpu_allocatable)} ",
                f"({format_percent(node.cpu_usage_percent)}) ",
                trend_text(self.history.node_trend(name, MetricField.CPU, node.cpu_usage)),
            ),
            Text.assemble(
                ("Memory usage: ", "bold"),
                f"{format_memory(node.memory_usage)} / {format_memory(node.memory_allocatable)} ",
                f"({format_percent(node.memory_usage_percent)}) ",
                trend_text(self.history.node_trend(name, MetricField.MEMORY, node.memory_usage)),
            ),
            Text.assemble(
                ("Network: ", "bold"),
                f"rx {format_rate(self.history.node_rate(name, CounterField.NETWORK_RX))}  ",
                f"tx {format_rate(self.history.node_rate(name, CounterField.NETWORK_TX))}",
            ),
        ]
        if node.npu_capacity:
            lines.append(
                Text.assemble(
                    ("NPU allocated: ", "bold"),
                    f"{node.npu_allocated} / {node.npu_capacity} ",
                    trend_text(self.history.node_trend(name, MetricField.NPU_ALLOCATED, node.npu_allocated)),
                )
            )
        history = self.history
        rows = [
            history_line("CPU", history.node_cpu_history(name), "cores"),
            history_line("Memory", history.node_memory_history(name), "GiB"),
            history_line("Network rx", history.node_network_history(name, CounterField.NETWORK_RX), "B/s"),
            history_line("Network tx", history.node_network_history(name, CounterField.NETWORK_TX), "B/s"),
        ]
        if node.npu_capacity:
            rows.append(history_line("NPU", history.node_npu_utilization_history(name), "%"))
        return lines + [row for row in rows if row is not None]

    def _pod_metrics(self, pod: PodInfo) -> list[Text]:
        key = pod.entity_key()
        lines = [
            Text.assemble(
                ("CPU usage: ", "bold"),
                f"{format_cpu(pod.cpu_usage)} ",
                trend_text(self.history.pod_trend(key, MetricField.CPU, pod.cpu_usage)),
            ),
            Text.assemble(
                ("Memory usage: ", "bold"),
                f"{format_memory(pod.memory_usage)} ",
                trend_text(self.history.pod_trend(key, MetricField.MEMORY, pod.memory_usage)),
            ),
            Text.assemble(
                ("Network: ", "bold"),
                f"rx {format_rate(self.history.pod_rate(key, CounterField.NETWORK_RX))}  ",
                f"tx {format_rate(self.history.pod_rate(key, CounterField.NETWORK_TX))}",
            ),
        ]
        for row in (
            history_line("CPU", self.history.pod_cpu_history(key), "cores"),
            history_line("Memory", self.history.pod_memory_history(key), "MiB"),
            history_line("Network rx", self.history.pod_network_history(key, CounterField.NETWORK_RX), "B/s"),
            history_line("Network tx", self.history.pod_network_history(key, CounterField.NETWORK_TX), "B/s"),
        ):
            if row is not None:
                lines.append(row)
        for container in pod.container_states:
            lines.append(
                Text.assemble(
                    ("  container ", MUTED_STYLE),
                    (container.name, "bold"),
                    f"  {container.state or '-'}  restarts={container.restart_count}  {container.image}",
                )
            )
        return lines

    def _job_pods(self, state: ControllerState) -> RenderableType:
        if state.view is ViewType.JOB_DETAIL:
            pods = displayed_job_pods(job_pods(state.snapshot, state.detail.job))
            selected = state.selection.job_pod_index
        else:
            pods = displayed_job_pods(volcano_job_pods(state.snapshot, state.detail.volcano_job))
            selected = state.selection.volcano_job_pod_index
        table = _table(JOB_POD_COLUMNS)
        for index, pod in enumerate(pods):
            table.add_row(
                pod.name,
                status_text(pod.phase),
                str(pod.restart_count),
                pod.node or "-",
                style=SELECTED_ROW_STYLE if index == selected else None,
            )
        return Group(Text(f"Pods ({len(pods)})", style="bold"), table)

    # ------------------------------------------------------------------
    # Overview
    # ------------------------------------------------------------------

    def overview_lines(self, state: ControllerState) -> list[Text]:
        """Every line of the overview; the screen reports their count."""
        snapshot = state.snapshot
        if snapshot is None or snapshot.summary is None:
            return [Text("No cluster summary available", style=MUTED_STYLE)]
        summary = snapshot.summary
        cpu_pct = summary.cpu_used / summary.cpu_allocatable * 100 if summary.cpu_allocatable else 0.0
        mem_pct = summary.memory_used / summary.memory_allocatable * 100 if summary.memory_allocatable else 0.0
        lines = [
            Text("Cluster", style="bold"),
            Text(f"  Nodes   {summary.ready_nodes}/{summary.total_nodes} ready"),
            Text(
                f"  Pods    {summary.total_pods} total  {summary.running_pods} running  "
                f"{summary.pending_pods} pending  {summary.failed_pods} failed"
            ),
            Text(f"  Events  {summary.total_events} total  {summary.warning_events} warnings"),
            Text(""),
            Text("Resources", style="bold"),
            Text(
                f"  CPU     {progress_bar(cpu_pct)} {format_percent(cpu_pct)}  "
                f"{format_cpu(summary.cpu_used)} / {format_cpu(summary.cpu_allocatable)}"
            ),
            Text(
                f"  Memory  {progress_bar(mem_pct)} {format_percent(mem_pct)}  "
                f"{format_memory(summary.memory_used)} / {format_memory(summary.memory_allocatable)}"
            ),
            Text(
                f"  Network rx {format_rate(self.history.cluster_rate(CounterField.NETWORK_RX))}  "
                f"tx {format_rate(self.history.cluster_rate(CounterField.NETWORK_TX))}"
            ),
        ]
        if snapshot.has_npu():
            npu_pct = summary.npu_allocated / summary.npu_capacity * 100
            lines.append(
                Text.assemble(
                    f"  NPU     {progress_bar(npu_pct)} {format_percent(npu_pct)}  "
                    f"{summary.npu_allocated} / {summary.npu_capacity} {summary.npu_resource_name} ",
                    trend_text(self.history.cluster_npu_trend(summary.npu_allocated)),
                )
            )
            npu_history = history_line("  NPU", self.history.cluster_npu_utilization_history(), "%")
            if npu_history is not None:
                lines.append(npu_history)
        lines.append(Text(""))
        lines.append(Text(f"Alerts ({len(summary.alerts)})", style="bold"))
        for alert in summary.alerts:
            lines.append(
                Text.assemble("  ", status_text(alert.severity.value), f"  {alert.message}")
            )
        warnings = [e for e in snapshot.events if e.type == "Warning"]
        if warnings:
            lines.append(Text(""))
            lines.append(Text("Recent warnings", style="bold"))
            now = self._clock()
            for event in warnings[:5]:
                seen = event.last_timestamp or event.first_timestamp
                lines.append(
                    Text(f"  {age_since(seen, now):>4}  {event.reason}  {truncate(event.message, 80)}")
                )
        return lines

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def _list(self, state: ControllerState) -> RenderableType:
        view = state.view
        table = _table(VIEW_COLUMNS[view])
        rows = self._rows(state)
        offset = state.selection.scroll_offset
        size = page_size(state.viewport.height)
        # Network scrolls by lines and has no highlighted row.
        highlight = view is not ViewType.NETWORK
        for index, cells in _window(rows, offset, size):
            selected = highlight and index == state.selection.selected_index
            table.add_row(*cells, style=SELECTED_ROW_STYLE if selected else None)
        title = Text(f"{VIEW_TITLES[view]} ({len(rows)})", style="bold")
        if not rows:
            return Group(title, Text("No items", style=MUTED_STYLE))
        return Group(title, table)

    def _rows(self, state: ControllerState) -> list[tuple[RenderableType, ...]]:
        view = state.view
        snapshot = state.snapshot
        now = self._clock()
        if view is ViewType.NODES:
            return [
                (
                    node.name,
                    status_text(node.status),
                    ",".join(node.roles) or "-",
                    f"{format_cpu(node.cpu_usage)}/{format_cpu(node.cpu_allocatable)}",
                    f"{format_memory(node.memory_usage)}/{format_memory(node.memory_allocatable)}",
                    f"{node.pod_count}/{node.pod_allocatable}",
                    f"{node.npu_allocated}/{node.npu_capacity}" if node.npu_capacity else "-",
                )
                for node in view_items(state)
            ]
        if view is ViewType.PODS:
            return [
                (
                    pod.namespace,
                    pod.name,
                    f"{pod.ready_containers}/{pod.containers}",
                    status_text(pod.phase),
                    str(pod.restart_count),
                    pod.node or "-",
                    format_cpu(pod.cpu_usage),
                    format_memory(pod.memory_usage),
                )
                for pod in view_items(state)
            ]
        if view is ViewType.EVENTS:
            return [
                (
                    status_text(event.type),
                    event.reason,
                    event.involved_object,
                    str(event.count),
                    age_since(event.last_timestamp or event.first_timestamp, now),
                    event.message,
                )
                for event in view_items(state)
            ]
        if view is ViewType.ALERTS:
            return [
                (
                    status_text(alert.severity.value),
                    alert.alert_type,
                    f"{alert.resource_type}/{alert.resource_name}",
                    alert.message,
                )
                for alert in view_items(state)
            ]
        if view is ViewType.WORKLOADS:
            return [
                (section.value, item.namespace, item.name, self._workload_status(item))
                for section, items in workload_sections(snapshot)
                for item in items
            ]
        if view is ViewType.NETWORK:
            return [
                (
                    svc.namespace,
                    svc.name,
                    svc.type,
                    svc.cluster_ip or "-",
                    ",".join(f"{p.port}/{p.protocol}" for p in svc.ports) or "-",
                    str(svc.endpoint_count),
                )
                for svc in view_items(state)
            ]
        if view is ViewType.STORAGE:
            return [
                (
                    section.value.upper(),
                    entity.name,
                    status_text(entity.status),
                    format_memory(entity.capacity),
                    entity.storage_class or "-",
                    (entity.claim if section is StorageSection.PV else entity.volume) or "-",
                )
                for section, entity in storage_items(snapshot)
            ]
        if view is ViewType.QUEUES:
            return [
                (
                    queue.name,
                    queue.state,
                    str(queue.weight),
                    str(queue.running_jobs),
                    str(queue.pending_jobs),
                    f"{queue.npu_allocated}/{queue.npu_deserved}",
                )
                for queue in view_items(state)
            ]
        if view is ViewType.TOPOLOGY:
            return [
                (
                    group.id,
                    str(group.node_count),
                    f"{group.npu_allocated}/{group.npu_capacity}",
                    ", ".join(group.node_names),
                )
                for group in view_items(state)
            ]
        return []

    @staticmethod
    def _workload_status(item: Any) -> str:
        for attrs, template in (
            (("status", "running", "min_available"), "{status} {running}/{min_available}"),
            (("succeeded", "completions"), "{succeeded}/{completions} succeeded"),
            (("ready_replicas", "replicas"), "{ready_replicas}/{replicas} ready"),
            (("number_ready", "desired_number_scheduled"), "{number_ready}/{desired_number_scheduled} ready"),
            (("schedule", "suspend"), "{schedule}"),
            (("type", "cluster_ip"), "{type} {cluster_ip}"),
        ):
            if all(hasattr(item, attr) for attr in attrs):
                return template.format(**{attr: getattr(item, attr) for attr in attrs})
        return "-"
