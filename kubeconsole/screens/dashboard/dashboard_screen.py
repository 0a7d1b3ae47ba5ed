"""Dashboard screen - the single screen of the console.

The screen holds no state of its own: the app hands it the current
:class:`ControllerState` after every transition and it re-renders the
header, body and footer from that value.
"""

from __future__ import annotations

import logging
from contextlib import suppress
from typing import TYPE_CHECKING, cast

from textual import events
from textual.app import ComposeResult
from textual.css.query import NoMatches, WrongType
from textual.screen import Screen
from textual.widgets import Static

from kubeconsole.constants.enums import ViewType
from kubeconsole.controllers.view.events import ContentMeasured
from kubeconsole.keyboard.translator import key_to_event
from kubeconsole.models.state.controller_state import ControllerState
from kubeconsole.screens.dashboard.config import BODY_ID, FOOTER_ID, HEADER_ID
from kubeconsole.screens.dashboard.presenter import DashboardPresenter

if TYPE_CHECKING:
    from kubeconsole.app import KubeConsoleApp

logger = logging.getLogger(__name__)


class DashboardScreen(Screen[None]):
    """Renders the controller state and forwards key presses to the app."""

    DEFAULT_CSS = """
    DashboardScreen {
        layout: vertical;
    }

    #dashboard-header {
        height: auto;
    }

    #dashboard-body {
        height: 1fr;
        padding: 0 1;
    }

    #dashboard-footer {
        height: 1;
    }
    """

    def __init__(self, presenter: DashboardPresenter) -> None:
        super().__init__()
        self.presenter = presenter

    @property
    def app(self) -> KubeConsoleApp:
        """Get the application instance."""
        return cast("KubeConsoleApp", super().app)

    def compose(self) -> ComposeResult:
        yield Static(id=HEADER_ID)
        yield Static(id=BODY_ID)
        yield Static(id=FOOTER_ID)

    def on_mount(self) -> None:
        self.refresh_view(self.app.state)

    def on_key(self, event: events.Key) -> None:
        """Translate every key here so bindings never see text-entry input."""
        controller_event = key_to_event(event.key, event.character, self.app.state)
        event.stop()
        event.prevent_default()
        if controller_event is not None:
            self.app.apply_event(controller_event)

    def refresh_view(self, state: ControllerState) -> None:
        # Transitions can arrive before compose; on_mount renders them then.
        with suppress(NoMatches, WrongType):
            self.query_one(f"#{HEADER_ID}", Static).update(self.presenter.header(state))
            self.query_one(f"#{BODY_ID}", Static).update(self.presenter.body(state))
            self.query_one(f"#{FOOTER_ID}", Static).update(self.presenter.footer(state))
            self._report_overview_height(state)

    def _report_overview_height(self, state: ControllerState) -> None:
        if state.view is not ViewType.OVERVIEW or state.snapshot is None:
            return
        lines = len(self.presenter.overview_lines(state))
        if lines != state.content_lines:
            self.app.call_later(self.app.apply_event, ContentMeasured(ViewType.OVERVIEW, lines))
