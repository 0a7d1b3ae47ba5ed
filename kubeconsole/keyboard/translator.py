"""Translation of Textual key presses into view controller events.

While a text-entry mode (list search or log search) is active, printable
characters are typed into the search buffer instead of triggering commands.
Only escape, arrows, paging, enter, backspace and space keep their command
meaning there.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Final

from kubeconsole.controllers.view import events as ev
from kubeconsole.models.state.controller_state import ControllerState

# ============================================================================
# Command table
# ============================================================================

COMMANDS: Final[dict[str, Callable[[], ev.Event]]] = {
    "quit": ev.Quit,
    "refresh": ev.Refresh,
    "up": ev.Up,
    "down": ev.Down,
    "page_up": ev.PageUp,
    "page_down": ev.PageDown,
    "tab": ev.TabCycle,
    "enter": ev.Enter,
    "back": ev.Back,
    "filter": ev.EnterFilter,
    "clear_filter": ev.ClearFilter,
    "sort": ev.Sort,
    "search": ev.EnterSearch,
    "logs": ev.EnterLogs,
    "actions": ev.EnterActions,
    "export": ev.EnterExport,
    "space": ev.Space,
}

KEY_COMMANDS: Final[dict[str, str]] = {
    "q": "quit",
    "ctrl+c": "quit",
    "r": "refresh",
    "up": "up",
    "k": "up",
    "down": "down",
    "j": "down",
    "pageup": "page_up",
    "ctrl+u": "page_up",
    "pagedown": "page_down",
    "ctrl+d": "page_down",
    "tab": "tab",
    "enter": "enter",
    "escape": "back",
    "backspace": "back",
    "f": "filter",
    "c": "clear_filter",
    "s": "sort",
    "slash": "search",
    "l": "logs",
    "a": "actions",
    "e": "export",
    "space": "space",
}

# Keys that keep their command meaning while typing into a search buffer.
TEXT_MODE_COMMAND_KEYS: Final = frozenset(
    {"escape", "up", "down", "pageup", "pagedown", "ctrl+u", "ctrl+d", "enter", "ctrl+c"}
)

DIGITS: Final = "0123456789"


def command_event(name: str) -> ev.Event | None:
    """Event for a named command, or None if the name is unknown."""
    factory = COMMANDS.get(name)
    return factory() if factory is not None else None


def is_text_entry(state: ControllerState) -> bool:
    return state.modes.search or state.logs_search_mode


def key_to_event(key: str, character: str | None, state: ControllerState) -> ev.Event | None:
    """Translate one key press into an event for ``state``.

    Args:
        key: Textual key name (``"escape"``, ``"ctrl+u"``, ``"a"``).
        character: The printable character of the key, if any.
        state: Current controller state, used to detect text-entry modes.

    Returns:
        The event to feed to the controller, or None if the key is unbound.
    """
    if is_text_entry(state):
        if key in ("backspace", "delete"):
            return ev.Backspace()
        if key == "space":
            return ev.Space()
        if key in TEXT_MODE_COMMAND_KEYS:
            return command_event(KEY_COMMANDS[key])
        if character is not None and len(character) == 1 and character.isprintable():
            return ev.TextInput(character)
        return None

    if key in DIGITS and len(key) == 1:
        return ev.SelectView(key)
    name = KEY_COMMANDS.get(key)
    return command_event(name) if name is not None else None


__all__ = [
    "COMMANDS",
    "KEY_COMMANDS",
    "command_event",
    "is_text_entry",
    "key_to_event",
]
