"""App-level keyboard bindings.

The dashboard screen translates raw keys itself (see
:mod:`kubeconsole.keyboard.translator`), so these bindings exist for the
footer and for mouse clicks on it. Every action routes through the same
command table as the key translator.
"""

from textual.binding import Binding

# ============================================================================
# Textual Binding objects for app-level bindings
# ============================================================================

APP_BINDINGS: list[Binding] = [
    Binding("tab", "command('tab')", "Switch view"),
    Binding("enter", "command('enter')", "Detail"),
    Binding("escape", "command('back')", "Back"),
    Binding("slash", "command('search')", "Search"),
    Binding("f", "command('filter')", "Filter"),
    Binding("c", "command('clear_filter')", "Clear"),
    Binding("s", "command('sort')", "Sort"),
    Binding("l", "command('logs')", "Logs"),
    Binding("a", "command('actions')", "Actions"),
    Binding("e", "command('export')", "Export"),
    Binding("r", "command('refresh')", "Refresh"),
    Binding("q", "command('quit')", "Quit"),
]

__all__ = [
    "APP_BINDINGS",
]
