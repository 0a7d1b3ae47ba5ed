"""Keyboard bindings module.

- app: App-level bindings shown in the footer (APP_BINDINGS)
- translator: Raw key to controller event translation
"""

from kubeconsole.keyboard.app import APP_BINDINGS
from kubeconsole.keyboard.translator import command_event, key_to_event

__all__ = [
    "APP_BINDINGS",
    "command_event",
    "key_to_event",
]
