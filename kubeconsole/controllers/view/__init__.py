"""View/mode state machine."""

from kubeconsole.controllers.view.controller import Transition, ViewController
from kubeconsole.controllers.view.lists import export_rows, item_count, view_items

__all__ = [
    "Transition",
    "ViewController",
    "export_rows",
    "item_count",
    "view_items",
]
