"""Named repeating tasks on top of Textual interval timers.

Each task owns one ``Timer`` from its host's ``set_interval``. On every tick
the task asks its predicate whether it should still run; once the answer is
False the timer is stopped and the task is forgotten. Cancelling is
idempotent, and starting a task under an existing name replaces the old one.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Protocol

logger = logging.getLogger(__name__)

TickCallback = Callable[[], Awaitable[None] | None]
Predicate = Callable[[], bool]


class IntervalTimer(Protocol):
    def stop(self) -> None: ...


class IntervalHost(Protocol):
    """Anything with Textual's ``set_interval``: an App, a Screen or a Widget."""

    def set_interval(self, interval: float, callback: Any = None, *, name: str | None = None) -> Any: ...


def _always() -> bool:
    return True


@dataclass
class _Repeating:
    name: str
    interval: float
    timer: IntervalTimer | None = None
    fired: int = 0


class TaskSupervisor:
    """Owns the periodic tasks of the application (polling, log refresh)."""

    def __init__(self, host: IntervalHost) -> None:
        self._host = host
        self._tasks: dict[str, _Repeating] = {}

    def __contains__(self, name: str) -> bool:
        return self.is_running(name)

    @property
    def names(self) -> list[str]:
        return sorted(self._tasks)

    def is_running(self, name: str) -> bool:
        return name in self._tasks

    def fired(self, name: str) -> int:
        entry = self._tasks.get(name)
        return entry.fired if entry is not None else 0

    def start(
        self,
        name: str,
        interval: float,
        callback: TickCallback,
        *,
        while_: Predicate = _always,
    ) -> None:
        """Start ``callback`` every ``interval`` seconds while ``while_()`` holds.

        The predicate is evaluated on every tick before firing; once it
        returns False the timer stops without firing again.
        """
        self.cancel(name)
        entry = _Repeating(name=name, interval=interval)
        self._tasks[name] = entry

        async def tick() -> None:
            if self._tasks.get(name) is not entry:
                return
            if not while_():
                logger.debug("Repeating task %s stopped by its predicate", name)
                self._stop(entry)
                return
            entry.fired += 1
            try:
                result = callback()
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Repeating task %s failed; continuing", name)

        entry.timer = self._host.set_interval(interval, tick, name=f"supervisor:{name}")
        logger.debug("Started repeating task %s every %.1fs", name, interval)

    def _stop(self, entry: _Repeating) -> None:
        if self._tasks.get(entry.name) is entry:
            del self._tasks[entry.name]
        if entry.timer is not None:
            entry.timer.stop()
            entry.timer = None

    def cancel(self, name: str) -> bool:
        """Stop ``name``; returns whether a live task was stopped."""
        entry = self._tasks.get(name)
        if entry is None:
            return False
        self._stop(entry)
        logger.debug("Cancelled repeating task %s", name)
        return True

    def cancel_all(self) -> None:
        for name in list(self._tasks):
            self.cancel(name)
