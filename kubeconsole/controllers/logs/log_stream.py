"""Live log-tailing session and the operations that evolve it.

A :class:`LogSession` exists only while the log viewer is open. Every
operation on :class:`LogStream` returns a new session and leaves its input
untouched, which lets the view controller thread sessions through its pure
transition function.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from kubeconsole.constants.defaults import LOG_TAIL_LINES_DEFAULT
from kubeconsole.constants.enums import LogLevel, LogState
from kubeconsole.constants.limits import (
    LOG_AUTO_SCROLL_MARGIN,
    LOG_MAX_LINES,
    LOG_PAGE_MARGIN,
    LOG_VIEW_MARGIN,
    PAGE_SIZE_MIN,
)
from kubeconsole.constants.patterns import LOG_LEVEL_PATTERNS
from kubeconsole.constants.timeouts import LOG_REFRESH_INTERVAL
from kubeconsole.constants.values import LOG_SEARCH_MAX_CHAR, LOG_SEARCH_MIN_CHAR

logger = logging.getLogger(__name__)

LogKey = tuple[str, str]


def classify_line(line: str) -> LogLevel:
    """Return the severity keyword found in ``line``, if any."""
    for level, pattern in LOG_LEVEL_PATTERNS:
        if pattern.search(line):
            return level
    return LogLevel.PLAIN


def log_viewport_height(height: int) -> int:
    return max(PAGE_SIZE_MIN, height - LOG_VIEW_MARGIN)


def log_page_step(height: int) -> int:
    return max(PAGE_SIZE_MIN, height - LOG_PAGE_MARGIN)


@dataclass(frozen=True)
class LogSession:
    """State of the log viewer for one ``(pod, container)`` target."""

    pod_key: str
    container: str
    text: str = ""
    # Fetched text before the line cap; unchanged fetches are detected against it.
    source: str = ""
    lines: tuple[str, ...] = ()
    received: bool = False
    search_active: bool = False
    search_term: str = ""
    scroll_offset: int = 0
    auto_scroll: bool = False
    auto_refresh: bool = False
    last_error: str | None = None

    @property
    def key(self) -> LogKey:
        return (self.pod_key, self.container)

    @property
    def state(self) -> LogState:
        if self.last_error is not None:
            return LogState.ERROR
        if self.search_active:
            return LogState.SEARCH_ACTIVE
        if not self.received:
            return LogState.LOADING
        return LogState.STREAMING

    def visible_lines(self) -> list[tuple[int, str]]:
        """Lines shown by the viewer with their 1-based original numbers.

        With a search term, only lines containing it (case-insensitive)
        are kept; numbering still refers to the unfiltered buffer.
        """
        if not self.search_term:
            return [(number, line) for number, line in enumerate(self.lines, start=1)]
        needle = self.search_term.lower()
        return [
            (number, line)
            for number, line in enumerate(self.lines, start=1)
            if needle in line.lower()
        ]

    def max_scroll(self, height: int) -> int:
        return max(0, len(self.visible_lines()) - log_viewport_height(height))


class LogStream:
    """Operations over :class:`LogSession` values."""

    def __init__(
        self,
        *,
        max_lines: int = LOG_MAX_LINES,
        tail_lines: int = LOG_TAIL_LINES_DEFAULT,
        refresh_interval: float = LOG_REFRESH_INTERVAL,
    ) -> None:
        self.max_lines = max_lines
        self.tail_lines = tail_lines
        self.refresh_interval = refresh_interval

    def open(self, pod_key: str, container: str) -> LogSession:
        logger.info("Opening log stream for %s container %s", pod_key, container)
        return LogSession(pod_key=pod_key, container=container)

    def unsupported(self, pod_key: str, container: str, message: str) -> LogSession:
        """Session that reports a missing log capability and never fetches."""
        return LogSession(pod_key=pod_key, container=container, last_error=message)

    @staticmethod
    def is_current(session: LogSession | None, key: LogKey) -> bool:
        return session is not None and session.key == key

    # ------------------------------------------------------------------
    # Fetch results
    # ------------------------------------------------------------------

    def apply_result(
        self,
        session: LogSession,
        text: str | None,
        error: str | None,
        height: int,
    ) -> LogSession:
        """Fold one fetch result into ``session``.

        Callers must check :meth:`is_current` first; stale results are
        dropped there, before any state changes.
        """
        if error is not None:
            logger.warning("Log fetch for %s failed: %s", session.pod_key, error)
            return replace(
                session,
                text="",
                source="",
                lines=(),
                last_error=error,
                received=True,
            )

        source = text or ""
        if source == session.source and session.received and session.last_error is None:
            return session

        content = source
        lines = content.split("\n") if content else []
        if len(lines) > self.max_lines:
            lines = lines[-self.max_lines :]
            content = "\n".join(lines)

        first_content = session.text == "" and content != ""
        updated = replace(
            session,
            text=content,
            source=source,
            lines=tuple(lines),
            last_error=None,
            received=True,
        )
        if first_content:
            return replace(updated, scroll_offset=updated.max_scroll(height), auto_scroll=True)
        if updated.auto_scroll:
            return replace(updated, scroll_offset=updated.max_scroll(height))
        return replace(updated, scroll_offset=min(updated.scroll_offset, updated.max_scroll(height)))

    @staticmethod
    def start_refresh(session: LogSession) -> LogSession:
        return replace(session, auto_refresh=True)

    @staticmethod
    def should_fetch_on_tick(session: LogSession) -> bool:
        """Ticks fetch while streaming and skip while search is open."""
        return session.auto_refresh and not session.search_active

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    @staticmethod
    def enter_search(session: LogSession) -> LogSession:
        return replace(session, search_active=True, search_term="", scroll_offset=0)

    @staticmethod
    def exit_search(session: LogSession) -> LogSession:
        return replace(
            session,
            search_active=False,
            search_term="",
            scroll_offset=0,
            auto_refresh=True,
        )

    @staticmethod
    def accepts_search_char(char: str) -> bool:
        return len(char) == 1 and LOG_SEARCH_MIN_CHAR <= char <= LOG_SEARCH_MAX_CHAR

    def search_input(self, session: LogSession, char: str) -> LogSession:
        if not self.accepts_search_char(char):
            return session
        return replace(session, search_term=session.search_term + char, scroll_offset=0)

    @staticmethod
    def search_backspace(session: LogSession) -> LogSession:
        if not session.search_term:
            return session
        return replace(session, search_term=session.search_term[:-1], scroll_offset=0)

    # ------------------------------------------------------------------
    # Scrolling
    # ------------------------------------------------------------------

    @staticmethod
    def scroll_up(session: LogSession) -> LogSession:
        if session.scroll_offset <= 0:
            return session
        return replace(session, scroll_offset=session.scroll_offset - 1, auto_scroll=False)

    @staticmethod
    def scroll_down(session: LogSession, height: int) -> LogSession:
        max_scroll = session.max_scroll(height)
        if session.scroll_offset >= max_scroll:
            return session
        offset = session.scroll_offset + 1
        auto_scroll = session.auto_scroll or offset >= max_scroll - LOG_AUTO_SCROLL_MARGIN
        return replace(session, scroll_offset=offset, auto_scroll=auto_scroll)

    @staticmethod
    def page_up(session: LogSession, height: int) -> LogSession:
        offset = max(0, session.scroll_offset - log_page_step(height))
        return replace(session, scroll_offset=offset, auto_scroll=False)

    @staticmethod
    def page_down(session: LogSession, height: int) -> LogSession:
        max_scroll = session.max_scroll(height)
        offset = min(session.scroll_offset + log_page_step(height), max_scroll)
        auto_scroll = session.auto_scroll or offset >= max_scroll - LOG_AUTO_SCROLL_MARGIN
        return replace(session, scroll_offset=offset, auto_scroll=auto_scroll)

    @staticmethod
    def clamp(session: LogSession, height: int) -> LogSession:
        offset = min(max(0, session.scroll_offset), session.max_scroll(height))
        if offset == session.scroll_offset:
            return session
        return replace(session, scroll_offset=offset)
