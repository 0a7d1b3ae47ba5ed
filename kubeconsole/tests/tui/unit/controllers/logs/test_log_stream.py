"""Tests for log sessions and the LogStream operations."""

from __future__ import annotations

import pytest

from kubeconsole.constants.enums import LogLevel, LogState
from kubeconsole.constants.limits import LOG_MAX_LINES
from kubeconsole.controllers.logs.log_stream import (
    LogSession,
    LogStream,
    classify_line,
    log_page_step,
    log_viewport_height,
)

HEIGHT = 40  # viewport of 32 log lines


def numbered(count: int) -> str:
    return "\n".join(f"line {i}" for i in range(count))


def streaming(count: int, **overrides: object) -> LogSession:
    text = numbered(count)
    fields: dict = {
        "pod_key": "prod/web-1",
        "container": "web",
        "text": text,
        "source": text,
        "lines": tuple(text.split("\n")),
        "received": True,
    }
    fields.update(overrides)
    return LogSession(**fields)


@pytest.fixture
def stream() -> LogStream:
    return LogStream()


@pytest.mark.unit
@pytest.mark.fast
class TestClassifyLine:
    """Tests for classify_line."""

    @pytest.mark.parametrize(
        ("line", "level"),
        [
            ("2026-01-01 ERROR failed to connect", LogLevel.ERROR),
            ("fatal: out of memory", LogLevel.ERROR),
            ("WARN retrying", LogLevel.WARNING),
            ("level=info msg=started", LogLevel.INFO),
            ("TRACE entering handler", LogLevel.DEBUG),
            ("health check OK", LogLevel.SUCCESS),
            ("plain output", LogLevel.PLAIN),
        ],
    )
    def test_levels(self, line: str, level: LogLevel) -> None:
        assert classify_line(line) is level

    def test_error_wins_over_info(self) -> None:
        assert classify_line("INFO then ERROR") is LogLevel.ERROR


@pytest.mark.unit
@pytest.mark.fast
class TestSessionState:
    """Tests for LogSession.state and visible_lines."""

    def test_new_session_is_loading(self, stream: LogStream) -> None:
        session = stream.open("prod/web-1", "web")
        assert session.state is LogState.LOADING
        assert session.key == ("prod/web-1", "web")

    def test_unsupported_session_is_error(self, stream: LogStream) -> None:
        session = stream.unsupported("prod/web-1", "web", "no logs here")
        assert session.state is LogState.ERROR
        assert session.last_error == "no logs here"

    def test_search_keeps_original_line_numbers(self) -> None:
        session = LogSession(
            pod_key="p",
            container="c",
            lines=("alpha", "beta error", "gamma", "Error delta"),
            received=True,
            search_term="error",
        )
        assert session.visible_lines() == [(2, "beta error"), (4, "Error delta")]

    def test_no_search_numbers_every_line(self) -> None:
        session = LogSession(pod_key="p", container="c", lines=("a", "b"), received=True)
        assert session.visible_lines() == [(1, "a"), (2, "b")]

    def test_viewport_helpers(self) -> None:
        assert log_viewport_height(HEIGHT) == 32
        assert log_page_step(HEIGHT) == 30
        assert log_viewport_height(3) == 1


@pytest.mark.unit
@pytest.mark.fast
class TestApplyResult:
    """Tests for folding fetch results into a session."""

    def test_first_content_jumps_to_bottom(self, stream: LogStream) -> None:
        session = stream.apply_result(stream.open("p", "c"), numbered(100), None, HEIGHT)
        assert session.state is LogState.STREAMING
        assert session.auto_scroll is True
        assert session.scroll_offset == 68

    def test_error_clears_content(self, stream: LogStream) -> None:
        session = stream.apply_result(streaming(10), None, "connection refused", HEIGHT)
        assert session.state is LogState.ERROR
        assert session.lines == ()
        assert session.last_error == "connection refused"

    def test_unchanged_text_returns_same_session(self, stream: LogStream) -> None:
        session = stream.apply_result(stream.open("p", "c"), "a\nb", None, HEIGHT)
        assert stream.apply_result(session, "a\nb", None, HEIGHT) is session

    def test_auto_scroll_follows_new_lines(self, stream: LogStream) -> None:
        session = stream.apply_result(stream.open("p", "c"), numbered(100), None, HEIGHT)
        session = stream.apply_result(session, numbered(110), None, HEIGHT)
        assert session.scroll_offset == 78

    def test_manual_position_is_kept(self, stream: LogStream) -> None:
        session = streaming(100, scroll_offset=10, auto_scroll=False)
        session = stream.apply_result(session, numbered(120), None, HEIGHT)
        assert session.scroll_offset == 10

    def test_buffer_is_capped(self, stream: LogStream) -> None:
        session = stream.apply_result(stream.open("p", "c"), numbered(LOG_MAX_LINES + 50), None, HEIGHT)
        assert len(session.lines) == LOG_MAX_LINES
        assert session.lines[0] == "line 50"
        assert session.text.split("\n")[0] == "line 50"

    def test_refetch_of_capped_text_returns_same_session(self, stream: LogStream) -> None:
        fetched = numbered(LOG_MAX_LINES + 50)
        session = stream.apply_result(stream.open("p", "c"), fetched, None, HEIGHT)
        assert session.source == fetched
        assert session.text != fetched
        assert stream.apply_result(session, fetched, None, HEIGHT) is session

    def test_error_then_success_recovers(self, stream: LogStream) -> None:
        session = stream.apply_result(stream.open("p", "c"), None, "boom", HEIGHT)
        session = stream.apply_result(session, "ok", None, HEIGHT)
        assert session.state is LogState.STREAMING
        assert session.last_error is None

    def test_is_current_guards_stale_results(self, stream: LogStream) -> None:
        session = stream.open("prod/web-1", "web")
        assert LogStream.is_current(session, ("prod/web-1", "web"))
        assert not LogStream.is_current(session, ("prod/web-1", "sidecar"))
        assert not LogStream.is_current(None, ("prod/web-1", "web"))


@pytest.mark.unit
@pytest.mark.fast
class TestScrolling:
    """Tests for scrolling and the auto-scroll hysteresis."""

    def test_scroll_up_disables_auto_scroll(self, stream: LogStream) -> None:
        session = stream.scroll_up(streaming(100, scroll_offset=68, auto_scroll=True))
        assert session.scroll_offset == 67
        assert session.auto_scroll is False

    def test_scroll_up_at_top_is_noop(self, stream: LogStream) -> None:
        session = streaming(100)
        assert stream.scroll_up(session) is session

    def test_scroll_down_rearms_near_bottom(self, stream: LogStream) -> None:
        # max_scroll is 68, re-arming starts at 63
        far = stream.scroll_down(streaming(100, scroll_offset=60), HEIGHT)
        assert far.scroll_offset == 61
        assert far.auto_scroll is False
        near = stream.scroll_down(streaming(100, scroll_offset=62), HEIGHT)
        assert near.scroll_offset == 63
        assert near.auto_scroll is True

    def test_scroll_down_at_bottom_is_noop(self, stream: LogStream) -> None:
        session = streaming(100, scroll_offset=68)
        assert stream.scroll_down(session, HEIGHT) is session

    def test_paging(self, stream: LogStream) -> None:
        down = stream.page_down(streaming(100), HEIGHT)
        assert down.scroll_offset == 30
        assert down.auto_scroll is False
        bottom = stream.page_down(stream.page_down(down, HEIGHT), HEIGHT)
        assert bottom.scroll_offset == 68
        assert bottom.auto_scroll is True
        up = stream.page_up(bottom, HEIGHT)
        assert up.scroll_offset == 38
        assert up.auto_scroll is False

    def test_clamp(self, stream: LogStream) -> None:
        assert stream.clamp(streaming(10, scroll_offset=50), HEIGHT).scroll_offset == 0
        assert stream.clamp(streaming(100, scroll_offset=-3), HEIGHT).scroll_offset == 0


@pytest.mark.unit
@pytest.mark.fast
class TestSearch:
    """Tests for in-log search."""

    def test_enter_and_exit(self, stream: LogStream) -> None:
        session = stream.enter_search(streaming(5, scroll_offset=3))
        assert session.state is LogState.SEARCH_ACTIVE
        assert session.scroll_offset == 0
        session = stream.search_input(session, "x")
        closed = stream.exit_search(session)
        assert closed.search_active is False
        assert closed.search_term == ""
        assert closed.auto_refresh is True

    def test_input_accepts_printable_ascii_only(self, stream: LogStream) -> None:
        session = stream.enter_search(streaming(5))
        session = stream.search_input(session, "a")
        session = stream.search_input(session, " ")
        session = stream.search_input(session, "~")
        assert session.search_term == "a ~"
        assert stream.search_input(session, "é") is session
        assert stream.search_input(session, "\t") is session

    def test_backspace(self, stream: LogStream) -> None:
        session = stream.search_input(stream.enter_search(streaming(5)), "a")
        session = stream.search_backspace(session)
        assert session.search_term == ""
        assert stream.search_backspace(session) is session

    def test_ticks_pause_during_search(self, stream: LogStream) -> None:
        session = stream.start_refresh(streaming(5))
        assert LogStream.should_fetch_on_tick(session) is True
        assert LogStream.should_fetch_on_tick(stream.enter_search(session)) is False
        assert LogStream.should_fetch_on_tick(streaming(5)) is False
