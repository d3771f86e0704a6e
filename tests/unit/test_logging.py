from __future__ import annotations

import pytest
import structlog
from structlog.testing import capture_logs

from botbrain.interface.telemetry.logging import bind_trace, get_logger


@pytest.fixture(autouse=True)
def default_structlog():
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


def test_bind_trace_attaches_context() -> None:
    with capture_logs() as logs:
        log = bind_trace(get_logger("botbrain.test"), "trace-1", session_id="abc")
        log.info("bot_moved", move="e2e4")

    assert logs == [
        {
            "event": "bot_moved",
            "log_level": "info",
            "trace_id": "trace-1",
            "session_id": "abc",
            "move": "e2e4",
        }
    ]


def test_bind_trace_without_trace_id() -> None:
    with capture_logs() as logs:
        bind_trace(get_logger(), None, bot_id="b1").warning("filter_fallback")

    assert logs[0]["bot_id"] == "b1"
    assert "trace_id" not in logs[0]
