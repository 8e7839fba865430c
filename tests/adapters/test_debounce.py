from __future__ import annotations

import threading

import pytest

from alog_relay.adapters.debounce import Debouncer
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def test_two_schedules_inside_the_window_run_once_with_the_last_value() -> None:
    calls: list[int] = []
    fired = threading.Event()

    def action(value: int) -> None:
        calls.append(value)
        fired.set()

    debouncer = Debouncer(action, delay=0.05)
    debouncer.schedule(10001)
    debouncer.schedule(10002)

    assert fired.wait(5)
    # a stale timer would fire within the same window
    threading.Event().wait(0.15)
    assert calls == [10002]
    assert debouncer.pending is False


def test_flush_runs_pending_action_immediately() -> None:
    calls: list[str] = []
    debouncer = Debouncer(calls.append, delay=60)

    debouncer.schedule("a")

    assert debouncer.pending is True
    assert debouncer.flush() is True
    assert calls == ["a"]
    assert debouncer.flush() is False


def test_cancel_discards_pending_action() -> None:
    calls: list[str] = []
    debouncer = Debouncer(calls.append, delay=60)

    debouncer.schedule("a")
    debouncer.cancel()

    assert debouncer.pending is False
    assert debouncer.flush() is False
    assert calls == []


def test_stale_generation_is_ignored() -> None:
    calls: list[str] = []
    debouncer = Debouncer(calls.append, delay=60)

    debouncer.schedule("old")
    debouncer.schedule("new")
    debouncer._fire(1)  # noqa: SLF001

    assert calls == []
    assert debouncer.flush() is True
    assert calls == ["new"]


def test_failing_action_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    def explode(value: int) -> None:
        raise RuntimeError(f"cannot bind {value}")

    debouncer = Debouncer(explode, delay=60)
    debouncer.schedule(9999)

    assert debouncer.flush() is True
    assert any("Debounced action failed" in record.getMessage() for record in caplog.records)
