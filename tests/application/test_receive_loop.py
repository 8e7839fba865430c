from __future__ import annotations

from collections import deque
from typing import Any

import pytest

from alog_relay.application.use_cases.display_datagram import (
    DISCONNECT_NOTICE,
    create_handle_datagram,
    create_report_disconnect,
)
from alog_relay.application.use_cases.receive_loop import run_receive_loop
from alog_relay.domain.classifier import ViewerState
from alog_relay.domain.lifecycle import StopSignal, ViewerPhase
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


class _ScriptedSource:
    """Replay datagrams and errors, then behave like a socket closed by shutdown."""

    def __init__(self, stop: StopSignal, script: list[Any]) -> None:
        self._stop = stop
        self._script = deque(script)
        self.closed = False

    async def receive(self) -> tuple[bytes, str]:
        if not self._script:
            self._stop.request("script exhausted")
            raise OSError("socket closed")
        item = self._script.popleft()
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


class _Harness:
    def __init__(self, script: list[Any], console) -> None:
        self.stop = StopSignal()
        self.source = _ScriptedSource(self.stop, script)
        self.state = ViewerState()
        self.console = console
        self.errors: list[BaseException] = []
        self.phases: list[ViewerPhase] = []
        self.sleeps: list[float] = []

    async def _sleep(self, delay: float) -> None:
        self.sleeps.append(delay)

    async def run(self, *, handle_datagram=None) -> None:
        await run_receive_loop(
            self.source,
            handle_datagram=handle_datagram
            or create_handle_datagram(state=self.state, console=self.console, is_local_address=lambda _: True),
            report_disconnect=create_report_disconnect(state=self.state, console=self.console),
            report_error=self.errors.append,
            stop=self.stop,
            on_phase=self.phases.append,
            reconnect_delay=1.0,
            sleep=self._sleep,
        )


@pytest.mark.asyncio
async def test_datagrams_are_dispatched_until_shutdown(recording_console) -> None:
    harness = _Harness(
        [(b"12:00:00.000 [INFO] one", "127.0.0.1"), (b"12:00:00.100 [INFO] two", "127.0.0.1")],
        recording_console,
    )

    await harness.run()

    assert recording_console.texts == ["[INFO] one", "[INFO] two"]
    assert harness.errors == []
    assert harness.phases == [ViewerPhase.RECEIVING]


@pytest.mark.asyncio
async def test_consecutive_resets_print_a_single_notice(recording_console) -> None:
    harness = _Harness(
        [ConnectionResetError("reset"), ConnectionResetError("reset"), (b"12:00:00.000 [INFO] back", "127.0.0.1")],
        recording_console,
    )

    await harness.run()

    assert recording_console.texts == [DISCONNECT_NOTICE, "[INFO] back"]
    assert harness.sleeps == [1.0, 1.0]
    assert harness.phases == [ViewerPhase.RECONNECTING, ViewerPhase.RECEIVING]


@pytest.mark.asyncio
async def test_socket_error_while_running_is_reported_and_loop_continues(recording_console) -> None:
    failure = OSError("transient")
    harness = _Harness([failure, (b"12:00:00.000 [INFO] still here", "127.0.0.1")], recording_console)

    await harness.run()

    assert harness.errors == [failure]
    assert recording_console.texts == ["[INFO] still here"]


@pytest.mark.asyncio
async def test_socket_error_during_shutdown_ends_the_loop_quietly(recording_console) -> None:
    harness = _Harness([], recording_console)

    await harness.run()

    assert harness.errors == []
    assert harness.stop.reason == "script exhausted"


@pytest.mark.asyncio
async def test_handler_failure_is_reported_and_loop_continues(recording_console) -> None:
    seen: list[bytes] = []

    def flaky(payload: bytes, sender_ip: str) -> None:
        seen.append(payload)
        if len(seen) == 1:
            raise ValueError("bad line")

    harness = _Harness([(b"first", "127.0.0.1"), (b"second", "127.0.0.1")], recording_console)

    await harness.run(handle_datagram=flaky)

    assert seen == [b"first", b"second"]
    assert [type(error) for error in harness.errors] == [ValueError]


@pytest.mark.asyncio
async def test_loop_does_not_start_when_stop_already_requested(recording_console) -> None:
    harness = _Harness([(b"never", "127.0.0.1")], recording_console)
    harness.stop.request("early")

    await harness.run()

    assert recording_console.lines == []
    assert harness.phases == []
