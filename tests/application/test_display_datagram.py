from __future__ import annotations

from alog_relay.adapters.transport.local_addresses import LocalAddressBook
from alog_relay.application.use_cases.display_datagram import (
    DISCONNECT_NOTICE,
    create_handle_datagram,
    create_report_disconnect,
)
from alog_relay.domain.classifier import ViewerState
from alog_relay.domain.colors import LineColor
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]

LOCAL = "127.0.0.1"
REMOTE = "203.0.113.7"


def _local_only(address: str) -> bool:
    return address == LOCAL


def _handler(state: ViewerState, console, *, accept_remote: bool = False):
    return create_handle_datagram(
        state=state,
        console=console,
        is_local_address=_local_only,
        accept_remote=accept_remote,
    )


def test_local_record_and_continuation_are_printed_in_one_colour(recording_console) -> None:
    state = ViewerState()
    handle = _handler(state, recording_console)

    handle(b"12:00:01.000 [ERROR][host] boom", LOCAL)
    handle(b"   at Foo.Bar()", LOCAL)

    assert recording_console.lines == [
        ("[ERROR][host] boom", LineColor.RED),
        ("   at Foo.Bar()", LineColor.RED),
    ]
    assert state.last_log_message == "   at Foo.Bar()"


def test_noise_record_is_not_printed_but_is_remembered(recording_console) -> None:
    state = ViewerState()
    handle = _handler(state, recording_console)

    result = handle(b"12:00:01.000 [DEBUG] FeatureFlag refresh", LOCAL)

    assert result is None
    assert recording_console.lines == []
    assert state.last_log_message == "12:00:01.000 [DEBUG] FeatureFlag refresh"


def test_remote_sender_is_ignored_by_default(recording_console) -> None:
    state = ViewerState()
    handle = _handler(state, recording_console)

    assert handle(b"12:00:01.000 [INFO] from afar", REMOTE) is None
    assert recording_console.lines == []
    assert state.last_log_message == ""
    assert state.current_color is LineColor.GRAY


def test_remote_sender_is_shown_when_accepted(recording_console) -> None:
    handle = _handler(ViewerState(), recording_console, accept_remote=True)

    handle(b"12:00:01.000 [INFO] from afar", REMOTE)

    assert recording_console.lines == [("[INFO] from afar", LineColor.GREEN)]


def test_blank_payload_is_skipped(recording_console) -> None:
    state = ViewerState(last_log_message="kept")
    handle = _handler(state, recording_console)

    assert handle(b"  \r\n", LOCAL) is None
    assert recording_console.lines == []
    assert state.last_log_message == "kept"


def test_undecodable_bytes_are_replaced_not_fatal(recording_console) -> None:
    handle = _handler(ViewerState(), recording_console)

    handle(b"12:00:01.000 [INFO] bad \xff byte", LOCAL)

    assert recording_console.lines == [("[INFO] bad � byte", LineColor.GREEN)]


def test_relay_to_viewer_session_on_default_port(recording_console) -> None:
    """Lines as a relay on port 9999 sends them, one host session end to end."""

    state = ViewerState()
    handle = _handler(state, recording_console)
    session = [
        b"09:00:00.000 [INFO][Engine] Starting up",
        b"09:00:00.125 [DEBUG][Engine] FeatureFlag sync",
        b"09:00:01.000 [WARN] texture missing",
        b"   while loading Assets/Sky.png",
        b"09:00:02.500 User Joined bob",
        b"09:00:03.000 [ERROR][Net] connection reset",
        b"System.Net.Sockets.SocketException: reset by peer",
    ]

    for payload in session:
        handle(payload, LOCAL)

    assert recording_console.lines == [
        ("[INFO][Engine] Starting up", LineColor.GREEN),
        ("[WARN] texture missing", LineColor.YELLOW),
        ("   while loading Assets/Sky.png", LineColor.YELLOW),
        ("User Joined bob", LineColor.DARK_YELLOW),
        ("[ERROR][Net] connection reset", LineColor.RED),
        ("System.Net.Sockets.SocketException: reset by peer", LineColor.RED),
    ]


def test_disconnect_notice_is_printed_once_per_burst(recording_console) -> None:
    state = ViewerState()
    report = create_report_disconnect(state=state, console=recording_console)

    assert report() is True
    assert report() is False
    assert recording_console.lines == [(DISCONNECT_NOTICE, LineColor.RED)]
    assert state.last_log_message == DISCONNECT_NOTICE


def test_disconnect_notice_repeats_after_new_traffic(recording_console) -> None:
    state = ViewerState()
    report = create_report_disconnect(state=state, console=recording_console)
    handle = _handler(state, recording_console)

    report()
    handle(b"12:00:01.000 [INFO] back online", LOCAL)
    report()

    assert recording_console.texts == [DISCONNECT_NOTICE, "[INFO] back online", DISCONNECT_NOTICE]


def test_remote_flood_resolves_local_addresses_once(recording_console) -> None:
    resolutions: list[int] = []
    book = LocalAddressBook(resolver=lambda: resolutions.append(1) or [LOCAL])
    handle = create_handle_datagram(
        state=ViewerState(),
        console=recording_console,
        is_local_address=book.is_local,
        accept_remote=False,
    )

    for index in range(100):
        handle(f"12:00:01.000 [INFO] remote {index}".encode(), "10.0.0.9")

    assert recording_console.lines == []
    assert len(resolutions) == 1
