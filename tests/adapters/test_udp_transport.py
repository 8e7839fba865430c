from __future__ import annotations

import asyncio
import socket

import pytest

from alog_relay.adapters.transport.udp_receiver import UdpDatagramSource
from alog_relay.adapters.transport.udp_sender import BROADCAST_ADDRESS, UdpBroadcastSender
from alog_relay.application.ports import DatagramSourcePort, LineSenderPort
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


class _FakeSocket:
    def __init__(self, registry: list["_FakeSocket"], *, fail_bind: bool = False) -> None:
        self.options: dict[tuple[int, int], int] = {}
        self.bound_to: tuple[str, int] | None = None
        self.sent: list[tuple[bytes, tuple[str, int]]] = []
        self.closed = False
        self._fail_bind = fail_bind
        registry.append(self)

    def setsockopt(self, level: int, option: int, value: int) -> None:
        self.options[(level, option)] = value

    def bind(self, address: tuple[str, int]) -> None:
        if self._fail_bind:
            raise OSError("address in use")
        self.bound_to = address

    def sendto(self, payload: bytes, address: tuple[str, int]) -> int:
        if self.closed:
            raise OSError("closed")
        self.sent.append((payload, address))
        return len(payload)

    def close(self) -> None:
        self.closed = True


def _sender(registry: list[_FakeSocket], *, fail_bind: bool = False) -> UdpBroadcastSender:
    return UdpBroadcastSender(socket_factory=lambda: _FakeSocket(registry, fail_bind=fail_bind))


def test_sender_satisfies_port() -> None:
    assert isinstance(UdpBroadcastSender(), LineSenderPort)
    assert isinstance(UdpDatagramSource(9999), DatagramSourcePort)


def test_bind_enables_broadcast_and_reuse() -> None:
    sockets: list[_FakeSocket] = []
    sender = _sender(sockets)

    assert sender.bind(9999) is True

    (sock,) = sockets
    assert sock.bound_to == ("0.0.0.0", 9999)
    assert sock.options[(socket.SOL_SOCKET, socket.SO_BROADCAST)] == 1
    assert sock.options[(socket.SOL_SOCKET, socket.SO_REUSEADDR)] == 1
    assert sender.port == 9999


def test_send_broadcasts_one_utf8_datagram_per_line() -> None:
    sockets: list[_FakeSocket] = []
    sender = _sender(sockets)
    sender.bind(9999)

    sender.send("12:00:00.000 Grüße")

    assert sockets[0].sent == [("12:00:00.000 Grüße".encode("utf-8"), (BROADCAST_ADDRESS, 9999))]


def test_rebind_closes_previous_socket_and_keeps_exactly_one_open() -> None:
    sockets: list[_FakeSocket] = []
    sender = _sender(sockets)

    sender.bind(9999)
    sender.bind(10001)
    sender.bind(10001)

    assert [sock.closed for sock in sockets] == [True, True, False]
    assert sender.port == 10001
    sender.send("line")
    assert sockets[-1].sent[0][1] == (BROADCAST_ADDRESS, 10001)


def test_failed_bind_leaves_sender_unbound_and_sends_are_dropped(caplog: pytest.LogCaptureFixture) -> None:
    sockets: list[_FakeSocket] = []
    sender = _sender(sockets, fail_bind=True)

    assert sender.bind(9999) is False
    sender.send("dropped")

    assert sender.is_bound is False
    assert sender.port is None
    assert sockets[0].closed is True
    assert sockets[0].sent == []
    assert any("could not bind port 9999" in record.getMessage() for record in caplog.records)


def test_send_error_is_logged_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    sockets: list[_FakeSocket] = []
    sender = _sender(sockets)
    sender.bind(9999)
    sockets[0].closed = True

    sender.send("lost")

    assert any("Error sending message" in record.getMessage() for record in caplog.records)


def test_close_is_idempotent() -> None:
    sockets: list[_FakeSocket] = []
    sender = _sender(sockets)
    sender.bind(9999)

    sender.close()
    sender.close()

    assert sockets[0].closed is True
    assert sender.is_bound is False


def test_receiver_bind_failure_raises_and_closes_socket() -> None:
    sockets: list[_FakeSocket] = []
    source = UdpDatagramSource(9999, socket_factory=lambda: _FakeSocket(sockets, fail_bind=True))

    with pytest.raises(OSError, match="address in use"):
        source.bind()

    assert sockets[0].closed is True
    assert source.is_bound is False


def test_receive_on_closed_source_raises_oserror() -> None:
    source = UdpDatagramSource(9999)

    with pytest.raises(OSError, match="closed"):
        asyncio.run(source.receive())


def test_loopback_datagram_arrives_byte_for_byte(free_udp_port: int) -> None:
    source = UdpDatagramSource(free_udp_port, bind_address="127.0.0.1")
    line = "12:00:00.000 [INFO][host] héllo\n   at Foo()"
    peer = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    async def exchange() -> tuple[bytes, str]:
        peer.sendto(line.encode("utf-8"), ("127.0.0.1", free_udp_port))
        return await asyncio.wait_for(source.receive(), timeout=5)

    try:
        try:
            source.bind()
        except OSError as exc:
            pytest.skip(f"loopback UDP unavailable: {exc}")
        payload, sender_ip = asyncio.run(exchange())
    finally:
        peer.close()
        source.close()

    assert payload == line.encode("utf-8")
    assert sender_ip == "127.0.0.1"
