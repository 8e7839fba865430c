"""UDP broadcast sender implementing :class:`LineSenderPort`.

Purpose
-------
Own the relay's socket: bind it with broadcast and address reuse enabled and
send each line as one datagram to the limited-broadcast address.

Contents
--------
* :data:`BROADCAST_ADDRESS` - ``255.255.255.255``.
* :class:`UdpBroadcastSender` - concrete sender.

System Role
-----------
Sits under the relay use case. Every failure is logged and swallowed: a
failed bind leaves the sender unbound and later sends become no-ops, a failed
send loses that one line. Nothing here may terminate the host.
"""

from __future__ import annotations

import logging
import socket
import threading
from collections.abc import Callable

from alog_relay.application.ports.transport import LineSenderPort
from alog_relay.domain.wire import encode_wire_line

LOGGER = logging.getLogger(__name__)

BROADCAST_ADDRESS = "255.255.255.255"

SocketFactory = Callable[[], socket.socket]


def _default_socket() -> socket.socket:
    return socket.socket(socket.AF_INET, socket.SOCK_DGRAM)


class UdpBroadcastSender(LineSenderPort):
    """Broadcast text lines over UDP.

    Parameters
    ----------
    bind_address:
        Local interface to bind (``0.0.0.0`` for all).
    broadcast_address:
        Destination address; tests point this at loopback.
    socket_factory:
        Callable creating an unbound ``AF_INET``/``SOCK_DGRAM`` socket.
    """

    def __init__(
        self,
        *,
        bind_address: str = "0.0.0.0",
        broadcast_address: str = BROADCAST_ADDRESS,
        socket_factory: SocketFactory | None = None,
    ) -> None:
        self._bind_address = bind_address
        self._broadcast_address = broadcast_address
        self._socket_factory = socket_factory or _default_socket
        self._socket: socket.socket | None = None
        self._port: int | None = None
        self._lock = threading.Lock()

    @property
    def port(self) -> int | None:
        return self._port

    @property
    def is_bound(self) -> bool:
        return self._socket is not None

    def bind(self, port: int) -> bool:
        """Close any open socket, then open a new one on ``port``.

        Returns ``True`` when the new socket is bound. On failure the error is
        logged and the sender stays unbound.
        """
        with self._lock:
            self._close_locked()
            sock: socket.socket | None = None
            try:
                sock = self._socket_factory()
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
                sock.bind((self._bind_address, port))
            except (OSError, OverflowError, TypeError) as exc:
                LOGGER.error("Error in UDP client: could not bind port %s: %s", port, exc)
                if sock is not None:
                    sock.close()
                return False
            self._socket = sock
            self._port = port
            LOGGER.info("UDP client started on port %s", port)
            return True

    def send(self, line: str) -> None:
        """Broadcast ``line``; dropped silently while unbound."""
        sock = self._socket
        port = self._port
        if sock is None or port is None:
            return
        try:
            sock.sendto(encode_wire_line(line), (self._broadcast_address, port))
        except OSError as exc:
            LOGGER.error("Error sending message to UDP server: %s", exc)

    def close(self) -> None:
        with self._lock:
            self._close_locked()

    def _close_locked(self) -> None:
        sock = self._socket
        self._socket = None
        self._port = None
        if sock is None:
            return
        try:
            sock.close()
        except OSError as exc:  # pragma: no cover - close rarely fails
            LOGGER.debug("Ignoring error while closing UDP client: %s", exc)


__all__ = ["BROADCAST_ADDRESS", "UdpBroadcastSender"]
