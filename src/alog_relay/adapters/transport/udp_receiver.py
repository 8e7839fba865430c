"""UDP datagram source implementing :class:`DatagramSourcePort`.

Purpose
-------
Bind the viewer's socket with address reuse, so it can share the port with a
relay running on the same machine, and expose an awaitable ``receive``.

Contents
--------
* :data:`MAX_DATAGRAM_BYTES` - receive buffer size.
* :class:`UdpDatagramSource` - asyncio-backed receiver.

System Role
-----------
Read exclusively by :func:`run_receive_loop`. The socket is non-blocking and
read through :meth:`asyncio.AbstractEventLoop.sock_recvfrom`, so the loop only
suspends while waiting for the next datagram. :meth:`UdpDatagramSource.close`
must run on the event loop thread that awaits ``receive``.
"""

from __future__ import annotations

import asyncio
import logging
import socket
from collections.abc import Callable

from alog_relay.application.ports.transport import DatagramSourcePort

LOGGER = logging.getLogger(__name__)

MAX_DATAGRAM_BYTES = 65_535

SocketFactory = Callable[[], socket.socket]


def _default_socket() -> socket.socket:
    return socket.socket(socket.AF_INET, socket.SOCK_DGRAM)


class UdpDatagramSource(DatagramSourcePort):
    """Receive datagrams on ``bind_address:port``."""

    def __init__(
        self,
        port: int,
        *,
        bind_address: str = "0.0.0.0",
        bufsize: int = MAX_DATAGRAM_BYTES,
        socket_factory: SocketFactory | None = None,
    ) -> None:
        self._port = port
        self._bind_address = bind_address
        self._bufsize = bufsize
        self._socket_factory = socket_factory or _default_socket
        self._socket: socket.socket | None = None

    @property
    def port(self) -> int:
        return self._port

    @property
    def is_bound(self) -> bool:
        return self._socket is not None

    def bind(self) -> None:
        """Open and bind the socket; raises :class:`OSError` on failure."""
        self.close()
        sock = self._socket_factory()
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self._bind_address, self._port))
            sock.setblocking(False)
        except (OSError, OverflowError):
            sock.close()
            raise
        self._socket = sock
        LOGGER.debug("Viewer socket bound to %s:%s", self._bind_address, self._port)

    async def receive(self) -> tuple[bytes, str]:
        sock = self._socket
        if sock is None:
            raise OSError("viewer socket is closed")
        loop = asyncio.get_running_loop()
        payload, address = await loop.sock_recvfrom(sock, self._bufsize)
        return payload, address[0]

    def close(self) -> None:
        sock = self._socket
        self._socket = None
        if sock is not None:
            sock.close()


__all__ = ["MAX_DATAGRAM_BYTES", "UdpDatagramSource"]
