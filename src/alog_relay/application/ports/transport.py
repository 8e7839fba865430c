"""Ports for the datagram transport on both sides of the wire.

Contents
--------
* :class:`LineSenderPort` - relay side; broadcast one line per datagram.
* :class:`DatagramSourcePort` - viewer side; await the next datagram.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class LineSenderPort(Protocol):
    """Broadcast text lines; failures are logged by the adapter, never raised."""

    @property
    def port(self) -> int | None:
        """Return the bound port, or ``None`` while unbound."""

    def bind(self, port: int) -> bool:
        """(Re)open the socket on ``port``; return ``True`` on success."""

    def send(self, line: str) -> None:
        """Send ``line`` as one datagram; silently dropped while unbound."""

    def close(self) -> None:
        """Release the socket."""


@runtime_checkable
class DatagramSourcePort(Protocol):
    """Asynchronous source of ``(payload, sender_ip)`` pairs."""

    async def receive(self) -> tuple[bytes, str]:
        """Return the next datagram and the IPv4 address it came from."""

    def close(self) -> None:
        """Release the socket; pending receives fail with :class:`OSError`."""


__all__ = ["DatagramSourcePort", "LineSenderPort"]
