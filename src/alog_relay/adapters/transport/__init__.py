"""UDP transport adapters for both ends of the wire."""

from __future__ import annotations

from .local_addresses import LocalAddressBook, resolve_host_ipv4_addresses
from .udp_receiver import MAX_DATAGRAM_BYTES, UdpDatagramSource
from .udp_sender import BROADCAST_ADDRESS, UdpBroadcastSender

__all__ = [
    "BROADCAST_ADDRESS",
    "LocalAddressBook",
    "MAX_DATAGRAM_BYTES",
    "UdpBroadcastSender",
    "UdpDatagramSource",
    "resolve_host_ipv4_addresses",
]
