"""Same-host trust boundary for the viewer.

By default the viewer shows only datagrams sent from one of this machine's own
IPv4 addresses. The address set comes from resolving the host name, plus the
loopback range. A miss triggers a refresh so interfaces that came up after
start are picked up, but at most once per ``refresh_interval`` seconds: the
lookup blocks, and it runs on the thread that reads the socket.
"""

from __future__ import annotations

import ipaddress
import logging
import socket
import threading
import time
from collections.abc import Callable, Iterable

LOGGER = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL = 30.0

Resolver = Callable[[], Iterable[str]]


def resolve_host_ipv4_addresses() -> set[str]:
    """Return the IPv4 addresses the local host name resolves to.

    Resolution errors yield an empty set; the loopback range still counts as
    local in :class:`LocalAddressBook`.
    """

    hostname = socket.gethostname()
    try:
        infos = socket.getaddrinfo(hostname, None, family=socket.AF_INET)
    except OSError as exc:
        LOGGER.warning("Could not resolve local addresses for %s: %s", hostname, exc)
        return set()
    return {str(info[4][0]) for info in infos}


def _is_loopback(address: str) -> bool:
    try:
        return ipaddress.IPv4Address(address).is_loopback
    except ValueError:
        return False


class LocalAddressBook:
    """Answer whether an address belongs to this machine.

    Examples
    --------
    >>> book = LocalAddressBook(resolver=lambda: ["192.168.1.20"])
    >>> book.is_local("192.168.1.20"), book.is_local("127.0.0.1"), book.is_local("10.0.0.9")
    (True, True, False)
    """

    def __init__(
        self,
        *,
        resolver: Resolver | None = None,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._resolver = resolver or resolve_host_ipv4_addresses
        self._refresh_interval = refresh_interval
        self._monotonic = monotonic
        self._lock = threading.Lock()
        self._addresses: frozenset[str] | None = None
        self._resolved_at = 0.0

    def addresses(self) -> frozenset[str]:
        with self._lock:
            if self._addresses is None:
                self._resolve_locked()
            return self._addresses  # type: ignore[return-value]

    def refresh(self) -> frozenset[str]:
        with self._lock:
            return self._resolve_locked()

    def is_local(self, address: str) -> bool:
        if _is_loopback(address) or address in self.addresses():
            return True
        with self._lock:
            if self._monotonic() - self._resolved_at < self._refresh_interval:
                return False
            return address in self._resolve_locked()

    def _resolve_locked(self) -> frozenset[str]:
        self._addresses = frozenset(self._resolver())
        self._resolved_at = self._monotonic()
        return self._addresses

    __call__ = is_local


__all__ = ["DEFAULT_REFRESH_INTERVAL", "LocalAddressBook", "resolve_host_ipv4_addresses"]
