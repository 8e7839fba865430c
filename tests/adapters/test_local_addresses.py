from __future__ import annotations

import socket

import pytest

from alog_relay.adapters.transport import local_addresses
from alog_relay.adapters.transport.local_addresses import LocalAddressBook, resolve_host_ipv4_addresses
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def test_loopback_and_resolved_addresses_are_local() -> None:
    book = LocalAddressBook(resolver=lambda: ["192.168.1.20"])

    assert book.is_local("127.0.0.1")
    assert book.is_local("127.1.2.3")
    assert book.is_local("192.168.1.20")
    assert not book("10.0.0.9")


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_miss_refreshes_once_the_interval_has_passed() -> None:
    generations = iter([["192.168.1.20"], ["192.168.1.20", "10.0.0.5"]])
    calls: list[int] = []
    clock = _Clock()

    def resolver() -> list[str]:
        calls.append(1)
        return next(generations)

    book = LocalAddressBook(resolver=resolver, refresh_interval=30.0, monotonic=clock)

    assert not book.is_local("10.0.0.5")
    assert len(calls) == 1

    clock.now += 30.0

    assert book.is_local("10.0.0.5")
    assert len(calls) == 2
    assert book.addresses() == frozenset({"192.168.1.20", "10.0.0.5"})


def test_repeated_remote_misses_do_not_resolve_again() -> None:
    calls: list[int] = []
    clock = _Clock()

    def resolver() -> list[str]:
        calls.append(1)
        return ["192.168.1.20"]

    book = LocalAddressBook(resolver=resolver, refresh_interval=30.0, monotonic=clock)

    for _ in range(100):
        clock.now += 0.1
        assert not book.is_local("10.0.0.9")

    assert len(calls) == 1


def test_explicit_refresh_ignores_the_interval() -> None:
    calls: list[int] = []
    book = LocalAddressBook(resolver=lambda: calls.append(1) or ["192.168.1.20"], monotonic=_Clock())

    book.addresses()
    book.refresh()

    assert len(calls) == 2


def test_garbage_address_is_not_local() -> None:
    book = LocalAddressBook(resolver=lambda: [])

    assert not book.is_local("not-an-ip")


def test_resolution_failure_yields_empty_set(monkeypatch: pytest.MonkeyPatch) -> None:
    def fail(*_args, **_kwargs):
        raise socket.gaierror("no such host")

    monkeypatch.setattr(local_addresses.socket, "getaddrinfo", fail)

    assert resolve_host_ipv4_addresses() == set()
