"""Concrete clock port returning the naive local time."""

from __future__ import annotations

from datetime import datetime

from alog_relay.application.ports.time import ClockPort


class LocalClock(ClockPort):
    """Wall clock in the host's local timezone."""

    def now(self) -> datetime:
        return datetime.now()


__all__ = ["LocalClock"]
