"""Port for the wall clock used to stamp outgoing lines."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    """Provide the current local time."""

    def now(self) -> datetime: ...


__all__ = ["ClockPort"]
