"""Viewer lifecycle phases and the cooperative stop signal shared by its loops."""

from __future__ import annotations

import threading
from enum import Enum


class ViewerPhase(Enum):
    """Lifecycle of the viewer process.

    ``STARTING -> LISTENING -> (RECEIVING | RECONNECTING) -> STOPPING -> STOPPED``.
    A viewer whose socket failed to bind goes from ``STARTING`` straight to
    ``IDLE`` and only waits for a stop request.
    """

    STARTING = "starting"
    IDLE = "idle"
    LISTENING = "listening"
    RECEIVING = "receiving"
    RECONNECTING = "reconnecting"
    STOPPING = "stopping"
    STOPPED = "stopped"


class StopSignal:
    """Thread-safe, set-once cancellation flag remembering the first reason.

    Examples
    --------
    >>> signal = StopSignal()
    >>> signal.request("enter pressed")
    True
    >>> signal.request("parent exited")
    False
    >>> signal.reason
    'enter pressed'
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: str | None = None

    def request(self, reason: str) -> bool:
        """Set the signal; return ``True`` only for the first request."""

        with self._lock:
            if self._event.is_set():
                return False
            self._reason = reason
            self._event.set()
            return True

    def is_set(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the signal is set or ``timeout`` elapses."""

        return self._event.wait(timeout)

    @property
    def reason(self) -> str | None:
        return self._reason


__all__ = ["StopSignal", "ViewerPhase"]
