"""Last-write-wins debouncer for relay reconfiguration.

Purpose
-------
Delay an action until its input has been stable for a fixed period. Every new
:meth:`Debouncer.schedule` call cancels the pending run and restarts the
timer, so at most one run is ever pending and it always uses the newest value.

System Role
-----------
The relay rebinds its socket and restarts the viewer through this class when
the configured port changes.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_DELAY_SECONDS = 3.0


class Debouncer(Generic[T]):
    """Run ``action(value)`` once, ``delay`` seconds after the last schedule.

    A generation token guards against a timer that already fired but has not
    yet taken the lock when a newer schedule arrives.

    Examples
    --------
    >>> seen = []
    >>> debouncer = Debouncer(seen.append, delay=0.01)
    >>> debouncer.schedule(1)
    >>> debouncer.schedule(2)
    >>> debouncer.flush()
    True
    >>> seen
    [2]
    """

    def __init__(self, action: Callable[[T], None], *, delay: float = DEFAULT_DELAY_SECONDS) -> None:
        self._action = action
        self._delay = delay
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._generation = 0
        self._pending_value: T | None = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def schedule(self, value: T) -> None:
        """Cancel any pending run and start a new timer for ``value``."""
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            generation = self._generation
            self._pending_value = value
            timer = threading.Timer(self._delay, self._fire, args=(generation,))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked()
            self._generation += 1

    def flush(self) -> bool:
        """Run the pending action now; return ``False`` when nothing was pending."""
        with self._lock:
            if self._timer is None:
                return False
            generation = self._generation
        self._fire(generation)
        return True

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._timer is None:
                return
            self._cancel_locked()
            value = self._pending_value
            self._pending_value = None
        try:
            self._action(value)  # type: ignore[arg-type]
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Debounced action failed: %s", exc, exc_info=exc)

    def _cancel_locked(self) -> None:
        timer = self._timer
        self._timer = None
        if timer is not None:
            timer.cancel()


__all__ = ["DEFAULT_DELAY_SECONDS", "Debouncer"]
