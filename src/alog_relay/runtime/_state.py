"""Relay state container owned by a :class:`~alog_relay.runtime.relay.Relay`."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from alog_relay.adapters.debounce import Debouncer
from alog_relay.adapters.launcher import ViewerLauncher
from alog_relay.adapters.logging_handler import RelayLogHandler
from alog_relay.application.ports import LineSenderPort
from alog_relay.application.use_cases.relay_event import RelayCallable
from alog_relay.config import RelaySettings


@dataclass(slots=True)
class RelayState:
    """Aggregate of live collaborators assembled by :class:`Relay`.

    Parameters
    ----------
    settings:
        Currently applied configuration. ``settings.port`` changes only when a
        debounced rebind actually runs.
    sender:
        Broadcast transport.
    debouncer:
        Pending-rebind timer; at most one rebind is ever queued.
    relay_event:
        Callable produced by :func:`create_relay_log_event`.
    launcher:
        Optional viewer launcher restarted together with the socket.
    handlers:
        Logging handlers installed by :meth:`Relay.install_logging_handler`,
        with the logger each was attached to.
    closed:
        Set by :meth:`Relay.close`; a rebind that fires afterwards is dropped.
    lock:
        Serialises rebinds against :meth:`Relay.close`.
    """

    settings: RelaySettings
    sender: LineSenderPort
    debouncer: Debouncer[int]
    relay_event: RelayCallable
    launcher: ViewerLauncher | None = None
    handlers: list[tuple[logging.Logger, RelayLogHandler]] = field(default_factory=list)
    closed: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock)


__all__ = ["RelayState"]
