"""Use case turning a captured host event into one broadcast datagram.

Purpose
-------
Stamp the event with the local time, render the wire line, optionally echo
the message to the relay's own log sink, and hand the line to the sender.

Contents
--------
* :func:`create_relay_log_event` - factory returning the per-event callable.

System Role
-----------
Application-layer orchestrator invoked by the hook callbacks installed on
:class:`alog_relay.runtime.relay.Relay`. Sending is fire-and-forget: nothing
raised here may reach the host's hook dispatcher.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from alog_relay.application.ports import ClockPort, LineSenderPort
from alog_relay.domain.events import LogEvent
from alog_relay.domain.wire import format_wire_line

logger = logging.getLogger(__name__)

RelayCallable = Callable[..., "str | None"]


def create_relay_log_event(
    *,
    sender: LineSenderPort,
    clock: ClockPort,
    sink: logging.Logger,
    echo_to_local: Callable[[], bool],
) -> RelayCallable:
    """Build the relay callable bound to the current collaborators.

    Parameters
    ----------
    sender:
        Transport broadcasting one line per datagram.
    clock:
        Source of the local time stamped on every line.
    sink:
        Logger standing in for the host's own log sink; used for local echo.
    echo_to_local:
        Zero-argument callable read on every event so configuration changes
        apply without rebuilding the pipeline.

    Returns
    -------
    Callable
        ``relay(event, *, echo=False)`` returning the wire line that was
        handed to the sender, or ``None`` when rendering failed.

    Examples
    --------
    >>> from datetime import datetime
    >>> class FixedClock:
    ...     def now(self):
    ...         return datetime(2025, 1, 1, 10, 0, 0)
    >>> class Recorder:
    ...     port = 9999
    ...     def __init__(self):
    ...         self.lines = []
    ...     def send(self, line):
    ...         self.lines.append(line)
    >>> recorder = Recorder()
    >>> relay = create_relay_log_event(
    ...     sender=recorder, clock=FixedClock(), sink=logging.getLogger("doc"), echo_to_local=lambda: False
    ... )
    >>> relay(LogEvent("[WARN] updated: https://x", passthrough=True))
    '10:00:00.000 [WARN] updated: https://x'
    """

    def relay(event: LogEvent, *, echo: bool = False) -> str | None:
        if echo and echo_to_local():
            sink.log(event.severity.to_python_level(), event.text)
        try:
            line = format_wire_line(event, clock.now())
            sender.send(line)
        except Exception as exc:  # noqa: BLE001
            logger.error("Error sending message to UDP server: %s", exc, exc_info=exc)
            return None
        return line

    return relay


__all__ = ["RelayCallable", "create_relay_log_event"]
