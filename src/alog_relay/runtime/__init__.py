"""Runtime shells for both processes.

Purpose
-------
Expose the two composition roots host code and the CLI talk to, instead of
importing the inner layers directly.

Contents
--------
* :class:`Relay` - in-host façade that captures log events and broadcasts them.
* :class:`LogViewer` / :func:`run_viewer` - the standalone viewer process.

System Role
-----------
Outer shell of the clean-architecture layout: adapters are chosen and wired
here, policy stays in :mod:`alog_relay.application` and :mod:`alog_relay.domain`.
"""

from __future__ import annotations

from ._state import RelayState
from .relay import SINK_LOGGER_NAME, Relay
from .viewer import LogViewer, ReceiveWorker, run_viewer, watch_parent

__all__ = [
    "LogViewer",
    "ReceiveWorker",
    "Relay",
    "RelayState",
    "SINK_LOGGER_NAME",
    "run_viewer",
    "watch_parent",
]
