"""Application use cases for the relay and the viewer."""

from __future__ import annotations

from .display_datagram import DISCONNECT_NOTICE, create_handle_datagram, create_report_disconnect
from .receive_loop import RECONNECT_DELAY_SECONDS, run_receive_loop
from .relay_event import create_relay_log_event

__all__ = [
    "DISCONNECT_NOTICE",
    "RECONNECT_DELAY_SECONDS",
    "create_handle_datagram",
    "create_relay_log_event",
    "create_report_disconnect",
    "run_receive_loop",
]
