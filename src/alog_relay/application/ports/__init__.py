"""Protocols separating the use cases from concrete adapters."""

from __future__ import annotations

from .console import ConsolePort
from .hooks import HostLogHooks, MessageHandler
from .keyboard import Key, KeyboardPort
from .supervisor import ParentSupervisorPort, SupervisorUnavailable
from .time import ClockPort
from .transport import DatagramSourcePort, LineSenderPort

__all__ = [
    "ClockPort",
    "ConsolePort",
    "DatagramSourcePort",
    "HostLogHooks",
    "Key",
    "KeyboardPort",
    "LineSenderPort",
    "MessageHandler",
    "ParentSupervisorPort",
    "SupervisorUnavailable",
]
