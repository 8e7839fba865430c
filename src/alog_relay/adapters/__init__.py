"""Concrete adapters implementing the application ports."""

from __future__ import annotations

from .clock import LocalClock
from .console.rich_console import RichConsoleAdapter
from .debounce import Debouncer
from .keyboard import NullKeyboard, create_keyboard
from .launcher import ViewerLauncher
from .logging_handler import RelayLogHandler
from .supervisor import PosixParentSupervisor, PsutilParentSupervisor, create_parent_supervisor
from .transport import LocalAddressBook, UdpBroadcastSender, UdpDatagramSource

__all__ = [
    "Debouncer",
    "LocalAddressBook",
    "LocalClock",
    "NullKeyboard",
    "PosixParentSupervisor",
    "PsutilParentSupervisor",
    "RelayLogHandler",
    "RichConsoleAdapter",
    "UdpBroadcastSender",
    "UdpDatagramSource",
    "ViewerLauncher",
    "create_keyboard",
    "create_parent_supervisor",
]
