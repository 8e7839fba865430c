"""Host hook contracts consumed by the relay.

The host decides when its hooks fire; the relay only defines what it accepts.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

MessageHandler = Callable[[str], None]


@runtime_checkable
class HostLogHooks(Protocol):
    """Three message hooks, one per host severity channel."""

    def on_log(self, handler: MessageHandler) -> None:
        """Register ``handler`` for plain messages."""

    def on_warning(self, handler: MessageHandler) -> None:
        """Register ``handler`` for warnings."""

    def on_error(self, handler: MessageHandler) -> None:
        """Register ``handler`` for errors."""


__all__ = ["HostLogHooks", "MessageHandler"]
