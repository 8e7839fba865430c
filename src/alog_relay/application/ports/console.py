"""Console port describing how the viewer renders lines.

Purpose
-------
Define the abstraction for adapters that print coloured lines to an
interactive console, letting the viewer use cases depend on a narrow
protocol.

Contents
--------
* :class:`ConsolePort` - runtime-checkable protocol for line output, clearing
  and window titles.

System Role
-----------
Both viewer loops write through this port. Implementations must emit each
line as a whole so output from the receive loop and the keyboard loop never
interleaves inside a line.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from alog_relay.domain.colors import LineColor


@runtime_checkable
class ConsolePort(Protocol):
    """Render whole lines to an interactive console."""

    def print_line(self, text: str, color: LineColor = LineColor.GRAY) -> None:
        """Print ``text`` followed by a newline in ``color``."""

    def clear(self) -> None:
        """Clear the visible console."""

    def set_title(self, title: str) -> None:
        """Set the console window title where the terminal supports it."""


__all__ = ["ConsolePort"]
