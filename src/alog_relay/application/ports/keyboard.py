"""Port for non-blocking keyboard polling in the viewer."""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable


class Key(Enum):
    """Keys the viewer reacts to."""

    ENTER = "enter"
    CLEAR = "ctrl+l"
    OTHER = "other"


@runtime_checkable
class KeyboardPort(Protocol):
    """Poll the console for a pending key press without blocking."""

    def read_key(self) -> Key | None:
        """Return the next pending key, or ``None`` when nothing was pressed."""

    def close(self) -> None:
        """Restore any terminal mode changed while polling."""


__all__ = ["Key", "KeyboardPort"]
