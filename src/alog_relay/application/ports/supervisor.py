"""Port for watching the process that launched the viewer."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class SupervisorUnavailable(RuntimeError):
    """Raised when the parent process cannot be looked up on this platform."""


@runtime_checkable
class ParentSupervisorPort(Protocol):
    """Report whether the viewer's parent process is still running."""

    def is_parent_alive(self) -> bool:
        """Return ``False`` once the parent has exited.

        Raises :class:`SupervisorUnavailable` when liveness cannot be
        determined at all.
        """


__all__ = ["ParentSupervisorPort", "SupervisorUnavailable"]
