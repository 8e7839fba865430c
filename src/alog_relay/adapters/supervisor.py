"""Parent-process supervisors implementing :class:`ParentSupervisorPort`.

Purpose
-------
Let the viewer notice that the process which launched it has gone away, so it
can exit instead of lingering as an orphan.

Contents
--------
* :class:`PsutilParentSupervisor` - cross-platform, psutil based.
* :class:`PosixParentSupervisor` - fallback watching ``os.getppid()`` for
  re-parenting.
* :func:`create_parent_supervisor` - choose an implementation.

System Role
-----------
Polled by the viewer's parent watch. Lookup failures surface as
:class:`SupervisorUnavailable`; the viewer then keeps running without the
watch.
"""

from __future__ import annotations

import logging
import os

import psutil

from alog_relay.application.ports.supervisor import ParentSupervisorPort, SupervisorUnavailable

LOGGER = logging.getLogger(__name__)


class PsutilParentSupervisor(ParentSupervisorPort):
    """Watch a specific process, by default the current parent.

    :meth:`psutil.Process.is_running` compares creation times, so a recycled
    PID is not mistaken for the original parent.
    """

    def __init__(self, parent_pid: int | None = None) -> None:
        try:
            pid = parent_pid if parent_pid is not None else psutil.Process().ppid()
            self._parent = psutil.Process(pid)
        except psutil.Error as exc:
            raise SupervisorUnavailable(f"cannot look up parent process: {exc}") from exc
        self._pid = pid

    @property
    def parent_pid(self) -> int:
        return self._pid

    def is_parent_alive(self) -> bool:
        try:
            if not self._parent.is_running():
                return False
            return self._parent.status() != psutil.STATUS_ZOMBIE
        except psutil.NoSuchProcess:
            return False
        except psutil.AccessDenied:
            # still running, status hidden
            return True


class PosixParentSupervisor(ParentSupervisorPort):
    """Detect re-parenting: once the parent exits, ``getppid`` changes."""

    def __init__(self) -> None:
        if os.name != "posix":
            raise SupervisorUnavailable("getppid supervision requires a POSIX platform")
        self._pid = os.getppid()

    @property
    def parent_pid(self) -> int:
        return self._pid

    def is_parent_alive(self) -> bool:
        return os.getppid() == self._pid


def create_parent_supervisor(parent_pid: int | None = None) -> ParentSupervisorPort:
    """Return a supervisor for ``parent_pid`` (default: the actual parent).

    Raises :class:`SupervisorUnavailable` when no implementation works here.
    """

    try:
        return PsutilParentSupervisor(parent_pid)
    except SupervisorUnavailable as exc:
        if parent_pid is not None:
            raise
        LOGGER.warning("psutil parent lookup failed (%s); falling back to getppid", exc)
    return PosixParentSupervisor()


__all__ = ["PosixParentSupervisor", "PsutilParentSupervisor", "create_parent_supervisor"]
