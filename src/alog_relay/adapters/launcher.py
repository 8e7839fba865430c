"""Start and restart the viewer as a child process of the relay host.

The relay hands the viewer exactly one positional argument, the port. The
host's PID travels in :data:`PARENT_PID_ENV_VAR` so the viewer supervises the
host itself even when an interpreter launcher sits in between.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from collections.abc import Callable, Sequence
from typing import Any

LOGGER = logging.getLogger(__name__)

PARENT_PID_ENV_VAR = "ALOG_PARENT_PID"

Popen = Callable[..., Any]


def default_viewer_command() -> list[str]:
    """Return the command that runs the viewer with this interpreter."""

    return [sys.executable, "-m", "alog_relay", "viewer"]


class ViewerLauncher:
    """Own at most one running viewer child process.

    Parameters
    ----------
    command:
        Command prefix; the port is appended as the last argument.
    new_console:
        On Windows, open the viewer in its own console window.
    popen:
        Process factory, :class:`subprocess.Popen` by default.
    """

    def __init__(
        self,
        command: Sequence[str] | None = None,
        *,
        new_console: bool = True,
        popen: Popen = subprocess.Popen,
    ) -> None:
        self._command = list(command) if command is not None else default_viewer_command()
        self._new_console = new_console
        self._popen = popen
        self._process: Any = None

    @property
    def process(self) -> Any:
        return self._process

    def start(self, port: int) -> Any:
        """Kill any previous viewer and start a new one for ``port``.

        Returns the new process handle, or ``None`` when the launch failed.
        """
        self.stop()
        argv = [*self._command, str(port)]
        env = dict(os.environ)
        env[PARENT_PID_ENV_VAR] = str(os.getpid())
        kwargs: dict[str, Any] = {"env": env}
        if self._new_console and os.name == "nt":
            kwargs["creationflags"] = getattr(subprocess, "CREATE_NEW_CONSOLE", 0)
        try:
            self._process = self._popen(argv, **kwargs)
        except OSError as exc:
            LOGGER.error("Could not start the log viewer (%s): %s", argv[0], exc)
            self._process = None
            return None
        LOGGER.info("Log viewer started on port %s", port)
        return self._process

    def stop(self) -> None:
        process, self._process = self._process, None
        if process is None:
            return
        try:
            process.kill()
            process.wait(timeout=5)
        except (OSError, subprocess.TimeoutExpired) as exc:
            LOGGER.warning("Could not stop the previous log viewer: %s", exc)


__all__ = ["PARENT_PID_ENV_VAR", "ViewerLauncher", "default_viewer_command"]
