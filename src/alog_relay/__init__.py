"""Public package surface of ``alog_relay``.

Host applications embed :class:`Relay` to broadcast their log events; the
viewer side is reached through the ``alog-relay viewer`` command or
:func:`run_viewer`.
"""

from __future__ import annotations

from .config import RelaySettings, ViewerSettings
from .domain import ClassifiedLine, LineColor, LogEvent, Severity, ViewerState, classify_line
from .runtime import LogViewer, Relay, run_viewer


def summary_info() -> str:
    """Return the metadata banner printed by ``alog-relay info``.

    Examples
    --------
    >>> summary_info().startswith("Info for alog_relay:")
    True
    """

    from . import __init__conf__

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


__all__ = [
    "ClassifiedLine",
    "LineColor",
    "LogEvent",
    "LogViewer",
    "Relay",
    "RelaySettings",
    "Severity",
    "ViewerSettings",
    "ViewerState",
    "classify_line",
    "run_viewer",
    "summary_info",
]
