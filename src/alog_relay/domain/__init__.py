"""Domain values and pure rules used by the relay and the viewer."""

from __future__ import annotations

from .classifier import ViewerState, classify_line
from .colors import LineColor
from .events import ClassifiedLine, LogEvent
from .levels import Severity
from .lifecycle import StopSignal, ViewerPhase

__all__ = [
    "ClassifiedLine",
    "LineColor",
    "LogEvent",
    "Severity",
    "StopSignal",
    "ViewerPhase",
    "ViewerState",
    "classify_line",
]
