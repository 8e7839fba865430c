"""Domain values travelling through the relay and the viewer.

Purpose
-------
Provide small immutable representations of a captured host log event and of a
received line after classification.

Contents
--------
* :class:`LogEvent` - producer-side event handed to the relay formatter.
* :class:`ClassifiedLine` - viewer-side result of the classification pipeline.

System Role
-----------
Sits in the domain layer so the use cases and adapters exchange plain data
objects. Neither value is stored beyond the call that creates it.
"""

from __future__ import annotations

from dataclasses import dataclass

from .colors import LineColor
from .levels import Severity


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Log event captured by a host hook.

    Attributes
    ----------
    text:
        Message body as reported by the host. May contain line breaks.
    severity:
        :class:`Severity` reported by the host hook.
    source_name:
        Name of the host subsystem that produced the event. May be empty;
        the event is still tagged, as ``[SEVERITY][]``.
    passthrough:
        ``True`` for events from the plain message hooks; their text is sent
        verbatim without severity or source tags.
    """

    text: str
    severity: Severity = Severity.INFO
    source_name: str = ""
    passthrough: bool = False


@dataclass(slots=True, frozen=True)
class ClassifiedLine:
    """A received line after timestamp stripping and colour resolution.

    Attributes
    ----------
    cleaned_text:
        Line with every timestamp token removed.
    is_new_record:
        ``True`` when the line carried a timestamp and therefore starts a new
        record; ``False`` for continuation lines.
    color:
        :class:`LineColor` the line is rendered with.
    """

    cleaned_text: str
    is_new_record: bool
    color: LineColor


__all__ = ["ClassifiedLine", "LogEvent"]
