"""Timestamp-based record reconstruction for received lines.

Purpose
-------
Decide whether a received line starts a new record or continues the previous
one, drop noise records, and resolve the colour each printed line uses.

Contents
--------
* :class:`ViewerState` - single-slot memory of the last colour and message.
* :func:`classify_line` - pure classification of one decoded message.

System Role
-----------
The transport carries no record-boundary marker; the presence of a
time-of-day token is the only per-line signal. A continuation line that
happens to contain a time-like substring is therefore treated as a new
record, and a new record without a recognisable timestamp (for example a
truncated datagram) is shown as a continuation of whatever came before.
"""

from __future__ import annotations

from dataclasses import dataclass

from . import rules
from .colors import LineColor
from .events import ClassifiedLine


@dataclass(slots=True)
class ViewerState:
    """Mutable per-viewer memory; both slots are overwritten, never appended.

    Attributes
    ----------
    current_color:
        Colour of the most recent displayed new record, reused for
        continuation lines.
    last_log_message:
        Raw text of the most recent processed message. Only used to suppress
        repeated disconnect notices.
    """

    current_color: LineColor = LineColor.GRAY
    last_log_message: str = ""


def classify_line(message: str, state: ViewerState) -> ClassifiedLine | None:
    """Classify ``message`` and update ``state.current_color``.

    Returns ``None`` when the line is a new record matching a noise pattern;
    such lines leave ``state`` untouched.

    Examples
    --------
    >>> state = ViewerState()
    >>> classify_line("14:03:05.123 [ERROR] boom", state).color.name
    'RED'
    >>> line = classify_line("   at Foo.Bar()", state)
    >>> (line.cleaned_text, line.is_new_record, line.color.name)
    ('   at Foo.Bar()', False, 'RED')
    >>> classify_line("14:03:06.000 [DEBUG] featureflag ping", state) is None
    True
    """

    cleaned = rules.strip_timestamps(message)
    if not rules.has_timestamp(message):
        return ClassifiedLine(cleaned_text=cleaned, is_new_record=False, color=state.current_color)

    if not rules.is_valid(cleaned):
        return None

    color = rules.classify(cleaned)
    state.current_color = color
    return ClassifiedLine(cleaned_text=cleaned, is_new_record=True, color=color)


__all__ = ["ViewerState", "classify_line"]
