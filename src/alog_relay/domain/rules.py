"""Pattern tables driving timestamp detection, noise filtering and colouring.

Purpose
-------
Hold the static, ordered regular expressions the viewer applies to every
received line.

Contents
--------
* :data:`TIMESTAMP_PATTERN` - time-of-day token marking the start of a record.
* :data:`INVALID_RULES` - noise patterns; a matching record is dropped.
* :data:`CLASSIFICATION_RULES` - ordered ``(pattern, colour)`` pairs.
* :func:`has_timestamp`, :func:`strip_timestamps`, :func:`is_valid`,
  :func:`classify` - helpers over the tables.

System Role
-----------
Compiled once at import time and never mutated. Order in
:data:`CLASSIFICATION_RULES` is significant: the first matching pattern wins,
so error indicators come before the broader warning and status vocabulary.
"""

from __future__ import annotations

import re
from typing import Pattern

from .colors import LineColor

_FLAGS = re.IGNORECASE

TIMESTAMP_PATTERN: Pattern[str] = re.compile(
    r"\d{1,2}:\d{1,2}:\d{1,2}"
    r"(?:\s[APap][Mm])?"
    r"(?:\.\d{1,3})?"
    r"(?:\s+\(\s*-*\d+\s?FPS\s?\))?"
    r"\s*"
)
#: ``H:MM:SS`` with optional AM/PM, fractional seconds and ``(60 FPS)`` suffix.

INVALID_RULES: tuple[Pattern[str], ...] = (
    re.compile(r"session updated, forcing status update", _FLAGS),
    re.compile(r"\[debug\]\[resonitemodloader\]\s+intercepting call to appdomain\.getassemblies\(\)", _FLAGS),
    re.compile(r"rebuild:", _FLAGS),
    re.compile(r"featureflag", _FLAGS),
)

CLASSIFICATION_RULES: tuple[tuple[Pattern[str], LineColor], ...] = (
    # errors and fatal
    (
        re.compile(r"\[(?:error|fatal)\]|failed load: could not gather|exception(?: in runningcoroutine)?|<\w{32}>:0", _FLAGS),
        LineColor.RED,
    ),
    (re.compile(r"restoring currently updating root", _FLAGS), LineColor.DARK_RED),
    # informational
    (re.compile(r"\[info\]", _FLAGS), LineColor.GREEN),
    (re.compile(r"\[message\]", _FLAGS), LineColor.DARK_GREEN),
    # debugging
    (re.compile(r"\[(?:debug|trace)\]|resonite \(unity\) game pack", _FLAGS), LineColor.BLUE),
    # warnings
    (
        re.compile(
            r"\[(?:warn|warning)\]|updated:\s?https|lastmodifyinguser|broadcastkey|unresolved"
            r"|can be modified only through the drive reference",
            _FLAGS,
        ),
        LineColor.YELLOW,
    ),
    (re.compile(r"user (?:join|joined|spawn|spawned)|spawning user|user\s+\S+\s+role:", _FLAGS), LineColor.DARK_YELLOW),
    # session and status lifecycle
    (
        re.compile(r"signalr|clearing expired status|status (?:before|after) clearing|status initialized|updated:\s+", _FLAGS),
        LineColor.DARK_MAGENTA,
    ),
    # direct user messages
    (re.compile(r"sendstatustouser:", _FLAGS), LineColor.MAGENTA),
    # refresh and record loading
    (re.compile(r"running refresh on:", _FLAGS), LineColor.CYAN),
    (
        re.compile(r"loading object from record|loading from uri|loading from record|source record", _FLAGS),
        LineColor.DARK_CYAN,
    ),
)


def has_timestamp(message: str) -> bool:
    """Return ``True`` when ``message`` contains a time-of-day token anywhere.

    Examples
    --------
    >>> has_timestamp("14:03:05.123 [INFO] hello")
    True
    >>> has_timestamp("   at Foo.Bar()")
    False
    """

    return TIMESTAMP_PATTERN.search(message) is not None


def strip_timestamps(message: str) -> str:
    """Remove every timestamp token (and the whitespace after it).

    Examples
    --------
    >>> strip_timestamps("14:03:05.123 [INFO] hello")
    '[INFO] hello'
    >>> strip_timestamps("2:15:09 PM (60 FPS) ready")
    'ready'
    """

    return TIMESTAMP_PATTERN.sub("", message)


def is_valid(message: str) -> bool:
    """Return ``False`` when ``message`` matches any noise pattern."""

    return not any(pattern.search(message) for pattern in INVALID_RULES)


def classify(message: str) -> LineColor:
    """Return the colour of the first matching rule, or the neutral default.

    Examples
    --------
    >>> classify("[ERROR] [WARN] both").name
    'RED'
    >>> classify("nothing special").name
    'GRAY'
    """

    for pattern, color in CLASSIFICATION_RULES:
        if pattern.search(message):
            return color
    return LineColor.default()


__all__ = [
    "CLASSIFICATION_RULES",
    "INVALID_RULES",
    "TIMESTAMP_PATTERN",
    "classify",
    "has_timestamp",
    "is_valid",
    "strip_timestamps",
]
