"""Wire format for relayed log lines.

Purpose
-------
Turn a :class:`LogEvent` into the single text line carried by one datagram.

Contents
--------
* :func:`format_timestamp` - ``HH:MM:SS.mmm`` rendering of a local time.
* :func:`format_body` - source/severity tagging of the message body.
* :func:`format_wire_line` - full line, timestamp prefix included.
* :func:`encode_wire_line` - UTF-8 payload for the transport.

System Role
-----------
The viewer recognises new records only by the leading timestamp, so every
line produced here starts with one. Line breaks inside the message are left
untouched; the receiving side shows any timestamp-less line as a continuation.
"""

from __future__ import annotations

from datetime import datetime

from .events import LogEvent

WIRE_ENCODING = "utf-8"


def format_timestamp(moment: datetime) -> str:
    """Return ``moment`` as 24-hour ``HH:MM:SS.mmm``.

    Examples
    --------
    >>> format_timestamp(datetime(2025, 1, 1, 14, 3, 5, 123456))
    '14:03:05.123'
    """

    return f"{moment:%H:%M:%S}.{moment.microsecond // 1000:03d}"


def format_body(event: LogEvent) -> str:
    """Return the message body for ``event``.

    Listener events are tagged ``[SEVERITY][source] message``; passthrough
    events carry the message verbatim.

    Examples
    --------
    >>> from alog_relay.domain.levels import Severity
    >>> format_body(LogEvent("ready", Severity.WARNING, "host.db"))
    '[WARNING][host.db] ready'
    >>> format_body(LogEvent("plain text", Severity.ERROR, passthrough=True))
    'plain text'
    >>> format_body(LogEvent("no source", Severity.ERROR))
    '[ERROR][] no source'
    """

    if event.passthrough:
        return event.text
    return f"[{event.severity.tag}][{event.source_name}] {event.text}"


def format_wire_line(event: LogEvent, moment: datetime) -> str:
    """Return the complete wire line for ``event`` stamped with ``moment``."""

    return f"{format_timestamp(moment)} {format_body(event)}"


def encode_wire_line(line: str) -> bytes:
    return line.encode(WIRE_ENCODING)


__all__ = ["WIRE_ENCODING", "encode_wire_line", "format_body", "format_timestamp", "format_wire_line"]
