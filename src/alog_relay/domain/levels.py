"""Severity abstraction shared by the relay hooks and the wire formatter.

Purpose
-------
Offer a domain-specific representation of host log severities. Hosts report
more levels than the stdlib knows about (``TRACE`` and ``MESSAGE``), so the
relay carries its own enum and converts at the edges.

Contents
--------
* :class:`Severity` enum with conversion helpers.

System Role
-----------
Used by the relay use case to render the ``[SEVERITY]`` tag of listener events
and to echo hook messages to the local log sink at the original level.
"""

from __future__ import annotations

import logging
from enum import Enum


class Severity(Enum):
    """Enumerated host log severities, ordered by numeric weight."""

    TRACE = 5
    DEBUG = 10
    INFO = 20
    MESSAGE = 25
    WARNING = 30
    ERROR = 40
    FATAL = 50

    @property
    def tag(self) -> str:
        """Return the upper-case tag rendered between brackets on the wire."""

        return self.name

    def to_python_level(self) -> int:
        """Return the :mod:`logging` level used when echoing to the local sink.

        ``MESSAGE`` echoes at ``INFO`` and ``TRACE`` one notch below ``DEBUG``.
        """

        return _PYTHON_LEVELS[self]

    @classmethod
    def from_name(cls, name: str) -> "Severity":
        normalized = name.strip().upper()
        if normalized in _ALIASES:
            return _ALIASES[normalized]
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown severity: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "Severity":
        """Translate a stdlib logging level integer into :class:`Severity`.

        Custom levels round down to the nearest known severity.

        Examples
        --------
        >>> Severity.from_python_level(logging.CRITICAL) is Severity.FATAL
        True
        >>> Severity.from_python_level(35) is Severity.WARNING
        True
        >>> Severity.from_python_level(1) is Severity.TRACE
        True
        """
        if level >= logging.CRITICAL:
            return cls.FATAL
        if level >= logging.ERROR:
            return cls.ERROR
        if level >= logging.WARNING:
            return cls.WARNING
        if level >= logging.INFO:
            return cls.INFO
        if level >= logging.DEBUG:
            return cls.DEBUG
        return cls.TRACE


_PYTHON_LEVELS = {
    Severity.TRACE: logging.DEBUG - 5,
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.MESSAGE: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.FATAL: logging.CRITICAL,
}

_ALIASES = {
    "WARN": Severity.WARNING,
    "CRITICAL": Severity.FATAL,
}


__all__ = ["Severity"]
