"""Bridge from the stdlib :mod:`logging` tree to the relay.

Purpose
-------
Act as the generic host listener: every record from any logger becomes a
``(source_name, severity, message)`` relay event.

System Role
-----------
Records emitted by the relay's own ``alog_relay`` logger tree are skipped,
and so are records from the echo sink the relay writes to, even when the host
supplied that sink. Relayed output can never be relayed again.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from alog_relay.domain.levels import Severity

OWN_LOGGER_NAME = "alog_relay"

EventCallback = Callable[[str, Severity, str], None]


def is_own_record(record: logging.LogRecord, sink_name: str | None = None) -> bool:
    if sink_name is not None and record.name == sink_name:
        return True
    return record.name == OWN_LOGGER_NAME or record.name.startswith(OWN_LOGGER_NAME + ".")


class RelayLogHandler(logging.Handler):
    """Forward log records to ``callback(source_name, severity, message)``.

    Exception and stack information is appended to the message, so a
    traceback travels in the same datagram as the record that carried it.
    ``sink_name`` names the relay's echo logger; its records are skipped.
    """

    def __init__(self, callback: EventCallback, level: int = logging.NOTSET, *, sink_name: str | None = None) -> None:
        super().__init__(level)
        self._callback = callback
        self._sink_name = sink_name

    def emit(self, record: logging.LogRecord) -> None:
        if is_own_record(record, self._sink_name):
            return
        try:
            message = record.getMessage()
            if record.exc_info:
                message = f"{message}\n{self._format_exception(record)}"
            if record.stack_info:
                message = f"{message}\n{record.stack_info}"
            self._callback(record.name, Severity.from_python_level(record.levelno), message)
        except Exception:  # noqa: BLE001
            self.handleError(record)

    def _format_exception(self, record: logging.LogRecord) -> str:
        formatter = self.formatter or logging.Formatter()
        return formatter.formatException(record.exc_info)  # type: ignore[arg-type]


__all__ = ["OWN_LOGGER_NAME", "RelayLogHandler", "is_own_record"]
