"""Relay façade embedded in the host application.

Purpose
-------
Expose the hook surface a host calls when it logs something, and keep the
broadcast socket (and optionally the viewer process) in step with the
configured port.

Contents
--------
* :data:`SINK_LOGGER_NAME` - logger used for local echo.
* :class:`Relay` - composition root and hook surface.

System Role
-----------
Outer shell of the sending side. The host owns when hooks fire; the relay
formats, echoes and broadcasts. There is no module-level state: every
:class:`Relay` owns one :class:`RelayState`.

Examples
--------
>>> import logging
>>> relay = Relay(RelaySettings(port=9999, echo_to_local=False))  # doctest: +SKIP
>>> relay.start()  # doctest: +SKIP
True
>>> relay.install_logging_handler()  # doctest: +SKIP
>>> logging.getLogger("host.db").warning("slow query")  # doctest: +SKIP
>>> relay.close()  # doctest: +SKIP
"""

from __future__ import annotations

import logging
from dataclasses import replace
from types import TracebackType

from alog_relay.adapters.clock import LocalClock
from alog_relay.adapters.debounce import DEFAULT_DELAY_SECONDS, Debouncer
from alog_relay.adapters.launcher import ViewerLauncher
from alog_relay.adapters.logging_handler import RelayLogHandler
from alog_relay.adapters.transport.udp_sender import UdpBroadcastSender
from alog_relay.application.ports import ClockPort, HostLogHooks, LineSenderPort
from alog_relay.application.use_cases.relay_event import create_relay_log_event
from alog_relay.config import RelaySettings, coerce_port
from alog_relay.domain.events import LogEvent
from alog_relay.domain.levels import Severity

from ._state import RelayState

LOGGER = logging.getLogger(__name__)

SINK_LOGGER_NAME = "alog_relay.sink"


class Relay:
    """Capture host log events and broadcast them to the viewer.

    Parameters
    ----------
    settings:
        Initial configuration; defaults to :meth:`RelaySettings.from_env`.
    sender:
        Transport; a :class:`UdpBroadcastSender` by default.
    clock:
        Time source for line stamps.
    launcher:
        When given, the viewer is (re)started with the current port on
        :meth:`start` and on every applied port change.
    sink:
        Local echo logger; ``alog_relay.sink`` by default.
    rebind_delay:
        Debounce window for port changes in seconds.
    """

    def __init__(
        self,
        settings: RelaySettings | None = None,
        *,
        sender: LineSenderPort | None = None,
        clock: ClockPort | None = None,
        launcher: ViewerLauncher | None = None,
        sink: logging.Logger | None = None,
        rebind_delay: float = DEFAULT_DELAY_SECONDS,
    ) -> None:
        resolved = settings if settings is not None else RelaySettings.from_env()
        transport = sender if sender is not None else UdpBroadcastSender()
        self._sink = sink or logging.getLogger(SINK_LOGGER_NAME)
        relay_event = create_relay_log_event(
            sender=transport,
            clock=clock or LocalClock(),
            sink=self._sink,
            echo_to_local=lambda: self._state.settings.echo_to_local,
        )
        self._state = RelayState(
            settings=resolved,
            sender=transport,
            debouncer=Debouncer(self._apply_port, delay=rebind_delay),
            relay_event=relay_event,
            launcher=launcher,
        )

    @property
    def state(self) -> RelayState:
        return self._state

    @property
    def settings(self) -> RelaySettings:
        return self._state.settings

    def start(self) -> bool:
        """Launch the viewer (when configured) and bind the socket.

        Returns ``True`` when the socket is bound. A failed bind is logged and
        leaves the relay idle; hooks keep working but nothing is sent.
        """
        with self._state.lock:
            self._state.closed = False
        return self._apply_port(self._state.settings.port)

    def reconfigure(self, *, port: int | str | None = None, echo_to_local: bool | None = None) -> None:
        """Apply configuration changes coming from the host.

        ``echo_to_local`` takes effect immediately. A port change is debounced:
        the socket is rebound after the debounce window, and a further change
        inside that window replaces the pending one. Invalid ports are logged
        and ignored.
        """
        if echo_to_local is not None:
            self._state.settings = replace(self._state.settings, echo_to_local=echo_to_local)
        if port is None:
            return
        resolved, problem = coerce_port(port, self._state.settings.port)
        if problem is not None:
            return
        LOGGER.debug("Port change to %s scheduled in %.1fs", resolved, self._state.debouncer.delay)
        self._state.debouncer.schedule(resolved)

    def _apply_port(self, port: int) -> bool:
        with self._state.lock:
            if self._state.closed:
                LOGGER.debug("Port change to %s dropped, relay is closed", port)
                return False
            self._state.settings = replace(self._state.settings, port=port)
            if self._state.launcher is not None:
                self._state.launcher.start(port)
            return self._state.sender.bind(port)

    # host hook surface -------------------------------------------------

    def log_message(self, message: str) -> str | None:
        """Hook for plain host messages; sent verbatim, echoed at ``MESSAGE``."""
        return self._state.relay_event(LogEvent(message, Severity.MESSAGE, passthrough=True), echo=True)

    def log_warning(self, message: str) -> str | None:
        """Hook for host warnings; sent verbatim, echoed at ``WARNING``."""
        return self._state.relay_event(LogEvent(message, Severity.WARNING, passthrough=True), echo=True)

    def log_error(self, message: str) -> str | None:
        """Hook for host errors; sent verbatim, echoed at ``ERROR``."""
        return self._state.relay_event(LogEvent(message, Severity.ERROR, passthrough=True), echo=True)

    def log_event(self, source_name: str, severity: Severity | str, message: str) -> str | None:
        """Generic listener hook; sent as ``[SEVERITY][source] message``.

        An empty ``source_name`` still carries the tags, as ``[SEVERITY][]``.
        """
        level = severity if isinstance(severity, Severity) else Severity.from_name(severity)
        return self._state.relay_event(LogEvent(message, level, source_name))

    def subscribe(self, hooks: HostLogHooks) -> None:
        """Register the three message hooks with a host hook registry."""
        hooks.on_log(self.log_message)
        hooks.on_warning(self.log_warning)
        hooks.on_error(self.log_error)

    def install_logging_handler(self, logger: logging.Logger | str | None = None, level: int = logging.NOTSET) -> RelayLogHandler:
        """Attach a :class:`RelayLogHandler` to ``logger`` (root by default).

        Records from the relay's own logger tree and from the echo sink are
        never forwarded.
        """
        target = logger if isinstance(logger, logging.Logger) else logging.getLogger(logger)
        handler = RelayLogHandler(self.log_event, level=level, sink_name=self._sink.name)
        target.addHandler(handler)
        self._state.handlers.append((target, handler))
        return handler

    def close(self) -> None:
        """Cancel pending rebinds, detach handlers, stop the viewer, close the socket.

        A rebind already in flight when ``close`` runs is dropped.
        """
        with self._state.lock:
            self._state.closed = True
        self._state.debouncer.cancel()
        for target, handler in self._state.handlers:
            target.removeHandler(handler)
        self._state.handlers.clear()
        if self._state.launcher is not None:
            self._state.launcher.stop()
        self._state.sender.close()

    def __enter__(self) -> "Relay":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["Relay", "SINK_LOGGER_NAME"]
