"""Viewer process runtime.

Purpose
-------
Wire the viewer's socket, console, keyboard and parent supervisor together
and drive its three concurrent activities until a stop is requested.

Contents
--------
* :class:`ReceiveWorker` - runs the asyncio receive loop on its own thread.
* :func:`watch_parent` - parent-liveness poll, run on a daemon thread.
* :class:`LogViewer` - composition root and keyboard loop.
* :func:`run_viewer` - build a :class:`LogViewer` from settings and run it.

System Role
-----------
The activities share a :class:`StopSignal` and nothing else; the console
adapter serialises whole lines. Stop sources are the Enter key, Ctrl+C, and
the parent process going away. Failures during startup leave the viewer idle
rather than terminating it, so the operator can still read the error.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable
from typing import Any

from alog_relay.adapters.console.rich_console import RichConsoleAdapter
from alog_relay.adapters.keyboard import create_keyboard
from alog_relay.adapters.supervisor import create_parent_supervisor
from alog_relay.adapters.transport.local_addresses import LocalAddressBook
from alog_relay.adapters.transport.udp_receiver import UdpDatagramSource
from alog_relay.application.ports import (
    ConsolePort,
    DatagramSourcePort,
    Key,
    KeyboardPort,
    ParentSupervisorPort,
    SupervisorUnavailable,
)
from alog_relay.application.use_cases.display_datagram import create_handle_datagram, create_report_disconnect
from alog_relay.application.use_cases.receive_loop import RECONNECT_DELAY_SECONDS, run_receive_loop
from alog_relay.config import ViewerSettings
from alog_relay.domain.classifier import ViewerState
from alog_relay.domain.colors import LineColor
from alog_relay.domain.lifecycle import StopSignal, ViewerPhase

LOGGER = logging.getLogger(__name__)

WINDOW_TITLE = "ALog Viewer"
STARTED_BANNER = "LogViewer started. Press Enter to exit..."
CLEARED_BANNER = "Console cleared! Press Enter to break or Ctrl+L to clear again."

KEY_POLL_INTERVAL = 0.05
PARENT_POLL_INTERVAL = 1.0
STOP_JOIN_TIMEOUT = 2.0

SupervisorFactory = Callable[[], ParentSupervisorPort]


class ReceiveWorker:
    """Run :func:`run_receive_loop` on a dedicated thread with its own event loop.

    :meth:`stop` cancels the pending receive from any thread; the source is
    closed on the loop thread once the loop has exited.
    """

    def __init__(self, source: DatagramSourcePort, **loop_kwargs: Any) -> None:
        self._source = source
        self._loop_kwargs = loop_kwargs
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._task: asyncio.Task[None] | None = None
        self._cancel_requested = False

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_alive:
            return
        self._thread = threading.Thread(target=self._run, name="alog-viewer-receive", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = STOP_JOIN_TIMEOUT) -> None:
        with self._lock:
            self._cancel_requested = True
            loop, task = self._loop, self._task
        if loop is not None and task is not None:
            try:
                loop.call_soon_threadsafe(task.cancel)
            except RuntimeError:
                # loop already closed
                pass
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
            if thread.is_alive():
                LOGGER.warning("Receive loop did not stop within %.1fs", timeout or 0.0)

    def _run(self) -> None:
        try:
            asyncio.run(self._main())
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Receive loop crashed", exc_info=exc)

    async def _main(self) -> None:
        task = asyncio.ensure_future(run_receive_loop(self._source, **self._loop_kwargs))
        with self._lock:
            self._loop = asyncio.get_running_loop()
            self._task = task
            cancel_now = self._cancel_requested
        if cancel_now:
            task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            LOGGER.debug("Receive loop cancelled")
        finally:
            with self._lock:
                self._loop = None
                self._task = None
            self._source.close()


def watch_parent(
    supervisor_factory: SupervisorFactory,
    stop: StopSignal,
    console: ConsolePort,
    *,
    interval: float = PARENT_POLL_INTERVAL,
) -> None:
    """Request a stop once the parent process is gone.

    Any failure to look up or poll the parent disables the watch with a
    console notice; the viewer itself keeps running.
    """

    try:
        supervisor = supervisor_factory()
    except SupervisorUnavailable as exc:
        _report_unsupervised(console, exc)
        return

    while not stop.wait(interval):
        try:
            alive = supervisor.is_parent_alive()
        except Exception as exc:  # noqa: BLE001
            _report_unsupervised(console, exc)
            return
        if not alive:
            LOGGER.info("Parent process exited; stopping viewer")
            stop.request("parent process exited")
            return


def _report_unsupervised(console: ConsolePort, exc: BaseException) -> None:
    LOGGER.warning("Cannot supervise parent lifecycle", exc_info=exc)
    console.print_line(f"Cannot supervise parent lifecycle: {exc}", LineColor.RED)


class LogViewer:
    """Composition root of the viewer process.

    Parameters
    ----------
    settings:
        Resolved :class:`ViewerSettings`.
    console, keyboard, source:
        Adapters; defaults are built from ``settings`` in :func:`run_viewer`.
    supervisor_factory:
        Builds the parent supervisor on the watch thread; ``None`` disables
        the parent watch.
    is_local_address:
        Same-host check used unless ``settings.accept_remote`` is set.
    key_poll_interval, parent_poll_interval, reconnect_delay:
        Timing knobs, shortened by tests.
    """

    def __init__(
        self,
        settings: ViewerSettings,
        *,
        console: ConsolePort,
        keyboard: KeyboardPort,
        source: DatagramSourcePort,
        supervisor_factory: SupervisorFactory | None,
        is_local_address: Callable[[str], bool],
        key_poll_interval: float = KEY_POLL_INTERVAL,
        parent_poll_interval: float = PARENT_POLL_INTERVAL,
        reconnect_delay: float = RECONNECT_DELAY_SECONDS,
    ) -> None:
        self.settings = settings
        self.console = console
        self.keyboard = keyboard
        self.source = source
        self.state = ViewerState()
        self.stop_signal = StopSignal()
        self._supervisor_factory = supervisor_factory
        self._is_local_address = is_local_address
        self._key_poll_interval = key_poll_interval
        self._parent_poll_interval = parent_poll_interval
        self._reconnect_delay = reconnect_delay
        self._phase = ViewerPhase.STOPPED
        self._phase_lock = threading.Lock()
        self._receiver: ReceiveWorker | None = None
        self._watch: threading.Thread | None = None

    @property
    def phase(self) -> ViewerPhase:
        with self._phase_lock:
            return self._phase

    def _enter(self, phase: ViewerPhase) -> None:
        with self._phase_lock:
            # a late RECEIVING/RECONNECTING from the receive thread must not undo shutdown
            if self._phase in (ViewerPhase.STOPPING, ViewerPhase.STOPPED) and phase in (
                ViewerPhase.RECEIVING,
                ViewerPhase.RECONNECTING,
            ):
                return
            self._phase = phase
        LOGGER.debug("Viewer phase: %s", phase.value)

    def request_stop(self, reason: str) -> bool:
        return self.stop_signal.request(reason)

    def run(self) -> int:
        """Run until a stop is requested; return the process exit code."""
        self._enter(ViewerPhase.STARTING)
        self.console.set_title(WINDOW_TITLE)
        for problem in self.settings.problems:
            self.console.print_line(problem, LineColor.RED)

        self._start_receiving()
        self._start_parent_watch()
        try:
            self._keyboard_loop()
        except KeyboardInterrupt:
            self.request_stop("interrupted")
        finally:
            self._shutdown()
        LOGGER.info("Viewer stopped: %s", self.stop_signal.reason)
        return 0

    def _start_receiving(self) -> None:
        try:
            self._bind_source()
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Viewer initialisation failed", exc_info=exc)
            self.console.print_line(f"An error occurred during init: {exc}", LineColor.RED)
            self._enter(ViewerPhase.IDLE)
            return

        self.console.print_line(STARTED_BANNER, LineColor.GREEN)
        self._receiver = ReceiveWorker(
            self.source,
            handle_datagram=create_handle_datagram(
                state=self.state,
                console=self.console,
                is_local_address=self._is_local_address,
                accept_remote=self.settings.accept_remote,
            ),
            report_disconnect=create_report_disconnect(state=self.state, console=self.console),
            report_error=self._report_receive_error,
            stop=self.stop_signal,
            on_phase=self._enter,
            reconnect_delay=self._reconnect_delay,
        )
        self._receiver.start()
        self._enter(ViewerPhase.LISTENING)

    def _bind_source(self) -> None:
        bind = getattr(self.source, "bind", None)
        if callable(bind):
            bind()

    def _report_receive_error(self, exc: BaseException) -> None:
        self.console.print_line(f"Error receiving log entry: {exc}", LineColor.RED)

    def _start_parent_watch(self) -> None:
        if self._supervisor_factory is None:
            return
        self._watch = threading.Thread(
            target=watch_parent,
            args=(self._supervisor_factory, self.stop_signal, self.console),
            kwargs={"interval": self._parent_poll_interval},
            name="alog-viewer-parent-watch",
            daemon=True,
        )
        self._watch.start()

    def _keyboard_loop(self) -> None:
        while not self.stop_signal.is_set():
            key = self.keyboard.read_key()
            if key is Key.ENTER:
                self.request_stop("enter pressed")
                break
            if key is Key.CLEAR:
                self.console.clear()
                self.console.print_line(CLEARED_BANNER, LineColor.GREEN)
                continue
            self.stop_signal.wait(self._key_poll_interval)

    def _shutdown(self) -> None:
        self._enter(ViewerPhase.STOPPING)
        self.request_stop("shutdown")
        try:
            self.keyboard.close()
        except Exception as exc:  # noqa: BLE001
            LOGGER.warning("Could not restore terminal mode", exc_info=exc)
        if self._receiver is not None:
            self._receiver.stop()
        else:
            self.source.close()
        if self._watch is not None:
            self._watch.join(STOP_JOIN_TIMEOUT)
        self._enter(ViewerPhase.STOPPED)


def run_viewer(settings: ViewerSettings, *, console: ConsolePort | None = None) -> int:
    """Build the default adapters for ``settings`` and run the viewer."""

    resolved_console = console or RichConsoleAdapter(styles=dict(settings.styles))
    address_book = LocalAddressBook()
    if not settings.accept_remote:
        address_book.addresses()
    viewer = LogViewer(
        settings,
        console=resolved_console,
        keyboard=create_keyboard(),
        source=UdpDatagramSource(settings.port),
        supervisor_factory=lambda: create_parent_supervisor(settings.parent_pid),
        is_local_address=address_book.is_local,
    )
    return viewer.run()


__all__ = [
    "CLEARED_BANNER",
    "LogViewer",
    "ReceiveWorker",
    "STARTED_BANNER",
    "WINDOW_TITLE",
    "run_viewer",
    "watch_parent",
]
