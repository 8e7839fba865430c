"""Asynchronous receive loop of the viewer.

Purpose
-------
Await datagrams until a stop is requested, routing each one to the display
use case and classifying transport failures.

Contents
--------
* :data:`RECONNECT_DELAY_SECONDS` - pause after a connection reset.
* :func:`run_receive_loop` - the loop itself.

System Role
-----------
Runs as the only reader of the viewer socket. Failures are recovered in
place:

* :class:`ConnectionResetError` - transient; announce once and retry after
  :data:`RECONNECT_DELAY_SECONDS`.
* :class:`OSError` after a stop request - the socket was closed under a
  pending receive; this is the normal shutdown path.
* anything else - reported and the loop continues.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from alog_relay.application.ports import DatagramSourcePort
from alog_relay.domain.lifecycle import StopSignal, ViewerPhase

logger = logging.getLogger(__name__)

RECONNECT_DELAY_SECONDS = 1.0


async def run_receive_loop(
    source: DatagramSourcePort,
    *,
    handle_datagram: Callable[[bytes, str], object],
    report_disconnect: Callable[[], object],
    report_error: Callable[[BaseException], None],
    stop: StopSignal,
    on_phase: Callable[[ViewerPhase], None] | None = None,
    reconnect_delay: float = RECONNECT_DELAY_SECONDS,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """Receive and dispatch datagrams until ``stop`` is set.

    Parameters
    ----------
    source:
        Datagram source; its ``receive`` coroutine yields ``(payload, ip)``.
    handle_datagram:
        Callable produced by :func:`create_handle_datagram`.
    report_disconnect:
        Callable produced by :func:`create_report_disconnect`.
    report_error:
        Invoked with unexpected receive or handler failures.
    stop:
        Shared cancellation signal, checked before every receive.
    on_phase:
        Optional observer notified when the loop switches between
        ``RECEIVING`` and ``RECONNECTING``.
    reconnect_delay, sleep:
        Pause applied after a reset; injectable for tests.
    """

    phase: ViewerPhase | None = None

    def enter(next_phase: ViewerPhase) -> None:
        nonlocal phase
        if phase is next_phase:
            return
        phase = next_phase
        logger.debug("Receive loop entering %s", next_phase.value)
        if on_phase is not None:
            on_phase(next_phase)

    while not stop.is_set():
        try:
            payload, sender_ip = await source.receive()
            enter(ViewerPhase.RECEIVING)
            handle_datagram(payload, sender_ip)
        except ConnectionResetError:
            enter(ViewerPhase.RECONNECTING)
            report_disconnect()
            await sleep(reconnect_delay)
        except OSError as exc:
            if stop.is_set():
                logger.debug("Receive interrupted by shutdown: %s", exc)
                break
            logger.warning("Error receiving log entry", exc_info=exc)
            report_error(exc)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Error handling log entry", exc_info=exc)
            report_error(exc)


__all__ = ["RECONNECT_DELAY_SECONDS", "run_receive_loop"]
