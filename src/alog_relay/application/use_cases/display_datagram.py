"""Use cases rendering received datagrams on the viewer console.

Purpose
-------
Decode a datagram, apply the same-host trust boundary, run the record
classifier and print the result. A second use case reports transport resets
without flooding the console.

Contents
--------
* :data:`DISCONNECT_NOTICE` - text printed on a connection reset.
* :func:`create_handle_datagram` - factory for the per-datagram callable.
* :func:`create_report_disconnect` - factory for the de-duplicated notice.

System Role
-----------
Both callables share one :class:`ViewerState` owned by the viewer runtime and
are driven by :func:`alog_relay.application.use_cases.receive_loop.run_receive_loop`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from alog_relay.application.ports import ConsolePort
from alog_relay.domain.classifier import ViewerState, classify_line
from alog_relay.domain.colors import LineColor
from alog_relay.domain.events import ClassifiedLine
from alog_relay.domain.wire import WIRE_ENCODING

logger = logging.getLogger(__name__)

DISCONNECT_NOTICE = "Disconnected from server. Attempting to reconnect..."

DatagramHandler = Callable[[bytes, str], "ClassifiedLine | None"]


def create_handle_datagram(
    *,
    state: ViewerState,
    console: ConsolePort,
    is_local_address: Callable[[str], bool],
    accept_remote: bool = False,
) -> DatagramHandler:
    """Build the callable processing one ``(payload, sender_ip)`` pair.

    Blank payloads and, unless ``accept_remote`` is set, payloads from
    addresses that are not one of this machine's own are discarded before
    classification and leave ``state`` unchanged. Every other payload becomes
    ``state.last_log_message`` once handled, whether it was printed or
    dropped by the noise filter.
    """

    def handle(payload: bytes, sender_ip: str) -> ClassifiedLine | None:
        message = payload.decode(WIRE_ENCODING, errors="replace")
        if not message.strip():
            return None
        if not accept_remote and not is_local_address(sender_ip):
            logger.debug("Discarding datagram from non-local sender %s", sender_ip)
            return None

        line = classify_line(message, state)
        if line is not None:
            console.print_line(line.cleaned_text, line.color)
        state.last_log_message = message
        return line

    return handle


def create_report_disconnect(*, state: ViewerState, console: ConsolePort) -> Callable[[], bool]:
    """Build the callable announcing a transport reset.

    The notice is printed only when it differs from the last processed
    message, so a burst of resets produces a single line. Returns ``True``
    when the notice was printed.
    """

    def report() -> bool:
        if state.last_log_message == DISCONNECT_NOTICE:
            return False
        console.print_line(DISCONNECT_NOTICE, LineColor.RED)
        state.last_log_message = DISCONNECT_NOTICE
        return True

    return report


__all__ = ["DISCONNECT_NOTICE", "DatagramHandler", "create_handle_datagram", "create_report_disconnect"]
