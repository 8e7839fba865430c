from __future__ import annotations

import socket
from io import StringIO

import pytest
from rich.console import Console

from alog_relay.domain.colors import LineColor


@pytest.fixture
def record_console() -> Console:
    """Rich console writing to memory so tests can inspect the rendered text."""

    return Console(file=StringIO(), record=True, width=200, color_system="truecolor", force_terminal=True)


class RecordingConsole:
    """In-memory :class:`ConsolePort` keeping ``(text, colour)`` pairs."""

    def __init__(self) -> None:
        self.lines: list[tuple[str, LineColor]] = []
        self.titles: list[str] = []
        self.clears = 0

    def print_line(self, text: str, color: LineColor = LineColor.GRAY) -> None:
        self.lines.append((text, color))

    def clear(self) -> None:
        self.clears += 1

    def set_title(self, title: str) -> None:
        self.titles.append(title)

    @property
    def texts(self) -> list[str]:
        return [text for text, _ in self.lines]


@pytest.fixture
def recording_console() -> RecordingConsole:
    return RecordingConsole()


@pytest.fixture
def free_udp_port() -> int:
    """Return a UDP port on loopback that is free right now."""

    candidate = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        candidate.bind(("127.0.0.1", 0))
    except OSError as exc:
        candidate.close()
        pytest.skip(f"loopback UDP unavailable: {exc}")
    port = candidate.getsockname()[1]
    candidate.close()
    if port < 1024:
        pytest.skip("ephemeral port below the accepted range")
    return port
