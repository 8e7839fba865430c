"""Non-blocking keyboard polling for the viewer console.

Contents
--------
* :func:`decode_key` - map a typed character to a :class:`Key`.
* :class:`WindowsKeyboard` - ``msvcrt`` based polling.
* :class:`PosixKeyboard` - ``select`` on a cbreak-mode terminal.
* :class:`NullKeyboard` - used when stdin is not an interactive terminal.
* :func:`create_keyboard` - pick the implementation for this platform.

When stdin is redirected no key can ever be read; the viewer then stops only
through its parent watch or an interrupt.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, TextIO

from alog_relay.application.ports.keyboard import Key, KeyboardPort

LOGGER = logging.getLogger(__name__)

_ENTER_CHARS = {"\r", "\n"}
_CLEAR_CHAR = "\x0c"  # Ctrl+L


def decode_key(char: str) -> Key:
    """Return the :class:`Key` a single typed character stands for.

    Examples
    --------
    >>> decode_key("\\r"), decode_key("\\x0c"), decode_key("q")
    (<Key.ENTER: 'enter'>, <Key.CLEAR: 'ctrl+l'>, <Key.OTHER: 'other'>)
    """

    if char in _ENTER_CHARS:
        return Key.ENTER
    if char == _CLEAR_CHAR:
        return Key.CLEAR
    return Key.OTHER


class NullKeyboard(KeyboardPort):
    """Keyboard that never reports a key."""

    def read_key(self) -> Key | None:
        return None

    def close(self) -> None:
        return None


class WindowsKeyboard(KeyboardPort):  # pragma: no cover - Windows only
    """Poll the Windows console with ``msvcrt.kbhit``."""

    def __init__(self) -> None:
        import msvcrt

        self._msvcrt: Any = msvcrt

    def read_key(self) -> Key | None:
        if not self._msvcrt.kbhit():
            return None
        char = self._msvcrt.getwch()
        if char in ("\x00", "\xe0"):
            # function and arrow keys arrive as a two-character sequence
            self._msvcrt.getwch()
            return Key.OTHER
        return decode_key(char)

    def close(self) -> None:
        return None


class PosixKeyboard(KeyboardPort):
    """Poll a terminal file descriptor switched to cbreak mode.

    The previous terminal attributes are restored by :meth:`close`.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        import termios
        import tty

        self._termios: Any = termios
        self._fd = (stream or sys.stdin).fileno()
        try:
            self._saved = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
        except termios.error as exc:
            raise OSError(f"cannot switch terminal to cbreak mode: {exc}") from exc

    def read_key(self) -> Key | None:
        import select

        ready, _, _ = select.select([self._fd], [], [], 0)
        if not ready:
            return None
        data = os.read(self._fd, 1)
        if not data:
            return None
        return decode_key(data.decode("utf-8", errors="ignore"))

    def close(self) -> None:
        saved, self._saved = self._saved, None
        if saved is not None:
            self._termios.tcsetattr(self._fd, self._termios.TCSADRAIN, saved)


def create_keyboard(stream: TextIO | None = None) -> KeyboardPort:
    """Return the keyboard implementation for the current platform and stdin."""

    target = stream or sys.stdin
    try:
        interactive = target is not None and target.isatty()
    except (AttributeError, ValueError):
        interactive = False
    if not interactive:
        LOGGER.info("stdin is not a terminal; keyboard shortcuts are disabled")
        return NullKeyboard()
    try:
        if os.name == "nt":
            return WindowsKeyboard()
        return PosixKeyboard(target)
    except (ImportError, OSError) as exc:
        LOGGER.warning("Keyboard polling unavailable: %s", exc)
        return NullKeyboard()


__all__ = ["NullKeyboard", "PosixKeyboard", "WindowsKeyboard", "create_keyboard", "decode_key"]
