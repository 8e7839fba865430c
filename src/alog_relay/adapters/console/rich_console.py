"""Rich-powered console adapter implementing :class:`ConsolePort`.

Purpose
-------
Render classified lines with Rich so the viewer's colour categories map onto
terminal styles, with optional per-colour overrides.

Contents
--------
* :data:`_STYLE_MAP` - default colour-to-style mapping.
* :class:`RichConsoleAdapter` - adapter constructed by the viewer runtime.

System Role
-----------
Primary human-facing sink of the viewer. Received text is printed literally:
Rich markup, emoji codes and highlighting are disabled so log lines such as
``[INFO] ...`` are never interpreted as style tags.
"""

from __future__ import annotations

import threading
from typing import Mapping

from rich.console import Console

from alog_relay.application.ports.console import ConsolePort
from alog_relay.domain.colors import LineColor


_STYLE_MAP: Mapping[LineColor, str] = {
    LineColor.GRAY: "white",
    LineColor.RED: "bright_red",
    LineColor.DARK_RED: "red",
    LineColor.GREEN: "bright_green",
    LineColor.DARK_GREEN: "green",
    LineColor.BLUE: "bright_blue",
    LineColor.YELLOW: "bright_yellow",
    LineColor.DARK_YELLOW: "yellow",
    LineColor.MAGENTA: "bright_magenta",
    LineColor.DARK_MAGENTA: "magenta",
    LineColor.CYAN: "bright_cyan",
    LineColor.DARK_CYAN: "cyan",
}

#: Default Rich styles keyed by :class:`LineColor`; dark variants use the
#: standard ANSI colours, bright variants the high-intensity ones.


class RichConsoleAdapter(ConsolePort):
    """Print whole lines using Rich styles with optional overrides."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: Mapping[LineColor | str, str] | None = None,
    ) -> None:
        """Configure the console adapter with colour and style overrides.

        ``styles`` keys may be :class:`LineColor` members or their names
        (``"dark_red"``); unknown names raise :class:`ValueError`.
        """
        if console is not None:
            self._console = console
        else:
            self._console = Console(force_terminal=force_color or None, no_color=no_color, highlight=False)
        self._no_color = no_color
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            color = LineColor.from_name(key) if isinstance(key, str) else key
            merged[color] = value
        self._style_map = merged
        self._lock = threading.Lock()

    @property
    def console(self) -> Console:
        return self._console

    def style_for(self, color: LineColor) -> str:
        """Return the Rich style used for ``color``."""

        return self._style_map.get(color, _STYLE_MAP[LineColor.GRAY])

    def print_line(self, text: str, color: LineColor = LineColor.GRAY) -> None:
        """Print ``text`` in the style mapped to ``color``.

        Examples
        --------
        >>> from io import StringIO
        >>> console = Console(file=StringIO(), record=True)
        >>> adapter = RichConsoleAdapter(console=console)
        >>> adapter.print_line("[INFO] hello", LineColor.GREEN)
        >>> console.export_text()
        '[INFO] hello\\n'
        """
        style = "" if self._no_color else self.style_for(color)
        with self._lock:
            self._console.print(
                text,
                style=style,
                markup=False,
                emoji=False,
                highlight=False,
                soft_wrap=True,
            )

    def clear(self) -> None:
        with self._lock:
            self._console.clear()

    def set_title(self, title: str) -> None:
        """Set the terminal window title; ignored when the console is not a terminal."""
        with self._lock:
            self._console.set_window_title(title)


__all__ = ["RichConsoleAdapter"]
