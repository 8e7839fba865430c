"""Display colours assigned to received log lines.

The palette follows the sixteen classic console colours; only the members the
classification table uses (plus the neutral default) are listed. Presentation
adapters decide how each member is rendered.
"""

from __future__ import annotations

from enum import Enum


class LineColor(Enum):
    """Colour categories produced by the line classifier."""

    GRAY = "gray"
    RED = "red"
    DARK_RED = "dark_red"
    GREEN = "green"
    DARK_GREEN = "dark_green"
    BLUE = "blue"
    YELLOW = "yellow"
    DARK_YELLOW = "dark_yellow"
    MAGENTA = "magenta"
    DARK_MAGENTA = "dark_magenta"
    CYAN = "cyan"
    DARK_CYAN = "dark_cyan"

    @classmethod
    def default(cls) -> "LineColor":
        """Return the neutral colour used for unclassified lines."""

        return cls.GRAY

    @classmethod
    def from_name(cls, name: str) -> "LineColor":
        """Resolve ``name`` case-insensitively, accepting ``-`` or ``_`` separators.

        Examples
        --------
        >>> LineColor.from_name("dark-red") is LineColor.DARK_RED
        True
        """
        normalized = name.strip().upper().replace("-", "_")
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown line colour: {name!r}") from exc


__all__ = ["LineColor"]
