"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

from collections.abc import Callable
from importlib import metadata

name = "alog_relay"
title = "Broadcast host log events over UDP and view them colourised in a separate console"
shell_command = "alog-relay"
homepage = "https://github.com/alog-relay/alog_relay"
author = "alog_relay maintainers"

try:
    version = metadata.version("alog-relay")
except metadata.PackageNotFoundError:
    version = "0.0.0"


def print_info(writer: Callable[[str], None] = print) -> None:
    """Write the metadata banner, one newline-terminated line per call.

    Examples
    --------
    >>> lines = []
    >>> print_info(lines.append)
    >>> lines[0]
    'Info for alog_relay:\\n'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    writer(f"Info for {name}:\n")
    writer("\n")
    for label, value in fields:
        writer(f"    {label:<{pad}} = {value}\n")


__all__ = ["author", "homepage", "name", "print_info", "shell_command", "title", "version"]
