"""Click command group for the relay and the viewer.

Purpose
-------
Give operators and the relay's viewer launcher one entry point:
``alog-relay viewer PORT [ACCEPT_REMOTE]`` runs the viewer, ``alog-relay send``
pipes standard input to it, ``alog-relay info`` prints package metadata.

Contents
--------
* :func:`cli` - root group with ``--version``, ``--log-level``, ``--use-dotenv``.
* :func:`cli_info`, :func:`cli_viewer`, :func:`cli_send` - subcommands.
* :func:`configure_logging` - RichHandler setup for diagnostics on stderr.
"""

from __future__ import annotations

import logging
import os
from typing import TextIO

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __init__conf__, summary_info
from . import config as relay_config
from .adapters.launcher import PARENT_PID_ENV_VAR
from .config import LOG_LEVEL_ENV_VAR, PORT_ENV_VAR, RelaySettings, ViewerSettings, coerce_port
from .domain.levels import Severity
from .runtime import Relay, run_viewer

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
LOG_LEVEL_CHOICES = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_HANDLER_MARKER = "_alog_relay_cli"


def configure_logging(level: str) -> None:
    """Route diagnostics to a :class:`RichHandler` on stderr.

    Calling it again only adjusts the level; the handler is installed once.
    """

    root = logging.getLogger()
    root.setLevel(level.upper())
    if any(getattr(handler, _HANDLER_MARKER, False) for handler in root.handlers):
        return
    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    setattr(handler, _HANDLER_MARKER, True)
    root.addHandler(handler)


@click.group(
    invoke_without_command=True,
    context_settings=CLICK_CONTEXT_SETTINGS,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVEL_CHOICES, case_sensitive=False),
    envvar=LOG_LEVEL_ENV_VAR,
    default="WARNING",
    show_default=True,
    help="Level of the tool's own diagnostics on stderr.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help="Load environment variables from the nearest .env before running commands.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str, use_dotenv: bool | None) -> None:
    """Broadcast log lines over UDP and view them colourised."""

    env_toggle = os.getenv(relay_config.DOTENV_ENV_VAR)
    if relay_config.should_use_dotenv(explicit=use_dotenv, env_value=env_toggle):
        relay_config.enable_dotenv()
    configure_logging(log_level)
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("viewer", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("port", required=False)
@click.argument("accept_remote", required=False)
@click.option(
    "--parent-pid",
    type=int,
    envvar=PARENT_PID_ENV_VAR,
    default=None,
    help="Exit when this process ends (defaults to the actual parent process).",
)
def cli_viewer(port: str | None, accept_remote: str | None, parent_pid: int | None) -> int:
    """Listen on PORT and print received log lines colourised.

    ACCEPT_REMOTE ("true"/"false") also shows lines from other machines.
    Invalid values are reported in the viewer window and replaced by defaults.
    """

    settings = ViewerSettings.from_args(port, accept_remote, parent_pid=parent_pid)
    return run_viewer(settings)


@cli.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--port", envvar=PORT_ENV_VAR, default=None, help="Broadcast port (default 9999).")
@click.option("--source", default=None, help="Send lines as listener events attributed to SOURCE.")
@click.option(
    "--severity",
    default="INFO",
    show_default=True,
    help="Severity used together with --source.",
)
@click.option(
    "--input",
    "stream",
    type=click.File("r", encoding="utf-8", errors="replace"),
    default="-",
    help="File to read lines from (default: standard input).",
)
def cli_send(port: str | None, source: str | None, severity: str, stream: TextIO) -> int:
    """Broadcast every input line as one log datagram."""

    resolved_port, problem = coerce_port(port, relay_config.DEFAULT_PORT)
    if problem is not None:
        raise click.BadParameter(problem, param_hint="--port")
    try:
        level = Severity.from_name(severity)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--severity") from exc

    relay = Relay(RelaySettings(port=resolved_port, echo_to_local=False), rebind_delay=0.0)
    sent = 0
    try:
        if not relay.start():
            raise click.ClickException(f"Could not open a broadcast socket on port {resolved_port}")
        for raw in stream:
            line = raw.rstrip("\r\n")
            if not line:
                continue
            if source is None:
                result = relay.log_message(line)
            else:
                result = relay.log_event(source, level, line)
            if result is not None:
                sent += 1
    finally:
        relay.close()
    logging.getLogger(__name__).info("Sent %d line(s) to port %d", sent, resolved_port)
    return 0


__all__ = ["cli", "cli_info", "cli_send", "cli_viewer", "configure_logging"]
