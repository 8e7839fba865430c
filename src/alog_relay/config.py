"""Configuration helpers for the relay and the viewer.

Purpose
-------
Centralise how ports, toggles and style overrides are read from command-line
arguments, environment variables and an optional ``.env`` file.

Contents
--------
* ``.env`` support: :func:`enable_dotenv`, :func:`should_use_dotenv`,
  :data:`DOTENV_ENV_VAR`.
* Coercion: :func:`parse_port`, :func:`coerce_port`, :func:`coerce_bool`,
  :func:`parse_viewer_styles`.
* Settings: :class:`RelaySettings`, :class:`ViewerSettings`.

System Role
-----------
Configuration errors are never fatal. Invalid values fall back to a default,
log a warning and, for the viewer, are also shown on its console.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

LOGGER = logging.getLogger(__name__)

DEFAULT_PORT = 9999
MIN_PORT = 1024
MAX_PORT = 65_535

DOTENV_ENV_VAR = "ALOG_USE_DOTENV"
PORT_ENV_VAR = "ALOG_PORT"
ECHO_ENV_VAR = "ALOG_ECHO_TO_LOCAL"
ACCEPT_REMOTE_ENV_VAR = "ALOG_ACCEPT_REMOTE"
STYLES_ENV_VAR = "ALOG_VIEWER_STYLES"
LOG_LEVEL_ENV_VAR = "ALOG_LOG_LEVEL"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_DOTENV_LOADED: Path | None = None


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading is enabled.

    An explicit CLI flag wins over the :data:`DOTENV_ENV_VAR` toggle.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="yes")
    True
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` into :data:`os.environ` without overriding.

    Returns the resolved path of the loaded file, or ``None`` when none was
    found. Repeated calls reuse the first result.
    """

    global _DOTENV_LOADED
    if _DOTENV_LOADED is not None:
        return _DOTENV_LOADED
    if search_from is not None:
        candidate = _find_upwards(search_from)
    else:
        found = find_dotenv(usecwd=True)
        candidate = Path(found) if found else None
    if candidate is None:
        LOGGER.debug("No .env file found")
        return None
    load_dotenv(candidate, override=False)
    _DOTENV_LOADED = candidate.resolve()
    LOGGER.debug("Loaded environment from %s", _DOTENV_LOADED)
    return _DOTENV_LOADED


def _find_upwards(start: Path) -> Path | None:
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED
    _DOTENV_LOADED = None


def parse_port(raw: object) -> int:
    """Return ``raw`` as a port in ``[MIN_PORT, MAX_PORT]`` or raise :class:`ValueError`.

    Examples
    --------
    >>> parse_port("9999")
    9999
    >>> parse_port("80")
    Traceback (most recent call last):
    ...
    ValueError: port 80 is outside 1024-65535
    """

    try:
        port = int(str(raw).strip())
    except ValueError as exc:
        raise ValueError(f"port must be an integer, got {raw!r}") from exc
    if not MIN_PORT <= port <= MAX_PORT:
        raise ValueError(f"port {port} is outside {MIN_PORT}-{MAX_PORT}")
    return port


def coerce_port(raw: object | None, default: int = DEFAULT_PORT) -> tuple[int, str | None]:
    """Return ``(port, problem)``; ``problem`` is ``None`` when ``raw`` was usable.

    ``None`` means "not supplied" and yields ``default`` silently.
    """

    if raw is None:
        return default, None
    try:
        return parse_port(raw), None
    except ValueError as exc:
        LOGGER.warning("Invalid port %r (%s); using default %s", raw, exc, default)
        return default, str(exc)


def coerce_bool(raw: str | None, default: bool) -> tuple[bool, str | None]:
    """Return ``(value, problem)`` for a ``true/false``-style string.

    Examples
    --------
    >>> coerce_bool("True", False)
    (True, None)
    >>> coerce_bool(None, True)
    (True, None)
    >>> coerce_bool("maybe", False)[0]
    False
    """

    if raw is None or not raw.strip():
        return default, None
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True, None
    if value in _FALSY:
        return False, None
    problem = f"expected a boolean, got {raw!r}"
    LOGGER.warning("Invalid boolean %r; using default %s", raw, default)
    return default, problem


def parse_viewer_styles(raw: str | None) -> dict[str, str]:
    """Convert ``COLOR=style`` comma-separated strings into a dictionary.

    Examples
    --------
    >>> parse_viewer_styles('RED=bold red, gray = white')
    {'RED': 'bold red', 'gray': 'white'}
    >>> parse_viewer_styles(None)
    {}
    """

    if not raw:
        return {}
    result: dict[str, str] = {}
    for chunk in raw.split(","):
        if "=" not in chunk:
            continue
        key, value = chunk.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key or not value:
            continue
        result[key] = value
    return result


@dataclass(frozen=True, slots=True)
class RelaySettings:
    """Relay configuration as supplied by the host.

    Attributes
    ----------
    port:
        Broadcast port, validated to ``[MIN_PORT, MAX_PORT]``.
    echo_to_local:
        Also write hook messages to the local log sink.
    """

    port: int = DEFAULT_PORT
    echo_to_local: bool = True

    def __post_init__(self) -> None:
        parse_port(self.port)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **defaults: object) -> "RelaySettings":
        """Build settings from :data:`PORT_ENV_VAR` / :data:`ECHO_ENV_VAR` overrides."""

        env = os.environ if environ is None else environ
        base = cls(**defaults)  # type: ignore[arg-type]
        port, _ = coerce_port(env.get(PORT_ENV_VAR), base.port)
        echo, _ = coerce_bool(env.get(ECHO_ENV_VAR), base.echo_to_local)
        return cls(port=port, echo_to_local=echo)


@dataclass(frozen=True, slots=True)
class ViewerSettings:
    """Viewer launch configuration.

    Attributes
    ----------
    port:
        Port to listen on.
    accept_remote:
        Show datagrams from other machines too.
    parent_pid:
        Process to supervise; ``None`` supervises the actual parent.
    styles:
        Rich style overrides keyed by colour name.
    problems:
        Human-readable configuration problems that were recovered from.
    """

    port: int = DEFAULT_PORT
    accept_remote: bool = False
    parent_pid: int | None = None
    styles: Mapping[str, str] = field(default_factory=dict)
    problems: tuple[str, ...] = ()

    @classmethod
    def from_args(
        cls,
        port: str | None,
        accept_remote: str | None = None,
        *,
        parent_pid: int | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "ViewerSettings":
        """Build settings from positional launch arguments.

        ``accept_remote`` falls back to :data:`ACCEPT_REMOTE_ENV_VAR` when not
        given on the command line.
        """

        env = os.environ if environ is None else environ
        problems: list[str] = []
        if port is None:
            LOGGER.warning("No port given; using default %s", DEFAULT_PORT)
        resolved_port, port_problem = coerce_port(port, DEFAULT_PORT)
        if port_problem is not None:
            problems.append(f"Error parsing Port: {port_problem}")
            problems.append(f"Using default Port: {resolved_port}")
        raw_accept = accept_remote if accept_remote is not None else env.get(ACCEPT_REMOTE_ENV_VAR)
        accept, accept_problem = coerce_bool(raw_accept, False)
        if accept_problem is not None:
            problems.append(f"Error parsing accept-remote flag: {accept_problem}; only local senders are shown")
        return cls(
            port=resolved_port,
            accept_remote=accept,
            parent_pid=parent_pid,
            styles=parse_viewer_styles(env.get(STYLES_ENV_VAR)),
            problems=tuple(problems),
        )


__all__ = [
    "ACCEPT_REMOTE_ENV_VAR",
    "DEFAULT_PORT",
    "DOTENV_ENV_VAR",
    "ECHO_ENV_VAR",
    "LOG_LEVEL_ENV_VAR",
    "MAX_PORT",
    "MIN_PORT",
    "PORT_ENV_VAR",
    "RelaySettings",
    "STYLES_ENV_VAR",
    "ViewerSettings",
    "coerce_bool",
    "coerce_port",
    "enable_dotenv",
    "parse_port",
    "parse_viewer_styles",
    "should_use_dotenv",
]
