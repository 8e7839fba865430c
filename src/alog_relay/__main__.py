"""Console entry point for ``python -m alog_relay`` and the ``alog-relay`` script.

Purpose
-------
Run the Click command group in a test-friendly way: Click exceptions are
rendered and turned into an exit code instead of calling :func:`sys.exit`.

Contents
--------
* :func:`main` - returns the process exit code.
"""

from __future__ import annotations

from typing import Sequence

import click

from .cli import cli


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return its exit code.

    Parameters
    ----------
    argv:
        Optional argument list (defaults to ``sys.argv[1:]``).

    Examples
    --------
    >>> main(["--version"])  # doctest: +ELLIPSIS
    alog-relay version ...
    0
    """

    args = list(argv) if argv is not None else None
    try:
        result = cli.main(args=args, standalone_mode=False)
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except click.ClickException as error:
        error.show()
        return error.exit_code
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
