"""
CLI Error Handling
==================

Consistent error messages and exit codes for the symscan command.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for the CLI."""
    SUCCESS = 0
    SCAN_ERROR = 1       # Syntax errors in the scanned source
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception raised during a CLI run and exit.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from symscan.errors import SymscanError
    from symscan.lang.errors import LanguageError

    if isinstance(error, LanguageError):
        # Already formatted with "error:" prefix and source context
        click.echo(str(error), err=True)
        sys.exit(ExitCode.SCAN_ERROR)

    elif isinstance(error, SymscanError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.SCAN_ERROR)

    elif isinstance(error, (click.BadParameter, FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
