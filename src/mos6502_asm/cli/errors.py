"""
CLI Error Handling
==================

Provides consistent error reporting and exit codes for the command line.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from mos6502_asm.errors import AssemblerIOError, Mos6502Error


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Assembly error in at least one file
    INVALID_ARGS = 2     # Invalid arguments or unreadable inputs
    INTERNAL_ERROR = 3   # Unexpected internal error


def report_error(error: Exception, error_type: str | None = None) -> None:
    """Print an assembler error to stderr without exiting."""
    prefix = f"{error_type} error: " if error_type else "Error: "
    click.echo(f"{prefix}{error}", err=True)


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Exception handler for the CLI entry point.

    Formats the error message, optionally prints a traceback for
    internal errors in verbose mode, and exits with the matching code.

    Raises:
        SystemExit: Always
    """
    if isinstance(error, AssemblerIOError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, Mos6502Error):
        report_error(error, error_type)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, (click.BadParameter, ValueError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
