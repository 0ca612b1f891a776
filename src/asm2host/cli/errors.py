"""
asm2host Exit Codes
===================

Maps exceptions raised during a translation to the message printed on
stderr and the process exit code.

| Exception                                 | Exit code          |
|-------------------------------------------|--------------------|
| ConfigurationError                        | 2 (INVALID_ARGS)   |
| ExpressionError and other Asm2HostError   | 1 (BUILD_ERROR)    |
| click.BadParameter                        | 2 (INVALID_ARGS)   |
| FileNotFoundError, PermissionError        | 2 (INVALID_ARGS)   |
| anything else                             | 3 (INTERNAL_ERROR) |
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from asm2host.errors import Asm2HostError, ConfigurationError


class ExitCode(IntEnum):
    """Exit status of the asm2host command."""
    SUCCESS = 0
    BUILD_ERROR = 1      # A literal expression failed to parse; nothing written
    INVALID_ARGS = 2     # Bad option value, configuration or input path
    INTERNAL_ERROR = 3   # Bug in the translator


def exit_code_for(error: Exception) -> ExitCode:
    """Classify an exception raised while translating."""
    if isinstance(error, ConfigurationError):
        return ExitCode.INVALID_ARGS
    if isinstance(error, Asm2HostError):
        return ExitCode.BUILD_ERROR
    if isinstance(error, (click.BadParameter, FileNotFoundError, PermissionError)):
        return ExitCode.INVALID_ARGS
    return ExitCode.INTERNAL_ERROR


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Report a failed translation on stderr and exit.

    Source errors are prefixed with ``error_type`` (``Translation error:``);
    internal errors print a traceback when ``verbose`` is set.

    Raises:
        SystemExit: Always
    """
    code = exit_code_for(error)

    if code == ExitCode.INTERNAL_ERROR:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
    elif code == ExitCode.BUILD_ERROR and error_type:
        click.echo(f"{error_type} error: {error}", err=True)
    else:
        click.echo(f"Error: {error}", err=True)

    sys.exit(code)
