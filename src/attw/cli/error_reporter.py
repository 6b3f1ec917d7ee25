"""Classification and reporting of fatal errors."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NoReturn

from rich.console import Console
from rich.text import Text

from attw.cli.exit_codes import ExitCode
from attw.errors import AttwError, ConfigError, FetchError

logger = logging.getLogger(__name__)

CHECKING_PACKAGE = "checking package"
CHECKING_FILE = "checking file"
READING_CONFIG = "reading config file"

UNKNOWN_CODE = AttwError.default_code


@dataclass(frozen=True)
class ErrorReport:
    """User-facing description of a fatal error.

    Parameters
    ----------
    message
        Text printed to stderr.
    code
        Machine-readable error code.
    exit_code
        Process exit code.
    """

    message: str
    code: str
    exit_code: ExitCode = ExitCode.FAILURE


def classify_error(error: BaseException, context: str) -> ErrorReport:
    """Classify an error raised while performing ``context``.

    Parameters
    ----------
    error
        Raised exception.
    context
        Activity label such as ``"checking package"``.

    Returns
    -------
    ErrorReport
        Message and code for the error.
    """
    if isinstance(error, ConfigError):
        return ErrorReport(f"error: {error.message}", error.code)
    if isinstance(error, FetchError):
        return ErrorReport(
            f"error while fetching package ({error.code}):\n{error.message}",
            error.code,
        )
    message = str(error)
    if message:
        code = getattr(error, "code", None)
        return ErrorReport(
            f"error while {context}:\n{message}",
            code if isinstance(code, str) and code else UNKNOWN_CODE,
        )
    return ErrorReport(f"unknown error while {context}", UNKNOWN_CODE)


def report_error(
    error: BaseException,
    context: str,
    *,
    console: Console | None = None,
) -> NoReturn:
    """Print a fatal error to stderr and terminate the command.

    Raises
    ------
    SystemExit
        Always, with the report's exit code.
    """
    report = classify_error(error, context)
    logger.debug("Fatal %s while %s (code %s)", type(error).__name__, context, report.code)
    err_console = console if console is not None else Console(stderr=True, highlight=False)
    err_console.print(Text(report.message, style="red"))
    raise SystemExit(int(report.exit_code)) from error


__all__ = [
    "CHECKING_FILE",
    "CHECKING_PACKAGE",
    "READING_CONFIG",
    "UNKNOWN_CODE",
    "ErrorReport",
    "classify_error",
    "report_error",
]
