"""CLI entrypoints for attw."""

from attw.cli.app import main
from attw.cli.exit_codes import ExitCode

__all__ = ["ExitCode", "main"]
