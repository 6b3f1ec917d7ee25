"""Exit code taxonomy for the attw CLI."""

from __future__ import annotations

from collections.abc import Collection
from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes.

    Strict-mode violations and fatal errors share ``FAILURE``; neither is
    distinguished from the other by callers such as CI pipelines.
    """

    SUCCESS = 0
    FAILURE = 1

    @classmethod
    def for_problems(cls, problems: Collection[object], *, strict: bool) -> ExitCode:
        """Return the strict-mode exit code for the problems that were reported."""
        if strict and problems:
            return cls.FAILURE
        return cls.SUCCESS


__all__ = ["ExitCode"]
