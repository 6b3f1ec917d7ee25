"""Error taxonomy for the attw command line."""

from __future__ import annotations


class AttwError(Exception):
    """Base class for attw errors.

    Parameters
    ----------
    message
        Human-readable description.
    code
        Machine-readable error code; subclasses provide a default.
    """

    default_code: str = "UNKNOWN"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code


class ConfigError(AttwError, ValueError):
    """Raised when the configuration is malformed or invalid."""

    default_code = "INVALID_CONFIG"


class FetchError(AttwError, RuntimeError):
    """Raised by analysis engines when a package cannot be downloaded."""

    default_code = "FETCH_FAILED"


class AnalysisError(AttwError, RuntimeError):
    """Raised when the analysis engine fails or returns an unusable result."""

    default_code = "ANALYSIS"


__all__ = [
    "AnalysisError",
    "AttwError",
    "ConfigError",
    "FetchError",
]
