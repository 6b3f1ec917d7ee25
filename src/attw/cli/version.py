"""Version reporting for the attw CLI."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

DISTRIBUTION_NAME = "attw-cli"


def get_version() -> str:
    """Get the installed package version string.

    Returns
    -------
    str
        Version string, or "0.0.0-dev" if not installed.
    """
    try:
        return pkg_version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "0.0.0-dev"


__all__ = ["DISTRIBUTION_NAME", "get_version"]
