"""Seam to the external analysis engine.

The engine fetches or unpacks a package, analyses it and classifies
problems. This package never reimplements any of that; it only calls the
protocol below on whichever engine is installed.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from importlib.metadata import entry_points
from typing import Protocol, runtime_checkable

from attw.analysis import AnalysisResult, Problem, ProblemKind
from attw.errors import AnalysisError

ENGINE_ENTRY_POINT_GROUP = "attw.engines"
ENGINE_ENV_VAR = "ATTW_ENGINE"

logger = logging.getLogger(__name__)


@runtime_checkable
class AnalysisEngine(Protocol):
    """Contract implemented by analysis engines."""

    def check_package(self, package_name: str, version: str | None = None) -> AnalysisResult:
        """Fetch a package from the registry and analyse it."""
        ...

    def check_tgz(self, data: bytes) -> AnalysisResult:
        """Analyse a packed package tarball."""
        ...

    def get_problems(self, analysis: AnalysisResult) -> Sequence[Problem]:
        """Return the problems detected in an analysis, in engine order."""
        ...

    def group_by_kind(self, problems: Sequence[Problem]) -> Mapping[ProblemKind, Sequence[Problem]]:
        """Group problems by kind."""
        ...


def load_engine(name: str | None = None) -> AnalysisEngine:
    """Load an installed analysis engine from the ``attw.engines`` entry points.

    Parameters
    ----------
    name
        Entry point name to select. Defaults to ``$ATTW_ENGINE`` and then to
        the first installed engine.

    Returns
    -------
    AnalysisEngine
        Instantiated engine.

    Raises
    ------
    AnalysisError
        When no matching engine is installed or the entry point does not
        produce an engine.
    """
    requested = name or os.environ.get(ENGINE_ENV_VAR)
    available = sorted(entry_points(group=ENGINE_ENTRY_POINT_GROUP), key=lambda ep: ep.name)
    if requested is not None:
        available = [ep for ep in available if ep.name == requested]
    if not available:
        target = f"named {requested!r} " if requested else ""
        msg = (
            f"No analysis engine {target}is installed "
            f"(entry point group {ENGINE_ENTRY_POINT_GROUP!r})."
        )
        raise AnalysisError(msg, code="NO_ENGINE")
    selected = available[0]
    logger.debug("Loading analysis engine %r from %s", selected.name, selected.value)
    factory = selected.load()
    engine = factory() if callable(factory) else factory
    if not isinstance(engine, AnalysisEngine):
        msg = f"Entry point {selected.name!r} did not produce an analysis engine."
        raise AnalysisError(msg)
    return engine


__all__ = [
    "ENGINE_ENTRY_POINT_GROUP",
    "ENGINE_ENV_VAR",
    "AnalysisEngine",
    "load_engine",
]
