"""Are the Types Wrong? command-line reporting for package type problems."""

from attw.analysis import (
    AnalysisResult,
    EntrypointResolution,
    Problem,
    ProblemKind,
    ResolutionKind,
)
from attw.errors import AnalysisError, AttwError, ConfigError, FetchError

__all__ = [
    "AnalysisError",
    "AnalysisResult",
    "AttwError",
    "ConfigError",
    "EntrypointResolution",
    "FetchError",
    "Problem",
    "ProblemKind",
    "ResolutionKind",
]
