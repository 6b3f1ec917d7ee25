"""Notice for packages without type declarations."""

from __future__ import annotations

from attw.analysis import AnalysisResult
from attw.serde_msgspec import encode_json

UNTYPED_NOTICE = "This package does not contain types."


def render_untyped(analysis: AnalysisResult) -> str:
    """Return the untyped notice followed by the raw analysis."""
    return f"{UNTYPED_NOTICE}\nDetails: {encode_json(analysis, indent=2, sort_keys=False)}"


__all__ = ["UNTYPED_NOTICE", "render_untyped"]
