"""Text renderers for analysis results."""

from attw.render.style import DisplayStyle
from attw.render.summary import render_ignore_notice, render_summary_section, summarize
from attw.render.table import (
    ResolutionTable,
    build_resolution_table,
    render_horizontal,
    render_vertical,
)
from attw.render.untyped import render_untyped

__all__ = [
    "DisplayStyle",
    "ResolutionTable",
    "build_resolution_table",
    "render_horizontal",
    "render_ignore_notice",
    "render_summary_section",
    "render_untyped",
    "render_vertical",
    "summarize",
]
