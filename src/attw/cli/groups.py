"""Shared help-panel groups for the attw CLI."""

from __future__ import annotations

from cyclopts import Group

source_group = Group(
    "Package Source",
    help="Choose which package is analysed.",
    sort_key=0,
)

output_group = Group(
    "Output",
    help="Control how results are rendered.",
    sort_key=1,
)

rules_group = Group(
    "Rules",
    help="Select which problems fail the run.",
    sort_key=2,
)

session_group = Group(
    "Session",
    help="Configuration file and logging options.",
    sort_key=3,
)

__all__ = ["output_group", "rules_group", "session_group", "source_group"]
