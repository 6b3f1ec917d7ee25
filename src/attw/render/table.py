"""Resolution matrix rendering.

The matrix has one row per resolution kind and one column per entry point.
It is built once as plain strings; the horizontal (boxed) and vertical
(``label: value``) layouts are both produced from that structure.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from rich import box
from rich.table import Table
from rich.text import Text

from attw.analysis import ALL_RESOLUTION_KINDS, AnalysisResult, Problem, Resolution
from attw.problems import MODULE_KIND_LABELS, RESOLUTION_KIND_LABELS, short_description
from attw.render.style import DisplayStyle, render_text

LABEL_COLUMN_WIDTH = 20
ENTRYPOINT_COLUMN_WIDTH = 35
VERTICAL_SEPARATOR = "*" * 35

# Cell padding on both sides, as drawn by rich.
_PADDING = 2


@dataclass(frozen=True)
class EntrypointHeading:
    """Column heading for one entry point."""

    subpath: str
    title: str
    has_problems: bool


@dataclass(frozen=True)
class ResolutionTable:
    """Resolution matrix with plain-text cells.

    Parameters
    ----------
    headings
        Entry point columns, in analysis order.
    rows
        One row per resolution kind. ``row[0]`` is the resolution label and
        ``row[i + 1]`` the cell for ``headings[i]``.
    """

    headings: tuple[EntrypointHeading, ...]
    rows: tuple[tuple[str, ...], ...]

    def column_pairs(self, index: int) -> tuple[tuple[str, str], ...]:
        """Return ``(label, value)`` pairs for one entry point column."""
        return tuple((row[0], row[index + 1]) for row in self.rows)


def entrypoint_title(package_name: str, subpath: str) -> str:
    """Return the quoted import specifier for an entry point."""
    if subpath == ".":
        return f'"{package_name}"'
    return f'"{package_name}/{subpath.removeprefix("./")}"'


def success_marker(resolution: Resolution | None, style: DisplayStyle) -> str:
    """Return the cell text for a resolution without problems.

    A missing resolution renders like an unknown module kind.
    """
    prefix = "\U0001f7e2" if style.emoji else "OK"
    if resolution is not None and resolution.is_json:
        return f"{prefix} (JSON)"
    detected = resolution.module_kind.detected_kind if resolution and resolution.module_kind else ""
    return f"{prefix} {MODULE_KIND_LABELS[detected]}".rstrip()


def build_resolution_table(
    analysis: AnalysisResult,
    problems: Sequence[Problem],
    style: DisplayStyle,
) -> ResolutionTable:
    """Build the resolution matrix for already-filtered problems.

    Parameters
    ----------
    analysis
        Analysis result supplying entry points and resolutions.
    problems
        Problems left after ignore rules were applied.
    style
        Display toggles; only ``emoji`` affects cell text.

    Returns
    -------
    ResolutionTable
        Matrix of cell strings.
    """
    subpaths = analysis.subpaths
    headings = tuple(
        EntrypointHeading(
            subpath=subpath,
            title=entrypoint_title(analysis.package_name, subpath),
            has_problems=any(problem.entrypoint == subpath for problem in problems),
        )
        for subpath in subpaths
    )
    rows: list[tuple[str, ...]] = []
    for kind in ALL_RESOLUTION_KINDS:
        cells = [RESOLUTION_KIND_LABELS[kind]]
        for subpath in subpaths:
            matching = [
                problem
                for problem in problems
                if problem.entrypoint == subpath and problem.resolution_kind == kind
            ]
            if matching:
                cells.append(
                    "\n".join(short_description(p.kind, emoji=style.emoji) for p in matching)
                )
            else:
                cells.append(success_marker(analysis.resolution_for(subpath, kind), style))
        rows.append(tuple(cells))
    return ResolutionTable(headings=headings, rows=tuple(rows))


def horizontal_text(table: ResolutionTable, style: DisplayStyle) -> str:
    """Draw the matrix as a boxed table.

    Returns
    -------
    str
        Rendered table.
    """
    grid = Table(box=box.SQUARE, show_lines=True, header_style="bold")
    grid.add_column("", width=LABEL_COLUMN_WIDTH - _PADDING)
    for heading in table.headings:
        color = "bright_red" if heading.has_problems else "bright_green"
        grid.add_column(
            Text(heading.title, style=f"bold {color}"),
            width=ENTRYPOINT_COLUMN_WIDTH - _PADDING,
        )
    for row in table.rows:
        grid.add_row(*(Text(cell) for cell in row))
    width = 1 + (LABEL_COLUMN_WIDTH + 1) + (ENTRYPOINT_COLUMN_WIDTH + 1) * len(table.headings)
    return render_text(grid, style, width=width)


def vertical_text(table: ResolutionTable, style: DisplayStyle) -> str:
    """Transpose the matrix into one ``label: value`` block per entry point.

    Returns
    -------
    str
        Blocks separated by blank lines.
    """
    blocks: list[str] = []
    for index, heading in enumerate(table.headings):
        title = render_text(Text(heading.title, style="bold blue"), style)
        pairs = "".join(f"{label}: {value}\n" for label, value in table.column_pairs(index))
        blocks.append(f"{title}\n\n{pairs}{VERTICAL_SEPARATOR}")
    return "\n\n".join(blocks)


def render_horizontal(
    analysis: AnalysisResult,
    problems: Sequence[Problem],
    style: DisplayStyle,
) -> str:
    """Render the resolution matrix as a boxed table.

    Returns
    -------
    str
        Rendered table.
    """
    return horizontal_text(build_resolution_table(analysis, problems, style), style)


def render_vertical(
    analysis: AnalysisResult,
    problems: Sequence[Problem],
    style: DisplayStyle,
) -> str:
    """Render the resolution matrix as vertical ``label: value`` blocks.

    Returns
    -------
    str
        Rendered blocks.
    """
    return vertical_text(build_resolution_table(analysis, problems, style), style)


__all__ = [
    "ENTRYPOINT_COLUMN_WIDTH",
    "LABEL_COLUMN_WIDTH",
    "VERTICAL_SEPARATOR",
    "EntrypointHeading",
    "ResolutionTable",
    "build_resolution_table",
    "entrypoint_title",
    "horizontal_text",
    "render_horizontal",
    "render_vertical",
    "success_marker",
    "vertical_text",
]
