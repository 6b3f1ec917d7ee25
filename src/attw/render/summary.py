"""Summary lines grouped by problem kind."""

from __future__ import annotations

from collections.abc import Sequence

from rich.text import Text

from attw.analysis import Problem, ProblemKind
from attw.problems import PROBLEM_EMOJI, PROBLEM_SUMMARIES
from attw.render.style import DisplayStyle, render_text

NO_PROBLEMS = " No problems found."
NO_PROBLEMS_EMOJI = " No problems found \U0001f31f"

_CONTINUATION = "\n    "


def represented_kinds(problems: Sequence[Problem]) -> tuple[ProblemKind, ...]:
    """Return the kinds present in ``problems`` in enumeration order."""
    present = {problem.kind for problem in problems}
    return tuple(kind for kind in ProblemKind if kind in present)


def summary_message(kind: ProblemKind, style: DisplayStyle) -> str:
    """Format the summary message for one kind, one sentence per line."""
    body = PROBLEM_SUMMARIES[kind].split(". ")
    text = f".{_CONTINUATION}".join(body)
    if style.emoji:
        return f" {PROBLEM_EMOJI[kind]} {text}"
    return f"    {text}"


def summarize(problems: Sequence[Problem], style: DisplayStyle) -> str:
    """Summarize filtered problems, one paragraph per represented kind.

    Parameters
    ----------
    problems
        Problems left after ignore rules were applied.
    style
        Display toggles.

    Returns
    -------
    str
        Paragraphs separated by blank lines, or the fixed no-problems line.
    """
    kinds = represented_kinds(problems)
    if not kinds:
        return NO_PROBLEMS_EMOJI if style.emoji else NO_PROBLEMS
    return "\n\n".join(summary_message(kind, style) for kind in kinds)


def render_ignore_notice(flags: Sequence[str], style: DisplayStyle) -> str:
    """Return the dimmed line listing active ignore rules."""
    rules = ", ".join(f"'{flag}'" for flag in flags)
    return render_text(Text(f" (ignoring rules: {rules})", style="bright_black"), style)


def render_summary_section(
    problems: Sequence[Problem],
    style: DisplayStyle,
    *,
    ignored_flags: Sequence[str] = (),
    include_summary: bool = True,
) -> tuple[str, ...]:
    """Render the blocks printed above the resolution table.

    Parameters
    ----------
    problems
        Problems left after ignore rules were applied.
    style
        Display toggles.
    ignored_flags
        Active ignore rules; a notice listing them comes first when present.
    include_summary
        Whether the per-kind summary is part of the section.

    Returns
    -------
    tuple[str, ...]
        Blocks in print order, each followed by a blank line when written.
    """
    blocks: list[str] = []
    if ignored_flags:
        blocks.append(render_ignore_notice(ignored_flags, style))
    if include_summary:
        blocks.append(summarize(problems, style))
    return tuple(blocks)


__all__ = [
    "NO_PROBLEMS",
    "NO_PROBLEMS_EMOJI",
    "render_ignore_notice",
    "render_summary_section",
    "represented_kinds",
    "summarize",
    "summary_message",
]
