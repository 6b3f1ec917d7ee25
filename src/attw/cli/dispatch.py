"""Route an analysis result to raw, untyped or typed rendering."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from attw.analysis import AnalysisResult, Problem
from attw.cli.config_models import EffectiveConfig
from attw.cli.exit_codes import ExitCode
from attw.cli.sink import OutputSink
from attw.engine import AnalysisEngine
from attw.render.style import DisplayStyle
from attw.render.summary import render_summary_section
from attw.render.table import build_resolution_table, horizontal_text, vertical_text
from attw.render.untyped import render_untyped
from attw.serde_msgspec import encode_json

logger = logging.getLogger(__name__)


def filter_problems(problems: Sequence[Problem], config: EffectiveConfig) -> tuple[Problem, ...]:
    """Drop problems whose kind is ignored, keeping engine order."""
    return tuple(problem for problem in problems if not config.is_ignored(problem.kind))


@dataclass(frozen=True)
class ResultDispatcher:
    """Render an analysis result and decide the exit code.

    Parameters
    ----------
    engine
        Engine used to list and group problems.
    sink
        Destination for all rendered output.
    style
        Display toggles; defaults to the configuration's emoji and color.
    """

    engine: AnalysisEngine
    sink: OutputSink
    style: DisplayStyle | None = None

    def dispatch(self, analysis: AnalysisResult, config: EffectiveConfig) -> ExitCode:
        """Render ``analysis`` according to ``config``.

        Returns
        -------
        ExitCode
            ``FAILURE`` when strict mode is on and problems remain.
        """
        if config.raw:
            return self._dispatch_raw(analysis, config)
        self.sink.write()
        if not analysis.contains_types:
            self.sink.write(render_untyped(analysis))
            return ExitCode.SUCCESS
        return self._dispatch_typed(analysis, config)

    def _dispatch_raw(self, analysis: AnalysisResult, config: EffectiveConfig) -> ExitCode:
        record: dict[str, object] = {"analysis": analysis}
        grouped: dict[str, object] = {}
        if analysis.contains_types:
            problems = self.engine.get_problems(analysis)
            grouped = {
                str(kind): list(group)
                for kind, group in self.engine.group_by_kind(problems).items()
                if group
            }
            record["problems"] = grouped
        self.sink.write(encode_json(record, sort_keys=False))
        return ExitCode.for_problems(grouped, strict=config.strict)

    def _dispatch_typed(self, analysis: AnalysisResult, config: EffectiveConfig) -> ExitCode:
        style = self.style or config.style
        all_problems = self.engine.get_problems(analysis)
        problems = filter_problems(all_problems, config)
        logger.debug(
            "%d problem(s) found, %d after ignore rules", len(all_problems), len(problems)
        )
        for block in render_summary_section(
            problems,
            style,
            ignored_flags=config.ignored_flags,
            include_summary=config.summary,
        ):
            self.sink.write(block + "\n")
        table = build_resolution_table(analysis, problems, style)
        if config.vertical:
            self.sink.write(vertical_text(table, style))
        else:
            self.sink.write(horizontal_text(table, style))
        exit_code = ExitCode.for_problems(problems, strict=config.strict)
        logger.debug("Strict mode %s; exit code %d", config.strict, exit_code)
        return exit_code


__all__ = ["ResultDispatcher", "filter_problems"]
