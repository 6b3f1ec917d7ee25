"""Main application setup for the attw CLI."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated, Literal

from cyclopts import App, Parameter
from rich.console import Console

from attw.analysis import AnalysisResult, convert_analysis
from attw.cli.config_loader import build_effective_config, load_effective_config
from attw.cli.config_models import CliValues, EffectiveConfig
from attw.cli.dispatch import ResultDispatcher
from attw.cli.error_reporter import (
    CHECKING_FILE,
    CHECKING_PACKAGE,
    READING_CONFIG,
    report_error,
)
from attw.cli.groups import output_group, rules_group, session_group, source_group
from attw.cli.sink import select_sink
from attw.cli.version import get_version
from attw.engine import AnalysisEngine, load_engine
from attw.errors import AttwError, ConfigError
from attw.problems import VALID_FLAGS
from attw.render.style import DisplayStyle
from attw.serde_msgspec import encode_json

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

logger = logging.getLogger(__name__)

_HELP = (
    "Are the Types Wrong? attempts to analyze npm package contents for issues with their "
    "TypeScript types, particularly ESM-related module resolution issues."
)

_HELP_EPILOGUE = """
Examples:
  attw my-package                     Check the latest published version
  attw my-package -v 1.2.3 --strict   Check a version and fail on problems
  attw ./my-package-1.0.0.tgz -f      Check a packed tarball
  attw --show-config                  Show the effective configuration

Configuration:
  Options can be persisted in ./.attw.json using their camelCase names,
  e.g. {"ignore": ["false-cjs"], "emoji": false}.
"""

app = App(
    name="attw",
    help=_HELP,
    help_format="rich",
    help_epilogue=_HELP_EPILOGUE,
    version=get_version(),
    version_flags=["--version", "-V"],
)


@app.default
def check_command(
    package_name: Annotated[
        str | None,
        Parameter(
            help="The package to check; an npm package name unless --from-file is set.",
            group=source_group,
        ),
    ] = None,
    *,
    package_version: Annotated[
        str | None,
        Parameter(
            name=["--package-version", "-v"],
            help="The version of the package to check.",
            group=source_group,
        ),
    ] = None,
    from_file: Annotated[
        bool | None,
        Parameter(
            name=["--from-file", "-f"],
            negative="",
            help="Read from a file instead of the npm registry.",
            group=source_group,
        ),
    ] = None,
    raw: Annotated[
        bool | None,
        Parameter(
            name=["--raw", "-r"],
            negative="",
            help="Output raw JSON; overrides any rendering options.",
            group=output_group,
        ),
    ] = None,
    vertical: Annotated[
        bool | None,
        Parameter(
            name=["--vertical", "-E"],
            negative="",
            help="Display in a vertical ASCII table (like MySQL's -E option).",
            group=output_group,
        ),
    ] = None,
    summary: Annotated[
        bool | None,
        Parameter(
            name="--summary",
            help="Whether to print summary information about the different errors.",
            group=output_group,
        ),
    ] = None,
    emoji: Annotated[
        bool | None,
        Parameter(name="--emoji", help="Whether to use any emojis.", group=output_group),
    ] = None,
    color: Annotated[
        bool | None,
        Parameter(
            name="--color",
            help="Whether to use any colors (NO_COLOR is also honoured).",
            group=output_group,
        ),
    ] = None,
    quiet: Annotated[
        bool | None,
        Parameter(
            name=["--quiet", "-q"],
            negative="",
            help="Don't print anything to STDOUT (overrides all other options).",
            group=output_group,
        ),
    ] = None,
    strict: Annotated[
        bool | None,
        Parameter(
            name=["--strict", "-s"],
            negative="",
            help="Exit with a non-zero code if any problems are found (useful for CI).",
            group=rules_group,
        ),
    ] = None,
    ignore: Annotated[
        list[str] | None,
        Parameter(
            name=["--ignore", "-i"],
            consume_multiple=True,
            help=f"Rules to ignore. Choices: {', '.join(VALID_FLAGS)}.",
            group=rules_group,
        ),
    ] = None,
    config_path: Annotated[
        str | None,
        Parameter(
            name="--config-path",
            help="Path to config file (default: ./.attw.json).",
            group=session_group,
        ),
    ] = None,
    show_config: Annotated[
        bool,
        Parameter(
            name="--show-config",
            negative="",
            help="Print the effective configuration with the source of each value and exit.",
            group=session_group,
        ),
    ] = False,
    log_level: Annotated[
        LogLevel,
        Parameter(
            name="--log-level",
            help="Logging verbosity level (logs go to stderr).",
            env_var="ATTW_LOG_LEVEL",
            group=session_group,
        ),
    ] = "WARNING",
    engine: Annotated[AnalysisEngine | None, Parameter(parse=False)] = None,
) -> int:
    """Check a package for module-resolution problems in its types.

    Returns
    -------
    int
        Exit status code.
    """
    logging.basicConfig(level=log_level.upper())
    cli_values = CliValues(
        package_version=package_version,
        raw=raw,
        from_file=from_file,
        vertical=vertical,
        strict=strict,
        summary=summary,
        emoji=emoji,
        color=color,
        quiet=quiet,
        config_path=config_path,
        ignore=tuple(ignore) if ignore is not None else None,
    )
    try:
        sources = load_effective_config(cli_values)
        config = build_effective_config(sources)
    except ConfigError as exc:
        report_error(exc, READING_CONFIG)

    if show_config:
        sys.stdout.write(encode_json(sources.to_display_dict(), indent=2) + "\n")
        return 0

    if package_name is None:
        report_error(ConfigError("missing required argument 'package-name'"), READING_CONFIG)

    if engine is None:
        try:
            engine = load_engine()
        except AttwError as exc:
            report_error(exc, CHECKING_PACKAGE)

    analysis = run_analysis(engine, package_name, config)
    dispatcher = ResultDispatcher(
        engine=engine,
        sink=select_sink(quiet=config.quiet),
        style=DisplayStyle(emoji=config.emoji, color=config.color and _stdout_supports_color()),
    )
    return int(dispatcher.dispatch(analysis, config))


def run_analysis(
    engine: AnalysisEngine,
    package_name: str,
    config: EffectiveConfig,
) -> AnalysisResult:
    """Run the engine for a registry package or a local tarball.

    Every engine failure is reported as fatal; nothing is retried.

    Returns
    -------
    AnalysisResult
        Analysis produced by the engine.
    """
    if config.from_file:
        context = CHECKING_FILE
        try:
            data = Path(package_name).read_bytes()
            result = engine.check_tgz(data)
        except Exception as exc:
            report_error(exc, context)
    else:
        context = CHECKING_PACKAGE
        logger.debug("Checking %s@%s", package_name, config.package_version or "latest")
        try:
            result = engine.check_package(package_name, config.package_version)
        except Exception as exc:
            report_error(exc, context)
    try:
        return convert_analysis(result)
    except AttwError as exc:
        report_error(exc, context)


def _stdout_supports_color() -> bool:
    console = Console()
    return console.is_terminal and not console.no_color


def main() -> None:
    """Run the attw CLI."""
    sys.exit(app())


__all__ = ["app", "check_command", "main", "run_analysis"]
