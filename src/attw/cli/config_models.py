"""Typed configuration models for the attw CLI."""

from __future__ import annotations

from dataclasses import dataclass

import msgspec

from attw.analysis import ProblemKind
from attw.core_types import JsonValue
from attw.problems import PROBLEM_FLAGS
from attw.render.style import DisplayStyle
from attw.serde_msgspec import StructBaseStrict

DEFAULT_CONFIG_PATH = ".attw.json"


class CliValues(StructBaseStrict, frozen=True, rename="camel"):
    """Option values supplied on the command line.

    ``None`` means the option was not given, so the lower layers apply.
    """

    package_version: str | None = None
    raw: bool | None = None
    from_file: bool | None = None
    vertical: bool | None = None
    strict: bool | None = None
    summary: bool | None = None
    emoji: bool | None = None
    color: bool | None = None
    quiet: bool | None = None
    config_path: str | None = None
    ignore: tuple[str, ...] | None = None


class EffectiveConfig(StructBaseStrict, frozen=True, rename="camel"):
    """Configuration in force for one invocation."""

    package_version: str | None = None
    raw: bool = False
    from_file: bool = False
    vertical: bool = False
    strict: bool = False
    summary: bool = True
    emoji: bool = True
    color: bool = True
    quiet: bool = False
    ignore: tuple[ProblemKind, ...] = ()
    config_path: str = DEFAULT_CONFIG_PATH
    extra: dict[str, JsonValue] = msgspec.field(default_factory=dict)

    @property
    def style(self) -> DisplayStyle:
        """Display toggles threaded into rendering."""
        return DisplayStyle(emoji=self.emoji, color=self.color)

    @property
    def ignored_flags(self) -> tuple[str, ...]:
        """Ignore rules as flag strings, in configured order."""
        return tuple(PROBLEM_FLAGS[kind] for kind in self.ignore)

    def is_ignored(self, kind: ProblemKind) -> bool:
        """Return whether problems of ``kind`` are filtered out."""
        return kind in self.ignore


@dataclass(frozen=True)
class OptionSpec:
    """Static description of one recognized option.

    Parameters
    ----------
    key
        Name in the config file and in raw output (camelCase).
    attr
        Attribute name on ``CliValues`` and ``EffectiveConfig``.
    value_type
        Type that file values are converted to.
    array
        Whether values from the file and command line are concatenated.
    """

    key: str
    attr: str
    value_type: object
    array: bool = False

    @property
    def default(self) -> JsonValue:
        """Built-in default for this option."""
        value = getattr(_DEFAULTS, self.attr)
        return list(value) if isinstance(value, tuple) else value


_DEFAULTS = EffectiveConfig()

OPTION_SPECS: tuple[OptionSpec, ...] = (
    OptionSpec("packageVersion", "package_version", str | None),
    OptionSpec("raw", "raw", bool),
    OptionSpec("fromFile", "from_file", bool),
    OptionSpec("vertical", "vertical", bool),
    OptionSpec("strict", "strict", bool),
    OptionSpec("summary", "summary", bool),
    OptionSpec("emoji", "emoji", bool),
    OptionSpec("color", "color", bool),
    OptionSpec("quiet", "quiet", bool),
    OptionSpec("ignore", "ignore", list[str], array=True),
)

RESERVED_FILE_KEYS = frozenset({"configPath"})
SKIPPED_FILE_KEYS = frozenset({"help", "version"})

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "OPTION_SPECS",
    "RESERVED_FILE_KEYS",
    "SKIPPED_FILE_KEYS",
    "CliValues",
    "EffectiveConfig",
    "OptionSpec",
]
