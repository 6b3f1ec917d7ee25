"""Static display registry for problem kinds, resolution kinds and module kinds.

Every table here is keyed by the closed enumerations in ``attw.analysis``
and must stay total over them.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from attw.analysis import DetectedKind, ProblemKind, ResolutionKind
from attw.errors import ConfigError

PROBLEM_FLAGS: Mapping[ProblemKind, str] = MappingProxyType(
    {
        ProblemKind.WILDCARD: "wildcard",
        ProblemKind.NO_RESOLUTION: "no-resolution",
        ProblemKind.UNTYPED_RESOLUTION: "untyped-resolution",
        ProblemKind.FALSE_CJS: "false-cjs",
        ProblemKind.FALSE_ESM: "false-esm",
        ProblemKind.CJS_RESOLVES_TO_ESM: "cjs-resolves-to-esm",
        ProblemKind.FALLBACK_CONDITION: "fallback-condition",
        ProblemKind.CJS_ONLY_EXPORTS_DEFAULT: "cjs-only-exports-default",
        ProblemKind.FALSE_EXPORT_DEFAULT: "false-export-default",
        ProblemKind.UNEXPECTED_ESM_SYNTAX: "unexpected-esm-syntax",
        ProblemKind.UNEXPECTED_CJS_SYNTAX: "unexpected-cjs-syntax",
    }
)

PROBLEM_EMOJI: Mapping[ProblemKind, str] = MappingProxyType(
    {
        ProblemKind.WILDCARD: "❓",
        ProblemKind.NO_RESOLUTION: "\U0001f480",
        ProblemKind.UNTYPED_RESOLUTION: "\U0001f6ab",
        ProblemKind.FALSE_CJS: "\U0001f3ad",
        ProblemKind.FALSE_ESM: "\U0001f47a",
        ProblemKind.CJS_RESOLVES_TO_ESM: "⚠️",
        ProblemKind.FALLBACK_CONDITION: "\U0001f41b",
        ProblemKind.CJS_ONLY_EXPORTS_DEFAULT: "\U0001f928",
        ProblemKind.FALSE_EXPORT_DEFAULT: "❗️",
        ProblemKind.UNEXPECTED_ESM_SYNTAX: "\U0001f6ad",
        ProblemKind.UNEXPECTED_CJS_SYNTAX: "\U0001f6b1",
    }
)

_PLAIN_DESCRIPTIONS: Mapping[ProblemKind, str] = MappingProxyType(
    {
        ProblemKind.WILDCARD: "Unable to check",
        ProblemKind.NO_RESOLUTION: "Failed to resolve",
        ProblemKind.UNTYPED_RESOLUTION: "No types",
        ProblemKind.FALSE_CJS: "Masquerading as CJS",
        ProblemKind.FALSE_ESM: "Masquerading as ESM",
        ProblemKind.CJS_RESOLVES_TO_ESM: "ESM (dynamic import only)",
        ProblemKind.FALLBACK_CONDITION: "Used fallback condition",
        ProblemKind.CJS_ONLY_EXPORTS_DEFAULT: "CJS default export",
        ProblemKind.FALSE_EXPORT_DEFAULT: "Incorrect default export",
        ProblemKind.UNEXPECTED_ESM_SYNTAX: "Unexpected ESM syntax",
        ProblemKind.UNEXPECTED_CJS_SYNTAX: "Unexpected CJS syntax",
    }
)

_EMOJI_DESCRIPTIONS: Mapping[ProblemKind, str] = MappingProxyType(
    {kind: f"{PROBLEM_EMOJI[kind]} {text}" for kind, text in _PLAIN_DESCRIPTIONS.items()}
)

# Keyed by the ``emoji`` display flag.
PROBLEM_SHORT_DESCRIPTIONS: Mapping[bool, Mapping[ProblemKind, str]] = MappingProxyType(
    {True: _EMOJI_DESCRIPTIONS, False: _PLAIN_DESCRIPTIONS}
)

PROBLEM_SUMMARIES: Mapping[ProblemKind, str] = MappingProxyType(
    {
        ProblemKind.WILDCARD: "Wildcard subpath exports cannot be analyzed yet.",
        ProblemKind.NO_RESOLUTION: (
            "Import failed to resolve to type declarations or JavaScript files."
        ),
        ProblemKind.UNTYPED_RESOLUTION: (
            "Import resolved to JavaScript files, but no type declarations were found."
        ),
        ProblemKind.FALSE_CJS: (
            "Import resolved to a CommonJS type declaration file, but an ESM JavaScript file."
        ),
        ProblemKind.FALSE_ESM: (
            "Import resolved to an ESM type declaration file, but a CommonJS JavaScript file."
        ),
        ProblemKind.CJS_RESOLVES_TO_ESM: (
            "Import resolved to an ES module, so it cannot be required from CommonJS. "
            "Consumers in CommonJS must use a dynamic import."
        ),
        ProblemKind.FALLBACK_CONDITION: (
            "Import resolved to types through a conditional package.json export, "
            "but only after failing to resolve through an earlier condition. "
            "This relies on TypeScript behavior that may change in a future version."
        ),
        ProblemKind.CJS_ONLY_EXPORTS_DEFAULT: (
            "CommonJS module simulates a default export with exports.default and "
            "exports.__esModule, but does not also set module.exports for compatibility "
            "with Node.js. ESM importers will have to access the export as .default."
        ),
        ProblemKind.FALSE_EXPORT_DEFAULT: (
            "The resolved types use export default where the JavaScript file appears "
            "to use module.exports =. TypeScript will require an extra .default access "
            "that will fail at runtime."
        ),
        ProblemKind.UNEXPECTED_ESM_SYNTAX: (
            "Syntax that is only valid in ES modules was found in a file that Node.js "
            "will load as CommonJS."
        ),
        ProblemKind.UNEXPECTED_CJS_SYNTAX: (
            "Syntax that is only valid in CommonJS was found in a file that Node.js "
            "will load as an ES module."
        ),
    }
)

RESOLUTION_KIND_LABELS: Mapping[ResolutionKind, str] = MappingProxyType(
    {
        ResolutionKind.NODE10: "node10",
        ResolutionKind.NODE16_CJS: "node16 (from CJS)",
        ResolutionKind.NODE16_ESM: "node16 (from ESM)",
        ResolutionKind.BUNDLER: "bundler",
    }
)

MODULE_KIND_LABELS: Mapping[DetectedKind, str] = MappingProxyType({1: "(CJS)", 99: "(ESM)", "": ""})

VALID_FLAGS: tuple[str, ...] = tuple(PROBLEM_FLAGS.values())

_KINDS_BY_FLAG: Mapping[str, ProblemKind] = MappingProxyType(
    {flag: kind for kind, flag in PROBLEM_FLAGS.items()}
)


def short_description(kind: ProblemKind, *, emoji: bool) -> str:
    """Return the short table description for a problem kind."""
    return PROBLEM_SHORT_DESCRIPTIONS[emoji][kind]


def kind_for_flag(flag: str) -> ProblemKind:
    """Translate an ignore-rule flag into its problem kind.

    Parameters
    ----------
    flag
        Flag string such as ``"false-cjs"``.

    Returns
    -------
    ProblemKind
        Matching problem kind.

    Raises
    ------
    ConfigError
        When the flag is not one of ``VALID_FLAGS``.
    """
    kind = _KINDS_BY_FLAG.get(flag)
    if kind is None:
        msg = f"'{flag}' is not a valid ignore rule. Allowed choices are {', '.join(VALID_FLAGS)}."
        raise ConfigError(msg, code="INVALID_OPTION")
    return kind


__all__ = [
    "MODULE_KIND_LABELS",
    "PROBLEM_EMOJI",
    "PROBLEM_FLAGS",
    "PROBLEM_SHORT_DESCRIPTIONS",
    "PROBLEM_SUMMARIES",
    "RESOLUTION_KIND_LABELS",
    "VALID_FLAGS",
    "kind_for_flag",
    "short_description",
]
