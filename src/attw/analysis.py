"""Data contracts for analysis results produced by the analysis engine.

The engine owns these records; this package only reads them. Wire names
follow the engine's camelCase JSON so that raw output round-trips.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

import msgspec

from attw.errors import AnalysisError
from attw.serde_msgspec import StructBaseCompat, validation_error_payload


class ProblemKind(StrEnum):
    """Closed set of problem kinds reported by the analysis engine."""

    WILDCARD = "Wildcard"
    NO_RESOLUTION = "NoResolution"
    UNTYPED_RESOLUTION = "UntypedResolution"
    FALSE_CJS = "FalseCJS"
    FALSE_ESM = "FalseESM"
    CJS_RESOLVES_TO_ESM = "CJSResolvesToESM"
    FALLBACK_CONDITION = "FallbackCondition"
    CJS_ONLY_EXPORTS_DEFAULT = "CJSOnlyExportsDefault"
    FALSE_EXPORT_DEFAULT = "FalseExportDefault"
    UNEXPECTED_ESM_SYNTAX = "UnexpectedESMSyntax"
    UNEXPECTED_CJS_SYNTAX = "UnexpectedCJSSyntax"


class ResolutionKind(StrEnum):
    """Module resolution contexts, in table row order."""

    NODE10 = "node10"
    NODE16_CJS = "node16-cjs"
    NODE16_ESM = "node16-esm"
    BUNDLER = "bundler"


ALL_RESOLUTION_KINDS: tuple[ResolutionKind, ...] = tuple(ResolutionKind)

# 1 is CommonJS, 99 is ESNext, "" is unknown.
DetectedKind = Literal[1, 99, ""]


class ModuleKind(StructBaseCompat, frozen=True):
    """Detected module format of a resolved file."""

    detected_kind: DetectedKind = ""


class Resolution(StructBaseCompat, frozen=True):
    """Outcome of resolving one entry point under one resolution kind."""

    is_json: bool = False
    module_kind: ModuleKind | None = None


class EntrypointResolution(StructBaseCompat, frozen=True):
    """Engine record for one entry point under one resolution kind.

    The outcome itself sits one level down in ``resolution``; it is ``None``
    when the entry point did not resolve.
    """

    name: str = ""
    resolution_kind: ResolutionKind | None = None
    resolution: Resolution | None = None


class Problem(StructBaseCompat, frozen=True):
    """A classified defect for an entry point under a resolution kind."""

    kind: ProblemKind
    entrypoint: str
    resolution_kind: ResolutionKind


class AnalysisResult(StructBaseCompat, frozen=True):
    """Complete analysis of one package version."""

    package_name: str
    package_version: str | None = None
    contains_types: bool = False
    entrypoint_resolutions: dict[str, dict[ResolutionKind, EntrypointResolution]] = (
        msgspec.field(default_factory=dict)
    )
    problems: tuple[Problem, ...] = ()

    @property
    def subpaths(self) -> tuple[str, ...]:
        """Entry point subpaths in engine order."""
        return tuple(self.entrypoint_resolutions)

    def resolution_for(self, subpath: str, kind: ResolutionKind) -> Resolution | None:
        """Return the resolution outcome for a cell, or ``None`` when absent.

        Returns
        -------
        Resolution | None
            Resolution outcome recorded by the engine.
        """
        record = self.entrypoint_resolutions.get(subpath, {}).get(kind)
        return None if record is None else record.resolution


def decode_analysis(payload: bytes | str) -> AnalysisResult:
    """Decode engine JSON into an ``AnalysisResult``.

    Raises
    ------
    AnalysisError
        When the payload is not valid JSON or does not match the contract.
    """
    try:
        return msgspec.json.decode(payload, type=AnalysisResult)
    except msgspec.ValidationError as exc:
        msg = f"Analysis result does not match the expected shape: {validation_error_payload(exc)}"
        raise AnalysisError(msg) from exc
    except msgspec.DecodeError as exc:
        msg = f"Analysis result is not valid JSON: {exc}"
        raise AnalysisError(msg) from exc


def convert_analysis(payload: object) -> AnalysisResult:
    """Coerce an engine return value into an ``AnalysisResult``.

    Raises
    ------
    AnalysisError
        When the payload does not match the contract.
    """
    if isinstance(payload, AnalysisResult):
        return payload
    if isinstance(payload, (bytes, str)):
        return decode_analysis(payload)
    try:
        return msgspec.convert(payload, type=AnalysisResult)
    except msgspec.ValidationError as exc:
        msg = f"Analysis result does not match the expected shape: {validation_error_payload(exc)}"
        raise AnalysisError(msg) from exc


__all__ = [
    "ALL_RESOLUTION_KINDS",
    "AnalysisResult",
    "DetectedKind",
    "EntrypointResolution",
    "ModuleKind",
    "Problem",
    "ProblemKind",
    "Resolution",
    "ResolutionKind",
    "convert_analysis",
    "decode_analysis",
]
