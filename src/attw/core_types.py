"""Shared type aliases."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TypeAlias

PathLike: TypeAlias = str | Path

JsonPrimitive: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonPrimitive | Mapping[str, "JsonValue"] | Sequence["JsonValue"]
JsonDict: TypeAlias = dict[str, JsonValue]

__all__ = ["JsonDict", "JsonPrimitive", "JsonValue", "PathLike"]
