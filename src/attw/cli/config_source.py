"""Provenance of resolved attw options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from attw.core_types import JsonValue


class ConfigSource(StrEnum):
    """Layer that supplied an option value."""

    CLI = "cli"
    CONFIG_FILE = "config_file"
    DEFAULT = "default"
    DERIVED = "derived"


@dataclass(frozen=True)
class ConfigValue:
    """One resolved option and where it came from.

    Parameters
    ----------
    key
        camelCase option name, as used in ``.attw.json``.
    value
        Resolved value.
    source
        Layer that supplied the value. ``DERIVED`` marks an ignore list
        joined from the config file and the command line.
    location
        Config file path for values read from (or joined with) the file.
    """

    key: str
    value: JsonValue
    source: ConfigSource
    location: str | None = None

    @property
    def is_explicit(self) -> bool:
        """Whether a user layer, not the built-in default, set this value."""
        return self.source is not ConfigSource.DEFAULT

    def to_dict(self) -> dict[str, object]:
        """Return the ``--show-config`` entry for this option."""
        entry: dict[str, object] = {"value": self.value, "source": self.source.value}
        if self.location:
            entry["location"] = self.location
        return entry


@dataclass(frozen=True)
class ConfigWithSources:
    """Every resolved option keyed by its camelCase name."""

    values: dict[str, ConfigValue]

    def to_display_dict(self) -> dict[str, dict[str, object]]:
        """Return the ``--show-config`` document.

        Returns
        -------
        dict[str, dict[str, object]]
            ``{key: {"value", "source", "location"?}}`` per option.
        """
        return {key: cv.to_dict() for key, cv in self.values.items()}

    def to_flat_dict(self) -> dict[str, JsonValue]:
        """Return option values without provenance."""
        return {key: cv.value for key, cv in self.values.items()}

    def explicit(self) -> tuple[ConfigValue, ...]:
        """Return the options set by the config file or the command line."""
        return tuple(cv for cv in self.values.values() if cv.is_explicit)

    def source_of(self, key: str) -> ConfigSource | None:
        """Return the layer that supplied ``key``, if it is present."""
        value = self.values.get(key)
        return None if value is None else value.source


__all__ = ["ConfigSource", "ConfigValue", "ConfigWithSources"]
