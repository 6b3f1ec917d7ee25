"""Config loading and layered resolution for the CLI.

Three layers feed every option, lowest precedence first: built-in
defaults, the persisted JSON config file, and values given on the command
line. Scalars follow plain override. Array options (``ignore``) given in
both the file and on the command line are concatenated, file entries first.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias, cast

import msgspec

from attw.analysis import ProblemKind
from attw.cli.config_models import (
    DEFAULT_CONFIG_PATH,
    OPTION_SPECS,
    RESERVED_FILE_KEYS,
    SKIPPED_FILE_KEYS,
    CliValues,
    EffectiveConfig,
    OptionSpec,
)
from attw.cli.config_source import ConfigSource, ConfigValue, ConfigWithSources
from attw.core_types import JsonDict, JsonValue, PathLike
from attw.errors import ConfigError
from attw.problems import VALID_FLAGS, kind_for_flag
from attw.serde_msgspec import validation_error_payload

logger = logging.getLogger(__name__)

_CLI_IGNORE_OPTION = "-i, --ignore <rules...>"


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()

LayerValue: TypeAlias = JsonValue | _Missing


@dataclass(frozen=True)
class OptionLayers:
    """The three layers of one option before merging.

    Parameters
    ----------
    spec
        Option being resolved.
    file_value
        Value from the config file, or ``MISSING``.
    cli_value
        Value given on the command line, or ``MISSING``.
    location
        Config file path, recorded as provenance detail.
    """

    spec: OptionSpec
    file_value: LayerValue = MISSING
    cli_value: LayerValue = MISSING
    location: str | None = None

    def resolve(self) -> ConfigValue:
        """Merge the layers into a single value with its source.

        Returns
        -------
        ConfigValue
            Effective value for the option.
        """
        key = self.spec.key
        file_set = not isinstance(self.file_value, _Missing)
        cli_set = not isinstance(self.cli_value, _Missing)
        if (
            self.spec.array
            and file_set
            and cli_set
            and isinstance(self.file_value, list)
            and isinstance(self.cli_value, list)
        ):
            merged = [*self.file_value, *self.cli_value]
            return ConfigValue(key, merged, ConfigSource.DERIVED, self.location)
        if cli_set:
            return ConfigValue(key, cast("JsonValue", self.cli_value), ConfigSource.CLI)
        if file_set:
            return ConfigValue(
                key, cast("JsonValue", self.file_value), ConfigSource.CONFIG_FILE, self.location
            )
        return ConfigValue(key, self.spec.default, ConfigSource.DEFAULT)


def read_config_file(path: PathLike) -> JsonDict | None:
    """Read the persisted JSON config file.

    Parameters
    ----------
    path
        Location of the config file.

    Returns
    -------
    JsonDict | None
        Parsed contents, or ``None`` when the file does not exist or is empty.

    Raises
    ------
    ConfigError
        When the file exists but cannot be read or is not a JSON object.
    """
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No config file at %s; using defaults.", config_path)
        return None
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"error while reading config file:\n{exc}"
        raise ConfigError(msg) from exc
    if not text.strip():
        logger.debug("Config file %s is empty; using defaults.", config_path)
        return None
    try:
        payload = msgspec.json.decode(text)
    except msgspec.DecodeError as exc:
        msg = f"error while reading config file:\n{exc}"
        raise ConfigError(msg) from exc
    if not isinstance(payload, dict):
        msg = f"error while reading config file:\n{config_path} must contain a JSON object."
        raise ConfigError(msg)
    logger.debug("Loaded config file %s with keys %s", config_path, sorted(payload))
    return cast("JsonDict", payload)


def resolve_config_with_sources(
    cli_values: CliValues,
    file_contents: Mapping[str, JsonValue] | None = None,
    *,
    location: str | None = None,
) -> ConfigWithSources:
    """Merge defaults, config file contents and CLI values with provenance.

    Parameters
    ----------
    cli_values
        Values given on the command line.
    file_contents
        Parsed config file, or ``None`` when there is no file.
    location
        Path of the config file, used in messages and provenance.

    Returns
    -------
    ConfigWithSources
        Every recognized option plus pass-through file keys, with sources.

    Raises
    ------
    ConfigError
        When the file uses a reserved key, an option has the wrong type, or
        an ignore rule is not a valid flag.
    """
    where = location or DEFAULT_CONFIG_PATH
    file_values = _validate_file_contents(file_contents or {}, location=where)
    _validate_ignore_rules(cli_values.ignore or (), option=f"option '{_CLI_IGNORE_OPTION}'")

    values: dict[str, ConfigValue] = {}
    for spec in OPTION_SPECS:
        layers = OptionLayers(
            spec=spec,
            file_value=file_values.pop(spec.key, MISSING),
            cli_value=_cli_layer(cli_values, spec),
            location=where,
        )
        values[spec.key] = layers.resolve()

    config_path = cli_values.config_path or DEFAULT_CONFIG_PATH
    source = ConfigSource.CLI if cli_values.config_path is not None else ConfigSource.DEFAULT
    values["configPath"] = ConfigValue("configPath", config_path, source)

    for key, value in file_values.items():
        values[key] = ConfigValue(key, value, ConfigSource.CONFIG_FILE, where)
    sources = ConfigWithSources(values=values)
    for option in sources.explicit():
        logger.debug("Option %s = %r from %s", option.key, option.value, option.source)
    return sources


def resolve_config(
    cli_values: CliValues,
    file_contents: Mapping[str, JsonValue] | None = None,
    *,
    location: str | None = None,
) -> EffectiveConfig:
    """Resolve the effective configuration for one invocation.

    Returns
    -------
    EffectiveConfig
        Immutable merged configuration with ignore rules as problem kinds.
    """
    sources = resolve_config_with_sources(cli_values, file_contents, location=location)
    return build_effective_config(sources)


def build_effective_config(sources: ConfigWithSources) -> EffectiveConfig:
    """Build an ``EffectiveConfig`` from resolved values.

    Returns
    -------
    EffectiveConfig
        Typed configuration.
    """
    flat = sources.to_flat_dict()
    known = {spec.key for spec in OPTION_SPECS} | {"configPath"}
    ignore_kinds: list[ProblemKind] = []
    for flag in cast("list[str]", flat.get("ignore") or []):
        kind = kind_for_flag(flag)
        if kind not in ignore_kinds:
            ignore_kinds.append(kind)
    return EffectiveConfig(
        package_version=cast("str | None", flat.get("packageVersion")),
        raw=bool(flat["raw"]),
        from_file=bool(flat["fromFile"]),
        vertical=bool(flat["vertical"]),
        strict=bool(flat["strict"]),
        summary=bool(flat["summary"]),
        emoji=bool(flat["emoji"]),
        color=bool(flat["color"]),
        quiet=bool(flat["quiet"]),
        ignore=tuple(ignore_kinds),
        config_path=str(flat["configPath"]),
        extra={key: value for key, value in flat.items() if key not in known},
    )


def load_effective_config(cli_values: CliValues) -> ConfigWithSources:
    """Read the config file named on the command line and resolve all layers.

    Returns
    -------
    ConfigWithSources
        Resolved configuration with provenance.
    """
    location = cli_values.config_path or DEFAULT_CONFIG_PATH
    file_contents = read_config_file(location)
    return resolve_config_with_sources(cli_values, file_contents, location=location)


def _cli_layer(cli_values: CliValues, spec: OptionSpec) -> LayerValue:
    value = getattr(cli_values, spec.attr)
    if value is None:
        return MISSING
    if isinstance(value, tuple):
        return list(value)
    return value


def _validate_file_contents(
    contents: Mapping[str, JsonValue],
    *,
    location: str,
) -> dict[str, JsonValue]:
    specs = {spec.key: spec for spec in OPTION_SPECS}
    validated: dict[str, JsonValue] = {}
    for key, value in contents.items():
        if key in RESERVED_FILE_KEYS:
            msg = f'cannot set "{key}" within {location}'
            raise ConfigError(msg, code="INVALID_OPTION")
        if key in SKIPPED_FILE_KEYS:
            continue
        spec = specs.get(key)
        if spec is None:
            validated[key] = value
            continue
        if key == "ignore":
            if not isinstance(value, list):
                msg = "config option 'ignore' should be an array."
                raise ConfigError(msg, code="INVALID_OPTION")
            _validate_ignore_rules(value, option="config option 'ignore'")
        try:
            converted = msgspec.convert(value, type=spec.value_type, strict=True)
        except msgspec.ValidationError as exc:
            msg = f"config option '{key}' is invalid: {validation_error_payload(exc)}"
            raise ConfigError(msg, code="INVALID_OPTION") from exc
        validated[key] = cast("JsonValue", converted)
    return validated


def _validate_ignore_rules(rules: object, *, option: str) -> None:
    for rule in cast("list[object]", rules):
        if rule not in VALID_FLAGS:
            msg = (
                f"{option} argument '{rule}' is invalid. "
                f"Allowed choices are {', '.join(VALID_FLAGS)}."
            )
            raise ConfigError(msg, code="INVALID_OPTION")


__all__ = [
    "MISSING",
    "OptionLayers",
    "build_effective_config",
    "load_effective_config",
    "read_config_file",
    "resolve_config",
    "resolve_config_with_sources",
]
