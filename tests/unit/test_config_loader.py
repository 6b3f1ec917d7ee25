"""Tests for layered configuration resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from attw.analysis import ProblemKind
from attw.cli.config_loader import (
    MISSING,
    OptionLayers,
    load_effective_config,
    read_config_file,
    resolve_config,
    resolve_config_with_sources,
)
from attw.cli.config_models import OPTION_SPECS, CliValues, EffectiveConfig
from attw.cli.config_source import ConfigSource
from attw.errors import ConfigError

_IGNORE_SPEC = next(spec for spec in OPTION_SPECS if spec.key == "ignore")
_STRICT_SPEC = next(spec for spec in OPTION_SPECS if spec.key == "strict")


def test_defaults_without_file_or_cli() -> None:
    """Ensure built-in defaults apply when no layer sets a value."""
    config = resolve_config(CliValues())
    assert config == EffectiveConfig()
    assert config.summary is True
    assert config.emoji is True
    assert config.color is True
    assert config.ignore == ()
    assert config.config_path == ".attw.json"


def test_ignore_arrays_concatenate_file_then_cli() -> None:
    """Ensure ignore rules from file and CLI are concatenated, file first."""
    config = resolve_config(CliValues(ignore=("false-cjs",)), {"ignore": ["false-esm"]})
    assert config.ignore == (ProblemKind.FALSE_ESM, ProblemKind.FALSE_CJS)
    assert config.ignored_flags == ("false-esm", "false-cjs")


def test_ignore_duplicates_are_collapsed() -> None:
    """Ensure the same rule from both layers appears once."""
    config = resolve_config(CliValues(ignore=("false-cjs",)), {"ignore": ["false-cjs"]})
    assert config.ignore == (ProblemKind.FALSE_CJS,)


def test_file_ignore_alone_becomes_effective() -> None:
    """Ensure a file-only array is used as-is when the CLI does not supply the flag."""
    sources = resolve_config_with_sources(CliValues(), {"ignore": ["wildcard"]})
    assert sources.values["ignore"].value == ["wildcard"]
    assert sources.source_of("ignore") is ConfigSource.CONFIG_FILE


def test_concatenated_ignore_is_marked_derived() -> None:
    """Ensure merged arrays record that both layers contributed."""
    sources = resolve_config_with_sources(
        CliValues(ignore=("false-cjs",)),
        {"ignore": ["false-esm"]},
        location="custom.json",
    )
    value = sources.values["ignore"]
    assert value.source is ConfigSource.DERIVED
    assert value.location == "custom.json"


def test_cli_scalar_overrides_file() -> None:
    """Ensure explicitly supplied CLI scalars win over file values."""
    config = resolve_config(CliValues(emoji=True, strict=False), {"emoji": False, "strict": True})
    assert config.emoji is True
    assert config.strict is False


def test_explicit_false_is_tracked_as_cli() -> None:
    """Ensure a CLI value of False is an explicit override, not a missing value."""
    sources = resolve_config_with_sources(CliValues(summary=False), {"summary": True})
    assert sources.values["summary"].value is False
    assert sources.source_of("summary") is ConfigSource.CLI


def test_file_scalar_overrides_default() -> None:
    """Ensure file values override defaults when the CLI is silent."""
    config = resolve_config(CliValues(), {"vertical": True, "packageVersion": "2.0.0"})
    assert config.vertical is True
    assert config.package_version == "2.0.0"


def test_reserved_config_path_key_is_rejected() -> None:
    """Ensure configPath inside the config file is a ConfigError."""
    with pytest.raises(ConfigError, match='cannot set "configPath"'):
        resolve_config(CliValues(), {"configPath": "x"})


def test_non_array_ignore_is_rejected() -> None:
    """Ensure a scalar ignore value in the file is a ConfigError."""
    with pytest.raises(ConfigError, match="should be an array"):
        resolve_config(CliValues(), {"ignore": "false-cjs"})


@pytest.mark.parametrize(
    ("cli_ignore", "file_contents"),
    [
        (("not-a-real-rule",), None),
        (None, {"ignore": ["not-a-real-rule"]}),
    ],
    ids=["cli", "file"],
)
def test_invalid_ignore_rule_lists_choices(
    cli_ignore: tuple[str, ...] | None,
    file_contents: dict[str, object] | None,
) -> None:
    """Ensure an invalid rule from either source fails with the allowed choices."""
    with pytest.raises(ConfigError) as exc_info:
        resolve_config(CliValues(ignore=cli_ignore), file_contents)
    message = str(exc_info.value)
    assert "'not-a-real-rule' is invalid" in message
    assert "Allowed choices are wildcard, no-resolution" in message


def test_wrongly_typed_option_is_rejected() -> None:
    """Ensure recognized options must have the expected type."""
    with pytest.raises(ConfigError, match="config option 'strict'"):
        resolve_config(CliValues(), {"strict": "yes"})


def test_unknown_keys_pass_through() -> None:
    """Ensure unrecognized file keys are kept verbatim."""
    config = resolve_config(CliValues(), {"futureOption": [1, 2], "help": True})
    assert config.extra == {"futureOption": [1, 2]}


def test_config_path_is_taken_from_cli() -> None:
    """Ensure configPath is a CLI-only option with a default."""
    sources = resolve_config_with_sources(CliValues(config_path="other.json"))
    assert sources.values["configPath"].value == "other.json"
    assert sources.source_of("configPath") is ConfigSource.CLI


def test_option_layers_merge_rules() -> None:
    """Ensure the pure layer merge follows override and concatenation rules."""
    assert OptionLayers(_STRICT_SPEC).resolve().value is False
    assert OptionLayers(_STRICT_SPEC, file_value=True).resolve().value is True
    assert OptionLayers(_STRICT_SPEC, file_value=True, cli_value=False).resolve().value is False
    merged = OptionLayers(_IGNORE_SPEC, file_value=["a"], cli_value=["b"]).resolve()
    assert merged.value == ["a", "b"]
    assert OptionLayers(_IGNORE_SPEC, file_value=MISSING, cli_value=["b"]).resolve().value == ["b"]


def test_read_config_file_missing_returns_none(tmp_path: Path) -> None:
    """Ensure a missing config file is not an error."""
    assert read_config_file(tmp_path / "absent.json") is None


def test_read_config_file_empty_returns_none(tmp_path: Path) -> None:
    """Ensure an empty config file is treated as absent."""
    path = tmp_path / ".attw.json"
    path.write_text("  \n", encoding="utf-8")
    assert read_config_file(path) is None


def test_read_config_file_invalid_json(tmp_path: Path) -> None:
    """Ensure unparseable JSON is a ConfigError."""
    path = tmp_path / ".attw.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="error while reading config file"):
        read_config_file(path)


def test_read_config_file_non_object(tmp_path: Path) -> None:
    """Ensure a JSON root that is not an object is a ConfigError."""
    path = tmp_path / ".attw.json"
    path.write_text('["false-cjs"]', encoding="utf-8")
    with pytest.raises(ConfigError, match="must contain a JSON object"):
        read_config_file(path)


def test_read_config_file_directory_is_error(tmp_path: Path) -> None:
    """Ensure read failures other than not-found are fatal."""
    with pytest.raises(ConfigError):
        read_config_file(tmp_path)


def test_load_effective_config_uses_cli_config_path(tmp_path: Path) -> None:
    """Ensure the file named by --config-path is read."""
    path = tmp_path / "custom.json"
    path.write_text('{"emoji": false, "ignore": ["false-esm"]}', encoding="utf-8")
    sources = load_effective_config(CliValues(config_path=str(path), ignore=("false-cjs",)))
    flat = sources.to_flat_dict()
    assert flat["emoji"] is False
    assert flat["ignore"] == ["false-esm", "false-cjs"]
    assert sources.values["emoji"].location == str(path)


def test_load_effective_config_default_path(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Ensure ./.attw.json is read from the working directory by default."""
    (tmp_path / ".attw.json").write_text('{"strict": true}', encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    sources = load_effective_config(CliValues())
    assert sources.values["strict"].value is True
    assert sources.source_of("strict") is ConfigSource.CONFIG_FILE


def test_explicit_options_exclude_defaults() -> None:
    """Ensure only options set by the file or the command line count as explicit."""
    sources = resolve_config_with_sources(
        CliValues(strict=True, ignore=("false-cjs",)),
        {"emoji": False, "ignore": ["false-esm"]},
    )
    explicit = {value.key: value.source for value in sources.explicit()}
    assert explicit == {
        "strict": ConfigSource.CLI,
        "emoji": ConfigSource.CONFIG_FILE,
        "ignore": ConfigSource.DERIVED,
    }
