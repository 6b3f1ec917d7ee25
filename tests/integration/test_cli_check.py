"""Integration tests for the attw check command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from attw.analysis import ProblemKind, ResolutionKind
from attw.cli.app import app, check_command
from attw.errors import FetchError
from tests.test_helpers.analysis_seed import FakeEngine, make_analysis, problem

_FALSE_CJS = (problem(ProblemKind.FALSE_CJS, ResolutionKind.NODE16_CJS),)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run each test from an empty working directory.

    Returns
    -------
    Path
        The working directory.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ATTW_ENGINE", raising=False)
    return tmp_path


def test_strict_check_fails_on_problem(
    workdir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure strict mode exits with 1 after printing the table."""
    _ = workdir
    engine = FakeEngine(analysis=make_analysis(problems=_FALSE_CJS))
    exit_code = check_command("demo-pkg", strict=True, emoji=False, engine=engine)
    out = capsys.readouterr().out
    assert exit_code == 1
    assert engine.calls[0] == ("check_package", ("demo-pkg", None))
    assert out.startswith("\n")
    assert "Masquerading as CJS" in out
    assert '"demo-pkg"' in out


def test_ignored_rule_from_config_file_passes_strict(
    workdir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure ignore rules in .attw.json suppress problems and the failure."""
    (workdir / ".attw.json").write_text('{"ignore": ["false-cjs"]}', encoding="utf-8")
    engine = FakeEngine(analysis=make_analysis(problems=_FALSE_CJS))
    exit_code = check_command("demo-pkg", strict=True, emoji=False, engine=engine)
    out = capsys.readouterr().out
    assert exit_code == 0
    assert "(ignoring rules: 'false-cjs')" in out
    assert "No problems found." in out
    assert "Masquerading as CJS" not in out


def test_package_version_from_config_file(
    workdir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure the requested version is forwarded to the engine."""
    (workdir / ".attw.json").write_text('{"packageVersion": "2.1.0"}', encoding="utf-8")
    engine = FakeEngine(analysis=make_analysis())
    assert check_command("demo-pkg", engine=engine) == 0
    assert engine.calls[0] == ("check_package", ("demo-pkg", "2.1.0"))
    _ = capsys.readouterr()


def test_quiet_prints_nothing_but_keeps_exit_code(
    workdir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure quiet mode suppresses stdout without changing the result."""
    _ = workdir
    engine = FakeEngine(analysis=make_analysis(problems=_FALSE_CJS))
    exit_code = check_command("demo-pkg", strict=True, quiet=True, engine=engine)
    assert exit_code == 1
    assert capsys.readouterr().out == ""


def test_raw_output_is_json(
    workdir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure raw mode prints a single JSON document."""
    _ = workdir
    engine = FakeEngine(analysis=make_analysis(problems=_FALSE_CJS))
    assert check_command("demo-pkg", raw=True, engine=engine) == 0
    record = json.loads(capsys.readouterr().out)
    assert record["analysis"]["packageName"] == "demo-pkg"
    assert list(record["problems"]) == ["FalseCJS"]


def test_from_file_reads_tarball(
    workdir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure --from-file passes the tarball bytes to the engine."""
    tarball = workdir / "demo-pkg-1.0.0.tgz"
    tarball.write_bytes(b"\x1f\x8bfake")
    engine = FakeEngine(analysis=make_analysis())
    assert check_command(str(tarball), from_file=True, engine=engine) == 0
    assert engine.calls[0] == ("check_tgz", b"\x1f\x8bfake")
    _ = capsys.readouterr()


def test_missing_tarball_is_fatal(
    workdir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure an unreadable tarball is reported while checking the file."""
    engine = FakeEngine(analysis=make_analysis())
    with pytest.raises(SystemExit) as exc_info:
        check_command(str(workdir / "absent.tgz"), from_file=True, engine=engine)
    assert exc_info.value.code == 1
    assert "error while checking file:" in capsys.readouterr().err
    assert engine.calls == []


def test_engine_failure_is_reported(
    workdir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure engine errors are wrapped with the activity that failed."""
    _ = workdir
    engine = FakeEngine(error=RuntimeError("tarball is corrupt"))
    with pytest.raises(SystemExit) as exc_info:
        check_command("demo-pkg", engine=engine)
    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "error while checking package:\ntarball is corrupt" in captured.err


def test_fetch_failure_shows_code(
    workdir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure registry failures include the fetch error code."""
    _ = workdir
    engine = FakeEngine(error=FetchError("registry unreachable", code="ENOTFOUND"))
    with pytest.raises(SystemExit):
        check_command("demo-pkg", engine=engine)
    assert "error while fetching package (ENOTFOUND):" in capsys.readouterr().err


def test_invalid_config_file_is_fatal(
    workdir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure an invalid ignore rule in the config file aborts before analysis."""
    (workdir / ".attw.json").write_text('{"ignore": ["bogus"]}', encoding="utf-8")
    engine = FakeEngine(analysis=make_analysis())
    with pytest.raises(SystemExit) as exc_info:
        check_command("demo-pkg", engine=engine)
    assert exc_info.value.code == 1
    assert "'bogus' is invalid" in capsys.readouterr().err
    assert engine.calls == []


def test_missing_package_name_is_fatal(
    workdir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure the package argument is required for a check."""
    _ = workdir
    with pytest.raises(SystemExit):
        check_command(engine=FakeEngine(analysis=make_analysis()))
    assert "missing required argument" in capsys.readouterr().err


def test_show_config_reports_sources(
    workdir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure --show-config prints each value with the layer that supplied it."""
    (workdir / ".attw.json").write_text('{"vertical": true, "ignore": ["wildcard"]}', "utf-8")
    engine = FakeEngine()
    exit_code = check_command(show_config=True, ignore=["false-esm"], engine=engine)
    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert engine.calls == []
    assert payload["vertical"] == {
        "value": True,
        "source": "config_file",
        "location": ".attw.json",
    }
    assert payload["ignore"]["value"] == ["wildcard", "false-esm"]
    assert payload["ignore"]["source"] == "derived"
    assert payload["strict"] == {"value": False, "source": "default"}


def test_ignore_consumes_multiple_tokens() -> None:
    """Ensure -i accepts several rules after a single flag."""
    command, bound, _ = app.parse_args(
        ["demo-pkg", "-i", "false-cjs", "false-esm", "--strict"],
        exit_on_error=False,
    )
    assert command is check_command
    assert bound.arguments["package_name"] == "demo-pkg"
    assert bound.arguments["ignore"] == ["false-cjs", "false-esm"]
    assert bound.arguments["strict"] is True
