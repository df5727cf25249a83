# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Smoke tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from doubles import StubRunner, record
from typer.testing import CliRunner

from perlcritic_shim.cli.app import app
from perlcritic_shim.diagnostics.models import MAX_COLUMN
from perlcritic_shim.parsers.records import VERBOSE_FORMAT

runner = CliRunner()

SCENARIO = "2[>]5[>]3[>]Bad thing. Explanation (Policy)[>]Policy::Name[[END]]"


def _json_lines(output: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


@pytest.fixture
def stub_perlcritic(monkeypatch: pytest.MonkeyPatch) -> StubRunner:
    stub = StubRunner()
    monkeypatch.setattr("perlcritic_shim.service.SubprocessRunner", lambda options=None: stub)
    return stub


def test_arguments_shows_default_command_line() -> None:
    result = runner.invoke(app, ["arguments"])
    assert result.exit_code == 0
    assert result.output.startswith("perlcritic --quiet --nocolor")
    assert VERBOSE_FORMAT in result.output
    assert "--gentle --top=10" in result.output


def test_arguments_applies_overrides_and_config(tmp_path: Path) -> None:
    config = tmp_path / "critic.toml"
    config.write_text('maxNumberOfProblems = 3\nadditionalArguments = ["--theme=core", "--count"]\n', encoding="utf-8")
    result = runner.invoke(
        app,
        ["arguments", "--config", str(config), "--severity", "STERN", "--executable", "/opt/perlcritic"],
    )
    assert result.exit_code == 0
    command = next(line for line in result.output.splitlines() if line.startswith("/opt/perlcritic "))
    assert "--theme=core --stern --top=3" in command
    assert "--count" not in command
    assert "ignoring output-altering perlcritic arguments: --count" in result.output


def test_arguments_rejects_invalid_config(tmp_path: Path) -> None:
    config = tmp_path / "critic.toml"
    config.write_text('severity = "lenient"\n', encoding="utf-8")
    result = runner.invoke(app, ["arguments", "--config", str(config), "--no-emoji"])
    assert result.exit_code == 2
    assert "invalid perlcritic settings" in result.output


def test_parse_reads_stdin_and_prints_json() -> None:
    result = runner.invoke(app, ["parse", "--format", "json"], input=SCENARIO + "\n")
    assert result.exit_code == 0
    (payload,) = _json_lines(result.output)
    assert payload["uri"] == "untitled:stdin"
    (diagnostic,) = payload["diagnostics"]  # type: ignore[misc]
    assert diagnostic["message"] == "Bad thing. Explanation (Policy)"
    assert diagnostic["code"] == "Policy::Name"
    assert diagnostic["severity"] == 2
    assert diagnostic["range"] == {"start": {"line": 1, "character": 4}, "end": {"line": 1, "character": MAX_COLUMN}}


def test_parse_reads_file_and_renders_table(tmp_path: Path) -> None:
    captured = tmp_path / "out.txt"
    captured.write_text(record(8, 1, 5, summary="Bad", explanation="A::B"), encoding="utf-8")
    result = runner.invoke(app, ["parse", str(captured), "--no-color"])
    assert result.exit_code == 0
    assert "Bad" in result.output
    assert "A::B" in result.output


def test_parse_inline_explanation() -> None:
    result = runner.invoke(
        app,
        ["parse", "--format", "json", "--inline-explanation"],
        input=record(1, 1, 5, summary="Short", explanation="Longer text"),
    )
    (payload,) = _json_lines(result.output)
    assert payload["diagnostics"][0]["message"] == "Short.\n\n> Longer text"  # type: ignore[index]


def test_parse_reports_format_errors() -> None:
    result = runner.invoke(app, ["parse", "--no-emoji"], input="x[>]1[>]1[>]msg[>]exp[[END]]")
    assert result.exit_code == 2
    assert "Invalid output format" in result.output
    assert "x[>]1[>]1[>]msg[>]exp" in result.output


def test_parse_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["parse", str(tmp_path / "missing.txt")])
    assert result.exit_code == 2
    assert "cannot read" in result.output


def test_check_reports_violations(tmp_path: Path, stub_perlcritic: StubRunner) -> None:
    source = tmp_path / "Foo.pm"
    source.write_text("package Foo;\n1;\n", encoding="utf-8")
    stub_perlcritic.stdout = SCENARIO
    stub_perlcritic.returncode = 2

    result = runner.invoke(app, ["check", str(source), "--format", "json", "--severity", "harsh"])

    assert result.exit_code == 1
    (payload,) = _json_lines(result.output)
    assert payload["uri"] == source.resolve().as_uri()
    assert len(payload["diagnostics"]) == 1  # type: ignore[arg-type]
    ((args, input_text),) = stub_perlcritic.calls
    assert args[0] == "perlcritic"
    assert "--harsh" in args
    assert input_text == "package Foo;\n1;\n"


def test_check_clean_file(tmp_path: Path, stub_perlcritic: StubRunner) -> None:
    source = tmp_path / "Clean.pm"
    source.write_text("1;\n", encoding="utf-8")
    result = runner.invoke(app, ["check", str(source), "--no-color"])
    assert result.exit_code == 0
    assert "No perlcritic violations" in result.output


def test_check_reads_stdin(stub_perlcritic: StubRunner) -> None:
    stub_perlcritic.stdout = record(1, 1, 4) + record(2, 1, 4)
    result = runner.invoke(app, ["check", "-", "--format", "json", "--related"], input="use strict;\n")
    assert result.exit_code == 1
    (payload,) = _json_lines(result.output)
    assert payload["uri"] == "untitled:stdin"
    diagnostics = payload["diagnostics"]
    assert len(diagnostics) == 2  # type: ignore[arg-type]
    assert all("relatedInformation" in diagnostic for diagnostic in diagnostics)  # type: ignore[union-attr]
    assert stub_perlcritic.calls[0][1] == "use strict;\n"


def test_check_surfaces_invocation_errors(tmp_path: Path, stub_perlcritic: StubRunner) -> None:
    source = tmp_path / "Foo.pm"
    source.write_text("1;\n", encoding="utf-8")
    stub_perlcritic.stderr = "Can't locate Perl/Critic.pm"
    result = runner.invoke(app, ["check", str(source), "--no-emoji"])
    assert result.exit_code == 2
    assert "Can't locate Perl/Critic.pm" in result.output


def test_check_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["check", str(tmp_path / "Nope.pm"), "--no-emoji"])
    assert result.exit_code == 2
    assert "cannot read" in result.output
