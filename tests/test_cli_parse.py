from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from tag_input.domain.models import ParseResult
from tag_input.entrypoints.cli import app
from tag_input.entrypoints.parse import parse_tag_spec


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TAG_INPUT_CONFIG", str(tmp_path / "no-config.yaml"))


def test_cli_parse_dynamic_tags() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["parse", "hello foo:bar email:a@b.com"])

    assert result.exit_code == 0, result.stdout
    assert "Default Text: hello" in result.stdout
    assert "  foo: bar" in result.stdout
    assert "  email: a@b.com" in result.stdout
    assert "Detected: foo, email" in result.stdout


def test_cli_parse_with_registered_tags() -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "parse",
            "foo:bar label:x label:y",
            "--tag",
            "label:join: | ",
        ],
    )

    assert result.exit_code == 0, result.stdout
    assert "Default Text: foo:bar" in result.stdout
    assert "  label: x | y" in result.stdout


def test_cli_parse_without_tags_reports_none() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["parse", "plain words"])

    assert result.exit_code == 0, result.stdout
    assert "No tags detected yet" in result.stdout
    assert "Detected: none" in result.stdout


def test_cli_parse_json_output() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["parse", "t:a t:b rest", "--mode", "array", "--json"])

    assert result.exit_code == 0, result.stdout
    parsed = ParseResult.from_json(result.stdout)
    assert parsed.tags == {"t": ["a", "b"]}
    assert parsed.default_text == "rest"
    assert parsed.detected_order == ["t"]


def test_cli_parse_reads_config_file(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text(
        "tag_input:\n  tags:\n    - {name: title, mode: array}\n",
        encoding="utf-8",
    )
    runner = CliRunner()
    result = runner.invoke(app, ["parse", "title:A other:x title:B", "--config", str(config), "--json"])

    assert result.exit_code == 0, result.stdout
    data = json.loads(result.stdout)
    assert data["tags"] == {"title": ["A", "B"]}
    assert data["default_text"] == "other:x"


def test_cli_parse_rejects_invalid_config(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("tag_input:\n  default_mode: sometimes\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(app, ["parse", "a:b", "--config", str(config)])

    assert result.exit_code != 0


def test_cli_parse_rejects_invalid_tag_spec() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["parse", "a:b", "--tag", "label:sometimes"])

    assert result.exit_code != 0


def test_cli_schema_prints_result_schema() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["schema"])

    assert result.exit_code == 0, result.stdout
    schema = json.loads(result.stdout)
    assert set(schema["properties"]) == {"default_text", "tags", "detected_order"}


def test_cli_schema_descriptor_kind() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["schema", "--kind", "descriptor"])

    assert result.exit_code == 0, result.stdout
    assert "separator" in json.loads(result.stdout)["properties"]


def test_cli_version() -> None:
    from tag_input import __version__

    runner = CliRunner()
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert result.stdout.strip() == __version__


def test_parse_tag_spec_forms() -> None:
    assert parse_tag_spec("email") == {"name": "email"}
    assert parse_tag_spec("title:array") == {"name": "title", "mode": "array"}
    assert parse_tag_spec("label:join: | ") == {"name": "label", "mode": "join", "separator": " | "}
    assert parse_tag_spec("time:join::") == {"name": "time", "mode": "join", "separator": ":"}


def test_cli_mode_override_reaches_bare_config_tags(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("tag_input:\n  tags: [t]\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(app, ["parse", "t:a t:b", "--config", str(config), "--mode", "array", "--json"])

    assert result.exit_code == 0, result.stdout
    assert json.loads(result.stdout)["tags"] == {"t": ["a", "b"]}


def test_cli_separator_override_reaches_config_join_tags(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text(
        "tag_input:\n  tags:\n    - {name: label, mode: join}\n    - {name: pinned, mode: join, separator: '+'}\n",
        encoding="utf-8",
    )
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["parse", "label:x label:y pinned:a pinned:b", "--config", str(config), "--separator", "/", "--json"],
    )

    assert result.exit_code == 0, result.stdout
    assert json.loads(result.stdout)["tags"] == {"label": "x/y", "pinned": "a+b"}
