"""CLI tests for classification commands."""

import json
import os
from pathlib import Path
from typing import Any

from click.testing import CliRunner

from filekind.cli import cli


def _env_with_home(tmp_path: Path) -> dict[str, Any]:
    env = {key: value for key, value in os.environ.items() if not key.startswith("FILEKIND__")}
    env["HOME"] = str(tmp_path / "home")
    return env


def _uploads(tmp_path: Path) -> Path:
    root = tmp_path / "uploads"
    root.mkdir()
    (root / "orders.json").write_text('[{"table": "orders", "rows": []}]', encoding="utf-8")
    (root / "profile.json").write_text('{"name": "ada"}', encoding="utf-8")
    (root / "broken.json").write_text("{nope", encoding="utf-8")
    (root / "logo.png").write_bytes(b"\x89PNG")
    nested = root / "nested"
    nested.mkdir()
    (nested / "schema.sql").write_text("create table t (id int);", encoding="utf-8")
    return root


def test_cli_help_lists_commands() -> None:
    result = CliRunner().invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("classify", "inspect", "config"):
        assert command in result.output


def test_classify_json_output(tmp_path: Path) -> None:
    root = _uploads(tmp_path)

    result = CliRunner().invoke(cli, ["classify", str(root), "--json"], env=_env_with_home(tmp_path))

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    labels = {operation["name"]: operation["label"] for operation in payload["operations"]}
    assert labels == {"orders.json": "SQLJSON", "profile.json": "NoSQLJSON", "logo.png": "Image"}
    assert payload["quarantined"] == ["broken.json"]
    targets = {operation["name"]: operation["target"] for operation in payload["operations"]}
    assert targets["orders.json"] == "sql_table"
    assert targets["profile.json"] == "document"
    assert payload["errors"] == []


def test_classify_recursive_includes_nested(tmp_path: Path) -> None:
    root = _uploads(tmp_path)

    result = CliRunner().invoke(
        cli, ["classify", str(root), "-r", "--json"], env=_env_with_home(tmp_path)
    )

    assert result.exit_code == 0, result.output
    names = {operation["name"] for operation in json.loads(result.output)["operations"]}
    assert "schema.sql" in names


def test_classify_summary_mode(tmp_path: Path) -> None:
    root = _uploads(tmp_path)

    result = CliRunner().invoke(
        cli, ["classify", str(root), "--summary"], env=_env_with_home(tmp_path)
    )

    assert result.exit_code == 0, result.output
    assert "Classified 3 file(s)" in result.output
    assert "Destination" not in result.output


def test_classify_quiet_mode_suppresses_output(tmp_path: Path) -> None:
    root = tmp_path / "uploads"
    root.mkdir()
    (root / "a.txt").write_text("x", encoding="utf-8")

    result = CliRunner().invoke(cli, ["classify", str(root), "--quiet"], env=_env_with_home(tmp_path))

    assert result.exit_code == 0
    assert result.output == ""


def test_classify_reports_config_errors_as_json(tmp_path: Path) -> None:
    env = _env_with_home(tmp_path)
    config_path = tmp_path / "home" / ".filekind" / "config.yaml"
    config_path.parent.mkdir(parents=True)
    config_path.write_text("- not-a-mapping", encoding="utf-8")

    result = CliRunner().invoke(cli, ["classify", str(tmp_path), "--json"], env=env)

    assert result.exit_code == 1
    assert json.loads(result.output)["error"]["code"] == "config_error"


def test_inspect_without_content(tmp_path: Path) -> None:
    result = CliRunner().invoke(
        cli, ["inspect", "a", "--media-type", "image/png", "--json"], env=_env_with_home(tmp_path)
    )

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["category"] == "Image"
    assert payload["label"] == "Image"


def test_inspect_with_content_file(tmp_path: Path) -> None:
    content = tmp_path / "payload.json"
    content.write_text('{"tables": []}', encoding="utf-8")

    result = CliRunner().invoke(
        cli, ["inspect", "payload.json", "--content-file", str(content), "--json"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0
    assert json.loads(result.output)["json_shape"] == "SQLJSON"


def test_inspect_applies_configured_json_limit(tmp_path: Path) -> None:
    content = tmp_path / "large.json"
    content.write_text('{"tables": [' + "0, " * 600 + "0]}", encoding="utf-8")
    env = _env_with_home(tmp_path)
    env["FILEKIND__PROCESSING__MAX_JSON_KB"] = "1"

    result = CliRunner().invoke(
        cli, ["inspect", "large.json", "--content-file", str(content), "--json"], env=env
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["label"] == "JSON"
    assert payload["json_shape"] is None
    assert any("larger than 1024 bytes" in note for note in payload["notes"])


def test_inspect_reports_config_errors_as_json(tmp_path: Path) -> None:
    env = _env_with_home(tmp_path)
    env["FILEKIND__PROCESSING__MAX_JSON_KB"] = "0"

    result = CliRunner().invoke(cli, ["inspect", "a.json", "--json"], env=env)

    assert result.exit_code == 1
    assert json.loads(result.output)["error"]["code"] == "config_error"
