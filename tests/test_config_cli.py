"""CLI tests for configuration commands."""

import os
from pathlib import Path
from typing import Any

from click.testing import CliRunner

from filekind.cli import cli
from filekind.config import ConfigManager


def _env_with_home(tmp_path: Path) -> dict[str, Any]:
    env = {key: value for key, value in os.environ.items() if not key.startswith("FILEKIND__")}
    env["HOME"] = str(tmp_path)
    return env


def _config_path(tmp_path: Path) -> Path:
    return tmp_path / ".filekind" / "config.yaml"


def test_config_view_creates_and_displays_config(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli, ["config", "view"], env=_env_with_home(tmp_path))

    assert result.exit_code == 0
    assert "processing:" in result.output
    assert _config_path(tmp_path).exists()


def test_config_set_updates_value(tmp_path: Path) -> None:
    result = CliRunner().invoke(
        cli,
        ["config", "set", "processing.max_json_kb", "--value", "512"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0, result.output
    assert "Updated processing.max_json_kb" in result.output

    config = ConfigManager(config_path=_config_path(tmp_path)).load(include_env=False)
    assert config.processing.max_json_kb == 512


def test_config_set_rejects_invalid_value(tmp_path: Path) -> None:
    result = CliRunner().invoke(
        cli,
        ["config", "set", "processing.max_json_kb", "--value", "lots"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code != 0
    assert "Invalid configuration values" in result.output


def test_config_edit_applies_changes(tmp_path: Path, monkeypatch) -> None:
    manager = ConfigManager(config_path=_config_path(tmp_path))
    manager.ensure_exists()

    def _mock_edit(text: str, **_: Any) -> str:
        return text.replace("base_path: media/", "base_path: archive/")

    monkeypatch.setattr("filekind.cli.click.edit", _mock_edit)

    result = CliRunner().invoke(cli, ["config", "edit"], env=_env_with_home(tmp_path))

    assert result.exit_code == 0
    assert "updated" in result.output.lower()
    assert manager.load(include_env=False).organization.base_path == "archive/"
