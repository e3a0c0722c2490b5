"""CLI tests for configuration commands."""

from pathlib import Path
from typing import Any

from click.testing import CliRunner

from mimekit.cli import cli
from mimekit.config import ConfigManager


def _config_path(tmp_path: Path) -> Path:
    return tmp_path / ".mimekit" / "config.yaml"


def test_config_view_creates_and_displays_config(
    runner: CliRunner, cli_env, tmp_path: Path
) -> None:
    result = runner.invoke(cli, ["config", "view"], env=cli_env)

    assert result.exit_code == 0
    assert "probe:" in result.output
    assert _config_path(tmp_path).exists()


def test_config_set_updates_value_and_writes_diff(
    runner: CliRunner, cli_env, tmp_path: Path
) -> None:
    result = runner.invoke(
        cli, ["config", "set", "probe.sample_size_bytes", "--value", "4096"], env=cli_env
    )

    assert result.exit_code == 0
    assert "4096" in result.output
    assert "Updated probe.sample_size_bytes" in result.output

    config = ConfigManager(config_path=_config_path(tmp_path), env={}).load()
    assert config.probe.sample_size_bytes == 4096


def test_config_set_same_value_reports_no_change(runner: CliRunner, cli_env) -> None:
    runner.invoke(cli, ["config", "set", "probe.sniff_xml", "--value", "false"], env=cli_env)

    result = runner.invoke(cli, ["config", "set", "probe.sniff_xml", "--value", "false"], env=cli_env)

    assert result.exit_code == 0
    assert "No changes applied" in result.output


def test_config_set_rejects_invalid_value(runner: CliRunner, cli_env, tmp_path: Path) -> None:
    result = runner.invoke(
        cli, ["config", "set", "logging.level", "--value", "chatty"], env=cli_env
    )

    assert result.exit_code != 0
    assert "Invalid configuration values" in result.output
    config = ConfigManager(config_path=_config_path(tmp_path), env={}).load()
    assert config.logging.level == "WARNING"


def test_config_edit_applies_changes(runner: CliRunner, cli_env, tmp_path: Path, monkeypatch) -> None:
    manager = ConfigManager(config_path=_config_path(tmp_path), env={})
    manager.ensure_exists()

    def _mock_edit(text: str, **_: Any) -> str:
        return text.replace("sniff_xml: true", "sniff_xml: false")

    monkeypatch.setattr("mimekit.cli.click.edit", _mock_edit)

    result = runner.invoke(cli, ["config", "edit"], env=cli_env)

    assert result.exit_code == 0
    assert "updated" in result.output.lower()
    assert manager.load().probe.sniff_xml is False


def test_config_edit_cancelled(runner: CliRunner, cli_env, monkeypatch) -> None:
    monkeypatch.setattr("mimekit.cli.click.edit", lambda text, **_: None)

    result = runner.invoke(cli, ["config", "edit"], env=cli_env)

    assert result.exit_code == 0
    assert "Edit cancelled" in result.output
