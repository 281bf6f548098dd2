from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from ecsdeploy import __version__
from ecsdeploy.cli.app import app

runner = CliRunner()


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_commands() -> None:
    result = runner.invoke(app, ["help"])

    assert result.exit_code == 0
    for name in ("build", "deploy", "rollback", "build-deploy", "list", "config"):
        assert name in result.output


def test_unknown_command_is_usage_error() -> None:
    result = runner.invoke(app, ["explode"])

    assert result.exit_code != 0


def test_config_shows_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["config", "-c", "my-cluster"])

    assert result.exit_code == 0
    assert "my-cluster" in result.output
    assert "service-bia-alb" in result.output


def test_config_reads_env_and_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "ecsdeploy.toml").write_text(
        '[deploy]\nservice = "svc-from-file"\ncluster = "cluster-from-file"\n',
        encoding="utf-8",
    )

    result = runner.invoke(app, ["config"], env={"ECSDEPLOY_CLUSTER": "cluster-from-env"})

    assert result.exit_code == 0
    assert "svc-from-file" in result.output
    assert "cluster-from-env" in result.output


def test_invalid_config_exits_one(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["config", "-e", "not-a-repository"])

    assert result.exit_code == 1


def test_rollback_without_tag_exits_one(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["rollback"])

    assert result.exit_code == 1
    assert "rollback tag not specified" in result.output
