"""Tests for ecsdeploy.core.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from ecsdeploy.core.config import (
    DEFAULT_CLUSTER,
    DEFAULT_ECR_REPO,
    DEFAULT_REGION,
    DEFAULT_SERVICE,
    DEFAULT_TASK_FAMILY,
    DeployConfig,
    build_config,
    load_config_file,
)
from ecsdeploy.core.result import Err, Ok


class TestDefaults:
    def test_values(self) -> None:
        config = DeployConfig()

        assert config.region == DEFAULT_REGION == "us-east-1"
        assert config.ecr_repo == DEFAULT_ECR_REPO
        assert config.cluster == DEFAULT_CLUSTER == "cluster-bia-alb"
        assert config.service == DEFAULT_SERVICE == "service-bia-alb"
        assert config.task_family == DEFAULT_TASK_FAMILY == "task-def-bia-alb"
        assert config.rollback_tag is None
        assert config.container_port == 8080
        assert config.health_url is None

    def test_registry_parts(self) -> None:
        config = DeployConfig()

        assert config.registry_host == "863518460581.dkr.ecr.us-east-1.amazonaws.com"
        assert config.repository_name == "bia"

    def test_image_ref(self) -> None:
        assert DeployConfig().image_ref("a1b2c3d") == f"{DEFAULT_ECR_REPO}:a1b2c3d"

    def test_defaults_are_valid(self) -> None:
        assert isinstance(DeployConfig().validate(), Ok)


class TestValidate:
    @pytest.mark.parametrize(
        "ecr_repo",
        ["no-slash", "/bia", "host/", "host/bia:latest"],
    )
    def test_bad_repository(self, ecr_repo: str) -> None:
        result = DeployConfig(ecr_repo=ecr_repo).validate()

        assert isinstance(result, Err)
        assert "ecr_repo" in result.error.message

    def test_empty_cluster(self) -> None:
        result = DeployConfig(cluster="").validate()

        assert isinstance(result, Err)
        assert "cluster" in result.error.message

    def test_port_range(self) -> None:
        assert isinstance(DeployConfig(container_port=0).validate(), Err)
        assert isinstance(DeployConfig(container_port=70000).validate(), Err)

    def test_wait_timeout_positive(self) -> None:
        assert isinstance(DeployConfig(wait_timeout=0).validate(), Err)

    def test_blank_rollback_tag(self) -> None:
        assert isinstance(DeployConfig(rollback_tag="  ").validate(), Err)


class TestLoadConfigFile:
    def test_reads_deploy_table(self, tmp_path: Path) -> None:
        path = tmp_path / "ecsdeploy.toml"
        path.write_text(
            "[deploy]\n"
            'region = "eu-west-1"\n'
            'ecr_repo = "111.dkr.ecr.eu-west-1.amazonaws.com/shop"\n'
            'cluster = "prod"\n'
            "container_port = 3000\n"
            "wait_timeout = 120\n"
            'health_url = "http://shop/health"\n',
            encoding="utf-8",
        )

        result = load_config_file(path)

        assert isinstance(result, Ok)
        config = result.value
        assert config.region == "eu-west-1"
        assert config.repository_name == "shop"
        assert config.cluster == "prod"
        assert config.service == DEFAULT_SERVICE
        assert config.container_port == 3000
        assert config.wait_timeout == 120.0
        assert config.health_url == "http://shop/health"

    def test_without_deploy_table_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "ecsdeploy.toml"
        path.write_text("[other]\nkey = 1\n", encoding="utf-8")

        assert load_config_file(path) == Ok(DeployConfig())

    def test_deploy_must_be_table(self, tmp_path: Path) -> None:
        path = tmp_path / "ecsdeploy.toml"
        path.write_text('deploy = "nope"\n', encoding="utf-8")

        result = load_config_file(path)

        assert isinstance(result, Err)
        assert result.error.path == path

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config_file(tmp_path / "absent.toml")

        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "ecsdeploy.toml"
        path.write_text("[deploy\n", encoding="utf-8")

        result = load_config_file(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message


class TestBuildConfig:
    def test_none_overrides_are_ignored(self) -> None:
        base = DeployConfig(cluster="from-file")

        result = build_config(base, {"cluster": None, "service": "from-flag"})

        assert isinstance(result, Ok)
        assert result.value.cluster == "from-file"
        assert result.value.service == "from-flag"

    def test_rollback_tag_override(self) -> None:
        result = build_config(DeployConfig(), {"rollback_tag": "a1b2c3d"})

        assert isinstance(result, Ok)
        assert result.value.rollback_tag == "a1b2c3d"

    def test_unknown_key(self) -> None:
        result = build_config(DeployConfig(), {"nope": "x"})

        assert isinstance(result, Err)

    def test_override_is_validated(self) -> None:
        result = build_config(DeployConfig(), {"ecr_repo": "not-a-repo"})

        assert isinstance(result, Err)


def test_rollback_tag_is_stripped() -> None:
    result = build_config(DeployConfig(), {"rollback_tag": "  a1b2c3d\n"})

    assert isinstance(result, Ok)
    assert result.value.rollback_tag == "a1b2c3d"
    assert result.value.image_ref(result.value.rollback_tag) == f"{DEFAULT_ECR_REPO}:a1b2c3d"
