from __future__ import annotations

import json
from pathlib import Path

import pytest

from ecsdeploy.core.config import DeployConfig
from ecsdeploy.core.result import Err, Ok
from ecsdeploy.output.console import MockConsole
from ecsdeploy.platform.http import MockHttpClient
from ecsdeploy.services.deploy import prereqs as prereqs_mod
from ecsdeploy.services.deploy.errors import DependencyMissing, MissingInput, UnknownVersion
from ecsdeploy.services.deploy.model import Outcome
from ecsdeploy.services.deploy.service import ReleaseService

from ._fakes import (
    FakeRunner,
    all_tools_present,
    described_task_definition,
    ok_json,
    proc_err,
    timed_out,
)

REPO = "123.dkr.ecr.us-east-1.amazonaws.com/bia"
SHA = "a1b2c3d4" + "e" * 32
NEW_ARN = "arn:aws:ecs:us-east-1:123:task-definition/task-def-bia-alb:8"


def _config(tmp_path: Path, **kwargs: object) -> DeployConfig:
    return DeployConfig(ecr_repo=REPO, build_context=tmp_path, **kwargs)  # type: ignore[arg-type]


def _happy_runner(runner: FakeRunner | None = None) -> FakeRunner:
    """Scripted successful run; rules already on `runner` take precedence."""
    return (
        (runner or FakeRunner())
        .on("git", result=Ok(SHA + "\n"))
        .on("aws", "ecr", "get-login-password", result=Ok("pw"))
        .on("aws", "ecs", "describe-task-definition", result=ok_json(described_task_definition()))
        .on(
            "aws",
            "ecs",
            "register-task-definition",
            result=ok_json({"taskDefinition": {"taskDefinitionArn": NEW_ARN}}),
        )
        .on("aws", "ecs", "update-service", result=ok_json({"service": {}}))
    )


def _submitted(runner: FakeRunner) -> dict[str, object]:
    (call,) = runner.find("aws", "ecs", "register-task-definition")
    (content,) = call.files.values()
    return json.loads(content)


@pytest.fixture
def tools(monkeypatch: pytest.MonkeyPatch) -> None:
    all_tools_present(monkeypatch)


@pytest.mark.usefixtures("tools")
class TestDeploy:
    def test_deploys_image_for_current_revision(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        runner = _happy_runner().install(monkeypatch)
        service = ReleaseService(config=_config(tmp_path), console=MockConsole())

        result = service.deploy()

        assert isinstance(result, Ok)
        assert result.value.release_id == "a1b2c3d"
        assert result.value.image_ref == f"{REPO}:a1b2c3d"
        assert result.value.task_definition_arn == NEW_ARN
        assert result.value.outcome is Outcome.STABLE
        assert runner.find("docker") == []

    def test_without_revision_deploys_latest(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        _happy_runner(
            FakeRunner().on("git", result=proc_err(("git",), returncode=128))
        ).install(monkeypatch)

        result = ReleaseService(config=_config(tmp_path), console=MockConsole()).deploy()

        assert isinstance(result, Ok)
        assert result.value.image_ref == f"{REPO}:latest"

    def test_wait_timeout_still_succeeds(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        _happy_runner(FakeRunner().on("aws", "ecs", "wait", result=timed_out())).install(
            monkeypatch
        )
        http = MockHttpClient()
        console = MockConsole()
        service = ReleaseService(
            config=_config(tmp_path, health_url="http://app/api/versao"),
            console=console,
            http=http,
        )

        result = service.deploy()

        assert isinstance(result, Ok)
        assert result.value.outcome is Outcome.TIMED_OUT
        assert console.has_warning()
        assert http.calls == []

    def test_health_probe_after_stable_deploy(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        _happy_runner().install(monkeypatch)
        http = MockHttpClient()
        http.set_text("http://app/api/versao", "1.0")
        service = ReleaseService(
            config=_config(tmp_path, health_url="http://app/api/versao"),
            console=MockConsole(),
            http=http,
        )

        assert isinstance(service.deploy(), Ok)
        assert http.calls == ["http://app/api/versao"]

    def test_missing_aws_cli(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        runner = _happy_runner().install(monkeypatch)
        monkeypatch.setattr(
            prereqs_mod.shutil, "which", lambda name: None if name == "aws" else f"/usr/bin/{name}"
        )

        result = ReleaseService(config=_config(tmp_path), console=MockConsole()).deploy()

        assert isinstance(result, Err)
        assert isinstance(result.error, DependencyMissing)
        assert runner.calls == []


@pytest.mark.usefixtures("tools")
class TestRollback:
    def test_requires_tag(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        runner = _happy_runner().install(monkeypatch)

        result = ReleaseService(config=_config(tmp_path), console=MockConsole()).rollback()

        assert isinstance(result, Err)
        assert isinstance(result.error, MissingInput)
        assert runner.calls == []

    def test_unknown_tag_changes_nothing(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        runner = _happy_runner(
            FakeRunner().on(
                "aws",
                "ecr",
                "describe-images",
                result=proc_err(stderr="An error occurred (ImageNotFoundException)"),
            )
        ).install(monkeypatch)

        result = ReleaseService(
            config=_config(tmp_path, rollback_tag="zzzzzzz"), console=MockConsole()
        ).rollback()

        assert isinstance(result, Err)
        assert isinstance(result.error, UnknownVersion)
        assert result.error.tag == "zzzzzzz"
        assert runner.find("aws", "ecs") == []

    def test_rollback_registers_same_definition_as_deploy(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        details = {"imageDetails": [{"imageTags": ["a1b2c3d"], "imagePushedAt": "2024-01-01T00:00:00Z"}]}

        deploy_runner = _happy_runner().install(monkeypatch)
        ReleaseService(config=_config(tmp_path), console=MockConsole()).deploy()

        rollback_runner = _happy_runner().on(
            "aws", "ecr", "describe-images", result=ok_json(details)
        )
        rollback_runner.install(monkeypatch)
        result = ReleaseService(
            config=_config(tmp_path, rollback_tag="a1b2c3d"), console=MockConsole()
        ).rollback()

        assert isinstance(result, Ok)
        assert _submitted(rollback_runner) == _submitted(deploy_runner)
        assert rollback_runner.find("git") == []


@pytest.mark.usefixtures("tools")
class TestBuildAndDeploy:
    def test_deploys_the_pinned_tag_just_pushed(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        runner = _happy_runner().install(monkeypatch)

        result = ReleaseService(config=_config(tmp_path), console=MockConsole()).build_and_deploy()

        assert isinstance(result, Ok)
        assert result.value.image_ref == f"{REPO}:a1b2c3d"
        pushes = [c.cmd[2] for c in runner.find("docker", "push")]
        assert pushes == [f"{REPO}:latest", f"{REPO}:a1b2c3d"]
        assert len(runner.find("aws", "ecs", "register-task-definition")) == 1

    def test_build_failure_skips_deploy(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        runner = _happy_runner(
            FakeRunner().on("docker", "build", result=proc_err(("docker",)))
        ).install(monkeypatch)

        result = ReleaseService(config=_config(tmp_path), console=MockConsole()).build_and_deploy()

        assert isinstance(result, Err)
        assert runner.find("aws", "ecs") == []


@pytest.mark.usefixtures("tools")
def test_versions_lists_registry(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    details = {"imageDetails": [{"imageTags": ["a1b2c3d"], "imagePushedAt": "2024-01-01T00:00:00Z"}]}
    FakeRunner().on("aws", "ecr", "describe-images", result=ok_json(details)).install(monkeypatch)

    result = ReleaseService(config=_config(tmp_path), console=MockConsole()).versions()

    assert isinstance(result, Ok)
    assert [v.tag for v in result.value] == ["a1b2c3d"]
