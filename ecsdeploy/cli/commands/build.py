from __future__ import annotations

from pathlib import Path

from ecsdeploy.cli import options as opt
from ecsdeploy.cli.commands._helpers import fail, report_deploy
from ecsdeploy.cli.context import build_context
from ecsdeploy.core.result import Err, Ok
from ecsdeploy.services.deploy.service import ReleaseService


def build(
    region: str | None = opt.REGION,
    ecr_repo: str | None = opt.ECR_REPO,
    cluster: str | None = opt.CLUSTER,
    service: str | None = opt.SERVICE,
    task_family: str | None = opt.TASK_FAMILY,
    tag: str | None = opt.TAG,
    context: Path | None = opt.CONTEXT,
    health_url: str | None = opt.HEALTH_URL,
    wait_timeout: float | None = opt.WAIT_TIMEOUT,
    config_file: Path | None = opt.CONFIG_FILE,
) -> None:
    """Build the Docker image and push it to ECR (tags: latest + commit hash)."""
    ctx = build_context(
        opt.overrides(
            region=region,
            ecr_repo=ecr_repo,
            cluster=cluster,
            service=service,
            task_family=task_family,
            tag=tag,
            context=context,
            health_url=health_url,
            wait_timeout=wait_timeout,
        ),
        config_file=config_file,
    )
    releases = ReleaseService(config=ctx.config, console=ctx.console)

    match releases.build():
        case Ok(_):
            pass
        case Err(error):
            fail(error, ctx)


def build_deploy(
    region: str | None = opt.REGION,
    ecr_repo: str | None = opt.ECR_REPO,
    cluster: str | None = opt.CLUSTER,
    service: str | None = opt.SERVICE,
    task_family: str | None = opt.TASK_FAMILY,
    tag: str | None = opt.TAG,
    context: Path | None = opt.CONTEXT,
    health_url: str | None = opt.HEALTH_URL,
    wait_timeout: float | None = opt.WAIT_TIMEOUT,
    config_file: Path | None = opt.CONFIG_FILE,
) -> None:
    """Build, push and deploy in one go."""
    ctx = build_context(
        opt.overrides(
            region=region,
            ecr_repo=ecr_repo,
            cluster=cluster,
            service=service,
            task_family=task_family,
            tag=tag,
            context=context,
            health_url=health_url,
            wait_timeout=wait_timeout,
        ),
        config_file=config_file,
    )
    releases = ReleaseService(config=ctx.config, console=ctx.console)

    match releases.build_and_deploy():
        case Ok(report):
            report_deploy(report, ctx)
        case Err(error):
            fail(error, ctx)
