from __future__ import annotations

from pathlib import Path

from ecsdeploy.cli import options as opt
from ecsdeploy.cli.commands._helpers import fail
from ecsdeploy.cli.context import build_context
from ecsdeploy.core.result import Err, Ok
from ecsdeploy.output.console import Style
from ecsdeploy.services.deploy.service import ReleaseService


def list_versions(
    region: str | None = opt.REGION,
    ecr_repo: str | None = opt.ECR_REPO,
    config_file: Path | None = opt.CONFIG_FILE,
) -> None:
    """List the last 10 versions pushed to ECR, oldest first."""
    ctx = build_context(
        {"region": region, "ecr_repo": ecr_repo},
        config_file=config_file,
    )
    releases = ReleaseService(config=ctx.config, console=ctx.console)

    match releases.versions():
        case Ok(versions) if not versions:
            ctx.console.print(f"no tagged images in {ctx.config.repository_name}", Style.DIM)
        case Ok(versions):
            ctx.console.table(
                ctx.config.repository_name,
                ("Tag", "Pushed at"),
                [(v.tag, v.pushed_at_display) for v in versions],
            )
        case Err(error):
            fail(error, ctx)
