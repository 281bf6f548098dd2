from __future__ import annotations

from pathlib import Path

from ecsdeploy.cli import options as opt
from ecsdeploy.cli.context import build_context
from ecsdeploy.output.console import Style


def show_config(
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
    """Show the effective configuration without calling AWS."""
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
    cfg = ctx.config
    rows = [
        ("region", cfg.region),
        ("ecr_repo", cfg.ecr_repo),
        ("cluster", cfg.cluster),
        ("service", cfg.service),
        ("task_family", cfg.task_family),
        ("tag", cfg.rollback_tag or "-"),
        ("build_context", str(cfg.build_context)),
        ("container", f"{cfg.container_name}:{cfg.container_port}"),
        ("log_group", cfg.log_group),
        ("wait_timeout", f"{cfg.wait_timeout:g}s"),
        ("health_url", cfg.health_url or "-"),
    ]
    ctx.console.table("Current configuration", ("Setting", "Value"), rows)
    if ctx.config_path is not None:
        ctx.console.print(f"config file: {ctx.config_path}", Style.DIM)
