"""Options shared by every release command.

Each option also reads an `ECSDEPLOY_*` environment variable; values given
on the command line win, then the environment, then `ecsdeploy.toml`, then
built-in defaults.
"""

from __future__ import annotations

from pathlib import Path

import typer

from ecsdeploy.core.config import (
    DEFAULT_CLUSTER,
    DEFAULT_ECR_REPO,
    DEFAULT_REGION,
    DEFAULT_SERVICE,
    DEFAULT_TASK_FAMILY,
)

REGION = typer.Option(
    None, "--region", "-r", envvar="ECSDEPLOY_REGION", help=f"AWS region (default: {DEFAULT_REGION})"
)
ECR_REPO = typer.Option(
    None,
    "--ecr-repo",
    "-e",
    envvar="ECSDEPLOY_ECR_REPO",
    help=f"ECR repository URI (default: {DEFAULT_ECR_REPO})",
)
CLUSTER = typer.Option(
    None,
    "--cluster",
    "-c",
    envvar="ECSDEPLOY_CLUSTER",
    help=f"ECS cluster name (default: {DEFAULT_CLUSTER})",
)
SERVICE = typer.Option(
    None,
    "--service",
    "-s",
    envvar="ECSDEPLOY_SERVICE",
    help=f"ECS service name (default: {DEFAULT_SERVICE})",
)
TASK_FAMILY = typer.Option(
    None,
    "--task-family",
    "-f",
    envvar="ECSDEPLOY_TASK_FAMILY",
    help=f"Task definition family (default: {DEFAULT_TASK_FAMILY})",
)
TAG = typer.Option(None, "--tag", "-t", help="Specific tag (required for rollback)")
CONTEXT = typer.Option(
    None, "--context", envvar="ECSDEPLOY_CONTEXT", help="Docker build context (default: .)"
)
HEALTH_URL = typer.Option(
    None,
    "--health-url",
    envvar="ECSDEPLOY_HEALTH_URL",
    help="URL to probe after a stable deploy",
)
WAIT_TIMEOUT = typer.Option(
    None,
    "--wait-timeout",
    envvar="ECSDEPLOY_WAIT_TIMEOUT",
    help="Seconds to wait for the service to stabilize (default: 900)",
)
CONFIG_FILE = typer.Option(
    None,
    "--config-file",
    envvar="ECSDEPLOY_CONFIG",
    help="TOML file with a [deploy] table (default: ./ecsdeploy.toml if present)",
)


def overrides(
    *,
    region: str | None,
    ecr_repo: str | None,
    cluster: str | None,
    service: str | None,
    task_family: str | None,
    tag: str | None,
    context: Path | None,
    health_url: str | None,
    wait_timeout: float | None,
) -> dict[str, object | None]:
    """Map option values to DeployConfig field overrides."""
    return {
        "region": region,
        "ecr_repo": ecr_repo,
        "cluster": cluster,
        "service": service,
        "task_family": task_family,
        "rollback_tag": tag,
        "build_context": context,
        "health_url": health_url,
        "wait_timeout": wait_timeout,
    }
