from __future__ import annotations

from ecsdeploy.core.config import DeployConfig
from ecsdeploy.core.result import Err, Ok, Result
from ecsdeploy.output.console import ConsoleProtocol, Style
from ecsdeploy.services.deploy.aws import run_aws, run_aws_json
from ecsdeploy.services.deploy.errors import DeployError, UpdateFailure
from ecsdeploy.services.deploy.model import Outcome


def point_service(config: DeployConfig, task_definition_arn: str) -> Result[None, DeployError]:
    """Repoint the service at `task_definition_arn`."""
    result = run_aws_json(
        config,
        "ecs",
        "update-service",
        "--cluster",
        config.cluster,
        "--service",
        config.service,
        "--task-definition",
        task_definition_arn,
    )
    if isinstance(result, Err):
        return Err(
            UpdateFailure(
                service=config.service,
                task_definition_arn=task_definition_arn,
                message=f"failed to update ECS service '{config.service}'",
                hint=result.error.details,
            )
        )
    return Ok(None)


def wait_until_stable(config: DeployConfig) -> Result[None, str]:
    """Block on `aws ecs wait services-stable`, bounded by `wait_timeout`.

    Err carries the reason the wait ended without observing stability.
    """
    result = run_aws(
        config,
        "ecs",
        "wait",
        "services-stable",
        "--cluster",
        config.cluster,
        "--services",
        config.service,
        json_output=False,
        timeout=config.wait_timeout,
    )
    if isinstance(result, Err):
        if result.error.timed_out:
            return Err(f"no stable state after {config.wait_timeout:.0f}s")
        return Err(result.error.details)
    return Ok(None)


def update_service(
    *,
    config: DeployConfig,
    task_definition_arn: str,
    console: ConsoleProtocol,
) -> Result[Outcome, DeployError]:
    """Point the service at the new revision and wait for convergence.

    A wait that ends without stability is reported as `Outcome.TIMED_OUT`;
    the service update is already committed and may still converge.
    """
    console.info("Updating ECS service...")
    pointed = point_service(config, task_definition_arn)
    if isinstance(pointed, Err):
        return pointed

    console.info("Service updated")
    console.info("Waiting for service to stabilize...")
    waited = wait_until_stable(config)
    if isinstance(waited, Err):
        console.warning("Timed out waiting for the service to stabilize")
        console.print(f"reason: {waited.error}", Style.DIM)
        console.info("Check the service status in the ECS console")
        return Ok(Outcome.TIMED_OUT)

    return Ok(Outcome.STABLE)
