from __future__ import annotations

import json

from ecsdeploy.core.config import DeployConfig
from ecsdeploy.core.result import Err, Ok, Result
from ecsdeploy.core.structured import get_str, get_table
from ecsdeploy.output.console import ConsoleProtocol, Style
from ecsdeploy.platform.files import transient_text_file
from ecsdeploy.services.deploy.aws import run_aws_json
from ecsdeploy.services.deploy.errors import DeployError, RegistrationFailure
from ecsdeploy.services.deploy.task_definition import (
    ContainerDefinition,
    EnvVar,
    LogConfiguration,
    PortMapping,
    TaskDefinition,
)

DEFAULT_TASK_CPU = "256"
DEFAULT_TASK_MEMORY = "512"
DEFAULT_CONTAINER_MEMORY = 512
DEFAULT_NETWORK_MODE = "bridge"
DEFAULT_COMPATIBILITIES = ("EC2",)
DEFAULT_ENVIRONMENT = (EnvVar(name="NODE_ENV", value="production"),)

# ClientException text for a family with no registered revision.
_FAMILY_NOT_FOUND_MARKER = "unable to describe task definition"


def default_task_definition(config: DeployConfig, image_ref: str) -> TaskDefinition:
    """Minimal definition used when the family has never been registered."""
    container = ContainerDefinition(
        name=config.container_name,
        image=image_ref,
        memory=DEFAULT_CONTAINER_MEMORY,
        essential=True,
        port_mappings=(PortMapping(container_port=config.container_port, protocol="tcp"),),
        log_configuration=LogConfiguration(
            log_driver="awslogs",
            options={
                "awslogs-group": config.log_group,
                "awslogs-region": config.region,
                "awslogs-stream-prefix": "ecs",
            },
        ),
        environment=DEFAULT_ENVIRONMENT,
    )
    return TaskDefinition(
        family=config.task_family,
        container_definitions=(container,),
        network_mode=DEFAULT_NETWORK_MODE,
        requires_compatibilities=DEFAULT_COMPATIBILITIES,
        cpu=DEFAULT_TASK_CPU,
        memory=DEFAULT_TASK_MEMORY,
    )


def fetch_current(config: DeployConfig) -> Result[TaskDefinition | None, DeployError]:
    """Latest registered revision of the family, or None if there is none.

    Only the "unable to describe" answer ECS gives for an unknown family
    means "not registered yet". Any other failure, such as throttling
    or an expired session, and any unusable payload is an error, so a live
    definition is never replaced by the default template.
    """
    result = run_aws_json(
        config,
        "ecs",
        "describe-task-definition",
        "--task-definition",
        config.task_family,
    )
    if isinstance(result, Err):
        text = f"{result.error.stderr}\n{result.error.stdout}".lower()
        if _FAMILY_NOT_FOUND_MARKER in text:
            return Ok(None)
        return Err(
            RegistrationFailure(
                family=config.task_family,
                message=f"failed to describe task definition '{config.task_family}'",
                hint=result.error.details,
            )
        )

    payload = get_table(result.value, "taskDefinition")
    if payload is None:
        return Err(
            RegistrationFailure(
                family=config.task_family,
                message="describe-task-definition returned no taskDefinition",
            )
        )

    parsed = TaskDefinition.from_payload(payload)
    if isinstance(parsed, Err):
        return Err(
            RegistrationFailure(
                family=config.task_family,
                message=f"cannot reuse current task definition: {parsed.error}",
                hint=get_str(payload, "taskDefinitionArn"),
            )
        )
    return Ok(parsed.value)


def derive_task_definition(
    config: DeployConfig,
    image_ref: str,
    current: TaskDefinition | None,
) -> TaskDefinition:
    """Next definition: current one with a new primary image, or the default."""
    if current is None:
        return default_task_definition(config, image_ref)
    return current.with_primary_image(image_ref)


def register_task_definition(
    config: DeployConfig,
    task_definition: TaskDefinition,
) -> Result[str, DeployError]:
    """Register a new revision and return its ARN."""
    document = json.dumps(task_definition.to_payload(), indent=2) + "\n"
    with transient_text_file(document, prefix="task-definition.", suffix=".json") as path:
        result = run_aws_json(
            config,
            "ecs",
            "register-task-definition",
            "--cli-input-json",
            path.as_uri(),
        )

    if isinstance(result, Err):
        return Err(
            RegistrationFailure(
                family=task_definition.family,
                message=f"failed to register task definition '{task_definition.family}'",
                hint=result.error.details,
            )
        )

    registered = get_table(result.value, "taskDefinition") or {}
    arn = get_str(registered, "taskDefinitionArn")
    if arn is None:
        return Err(
            RegistrationFailure(
                family=task_definition.family,
                message="register-task-definition returned no taskDefinitionArn",
            )
        )
    return Ok(arn)


def build_task_definition(
    *,
    config: DeployConfig,
    image_ref: str,
    console: ConsoleProtocol,
) -> Result[str, DeployError]:
    """Derive the next task definition for `image_ref` and register it."""
    console.info("Creating new task definition...")
    console.print(f"image: {image_ref}", Style.DIM)

    current = fetch_current(config)
    if isinstance(current, Err):
        return current

    if current.value is None:
        console.warning(f"Task definition '{config.task_family}' not found")
        console.info("Creating base task definition...")

    task_definition = derive_task_definition(config, image_ref, current.value)
    arn = register_task_definition(config, task_definition)
    if isinstance(arn, Ok):
        console.info(f"New task definition: {arn.value}")
    return arn
