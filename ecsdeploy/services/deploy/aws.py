from __future__ import annotations

import json

from ecsdeploy.core.config import DeployConfig
from ecsdeploy.core.result import Err, Ok, Result
from ecsdeploy.core.structured import StrDict, as_str_dict
from ecsdeploy.platform.process import ProcessError
from ecsdeploy.platform.process import run as run_process
from ecsdeploy.services.deploy.timeouts import AWS_TIMEOUT_SECONDS


def aws_command(config: DeployConfig, *args: str, json_output: bool = True) -> list[str]:
    """Build an `aws` invocation pinned to the configured region."""
    cmd = ["aws", *args, "--region", config.region]
    if json_output:
        cmd.extend(["--output", "json"])
    return cmd


def run_aws(
    config: DeployConfig,
    *args: str,
    timeout: float | None = AWS_TIMEOUT_SECONDS,
    json_output: bool = True,
) -> Result[str, ProcessError]:
    return run_process(
        aws_command(config, *args, json_output=json_output),
        cwd=config.build_context,
        timeout=timeout,
    )


def run_aws_json(
    config: DeployConfig,
    *args: str,
    timeout: float | None = AWS_TIMEOUT_SECONDS,
) -> Result[StrDict, ProcessError]:
    """Run an `aws` command and parse its JSON object output.

    Unparseable output is reported as a ProcessError so callers only handle
    one error type per call.
    """
    result = run_aws(config, *args, timeout=timeout)
    if isinstance(result, Err):
        return result

    cmd = tuple(aws_command(config, *args))
    try:
        obj: object = json.loads(result.value)
    except json.JSONDecodeError as e:
        return Err(
            ProcessError(
                command=cmd,
                returncode=0,
                stdout=result.value,
                stderr=f"invalid JSON from aws: {e}",
            )
        )

    data = as_str_dict(obj)
    if data is None:
        return Err(
            ProcessError(
                command=cmd,
                returncode=0,
                stdout=result.value,
                stderr="expected a JSON object from aws",
            )
        )
    return Ok(data)
