"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ecsdeploy.core.errors import ErrorCode
from ecsdeploy.output.console import Style
from ecsdeploy.services.deploy.errors import (
    AuthFailure,
    BuildFailure,
    DependencyMissing,
    DeployError,
    MissingInput,
    PushFailure,
    RegistrationFailure,
    RegistryQueryFailed,
    UnknownVersion,
    UpdateFailure,
)

if TYPE_CHECKING:
    from ecsdeploy.output.console import ConsoleProtocol

__all__ = ["print_deploy_error", "deploy_error_exit_code"]


def print_deploy_error(error: DeployError, console: ConsoleProtocol) -> None:
    """Print a deploy error with its hint and any recovery note."""
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)

    match error:
        case UpdateFailure(task_definition_arn=arn):
            # The revision is registered but not active; retrying the update is safe.
            console.print(f"registered but not active: {arn}", Style.DIM)
        case UnknownVersion() | MissingInput():
            console.print("nothing was changed", Style.DIM)
        case (
            DependencyMissing()
            | AuthFailure()
            | BuildFailure()
            | PushFailure()
            | RegistrationFailure()
            | RegistryQueryFailed()
        ):
            pass


def deploy_error_exit_code(error: DeployError) -> int:
    """Exit code for a deploy error; every fatal error exits 1."""
    del error
    return int(ErrorCode.FAILURE)
