"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from ecsdeploy.output.errors import deploy_error_exit_code, print_deploy_error
from ecsdeploy.services.deploy.errors import DeployError
from ecsdeploy.services.deploy.model import DeployReport, Outcome

if TYPE_CHECKING:
    from ecsdeploy.cli.context import CLIContext


def fail(error: DeployError, ctx: CLIContext) -> NoReturn:
    """Print `error` and exit with its code."""
    print_deploy_error(error, ctx.console)
    raise typer.Exit(code=deploy_error_exit_code(error))


def report_deploy(report: DeployReport, ctx: CLIContext) -> None:
    """Summarize a committed deploy. A timed-out wait is not a failure."""
    if report.outcome is Outcome.TIMED_OUT:
        ctx.console.warning(
            f"{report.release_id} is active on {ctx.config.service} but not yet confirmed stable"
        )
