from __future__ import annotations

import shutil
from collections.abc import Iterable

from ecsdeploy.core.result import Err, Ok, Result
from ecsdeploy.services.deploy.errors import DependencyMissing

_INSTALL_HINTS = {
    "aws": "Install AWS CLI v2: https://docs.aws.amazon.com/cli/latest/userguide/getting-started-install.html",
    "docker": "Install Docker: https://docs.docker.com/get-docker/",
    "git": "Install Git: https://git-scm.com/downloads",
}

BUILD_TOOLS = ("git", "docker", "aws")
DEPLOY_TOOLS = ("git", "aws")
ROLLBACK_TOOLS = ("aws",)
LIST_TOOLS = ("aws",)


def ensure_tools_available(tools: Iterable[str]) -> Result[None, DependencyMissing]:
    """Fail on the first tool that is not on PATH."""
    for tool in tools:
        if shutil.which(tool) is None:
            return Err(
                DependencyMissing(
                    tool=tool,
                    message=f"{tool}: missing",
                    hint=_INSTALL_HINTS.get(tool),
                )
            )
    return Ok(None)
