"""Read-only git queries for a single working copy."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from ecsdeploy.core.result import Err, Ok, Result
from ecsdeploy.platform.process import ProcessError
from ecsdeploy.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_HEX_RE = re.compile(r"^[0-9a-f]+$")

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """Git working copy rooted at `path`.

    All methods that can fail return Result types.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def head_revision(self) -> Result[str, GitError]:
        """Full hash of HEAD.

        Fails for directories outside a repository and for repositories
        without commits.
        """
        result = self._run(["rev-parse", "--verify", "HEAD"])
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command="rev-parse HEAD",
                        message=e.stderr.strip() or "git rev-parse failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                sha = stdout.strip().lower()
                if not _HEX_RE.match(sha):
                    return Err(
                        GitError(
                            command="rev-parse HEAD",
                            message=f"unexpected revision output: {sha!r}",
                        )
                    )
                return Ok(sha)

    def short_revision(self, length: int = 7) -> Result[str, GitError]:
        """First `length` characters of HEAD."""
        return self.head_revision().map(lambda sha: sha[:length])

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=_GIT_TIMEOUT_SECONDS,
        )
