"""Git operations used to derive release identifiers.

Usage:
    from ecsdeploy.git import Repository

    repo = Repository(Path("."))
    match repo.short_revision():
        case Ok(sha):
            print(sha)
        case Err(e):
            print(e.message)
"""

from ecsdeploy.git.repository import GitError, Repository

__all__ = [
    "GitError",
    "Repository",
]
