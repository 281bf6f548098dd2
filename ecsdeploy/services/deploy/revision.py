from __future__ import annotations

from ecsdeploy.core.result import Ok
from ecsdeploy.git.repository import Repository
from ecsdeploy.services.deploy.model import LATEST_TAG, RELEASE_ID_LENGTH


def resolve_release_id(repo: Repository, rollback_tag: str | None = None) -> str:
    """Identifier for the release being built or deployed.

    An explicit rollback tag wins and is returned as given; the catalog
    checks it exists. Otherwise the first 7 characters of HEAD. Working copies
    without a usable revision fall back to `latest` instead of failing.
    """
    if rollback_tag:
        return rollback_tag

    result = repo.short_revision(RELEASE_ID_LENGTH)
    if isinstance(result, Ok):
        return result.value
    return LATEST_TAG
