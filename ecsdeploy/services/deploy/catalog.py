from __future__ import annotations

from collections.abc import Iterator

from ecsdeploy.core.config import DeployConfig
from ecsdeploy.core.result import Err, Ok, Result
from ecsdeploy.core.structured import StrDict, as_str_dict, get_list
from ecsdeploy.services.deploy.aws import run_aws_json
from ecsdeploy.services.deploy.errors import DeployError, RegistryQueryFailed
from ecsdeploy.services.deploy.model import ImageVersion, parse_pushed_at

LIST_WINDOW = 10

_NOT_FOUND_MARKERS = ("imagenotfoundexception", "image not found")


def iter_versions(details: StrDict) -> Iterator[ImageVersion]:
    """Yield one ImageVersion per tagged image in a describe-images payload.

    Only the first tag of each image is reported. Untagged images and
    entries without a push time are skipped.
    """
    for item in get_list(details, "imageDetails") or []:
        entry = as_str_dict(item)
        if entry is None:
            continue
        tags = [t for t in get_list(entry, "imageTags") or [] if isinstance(t, str)]
        pushed_at = parse_pushed_at(entry.get("imagePushedAt"))
        if not tags or pushed_at is None:
            continue
        yield ImageVersion(tag=tags[0], pushed_at=pushed_at)


def list_versions(
    config: DeployConfig,
    *,
    limit: int = LIST_WINDOW,
) -> Result[tuple[ImageVersion, ...], DeployError]:
    """The `limit` most recently pushed images, oldest first."""
    result = run_aws_json(
        config,
        "ecr",
        "describe-images",
        "--repository-name",
        config.repository_name,
    )
    if isinstance(result, Err):
        return Err(
            RegistryQueryFailed(
                repository=config.repository_name,
                message="failed to list images from ECR",
                hint=result.error.details,
            )
        )

    ordered = sorted(iter_versions(result.value), key=lambda v: v.pushed_at)
    return Ok(tuple(ordered[-limit:]) if limit > 0 else ())


def version_exists(config: DeployConfig, tag: str) -> Result[bool, DeployError]:
    """True if `tag` was pushed to the repository."""
    result = run_aws_json(
        config,
        "ecr",
        "describe-images",
        "--repository-name",
        config.repository_name,
        "--image-ids",
        f"imageTag={tag}",
    )
    if isinstance(result, Err):
        text = f"{result.error.stderr}\n{result.error.stdout}".lower()
        if any(marker in text for marker in _NOT_FOUND_MARKERS):
            return Ok(False)
        return Err(
            RegistryQueryFailed(
                repository=config.repository_name,
                message=f"failed to look up tag '{tag}' in ECR",
                hint=result.error.details,
            )
        )

    for item in get_list(result.value, "imageDetails") or []:
        entry = as_str_dict(item)
        if entry is None:
            continue
        if tag in (get_list(entry, "imageTags") or []):
            return Ok(True)
    return Ok(False)
