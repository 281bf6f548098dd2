from __future__ import annotations

from ecsdeploy.core.config import DeployConfig
from ecsdeploy.core.result import Err, Ok, Result
from ecsdeploy.output.console import ConsoleProtocol
from ecsdeploy.platform.process import run as run_process
from ecsdeploy.platform.process import run_silent
from ecsdeploy.services.deploy.aws import run_aws
from ecsdeploy.services.deploy.errors import AuthFailure, BuildFailure, DeployError, PushFailure
from ecsdeploy.services.deploy.model import LATEST_TAG, PublishedImage
from ecsdeploy.services.deploy.timeouts import DOCKER_TAG_TIMEOUT_SECONDS, LOGIN_TIMEOUT_SECONDS


def _build_and_tag(
    *,
    config: DeployConfig,
    image: PublishedImage,
    console: ConsoleProtocol,
) -> Result[None, DeployError]:
    console.info("Running docker build...")
    built = run_silent(
        ["docker", "build", "-t", image.latest, str(config.build_context)],
        cwd=config.build_context,
    )
    if isinstance(built, Err):
        return Err(
            BuildFailure(
                message=f"docker build failed (exit {built.error.returncode})",
                hint=f"context: {config.build_context}",
            )
        )

    # Re-tag the image we just built; never build twice.
    if image.pinned != image.latest:
        tagged = run_process(
            ["docker", "tag", image.latest, image.pinned],
            cwd=config.build_context,
            timeout=DOCKER_TAG_TIMEOUT_SECONDS,
        )
        if isinstance(tagged, Err):
            return Err(
                BuildFailure(
                    message=f"docker tag failed: {image.pinned}",
                    hint=tagged.error.details,
                )
            )
    return Ok(None)


def registry_login(*, config: DeployConfig, console: ConsoleProtocol) -> Result[None, DeployError]:
    """Log docker into ECR with a token fetched for this call only.

    The password goes from `aws` stdout to `docker login` stdin and is never
    written anywhere else.
    """
    console.info("Logging in to ECR...")
    token = run_aws(
        config,
        "ecr",
        "get-login-password",
        json_output=False,
        timeout=LOGIN_TIMEOUT_SECONDS,
    )
    if isinstance(token, Err):
        return Err(
            AuthFailure(
                registry=config.registry_host,
                message="failed to get ECR login password",
                hint=token.error.details,
            )
        )

    login = run_process(
        ["docker", "login", "--username", "AWS", "--password-stdin", config.registry_host],
        cwd=config.build_context,
        timeout=LOGIN_TIMEOUT_SECONDS,
        input=token.value.strip(),
    )
    if isinstance(login, Err):
        return Err(
            AuthFailure(
                registry=config.registry_host,
                message=f"docker login failed: {config.registry_host}",
                hint=login.error.details,
            )
        )
    return Ok(None)


def publish_image(
    *,
    config: DeployConfig,
    release_id: str,
    console: ConsoleProtocol,
) -> Result[PublishedImage, DeployError]:
    """Build once, tag `latest` and `release_id`, log in, push both tags.

    Any failing step aborts; nothing is pushed before the build and login
    succeed.
    """
    image = PublishedImage(
        release_id=release_id,
        latest=config.image_ref(LATEST_TAG),
        pinned=config.image_ref(release_id),
    )
    console.info(f"Release id: {release_id}")
    console.info(f"Image: {image.pinned}")

    built = _build_and_tag(config=config, image=image, console=console)
    if isinstance(built, Err):
        return built

    login = registry_login(config=config, console=console)
    if isinstance(login, Err):
        return login

    pushed: set[str] = set()
    for ref in image.refs:
        if ref in pushed:
            continue
        console.info(f"Pushing {ref}...")
        result = run_silent(["docker", "push", ref], cwd=config.build_context)
        if isinstance(result, Err):
            return Err(
                PushFailure(
                    image_ref=ref,
                    message=f"docker push failed: {ref} (exit {result.error.returncode})",
                )
            )
        pushed.add(ref)

    return Ok(image)
