"""Release workflows: build, deploy, rollback and list.

Each workflow is strictly sequential and stops at the first fatal error.
Nothing already committed (pushed tags, registered revisions, a repointed
service) is undone on failure.
"""

from __future__ import annotations

from ecsdeploy.core.config import DeployConfig
from ecsdeploy.core.result import Err, Ok, Result
from ecsdeploy.git.repository import Repository
from ecsdeploy.output.console import ConsoleProtocol
from ecsdeploy.platform.http import HttpClient, RealHttpClient
from ecsdeploy.services.deploy.catalog import list_versions, version_exists
from ecsdeploy.services.deploy.errors import DeployError, MissingInput, UnknownVersion
from ecsdeploy.services.deploy.health import probe_health
from ecsdeploy.services.deploy.model import DeployReport, ImageVersion, PublishedImage
from ecsdeploy.services.deploy.orchestrator import update_service
from ecsdeploy.services.deploy.prereqs import (
    BUILD_TOOLS,
    DEPLOY_TOOLS,
    LIST_TOOLS,
    ROLLBACK_TOOLS,
    ensure_tools_available,
)
from ecsdeploy.services.deploy.publisher import publish_image
from ecsdeploy.services.deploy.revision import resolve_release_id
from ecsdeploy.services.deploy.task_builder import build_task_definition


class ReleaseService:
    """Coordinates git, ECR and ECS for one invocation."""

    def __init__(
        self,
        *,
        config: DeployConfig,
        console: ConsoleProtocol,
        http: HttpClient | None = None,
    ) -> None:
        self._config = config
        self._console = console
        self._http = http
        self._repo = Repository(config.build_context)

    @property
    def config(self) -> DeployConfig:
        return self._config

    def release_id(self) -> str:
        return resolve_release_id(self._repo, self._config.rollback_tag)

    def build(self) -> Result[PublishedImage, DeployError]:
        """Build the image and push `latest` plus the pinned tag."""
        tools = ensure_tools_available(BUILD_TOOLS)
        if isinstance(tools, Err):
            return tools

        self._console.header("Build")
        result = publish_image(
            config=self._config,
            release_id=self.release_id(),
            console=self._console,
        )
        if isinstance(result, Ok):
            self._console.success("Build complete")
            self._console.info(f"Image available at: {result.value.pinned}")
        return result

    def deploy(self) -> Result[DeployReport, DeployError]:
        """Deploy the image for the current revision (or the rollback tag)."""
        tools = ensure_tools_available(DEPLOY_TOOLS)
        if isinstance(tools, Err):
            return tools
        return self._deploy(self.release_id())

    def rollback(self) -> Result[DeployReport, DeployError]:
        """Re-deploy a previously pushed tag.

        The tag is checked against the registry before anything is registered.
        """
        tag = self._config.rollback_tag
        if not tag:
            return Err(
                MissingInput(
                    message="rollback tag not specified",
                    hint="Use -t/--tag",
                )
            )

        tools = ensure_tools_available(ROLLBACK_TOOLS)
        if isinstance(tools, Err):
            return tools

        self._console.header(f"Rollback to {tag}")
        exists = version_exists(self._config, tag)
        if isinstance(exists, Err):
            return exists
        if not exists.value:
            return Err(
                UnknownVersion(
                    tag=tag,
                    message=f"image with tag '{tag}' not found in ECR",
                    hint="Use 'ecsdeploy list' to see available versions",
                )
            )

        return self._deploy(tag)

    def build_and_deploy(self) -> Result[DeployReport, DeployError]:
        """Build, push, then deploy the tag that was just pushed."""
        built = self.build()
        if isinstance(built, Err):
            return built
        return self._deploy(built.value.release_id)

    def versions(self) -> Result[tuple[ImageVersion, ...], DeployError]:
        """The last pushed versions, oldest first."""
        tools = ensure_tools_available(LIST_TOOLS)
        if isinstance(tools, Err):
            return tools

        self._console.info("Listing latest versions available in ECR...")
        return list_versions(self._config)

    def _deploy(self, release_id: str) -> Result[DeployReport, DeployError]:
        self._console.header("Deploy")
        self._console.info(f"Deploying version: {release_id}")

        image_ref = self._config.image_ref(release_id)
        arn = build_task_definition(config=self._config, image_ref=image_ref, console=self._console)
        if isinstance(arn, Err):
            return arn

        outcome = update_service(
            config=self._config,
            task_definition_arn=arn.value,
            console=self._console,
        )
        if isinstance(outcome, Err):
            return outcome

        report = DeployReport(
            release_id=release_id,
            image_ref=image_ref,
            task_definition_arn=arn.value,
            outcome=outcome.value,
        )
        if report.is_stable:
            self._console.success("Deploy complete")
            self._console.info(f"Deployed version: {release_id}")
            if self._config.health_url:
                probe_health(
                    url=self._config.health_url,
                    client=self._http or RealHttpClient(),
                    console=self._console,
                )
        return Ok(report)
