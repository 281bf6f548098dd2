"""Typed configuration for one release invocation.

Values come from three layers, lowest precedence first:

1. built-in defaults (the BIA staging environment)
2. the `[deploy]` table of an optional `ecsdeploy.toml`
3. environment variables / command-line options

The merged result is a frozen `DeployConfig` that is passed explicitly to
every service call.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_int, get_str, get_table

__all__ = [
    "ConfigError",
    "DeployConfig",
    "CONFIG_FILE_NAME",
    "DEFAULT_REGION",
    "DEFAULT_ECR_REPO",
    "DEFAULT_CLUSTER",
    "DEFAULT_SERVICE",
    "DEFAULT_TASK_FAMILY",
    "build_config",
    "load_config_file",
]

CONFIG_FILE_NAME = "ecsdeploy.toml"

DEFAULT_REGION = "us-east-1"
DEFAULT_ECR_REPO = "863518460581.dkr.ecr.us-east-1.amazonaws.com/bia"
DEFAULT_CLUSTER = "cluster-bia-alb"
DEFAULT_SERVICE = "service-bia-alb"
DEFAULT_TASK_FAMILY = "task-def-bia-alb"

DEFAULT_CONTAINER_NAME = "bia"
DEFAULT_CONTAINER_PORT = 8080
DEFAULT_LOG_GROUP = "/ecs/bia-tf"

# Upper bound for `aws ecs wait services-stable`. The AWS waiter gives up on
# its own after 40 polls x 15s, so this only bites when the CLI hangs.
DEFAULT_WAIT_TIMEOUT_SECONDS = 15 * 60.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or is invalid."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class DeployConfig:
    """Operator-supplied parameters for one invocation.

    Attributes:
        region: AWS region for ECR and ECS calls.
        ecr_repo: Repository URI, `<registry host>/<repository name>`.
        cluster: ECS cluster name.
        service: ECS service name.
        task_family: Task definition family.
        rollback_tag: Tag to re-deploy (rollback) instead of the current revision.
        build_context: Directory passed to `docker build`.
        container_name: Container name used by the default task definition.
        container_port: Port exposed by the default task definition.
        log_group: CloudWatch log group used by the default task definition.
        wait_timeout: Seconds to wait for the service to become stable.
        health_url: Optional URL probed after a stable deploy.
    """

    region: str = DEFAULT_REGION
    ecr_repo: str = DEFAULT_ECR_REPO
    cluster: str = DEFAULT_CLUSTER
    service: str = DEFAULT_SERVICE
    task_family: str = DEFAULT_TASK_FAMILY
    rollback_tag: str | None = None
    build_context: Path = field(default_factory=lambda: Path("."))
    container_name: str = DEFAULT_CONTAINER_NAME
    container_port: int = DEFAULT_CONTAINER_PORT
    log_group: str = DEFAULT_LOG_GROUP
    wait_timeout: float = DEFAULT_WAIT_TIMEOUT_SECONDS
    health_url: str | None = None

    @property
    def registry_host(self) -> str:
        """Registry host used for `docker login`."""
        return self.ecr_repo.split("/", 1)[0]

    @property
    def repository_name(self) -> str:
        """Repository name used by `aws ecr describe-images`."""
        return self.ecr_repo.split("/", 1)[1]

    def image_ref(self, tag: str) -> str:
        """Artifact reference for one tag."""
        return f"{self.ecr_repo}:{tag}"

    def validate(self) -> Result[DeployConfig, ConfigError]:
        """Check values that the AWS CLI would otherwise reject late."""
        host, sep, name = self.ecr_repo.partition("/")
        if not sep or not host or not name:
            return Err(
                ConfigError(f"ecr_repo must be '<registry>/<repository>', got '{self.ecr_repo}'")
            )
        if ":" in name:
            return Err(ConfigError(f"ecr_repo must not include a tag: '{self.ecr_repo}'"))
        for attr in ("region", "cluster", "service", "task_family", "container_name"):
            if not getattr(self, attr):
                return Err(ConfigError(f"{attr} must not be empty"))
        if not 0 < self.container_port < 65536:
            return Err(ConfigError(f"container_port out of range: {self.container_port}"))
        if self.wait_timeout <= 0:
            return Err(ConfigError(f"wait_timeout must be positive: {self.wait_timeout}"))
        if self.rollback_tag is not None and not self.rollback_tag.strip():
            return Err(ConfigError("rollback tag must not be blank"))
        return Ok(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> DeployConfig:
        """Create DeployConfig from the `[deploy]` table of a config file."""
        defaults = cls()
        context = get_str(data, "build_context")
        port = get_int(data, "container_port")
        timeout = get_float(data, "wait_timeout")
        return cls(
            region=get_str(data, "region") or defaults.region,
            ecr_repo=get_str(data, "ecr_repo") or defaults.ecr_repo,
            cluster=get_str(data, "cluster") or defaults.cluster,
            service=get_str(data, "service") or defaults.service,
            task_family=get_str(data, "task_family") or defaults.task_family,
            build_context=Path(context) if context else defaults.build_context,
            container_name=get_str(data, "container_name") or defaults.container_name,
            container_port=port if port is not None else defaults.container_port,
            log_group=get_str(data, "log_group") or defaults.log_group,
            wait_timeout=timeout if timeout is not None else defaults.wait_timeout,
            health_url=get_str(data, "health_url"),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config_file(path: Path) -> Result[DeployConfig, ConfigError]:
    """Load the `[deploy]` table of a TOML file into a DeployConfig.

    A file without a `[deploy]` table yields the defaults.
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    raw = result.value.get("deploy")
    if raw is not None and as_str_dict(raw) is None:
        return Err(ConfigError("[deploy] must be a table", path=path))

    table = get_table(result.value, "deploy") or {}
    return Ok(DeployConfig.from_dict(table))


def build_config(
    base: DeployConfig,
    overrides: Mapping[str, object | None],
) -> Result[DeployConfig, ConfigError]:
    """Apply non-None overrides on top of `base` and validate the result."""
    changes = {k: v for k, v in overrides.items() if v is not None}
    tag = changes.get("rollback_tag")
    if isinstance(tag, str):
        changes["rollback_tag"] = tag.strip()
    try:
        merged = replace(base, **changes)
    except TypeError as e:
        return Err(ConfigError(f"Invalid config override: {e}"))
    return merged.validate()
