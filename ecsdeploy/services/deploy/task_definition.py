"""Typed ECS task definition records.

`describe-task-definition` returns the registered document plus fields ECS
assigns itself (ARN, revision, status, registeredAt, ...). Those must not be
sent back to `register-task-definition`. Rather than deleting known volatile
keys from the raw dict, `TaskDefinition.from_payload` copies only the fields
that can be registered; anything new that ECS starts returning is dropped by
construction.

Container-level keys are all registrable. Keys the records do not model are
carried through in the `extras` of `ContainerDefinition`, `PortMapping` and
`LogConfiguration`, so hand-made changes survive a redeploy.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from ecsdeploy.core.result import Err, Ok, Result
from ecsdeploy.core.structured import (
    StrDict,
    as_obj_list,
    as_str_dict,
    get_int,
    get_list,
    get_str,
    get_table,
)

__all__ = [
    "ContainerDefinition",
    "EnvVar",
    "LogConfiguration",
    "PortMapping",
    "TaskDefinition",
]

# Task-level fields that are copied verbatim when present. Everything not
# listed here or modelled explicitly below is server-assigned or intentionally
# reset (placementConstraints, compatibilities, requiresAttributes, ...).
_PASSTHROUGH_TASK_FIELDS = (
    "taskRoleArn",
    "executionRoleArn",
    "volumes",
    "pidMode",
    "ipcMode",
    "proxyConfiguration",
    "inferenceAccelerators",
    "ephemeralStorage",
    "runtimePlatform",
)

_MODELLED_CONTAINER_FIELDS = frozenset(
    {
        "name",
        "image",
        "memory",
        "essential",
        "portMappings",
        "logConfiguration",
        "environment",
    }
)


_MODELLED_PORT_FIELDS = frozenset({"containerPort", "protocol", "hostPort", "name"})


def _empty_extras() -> dict[str, object]:
    return {}


@dataclass(frozen=True, slots=True)
class PortMapping:
    """One port mapping; unmodelled keys (appProtocol, containerPortRange, ...) ride in `extras`."""

    container_port: int | None = None
    protocol: str | None = "tcp"
    host_port: int | None = None
    name: str | None = None
    extras: Mapping[str, object] = field(default_factory=_empty_extras)

    def to_payload(self) -> StrDict:
        out: StrDict = dict(self.extras)
        if self.container_port is not None:
            out["containerPort"] = self.container_port
        if self.protocol is not None:
            out["protocol"] = self.protocol
        if self.host_port is not None:
            out["hostPort"] = self.host_port
        if self.name is not None:
            out["name"] = self.name
        return out

    @classmethod
    def from_payload(cls, data: Mapping[str, object]) -> PortMapping:
        return cls(
            container_port=get_int(data, "containerPort"),
            protocol=get_str(data, "protocol"),
            host_port=get_int(data, "hostPort"),
            name=get_str(data, "name"),
            extras={k: v for k, v in data.items() if k not in _MODELLED_PORT_FIELDS},
        )


@dataclass(frozen=True, slots=True)
class LogConfiguration:
    """Log driver settings; `secretOptions` and other keys ride in `extras`."""

    log_driver: str
    options: Mapping[str, object] = field(default_factory=_empty_extras)
    extras: Mapping[str, object] = field(default_factory=_empty_extras)

    def to_payload(self) -> StrDict:
        out: StrDict = dict(self.extras)
        out["logDriver"] = self.log_driver
        if self.options:
            out["options"] = dict(self.options)
        return out

    @classmethod
    def from_payload(cls, data: Mapping[str, object]) -> LogConfiguration | None:
        driver = get_str(data, "logDriver")
        if driver is None:
            return None
        return cls(
            log_driver=driver,
            options=get_table(data, "options") or {},
            extras={k: v for k, v in data.items() if k not in ("logDriver", "options")},
        )


@dataclass(frozen=True, slots=True)
class EnvVar:
    name: str
    value: str

    def to_payload(self) -> StrDict:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True, slots=True)
class ContainerDefinition:
    """One container entry.

    Attributes:
        name: Container name.
        image: Artifact reference (`<repo>:<tag>`).
        memory: Hard memory limit in MiB.
        essential: Whether the task stops when this container stops.
        port_mappings: Exposed ports.
        log_configuration: Log driver and options.
        environment: Plain environment variables.
        extras: Any other container keys, passed through unchanged.
    """

    name: str
    image: str
    memory: int | None = None
    essential: bool | None = None
    port_mappings: tuple[PortMapping, ...] = ()
    log_configuration: LogConfiguration | None = None
    environment: tuple[EnvVar, ...] = ()
    extras: Mapping[str, object] = field(default_factory=_empty_extras)

    def with_image(self, image: str) -> ContainerDefinition:
        return replace(self, image=image)

    def to_payload(self) -> StrDict:
        out: StrDict = dict(self.extras)
        out["name"] = self.name
        out["image"] = self.image
        if self.memory is not None:
            out["memory"] = self.memory
        if self.essential is not None:
            out["essential"] = self.essential
        if self.port_mappings:
            out["portMappings"] = [p.to_payload() for p in self.port_mappings]
        if self.log_configuration is not None:
            out["logConfiguration"] = self.log_configuration.to_payload()
        if self.environment:
            out["environment"] = [e.to_payload() for e in self.environment]
        return out

    @classmethod
    def from_payload(cls, data: Mapping[str, object]) -> Result[ContainerDefinition, str]:
        name = get_str(data, "name")
        image = get_str(data, "image")
        if name is None or image is None:
            return Err("container definition without name or image")

        essential = data.get("essential")
        ports: list[PortMapping] = []
        for item in get_list(data, "portMappings") or []:
            entry = as_str_dict(item)
            if entry is None:
                return Err(f"invalid port mapping in container '{name}'")
            ports.append(PortMapping.from_payload(entry))

        env: list[EnvVar] = []
        for item in get_list(data, "environment") or []:
            entry = as_str_dict(item)
            if entry is None:
                return Err(f"invalid environment entry in container '{name}'")
            key = entry.get("name")
            value = entry.get("value")
            if not isinstance(key, str) or not isinstance(value, str):
                return Err(f"invalid environment entry in container '{name}'")
            env.append(EnvVar(name=key, value=value))

        log_table = get_table(data, "logConfiguration")
        log_config = LogConfiguration.from_payload(log_table) if log_table is not None else None
        extras = {k: v for k, v in data.items() if k not in _MODELLED_CONTAINER_FIELDS}
        if log_config is None and "logConfiguration" in data:
            # No logDriver; passed through as-is.
            extras["logConfiguration"] = data["logConfiguration"]
        return Ok(
            cls(
                name=name,
                image=image,
                memory=get_int(data, "memory"),
                essential=essential if isinstance(essential, bool) else None,
                port_mappings=tuple(ports),
                log_configuration=log_config,
                environment=tuple(env),
                extras=extras,
            )
        )


@dataclass(frozen=True, slots=True)
class TaskDefinition:
    """A task definition that can be submitted as a new revision."""

    family: str
    container_definitions: tuple[ContainerDefinition, ...]
    network_mode: str | None = None
    requires_compatibilities: tuple[str, ...] = ()
    cpu: str | None = None
    memory: str | None = None
    extras: Mapping[str, object] = field(default_factory=_empty_extras)

    @property
    def primary_container(self) -> ContainerDefinition:
        return self.container_definitions[0]

    def with_primary_image(self, image: str) -> TaskDefinition:
        """Copy with the first container pointing at `image`."""
        first, *rest = self.container_definitions
        return replace(self, container_definitions=(first.with_image(image), *rest))

    def to_payload(self) -> StrDict:
        """Document accepted by `aws ecs register-task-definition --cli-input-json`."""
        out: StrDict = {"family": self.family}
        if self.network_mode is not None:
            out["networkMode"] = self.network_mode
        if self.requires_compatibilities:
            out["requiresCompatibilities"] = list(self.requires_compatibilities)
        if self.cpu is not None:
            out["cpu"] = self.cpu
        if self.memory is not None:
            out["memory"] = self.memory
        out["containerDefinitions"] = [c.to_payload() for c in self.container_definitions]
        for key, value in self.extras.items():
            out[key] = value
        return out

    @classmethod
    def from_payload(cls, data: Mapping[str, object]) -> Result[TaskDefinition, str]:
        """Build a registrable copy of a described task definition."""
        family = get_str(data, "family")
        if family is None:
            return Err("task definition without family")

        raw_containers = get_list(data, "containerDefinitions")
        if not raw_containers:
            return Err(f"task definition '{family}' has no containers")

        containers: list[ContainerDefinition] = []
        for item in raw_containers:
            entry = as_str_dict(item)
            if entry is None:
                return Err(f"invalid container definition in '{family}'")
            parsed = ContainerDefinition.from_payload(entry)
            if isinstance(parsed, Err):
                return parsed
            containers.append(parsed.value)

        compat = as_obj_list(data.get("requiresCompatibilities")) or []
        return Ok(
            cls(
                family=family,
                container_definitions=tuple(containers),
                network_mode=get_str(data, "networkMode"),
                requires_compatibilities=tuple(c for c in compat if isinstance(c, str)),
                cpu=_str_or_int(data.get("cpu")),
                memory=_str_or_int(data.get("memory")),
                extras={k: data[k] for k in _PASSTHROUGH_TASK_FIELDS if k in data},
            )
        )


def _str_or_int(value: object) -> str | None:
    # Task-level cpu/memory are strings in the API but hand-written JSON often uses ints.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
