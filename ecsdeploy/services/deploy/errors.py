from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DependencyMissing:
    tool: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class MissingInput:
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class BuildFailure:
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class AuthFailure:
    registry: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class PushFailure:
    image_ref: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class RegistrationFailure:
    family: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class UpdateFailure:
    service: str
    task_definition_arn: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class UnknownVersion:
    tag: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class RegistryQueryFailed:
    repository: str
    message: str
    hint: str | None = None


DeployError = (
    DependencyMissing
    | MissingInput
    | BuildFailure
    | AuthFailure
    | PushFailure
    | RegistrationFailure
    | UpdateFailure
    | UnknownVersion
    | RegistryQueryFailed
)
