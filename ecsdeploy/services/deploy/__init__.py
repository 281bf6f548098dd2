"""Versioned build, deploy and rollback for one ECS service."""

from ecsdeploy.services.deploy.errors import (
    AuthFailure,
    BuildFailure,
    DependencyMissing,
    DeployError,
    MissingInput,
    PushFailure,
    RegistrationFailure,
    RegistryQueryFailed,
    UnknownVersion,
    UpdateFailure,
)
from ecsdeploy.services.deploy.model import DeployReport, ImageVersion, Outcome, PublishedImage
from ecsdeploy.services.deploy.service import ReleaseService

__all__ = [
    # errors
    "AuthFailure",
    "BuildFailure",
    "DependencyMissing",
    "DeployError",
    "MissingInput",
    "PushFailure",
    "RegistrationFailure",
    "RegistryQueryFailed",
    "UnknownVersion",
    "UpdateFailure",
    # model
    "DeployReport",
    "ImageVersion",
    "Outcome",
    "PublishedImage",
    # service
    "ReleaseService",
]
