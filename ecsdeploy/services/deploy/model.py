from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

# Tag used when the working copy has no git revision, and the floating tag
# pushed alongside every pinned tag.
LATEST_TAG = "latest"

RELEASE_ID_LENGTH = 7


class Outcome(Enum):
    """How the service settled after its task definition was repointed."""

    STABLE = "stable"
    TIMED_OUT = "timed_out"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class PublishedImage:
    """Both tags pushed for one build; they reference the same image."""

    release_id: str
    latest: str
    pinned: str

    @property
    def refs(self) -> tuple[str, str]:
        """Push order: floating tag first, then the pinned one."""
        return (self.latest, self.pinned)


@dataclass(frozen=True, slots=True)
class ImageVersion:
    tag: str
    pushed_at: datetime

    @property
    def pushed_at_display(self) -> str:
        return self.pushed_at.isoformat(timespec="seconds")


@dataclass(frozen=True, slots=True)
class DeployReport:
    """What a deploy or rollback committed."""

    release_id: str
    image_ref: str
    task_definition_arn: str
    outcome: Outcome

    @property
    def is_stable(self) -> bool:
        return self.outcome is Outcome.STABLE


def parse_pushed_at(value: object) -> datetime | None:
    """Parse `imagePushedAt` from `aws ecr describe-images` JSON.

    AWS CLI v2 emits ISO-8601 strings; v1 emitted epoch seconds.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(float(value), tz=UTC)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
