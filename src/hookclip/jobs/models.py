"""Clip job domain models."""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from hookclip.errors import ConfigurationError
from hookclip.models.moment import Moment


class AspectRatio(str, Enum):
    """Output frame shape."""

    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"
    SQUARE = "1:1"
    VERTICAL = "4:5"


class Resolution(str, Enum):
    """Output vertical resolution."""

    P1080 = "1080p"
    P720 = "720p"
    P480 = "480p"


class JobStatus(str, Enum):
    """Status of a clip job."""

    QUEUED = "queued"
    PROCESSING = "processing"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.DONE, JobStatus.FAILED)


class FailureReason(str, Enum):
    """Why a clip job ended in ``failed``."""

    TIMEOUT = "timeout"
    BACKEND_ERROR = "backend_error"
    CANCELLED = "cancelled"


def _parse_choice(enum_cls: type[Enum], value: Any, label: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ConfigurationError(
            f"Unsupported {label} {value!r}. Allowed: {allowed}"
        ) from None


@dataclass(frozen=True)
class ClipOptions:
    """Rendering options in effect for one clip job."""

    aspect_ratio: AspectRatio = AspectRatio.LANDSCAPE
    resolution: Resolution = Resolution.P1080

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "aspect_ratio", _parse_choice(AspectRatio, self.aspect_ratio, "aspect ratio")
        )
        object.__setattr__(
            self, "resolution", _parse_choice(Resolution, self.resolution, "resolution")
        )

    @classmethod
    def parse(
        cls,
        aspect_ratio: str | AspectRatio | None = None,
        resolution: str | Resolution | None = None,
    ) -> "ClipOptions":
        """Build options, filling defaults for missing values.

        Raises:
            ConfigurationError: If a value is outside its enumerated set.
        """
        return cls(
            aspect_ratio=AspectRatio.LANDSCAPE if aspect_ratio is None else aspect_ratio,
            resolution=Resolution.P1080 if resolution is None else resolution,
        )

    @classmethod
    def from_value(cls, value: "ClipOptions | Mapping[str, Any] | None") -> "ClipOptions":
        if value is None:
            return cls()
        if isinstance(value, ClipOptions):
            return value
        unknown = set(value) - {"aspect_ratio", "resolution"}
        if unknown:
            raise ConfigurationError(f"Unknown clip option(s): {sorted(unknown)}")
        return cls.parse(value.get("aspect_ratio"), value.get("resolution"))

    def to_dict(self) -> dict[str, str]:
        return {"aspect_ratio": self.aspect_ratio.value, "resolution": self.resolution.value}


@dataclass(frozen=True)
class JobFailure:
    """Structured reason carried by a failed job."""

    reason: FailureReason
    message: str = ""


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ClipJob:
    """A tracked request to render one moment into a clip.

    Only the orchestrator mutates a job. ``moment`` is a frozen value
    snapshot taken at submission time.
    """

    moment: Moment
    options: ClipOptions = field(default_factory=ClipOptions)
    id: str = field(default_factory=lambda: uuid4().hex)
    status: JobStatus = JobStatus.QUEUED
    result_ref: str | None = None
    error: JobFailure | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    completed_at: datetime | None = None
    # Monotonic clock reading taken when the current status was entered.
    state_entered_at: float = field(default_factory=time.monotonic)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal
