"""Base interface for render backends."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, Field, model_validator

if TYPE_CHECKING:
    from hookclip.jobs.models import ClipOptions
    from hookclip.models.moment import Moment


class EventKind(str, Enum):
    """Progress signal sent by a render backend."""

    STARTED = "started"
    DONE = "done"
    FAILED = "failed"


class RenderEvent(BaseModel):
    """Inbound progress or completion signal for one job."""

    job_id: str = Field(..., description="Job the signal belongs to")
    kind: EventKind = Field(..., description="started, done or failed")
    result_ref: str | None = Field(default=None, description="Artifact reference (done only)")
    reason: str | None = Field(default=None, description="Failure detail (failed only)")

    @model_validator(mode="after")
    def validate_payload(self) -> "RenderEvent":
        if self.kind == EventKind.DONE and not self.result_ref:
            raise ValueError("done events must carry a result_ref")
        return self


EventSink = Callable[[RenderEvent], Awaitable[bool]]


class IRenderBackend(Protocol):
    """Protocol for the media trim/transcode collaborator.

    ``start`` only hands the work over. Progress comes back later as
    ``RenderEvent`` values delivered to the job orchestrator.
    """

    async def start(self, job_id: str, moment: Moment, options: ClipOptions) -> None:
        """Ask the backend to render ``moment`` for ``job_id``.

        Raises:
            RenderBackendError: If the backend refuses or is unreachable.
        """
        ...

    @property
    def name(self) -> str:
        """Backend name identifier."""
        ...
