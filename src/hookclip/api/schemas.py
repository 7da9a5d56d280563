"""Request and response schemas for the hookclip API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from hookclip.jobs.models import ClipJob
from hookclip.models.analysis import AnalysisResult
from hookclip.models.moment import Moment, format_timestamp


# ------------------------------------------------------------------
# Requests
# ------------------------------------------------------------------


class AnalyzeRequest(BaseModel):
    url: str = Field(..., description="YouTube link to analyze")


class MomentPayload(BaseModel):
    label: str = Field(..., description="Short description of the moment")
    start: float = Field(..., allow_inf_nan=False, description="Start offset in seconds")
    end: float = Field(..., allow_inf_nan=False, description="End offset in seconds")
    score: int = Field(..., description="Hook score 0-100")
    tags: list[str] = Field(default_factory=list, description="Tags")

    def to_domain(self) -> Moment:
        """Build the domain moment; raises ValidationError on bad ranges."""
        return Moment(
            label=self.label,
            start=self.start,
            end=self.end,
            score=self.score,
            tags=self.tags,
        )


class ClipRequest(BaseModel):
    moment: MomentPayload
    aspect_ratio: str | None = Field(None, description="16:9, 9:16, 1:1 or 4:5")
    resolution: str | None = Field(None, description="1080p, 720p or 480p")


# ------------------------------------------------------------------
# Analysis responses
# ------------------------------------------------------------------


class MomentResponse(MomentPayload):
    level: str
    explanation: str
    start_label: str
    end_label: str

    @classmethod
    def from_domain(cls, moment: Moment) -> "MomentResponse":
        band = moment.band
        return cls(
            label=moment.label,
            start=moment.start,
            end=moment.end,
            score=moment.score,
            tags=sorted(moment.tags),
            level=band.level.value,
            explanation=band.explanation,
            start_label=format_timestamp(moment.start),
            end_label=format_timestamp(moment.end),
        )


class AnalysisResponse(BaseModel):
    analysis_id: str
    video_id: str
    url: str
    title: str
    channel: str
    duration: str
    overall_score: int
    level: str
    explanation: str
    hooks: list[str]
    moments: list[MomentResponse]

    @classmethod
    def from_domain(cls, result: AnalysisResult) -> "AnalysisResponse":
        band = result.band
        return cls(
            analysis_id=result.id,
            video_id=result.video.id,
            url=result.video.url,
            title=result.title,
            channel=result.channel,
            duration=result.duration,
            overall_score=result.overall_score,
            level=band.level.value,
            explanation=band.explanation,
            hooks=list(result.hooks),
            moments=[MomentResponse.from_domain(m) for m in result.moments],
        )


class MomentListResponse(BaseModel):
    analysis_id: str
    query: str
    count: int
    moments: list[MomentResponse]


# ------------------------------------------------------------------
# Job responses
# ------------------------------------------------------------------


class JobFailureResponse(BaseModel):
    reason: str
    message: str = ""


class JobStatusResponse(BaseModel):
    job_id: str
    status: str
    moment: MomentResponse
    aspect_ratio: str
    resolution: str
    result_ref: str | None = None
    error: JobFailureResponse | None = None
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None = None

    @classmethod
    def from_domain(cls, job: ClipJob) -> "JobStatusResponse":
        error = None
        if job.error is not None:
            error = JobFailureResponse(reason=job.error.reason.value, message=job.error.message)
        return cls(
            job_id=job.id,
            status=job.status.value,
            moment=MomentResponse.from_domain(job.moment),
            aspect_ratio=job.options.aspect_ratio.value,
            resolution=job.options.resolution.value,
            result_ref=job.result_ref,
            error=error,
            created_at=job.created_at,
            updated_at=job.updated_at,
            completed_at=job.completed_at,
        )


class JobListItem(BaseModel):
    job_id: str
    status: str
    label: str
    created_at: datetime


class RenderEventAck(BaseModel):
    job_id: str
    applied: bool
    status: str
