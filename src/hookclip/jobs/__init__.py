"""Clip job management for hookclip."""

from hookclip.jobs.models import (
    AspectRatio,
    ClipJob,
    ClipOptions,
    FailureReason,
    JobFailure,
    JobStatus,
    Resolution,
)
from hookclip.jobs.orchestrator import DedupePolicy, JobOrchestrator

__all__ = [
    "AspectRatio",
    "ClipJob",
    "ClipOptions",
    "DedupePolicy",
    "FailureReason",
    "JobFailure",
    "JobOrchestrator",
    "JobStatus",
    "Resolution",
]
