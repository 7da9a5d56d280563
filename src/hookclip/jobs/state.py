"""Clip job state machine.

    queued -> processing -> done
    queued | processing -> failed

``done`` and ``failed`` are terminal. A signal that does not fit the
current state is dropped and logged, never applied.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from hookclip.jobs.models import ClipJob, FailureReason, JobFailure, JobStatus

logger = logging.getLogger(__name__)

_ALLOWED: dict[JobStatus, frozenset[JobStatus]] = {
    JobStatus.QUEUED: frozenset({JobStatus.PROCESSING, JobStatus.FAILED}),
    JobStatus.PROCESSING: frozenset({JobStatus.DONE, JobStatus.FAILED}),
    JobStatus.DONE: frozenset(),
    JobStatus.FAILED: frozenset(),
}


def can_transition(current: JobStatus, target: JobStatus) -> bool:
    return target in _ALLOWED[current]


def _enter(job: ClipJob, target: JobStatus, now: float) -> bool:
    if not can_transition(job.status, target):
        logger.warning(
            "Dropped %s signal for job %s in state %s",
            target.value,
            job.id,
            job.status.value,
        )
        return False
    previous = job.status
    job.status = target
    job.state_entered_at = now
    job.updated_at = datetime.now(timezone.utc)
    if target.is_terminal:
        job.completed_at = job.updated_at
    logger.info("Job %s: %s -> %s", job.id, previous.value, target.value)
    return True


def mark_processing(job: ClipJob, now: float) -> bool:
    """Apply the backend's "started" acknowledgment."""
    return _enter(job, JobStatus.PROCESSING, now)


def mark_done(job: ClipJob, result_ref: str, now: float) -> bool:
    """Apply a completion signal carrying the finished artifact reference."""
    if not result_ref:
        logger.warning("Dropped done signal for job %s without result_ref", job.id)
        return False
    if not _enter(job, JobStatus.DONE, now):
        return False
    job.result_ref = result_ref
    return True


def mark_failed(job: ClipJob, failure: JobFailure, now: float) -> bool:
    """Apply a failure from a timeout, cancellation or the backend."""
    if not _enter(job, JobStatus.FAILED, now):
        return False
    job.error = failure
    job.result_ref = None
    return True


def deadline_for(
    job: ClipJob,
    queued_timeout: float,
    processing_timeout: float,
) -> float | None:
    """Monotonic deadline of the job's current state, None when terminal."""
    if job.status is JobStatus.QUEUED:
        return job.state_entered_at + queued_timeout
    if job.status is JobStatus.PROCESSING:
        return job.state_entered_at + processing_timeout
    return None


def is_overdue(
    job: ClipJob,
    now: float,
    queued_timeout: float,
    processing_timeout: float,
) -> bool:
    deadline = deadline_for(job, queued_timeout, processing_timeout)
    return deadline is not None and now >= deadline


def timeout_failure(job: ClipJob) -> JobFailure:
    return JobFailure(
        reason=FailureReason.TIMEOUT,
        message=f"No backend progress while {job.status.value}",
    )
