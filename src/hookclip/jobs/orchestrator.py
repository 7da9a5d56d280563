"""Clip job orchestrator with in-memory storage and per-job serialization."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from hookclip.errors import NotFoundError
from hookclip.jobs import state
from hookclip.jobs.models import ClipJob, ClipOptions, FailureReason, JobFailure
from hookclip.models.moment import Moment
from hookclip.services.render.base import EventKind, IRenderBackend, RenderEvent

logger = logging.getLogger(__name__)


class DedupePolicy(str, Enum):
    """What ``submit`` does when an equal request is already in flight."""

    ALWAYS_NEW = "always_new"
    REUSE_IN_FLIGHT = "reuse_in_flight"


class JobOrchestrator:
    """Owns every clip job and is the only writer of job state.

    Jobs are stored in-memory (dict). Transitions for one job id are
    serialized by that job's ``asyncio.Lock``; different jobs never wait
    on each other. Overdue jobs are failed with ``timeout`` either by the
    periodic sweep or lazily when read.
    """

    def __init__(
        self,
        backend: IRenderBackend,
        queued_timeout: float = 60.0,
        processing_timeout: float = 900.0,
        retention: float = 3600.0,
        dedupe_policy: DedupePolicy | str = DedupePolicy.ALWAYS_NEW,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._backend = backend
        self._queued_timeout = queued_timeout
        self._processing_timeout = processing_timeout
        self._retention = retention
        self._dedupe_policy = DedupePolicy(dedupe_policy)
        self._clock = clock
        self._jobs: dict[str, ClipJob] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._start_tasks: set[asyncio.Task[None]] = set()

    @property
    def dedupe_policy(self) -> DedupePolicy:
        return self._dedupe_policy

    # ------------------------------------------------------------------
    # Client surface
    # ------------------------------------------------------------------

    async def submit(
        self,
        moment: Moment,
        options: ClipOptions | Mapping[str, Any] | None = None,
    ) -> ClipJob:
        """Create a queued job for ``moment`` and hand it to the backend.

        Returns as soon as the job is registered; the backend start call
        runs as a separate task and its outcome only shows up in the job's
        state.

        Args:
            moment: Moment to render. Frozen, so the job holds a value snapshot.
            options: ClipOptions, a mapping with ``aspect_ratio`` /
                ``resolution``, or None for defaults.

        Returns:
            The new job (status=queued), or the in-flight job being reused.

        Raises:
            ConfigurationError: If an option is outside its enumerated set.
        """
        clip_options = ClipOptions.from_value(options)

        if self._dedupe_policy is DedupePolicy.REUSE_IN_FLIGHT:
            existing = await self._find_in_flight(moment, clip_options)
            if existing is not None:
                logger.info("Reusing in-flight job %s for '%s'", existing.id, moment.label)
                return existing

        job = ClipJob(moment=moment, options=clip_options, state_entered_at=self._clock())
        self._jobs[job.id] = job
        self._locks[job.id] = asyncio.Lock()
        logger.info(
            "Created job %s for '%s' (%.1f-%.1fs, %s, %s)",
            job.id,
            moment.label,
            moment.start,
            moment.end,
            clip_options.aspect_ratio.value,
            clip_options.resolution.value,
        )

        task = asyncio.create_task(self._start_render(job))
        self._start_tasks.add(task)
        task.add_done_callback(self._start_tasks.discard)
        return job

    async def get(self, job_id: str) -> ClipJob:
        """Return the current state of a job.

        Raises:
            NotFoundError: If ``job_id`` is unknown.
        """
        job = self._require(job_id)
        await self._expire_if_overdue(job)
        return job

    def list_jobs(self) -> list[ClipJob]:
        """List all jobs, most recent first."""
        return sorted(self._jobs.values(), key=lambda j: j.created_at, reverse=True)

    async def cancel(self, job_id: str) -> ClipJob:
        """Fail a non-terminal job with ``cancelled``; no-op when terminal.

        Raises:
            NotFoundError: If ``job_id`` is unknown.
        """
        job = self._require(job_id)
        async with self._locks[job.id]:
            if job.is_terminal:
                logger.info("Cancel ignored for job %s in state %s", job.id, job.status.value)
            else:
                state.mark_failed(
                    job,
                    JobFailure(FailureReason.CANCELLED, "Cancelled by client"),
                    self._clock(),
                )
        return job

    # ------------------------------------------------------------------
    # Backend surface
    # ------------------------------------------------------------------

    async def handle_event(self, event: RenderEvent) -> bool:
        """Apply a backend progress signal to its job.

        Returns:
            True if the signal changed the job, False if it was dropped.

        Raises:
            NotFoundError: If the event names an unknown job.
        """
        job = self._require(event.job_id)
        async with self._locks[job.id]:
            now = self._clock()
            if state.is_overdue(job, now, self._queued_timeout, self._processing_timeout):
                state.mark_failed(job, state.timeout_failure(job), now)
                logger.warning("Job %s expired before %s signal", job.id, event.kind.value)
                return False
            if event.kind is EventKind.STARTED:
                return state.mark_processing(job, now)
            if event.kind is EventKind.DONE:
                return state.mark_done(job, event.result_ref or "", now)
            return state.mark_failed(
                job,
                JobFailure(FailureReason.BACKEND_ERROR, event.reason or "Render backend failure"),
                now,
            )

    # ------------------------------------------------------------------
    # Housekeeping
    # ------------------------------------------------------------------

    async def sweep(self) -> list[str]:
        """Time out overdue jobs and drop terminal jobs past retention.

        Returns:
            IDs of the jobs that were timed out by this sweep.
        """
        expired: list[str] = []
        for job in list(self._jobs.values()):
            if await self._expire_if_overdue(job):
                expired.append(job.id)
        self._purge_retained()
        return expired

    async def run_sweeper(self, interval: float) -> None:
        """Sweep every ``interval`` seconds until cancelled."""
        while True:
            await asyncio.sleep(interval)
            try:
                expired = await self.sweep()
            except Exception:
                logger.exception("Job sweep failed")
                continue
            if expired:
                logger.info("Sweep timed out %d job(s)", len(expired))

    async def aclose(self) -> None:
        """Wait for outstanding backend start calls and close the backend."""
        if self._start_tasks:
            await asyncio.gather(*self._start_tasks, return_exceptions=True)
        closer = getattr(self._backend, "aclose", None)
        if closer is not None:
            await closer()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require(self, job_id: str) -> ClipJob:
        job = self._jobs.get(job_id)
        if job is None:
            raise NotFoundError(f"Job not found: {job_id}")
        return job

    async def _find_in_flight(self, moment: Moment, options: ClipOptions) -> ClipJob | None:
        for job in list(self._jobs.values()):
            if job.is_terminal or job.moment != moment or job.options != options:
                continue
            # An overdue job is expired, never reused.
            if await self._expire_if_overdue(job):
                continue
            return job
        return None

    async def _start_render(self, job: ClipJob) -> None:
        try:
            await self._backend.start(job.id, job.moment, job.options)
        except Exception as e:
            logger.exception("Render backend failed to start job %s", job.id)
            lock = self._locks.get(job.id)
            if lock is None:
                return
            async with lock:
                state.mark_failed(
                    job,
                    JobFailure(FailureReason.BACKEND_ERROR, str(e) or type(e).__name__),
                    self._clock(),
                )

    async def _expire_if_overdue(self, job: ClipJob) -> bool:
        lock = self._locks.get(job.id)
        if lock is None:
            return False
        async with lock:
            now = self._clock()
            if not state.is_overdue(job, now, self._queued_timeout, self._processing_timeout):
                return False
            logger.warning("Job %s timed out in state %s", job.id, job.status.value)
            return state.mark_failed(job, state.timeout_failure(job), now)

    def _purge_retained(self) -> None:
        now = self._clock()
        stale = [
            job_id
            for job_id, job in self._jobs.items()
            if job.is_terminal and now - job.state_entered_at >= self._retention
        ]
        for job_id in stale:
            del self._jobs[job_id]
            self._locks.pop(job_id, None)
        if stale:
            logger.info("Purged %d finished job(s) past retention", len(stale))
