"""Deterministic in-process render backend for tests and local demos."""

import asyncio
import logging

from hookclip.errors import NotFoundError, RenderBackendError
from hookclip.jobs.models import ClipOptions
from hookclip.models.moment import Moment
from hookclip.services.render.base import EventKind, EventSink, RenderEvent

logger = logging.getLogger(__name__)


class FakeRenderBackend:
    """Records start requests and optionally plays back a canned lifecycle.

    With ``auto_complete`` set and a sink attached, every start is followed
    by a ``started`` event and, after ``delay_sec``, a ``done`` event whose
    reference is built from ``result_ref_template``.
    """

    def __init__(
        self,
        auto_complete: bool = False,
        delay_sec: float = 0.0,
        fail_start: bool = False,
        result_ref_template: str = "memory://clips/{job_id}.mp4",
    ) -> None:
        self.auto_complete = auto_complete
        self.delay_sec = delay_sec
        self.fail_start = fail_start
        self.result_ref_template = result_ref_template
        self.started: list[tuple[str, Moment, ClipOptions]] = []
        self._sink: EventSink | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def name(self) -> str:
        return "fake"

    def attach(self, sink: EventSink) -> None:
        """Set where simulated events are delivered."""
        self._sink = sink

    async def start(self, job_id: str, moment: Moment, options: ClipOptions) -> None:
        if self.fail_start:
            raise RenderBackendError(f"Fake backend refused job {job_id}")
        self.started.append((job_id, moment, options))
        if self.auto_complete and self._sink is not None:
            task = asyncio.create_task(self._play(job_id))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def _play(self, job_id: str) -> None:
        sink = self._sink
        if sink is None:
            return
        try:
            await sink(RenderEvent(job_id=job_id, kind=EventKind.STARTED))
            await asyncio.sleep(self.delay_sec)
            await sink(
                RenderEvent(
                    job_id=job_id,
                    kind=EventKind.DONE,
                    result_ref=self.result_ref_template.format(job_id=job_id),
                )
            )
        except NotFoundError:
            logger.warning("Simulated render for job %s stopped: job no longer exists", job_id)

    async def aclose(self) -> None:
        """Cancel simulated lifecycles still in flight."""
        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()
