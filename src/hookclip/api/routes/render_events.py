"""Inbound render backend progress events."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from hookclip.api.deps import get_job_orchestrator
from hookclip.api.schemas import RenderEventAck
from hookclip.errors import NotFoundError
from hookclip.jobs.orchestrator import JobOrchestrator
from hookclip.services.render.base import RenderEvent

router = APIRouter(prefix="/api/v1/render-events", tags=["render"])


@router.post("", response_model=RenderEventAck, status_code=202)
async def receive_render_event(
    event: RenderEvent,
    orch: JobOrchestrator = Depends(get_job_orchestrator),
) -> RenderEventAck:
    try:
        applied = await orch.handle_event(event)
        job = await orch.get(event.job_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail="Job not found") from e
    return RenderEventAck(job_id=job.id, applied=applied, status=job.status.value)
