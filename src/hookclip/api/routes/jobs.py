"""Clip job endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse

from hookclip.api.deps import get_job_orchestrator
from hookclip.api.schemas import ClipRequest, JobListItem, JobStatusResponse
from hookclip.errors import ConfigurationError, NotFoundError, ValidationError
from hookclip.jobs.models import ClipOptions, JobStatus
from hookclip.jobs.orchestrator import JobOrchestrator

router = APIRouter(prefix="/api/v1/jobs", tags=["jobs"])


# ------------------------------------------------------------------
# POST - create and cancel jobs
# ------------------------------------------------------------------


@router.post("", response_model=JobStatusResponse, status_code=202)
async def create_clip_job(
    req: ClipRequest,
    orch: JobOrchestrator = Depends(get_job_orchestrator),
) -> JobStatusResponse:
    try:
        moment = req.moment.to_domain()
        options = ClipOptions.parse(req.aspect_ratio, req.resolution)
    except (ValidationError, ConfigurationError) as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    job = await orch.submit(moment, options)
    return JobStatusResponse.from_domain(job)


@router.post("/{job_id}/cancel", response_model=JobStatusResponse)
async def cancel_job(
    job_id: str,
    orch: JobOrchestrator = Depends(get_job_orchestrator),
) -> JobStatusResponse:
    try:
        job = await orch.cancel(job_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail="Job not found") from e
    return JobStatusResponse.from_domain(job)


# ------------------------------------------------------------------
# GET - query jobs
# ------------------------------------------------------------------


@router.get("", response_model=list[JobListItem])
async def list_jobs(
    orch: JobOrchestrator = Depends(get_job_orchestrator),
) -> list[JobListItem]:
    return [
        JobListItem(
            job_id=j.id,
            status=j.status.value,
            label=j.moment.label,
            created_at=j.created_at,
        )
        for j in orch.list_jobs()
    ]


@router.get("/{job_id}", response_model=JobStatusResponse)
async def get_job(
    job_id: str,
    orch: JobOrchestrator = Depends(get_job_orchestrator),
) -> JobStatusResponse:
    try:
        job = await orch.get(job_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail="Job not found") from e
    return JobStatusResponse.from_domain(job)


@router.get("/{job_id}/stream")
async def stream_job(
    job_id: str,
    orch: JobOrchestrator = Depends(get_job_orchestrator),
) -> RedirectResponse:
    try:
        job = await orch.get(job_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail="Job not found") from e
    if job.status is not JobStatus.DONE or not job.result_ref:
        raise HTTPException(
            status_code=409,
            detail=f"Clip not ready (status: {job.status.value})",
        )
    return RedirectResponse(url=job.result_ref, status_code=307)
