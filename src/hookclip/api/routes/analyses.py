"""Video analysis and moment search endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from hookclip.api.deps import get_analysis_service
from hookclip.api.schemas import AnalysisResponse, AnalyzeRequest, MomentListResponse, MomentResponse
from hookclip.errors import AnalysisError, NotFoundError, ValidationError
from hookclip.services.analysis.service import AnalysisService

router = APIRouter(prefix="/api/v1/analyses", tags=["analyses"])


@router.post("", response_model=AnalysisResponse, status_code=201)
async def create_analysis(
    req: AnalyzeRequest,
    svc: AnalysisService = Depends(get_analysis_service),
) -> AnalysisResponse:
    try:
        result = await svc.analyze(req.url)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except AnalysisError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e
    return AnalysisResponse.from_domain(result)


@router.get("/{analysis_id}", response_model=AnalysisResponse)
async def get_analysis(
    analysis_id: str,
    svc: AnalysisService = Depends(get_analysis_service),
) -> AnalysisResponse:
    try:
        result = svc.get(analysis_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return AnalysisResponse.from_domain(result)


@router.get("/{analysis_id}/moments", response_model=MomentListResponse)
async def search_moments(
    analysis_id: str,
    q: str = Query("", description="Free text or tag, e.g. funny, sad, reaction"),
    svc: AnalysisService = Depends(get_analysis_service),
) -> MomentListResponse:
    try:
        moments = svc.search_moments(analysis_id, q)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return MomentListResponse(
        analysis_id=analysis_id,
        query=q,
        count=len(moments),
        moments=[MomentResponse.from_domain(m) for m in moments],
    )
