from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from cmmc_tracker.database import get_db
from cmmc_tracker.routers.assessments import get_assessment_or_404
from cmmc_tracker.schemas.scoring import (
    CompletionStatsResponse,
    ControlGapResponse,
    DomainComplianceResponse,
    GapAnalysisResponse,
    SprsScoreResponse,
)
from cmmc_tracker.services import scoring_service
from cmmc_tracker.services.scoring_service import SprsNotApplicableError

router = APIRouter(prefix="/assessments/{assessment_id}", tags=["scoring"])


@router.get(
    "/calculate-completion",
    response_model=CompletionStatsResponse,
    summary="Recalculate completion statistics",
)
async def calculate_completion(
    assessment_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> CompletionStatsResponse:
    """Compute completion and compliance, caching the completion percentage.

    A snapshot whose scoping contradicts the catalog surfaces as 409 through
    the application-level ``ScoringIntegrityError`` handler.

    Raises:
        HTTPException: 404 if the assessment does not exist.
    """
    assessment = await get_assessment_or_404(db, assessment_id)
    stats = await scoring_service.refresh_completion(db, assessment)
    return CompletionStatsResponse.model_validate(stats)


@router.get(
    "/sprs-score",
    response_model=SprsScoreResponse,
    summary="Compute the SPRS score",
)
async def get_sprs_score(
    assessment_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> SprsScoreResponse:
    """Compute the SPRS score of a Level 2 assessment.

    Raises:
        HTTPException: 404 if the assessment does not exist; 400 if it is
            not a Level 2 assessment.
    """
    assessment = await get_assessment_or_404(db, assessment_id)
    try:
        score = await scoring_service.compute_sprs(db, assessment)
    except SprsNotApplicableError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return SprsScoreResponse.model_validate(score)


@router.get(
    "/domain-compliance",
    response_model=list[DomainComplianceResponse],
    summary="Per-domain compliance breakdown",
)
async def get_domain_compliance(
    assessment_id: UUID,
    threshold: int = Query(default=80, ge=0, le=100),
    db: AsyncSession = Depends(get_db),
) -> list[DomainComplianceResponse]:
    """Return domain figures sorted with the weakest domain first."""
    assessment = await get_assessment_or_404(db, assessment_id)
    domains = await scoring_service.compute_domain_compliance(db, assessment, threshold=threshold)
    return [DomainComplianceResponse.model_validate(d) for d in domains]


@router.get(
    "/gaps",
    response_model=GapAnalysisResponse,
    summary="Gap analysis",
)
async def get_gaps(
    assessment_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> GapAnalysisResponse:
    """List every in-scope control that is not fully implemented, costliest first."""
    assessment = await get_assessment_or_404(db, assessment_id)
    gaps = await scoring_service.compute_gaps(db, assessment)
    return GapAnalysisResponse(
        assessment_id=assessment.id,
        level=assessment.level,
        total_gaps=len(gaps),
        total_sprs_impact=sum(g.sprs_impact for g in gaps),
        gaps=[ControlGapResponse.model_validate(g) for g in gaps],
    )
