from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from cmmc_tracker.catalog import get_control
from cmmc_tracker.database import get_db
from cmmc_tracker.models.assessment import Assessment
from cmmc_tracker.routers.assessments import get_assessment_or_404
from cmmc_tracker.schemas.activity import ActivityLogCreate, ActivityLogResponse
from cmmc_tracker.schemas.response import (
    ControlResponseCreate,
    ControlResponseResponse,
    ScopingDecisionCreate,
    ScopingDecisionResponse,
)
from cmmc_tracker.services import response_service

router = APIRouter(prefix="/assessments/{assessment_id}", tags=["responses"])


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _require_catalog_control(assessment: Assessment, control_id: str) -> None:
    """Reject control ids that are not part of the assessment's level catalog.

    Raises:
        HTTPException: 422 for an unknown control id.
    """
    if get_control(assessment.level, control_id) is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Control {control_id} is not part of the {assessment.level.value} catalog.",
        )


# ---------------------------------------------------------------------------
# Control responses
# ---------------------------------------------------------------------------


@router.get(
    "/responses",
    response_model=list[ControlResponseResponse],
    summary="List control responses for an assessment",
)
async def list_responses(
    assessment_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> list[ControlResponseResponse]:
    """Return every stored response, ordered by control id.

    Raises:
        HTTPException: 404 if the assessment does not exist.
    """
    await get_assessment_or_404(db, assessment_id)
    responses = await response_service.get_responses(db, assessment_id)
    return [ControlResponseResponse.model_validate(r) for r in responses]


@router.get(
    "/responses/{control_id}",
    response_model=ControlResponseResponse,
    summary="Get the response for one control",
)
async def get_response(
    assessment_id: UUID,
    control_id: str,
    db: AsyncSession = Depends(get_db),
) -> ControlResponseResponse:
    """Fetch the stored response for *control_id*.

    Raises:
        HTTPException: 404 if the assessment or the response does not exist.
    """
    await get_assessment_or_404(db, assessment_id)
    response = await response_service.get_response(db, assessment_id, control_id)
    if response is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No response recorded for control {control_id}.",
        )
    return ControlResponseResponse.model_validate(response)


@router.post(
    "/responses",
    response_model=ControlResponseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record or replace a control response",
)
async def save_response(
    assessment_id: UUID,
    payload: ControlResponseCreate,
    db: AsyncSession = Depends(get_db),
) -> ControlResponseResponse:
    """Upsert the response for ``payload.control_id`` and log the change.

    Raises:
        HTTPException: 404 if the assessment does not exist; 422 if the
            control is not in the assessment's catalog.
    """
    assessment = await get_assessment_or_404(db, assessment_id)
    _require_catalog_control(assessment, payload.control_id)
    response = await response_service.save_response(db, assessment_id, payload)
    return ControlResponseResponse.model_validate(response)


# ---------------------------------------------------------------------------
# Scoping decisions
# ---------------------------------------------------------------------------


@router.get(
    "/scoping",
    response_model=list[ScopingDecisionResponse],
    summary="List scoping decisions for an assessment",
)
async def list_scoping_decisions(
    assessment_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> list[ScopingDecisionResponse]:
    """Return every scoping decision, ordered by control id."""
    await get_assessment_or_404(db, assessment_id)
    decisions = await response_service.get_scoping_decisions(db, assessment_id)
    return [ScopingDecisionResponse.model_validate(d) for d in decisions]


@router.post(
    "/scoping",
    response_model=ScopingDecisionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record or replace a scoping decision",
)
async def save_scoping_decision(
    assessment_id: UUID,
    payload: ScopingDecisionCreate,
    db: AsyncSession = Depends(get_db),
) -> ScopingDecisionResponse:
    """Upsert the scoping decision for ``payload.control_id`` and log the change.

    Raises:
        HTTPException: 404 if the assessment does not exist; 422 if the
            control is not in the assessment's catalog.
    """
    assessment = await get_assessment_or_404(db, assessment_id)
    _require_catalog_control(assessment, payload.control_id)
    decision = await response_service.save_scoping_decision(db, assessment_id, payload)
    return ScopingDecisionResponse.model_validate(decision)


# ---------------------------------------------------------------------------
# Activity log
# ---------------------------------------------------------------------------


@router.get(
    "/activities",
    response_model=list[ActivityLogResponse],
    summary="List recent activity for an assessment",
)
async def list_activities(
    assessment_id: UUID,
    limit: int | None = Query(default=None, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
) -> list[ActivityLogResponse]:
    """Return activity entries newest first, optionally capped at *limit*."""
    await get_assessment_or_404(db, assessment_id)
    entries = await response_service.get_activities(db, assessment_id, limit=limit)
    return [ActivityLogResponse.model_validate(e) for e in entries]


@router.post(
    "/activities",
    response_model=ActivityLogResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Append an activity entry",
)
async def add_activity(
    assessment_id: UUID,
    payload: ActivityLogCreate,
    db: AsyncSession = Depends(get_db),
) -> ActivityLogResponse:
    """Record a client-side action such as an evidence upload."""
    await get_assessment_or_404(db, assessment_id)
    entry = await response_service.add_activity(db, assessment_id, payload.action, payload.details)
    return ActivityLogResponse.model_validate(entry)
