from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from cmmc_tracker.database import get_db
from cmmc_tracker.models.assessment import Assessment
from cmmc_tracker.schemas.assessment import (
    AssessmentCreate,
    AssessmentResponse,
    AssessmentUpdate,
    CompletionUpdate,
)
from cmmc_tracker.services import assessment_service

router = APIRouter(prefix="/assessments", tags=["assessments"])


async def get_assessment_or_404(db: AsyncSession, assessment_id: UUID) -> Assessment:
    """Fetch an :class:`~cmmc_tracker.models.assessment.Assessment` or raise 404.

    Shared by every router nested under ``/assessments/{assessment_id}``.

    Raises:
        HTTPException: 404 if no assessment with the given ID exists.
    """
    assessment = await assessment_service.get_assessment(db, assessment_id)
    if assessment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Assessment {assessment_id} not found.",
        )
    return assessment


@router.post(
    "",
    response_model=AssessmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new assessment",
)
async def create_assessment(
    payload: AssessmentCreate,
    db: AsyncSession = Depends(get_db),
) -> AssessmentResponse:
    """Create an assessment with a completion percentage of zero."""
    assessment = await assessment_service.create_assessment(db, payload)
    return AssessmentResponse.model_validate(assessment)


@router.get(
    "",
    response_model=list[AssessmentResponse],
    summary="List all assessments",
)
async def list_assessments(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
) -> list[AssessmentResponse]:
    """Return a paginated list of assessments, oldest first.

    Args:
        skip: Number of records to skip (offset).
        limit: Maximum number of records to return.
        db: Injected async database session.
    """
    assessments = await assessment_service.get_assessments(db, skip=skip, limit=limit)
    return [AssessmentResponse.model_validate(a) for a in assessments]


@router.get(
    "/{assessment_id}",
    response_model=AssessmentResponse,
    summary="Get an assessment by ID",
)
async def get_assessment(
    assessment_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> AssessmentResponse:
    """Fetch a single assessment by primary key.

    Raises:
        HTTPException: 404 if the assessment does not exist.
    """
    assessment = await get_assessment_or_404(db, assessment_id)
    return AssessmentResponse.model_validate(assessment)


@router.patch(
    "/{assessment_id}",
    response_model=AssessmentResponse,
    summary="Update an assessment",
)
async def update_assessment(
    assessment_id: UUID,
    payload: AssessmentUpdate,
    db: AsyncSession = Depends(get_db),
) -> AssessmentResponse:
    """Apply a partial update to an assessment's name or organisation.

    Raises:
        HTTPException: 404 if the assessment does not exist.
    """
    assessment = await assessment_service.update_assessment(db, assessment_id, payload)
    if assessment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Assessment {assessment_id} not found.",
        )
    return AssessmentResponse.model_validate(assessment)


@router.patch(
    "/{assessment_id}/completion",
    response_model=AssessmentResponse,
    summary="Overwrite the cached completion percentage",
)
async def update_completion(
    assessment_id: UUID,
    payload: CompletionUpdate,
    db: AsyncSession = Depends(get_db),
) -> AssessmentResponse:
    """Set ``completed_percentage`` directly.

    Values outside 0-100 are rejected by validation with 422.

    Raises:
        HTTPException: 404 if the assessment does not exist.
    """
    assessment = await assessment_service.update_completion_percentage(
        db, assessment_id, payload.completed_percentage
    )
    if assessment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Assessment {assessment_id} not found.",
        )
    return AssessmentResponse.model_validate(assessment)


@router.delete(
    "/{assessment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an assessment",
)
async def delete_assessment(
    assessment_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete an assessment along with its responses, scoping and activity.

    Raises:
        HTTPException: 404 if the assessment does not exist.
    """
    deleted = await assessment_service.delete_assessment(db, assessment_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Assessment {assessment_id} not found.",
        )
