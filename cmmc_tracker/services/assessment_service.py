from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from cmmc_tracker.models.assessment import ActivityLog, Assessment
from cmmc_tracker.models.response import ControlResponse, ScopingDecision
from cmmc_tracker.schemas.assessment import AssessmentCreate, AssessmentUpdate

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Assessment CRUD
# ---------------------------------------------------------------------------


async def create_assessment(db: AsyncSession, data: AssessmentCreate) -> Assessment:
    """Create and persist a new :class:`~cmmc_tracker.models.assessment.Assessment`.

    Args:
        db: An active async database session.
        data: Validated creation payload.

    Returns:
        The newly created and refreshed ``Assessment`` ORM instance.
    """
    assessment = Assessment(
        name=data.name,
        level=data.level,
        organization_name=data.organization_name,
        completed_percentage=0,
    )
    db.add(assessment)
    await db.commit()
    await db.refresh(assessment)
    logger.info("Created %s assessment %s (%s)", assessment.level.value, assessment.id, assessment.name)
    return assessment


async def get_assessments(
    db: AsyncSession,
    skip: int = 0,
    limit: int = 100,
) -> list[Assessment]:
    """Return a paginated list of assessments, oldest first.

    Args:
        db: An active async database session.
        skip: Number of records to skip (offset).
        limit: Maximum number of records to return.

    Returns:
        A list of ``Assessment`` ORM instances, possibly empty.
    """
    result = await db.execute(
        select(Assessment)
        .order_by(Assessment.created_at, Assessment.name)
        .offset(skip)
        .limit(limit)
    )
    return list(result.scalars().all())


async def get_assessment(db: AsyncSession, assessment_id: UUID) -> Assessment | None:
    """Fetch a single assessment by primary key, or ``None`` if not found."""
    result = await db.execute(select(Assessment).where(Assessment.id == assessment_id))
    return result.scalar_one_or_none()


async def update_assessment(
    db: AsyncSession,
    assessment_id: UUID,
    data: AssessmentUpdate,
) -> Assessment | None:
    """Apply a partial update to an existing assessment.

    Only fields explicitly set in *data* (i.e. not ``None``) are written.

    Returns:
        The updated ``Assessment`` instance, or ``None`` if not found.
    """
    assessment = await get_assessment(db, assessment_id)
    if assessment is None:
        return None

    for field, value in data.model_dump(exclude_none=True).items():
        setattr(assessment, field, value)

    await db.commit()
    await db.refresh(assessment)
    return assessment


async def update_completion_percentage(
    db: AsyncSession,
    assessment_id: UUID,
    completed_percentage: int,
) -> Assessment | None:
    """Overwrite the cached completion percentage of an assessment.

    Args:
        db: An active async database session.
        assessment_id: The UUID of the assessment to update.
        completed_percentage: New value; callers validate the 0-100 range.

    Returns:
        The updated ``Assessment`` instance, or ``None`` if not found.
    """
    assessment = await get_assessment(db, assessment_id)
    if assessment is None:
        return None

    assessment.completed_percentage = completed_percentage
    await db.commit()
    await db.refresh(assessment)
    return assessment


async def delete_assessment(db: AsyncSession, assessment_id: UUID) -> bool:
    """Delete an assessment together with its responses, scoping and activity.

    Child rows are removed explicitly so the behaviour does not depend on the
    database enforcing ``ON DELETE CASCADE`` (SQLite does not by default).

    Returns:
        ``True`` if the assessment was found and deleted, ``False`` otherwise.
    """
    assessment = await get_assessment(db, assessment_id)
    if assessment is None:
        return False

    for model in (ControlResponse, ScopingDecision, ActivityLog):
        await db.execute(delete(model).where(model.assessment_id == assessment_id))
    await db.delete(assessment)
    await db.commit()
    logger.info("Deleted assessment %s", assessment_id)
    return True
