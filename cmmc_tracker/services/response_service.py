from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cmmc_tracker.models.assessment import ActivityLog
from cmmc_tracker.models.enums import ActivityAction
from cmmc_tracker.models.response import ControlResponse, ScopingDecision
from cmmc_tracker.schemas.response import ControlResponseCreate, ScopingDecisionCreate

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Control responses
# ---------------------------------------------------------------------------


async def get_responses(db: AsyncSession, assessment_id: UUID) -> list[ControlResponse]:
    """List every control response of an assessment, ordered by control id."""
    result = await db.execute(
        select(ControlResponse)
        .where(ControlResponse.assessment_id == assessment_id)
        .order_by(ControlResponse.control_id)
    )
    return list(result.scalars().all())


async def get_response(
    db: AsyncSession,
    assessment_id: UUID,
    control_id: str,
) -> ControlResponse | None:
    """Fetch the response for one control, or ``None`` if it has not been answered."""
    result = await db.execute(
        select(ControlResponse).where(
            ControlResponse.assessment_id == assessment_id,
            ControlResponse.control_id == control_id,
        )
    )
    return result.scalar_one_or_none()


async def _stage_response(
    db: AsyncSession,
    assessment_id: UUID,
    data: ControlResponseCreate,
) -> ControlResponse:
    response = await get_response(db, assessment_id, data.control_id)
    if response is None:
        response = ControlResponse(assessment_id=assessment_id, control_id=data.control_id)
        db.add(response)

    response.status = data.status
    response.evidence = data.evidence
    response.notes = data.notes

    db.add(
        ActivityLog(
            assessment_id=assessment_id,
            action=ActivityAction.updated_control,
            details={
                "control_id": data.control_id,
                "status": data.status.value if data.status is not None else None,
            },
        )
    )
    return response


async def save_response(
    db: AsyncSession,
    assessment_id: UUID,
    data: ControlResponseCreate,
) -> ControlResponse:
    """Insert or replace the response for ``data.control_id``.

    At most one response exists per ``(assessment, control)`` pair: posting
    again overwrites status, evidence and notes.  An ``updated_control``
    activity entry is written in the same transaction.

    When a concurrent request inserts the same pair first, the unique
    constraint rejects this insert; the transaction is rolled back and
    replayed as an update of the winning row, so the last write wins.

    Args:
        db: An active async database session.
        assessment_id: The UUID of the owning assessment.
        data: Validated response payload.

    Returns:
        The persisted and refreshed ``ControlResponse``.
    """
    try:
        response = await _stage_response(db, assessment_id, data)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info(
            "Assessment %s: control %s inserted concurrently, retrying as update",
            assessment_id,
            data.control_id,
        )
        response = await _stage_response(db, assessment_id, data)
        await db.commit()

    await db.refresh(response)
    logger.info(
        "Assessment %s: control %s set to %s",
        assessment_id,
        data.control_id,
        data.status.value if data.status is not None else "unset",
    )
    return response


# ---------------------------------------------------------------------------
# Scoping decisions
# ---------------------------------------------------------------------------


async def get_scoping_decisions(db: AsyncSession, assessment_id: UUID) -> list[ScopingDecision]:
    """List every scoping decision of an assessment, ordered by control id."""
    result = await db.execute(
        select(ScopingDecision)
        .where(ScopingDecision.assessment_id == assessment_id)
        .order_by(ScopingDecision.control_id)
    )
    return list(result.scalars().all())


async def get_scoping_decision(
    db: AsyncSession,
    assessment_id: UUID,
    control_id: str,
) -> ScopingDecision | None:
    result = await db.execute(
        select(ScopingDecision).where(
            ScopingDecision.assessment_id == assessment_id,
            ScopingDecision.control_id == control_id,
        )
    )
    return result.scalar_one_or_none()


async def _stage_scoping_decision(
    db: AsyncSession,
    assessment_id: UUID,
    data: ScopingDecisionCreate,
) -> ScopingDecision:
    decision = await get_scoping_decision(db, assessment_id, data.control_id)
    if decision is None:
        decision = ScopingDecision(assessment_id=assessment_id, control_id=data.control_id)
        db.add(decision)

    decision.applicable = data.applicable
    decision.reason = data.reason

    db.add(
        ActivityLog(
            assessment_id=assessment_id,
            action=ActivityAction.updated_scoping,
            details={"control_id": data.control_id, "applicable": data.applicable},
        )
    )
    return decision


async def save_scoping_decision(
    db: AsyncSession,
    assessment_id: UUID,
    data: ScopingDecisionCreate,
) -> ScopingDecision:
    """Insert or replace the scoping decision for ``data.control_id``.

    Mirrors :func:`save_response`, including the retry after a concurrent
    insert, logging ``updated_scoping`` instead.
    """
    try:
        decision = await _stage_scoping_decision(db, assessment_id, data)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info(
            "Assessment %s: scoping for %s inserted concurrently, retrying as update",
            assessment_id,
            data.control_id,
        )
        decision = await _stage_scoping_decision(db, assessment_id, data)
        await db.commit()

    await db.refresh(decision)
    logger.info(
        "Assessment %s: control %s marked %s",
        assessment_id,
        data.control_id,
        "in scope" if data.applicable else "out of scope",
    )
    return decision


# ---------------------------------------------------------------------------
# Activity log
# ---------------------------------------------------------------------------


async def add_activity(
    db: AsyncSession,
    assessment_id: UUID,
    action: ActivityAction,
    details: dict[str, Any],
) -> ActivityLog:
    """Append an entry to an assessment's activity log."""
    entry = ActivityLog(assessment_id=assessment_id, action=action, details=details)
    db.add(entry)
    await db.commit()
    await db.refresh(entry)
    return entry


async def get_activities(
    db: AsyncSession,
    assessment_id: UUID,
    limit: int | None = None,
) -> list[ActivityLog]:
    """Return an assessment's activity log, newest first.

    Args:
        db: An active async database session.
        assessment_id: The UUID of the owning assessment.
        limit: Optional cap on the number of entries returned.

    Returns:
        A list of ``ActivityLog`` ORM instances, possibly empty.
    """
    query = (
        select(ActivityLog)
        .where(ActivityLog.assessment_id == assessment_id)
        .order_by(ActivityLog.timestamp.desc())
    )
    if limit is not None:
        query = query.limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())
