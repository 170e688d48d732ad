from __future__ import annotations

"""Bridge between the record store and the pure scoring engine.

Each function loads one consistent snapshot of an assessment's responses
and scoping decisions, normalises the rows into engine records and hands
them to the relevant calculator.  Only :func:`refresh_completion` writes
anything back.

Every function also accepts an already loaded snapshot, so a caller that
combines several figures (the report endpoints) scores one read of the
store rather than one read per figure.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from cmmc_tracker.catalog import get_controls, total_controls
from cmmc_tracker.models.assessment import Assessment
from cmmc_tracker.models.enums import AssessmentLevel
from cmmc_tracker.models.response import ControlResponse
from cmmc_tracker.scoring import (
    CompletionStats,
    ControlGap,
    DomainCompliance,
    ResponseRecord,
    ScopingRecord,
    SprsScore,
    calculate_completion,
    calculate_domain_compliance,
    calculate_sprs_score,
    identify_gaps,
)
from cmmc_tracker.services.response_service import get_responses, get_scoping_decisions

logger = logging.getLogger(__name__)


class SprsNotApplicableError(ValueError):
    """Raised when SPRS scoring is requested for a non-Level-2 assessment."""


@dataclass(frozen=True)
class AssessmentSnapshot:
    """Engine-ready view of one assessment's answers and scoping.

    ``response_rows`` keeps the stored rows for report output;
    ``responses`` and ``scoping_decisions`` are the same data normalised for
    the calculators.
    """

    assessment: Assessment
    response_rows: list[ControlResponse]
    responses: list[ResponseRecord]
    scoping_decisions: list[ScopingRecord]


async def load_snapshot(db: AsyncSession, assessment: Assessment) -> AssessmentSnapshot:
    """Read the responses and scoping decisions of *assessment* as engine records."""
    rows = await get_responses(db, assessment.id)
    decisions = await get_scoping_decisions(db, assessment.id)
    return AssessmentSnapshot(
        assessment=assessment,
        response_rows=rows,
        responses=[ResponseRecord.from_model(r) for r in rows],
        scoping_decisions=[ScopingRecord.from_model(d) for d in decisions],
    )


async def _resolve(
    db: AsyncSession,
    assessment: Assessment,
    snapshot: AssessmentSnapshot | None,
) -> AssessmentSnapshot:
    if snapshot is None:
        return await load_snapshot(db, assessment)
    return snapshot


async def refresh_completion(
    db: AsyncSession,
    assessment: Assessment,
    snapshot: AssessmentSnapshot | None = None,
) -> CompletionStats:
    """Recalculate completion statistics and cache the percentage on *assessment*.

    Raises:
        ScoringIntegrityError: Propagated from the calculator; nothing is
            written in that case.
    """
    snapshot = await _resolve(db, assessment, snapshot)
    stats = calculate_completion(
        total_controls(assessment.level),
        snapshot.responses,
        snapshot.scoping_decisions,
    )

    if assessment.completed_percentage != stats.completion_percentage:
        assessment.completed_percentage = stats.completion_percentage
        await db.commit()
        await db.refresh(assessment)

    logger.info(
        "Assessment %s: %d/%d controls answered (%d%%), compliance %d%%",
        assessment.id,
        stats.answered_controls,
        stats.applicable_controls,
        stats.completion_percentage,
        stats.compliance_score,
    )
    return stats


async def compute_sprs(
    db: AsyncSession,
    assessment: Assessment,
    snapshot: AssessmentSnapshot | None = None,
) -> SprsScore:
    """Compute the SPRS score of a Level 2 assessment.

    Raises:
        SprsNotApplicableError: *assessment* is not a Level 2 assessment.
    """
    if assessment.level != AssessmentLevel.level2:
        raise SprsNotApplicableError(
            "SPRS scoring is only available for CMMC Level 2 assessments"
        )

    snapshot = await _resolve(db, assessment, snapshot)
    score = calculate_sprs_score(snapshot.responses, snapshot.scoping_decisions)
    logger.info(
        "Assessment %s: SPRS %d (%s, factor %s)",
        assessment.id,
        score.sprs_score,
        score.implementation_level,
        score.implementation_factor,
    )
    return score


async def compute_domain_compliance(
    db: AsyncSession,
    assessment: Assessment,
    threshold: int = 80,
    snapshot: AssessmentSnapshot | None = None,
) -> list[DomainCompliance]:
    """Break *assessment* down by control domain."""
    snapshot = await _resolve(db, assessment, snapshot)
    return calculate_domain_compliance(
        get_controls(assessment.level),
        snapshot.responses,
        snapshot.scoping_decisions,
        threshold=threshold,
    )


async def compute_gaps(
    db: AsyncSession,
    assessment: Assessment,
    snapshot: AssessmentSnapshot | None = None,
) -> list[ControlGap]:
    """List the in-scope controls of *assessment* that are not fully implemented."""
    snapshot = await _resolve(db, assessment, snapshot)
    return identify_gaps(
        get_controls(assessment.level),
        snapshot.responses,
        snapshot.scoping_decisions,
    )
