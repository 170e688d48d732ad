from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cmmc_tracker.models.assessment import Assessment
from cmmc_tracker.models.enums import AssessmentLevel

logger = logging.getLogger(__name__)

DEFAULT_ORGANIZATION = "Example Organization"

DEFAULT_ASSESSMENTS: tuple[tuple[str, AssessmentLevel], ...] = (
    ("CMMC Initial Assessment", AssessmentLevel.level1),
    ("CMMC Level 2 Assessment", AssessmentLevel.level2),
)


async def seed_default_assessments(db: AsyncSession) -> int:
    """Create one Level 1 and one Level 2 assessment when the store is empty.

    Returns:
        The number of assessments created (0 if any already existed).
    """
    existing = await db.scalar(select(func.count()).select_from(Assessment))
    if existing:
        logger.info("Found %d existing assessments; skipping seed.", existing)
        return 0

    for name, level in DEFAULT_ASSESSMENTS:
        db.add(
            Assessment(
                name=name,
                level=level,
                organization_name=DEFAULT_ORGANIZATION,
                completed_percentage=0,
            )
        )
    await db.commit()
    logger.info("Seeded %d default assessments.", len(DEFAULT_ASSESSMENTS))
    return len(DEFAULT_ASSESSMENTS)
