from __future__ import annotations

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cmmc_tracker.models import Assessment, AssessmentLevel
from cmmc_tracker.seed import seed_default_assessments


@pytest.mark.asyncio
async def test_seed_creates_default_assessments(db_session: AsyncSession) -> None:
    """An empty store gets one Level 1 and one Level 2 assessment."""
    created = await seed_default_assessments(db_session)
    assert created == 2

    result = await db_session.execute(select(Assessment).order_by(Assessment.name))
    assessments = list(result.scalars().all())
    assert [(a.name, a.level) for a in assessments] == [
        ("CMMC Initial Assessment", AssessmentLevel.level1),
        ("CMMC Level 2 Assessment", AssessmentLevel.level2),
    ]
    assert all(a.completed_percentage == 0 for a in assessments)


@pytest.mark.asyncio
async def test_seed_is_skipped_when_data_exists(db_session: AsyncSession) -> None:
    await seed_default_assessments(db_session)
    assert await seed_default_assessments(db_session) == 0
