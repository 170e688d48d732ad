from __future__ import annotations

import pytest

from cmmc_tracker.catalog import LEVEL1_CONTROLS, LEVEL2_CONTROLS


@pytest.fixture
def level1_ids() -> list[str]:
    """All 17 Level 1 control ids in catalog order."""
    return [c.control_id for c in LEVEL1_CONTROLS]


@pytest.fixture
def level2_ids() -> list[str]:
    """All 110 Level 2 control ids in catalog order."""
    return [c.control_id for c in LEVEL2_CONTROLS]
