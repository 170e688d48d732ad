from __future__ import annotations

from cmmc_tracker.catalog.controls import (
    DOMAINS,
    LEVEL1_CONTROLS,
    LEVEL2_CONTROLS,
    Control,
    get_control,
    get_controls,
    total_controls,
)
from cmmc_tracker.catalog.dod_weights import (
    DEFAULT_DOD_WEIGHT,
    DOD_SCORE_VALUES,
    MAX_POSSIBLE_SCORE,
    dod_weight,
)

__all__ = [
    "DEFAULT_DOD_WEIGHT",
    "DOD_SCORE_VALUES",
    "DOMAINS",
    "LEVEL1_CONTROLS",
    "LEVEL2_CONTROLS",
    "MAX_POSSIBLE_SCORE",
    "Control",
    "dod_weight",
    "get_control",
    "get_controls",
    "total_controls",
]
