from __future__ import annotations

from cmmc_tracker.scoring.bands import (
    IMPLEMENTATION_FACTOR_BANDS,
    IMPLEMENTATION_LEVEL_BANDS,
    classify_implementation_factor,
    classify_implementation_level,
)
from cmmc_tracker.scoring.completion import CompletionStats, calculate_completion
from cmmc_tracker.scoring.domains import (
    ControlGap,
    DomainCompliance,
    calculate_domain_compliance,
    identify_gaps,
)
from cmmc_tracker.scoring.errors import ScoringIntegrityError
from cmmc_tracker.scoring.records import ResponseRecord, ScopingRecord, latest_responses
from cmmc_tracker.scoring.scoping import build_scoping_map, count_out_of_scope, is_in_scope
from cmmc_tracker.scoring.sprs import (
    MAX_SPRS_SCORE,
    MIN_SPRS_SCORE,
    SPRS_TOTAL_CONTROLS,
    SprsScore,
    calculate_sprs_score,
)

__all__ = [
    "IMPLEMENTATION_FACTOR_BANDS",
    "IMPLEMENTATION_LEVEL_BANDS",
    "MAX_SPRS_SCORE",
    "MIN_SPRS_SCORE",
    "SPRS_TOTAL_CONTROLS",
    "CompletionStats",
    "ControlGap",
    "DomainCompliance",
    "ResponseRecord",
    "ScopingRecord",
    "ScoringIntegrityError",
    "SprsScore",
    "build_scoping_map",
    "calculate_completion",
    "calculate_domain_compliance",
    "calculate_sprs_score",
    "classify_implementation_factor",
    "classify_implementation_level",
    "count_out_of_scope",
    "identify_gaps",
    "is_in_scope",
    "latest_responses",
]
