from __future__ import annotations

"""Supplier Performance Risk System (SPRS) scoring for CMMC Level 2.

Every assessment starts from the maximum score of 110.  Each in-scope
control that is not fully implemented deducts its DoD weight:

* ``no`` deducts the full weight;
* ``partial`` deducts half the weight;
* a weighted control with no assessed response deducts the full weight.

Controls scoped out deduct nothing.  The final score is rounded half-up and
floored at :data:`MIN_SPRS_SCORE`.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from cmmc_tracker.catalog.dod_weights import DEFAULT_DOD_WEIGHT, DOD_SCORE_VALUES
from cmmc_tracker.models.enums import ControlStatus
from cmmc_tracker.scoring.bands import classify_implementation_factor, classify_implementation_level
from cmmc_tracker.scoring.records import ResponseRecord, ScopingRecord, latest_responses
from cmmc_tracker.scoring.scoping import (
    PARTIAL_CREDIT,
    build_scoping_map,
    count_out_of_scope,
    is_in_scope,
    round_half_up,
)

MAX_SPRS_SCORE: int = 110
MIN_SPRS_SCORE: int = -203
SPRS_TOTAL_CONTROLS: int = 110


@dataclass(frozen=True)
class SprsScore:
    """Result of an SPRS calculation.

    Attributes:
        sprs_score: Final score in ``[MIN_SPRS_SCORE, MAX_SPRS_SCORE]``.
        total_controls: Always :data:`SPRS_TOTAL_CONTROLS`.
        in_scope_controls: Assessed responses whose control is in scope.
        compliant_controls: In-scope responses with status ``yes``.
        partial_controls: In-scope responses with status ``partial``.
        non_compliant_controls: In-scope responses with status ``no``.
        not_assessed_controls: In-scope controls with no assessed response.
        total_non_compliant: Non-compliant plus not-assessed controls.
        implementation_percentage: Share of the achievable weight retained.
        implementation_level: Label from the implementation-level bands.
        implementation_factor: Label from the implementation-factor bands.
    """

    sprs_score: int
    total_controls: int
    in_scope_controls: int
    compliant_controls: int
    partial_controls: int
    non_compliant_controls: int
    not_assessed_controls: int
    total_non_compliant: int
    implementation_percentage: int
    implementation_level: str
    implementation_factor: str


def calculate_sprs_score(
    responses: Iterable[ResponseRecord],
    scoping_decisions: Iterable[ScopingRecord],
    weights: Mapping[str, int] = DOD_SCORE_VALUES,
) -> SprsScore:
    """Compute the SPRS score for a Level 2 assessment snapshot.

    A response for a control missing from *weights* deducts
    :data:`~cmmc_tracker.catalog.dod_weights.DEFAULT_DOD_WEIGHT`.  Responses
    with ``not_applicable`` status count as assessed and in scope but
    deduct nothing.

    Args:
        responses: Response records; duplicates collapse to the last one.
        scoping_decisions: Scoping records; duplicates collapse to the last one.
        weights: Control id to DoD weight table.

    Returns:
        A populated :class:`SprsScore`.
    """
    scoping_map = build_scoping_map(scoping_decisions)

    assessed: set[str] = set()
    in_scope = compliant = partial = non_compliant = 0
    deductions = 0.0

    for response in latest_responses(responses).values():
        if not response.is_assessed:
            continue
        assessed.add(response.control_id)
        if not is_in_scope(response.control_id, scoping_map):
            continue

        in_scope += 1
        weight = weights.get(response.control_id, DEFAULT_DOD_WEIGHT)
        if response.status == ControlStatus.yes:
            compliant += 1
        elif response.status == ControlStatus.partial:
            partial += 1
            deductions += weight * PARTIAL_CREDIT
        elif response.status == ControlStatus.no:
            non_compliant += 1
            deductions += weight

    out_of_scope = count_out_of_scope(scoping_map)
    not_assessed = max(0, SPRS_TOTAL_CONTROLS - out_of_scope - len(assessed))

    for control_id, weight in weights.items():
        if control_id not in assessed and is_in_scope(control_id, scoping_map):
            deductions += weight

    sprs = max(MIN_SPRS_SCORE, round_half_up(MAX_SPRS_SCORE - deductions))

    max_possible = sum(weights.values())
    if max_possible > 0:
        implementation = max(0, round_half_up((max_possible - deductions) * 100 / max_possible))
    else:
        implementation = 0

    return SprsScore(
        sprs_score=sprs,
        total_controls=SPRS_TOTAL_CONTROLS,
        in_scope_controls=in_scope,
        compliant_controls=compliant,
        partial_controls=partial,
        non_compliant_controls=non_compliant,
        not_assessed_controls=not_assessed,
        total_non_compliant=non_compliant + not_assessed,
        implementation_percentage=implementation,
        implementation_level=classify_implementation_level(sprs),
        implementation_factor=classify_implementation_factor(implementation),
    )
