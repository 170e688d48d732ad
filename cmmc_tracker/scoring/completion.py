from __future__ import annotations

"""Completion and compliance statistics for a single assessment.

``completion_percentage`` measures how much of the applicable catalog has
been answered; ``compliance_score`` measures how much of it is
implemented, with partially implemented controls earning half credit.
Both are whole-number percentages in ``[0, 100]``.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from cmmc_tracker.models.enums import ControlStatus
from cmmc_tracker.scoring.errors import ScoringIntegrityError
from cmmc_tracker.scoring.records import ResponseRecord, ScopingRecord, latest_responses
from cmmc_tracker.scoring.scoping import (
    PARTIAL_CREDIT,
    build_scoping_map,
    count_out_of_scope,
    round_half_up,
)


@dataclass(frozen=True)
class CompletionStats:
    """Snapshot of how far an assessment has progressed.

    Attributes:
        total_controls: Size of the level's control catalog.
        applicable_controls: Catalog size minus controls scoped out.
        answered_controls: Assessed responses other than ``not_applicable``.
        compliant_controls: Responses with status ``yes``.
        partial_controls: Responses with status ``partial``.
        non_compliant_controls: Responses with status ``no``.
        completion_percentage: Answered share of the applicable controls.
        compliance_score: Compliant share of the applicable controls, partial
            controls counting half.
    """

    total_controls: int
    applicable_controls: int
    answered_controls: int
    compliant_controls: int
    partial_controls: int
    non_compliant_controls: int
    completion_percentage: int
    compliance_score: int


def _percentage(part: float, whole: int) -> int:
    if whole <= 0:
        return 0
    return max(0, min(100, round_half_up(part * 100 / whole)))


def calculate_completion(
    total_controls: int,
    responses: Iterable[ResponseRecord],
    scoping_decisions: Iterable[ScopingRecord],
) -> CompletionStats:
    """Compute completion statistics for one assessment snapshot.

    Response counts are taken over every assessed response, independent of
    scoping; only the denominator is reduced by out-of-scope controls.
    Percentages are capped at 100 so a response recorded against a scoped-out
    control can never push completion beyond the applicable total.

    Args:
        total_controls: Catalog size for the assessment's level.
        responses: Response records; duplicates collapse to the last one.
        scoping_decisions: Scoping records; duplicates collapse to the last one.

    Returns:
        A populated :class:`CompletionStats`.

    Raises:
        ScoringIntegrityError: More distinct controls are scoped out than the
            catalog contains.
    """
    if total_controls < 0:
        raise ScoringIntegrityError(f"total_controls must not be negative (got {total_controls}).")

    scoping_map = build_scoping_map(scoping_decisions)
    out_of_scope = count_out_of_scope(scoping_map)
    if out_of_scope > total_controls:
        raise ScoringIntegrityError(
            f"{out_of_scope} controls are scoped out but the catalog only has {total_controls}."
        )
    applicable = total_controls - out_of_scope

    assessed = [r for r in latest_responses(responses).values() if r.is_assessed]
    answered = sum(1 for r in assessed if r.status != ControlStatus.not_applicable)
    compliant = sum(1 for r in assessed if r.status == ControlStatus.yes)
    partial = sum(1 for r in assessed if r.status == ControlStatus.partial)
    non_compliant = sum(1 for r in assessed if r.status == ControlStatus.no)

    return CompletionStats(
        total_controls=total_controls,
        applicable_controls=applicable,
        answered_controls=answered,
        compliant_controls=compliant,
        partial_controls=partial,
        non_compliant_controls=non_compliant,
        completion_percentage=_percentage(answered, applicable),
        compliance_score=_percentage(compliant + partial * PARTIAL_CREDIT, applicable),
    )
