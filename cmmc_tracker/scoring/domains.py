from __future__ import annotations

"""Per-domain compliance breakdown and gap analysis.

These views answer "where are the gaps?" for a single assessment.  They
share the scoping resolver and weight table with the SPRS calculator, so a
control counted as a gap here is exactly one that deducts points there.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from cmmc_tracker.catalog.controls import DOMAINS, Control
from cmmc_tracker.catalog.dod_weights import DEFAULT_DOD_WEIGHT, DOD_SCORE_VALUES
from cmmc_tracker.models.enums import ControlStatus
from cmmc_tracker.scoring.records import ResponseRecord, ScopingRecord, latest_responses
from cmmc_tracker.scoring.scoping import (
    PARTIAL_CREDIT,
    build_scoping_map,
    is_in_scope,
    round_half_up,
)

DEFAULT_DOMAIN_THRESHOLD: int = 80


# ---------------------------------------------------------------------------
# Domain compliance
# ---------------------------------------------------------------------------


@dataclass
class DomainCompliance:
    """Compliance figures for one control domain."""

    domain: str
    name: str
    in_scope_controls: int = 0
    compliant_controls: int = 0
    partial_controls: int = 0
    non_compliant_controls: int = 0
    not_assessed_controls: int = 0
    threshold: int = DEFAULT_DOMAIN_THRESHOLD

    @property
    def compliance_percentage(self) -> int:
        """Fully implemented share of the in-scope controls; partial counts half."""
        if self.in_scope_controls == 0:
            return 0
        earned = self.compliant_controls + self.partial_controls * PARTIAL_CREDIT
        return round_half_up(earned * 100 / self.in_scope_controls)

    @property
    def below_threshold(self) -> bool:
        return self.compliance_percentage < self.threshold


def calculate_domain_compliance(
    controls: Sequence[Control],
    responses: Iterable[ResponseRecord],
    scoping_decisions: Iterable[ScopingRecord],
    threshold: int = DEFAULT_DOMAIN_THRESHOLD,
) -> list[DomainCompliance]:
    """Break an assessment down by control domain.

    Only domains that have at least one control in *controls* are reported.
    Controls answered ``not_applicable`` count as in scope but neither
    compliant nor a gap.

    Args:
        controls: The level's control catalog.
        responses: Response records for the assessment.
        scoping_decisions: Scoping records for the assessment.
        threshold: Percentage below which a domain is flagged.

    Returns:
        Domain figures sorted by compliance percentage ascending (largest
        gaps first), ties broken by domain code.
    """
    scoping_map = build_scoping_map(scoping_decisions)
    latest = latest_responses(responses)

    by_domain: dict[str, DomainCompliance] = {}
    for control in controls:
        entry = by_domain.get(control.domain)
        if entry is None:
            entry = DomainCompliance(
                domain=control.domain,
                name=DOMAINS.get(control.domain, control.domain),
                threshold=threshold,
            )
            by_domain[control.domain] = entry

        if not is_in_scope(control.control_id, scoping_map):
            continue
        entry.in_scope_controls += 1

        response = latest.get(control.control_id)
        status = response.status if response is not None else None
        if status is None:
            entry.not_assessed_controls += 1
        elif status == ControlStatus.yes:
            entry.compliant_controls += 1
        elif status == ControlStatus.partial:
            entry.partial_controls += 1
        elif status == ControlStatus.no:
            entry.non_compliant_controls += 1

    return sorted(by_domain.values(), key=lambda d: (d.compliance_percentage, d.domain))


# ---------------------------------------------------------------------------
# Gap analysis
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ControlGap:
    """An in-scope control that is not fully implemented."""

    control_id: str
    domain: str
    name: str
    status: ControlStatus | None
    dod_weight: int
    sprs_impact: float
    notes: str | None = None


def identify_gaps(
    controls: Sequence[Control],
    responses: Iterable[ResponseRecord],
    scoping_decisions: Iterable[ScopingRecord],
    weights: Mapping[str, int] = DOD_SCORE_VALUES,
) -> list[ControlGap]:
    """List every in-scope control answered ``no``, ``partial`` or not yet assessed.

    ``sprs_impact`` is the number of points the gap costs: the full weight,
    or half of it for ``partial``.  The result is ordered by impact
    descending, then by control id.
    """
    scoping_map = build_scoping_map(scoping_decisions)
    latest = latest_responses(responses)

    gaps: list[ControlGap] = []
    for control in controls:
        if not is_in_scope(control.control_id, scoping_map):
            continue
        response = latest.get(control.control_id)
        status = response.status if response is not None else None
        if status in (ControlStatus.yes, ControlStatus.not_applicable):
            continue

        weight = weights.get(control.control_id, DEFAULT_DOD_WEIGHT)
        impact = weight * PARTIAL_CREDIT if status == ControlStatus.partial else float(weight)
        gaps.append(
            ControlGap(
                control_id=control.control_id,
                domain=control.domain,
                name=control.name,
                status=status,
                dod_weight=weight,
                sprs_impact=impact,
                notes=response.notes if response is not None else None,
            )
        )

    gaps.sort(key=lambda g: (-g.sprs_impact, g.control_id))
    return gaps
