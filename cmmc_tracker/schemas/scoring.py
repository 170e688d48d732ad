from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from cmmc_tracker.models.enums import AssessmentLevel, ControlStatus

# ---------------------------------------------------------------------------
# Calculator results
# ---------------------------------------------------------------------------


class CompletionStatsResponse(BaseModel):
    """Completion and compliance statistics for an assessment."""

    model_config = ConfigDict(from_attributes=True)

    total_controls: int
    applicable_controls: int
    answered_controls: int
    compliant_controls: int
    partial_controls: int
    non_compliant_controls: int
    completion_percentage: int
    compliance_score: int


class SprsScoreResponse(BaseModel):
    """SPRS score and its derived classifications."""

    model_config = ConfigDict(from_attributes=True)

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


# ---------------------------------------------------------------------------
# Domain and gap views
# ---------------------------------------------------------------------------


class DomainComplianceResponse(BaseModel):
    """Compliance figures for one control domain."""

    model_config = ConfigDict(from_attributes=True)

    domain: str
    name: str
    in_scope_controls: int
    compliant_controls: int
    partial_controls: int
    non_compliant_controls: int
    not_assessed_controls: int
    compliance_percentage: int
    threshold: int
    below_threshold: bool


class ControlGapResponse(BaseModel):
    """A single not-fully-implemented control."""

    model_config = ConfigDict(from_attributes=True)

    control_id: str
    domain: str
    name: str
    status: ControlStatus | None
    dod_weight: int
    sprs_impact: float
    notes: str | None


class GapAnalysisResponse(BaseModel):
    """All gaps for an assessment plus the total points at stake."""

    assessment_id: UUID
    level: AssessmentLevel
    total_gaps: int
    total_sprs_impact: float
    gaps: list[ControlGapResponse]
