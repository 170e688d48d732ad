from __future__ import annotations

from pydantic import BaseModel

from cmmc_tracker.models.enums import AssessmentLevel


class ControlSchema(BaseModel):
    """A catalog control as returned from the API."""

    control_id: str
    domain: str
    domain_name: str
    name: str
    description: str
    level: AssessmentLevel
    dod_weight: int


class DomainSchema(BaseModel):
    """A control domain code and its display name."""

    code: str
    name: str
