from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from cmmc_tracker.models.enums import ControlStatus

# ---------------------------------------------------------------------------
# ControlResponse schemas
# ---------------------------------------------------------------------------


class ControlResponseCreate(BaseModel):
    """Payload for recording the answer to a control.

    Posting a second answer for the same control replaces the first.
    """

    control_id: str = Field(min_length=1)
    status: ControlStatus | None = None
    evidence: str | None = None
    notes: str | None = None


class ControlResponseResponse(BaseModel):
    """Control response record returned from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    assessment_id: UUID
    control_id: str
    status: ControlStatus | None
    evidence: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# ScopingDecision schemas
# ---------------------------------------------------------------------------


class ScopingDecisionCreate(BaseModel):
    """Payload for marking a control in or out of scope."""

    control_id: str = Field(min_length=1)
    applicable: bool = True
    reason: str | None = None


class ScopingDecisionResponse(BaseModel):
    """Scoping decision record returned from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    assessment_id: UUID
    control_id: str
    applicable: bool
    reason: str | None
