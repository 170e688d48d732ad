from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from cmmc_tracker.models.enums import AssessmentLevel

# ---------------------------------------------------------------------------
# Assessment schemas
# ---------------------------------------------------------------------------


class AssessmentCreate(BaseModel):
    """Payload for creating a new assessment."""

    name: str = Field(min_length=1)
    level: AssessmentLevel
    organization_name: str = Field(min_length=1)


class AssessmentUpdate(BaseModel):
    """Partial payload for updating an existing assessment.

    The level is fixed at creation time: responses are keyed by the level's
    control identifiers, so changing it would orphan every answer.
    """

    name: str | None = Field(default=None, min_length=1)
    organization_name: str | None = Field(default=None, min_length=1)


class CompletionUpdate(BaseModel):
    """Payload for overwriting the cached completion percentage."""

    completed_percentage: int = Field(ge=0, le=100)


class AssessmentResponse(BaseModel):
    """Full assessment record returned from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    level: AssessmentLevel
    organization_name: str
    completed_percentage: int
    created_at: datetime
    updated_at: datetime
