from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from cmmc_tracker.models.enums import ActivityAction


class ActivityLogCreate(BaseModel):
    """Payload for appending an entry to an assessment's activity log."""

    action: ActivityAction
    details: dict[str, Any] = {}


class ActivityLogResponse(BaseModel):
    """Activity log entry returned from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    assessment_id: UUID
    action: ActivityAction
    details: dict[str, Any]
    timestamp: datetime
