from __future__ import annotations

# Import Base first so all subclasses register against the same metadata.
from cmmc_tracker.models.base import Base, TimestampMixin, UUIDMixin

# Domain models - imported so Alembic autogenerate can discover every mapped
# class via Base.metadata.
from cmmc_tracker.models.assessment import ActivityLog, Assessment

# Enums - no SQLAlchemy dependencies.
from cmmc_tracker.models.enums import (
    ActivityAction,
    AssessmentLevel,
    ControlStatus,
)
from cmmc_tracker.models.response import ControlResponse, ScopingDecision

__all__ = [
    # Base classes
    "Base",
    "UUIDMixin",
    "TimestampMixin",
    # Enums
    "ActivityAction",
    "AssessmentLevel",
    "ControlStatus",
    # Models
    "ActivityLog",
    "Assessment",
    "ControlResponse",
    "ScopingDecision",
]
