from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from cmmc_tracker.models.base import Base, TimestampMixin, UUIDMixin, utcnow
from cmmc_tracker.models.enums import ActivityAction, AssessmentLevel


class Assessment(UUIDMixin, TimestampMixin, Base):
    """A self-assessment of one organisation against one CMMC level."""

    __tablename__ = "assessments"
    __table_args__ = (
        CheckConstraint(
            "completed_percentage BETWEEN 0 AND 100",
            name="ck_assessments_completed_percentage",
        ),
    )

    name: Mapped[str] = mapped_column(String, nullable=False)
    level: Mapped[AssessmentLevel] = mapped_column(nullable=False)
    organization_name: Mapped[str] = mapped_column(String, nullable=False)
    # Cached for display; overwritten whenever completion is recalculated.
    completed_percentage: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False
    )


class ActivityLog(UUIDMixin, Base):
    """Append-only record of an action taken against an assessment."""

    __tablename__ = "activity_logs"

    assessment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("assessments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    action: Mapped[ActivityAction] = mapped_column(nullable=False)
    details: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )
