from __future__ import annotations

import uuid

from sqlalchemy import Boolean, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from cmmc_tracker.models.base import Base, TimestampMixin, UUIDMixin
from cmmc_tracker.models.enums import ControlStatus


class ControlResponse(UUIDMixin, TimestampMixin, Base):
    """The assessor's answer for one control within one assessment."""

    __tablename__ = "control_responses"
    __table_args__ = (
        UniqueConstraint(
            "assessment_id", "control_id", name="uq_control_responses_assessment_control"
        ),
    )

    assessment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("assessments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    control_id: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[ControlStatus | None] = mapped_column(nullable=True)
    evidence: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)


class ScopingDecision(UUIDMixin, Base):
    """Whether a control applies to the assessed environment."""

    __tablename__ = "scoping_decisions"
    __table_args__ = (
        UniqueConstraint(
            "assessment_id", "control_id", name="uq_scoping_decisions_assessment_control"
        ),
    )

    assessment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("assessments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    control_id: Mapped[str] = mapped_column(String, nullable=False)
    applicable: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
