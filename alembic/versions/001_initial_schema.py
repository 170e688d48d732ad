"""Initial schema for the CMMC compliance tracker.

Creates assessments, control responses, scoping decisions and the activity
log together with their enum types.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import ENUM as PG_ENUM
from sqlalchemy.dialects.postgresql import JSON, UUID

revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

# ── Enum definitions (raw SQL avoids async lifecycle bugs) ───────────

_ASSESSMENT_LEVEL_VALUES = ("level1", "level2")
_CONTROL_STATUS_VALUES = ("yes", "partial", "no", "not_applicable")
_ACTIVITY_ACTION_VALUES = (
    "updated_control", "updated_scoping", "uploaded_evidence", "completed_domain",
)

_ENUM_TYPES = (
    ("assessmentlevel", _ASSESSMENT_LEVEL_VALUES),
    ("controlstatus", _CONTROL_STATUS_VALUES),
    ("activityaction", _ACTIVITY_ACTION_VALUES),
)


def _create_enum_sql(name: str, values: tuple[str, ...]) -> str:
    vals = ", ".join(f"'{v}'" for v in values)
    return f"CREATE TYPE {name} AS ENUM ({vals})"


def upgrade() -> None:
    conn = op.get_bind()
    for name, values in _ENUM_TYPES:
        conn.execute(sa.text(_create_enum_sql(name, values)))

    level_col = PG_ENUM(*_ASSESSMENT_LEVEL_VALUES, name="assessmentlevel", create_type=False)
    status_col = PG_ENUM(*_CONTROL_STATUS_VALUES, name="controlstatus", create_type=False)
    action_col = PG_ENUM(*_ACTIVITY_ACTION_VALUES, name="activityaction", create_type=False)

    # assessments
    op.create_table(
        "assessments",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("level", level_col, nullable=False),
        sa.Column("organization_name", sa.String, nullable=False),
        sa.Column("completed_percentage", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "completed_percentage BETWEEN 0 AND 100",
            name="ck_assessments_completed_percentage",
        ),
    )

    # control_responses (one per assessment/control pair)
    op.create_table(
        "control_responses",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("assessment_id", UUID(as_uuid=True), sa.ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("control_id", sa.String, nullable=False),
        sa.Column("status", status_col, nullable=True),
        sa.Column("evidence", sa.Text, nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("assessment_id", "control_id", name="uq_control_responses_assessment_control"),
    )

    # scoping_decisions (one per assessment/control pair)
    op.create_table(
        "scoping_decisions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("assessment_id", UUID(as_uuid=True), sa.ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("control_id", sa.String, nullable=False),
        sa.Column("applicable", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("reason", sa.Text, nullable=True),
        sa.UniqueConstraint("assessment_id", "control_id", name="uq_scoping_decisions_assessment_control"),
    )

    # activity_logs
    op.create_table(
        "activity_logs",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("assessment_id", UUID(as_uuid=True), sa.ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("action", action_col, nullable=False),
        sa.Column("details", JSON, nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now(), index=True),
    )


def downgrade() -> None:
    op.drop_table("activity_logs")
    op.drop_table("scoping_decisions")
    op.drop_table("control_responses")
    op.drop_table("assessments")

    conn = op.get_bind()
    for name, _ in reversed(_ENUM_TYPES):
        conn.execute(sa.text(f"DROP TYPE IF EXISTS {name}"))
