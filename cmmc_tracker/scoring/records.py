from __future__ import annotations

"""Engine-side records built from persisted rows.

The persistence layer stores nullable columns (``None``) while free-text
fields posted by clients may arrive as empty strings.  :meth:`ResponseRecord.from_model`
and :meth:`ScopingRecord.from_model` are the single place where both are
normalised to ``None`` before any calculator sees the data.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from cmmc_tracker.models.enums import ControlStatus


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _coerce_status(value: Any) -> ControlStatus | None:
    if value is None or value == "":
        return None
    return ControlStatus(value)


@dataclass(frozen=True)
class ResponseRecord:
    """A control response as seen by the scoring engine.

    ``status=None`` means the control has not been assessed yet; the
    calculators treat such a record exactly like a missing response.
    """

    control_id: str
    status: ControlStatus | None = None
    notes: str | None = None
    evidence: str | None = None

    @property
    def is_assessed(self) -> bool:
        return self.status is not None

    @classmethod
    def from_model(cls, row: Any) -> ResponseRecord:
        """Build a record from any object exposing the response attributes."""
        return cls(
            control_id=row.control_id,
            status=_coerce_status(row.status),
            notes=_blank_to_none(getattr(row, "notes", None)),
            evidence=_blank_to_none(getattr(row, "evidence", None)),
        )


@dataclass(frozen=True)
class ScopingRecord:
    """A scoping decision as seen by the scoring engine."""

    control_id: str
    applicable: bool = True
    reason: str | None = None

    @classmethod
    def from_model(cls, row: Any) -> ScopingRecord:
        """Build a record from any object exposing the scoping attributes.

        A missing ``applicable`` value is read as applicable.
        """
        applicable = getattr(row, "applicable", None)
        return cls(
            control_id=row.control_id,
            applicable=True if applicable is None else bool(applicable),
            reason=_blank_to_none(getattr(row, "reason", None)),
        )


def latest_responses(responses: Iterable[ResponseRecord]) -> dict[str, ResponseRecord]:
    """Collapse *responses* to one record per control; the last one seen wins."""
    latest: dict[str, ResponseRecord] = {}
    for response in responses:
        latest[response.control_id] = response
    return latest
