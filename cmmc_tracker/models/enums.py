from __future__ import annotations

from enum import Enum


class AssessmentLevel(str, Enum):
    """CMMC assessment levels supported by the tracker."""

    level1 = "level1"
    level2 = "level2"


class ControlStatus(str, Enum):
    """Self-assessed implementation status of a single control.

    ``not_applicable`` is accepted for compatibility only; applicability is
    normally recorded through a scoping decision instead.
    """

    yes = "yes"
    partial = "partial"
    no = "no"
    not_applicable = "not_applicable"


class ActivityAction(str, Enum):
    """Kinds of user action recorded in the activity log."""

    updated_control = "updated_control"
    updated_scoping = "updated_scoping"
    uploaded_evidence = "uploaded_evidence"
    completed_domain = "completed_domain"
