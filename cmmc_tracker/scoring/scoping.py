from __future__ import annotations

"""Scoping resolution shared by every calculator.

A control with no scoping decision is in scope.  Both calculators resolve
applicability exclusively through :func:`is_in_scope` so they can never
disagree about which controls count.
"""

import math
from collections.abc import Iterable, Mapping

from cmmc_tracker.scoring.records import ScopingRecord

ScopingMap = Mapping[str, ScopingRecord]

# Share of a control's weight credited when it is partially implemented.
PARTIAL_CREDIT: float = 0.5


def build_scoping_map(decisions: Iterable[ScopingRecord]) -> dict[str, ScopingRecord]:
    """Index *decisions* by control id; a later duplicate replaces an earlier one."""
    return {decision.control_id: decision for decision in decisions}


def is_in_scope(
    control_id: str,
    scoping: ScopingMap | Iterable[ScopingRecord],
) -> bool:
    """Return whether *control_id* is in scope.

    *scoping* may be a prebuilt map (preferred inside loops) or any iterable
    of decisions.  Total over every input: an unknown control is in scope.
    """
    if not isinstance(scoping, Mapping):
        scoping = build_scoping_map(scoping)
    decision = scoping.get(control_id)
    return decision is None or decision.applicable


def count_out_of_scope(scoping_map: ScopingMap) -> int:
    """Number of distinct controls explicitly marked not applicable."""
    return sum(1 for decision in scoping_map.values() if not decision.applicable)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with ties going towards +infinity.

    Python's built-in :func:`round` uses banker's rounding, which would turn
    a raw SPRS of ``108.5`` into ``108`` instead of ``109``.
    """
    return math.floor(value + 0.5)
