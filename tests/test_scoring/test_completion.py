from __future__ import annotations

import pytest

from cmmc_tracker.models.enums import ControlStatus
from cmmc_tracker.scoring import (
    ResponseRecord,
    ScopingRecord,
    ScoringIntegrityError,
    calculate_completion,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _answers(pairs: list[tuple[str, str | None]]) -> list[ResponseRecord]:
    return [
        ResponseRecord(cid, ControlStatus(status) if status is not None else None)
        for cid, status in pairs
    ]


def _out(*control_ids: str) -> list[ScopingRecord]:
    return [ScopingRecord(cid, applicable=False) for cid in control_ids]


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestCalculateCompletion:
    """Tests for :func:`calculate_completion`."""

    def test_empty_assessment(self) -> None:
        stats = calculate_completion(17, [], [])
        assert stats.total_controls == 17
        assert stats.applicable_controls == 17
        assert stats.answered_controls == 0
        assert stats.completion_percentage == 0
        assert stats.compliance_score == 0

    def test_one_out_of_scope_rest_compliant(self, level1_ids: list[str]) -> None:
        """Level 1 with one control scoped out and the other sixteen answered yes."""
        excluded, *remaining = level1_ids
        stats = calculate_completion(
            17,
            _answers([(cid, "yes") for cid in remaining]),
            _out(excluded),
        )
        assert stats.applicable_controls == 16
        assert stats.answered_controls == 16
        assert stats.completion_percentage == 100
        assert stats.compliance_score == 100

    def test_partial_controls_earn_half_credit(self, level1_ids: list[str]) -> None:
        """8 yes, 4 partial and 5 no gives round(100 * 10 / 17) = 59."""
        statuses = ["yes"] * 8 + ["partial"] * 4 + ["no"] * 5
        stats = calculate_completion(17, _answers(list(zip(level1_ids, statuses))), [])
        assert stats.compliant_controls == 8
        assert stats.partial_controls == 4
        assert stats.non_compliant_controls == 5
        assert stats.answered_controls == 17
        assert stats.completion_percentage == 100
        assert stats.compliance_score == 59

    def test_not_applicable_is_not_answered(self, level1_ids: list[str]) -> None:
        stats = calculate_completion(
            17,
            _answers([(level1_ids[0], "not_applicable"), (level1_ids[1], "yes")]),
            [],
        )
        assert stats.answered_controls == 1
        assert stats.completion_percentage == 6

    def test_unset_status_counts_as_missing(self, level1_ids: list[str]) -> None:
        stats = calculate_completion(17, _answers([(level1_ids[0], None)]), [])
        assert stats.answered_controls == 0
        assert stats.completion_percentage == 0

    def test_duplicate_responses_last_wins(self) -> None:
        stats = calculate_completion(17, _answers([("AC.1.001", "no"), ("AC.1.001", "yes")]), [])
        assert stats.answered_controls == 1
        assert stats.compliant_controls == 1
        assert stats.non_compliant_controls == 0

    def test_everything_out_of_scope_yields_zero(self, level1_ids: list[str]) -> None:
        stats = calculate_completion(17, [], _out(*level1_ids))
        assert stats.applicable_controls == 0
        assert stats.completion_percentage == 0
        assert stats.compliance_score == 0

    def test_percentages_never_exceed_100(self, level1_ids: list[str]) -> None:
        """Answers recorded for scoped-out controls still count, but are capped."""
        stats = calculate_completion(
            17,
            _answers([(cid, "yes") for cid in level1_ids]),
            _out(*level1_ids[:5]),
        )
        assert stats.applicable_controls == 12
        assert stats.answered_controls == 17
        assert stats.completion_percentage == 100
        assert stats.compliance_score == 100

    def test_too_many_out_of_scope_is_an_integrity_error(self) -> None:
        decisions = _out(*(f"X.{n}" for n in range(18)))
        with pytest.raises(ScoringIntegrityError):
            calculate_completion(17, [], decisions)

    def test_repeated_out_of_scope_decisions_count_once(self, level1_ids: list[str]) -> None:
        decisions = _out(*level1_ids) + _out(level1_ids[0])
        stats = calculate_completion(17, [], decisions)
        assert stats.applicable_controls == 0

    def test_improving_a_control_never_lowers_compliance(self, level1_ids: list[str]) -> None:
        """Moving a control from no to partial to yes is monotonic."""
        baseline = [(cid, "yes") for cid in level1_ids[1:]]
        results = [
            calculate_completion(17, _answers(baseline + [(level1_ids[0], status)]), [])
            for status in ("no", "partial", "yes")
        ]
        scores = [stats.compliance_score for stats in results]
        assert scores == [94, 97, 100]
        assert all(stats.completion_percentage == 100 for stats in results)

    def test_is_pure(self, level1_ids: list[str]) -> None:
        """Identical snapshots give identical results."""
        responses = _answers([(level1_ids[0], "yes"), (level1_ids[1], "partial")])
        decisions = _out(level1_ids[2])
        assert calculate_completion(17, responses, decisions) == calculate_completion(
            17, responses, decisions
        )
