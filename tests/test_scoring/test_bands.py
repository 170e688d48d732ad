from __future__ import annotations

import pytest

from cmmc_tracker.scoring import classify_implementation_factor, classify_implementation_level


class TestImplementationLevel:
    """Band boundaries for :func:`classify_implementation_level`."""

    @pytest.mark.parametrize(
        ("score", "label"),
        [
            (110, "Level 2 (110 practices)"),
            (109, "Level 2 (100-109 practices)"),
            (100, "Level 2 (100-109 practices)"),
            (99, "Level 2 (80-99 practices)"),
            (80, "Level 2 (80-99 practices)"),
            (79, "Level 1 (60-79 practices)"),
            (60, "Level 1 (60-79 practices)"),
            (59, "Level 1 (1-59 practices)"),
            (1, "Level 1 (1-59 practices)"),
            (0, "Non-Compliant (0 to -100)"),
            (-100, "Non-Compliant (0 to -100)"),
            (-101, "Severely Non-Compliant (Below -100)"),
            (-203, "Severely Non-Compliant (Below -100)"),
        ],
    )
    def test_boundaries(self, score: int, label: str) -> None:
        assert classify_implementation_level(score) == label


class TestImplementationFactor:
    """Band boundaries for :func:`classify_implementation_factor`."""

    @pytest.mark.parametrize(
        ("percentage", "label"),
        [
            (100, "1.0"),
            (99, "0.95"),
            (95, "0.95"),
            (94, "0.9"),
            (85, "0.85"),
            (80, "0.8"),
            (75, "0.75"),
            (70, "0.7"),
            (65, "0.65"),
            (64, "0.6"),
            (60, "0.6"),
            (59, "0.5"),
            (50, "0.5"),
            (40, "0.4"),
            (30, "0.3"),
            (20, "0.2"),
            (10, "0.1"),
            (9, "0.0"),
            (0, "0.0"),
        ],
    )
    def test_boundaries(self, percentage: int, label: str) -> None:
        assert classify_implementation_factor(percentage) == label
