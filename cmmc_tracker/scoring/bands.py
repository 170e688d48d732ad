from __future__ import annotations

"""Descriptive bands derived from SPRS results.

Both tables are evaluated top-down and the first threshold the value meets
wins.  Label text is part of the public contract: reports and dashboards
match on it verbatim.
"""

IMPLEMENTATION_LEVEL_BANDS: tuple[tuple[int, str], ...] = (
    (110, "Level 2 (110 practices)"),
    (100, "Level 2 (100-109 practices)"),
    (80, "Level 2 (80-99 practices)"),
    (60, "Level 1 (60-79 practices)"),
    (1, "Level 1 (1-59 practices)"),
    (-100, "Non-Compliant (0 to -100)"),
)
SEVERELY_NON_COMPLIANT: str = "Severely Non-Compliant (Below -100)"

IMPLEMENTATION_FACTOR_BANDS: tuple[tuple[int, str], ...] = (
    (100, "1.0"),
    (95, "0.95"),
    (90, "0.9"),
    (85, "0.85"),
    (80, "0.8"),
    (75, "0.75"),
    (70, "0.7"),
    (65, "0.65"),
    (60, "0.6"),
    (50, "0.5"),
    (40, "0.4"),
    (30, "0.3"),
    (20, "0.2"),
    (10, "0.1"),
)
NO_IMPLEMENTATION_FACTOR: str = "0.0"


def classify_implementation_level(sprs_score: int) -> str:
    """Map an SPRS score onto its implementation-level label.

    Examples:
        >>> classify_implementation_level(110)
        'Level 2 (110 practices)'
        >>> classify_implementation_level(0)
        'Non-Compliant (0 to -100)'
        >>> classify_implementation_level(-150)
        'Severely Non-Compliant (Below -100)'
    """
    for threshold, label in IMPLEMENTATION_LEVEL_BANDS:
        if sprs_score >= threshold:
            return label
    return SEVERELY_NON_COMPLIANT


def classify_implementation_factor(implementation_percentage: int) -> str:
    """Map an implementation percentage onto its decimal factor label.

    Examples:
        >>> classify_implementation_factor(97)
        '0.95'
        >>> classify_implementation_factor(55)
        '0.5'
        >>> classify_implementation_factor(9)
        '0.0'
    """
    for threshold, label in IMPLEMENTATION_FACTOR_BANDS:
        if implementation_percentage >= threshold:
            return label
    return NO_IMPLEMENTATION_FACTOR
