from __future__ import annotations

"""DoD Assessment Methodology point values for NIST SP 800-171 requirements.

Each requirement that is not implemented deducts its point value (1, 3 or 5)
from the maximum SPRS score of 110.  Keys use the NIST numbering
(``"3.1.1"``); CMMC-style identifiers such as ``"AC.1.001"`` are not present
and resolve to :data:`DEFAULT_DOD_WEIGHT`.

``3.12.4`` (System Security Plan) has no point value: the methodology treats
a missing plan as making the assessment unscorable rather than as a
deduction, so it is absent from the table.
"""

DEFAULT_DOD_WEIGHT: int = 1

DOD_SCORE_VALUES: dict[str, int] = {
    "3.1.1": 5, "3.1.2": 5, "3.1.3": 1, "3.1.4": 1, "3.1.5": 3,
    "3.1.6": 1, "3.1.7": 1, "3.1.8": 1, "3.1.9": 1, "3.1.10": 1,
    "3.1.11": 1, "3.1.12": 5, "3.1.13": 5, "3.1.14": 1, "3.1.15": 1,
    "3.1.16": 5, "3.1.17": 5, "3.1.18": 5, "3.1.19": 3, "3.1.20": 1,
    "3.1.21": 1, "3.1.22": 1, "3.2.1": 5, "3.2.2": 5, "3.2.3": 1,
    "3.3.1": 5, "3.3.2": 3, "3.3.3": 1, "3.3.4": 1, "3.3.5": 5,
    "3.3.6": 1, "3.3.7": 1, "3.3.8": 1, "3.3.9": 1, "3.4.1": 5,
    "3.4.2": 5, "3.4.3": 1, "3.4.4": 1, "3.4.5": 5, "3.4.6": 5,
    "3.4.7": 5, "3.4.8": 5, "3.4.9": 1, "3.5.1": 5, "3.5.2": 5,
    "3.5.3": 5, "3.5.4": 1, "3.5.5": 1, "3.5.6": 1, "3.5.7": 1,
    "3.5.8": 1, "3.5.9": 1, "3.5.10": 5, "3.5.11": 1, "3.6.1": 5,
    "3.6.2": 5, "3.6.3": 1, "3.7.1": 3, "3.7.2": 5, "3.7.3": 1,
    "3.7.4": 3, "3.7.5": 5, "3.7.6": 1, "3.8.1": 3, "3.8.2": 3,
    "3.8.3": 5, "3.8.4": 1, "3.8.5": 1, "3.8.6": 1, "3.8.7": 5,
    "3.8.8": 3, "3.8.9": 1, "3.9.1": 3, "3.9.2": 5, "3.10.1": 5,
    "3.10.2": 5, "3.10.3": 1, "3.10.4": 1, "3.10.5": 1, "3.10.6": 1,
    "3.11.1": 3, "3.11.2": 5, "3.11.3": 1, "3.12.1": 5, "3.12.2": 3,
    "3.12.3": 5, "3.13.1": 5, "3.13.2": 5, "3.13.3": 1, "3.13.4": 1,
    "3.13.5": 5, "3.13.6": 5, "3.13.7": 1, "3.13.8": 3, "3.13.9": 1,
    "3.13.10": 1, "3.13.11": 5, "3.13.12": 1, "3.13.13": 1, "3.13.14": 1,
    "3.13.15": 5, "3.13.16": 1, "3.14.1": 5, "3.14.2": 5, "3.14.3": 5,
    "3.14.4": 5, "3.14.5": 3, "3.14.6": 5, "3.14.7": 3,
}

# Sum of every point value; the denominator of the implementation percentage.
MAX_POSSIBLE_SCORE: int = sum(DOD_SCORE_VALUES.values())


def dod_weight(control_id: str) -> int:
    """Return the DoD point value for *control_id*.

    Identifiers missing from :data:`DOD_SCORE_VALUES` (including every
    CMMC-style Level 1 identifier) fall back to :data:`DEFAULT_DOD_WEIGHT`.

    Examples:
        >>> dod_weight("3.1.1")
        5
        >>> dod_weight("AC.1.001")
        1
    """
    return DOD_SCORE_VALUES.get(control_id, DEFAULT_DOD_WEIGHT)
