from __future__ import annotations


class ScoringIntegrityError(ValueError):
    """Raised when a scoring snapshot contradicts the control catalog.

    The calculators never clamp their way around such input; the caller is
    expected to surface the error rather than report a misleading score.
    """
