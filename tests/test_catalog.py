from __future__ import annotations

from cmmc_tracker.catalog import (
    DOD_SCORE_VALUES,
    DOMAINS,
    LEVEL1_CONTROLS,
    LEVEL2_CONTROLS,
    dod_weight,
    get_control,
    get_controls,
    total_controls,
)
from cmmc_tracker.models.enums import AssessmentLevel


class TestControlCatalog:
    """Tests for the static control catalog."""

    def test_level_sizes(self) -> None:
        assert total_controls(AssessmentLevel.level1) == 17
        assert total_controls(AssessmentLevel.level2) == 110
        assert len(get_controls(AssessmentLevel.level1)) == len(LEVEL1_CONTROLS)

    def test_control_ids_are_unique(self) -> None:
        for controls in (LEVEL1_CONTROLS, LEVEL2_CONTROLS):
            ids = [c.control_id for c in controls]
            assert len(ids) == len(set(ids))

    def test_every_domain_is_known(self) -> None:
        assert len(DOMAINS) == 14
        for control in (*LEVEL1_CONTROLS, *LEVEL2_CONTROLS):
            assert control.domain in DOMAINS
            assert control.domain_name == DOMAINS[control.domain]

    def test_level2_covers_the_weight_table(self) -> None:
        """Every weighted requirement is in the Level 2 catalog; only 3.12.4 is unweighted."""
        level2_ids = {c.control_id for c in LEVEL2_CONTROLS}
        assert set(DOD_SCORE_VALUES) <= level2_ids
        assert level2_ids - set(DOD_SCORE_VALUES) == {"3.12.4"}

    def test_level2_domains_follow_nist_families(self) -> None:
        assert get_control(AssessmentLevel.level2, "3.1.1").domain == "AC"
        assert get_control(AssessmentLevel.level2, "3.12.4").domain == "CA"
        assert get_control(AssessmentLevel.level2, "3.14.7").domain == "SI"

    def test_get_control_is_level_specific(self) -> None:
        assert get_control(AssessmentLevel.level1, "AC.1.001") is not None
        assert get_control(AssessmentLevel.level2, "AC.1.001") is None
        assert get_control(AssessmentLevel.level1, "3.1.1") is None

    def test_dod_weight_fallback(self) -> None:
        assert dod_weight("3.1.1") == 5
        assert dod_weight("3.1.5") == 3
        assert dod_weight("3.12.4") == 1
        assert dod_weight("AC.1.001") == 1
