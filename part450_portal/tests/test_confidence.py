"""
Tests: Confidence scoring for extracted values.

Run with:
    pytest part450_portal/tests/test_confidence.py -v
"""

from part450_portal.extraction.confidence import fixed_confidence, keyword_confidence
from part450_portal.models.enums import CanonicalField as F


class TestKeywordConfidence:
    def test_empty_value_scores_zero(self):
        assert keyword_confidence(F.MISSION_OBJECTIVE, "   ") == 0.0

    def test_short_plain_value_gets_base(self):
        assert keyword_confidence(F.MISSION_OBJECTIVE, "Land on the Moon.") == 0.6

    def test_length_bonus(self):
        value = "Deliver a robotic lander to the lunar south pole to survey ice."
        assert keyword_confidence(F.MISSION_OBJECTIVE, value) == 0.7

    def test_field_evidence_bonus(self):
        assert keyword_confidence(F.SITE_NAMES_COORDINATES, "LC-39A, 28.6° N") == 0.8
        assert keyword_confidence(F.DIMENSIONS_MASS_STAGES, "62 m tall") == 0.8
        assert keyword_confidence(F.LAUNCH_SITE, "Kennedy Space Center") == 0.8

    def test_evidence_for_other_field_ignored(self):
        assert keyword_confidence(F.MISSION_OBJECTIVE, "28.6° N") == 0.6

    def test_capped_below_one(self):
        value = "Kennedy Space Center, Launch Complex 39A, Merritt Island, Florida, USA"
        assert keyword_confidence(F.LAUNCH_SITE, value) == 0.9
        assert keyword_confidence(F.LAUNCH_SITE, value) <= 0.99


class TestFixedConfidence:
    def test_fixed_value(self):
        scorer = fixed_confidence(0.42)
        assert scorer(F.LAUNCH_SITE, "anything") == 0.42
        assert scorer(F.LAUNCH_SITE, "") == 0.0

    def test_clamped(self):
        assert fixed_confidence(1.7)(F.LAUNCH_SITE, "x") == 1.0
