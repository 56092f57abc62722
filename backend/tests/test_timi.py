"""Tests for the TIMI Risk Score for UA/NSTEMI."""

import pytest

from clinical_risk.services.scoring import RiskCategory
from clinical_risk.services.scoring.instruments.timi import TIMIRiskScore

ALL_CRITERIA = {
    "age": 70,
    "cad_risk_factors": 4,
    "known_cad": True,
    "aspirin_last_7_days": True,
    "severe_angina": True,
    "st_deviation": True,
    "elevated_markers": True,
}


@pytest.fixture
def timi():
    return TIMIRiskScore()


class TestTIMIRiskScore:
    """Tests for TIMI scoring and event rates."""

    def test_intermediate(self, timi, timi_inputs):
        assessment = timi.calculate(timi_inputs)
        assert assessment.score == 3
        assert assessment.category == RiskCategory.INTERMEDIATE
        assert assessment.event_rate == 13.2
        assert assessment.interpretation == (
            "Intermediate risk patient with 13.2% 14-day risk of adverse outcomes"
        )

    def test_zero_score(self, timi):
        assessment = timi.calculate({"age": 40, "cad_risk_factors": 0})
        assert assessment.score == 0
        assert assessment.category == RiskCategory.LOW
        assert assessment.event_rate == 4.7

    def test_maximum_score(self, timi):
        assessment = timi.calculate(ALL_CRITERIA)
        assert assessment.score == 7
        assert assessment.category == RiskCategory.HIGH
        assert assessment.extras["management"] == "Immediate invasive strategy - highest risk"
        assert assessment.extras["risk_details"]["mortality"] == 10.6

    def test_boundaries(self, timi):
        assert timi.calculate({"age": 70, "cad_risk_factors": 3}).category == RiskCategory.LOW
        four = timi.calculate(
            {"age": 70, "cad_risk_factors": 3, "known_cad": True, "st_deviation": True}
        )
        assert four.score == 4
        assert four.category == RiskCategory.INTERMEDIATE
        five = timi.calculate(
            {
                "age": 70,
                "cad_risk_factors": 3,
                "known_cad": True,
                "st_deviation": True,
                "severe_angina": True,
            }
        )
        assert five.category == RiskCategory.HIGH

    def test_risk_factor_threshold(self, timi):
        assert timi.compute_score({"age": 40, "cad_risk_factors": 2}).total == 0
        assert timi.compute_score({"age": 40, "cad_risk_factors": 3}).total == 1

    def test_age_threshold(self, timi):
        assert timi.compute_score({"age": 64, "cad_risk_factors": 0}).total == 0
        assert timi.compute_score({"age": 65, "cad_risk_factors": 0}).total == 1

    def test_recommendation_per_category(self, timi, timi_inputs):
        assessment = timi.calculate(timi_inputs)
        assert len(assessment.recommendations) == 1
        assert assessment.recommendations[0].startswith("Early invasive strategy")

    def test_event_rate_label(self, timi, timi_inputs):
        assert timi.calculate(timi_inputs).event_rate_label == "14-day composite event rate"
