"""Tests for the MAGGIC heart failure risk score."""

import pytest

from clinical_risk.services.scoring import RiskCategory
from clinical_risk.services.scoring.instruments.maggic import (
    ONE_YEAR_MORTALITY,
    THREE_YEAR_MORTALITY,
    MAGGICScore,
    ef_band,
    mortality,
)

HIGH_RISK = {
    "age": 80,
    "gender": "male",
    "lvef": 15,
    "nyha_class": "4",
    "systolic_bp": 100,
    "bmi": 18,
    "creatinine": 260,
    "diabetes": True,
    "copd": True,
    "current_smoker": True,
    "first_diagnosis_18_months": True,
    "beta_blocker": False,
    "ace_inhibitor": False,
}


@pytest.fixture
def maggic():
    return MAGGICScore()


class TestMortalityConversion:
    """Tests for the score to mortality conversion."""

    def test_anchor_points(self):
        assert mortality(ONE_YEAR_MORTALITY, 0) == 1.2
        assert mortality(ONE_YEAR_MORTALITY, 20) == 11.2
        assert mortality(THREE_YEAR_MORTALITY, 50) == 93.8

    def test_interpolates_between_anchors(self):
        assert mortality(ONE_YEAR_MORTALITY, 4) == pytest.approx(2.2)

    def test_clamps_score(self):
        assert mortality(ONE_YEAR_MORTALITY, 56) == 84.2
        assert mortality(ONE_YEAR_MORTALITY, -3) == 1.2

    def test_monotonic(self):
        rates = [mortality(ONE_YEAR_MORTALITY, score) for score in range(51)]
        assert rates == sorted(rates)


class TestEjectionFractionBands:
    """Tests for EF band selection."""

    def test_bands(self):
        assert ef_band(29.9) == "ef_below_30"
        assert ef_band(30) == "ef_30_39"
        assert ef_band(39.5) == "ef_30_39"
        assert ef_band(40) == "ef_40_plus"

    def test_age_points_depend_on_ef(self, maggic, maggic_inputs):
        preserved = maggic.compute_score({**maggic_inputs, "age": 72})
        reduced = maggic.compute_score({**maggic_inputs, "age": 72, "lvef": 25})
        assert preserved.components["age"] == 9
        assert reduced.components["age"] == 6


class TestMAGGICScore:
    """Tests for MAGGIC assessment."""

    def test_low_risk(self, maggic, maggic_inputs):
        assessment = maggic.calculate(maggic_inputs)
        assert assessment.score == 0
        assert assessment.category == RiskCategory.LOW
        assert assessment.event_rate == 1.2
        assert assessment.extras["three_year_mortality"] == 3.2
        assert assessment.extras["ef_band"] == "ef_40_plus"

    def test_very_high_risk(self, maggic):
        assessment = maggic.calculate(HIGH_RISK)
        assert assessment.score == 56
        assert assessment.category == RiskCategory.VERY_HIGH
        assert assessment.event_rate == 84.2
        assert sum(assessment.breakdown.components.values()) == assessment.score

    def test_untreated_adds_points_and_guidance(self, maggic, maggic_inputs):
        assessment = maggic.calculate(
            {**maggic_inputs, "beta_blocker": False, "ace_inhibitor": False}
        )
        assert assessment.breakdown.components["beta_blocker"] == 3
        assert assessment.breakdown.components["ace_inhibitor"] == 1
        assert "Initiate evidence-based beta-blocker therapy" in assessment.recommendations
        assert "Consider ACE inhibitor or ARB therapy" in assessment.recommendations

    def test_boundary_is_strict(self, maggic):
        table = maggic.thresholds
        assert table.band_for(9.99).category == RiskCategory.LOW
        assert table.band_for(10).category == RiskCategory.INTERMEDIATE
        assert table.band_for(20).category == RiskCategory.HIGH
        assert table.band_for(35).category == RiskCategory.VERY_HIGH

    def test_score_20_is_intermediate(self, maggic, maggic_inputs):
        # NYHA 4 (8) + creatinine 260 (8) + no beta-blocker (3) + no ACEi (1)
        assessment = maggic.calculate(
            {
                **maggic_inputs,
                "nyha_class": "4",
                "creatinine": 260,
                "beta_blocker": False,
                "ace_inhibitor": False,
            }
        )
        assert assessment.score == 20
        assert assessment.event_rate == 11.2
        assert assessment.category == RiskCategory.INTERMEDIATE

    def test_nyha_is_a_choice(self, maggic, maggic_inputs):
        result = maggic.validate({**maggic_inputs, "nyha_class": "5"})
        assert "nyha_class" in result.errors
