"""Tests for EuroSCORE II."""

import pytest

from clinical_risk.services.scoring import ErrorCode, RiskCategory
from clinical_risk.services.scoring.instruments.euroscore_ii import (
    EuroSCOREII,
    age_term,
    logistic_mortality,
)


@pytest.fixture
def euroscore():
    return EuroSCOREII()


class TestEuroSCOREHelpers:
    """Tests for the age term and logistic transform."""

    def test_age_term(self):
        assert age_term(45) == 1
        assert age_term(60) == 1
        assert age_term(61) == 2
        assert age_term(75) == 16

    def test_logistic(self):
        assert logistic_mortality(0) == pytest.approx(50.0)
        assert 0 < logistic_mortality(-10) < 0.01


class TestEuroSCOREII:
    """Tests for EuroSCORE II assessment."""

    def test_low_risk(self, euroscore, euroscore_inputs):
        assessment = euroscore.calculate(euroscore_inputs)
        assert assessment.breakdown.index == pytest.approx(-5.15343, abs=1e-4)
        assert assessment.score == pytest.approx(0.5747, abs=1e-3)
        assert assessment.display_score == 0.57
        assert assessment.category == RiskCategory.LOW
        assert assessment.recommendations[0] == "Multidisciplinary heart team evaluation"

    def test_very_high_risk(self, euroscore):
        assessment = euroscore.calculate(
            {
                "age": 75,
                "gender": "female",
                "creatinine_clearance": "≤50",
                "lv_function": "poor",
                "nyha_class": "4",
                "pa_pressure": "≥55",
                "urgency": "emergency",
                "procedure_weight": "two_major",
                "critical_preop_state": True,
                "previous_cardiac_surgery": True,
            }
        )
        assert assessment.score == pytest.approx(80.05, abs=0.1)
        assert assessment.category == RiskCategory.VERY_HIGH
        assert "Palliative care consultation" in assessment.recommendations

    def test_risk_factor_raises_mortality(self, euroscore, euroscore_inputs):
        base = euroscore.calculate(euroscore_inputs).score
        with_factor = euroscore.calculate({**euroscore_inputs, "recent_mi": True}).score
        assert with_factor > base

    def test_boundaries_are_strict(self, euroscore):
        table = euroscore.thresholds
        assert table.band_for(1.99).category == RiskCategory.LOW
        assert table.band_for(2).category == RiskCategory.INTERMEDIATE
        assert table.band_for(5).category == RiskCategory.HIGH
        assert table.band_for(10).category == RiskCategory.VERY_HIGH

    def test_choice_validation(self, euroscore, euroscore_inputs):
        result = euroscore.validate({**euroscore_inputs, "urgency": "whenever"})
        assert result.errors["urgency"].code == ErrorCode.INVALID_SELECTION

    def test_extras(self, euroscore, euroscore_inputs):
        assessment = euroscore.calculate(euroscore_inputs)
        assert assessment.extras["linear_predictor"] == assessment.breakdown.index
        assert assessment.extras["sts_comparison"].startswith("Generally correlates")
