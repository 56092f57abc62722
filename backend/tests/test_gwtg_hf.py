"""Tests for the GWTG-HF risk score."""

import pytest

from clinical_risk.services.scoring import ErrorCode, FormulaShape, InputValidationError, RiskCategory
from clinical_risk.services.scoring.instruments.gwtg_hf import (
    AGE_TABLE,
    BUN_TABLE,
    HEART_RATE_TABLE,
    SBP_TABLE,
    SODIUM_TABLE,
    GWTGHeartFailure,
)


@pytest.fixture
def gwtg():
    return GWTGHeartFailure()


# ============================================================================
# Point Tables
# ============================================================================


class TestGWTGTables:
    """Tests for the published breakpoint tables."""

    def test_age(self):
        assert AGE_TABLE.points(110) == 28
        assert AGE_TABLE.points(69) == 14
        assert AGE_TABLE.points(19) == 0

    def test_systolic_bp(self):
        assert SBP_TABLE.points(60) == 26
        assert SBP_TABLE.points(59) == 28
        assert SBP_TABLE.points(200) == 0

    def test_bun(self):
        assert BUN_TABLE.points(150) == 28
        assert BUN_TABLE.points(9) == 0

    def test_sodium(self):
        assert SODIUM_TABLE.points(139) == 0
        assert SODIUM_TABLE.points(131) == 3
        assert SODIUM_TABLE.points(130) == 4

    def test_heart_rate(self):
        assert HEART_RATE_TABLE.points(79) == 0
        assert HEART_RATE_TABLE.points(80) == 1
        assert HEART_RATE_TABLE.points(105) == 8


# ============================================================================
# Assessment
# ============================================================================


class TestGWTGHeartFailure:
    """Tests for GWTG-HF scoring and classification."""

    def test_definition(self, gwtg):
        assert gwtg.shape == FormulaShape.BREAKPOINT
        assert gwtg.categories == [
            RiskCategory.LOW,
            RiskCategory.INTERMEDIATE,
            RiskCategory.HIGH,
            RiskCategory.VERY_HIGH,
        ]

    def test_low_risk(self, gwtg, gwtg_inputs):
        assessment = gwtg.calculate(gwtg_inputs)
        assert assessment.score == 30
        assert assessment.category == RiskCategory.LOW
        assert assessment.event_rate == 1.0

    def test_extreme_values_reach_top_band(self, gwtg):
        assessment = gwtg.calculate(
            {
                "age": 110,
                "systolic_bp": 60,
                "bun": 150,
                "sodium": 139,
                "heart_rate": 70,
                "race": "black",
                "copd": False,
            }
        )
        assert assessment.breakdown.components["age"] == 28
        assert assessment.breakdown.components["systolic_bp"] == 26
        assert assessment.breakdown.components["bun"] == 28
        assert assessment.breakdown.components["sodium"] == 0
        assert assessment.score == 82
        assert assessment.category == RiskCategory.VERY_HIGH
        assert assessment.event_rate == 50.0
        assert "(>50%)" in assessment.interpretation

    def test_boundary_33_low_34_intermediate(self, gwtg, gwtg_inputs):
        other = gwtg.calculate({**gwtg_inputs, "race": "other"})
        assert other.score == 33
        assert other.category == RiskCategory.LOW

        faster = gwtg.calculate({**gwtg_inputs, "race": "other", "heart_rate": 80})
        assert faster.score == 34
        assert faster.category == RiskCategory.INTERMEDIATE

    def test_band_boundaries(self, gwtg):
        table = gwtg.thresholds
        assert table.band_for(50).category == RiskCategory.INTERMEDIATE
        assert table.band_for(51).category == RiskCategory.HIGH
        assert table.band_for(61).event_rate == 12.5
        assert table.band_for(62).category == RiskCategory.VERY_HIGH
        assert table.band_for(78).event_rate == 45.0
        assert table.band_for(79).event_rate == 50.0

    def test_copd_adds_two(self, gwtg, gwtg_inputs):
        assessment = gwtg.calculate({**gwtg_inputs, "copd": True})
        assert assessment.score == 32
        assert assessment.breakdown.components["copd"] == 2

    def test_components_sum_to_total(self, gwtg, gwtg_inputs):
        breakdown = gwtg.compute_score({**gwtg_inputs, "race": "other", "copd": "yes"})
        assert sum(breakdown.components.values()) == breakdown.total

    def test_race_must_be_selected(self, gwtg, gwtg_inputs):
        inputs = dict(gwtg_inputs)
        del inputs["race"]
        with pytest.raises(InputValidationError) as exc_info:
            gwtg.calculate(inputs)
        assert exc_info.value.result.errors["race"].code == ErrorCode.MISSING_SELECTION

    def test_non_numeric_age_does_not_score(self, gwtg, gwtg_inputs):
        with pytest.raises(InputValidationError) as exc_info:
            gwtg.calculate({**gwtg_inputs, "age": "abc"})
        assert exc_info.value.result.errors["age"].code == ErrorCode.NOT_NUMERIC
        assert exc_info.value.result.first_error_field == "age"

    def test_recommendations(self, gwtg, gwtg_inputs):
        recs = gwtg.calculate(gwtg_inputs).recommendations
        assert recs[0] == "Optimize guideline-directed medical therapy"
        assert "Standard heart failure management protocols" in recs
