"""Tests for threshold tables and risk bands."""

import pytest

from clinical_risk.services.scoring import RiskCategory
from clinical_risk.services.scoring.classification import RiskBand, ThresholdTable

LOW = RiskCategory.LOW
INTERMEDIATE = RiskCategory.INTERMEDIATE
HIGH = RiskCategory.HIGH


class TestRiskBand:
    """Tests for single band membership."""

    def test_inclusive_upper(self):
        band = RiskBand(LOW, "low", upper=2)
        assert band.contains(2)
        assert not band.contains(2.01)

    def test_exclusive_upper(self):
        band = RiskBand(LOW, "low", upper=4, inclusive=False)
        assert band.contains(3.99)
        assert not band.contains(4)

    def test_catch_all(self):
        assert RiskBand(HIGH, "high").contains(1e9)


class TestThresholdTable:
    """Tests for ThresholdTable construction and lookup."""

    def setup_method(self):
        self.table = ThresholdTable(
            (
                RiskBand(LOW, "Low (Score: {score})", upper=0),
                RiskBand(INTERMEDIATE, "Intermediate (Score: {score})", upper=1),
                RiskBand(HIGH, "High (Score: {score}, {rate}%)", event_rate=12.5),
            )
        )

    def test_categories_in_order(self):
        assert self.table.categories == [LOW, INTERMEDIATE, HIGH]

    def test_categories_deduplicated(self):
        table = ThresholdTable(
            (
                RiskBand(LOW, "a", upper=1),
                RiskBand(HIGH, "b", upper=2),
                RiskBand(HIGH, "c"),
            )
        )
        assert table.categories == [LOW, HIGH]

    def test_boundaries(self):
        assert self.table.band_for(-3).category == LOW
        assert self.table.band_for(0).category == LOW
        assert self.table.band_for(1).category == INTERMEDIATE
        assert self.table.band_for(2).category == HIGH

    def test_classify_formats_score(self):
        classification = self.table.classify(1)
        assert classification.category == INTERMEDIATE
        assert classification.interpretation == "Intermediate (Score: 1)"
        assert classification.event_rate is None

    def test_classify_formats_rate(self):
        classification = self.table.classify(5)
        assert classification.interpretation == "High (Score: 5, 12.5%)"
        assert classification.event_rate == 12.5

    def test_classify_uses_display_value(self):
        table = ThresholdTable((RiskBand(LOW, "{score}%", upper=4, inclusive=False), RiskBand(HIGH, "x")))
        assert table.classify(2.5873, display=2.59).interpretation == "2.59%"

    def test_every_value_lands_in_exactly_one_band(self):
        for tenth in range(-50, 50):
            value = tenth / 10
            matching = [band for band in self.table.bands if band.contains(value)]
            assert self.table.band_for(value) is matching[0]

    def test_requires_catch_all(self):
        with pytest.raises(ValueError, match="catch-all"):
            ThresholdTable((RiskBand(LOW, "low", upper=1),))

    def test_requires_ascending(self):
        with pytest.raises(ValueError, match="ascending"):
            ThresholdTable(
                (
                    RiskBand(LOW, "a", upper=5),
                    RiskBand(INTERMEDIATE, "b", upper=2),
                    RiskBand(HIGH, "c"),
                )
            )

    def test_requires_bands(self):
        with pytest.raises(ValueError):
            ThresholdTable(())
