"""TIMI Risk Score for UA/NSTEMI.

Seven one-point criteria. The score maps to a 14-day risk of all-cause
mortality, new or recurrent MI, or severe recurrent ischemia requiring
urgent revascularization.
"""

from types import MappingProxyType
from typing import Any

from clinical_risk.services.scoring.breakpoints import BreakpointTable
from clinical_risk.services.scoring.classification import RiskBand, ThresholdTable
from clinical_risk.services.scoring.instrument import PointTableInstrument
from clinical_risk.services.scoring.models import (
    Classification,
    FieldKind,
    FieldSpec,
    FormulaShape,
    RiskCategory,
    ScoreBreakdown,
)
from clinical_risk.services.scoring.recommendations import RecommendationCatalog

AGE_TABLE = BreakpointTable("age", ((65, 1),), floor=0)
RISK_FACTOR_TABLE = BreakpointTable("cad_risk_factors", ((3, 1),), floor=0)

CRITERIA = (
    "known_cad",
    "aspirin_last_7_days",
    "severe_angina",
    "st_deviation",
    "elevated_markers",
)

# 14-day event rates (%) by score: composite, mortality, MI, urgent revascularization.
EVENT_RATES = {
    0: (4.7, 0.0, 3.5, 1.2),
    1: (4.7, 0.0, 3.5, 1.2),
    2: (8.3, 0.9, 1.8, 6.2),
    3: (13.2, 1.8, 4.0, 9.1),
    4: (19.9, 2.6, 5.9, 14.0),
    5: (26.2, 7.1, 9.7, 15.0),
    6: (40.9, 10.6, 16.7, 27.3),
    7: (40.9, 10.6, 16.7, 27.3),
}

MANAGEMENT_BY_SCORE = {
    0: "Conservative management with medical therapy",
    1: "Conservative management with medical therapy",
    2: "Conservative management with close monitoring",
    3: "Consider early invasive strategy within 24-48 hours",
    4: "Early invasive strategy recommended within 24 hours",
    5: "Urgent invasive strategy within 24 hours",
    6: "Urgent invasive strategy within 12-24 hours",
    7: "Immediate invasive strategy - highest risk",
}


class TIMIRiskScore(PointTableInstrument):
    instrument_id = "timi_ua_nstemi"
    name = "TIMI Risk Score for UA/NSTEMI"
    shape = FormulaShape.ADDITIVE
    description = "14-day risk of death, MI or urgent revascularization in UA/NSTEMI"
    event_rate_label = "14-day composite event rate"
    fields = (
        FieldSpec("age", "Age", FieldKind.INTEGER, unit="years", minimum=18, maximum=120),
        FieldSpec(
            "cad_risk_factors",
            "CAD risk factors",
            FieldKind.INTEGER,
            minimum=0,
            maximum=5,
            description="Family history, hypertension, hypercholesterolemia, diabetes, current smoker",
        ),
        FieldSpec(
            "known_cad",
            "Known CAD (stenosis ≥50%)",
            FieldKind.BOOLEAN,
            description="Prior catheterization showing ≥50% stenosis in any major coronary vessel",
        ),
        FieldSpec("aspirin_last_7_days", "Aspirin use in prior 7 days", FieldKind.BOOLEAN),
        FieldSpec(
            "severe_angina",
            "Severe angina (≥2 episodes in 24h)",
            FieldKind.BOOLEAN,
        ),
        FieldSpec("st_deviation", "ST deviation ≥0.5mm", FieldKind.BOOLEAN),
        FieldSpec(
            "elevated_markers",
            "Elevated cardiac markers",
            FieldKind.BOOLEAN,
            description="Elevated troponin, CK-MB, or other cardiac markers",
        ),
    )
    thresholds = ThresholdTable(
        (
            RiskBand(
                RiskCategory.LOW,
                "Low risk patient with {rate}% 14-day risk of adverse outcomes",
                upper=2,
            ),
            RiskBand(
                RiskCategory.INTERMEDIATE,
                "Intermediate risk patient with {rate}% 14-day risk of adverse outcomes",
                upper=4,
            ),
            RiskBand(
                RiskCategory.HIGH,
                "High risk patient with {rate}% 14-day risk of adverse outcomes",
            ),
        )
    )
    catalog = RecommendationCatalog(
        by_category={
            RiskCategory.LOW: (
                "Conservative management with medical therapy and close monitoring. "
                "Consider early discharge with outpatient follow-up.",
            ),
            RiskCategory.INTERMEDIATE: (
                "Early invasive strategy within 24-48 hours recommended. "
                "Hospitalization with cardiology consultation advised.",
            ),
            RiskCategory.HIGH: (
                "Urgent invasive strategy within 24 hours required. "
                "Immediate cardiology consultation and aggressive medical therapy indicated.",
            ),
        },
    )
    preview_required = ("age",)
    preview_defaults = MappingProxyType({"cad_risk_factors": 0})
    references = ("Antman EM, et al. JAMA 2000;284(7):835-42",)

    def points(self, values: dict[str, Any]) -> dict[str, int]:
        components = {
            "age": AGE_TABLE.points(values["age"]),
            "cad_risk_factors": RISK_FACTOR_TABLE.points(values["cad_risk_factors"]),
        }
        for name in CRITERIA:
            components[name] = 1 if values[name] else 0
        return components

    def classify(self, breakdown: ScoreBreakdown, values: dict[str, Any]) -> Classification:
        score = int(breakdown.total)
        band = self.thresholds.band_for(score)
        composite = EVENT_RATES[score][0]
        return Classification(
            category=band.category,
            interpretation=band.interpretation.format(score=score, rate=composite),
            event_rate=composite,
        )

    def extras(
        self,
        values: dict[str, Any],
        breakdown: ScoreBreakdown,
        classification: Classification,
    ) -> dict[str, Any]:
        score = int(breakdown.total)
        composite, mortality, mi, urgent_revasc = EVENT_RATES[score]
        return {
            "management": MANAGEMENT_BY_SCORE[score],
            "risk_details": {
                "composite": composite,
                "mortality": mortality,
                "myocardial_infarction": mi,
                "urgent_revascularization": urgent_revasc,
            },
        }
