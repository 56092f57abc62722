"""HCM Risk-SCD: 5-year risk of sudden cardiac death in hypertrophic
cardiomyopathy (2014 ESC guideline model).

The prognostic index is a polynomial in maximal wall thickness plus linear
terms; the 5-year risk is ``1 - 0.998 ** exp(PI)`` clamped to 0.1-30 %.
"""

import math
from types import MappingProxyType
from typing import Any

from clinical_risk.services.scoring.classification import RiskBand, ThresholdTable
from clinical_risk.services.scoring.instrument import ContinuousFormulaInstrument
from clinical_risk.services.scoring.models import (
    Classification,
    FieldKind,
    FieldSpec,
    RiskCategory,
    ScoreBreakdown,
)
from clinical_risk.services.scoring.recommendations import ConditionalItem, RecommendationCatalog

LOW = RiskCategory.LOW
INTERMEDIATE = RiskCategory.INTERMEDIATE
HIGH = RiskCategory.HIGH

MWT = 0.15939858
MWT_SQUARED = -0.00294271
LA_DIAMETER = 0.0259082
LVOT_GRADIENT = 0.00446131
FAMILY_HISTORY = 0.4583082
NSVT = 0.82639195
SYNCOPE = 0.71650361
AGE = -0.01799934

BASELINE_SURVIVAL = 0.998
MIN_RISK = 0.1
MAX_RISK = 30.0

ICD_RECOMMENDATION = {LOW: "not_indicated", INTERMEDIATE: "consider", HIGH: "reasonable"}

EXCLUSIONS = {
    "prior_scd": "Prior SCD or sustained ventricular arrhythmia: model not applicable, "
    "secondary prevention ICD indicated",
    "prior_icd": "Existing ICD: model not applicable",
    "concurrent_valve_disease": "Significant valvular heart disease: model not validated",
    "infiltrative_disease": "Infiltrative or storage disease (HCM phenocopy): model not validated",
}

CATALOG = RecommendationCatalog(
    baseline=(
        "HCM specialist evaluation and management",
        "Serial clinical and echocardiographic assessment",
        "Family screening and genetic counseling",
    ),
    by_category={
        LOW: (
            "ICD not indicated for primary prevention",
            "Continue medical therapy as indicated",
            "Activity recommendations per guidelines",
            "Reassess risk if clinical status changes",
        ),
        INTERMEDIATE: (
            "Shared decision-making regarding ICD implantation",
            "Consider additional risk stratification (CMR, genetics)",
            "Optimize medical therapy",
            "Detailed discussion of risks and benefits",
            "Annual risk reassessment",
        ),
        HIGH: (
            "ICD implantation reasonable for primary prevention",
            "Electrophysiology consultation recommended",
            "Pre-implant evaluation and optimization",
            "Patient education on device therapy",
            "Ongoing device clinic follow-up",
        ),
    },
    conditional=tuple(ConditionalItem(flag, text) for flag, text in EXCLUSIONS.items()),
)


def prognostic_terms(values: dict[str, Any]) -> dict[str, float]:
    """Per-term contributions to the prognostic index."""
    mwt = values["max_wall_thickness"]
    return {
        "max_wall_thickness": MWT * mwt,
        "max_wall_thickness_squared": MWT_SQUARED * mwt ** 2,
        "la_diameter": LA_DIAMETER * values["la_diameter"],
        "lvot_gradient": LVOT_GRADIENT * values["lvot_gradient"],
        "family_history_scd": FAMILY_HISTORY if values["family_history_scd"] else 0.0,
        "nsvt": NSVT if values["nsvt"] else 0.0,
        "unexplained_syncope": SYNCOPE if values["unexplained_syncope"] else 0.0,
        "age": AGE * values["age"],
    }


def five_year_risk(prognostic_index: float) -> float:
    """Unclamped 5-year SCD probability in percent."""
    return (1 - BASELINE_SURVIVAL ** math.exp(prognostic_index)) * 100


class HCMRiskSCD(ContinuousFormulaInstrument):
    instrument_id = "hcm_risk_scd"
    name = "HCM Risk-SCD"
    description = "5-year sudden cardiac death risk in hypertrophic cardiomyopathy"
    event_rate_label = "5-year SCD risk"
    fields = (
        FieldSpec("age", "Age", FieldKind.NUMBER, unit="years", minimum=16, maximum=100),
        FieldSpec(
            "max_wall_thickness", "Maximal LV wall thickness", FieldKind.NUMBER,
            unit="mm", minimum=5, maximum=50,
        ),
        FieldSpec("la_diameter", "Left atrial diameter", FieldKind.NUMBER, unit="mm", minimum=25, maximum=80),
        FieldSpec(
            "lvot_gradient", "Maximal LVOT gradient", FieldKind.NUMBER,
            unit="mmHg", minimum=0, maximum=300,
            description="Rest or Valsalva, whichever is higher",
        ),
        FieldSpec("family_history_scd", "Family history of SCD", FieldKind.BOOLEAN),
        FieldSpec("nsvt", "Non-sustained VT", FieldKind.BOOLEAN),
        FieldSpec("unexplained_syncope", "Unexplained syncope", FieldKind.BOOLEAN),
        FieldSpec("prior_scd", "Prior SCD or sustained VT", FieldKind.BOOLEAN),
        FieldSpec("prior_icd", "Prior ICD implantation", FieldKind.BOOLEAN),
        FieldSpec("concurrent_valve_disease", "Concurrent valvular heart disease", FieldKind.BOOLEAN),
        FieldSpec("infiltrative_disease", "Infiltrative or storage disease", FieldKind.BOOLEAN),
    )
    thresholds = ThresholdTable(
        (
            RiskBand(
                LOW,
                "Low 5-year SCD risk (<4%). ICD not indicated for primary prevention.",
                upper=4,
                inclusive=False,
            ),
            RiskBand(
                INTERMEDIATE,
                "Intermediate 5-year SCD risk (4-6%). Consider ICD after shared decision-making.",
                upper=6,
                inclusive=False,
            ),
            RiskBand(
                HIGH,
                "High 5-year SCD risk (≥6%). ICD implantation is reasonable for primary prevention.",
            ),
        )
    )
    catalog = CATALOG
    preview_required = ("age", "max_wall_thickness")
    preview_defaults = MappingProxyType({"la_diameter": 35, "lvot_gradient": 0})
    references = (
        "O'Mahony C, et al. Eur Heart J 2014;35(30):2010-20",
        "2014 ESC Guidelines on diagnosis and management of hypertrophic cardiomyopathy",
    )

    def _compute(self, values: dict[str, Any]) -> ScoreBreakdown:
        terms = prognostic_terms(values)
        index = sum(terms.values())
        risk = self.clamp(five_year_risk(index), MIN_RISK, MAX_RISK)
        return ScoreBreakdown(total=risk, components=terms, index=index, additive=False)

    def extras(
        self,
        values: dict[str, Any],
        breakdown: ScoreBreakdown,
        classification: Classification,
    ) -> dict[str, Any]:
        return {
            "prognostic_index": breakdown.index,
            "icd_recommendation": ICD_RECOMMENDATION[classification.category],
            "exclusion_reasons": [text for flag, text in EXCLUSIONS.items() if values[flag]],
        }
