"""EuroSCORE II predicted in-hospital mortality after cardiac surgery.

Logistic model: ``y = b0 + sum(b_i * x_i)`` and mortality
``e^y / (1 + e^y)``.
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
from clinical_risk.services.scoring.recommendations import RecommendationCatalog

LOW = RiskCategory.LOW
INTERMEDIATE = RiskCategory.INTERMEDIATE
HIGH = RiskCategory.HIGH
VERY_HIGH = RiskCategory.VERY_HIGH

INTERCEPT = -5.324537
AGE = 0.0285181

BOOLEAN_COEFFICIENTS = {
    "insulin_diabetes": 0.3542749,
    "chronic_pulmonary_disease": 0.1886564,
    "poor_mobility": 0.2407181,
    "critical_preop_state": 1.086517,
    "ccs_class_4_angina": 0.2226147,
    "extracardiac_arteriopathy": 0.5360268,
    "previous_cardiac_surgery": 1.118599,
    "active_endocarditis": 0.6194522,
    "recent_mi": 0.1528943,
    "thoracic_aorta_surgery": 0.6527205,
}

CHOICE_COEFFICIENTS = {
    "gender": {"male": 0.0, "female": 0.2196434},
    "creatinine_clearance": {">85": 0.0, "51-85": 0.303553, "≤50": 0.8592256, "dialysis": 0.6421508},
    "lv_function": {"good": 0.0, "moderate": 0.3150652, "poor": 0.8084096, "very_poor": 0.9346919},
    "nyha_class": {"1": 0.0, "2": 0.1070545, "3": 0.2958358, "4": 0.5597929},
    "pa_pressure": {"<31": 0.0, "31-54": 0.1788899, "≥55": 0.3491475},
    "urgency": {"elective": 0.0, "urgent": 0.3174673, "emergency": 0.7039121, "salvage": 1.362947},
    "procedure_weight": {
        "isolated_cabg": 0.0,
        "isolated_non_cabg": 0.0062118,
        "two_major": 0.5521478,
        "three_plus_major": 0.9724533,
    },
}

STS_COMPARISON = {
    LOW: "Generally correlates with STS low risk (<2%). "
    "Both models support standard surgical approach.",
    INTERMEDIATE: "Similar to STS intermediate risk (2-5%). "
    "Enhanced monitoring and optimization recommended.",
    HIGH: "Comparable to STS high risk (5-10%). Consider heart team evaluation and alternatives.",
    VERY_HIGH: "Aligns with STS very high risk (>10%). "
    "Strong consideration for non-surgical options.",
}


def age_term(age: float) -> float:
    """Age enters as 1 up to 60 years, then one unit per year over 59."""
    return 1.0 if age <= 60 else age - 59


def linear_predictor_terms(values: dict[str, Any]) -> dict[str, float]:
    terms = {"intercept": INTERCEPT, "age": AGE * age_term(values["age"])}
    for name, weights in CHOICE_COEFFICIENTS.items():
        terms[name] = weights[values[name]]
    for name, coefficient in BOOLEAN_COEFFICIENTS.items():
        terms[name] = coefficient if values[name] else 0.0
    return terms


def logistic_mortality(y: float) -> float:
    """Predicted mortality in percent."""
    return math.exp(y) / (1 + math.exp(y)) * 100


def _choice(name: str, label: str, description: str = "") -> FieldSpec:
    return FieldSpec(
        name, label, FieldKind.CHOICE,
        choices=tuple(CHOICE_COEFFICIENTS[name]), description=description,
    )


class EuroSCOREII(ContinuousFormulaInstrument):
    instrument_id = "euroscore_ii"
    name = "EuroSCORE II"
    description = "Predicted in-hospital mortality after cardiac surgery"
    event_rate_label = "Predicted operative mortality"
    fields = (
        FieldSpec("age", "Age", FieldKind.INTEGER, unit="years", minimum=18, maximum=120),
        _choice("gender", "Gender"),
        _choice("creatinine_clearance", "Creatinine clearance", "mL/min (Cockcroft-Gault)"),
        _choice("lv_function", "LV function", "good >50%, moderate 31-50%, poor 21-30%, very poor ≤20%"),
        _choice("nyha_class", "NYHA class"),
        _choice("pa_pressure", "Pulmonary artery systolic pressure", "mmHg"),
        _choice("urgency", "Urgency"),
        _choice("procedure_weight", "Weight of procedure"),
        FieldSpec("insulin_diabetes", "Diabetes on insulin", FieldKind.BOOLEAN),
        FieldSpec("chronic_pulmonary_disease", "Chronic pulmonary dysfunction", FieldKind.BOOLEAN),
        FieldSpec("poor_mobility", "Poor mobility", FieldKind.BOOLEAN),
        FieldSpec("critical_preop_state", "Critical preoperative state", FieldKind.BOOLEAN),
        FieldSpec("ccs_class_4_angina", "CCS class 4 angina", FieldKind.BOOLEAN),
        FieldSpec("extracardiac_arteriopathy", "Extracardiac arteriopathy", FieldKind.BOOLEAN),
        FieldSpec("previous_cardiac_surgery", "Previous cardiac surgery", FieldKind.BOOLEAN),
        FieldSpec("active_endocarditis", "Active endocarditis", FieldKind.BOOLEAN),
        FieldSpec("recent_mi", "Recent MI (≤90 days)", FieldKind.BOOLEAN),
        FieldSpec("thoracic_aorta_surgery", "Surgery on thoracic aorta", FieldKind.BOOLEAN),
    )
    thresholds = ThresholdTable(
        (
            RiskBand(LOW, "Low operative risk (EuroSCORE II <2%)", upper=2, inclusive=False),
            RiskBand(
                INTERMEDIATE,
                "Intermediate operative risk (EuroSCORE II 2-5%)",
                upper=5,
                inclusive=False,
            ),
            RiskBand(HIGH, "High operative risk (EuroSCORE II 5-10%)", upper=10, inclusive=False),
            RiskBand(VERY_HIGH, "Very high operative risk (EuroSCORE II >10%)"),
        )
    )
    catalog = RecommendationCatalog(
        baseline=(
            "Multidisciplinary heart team evaluation",
            "Pre-operative optimization as indicated",
            "Patient and family counseling on risks",
        ),
        by_category={
            LOW: (
                "Standard surgical approach appropriate",
                "Consider fast-track protocols",
                "Routine post-operative care",
            ),
            INTERMEDIATE: (
                "Enhanced pre-operative assessment",
                "Consider additional imaging studies",
                "Standard ICU monitoring",
                "Review for risk factor modification",
            ),
            HIGH: (
                "Consider alternative approaches (TAVI, medical therapy)",
                "Extensive pre-operative optimization",
                "Extended ICU monitoring planned",
                "Detailed informed consent discussion",
                "Consider less invasive alternatives",
            ),
            VERY_HIGH: (
                "Strongly consider non-surgical alternatives",
                "Palliative care consultation",
                "Goals of care discussion",
                "If surgery pursued, high-risk protocols",
                "Consider transcatheter approaches",
                "Family meeting essential",
            ),
        },
    )
    preview_required = ("age", "gender")
    preview_defaults = MappingProxyType(
        {
            "creatinine_clearance": ">85",
            "lv_function": "good",
            "nyha_class": "1",
            "pa_pressure": "<31",
            "urgency": "elective",
            "procedure_weight": "isolated_cabg",
        }
    )
    references = (
        "Nashef SA, et al. Eur J Cardiothorac Surg 2012;41(4):734-44",
    )

    def _compute(self, values: dict[str, Any]) -> ScoreBreakdown:
        terms = linear_predictor_terms(values)
        y = sum(terms.values())
        mortality = self.clamp(logistic_mortality(y), 0.0, 100.0)
        return ScoreBreakdown(total=mortality, components=terms, index=y, additive=False)

    def extras(
        self,
        values: dict[str, Any],
        breakdown: ScoreBreakdown,
        classification: Classification,
    ) -> dict[str, Any]:
        return {
            "linear_predictor": breakdown.index,
            "sts_comparison": STS_COMPARISON[classification.category],
        }
