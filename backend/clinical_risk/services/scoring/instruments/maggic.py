"""MAGGIC risk score for chronic heart failure.

Integer points from breakpoint tables. Systolic blood pressure and age are
scored from tables selected by the ejection fraction band. The total is
converted to 1- and 3-year mortality by linear interpolation through the
published anchor points, and the 1-year figure drives the category.
"""

from types import MappingProxyType
from typing import Any

from clinical_risk.services.scoring.breakpoints import BelowTable, BreakpointTable, interpolate
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
from clinical_risk.services.scoring.recommendations import ConditionalItem, RecommendationCatalog

LOW = RiskCategory.LOW
INTERMEDIATE = RiskCategory.INTERMEDIATE
HIGH = RiskCategory.HIGH
VERY_HIGH = RiskCategory.VERY_HIGH

EF_TABLE = BelowTable("lvef", ((20, 7), (25, 6), (30, 5), (35, 3), (40, 2)), ceiling=0)
BMI_TABLE = BelowTable("bmi", ((15, 6), (20, 5), (25, 3), (30, 2)), ceiling=0)
CREATININE_TABLE = BreakpointTable(
    "creatinine",
    ((250, 8), (210, 6), (170, 5), (150, 4), (130, 3), (110, 2), (90, 1)),
    floor=0,
)
NYHA_POINTS = {"1": 0, "2": 2, "3": 6, "4": 8}

# EF band -> table. Bands are EF < 30, 30 <= EF < 40 and EF >= 40.
SBP_BY_EF = {
    "ef_below_30": BelowTable("systolic_bp", ((110, 5), (120, 4), (130, 3), (140, 2), (150, 1))),
    "ef_30_39": BelowTable("systolic_bp", ((110, 3), (120, 2), (130, 1), (140, 1))),
    "ef_40_plus": BelowTable("systolic_bp", ((110, 2), (120, 1), (130, 1))),
}
AGE_BY_EF = {
    "ef_below_30": BreakpointTable("age", ((80, 10), (75, 8), (70, 6), (65, 4), (60, 2), (55, 1))),
    "ef_30_39": BreakpointTable("age", ((80, 13), (75, 10), (70, 8), (65, 6), (60, 4), (55, 2))),
    "ef_40_plus": BreakpointTable("age", ((80, 15), (75, 12), (70, 9), (65, 7), (60, 5), (55, 3))),
}

BOOLEAN_POINTS = {
    "diabetes": 3,
    "copd": 2,
    "current_smoker": 1,
    "first_diagnosis_18_months": 2,
}
NO_BETA_BLOCKER_POINTS = 3
NO_ACE_INHIBITOR_POINTS = 1
MALE_POINTS = 1

MAX_SCORE = 50
ONE_YEAR_MORTALITY = (
    (0, 1.2), (8, 3.2), (12, 4.8), (15, 6.3), (16, 7.0), (19, 9.3), (20, 11.2),
    (25, 18.5), (30, 28.5), (35, 41.2), (40, 56.8), (45, 72.5), (50, 84.2),
)
THREE_YEAR_MORTALITY = (
    (0, 3.2), (8, 8.4), (12, 12.2), (15, 16.0), (16, 17.5), (19, 22.7), (20, 26.8),
    (25, 42.1), (30, 58.2), (35, 71.8), (40, 82.5), (45, 89.2), (50, 93.8),
)


def ef_band(lvef: float) -> str:
    if lvef < 30:
        return "ef_below_30"
    if lvef < 40:
        return "ef_30_39"
    return "ef_40_plus"


def mortality(anchors: tuple[tuple[float, float], ...], score: float) -> float:
    """Interpolated mortality (%) for a point total clamped to 0-50."""
    return interpolate(anchors, max(0, min(MAX_SCORE, score)))


CATALOG = RecommendationCatalog(
    baseline=(
        "Optimize guideline-directed heart failure therapy",
        "Regular heart failure follow-up with symptom and weight review",
    ),
    by_category={
        LOW: ("Continue current management with routine outpatient follow-up",),
        INTERMEDIATE: ("Review therapy optimization and adherence at each visit",),
        HIGH: (
            "Consider advanced heart failure therapies",
            "Frequent clinical monitoring and follow-up",
            "Heart failure education and self-management",
        ),
        VERY_HIGH: (
            "Consider advanced heart failure therapies",
            "Frequent clinical monitoring and follow-up",
            "Heart failure education and self-management",
            "Consider referral to advanced heart failure specialist",
            "Evaluate for cardiac resynchronization therapy or ICD",
        ),
    },
    conditional=(
        ConditionalItem("no_beta_blocker", "Initiate evidence-based beta-blocker therapy"),
        ConditionalItem("no_ace_inhibitor", "Consider ACE inhibitor or ARB therapy"),
        ConditionalItem("diabetes", "Optimize diabetes management and glucose control"),
        ConditionalItem("copd", "Coordinate pulmonary and cardiac care"),
    ),
)


class MAGGICScore(PointTableInstrument):
    instrument_id = "maggic"
    name = "MAGGIC Heart Failure Risk Score"
    shape = FormulaShape.BREAKPOINT
    description = "1- and 3-year mortality in chronic heart failure"
    event_rate_label = "1-year mortality"
    fields = (
        FieldSpec("age", "Age", FieldKind.INTEGER, unit="years", minimum=18, maximum=100),
        FieldSpec("gender", "Gender", FieldKind.CHOICE, choices=("male", "female")),
        FieldSpec("lvef", "LV ejection fraction", FieldKind.NUMBER, unit="%", minimum=5, maximum=80),
        FieldSpec("nyha_class", "NYHA class", FieldKind.CHOICE, choices=("1", "2", "3", "4")),
        FieldSpec(
            "systolic_bp", "Systolic blood pressure", FieldKind.NUMBER,
            unit="mmHg", minimum=60, maximum=250,
        ),
        FieldSpec("bmi", "BMI", FieldKind.NUMBER, unit="kg/m²", minimum=10, maximum=60),
        FieldSpec(
            "creatinine", "Creatinine", FieldKind.NUMBER, unit="µmol/L", minimum=50, maximum=500,
        ),
        FieldSpec("diabetes", "Diabetes", FieldKind.BOOLEAN),
        FieldSpec("copd", "COPD", FieldKind.BOOLEAN),
        FieldSpec("current_smoker", "Current smoker", FieldKind.BOOLEAN),
        FieldSpec(
            "first_diagnosis_18_months",
            "Heart failure diagnosed ≥18 months ago",
            FieldKind.BOOLEAN,
        ),
        FieldSpec("beta_blocker", "On beta-blocker", FieldKind.BOOLEAN),
        FieldSpec("ace_inhibitor", "On ACE inhibitor or ARB", FieldKind.BOOLEAN),
    )
    thresholds = ThresholdTable(
        (
            RiskBand(LOW, "Low mortality risk in chronic heart failure", upper=10, inclusive=False),
            RiskBand(
                INTERMEDIATE,
                "Intermediate mortality risk in chronic heart failure",
                upper=20,
                inclusive=False,
            ),
            RiskBand(HIGH, "High mortality risk in chronic heart failure", upper=35, inclusive=False),
            RiskBand(VERY_HIGH, "Very high mortality risk in chronic heart failure"),
        )
    )
    catalog = CATALOG
    preview_required = ("age", "lvef")
    preview_defaults = MappingProxyType(
        {
            "gender": "female",
            "nyha_class": "1",
            "systolic_bp": 130,
            "bmi": 30,
            "creatinine": 80,
        }
    )
    references = (
        "Pocock SJ, et al. Eur Heart J 2013;34(19):1404-13",
    )

    def points(self, values: dict[str, Any]) -> dict[str, int]:
        band = ef_band(values["lvef"])
        components = {
            "age": AGE_BY_EF[band].points(values["age"]),
            "gender": MALE_POINTS if values["gender"] == "male" else 0,
            "lvef": EF_TABLE.points(values["lvef"]),
            "nyha_class": NYHA_POINTS[values["nyha_class"]],
            "systolic_bp": SBP_BY_EF[band].points(values["systolic_bp"]),
            "bmi": BMI_TABLE.points(values["bmi"]),
            "creatinine": CREATININE_TABLE.points(values["creatinine"]),
        }
        for name, points in BOOLEAN_POINTS.items():
            components[name] = points if values[name] else 0
        components["beta_blocker"] = 0 if values["beta_blocker"] else NO_BETA_BLOCKER_POINTS
        components["ace_inhibitor"] = 0 if values["ace_inhibitor"] else NO_ACE_INHIBITOR_POINTS
        return components

    def classification_value(self, breakdown: ScoreBreakdown, values: dict[str, Any]) -> float:
        return mortality(ONE_YEAR_MORTALITY, breakdown.total)

    def classify(self, breakdown: ScoreBreakdown, values: dict[str, Any]) -> Classification:
        one_year = self.classification_value(breakdown, values)
        band = self.thresholds.band_for(one_year)
        return Classification(
            category=band.category,
            interpretation=band.interpretation,
            event_rate=round(one_year, 1),
        )

    def flags(self, values: dict[str, Any]) -> set[str]:
        flags = super().flags(values)
        if not values["beta_blocker"]:
            flags.add("no_beta_blocker")
        if not values["ace_inhibitor"]:
            flags.add("no_ace_inhibitor")
        return flags

    def extras(
        self,
        values: dict[str, Any],
        breakdown: ScoreBreakdown,
        classification: Classification,
    ) -> dict[str, Any]:
        return {
            "ef_band": ef_band(values["lvef"]),
            "one_year_mortality": round(mortality(ONE_YEAR_MORTALITY, breakdown.total), 1),
            "three_year_mortality": round(mortality(THREE_YEAR_MORTALITY, breakdown.total), 1),
        }
