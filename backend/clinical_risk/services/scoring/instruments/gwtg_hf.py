"""Get With The Guidelines - Heart Failure (GWTG-HF) risk score.

Breakpoint lookup tables for age, systolic blood pressure, BUN, sodium and
heart rate, plus race and COPD items. The point total maps to an
in-hospital mortality band.
"""

from types import MappingProxyType
from typing import Any

from clinical_risk.services.scoring.breakpoints import BreakpointTable
from clinical_risk.services.scoring.classification import RiskBand, ThresholdTable
from clinical_risk.services.scoring.instrument import PointTableInstrument
from clinical_risk.services.scoring.models import FieldKind, FieldSpec, FormulaShape, RiskCategory
from clinical_risk.services.scoring.recommendations import RecommendationCatalog

# ============================================================================
# Point tables
# ============================================================================

AGE_TABLE = BreakpointTable(
    "age",
    ((110, 28), (100, 25), (90, 22), (80, 19), (70, 17), (60, 14), (50, 11),
     (40, 8), (30, 6), (20, 3)),
    floor=0,
)

SBP_TABLE = BreakpointTable(
    "systolic_bp",
    ((200, 0), (190, 2), (180, 4), (170, 6), (160, 8), (150, 9), (140, 11),
     (130, 13), (120, 15), (110, 17), (100, 19), (90, 21), (80, 23), (70, 24),
     (60, 26)),
    floor=28,
)

BUN_TABLE = BreakpointTable(
    "bun",
    ((150, 28), (140, 27), (130, 25), (120, 23), (110, 21), (100, 19), (90, 17),
     (80, 15), (70, 13), (60, 11), (50, 9), (40, 8), (30, 6), (20, 4), (10, 2)),
    floor=0,
)

SODIUM_TABLE = BreakpointTable(
    "sodium",
    ((139, 0), (138, 1), (137, 1), (136, 2), (135, 2), (134, 2), (133, 3), (131, 3)),
    floor=4,
)

HEART_RATE_TABLE = BreakpointTable(
    "heart_rate",
    ((105, 8), (100, 6), (95, 5), (90, 4), (85, 3), (80, 1)),
    floor=0,
)

RACE_POINTS = {"black": 0, "other": 3}
COPD_POINTS = 2

# ============================================================================
# Mortality bands
# ============================================================================

LOW = RiskCategory.LOW
INTERMEDIATE = RiskCategory.INTERMEDIATE
HIGH = RiskCategory.HIGH
VERY_HIGH = RiskCategory.VERY_HIGH

THRESHOLDS = ThresholdTable(
    (
        RiskBand(
            LOW,
            "Low risk for in-hospital mortality (<1%). "
            "Standard heart failure management appropriate.",
            upper=33,
            event_rate=1.0,
        ),
        RiskBand(
            INTERMEDIATE,
            "Intermediate risk for in-hospital mortality (1-5%). Enhanced monitoring recommended.",
            upper=50,
            event_rate=2.5,
        ),
        RiskBand(
            HIGH,
            "High risk for in-hospital mortality (>5-10%). "
            "Intensive monitoring and early intervention needed.",
            upper=57,
            event_rate=7.5,
        ),
        RiskBand(
            HIGH,
            "High risk for in-hospital mortality (>10-15%). Intensive monitoring required.",
            upper=61,
            event_rate=12.5,
        ),
        RiskBand(
            VERY_HIGH,
            "Very high risk for in-hospital mortality (>15-20%). ICU-level care recommended.",
            upper=65,
            event_rate=17.5,
        ),
        RiskBand(
            VERY_HIGH,
            "Very high risk for in-hospital mortality (>20-30%). Critical care management required.",
            upper=70,
            event_rate=25.0,
        ),
        RiskBand(
            VERY_HIGH,
            "Very high risk for in-hospital mortality (>30-40%). Urgent intensive management.",
            upper=74,
            event_rate=35.0,
        ),
        RiskBand(
            VERY_HIGH,
            "Very high risk for in-hospital mortality (>40-50%). "
            "Critical condition requiring immediate intervention.",
            upper=78,
            event_rate=45.0,
        ),
        # Published as ">50%"; reported at the bound.
        RiskBand(
            VERY_HIGH,
            "Extremely high risk for in-hospital mortality (>50%). "
            "Palliative care consultation recommended.",
            event_rate=50.0,
        ),
    )
)

CATALOG = RecommendationCatalog(
    baseline=(
        "Optimize guideline-directed medical therapy",
        "Careful fluid balance management with daily weight monitoring",
        "Regular assessment of vital signs and oxygen saturation",
        "Evaluate precipitating factors and triggers",
    ),
    by_category={
        LOW: (
            "Standard heart failure management protocols",
            "Consider early discharge with heart failure education",
            "Outpatient cardiology follow-up within 7-14 days",
            "Medication reconciliation and optimization",
        ),
        INTERMEDIATE: (
            "Enhanced inpatient monitoring with frequent assessments",
            "Consider telemetry monitoring for arrhythmias",
            "Heart failure nurse navigator involvement",
            "Discharge planning with close follow-up within 3-7 days",
            "Consider BNP/NT-proBNP trend monitoring",
        ),
        HIGH: (
            "Intensive monitoring with continuous telemetry",
            "Early cardiology consultation and co-management",
            "Consider ICU-level monitoring if clinically indicated",
            "Palliative care consultation for symptom management",
            "Advance directive discussion",
            "Consider inotropic support as needed",
        ),
        VERY_HIGH: (
            "ICU-level monitoring and care recommended",
            "Immediate advanced heart failure consultation",
            "Consider mechanical circulatory support evaluation",
            "Palliative care consultation for goals of care",
            "Family meetings for end-of-life planning",
            "Consider hospice consultation if appropriate",
            "Multidisciplinary team involvement",
        ),
    },
)


class GWTGHeartFailure(PointTableInstrument):
    instrument_id = "gwtg_hf"
    name = "GWTG-HF Risk Score"
    shape = FormulaShape.BREAKPOINT
    description = "In-hospital mortality in acute heart failure"
    event_rate_label = "In-hospital mortality"
    fields = (
        FieldSpec("age", "Age", FieldKind.INTEGER, unit="years", minimum=18, maximum=120),
        FieldSpec(
            "systolic_bp", "Systolic blood pressure", FieldKind.NUMBER,
            unit="mmHg", minimum=60, maximum=300,
        ),
        FieldSpec("bun", "Blood urea nitrogen", FieldKind.NUMBER, unit="mg/dL", minimum=5, maximum=200),
        FieldSpec("sodium", "Sodium", FieldKind.NUMBER, unit="mEq/L", minimum=115, maximum=160),
        FieldSpec("heart_rate", "Heart rate", FieldKind.NUMBER, unit="bpm", minimum=30, maximum=200),
        FieldSpec(
            "race",
            "Race",
            FieldKind.CHOICE,
            choices=("black", "other"),
            description="Non-Black race adds 3 points",
        ),
        FieldSpec("copd", "COPD", FieldKind.BOOLEAN),
    )
    thresholds = THRESHOLDS
    catalog = CATALOG
    preview_required = ("age", "systolic_bp", "bun")
    preview_defaults = MappingProxyType({"sodium": 140, "heart_rate": 70, "race": "other"})
    references = (
        "Peterson PN, et al. Circ Cardiovasc Qual Outcomes 2010;3(1):25-32",
    )

    def points(self, values: dict[str, Any]) -> dict[str, int]:
        return {
            "age": AGE_TABLE.points(values["age"]),
            "systolic_bp": SBP_TABLE.points(values["systolic_bp"]),
            "bun": BUN_TABLE.points(values["bun"]),
            "sodium": SODIUM_TABLE.points(values["sodium"]),
            "heart_rate": HEART_RATE_TABLE.points(values["heart_rate"]),
            "race": RACE_POINTS[values["race"]],
            "copd": COPD_POINTS if values["copd"] else 0,
        }
