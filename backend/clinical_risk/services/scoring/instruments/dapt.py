"""DAPT Score.

Additive point table estimating the benefit of extending dual antiplatelet
therapy beyond 12 months after PCI. Guidance depends on the score band and
on the patient's age band, which drives bleeding risk.
"""

from types import MappingProxyType
from typing import Any

from clinical_risk.services.scoring.breakpoints import BelowTable, BreakpointTable
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

AGE_TABLE = BreakpointTable("age", ((75, -2), (65, -1)), floor=0)
STENT_TABLE = BelowTable("stent_diameter", ((3.0, 1),), ceiling=0)

ONE_POINT_FACTORS = (
    "cigarette_smoking",
    "diabetes",
    "mi_at_presentation",
    "prior_pci_or_mi",
    "paclitaxel_stent",
)
TWO_POINT_FACTORS = ("chf_or_low_lvef", "vein_graft_pci")

AGE_UNDER_65 = "age_under_65"
AGE_65_TO_74 = "age_65_to_74"
AGE_75_OR_OVER = "age_75_or_over"
SMALL_VESSEL = "small_vessel"

# Absolute MACE reduction with extended DAPT by benefit band (%).
ISCHEMIC_REDUCTION = {HIGH: 1.4, INTERMEDIATE: 0.8, LOW: 0.4}
# Absolute major bleeding increase by age band (%).
BLEEDING_INCREASE = {AGE_UNDER_65: 0.3, AGE_65_TO_74: 0.6, AGE_75_OR_OVER: 1.2}
BLEEDING_RISK = {AGE_UNDER_65: "low", AGE_65_TO_74: "intermediate", AGE_75_OR_OVER: "high"}

# (benefit band, age band) -> (net benefit, net clinical benefit text)
NET_BENEFIT = {
    (HIGH, AGE_UNDER_65): (
        "favorable",
        "Strong net clinical benefit - ischemic risk reduction substantially "
        "outweighs bleeding risk",
    ),
    (HIGH, AGE_65_TO_74): ("uncertain", "Modest net clinical benefit with careful patient selection"),
    (HIGH, AGE_75_OR_OVER): ("unfavorable", "Net clinical harm - bleeding risk outweighs ischemic benefit"),
    (INTERMEDIATE, AGE_UNDER_65): (
        "uncertain",
        "Modest benefit with uncertainty - individualized assessment recommended",
    ),
    (INTERMEDIATE, AGE_65_TO_74): (
        "uncertain",
        "Neutral net benefit - requires careful individual consideration",
    ),
    (INTERMEDIATE, AGE_75_OR_OVER): (
        "unfavorable",
        "Unfavorable balance - bleeding risk likely outweighs benefit",
    ),
    (LOW, AGE_UNDER_65): ("unfavorable", "Neutral to unfavorable - limited ischemic benefit"),
    (LOW, AGE_65_TO_74): (
        "unfavorable",
        "Net harm in elderly - high bleeding risk with limited ischemic benefit",
    ),
    (LOW, AGE_75_OR_OVER): (
        "unfavorable",
        "Net harm in elderly - high bleeding risk with limited ischemic benefit",
    ),
}


def _age_band(age: float) -> str:
    if age >= 75:
        return AGE_75_OR_OVER
    if age >= 65:
        return AGE_65_TO_74
    return AGE_UNDER_65


def _banded(category: RiskCategory, flag: str, *texts: str) -> tuple[ConditionalItem, ...]:
    return tuple(ConditionalItem(flag, text, frozenset({category})) for text in texts)


CATALOG = RecommendationCatalog(
    baseline=("Apply after 12 months of event-free DAPT to guide continuation",),
    by_category={
        LOW: (
            "Extended DAPT not recommended - limited ischemic benefit",
            "Standard 12 months or shorter if high bleeding risk",
        ),
    },
    conditional=(
        *_banded(
            HIGH,
            AGE_UNDER_65,
            "Extended DAPT strongly recommended - high ischemic benefit with acceptable bleeding risk",
            "Consider 18-30 months of DAPT with close monitoring",
        ),
        *_banded(
            HIGH,
            AGE_65_TO_74,
            "Extended DAPT may provide benefit - consider individualized assessment",
            "Consider 18 months with enhanced bleeding monitoring",
        ),
        *_banded(
            HIGH,
            AGE_75_OR_OVER,
            "Extended DAPT not recommended due to excessive bleeding risk",
            "Standard 12 months, consider early discontinuation if bleeding occurs",
        ),
        *_banded(
            INTERMEDIATE,
            AGE_UNDER_65,
            "Individualized assessment recommended - benefits and risks are balanced",
            "12-18 months based on individualized risk assessment",
        ),
        *_banded(
            INTERMEDIATE,
            AGE_65_TO_74,
            "Careful consideration needed - uncertain net benefit",
            "Standard 12 months unless compelling rationale for extension",
        ),
        *_banded(
            INTERMEDIATE,
            AGE_75_OR_OVER,
            "Extended DAPT not recommended - unfavorable risk-benefit ratio",
            "Standard 12 months with early discontinuation consideration",
        ),
        ConditionalItem(AGE_75_OR_OVER, "Advanced age (≥75 years) significantly increases bleeding risk"),
        ConditionalItem(AGE_65_TO_74, "Moderate age-related bleeding risk (65-74 years)"),
        ConditionalItem("diabetes", "Diabetes increases both ischemic and bleeding risk"),
        ConditionalItem("mi_at_presentation", "Recent MI increases ischemic risk and DAPT benefit"),
        ConditionalItem(SMALL_VESSEL, "Small vessel PCI (<3mm) increases risk of stent thrombosis"),
        ConditionalItem("chf_or_low_lvef", "Heart failure increases both ischemic and bleeding risk"),
        ConditionalItem("paclitaxel_stent", "Paclitaxel-eluting stents may benefit from extended DAPT"),
        ConditionalItem(
            "vein_graft_pci",
            "Vein graft PCI has unique risk profile requiring individualized approach",
        ),
    ),
)


class DAPTScore(PointTableInstrument):
    instrument_id = "dapt"
    name = "DAPT Score"
    shape = FormulaShape.ADDITIVE
    description = "Benefit of dual antiplatelet therapy beyond 12 months after PCI"
    fields = (
        FieldSpec("age", "Age", FieldKind.INTEGER, unit="years", minimum=18, maximum=120),
        FieldSpec(
            "stent_diameter",
            "Stent diameter",
            FieldKind.NUMBER,
            unit="mm",
            minimum=1,
            maximum=10,
            description="Smallest stent diameter used during PCI",
        ),
        FieldSpec(
            "cigarette_smoking",
            "Cigarette smoking",
            FieldKind.BOOLEAN,
            description="Current smoker or quit within past year",
        ),
        FieldSpec("diabetes", "Diabetes mellitus", FieldKind.BOOLEAN),
        FieldSpec(
            "mi_at_presentation",
            "MI at presentation",
            FieldKind.BOOLEAN,
            description="STEMI or NSTEMI as indication for current PCI",
        ),
        FieldSpec("prior_pci_or_mi", "Prior PCI or MI", FieldKind.BOOLEAN),
        FieldSpec("paclitaxel_stent", "Paclitaxel-eluting stent", FieldKind.BOOLEAN),
        FieldSpec("chf_or_low_lvef", "CHF or LVEF <30%", FieldKind.BOOLEAN),
        FieldSpec(
            "vein_graft_pci",
            "Vein graft PCI",
            FieldKind.BOOLEAN,
            description="PCI performed on saphenous vein graft",
        ),
    )
    thresholds = ThresholdTable(
        (
            RiskBand(
                LOW,
                "Low benefit patient (Score: {score}) - Extended DAPT may be harmful",
                upper=0,
            ),
            RiskBand(
                INTERMEDIATE,
                "Intermediate benefit patient (Score: {score}) - Consider extended DAPT",
                upper=1,
            ),
            RiskBand(
                HIGH,
                "High benefit patient (Score: {score}) - Extended DAPT likely beneficial",
            ),
        )
    )
    catalog = CATALOG
    preview_required = ("age",)
    preview_defaults = MappingProxyType({"stent_diameter": 3.0})
    references = (
        "Yeh RW, et al. JAMA 2016;315(16):1735-49",
        "Levine GN, et al. 2016 ACC/AHA Guideline Focused Update on DAPT",
    )

    def points(self, values: dict[str, Any]) -> dict[str, int]:
        components = {
            "age": AGE_TABLE.points(values["age"]),
            "stent_diameter": STENT_TABLE.points(values["stent_diameter"]),
        }
        for name in ONE_POINT_FACTORS:
            components[name] = 1 if values[name] else 0
        for name in TWO_POINT_FACTORS:
            components[name] = 2 if values[name] else 0
        return components

    def flags(self, values: dict[str, Any]) -> set[str]:
        flags = super().flags(values)
        flags.add(_age_band(values["age"]))
        if values["stent_diameter"] < 3:
            flags.add(SMALL_VESSEL)
        return flags

    def extras(
        self,
        values: dict[str, Any],
        breakdown: ScoreBreakdown,
        classification: Classification,
    ) -> dict[str, Any]:
        band = _age_band(values["age"])
        net_benefit, net_text = NET_BENEFIT[(classification.category, band)]
        ischemic = ISCHEMIC_REDUCTION[classification.category]
        bleeding = BLEEDING_INCREASE[band]
        return {
            "ischemic_benefit": classification.category.value,
            "bleeding_risk": BLEEDING_RISK[band],
            "net_benefit": net_benefit,
            "net_clinical_benefit": net_text,
            "ischemic_reduction_percent": ischemic,
            "bleeding_increase_percent": bleeding,
            "net_benefit_percent": round(ischemic - bleeding, 1),
        }
