"""Plain-text rendering of an assessment.

The text is opaque to the engine; callers forward it as-is, for example
into a chat transcript.
"""

from typing import TYPE_CHECKING, Any

from clinical_risk.services.scoring.models import FieldKind, FieldSpec, RiskAssessment

if TYPE_CHECKING:
    from clinical_risk.services.scoring.instrument import Instrument


def category_label(assessment: RiskAssessment) -> str:
    return assessment.category.value.replace("_", " ").title()


def _format_value(spec: FieldSpec, value: Any) -> str:
    if spec.kind == FieldKind.BOOLEAN:
        return "yes" if value else "no"
    if spec.is_numeric:
        number = f"{value:g}" if isinstance(value, float) else str(value)
        return f"{number} {spec.unit}".strip()
    return str(value)


def format_summary(assessment: RiskAssessment, instrument: "Instrument") -> str:
    """Render ``assessment`` as plain text.

    Unchecked boolean inputs are omitted to keep the summary short.
    """
    lines = [f"{assessment.instrument_name} ({assessment.instrument_id})"]
    if assessment.is_preview:
        lines.append("Preliminary estimate from incomplete inputs")

    lines.append(f"Score: {assessment.display_score} {assessment.score_unit}")
    lines.append(f"Risk category: {category_label(assessment)}")
    if assessment.event_rate is not None:
        lines.append(f"{assessment.event_rate_label}: {assessment.event_rate:g}%")
    lines.append(f"Interpretation: {assessment.interpretation}")

    lines.append("")
    lines.append("Inputs:")
    for spec in instrument.fields:
        if spec.name not in assessment.inputs:
            continue
        value = assessment.inputs[spec.name]
        if spec.kind == FieldKind.BOOLEAN and not value:
            continue
        lines.append(f"- {spec.label}: {_format_value(spec, value)}")

    lines.append("")
    lines.append("Recommendations:")
    for number, text in enumerate(assessment.recommendations, start=1):
        lines.append(f"{number}. {text}")

    return "\n".join(lines)
