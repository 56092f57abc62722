"""Live preview of an incomplete input record.

A preview runs as soon as an instrument's minimum field subset is present.
Every other field that is missing or unparseable takes the instrument's
named preview default, and out-of-range numbers are clamped into the
field's validation range. The result is approximate and never cached.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from clinical_risk.services.scoring.models import FieldKind, FieldSpec
from clinical_risk.services.scoring.validation import is_blank, parse_bool, parse_number

if TYPE_CHECKING:
    from clinical_risk.services.scoring.instrument import Instrument


def _lenient_value(spec: FieldSpec, raw: Any) -> Any:
    """Parse ``raw`` for preview purposes, or return None when unusable."""
    if is_blank(raw):
        return None

    if spec.is_numeric:
        try:
            number = parse_number(raw)
        except ValueError:
            return None
        if spec.minimum is not None:
            number = max(spec.minimum, number)
        if spec.maximum is not None:
            number = min(spec.maximum, number)
        return int(round(number)) if spec.kind == FieldKind.INTEGER else number

    if spec.kind == FieldKind.CHOICE:
        choice = str(raw).strip()
        return choice if choice in spec.choices else None

    try:
        return parse_bool(raw)
    except ValueError:
        return None


def preview_values(instrument: "Instrument", partial: Mapping[str, Any]) -> dict[str, Any] | None:
    """Build a complete normalized record from ``partial``.

    Returns:
        The filled-in record, or None when any field of the instrument's
        minimum subset is missing or unparseable.
    """
    values: dict[str, Any] = {}
    for spec in instrument.fields:
        value = _lenient_value(spec, partial.get(spec.name))
        if value is None:
            if spec.name in instrument.preview_required:
                return None
            if spec.kind == FieldKind.BOOLEAN:
                value = False
            else:
                value = instrument.preview_defaults[spec.name]
        values[spec.name] = value
    return values
