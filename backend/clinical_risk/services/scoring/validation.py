"""Field validation for instrument input records.

Validation is a pure function of the input record and the instrument's
field schema. It never stops at the first problem: the full error map is
returned so a form can show every invalid field at once.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from clinical_risk.services.scoring.models import (
    ErrorCode,
    FieldError,
    FieldKind,
    FieldSpec,
    ValidationResult,
)

logger = logging.getLogger(__name__)

TRUE_STRINGS = frozenset({"true", "yes", "1", "on", "y"})
FALSE_STRINGS = frozenset({"false", "no", "0", "off", "n"})


def is_blank(value: Any) -> bool:
    """True for values a form would submit for an untouched field."""
    return value is None or (isinstance(value, str) and not value.strip())


def parse_number(value: Any) -> float:
    """Parse a numeric input value.

    Raises:
        ValueError: If the value is not a finite number. Booleans are
            rejected even though ``bool`` is an ``int`` subclass.
    """
    if isinstance(value, bool):
        raise ValueError("boolean is not a number")
    if not isinstance(value, (int, float, str)):
        raise ValueError(f"unsupported type {type(value).__name__}")
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except OverflowError as e:
        raise ValueError("number must be finite") from e
    if not math.isfinite(number):
        raise ValueError("number must be finite")
    return number


def parse_bool(value: Any) -> bool:
    """Parse a checkbox-style input. Blank means unchecked."""
    if is_blank(value):
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    raise ValueError(f"not a yes/no value: {value!r}")


def _check_numeric(spec: FieldSpec, raw: Any) -> tuple[float | int | None, FieldError | None]:
    if is_blank(raw):
        if spec.required:
            return None, FieldError(spec.name, ErrorCode.MISSING_FIELD, f"{spec.label} is required")
        return None, None

    try:
        number = parse_number(raw)
    except ValueError:
        return None, FieldError(spec.name, ErrorCode.NOT_NUMERIC, f"{spec.label} must be a number")

    if spec.kind == FieldKind.INTEGER:
        if not number.is_integer():
            return None, FieldError(
                spec.name, ErrorCode.NOT_NUMERIC, f"{spec.label} must be a whole number"
            )
        number = int(number)

    too_low = spec.minimum is not None and number < spec.minimum
    too_high = spec.maximum is not None and number > spec.maximum
    if too_low or too_high:
        return None, FieldError(
            spec.name,
            ErrorCode.OUT_OF_RANGE,
            f"{spec.label} must be between {spec.range_text()}",
        )
    return number, None


def _check_choice(spec: FieldSpec, raw: Any) -> tuple[str | None, FieldError | None]:
    if is_blank(raw):
        if spec.required:
            return None, FieldError(
                spec.name, ErrorCode.MISSING_SELECTION, f"Please select {spec.label.lower()}"
            )
        return None, None

    choice = str(raw).strip()
    if choice not in spec.choices:
        return None, FieldError(
            spec.name,
            ErrorCode.INVALID_SELECTION,
            f"{spec.label} must be one of: {', '.join(spec.choices)}",
        )
    return choice, None


def _check_boolean(spec: FieldSpec, raw: Any) -> tuple[bool | None, FieldError | None]:
    try:
        return parse_bool(raw), None
    except ValueError:
        return None, FieldError(
            spec.name, ErrorCode.INVALID_SELECTION, f"{spec.label} must be yes or no"
        )


def check_field(spec: FieldSpec, raw: Any) -> tuple[Any, FieldError | None]:
    """Validate a single field value against its schema entry."""
    if spec.is_numeric:
        return _check_numeric(spec, raw)
    if spec.kind == FieldKind.CHOICE:
        return _check_choice(spec, raw)
    return _check_boolean(spec, raw)


def validate(inputs: Mapping[str, Any], schema: Iterable[FieldSpec]) -> ValidationResult:
    """Validate an input record against an instrument's field schema.

    Args:
        inputs: Field name to raw value, as collected by the caller.
        schema: The instrument's field specifications.

    Returns:
        A new ValidationResult. Errors are ordered by schema order, with
        unknown keys reported last.
    """
    schema = tuple(schema)
    errors: dict[str, FieldError] = {}
    values: dict[str, Any] = {}

    for spec in schema:
        value, error = check_field(spec, inputs.get(spec.name))
        if error is not None:
            errors[spec.name] = error
        elif value is not None:
            values[spec.name] = value

    known = {spec.name for spec in schema}
    for name in inputs:
        if name not in known:
            errors[name] = FieldError(name, ErrorCode.UNKNOWN_FIELD, f"Unknown field: {name}")

    if errors:
        logger.debug("Validation failed for fields: %s", ", ".join(errors))

    return ValidationResult(errors=errors, values=values)
