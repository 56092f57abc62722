"""Record types shared by every risk-scoring instrument.

Instrument definitions, field schemas and results are plain dataclasses.
Everything describing an instrument is frozen; result records are built
fresh on every call and never mutated by the engine afterwards.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class FieldKind(str, Enum):
    """Value type of an instrument input field."""

    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    CHOICE = "choice"


class FormulaShape(str, Enum):
    """The three published formula shapes an instrument can use."""

    ADDITIVE = "additive_point_table"
    BREAKPOINT = "breakpoint_table"
    CONTINUOUS = "continuous_formula"


class ErrorCode(str, Enum):
    """Field-level validation error codes."""

    MISSING_FIELD = "MissingField"
    NOT_NUMERIC = "NotNumeric"
    OUT_OF_RANGE = "OutOfRange"
    MISSING_SELECTION = "MissingSelection"
    INVALID_SELECTION = "InvalidSelection"
    UNKNOWN_FIELD = "UnknownField"


class RiskCategory(str, Enum):
    """Ordered risk bands. Each instrument uses an ordered subset."""

    LOW = "low"
    INTERMEDIATE = "intermediate"
    HIGH = "high"
    VERY_HIGH = "very_high"


@dataclass(frozen=True)
class FieldSpec:
    """Schema entry for one input field."""

    name: str
    label: str
    kind: FieldKind
    unit: str = ""
    minimum: float | None = None
    maximum: float | None = None
    choices: tuple[str, ...] = ()
    required: bool = True
    description: str = ""

    @property
    def is_numeric(self) -> bool:
        return self.kind in (FieldKind.NUMBER, FieldKind.INTEGER)

    def range_text(self) -> str:
        """Human-readable valid range, e.g. "18-120 years"."""
        if self.minimum is None and self.maximum is None:
            return ""
        text = f"{_fmt(self.minimum)}-{_fmt(self.maximum)}"
        return f"{text} {self.unit}".strip()


def _fmt(value: float | None) -> str:
    if value is None:
        return ""
    return str(int(value)) if float(value).is_integer() else str(value)


@dataclass(frozen=True)
class FieldError:
    """A single validation problem, keyed by field name."""

    field: str
    code: ErrorCode
    message: str


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation pass.

    ``errors`` is empty when the record is fully valid. ``values`` holds the
    normalized (parsed) value of every field that passed its checks.
    """

    errors: Mapping[str, FieldError] = field(default_factory=dict)
    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "errors", MappingProxyType(dict(self.errors)))
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def first_error_field(self) -> str | None:
        """Field the caller should focus first (schema order)."""
        return next(iter(self.errors), None)

    def as_dict(self) -> dict[str, dict[str, str]]:
        return {
            name: {"code": err.code.value, "message": err.message}
            for name, err in self.errors.items()
        }


@dataclass
class ScoreBreakdown:
    """Per-factor contributions and the aggregated total.

    For point-table instruments ``sum(components.values()) == total``.
    For continuous formulas ``components`` holds the named sub-terms of the
    formula and ``index`` the prognostic index / linear predictor.
    """

    total: float
    components: dict[str, float] = field(default_factory=dict)
    index: float | None = None
    additive: bool = True


@dataclass(frozen=True)
class Classification:
    """Result of mapping a score onto a threshold table."""

    category: RiskCategory
    interpretation: str
    event_rate: float | None = None


@dataclass
class RiskAssessment:
    """Full result of one instrument evaluation."""

    instrument_id: str
    instrument_name: str
    score: float
    display_score: float
    score_unit: str
    category: RiskCategory
    interpretation: str
    recommendations: list[str]
    event_rate: float | None = None
    event_rate_label: str = ""
    breakdown: ScoreBreakdown | None = None
    inputs: dict[str, Any] = field(default_factory=dict)
    extras: dict[str, Any] = field(default_factory=dict)
    references: list[str] = field(default_factory=list)
    is_preview: bool = False
