"""Instrument base classes.

Every instrument runs the same chain: validate the input record, compute a
score breakdown, classify the score against a threshold table and build
guidance from a recommendation catalog. Subclasses supply the static
definition (fields, tables, catalog) and the score computation itself.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from clinical_risk.services.scoring.classification import ThresholdTable
from clinical_risk.services.scoring.errors import InputValidationError, UnvalidatedInputError
from clinical_risk.services.scoring.models import (
    Classification,
    FieldKind,
    FieldSpec,
    FormulaShape,
    RiskAssessment,
    RiskCategory,
    ScoreBreakdown,
    ValidationResult,
)
from clinical_risk.services.scoring.preview import preview_values
from clinical_risk.services.scoring.recommendations import RecommendationCatalog
from clinical_risk.services.scoring.validation import validate

logger = logging.getLogger(__name__)

PREVIEW_PREFIX = "Preliminary estimate: "


class Instrument(ABC):
    """A published risk-scoring instrument.

    Class attributes form the instrument definition and are never mutated
    at runtime.
    """

    instrument_id: str = ""
    name: str = ""
    shape: FormulaShape = FormulaShape.ADDITIVE
    description: str = ""
    score_unit: str = "points"
    display_precision: int = 0
    event_rate_label: str = ""
    fields: tuple[FieldSpec, ...] = ()
    thresholds: ThresholdTable
    catalog: RecommendationCatalog
    preview_required: tuple[str, ...] = ()
    preview_defaults: Mapping[str, Any] = MappingProxyType({})
    references: tuple[str, ...] = ()

    def __init__(self) -> None:
        self._check_definition()

    def _check_definition(self) -> None:
        names = [spec.name for spec in self.fields]
        if len(set(names)) != len(names):
            raise ValueError(f"{self.instrument_id}: duplicate field names")
        for name in (*self.preview_required, *self.preview_defaults):
            if name not in names:
                raise ValueError(f"{self.instrument_id}: preview refers to unknown field {name}")
        for spec in self.fields:
            if spec.kind == FieldKind.BOOLEAN or spec.name in self.preview_required:
                continue
            if spec.name not in self.preview_defaults:
                raise ValueError(f"{self.instrument_id}: no preview default for {spec.name}")
        if not self.catalog.covers(self.categories):
            raise ValueError(f"{self.instrument_id}: recommendation catalog has an empty category")

    # ------------------------------------------------------------------
    # Definition helpers
    # ------------------------------------------------------------------

    @property
    def categories(self) -> list[RiskCategory]:
        return self.thresholds.categories

    def field_spec(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def describe(self) -> dict[str, Any]:
        """Static description of the instrument, suitable for JSON."""
        return {
            "id": self.instrument_id,
            "name": self.name,
            "shape": self.shape.value,
            "description": self.description,
            "score_unit": self.score_unit,
            "categories": [category.value for category in self.categories],
            "fields": [
                {
                    "name": spec.name,
                    "label": spec.label,
                    "kind": spec.kind.value,
                    "unit": spec.unit,
                    "minimum": spec.minimum,
                    "maximum": spec.maximum,
                    "choices": list(spec.choices),
                    "required": spec.required,
                    "description": spec.description,
                }
                for spec in self.fields
            ],
            "preview_required": list(self.preview_required),
            "preview_defaults": dict(self.preview_defaults),
            "references": list(self.references),
        }

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def validate(self, inputs: Mapping[str, Any]) -> ValidationResult:
        return validate(inputs, self.fields)

    def compute_score(self, inputs: Mapping[str, Any]) -> ScoreBreakdown:
        """Compute the score breakdown for a validated record.

        Raises:
            UnvalidatedInputError: If ``inputs`` does not validate.
        """
        result = self.validate(inputs)
        if not result.is_valid:
            logger.warning(
                "Refusing to score unvalidated input for %s (fields: %s)",
                self.instrument_id,
                ", ".join(result.errors),
            )
            raise UnvalidatedInputError(
                f"{self.instrument_id} requires validated input; "
                f"invalid fields: {', '.join(result.errors)}"
            )
        return self._compute(dict(result.values))

    @abstractmethod
    def _compute(self, values: dict[str, Any]) -> ScoreBreakdown:
        """Score a normalized record. ``values`` holds every field."""

    def classification_value(self, breakdown: ScoreBreakdown, values: dict[str, Any]) -> float:
        """The number fed to the threshold table."""
        return breakdown.total

    def display(self, value: float) -> float:
        if self.display_precision == 0:
            return int(round(value))
        return round(value, self.display_precision)

    def classify(self, breakdown: ScoreBreakdown, values: dict[str, Any]) -> Classification:
        value = self.classification_value(breakdown, values)
        return self.thresholds.classify(value, display=self.display(value))

    def flags(self, values: dict[str, Any]) -> set[str]:
        """Input flags that condition guidance. Defaults to checked booleans."""
        return {
            spec.name
            for spec in self.fields
            if spec.kind == FieldKind.BOOLEAN and values.get(spec.name)
        }

    def recommend(self, classification: Classification, values: dict[str, Any]) -> list[str]:
        return self.catalog.recommend(classification.category, self.flags(values))

    def extras(
        self,
        values: dict[str, Any],
        breakdown: ScoreBreakdown,
        classification: Classification,
    ) -> dict[str, Any]:
        """Instrument-specific additions to the assessment."""
        return {}

    def _assess(self, values: dict[str, Any], is_preview: bool = False) -> RiskAssessment:
        """Run computation, classification and guidance on normalized values."""
        breakdown = self._compute(values)
        classification = self.classify(breakdown, values)
        interpretation = classification.interpretation
        if is_preview:
            interpretation = PREVIEW_PREFIX + interpretation

        return RiskAssessment(
            instrument_id=self.instrument_id,
            instrument_name=self.name,
            score=breakdown.total,
            display_score=self.display(breakdown.total),
            score_unit=self.score_unit,
            category=classification.category,
            interpretation=interpretation,
            recommendations=self.recommend(classification, values),
            event_rate=classification.event_rate,
            event_rate_label=self.event_rate_label if classification.event_rate is not None else "",
            breakdown=breakdown,
            inputs=dict(values),
            extras=self.extras(values, breakdown, classification),
            references=list(self.references),
            is_preview=is_preview,
        )

    def calculate(self, inputs: Mapping[str, Any]) -> RiskAssessment:
        """Validate, then assess.

        Raises:
            InputValidationError: If the record does not validate.
        """
        result = self.validate(inputs)
        if not result.is_valid:
            logger.info(
                "Validation failed for %s (fields: %s)",
                self.instrument_id,
                ", ".join(result.errors),
            )
            raise InputValidationError(self.instrument_id, result)

        assessment = self._assess(dict(result.values))
        logger.debug(
            "Calculated %s: category=%s", self.instrument_id, assessment.category.value
        )
        return assessment

    def preview(self, partial: Mapping[str, Any]) -> RiskAssessment | None:
        """Best-effort assessment of an incomplete record."""
        values = preview_values(self, partial)
        if values is None:
            return None
        return self._assess(values, is_preview=True)


class PointTableInstrument(Instrument):
    """Instruments whose score is a sum of integer points per factor."""

    @abstractmethod
    def points(self, values: dict[str, Any]) -> dict[str, int]:
        """Points contributed by each factor."""

    def _compute(self, values: dict[str, Any]) -> ScoreBreakdown:
        components = self.points(values)
        return ScoreBreakdown(total=sum(components.values()), components=components)


class ContinuousFormulaInstrument(Instrument):
    """Instruments computed by a continuous formula with a transform."""

    shape = FormulaShape.CONTINUOUS
    score_unit = "%"
    display_precision = 2

    @staticmethod
    def clamp(value: float, lower: float, upper: float) -> float:
        return max(lower, min(upper, value))

    def classify(self, breakdown: ScoreBreakdown, values: dict[str, Any]) -> Classification:
        """The transformed value is itself the event-rate estimate."""
        classification = super().classify(breakdown, values)
        return Classification(
            category=classification.category,
            interpretation=classification.interpretation,
            event_rate=self.display(breakdown.total),
        )
