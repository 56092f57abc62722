"""Clinical risk-scoring engine.

Validation, score computation, classification and recommendation for a
closed set of published instruments.
"""

from clinical_risk.services.scoring.errors import (
    InputValidationError,
    ScoringError,
    UnknownInstrumentError,
    UnvalidatedInputError,
)
from clinical_risk.services.scoring.instrument import (
    ContinuousFormulaInstrument,
    Instrument,
    PointTableInstrument,
)
from clinical_risk.services.scoring.models import (
    Classification,
    ErrorCode,
    FieldError,
    FieldKind,
    FieldSpec,
    FormulaShape,
    RiskAssessment,
    RiskCategory,
    ScoreBreakdown,
    ValidationResult,
)
from clinical_risk.services.scoring.service import (
    RiskScoringService,
    get_risk_scoring_service,
    reset_risk_scoring_service,
)
from clinical_risk.services.scoring.validation import validate

__all__ = [
    # Errors
    "InputValidationError",
    "ScoringError",
    "UnknownInstrumentError",
    "UnvalidatedInputError",
    # Instruments
    "ContinuousFormulaInstrument",
    "Instrument",
    "PointTableInstrument",
    # Models
    "Classification",
    "ErrorCode",
    "FieldError",
    "FieldKind",
    "FieldSpec",
    "FormulaShape",
    "RiskAssessment",
    "RiskCategory",
    "ScoreBreakdown",
    "ValidationResult",
    # Service
    "RiskScoringService",
    "get_risk_scoring_service",
    "reset_risk_scoring_service",
    "validate",
]
