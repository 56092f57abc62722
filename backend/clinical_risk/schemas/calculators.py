"""Request and response schemas for the risk calculator endpoints."""

from typing import Any

from pydantic import BaseModel, Field


# ==============================================================================
# Requests
# ==============================================================================


class ScoringRequest(BaseModel):
    """Input record for validate, calculate, preview and summary."""

    inputs: dict[str, Any] = Field(
        default_factory=dict,
        description="Field name to value (number, numeric string, boolean or choice)",
    )


# ==============================================================================
# Instrument description
# ==============================================================================


class FieldSchema(BaseModel):
    """One input field of an instrument."""

    name: str
    label: str
    kind: str = Field(..., description="number, integer, boolean or choice")
    unit: str = ""
    minimum: float | None = None
    maximum: float | None = None
    choices: list[str] = Field(default_factory=list)
    required: bool = True
    description: str = ""


class InstrumentSummary(BaseModel):
    """Short listing entry for an instrument."""

    id: str = Field(..., description="Instrument id used in URLs")
    name: str = Field(..., description="Display name")
    shape: str = Field(..., description="Formula shape")
    description: str = Field(..., description="What the instrument estimates")
    score_unit: str = Field(..., description="Unit of the score (points or %)")


class InstrumentDetail(InstrumentSummary):
    """Full instrument description including its field schema."""

    categories: list[str] = Field(..., description="Risk categories in ascending order")
    fields: list[FieldSchema]
    preview_required: list[str] = Field(..., description="Fields a live preview needs")
    preview_defaults: dict[str, Any] = Field(..., description="Defaults used by live preview")
    references: list[str]


class InstrumentListResponse(BaseModel):
    """Response listing available instruments."""

    calculators: list[InstrumentSummary]
    total_count: int = Field(..., description="Total number of instruments")


# ==============================================================================
# Results
# ==============================================================================


class FieldErrorDetail(BaseModel):
    code: str = Field(..., description="Validation error code")
    message: str


class ValidationResponse(BaseModel):
    """Outcome of validating an input record."""

    valid: bool
    errors: dict[str, FieldErrorDetail] = Field(default_factory=dict)
    first_error_field: str | None = Field(None, description="Field to focus first")


class ScoreBreakdownResponse(BaseModel):
    total: float
    components: dict[str, float]
    index: float | None = Field(None, description="Prognostic index or linear predictor")
    additive: bool = Field(..., description="True when components sum to the total")


class AssessmentResponse(BaseModel):
    """Risk assessment for one input record."""

    instrument_id: str
    instrument_name: str
    score: float = Field(..., description="Unrounded score")
    display_score: float = Field(..., description="Score rounded for display")
    score_unit: str
    category: str = Field(..., description="Risk category (low, intermediate, high, very_high)")
    interpretation: str
    recommendations: list[str]
    event_rate: float | None = Field(None, description="Event-rate or mortality estimate (%)")
    event_rate_label: str = ""
    breakdown: ScoreBreakdownResponse | None = None
    inputs: dict[str, Any] = Field(default_factory=dict, description="Normalized inputs")
    extras: dict[str, Any] = Field(default_factory=dict)
    references: list[str] = Field(default_factory=list)
    is_preview: bool = False


class PreviewResponse(BaseModel):
    """Live preview result; ``assessment`` is null until enough fields are present."""

    available: bool
    assessment: AssessmentResponse | None = None


class SummaryResponse(BaseModel):
    text: str = Field(..., description="Plain-text summary of the assessment")
