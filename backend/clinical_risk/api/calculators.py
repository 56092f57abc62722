"""Risk calculator API endpoints."""

import logging
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, status

from clinical_risk.core.config import settings
from clinical_risk.schemas.calculators import (
    AssessmentResponse,
    InstrumentDetail,
    InstrumentListResponse,
    InstrumentSummary,
    PreviewResponse,
    ScoreBreakdownResponse,
    ScoringRequest,
    SummaryResponse,
    ValidationResponse,
)
from clinical_risk.services.scoring import (
    InputValidationError,
    Instrument,
    RiskAssessment,
    UnknownInstrumentError,
    get_risk_scoring_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calculators", tags=["Calculators"])


# ==============================================================================
# Helper Functions
# ==============================================================================


def _get_instrument(calculator_id: str) -> Instrument:
    """Resolve an instrument or raise 404."""
    try:
        return get_risk_scoring_service().get_instrument(calculator_id)
    except UnknownInstrumentError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _to_response(assessment: RiskAssessment) -> AssessmentResponse:
    breakdown = None
    if assessment.breakdown is not None:
        breakdown = ScoreBreakdownResponse(**asdict(assessment.breakdown))
    return AssessmentResponse(
        instrument_id=assessment.instrument_id,
        instrument_name=assessment.instrument_name,
        score=assessment.score,
        display_score=assessment.display_score,
        score_unit=assessment.score_unit,
        category=assessment.category.value,
        interpretation=assessment.interpretation,
        recommendations=assessment.recommendations,
        event_rate=assessment.event_rate,
        event_rate_label=assessment.event_rate_label,
        breakdown=breakdown,
        inputs=assessment.inputs,
        extras=assessment.extras,
        references=assessment.references,
        is_preview=assessment.is_preview,
    )


def _validation_failed(e: InputValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={
            "message": str(e),
            "errors": e.result.as_dict(),
            "first_error_field": e.result.first_error_field,
        },
    )


# ==============================================================================
# Instrument Listing
# ==============================================================================


@router.get(
    "",
    response_model=InstrumentListResponse,
    summary="List available risk calculators",
)
async def list_calculators() -> InstrumentListResponse:
    """List all registered risk-scoring instruments."""
    instruments = get_risk_scoring_service().list_instruments()
    return InstrumentListResponse(
        calculators=[
            InstrumentSummary(
                id=instrument.instrument_id,
                name=instrument.name,
                shape=instrument.shape.value,
                description=instrument.description,
                score_unit=instrument.score_unit,
            )
            for instrument in instruments
        ],
        total_count=len(instruments),
    )


@router.get(
    "/{calculator_id}",
    response_model=InstrumentDetail,
    summary="Describe a risk calculator",
    description="Field schema, categories, preview defaults and references.",
)
async def get_calculator(calculator_id: str) -> InstrumentDetail:
    return InstrumentDetail(**_get_instrument(calculator_id).describe())


# ==============================================================================
# Scoring
# ==============================================================================


@router.post(
    "/{calculator_id}/validate",
    response_model=ValidationResponse,
    summary="Validate an input record",
)
async def validate_inputs(calculator_id: str, request: ScoringRequest) -> ValidationResponse:
    """Validate inputs without scoring.

    Returns every field error at once so a form can mark all of them.
    """
    result = _get_instrument(calculator_id).validate(request.inputs)
    return ValidationResponse(
        valid=result.is_valid,
        errors=result.as_dict(),
        first_error_field=result.first_error_field,
    )


@router.post(
    "/{calculator_id}/calculate",
    response_model=AssessmentResponse,
    summary="Run a risk calculator",
)
async def calculate(calculator_id: str, request: ScoringRequest) -> AssessmentResponse:
    """Validate and score an input record.

    Raises:
        HTTPException: 404 if the calculator is unknown, 422 with field
            errors if the inputs do not validate.
    """
    instrument = _get_instrument(calculator_id)
    try:
        assessment = instrument.calculate(request.inputs)
    except InputValidationError as e:
        raise _validation_failed(e)
    return _to_response(assessment)


@router.post(
    "/{calculator_id}/preview",
    response_model=PreviewResponse,
    summary="Live preview of a partially filled record",
)
async def preview(calculator_id: str, request: ScoringRequest) -> PreviewResponse:
    """Approximate assessment using documented defaults for missing fields."""
    if not settings.preview_enabled:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Live preview is disabled",
        )

    assessment = _get_instrument(calculator_id).preview(request.inputs)
    if assessment is None:
        logger.debug("Preview for %s not available yet", calculator_id)
        return PreviewResponse(available=False)
    return PreviewResponse(available=True, assessment=_to_response(assessment))


@router.post(
    "/{calculator_id}/summary",
    response_model=SummaryResponse,
    summary="Plain-text summary of a calculation",
)
async def summarize(calculator_id: str, request: ScoringRequest) -> SummaryResponse:
    _get_instrument(calculator_id)
    try:
        text = get_risk_scoring_service().summarize(calculator_id, request.inputs)
    except InputValidationError as e:
        raise _validation_failed(e)
    return SummaryResponse(text=text)
