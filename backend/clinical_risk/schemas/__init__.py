"""Pydantic schemas for the Clinical Risk Engine API."""

from clinical_risk.schemas.calculators import (
    AssessmentResponse,
    FieldErrorDetail,
    FieldSchema,
    InstrumentDetail,
    InstrumentListResponse,
    InstrumentSummary,
    PreviewResponse,
    ScoreBreakdownResponse,
    ScoringRequest,
    SummaryResponse,
    ValidationResponse,
)

__all__ = [
    "AssessmentResponse",
    "FieldErrorDetail",
    "FieldSchema",
    "InstrumentDetail",
    "InstrumentListResponse",
    "InstrumentSummary",
    "PreviewResponse",
    "ScoreBreakdownResponse",
    "ScoringRequest",
    "SummaryResponse",
    "ValidationResponse",
]
