"""API routers for the Clinical Risk Engine."""

from clinical_risk.api.calculators import router as calculators_router

__all__ = [
    "calculators_router",
]
