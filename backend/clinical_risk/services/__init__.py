"""Services for the Clinical Risk Engine.

Services implement the scoring logic:
- RiskScoringService: instrument registry, validation, scoring and preview
"""

from clinical_risk.services.scoring import (
    RiskScoringService,
    get_risk_scoring_service,
    reset_risk_scoring_service,
)

__all__ = [
    "RiskScoringService",
    "get_risk_scoring_service",
    "reset_risk_scoring_service",
]
