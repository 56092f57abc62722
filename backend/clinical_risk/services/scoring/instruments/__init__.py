"""Registered risk-scoring instruments."""

from clinical_risk.services.scoring.instruments.dapt import DAPTScore
from clinical_risk.services.scoring.instruments.euroscore_ii import EuroSCOREII
from clinical_risk.services.scoring.instruments.gwtg_hf import GWTGHeartFailure
from clinical_risk.services.scoring.instruments.hcm_risk_scd import HCMRiskSCD
from clinical_risk.services.scoring.instruments.maggic import MAGGICScore
from clinical_risk.services.scoring.instruments.timi import TIMIRiskScore

INSTRUMENT_CLASSES = (
    DAPTScore,
    TIMIRiskScore,
    GWTGHeartFailure,
    MAGGICScore,
    HCMRiskSCD,
    EuroSCOREII,
)

__all__ = [
    "INSTRUMENT_CLASSES",
    "DAPTScore",
    "EuroSCOREII",
    "GWTGHeartFailure",
    "HCMRiskSCD",
    "MAGGICScore",
    "TIMIRiskScore",
]
