"""Risk Scoring Service.

Process-wide registry of the risk-scoring instruments, dispatching
validation, calculation and live preview by instrument id.
"""

import logging
from collections.abc import Mapping
from threading import Lock
from typing import Any

from clinical_risk.services.scoring.errors import UnknownInstrumentError
from clinical_risk.services.scoring.instrument import Instrument
from clinical_risk.services.scoring.instruments import INSTRUMENT_CLASSES
from clinical_risk.services.scoring.models import RiskAssessment, ValidationResult
from clinical_risk.services.scoring.summary import format_summary

logger = logging.getLogger(__name__)


class RiskScoringService:
    """Service for clinical risk scoring.

    Instruments:
    - DAPT Score (extended antiplatelet therapy benefit)
    - TIMI Risk Score for UA/NSTEMI
    - GWTG-HF (in-hospital heart failure mortality)
    - MAGGIC (chronic heart failure mortality)
    - HCM Risk-SCD (sudden cardiac death in HCM)
    - EuroSCORE II (cardiac surgical mortality)

    Usage:
        service = RiskScoringService()

        result = service.validate("gwtg_hf", {"age": "abc"})
        if result.is_valid:
            assessment = service.calculate("gwtg_hf", inputs)

        preview = service.preview("hcm_risk_scd", {"age": 45, "max_wall_thickness": 22})
    """

    def __init__(self) -> None:
        self._instruments: dict[str, Instrument] = {}
        for instrument_class in INSTRUMENT_CLASSES:
            instrument = instrument_class()
            self._instruments[instrument.instrument_id] = instrument

    def get_available_calculators(self) -> dict[str, str]:
        """Get available instruments.

        Returns:
            Dict of instrument id to display name.
        """
        return {key: instrument.name for key, instrument in self._instruments.items()}

    def list_instruments(self) -> list[Instrument]:
        return list(self._instruments.values())

    def get_instrument(self, instrument_id: str) -> Instrument:
        """Look up an instrument by id.

        Ids are matched case-insensitively and with ``-`` read as ``_``.

        Raises:
            UnknownInstrumentError: If no instrument has that id.
        """
        key = instrument_id.lower().replace("-", "_")
        if key not in self._instruments:
            raise UnknownInstrumentError(instrument_id, list(self._instruments))
        return self._instruments[key]

    def validate(self, instrument_id: str, inputs: Mapping[str, Any]) -> ValidationResult:
        return self.get_instrument(instrument_id).validate(inputs)

    def calculate(self, instrument_id: str, inputs: Mapping[str, Any]) -> RiskAssessment:
        """Validate and score an input record.

        Raises:
            UnknownInstrumentError: If the instrument id is not registered.
            InputValidationError: If the record does not validate.
        """
        return self.get_instrument(instrument_id).calculate(inputs)

    def preview(self, instrument_id: str, inputs: Mapping[str, Any]) -> RiskAssessment | None:
        """Best-effort assessment of a partially filled record.

        Returns:
            A preview assessment, or None until the minimum fields are present.
        """
        return self.get_instrument(instrument_id).preview(inputs)

    def summarize(self, instrument_id: str, inputs: Mapping[str, Any]) -> str:
        """Calculate and render the result as plain text."""
        instrument = self.get_instrument(instrument_id)
        return format_summary(instrument.calculate(inputs), instrument)

    def get_stats(self) -> dict[str, Any]:
        """Get statistics about registered instruments."""
        shapes: dict[str, int] = {}
        for instrument in self._instruments.values():
            shapes[instrument.shape.value] = shapes.get(instrument.shape.value, 0) + 1
        return {
            "total_calculators": len(self._instruments),
            "calculator_list": list(self._instruments),
            "by_shape": shapes,
        }


# Singleton instance and lock
_risk_scoring_service: RiskScoringService | None = None
_risk_scoring_lock = Lock()


def get_risk_scoring_service() -> RiskScoringService:
    """Get the singleton RiskScoringService instance."""
    global _risk_scoring_service

    if _risk_scoring_service is None:
        with _risk_scoring_lock:
            if _risk_scoring_service is None:
                logger.info("Creating singleton RiskScoringService instance")
                _risk_scoring_service = RiskScoringService()

    return _risk_scoring_service


def reset_risk_scoring_service() -> None:
    """Reset the singleton instance (for testing)."""
    global _risk_scoring_service
    with _risk_scoring_lock:
        _risk_scoring_service = None
