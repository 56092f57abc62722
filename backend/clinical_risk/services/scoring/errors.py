"""Exceptions raised by the scoring engine."""

from clinical_risk.services.scoring.models import ValidationResult


class ScoringError(ValueError):
    """Base class for scoring engine errors."""


class UnknownInstrumentError(ScoringError):
    """Raised when an instrument id is not registered."""

    def __init__(self, instrument_id: str, available: list[str]) -> None:
        self.instrument_id = instrument_id
        self.available = available
        super().__init__(
            f"Unknown calculator: {instrument_id}. Available: {', '.join(available)}"
        )


class InputValidationError(ScoringError):
    """Raised by ``calculate`` when the input record does not validate."""

    def __init__(self, instrument_id: str, result: ValidationResult) -> None:
        self.instrument_id = instrument_id
        self.result = result
        fields = ", ".join(result.errors)
        super().__init__(f"Invalid parameters for {instrument_id}: {fields}")


class UnvalidatedInputError(ScoringError):
    """Raised when the score calculator is handed unvalidated data.

    The committed path never clamps bad input into range; it refuses it.
    """
