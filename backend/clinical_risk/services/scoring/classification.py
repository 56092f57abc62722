"""Threshold tables mapping a score onto ordered risk categories."""

from dataclasses import dataclass

from clinical_risk.services.scoring.models import Classification, RiskCategory


@dataclass(frozen=True)
class RiskBand:
    """One row of a threshold table.

    ``upper`` is the band's upper bound; ``None`` marks the catch-all top
    band. ``inclusive`` selects ``<=`` (True) or ``<`` (False).
    ``interpretation`` may reference ``{score}`` and ``{rate}``.
    """

    category: RiskCategory
    interpretation: str
    upper: float | None = None
    inclusive: bool = True
    event_rate: float | None = None

    def contains(self, value: float) -> bool:
        if self.upper is None:
            return True
        return value <= self.upper if self.inclusive else value < self.upper


@dataclass(frozen=True)
class ThresholdTable:
    """Ascending, exhaustive band list. First matching band wins."""

    bands: tuple[RiskBand, ...]

    def __post_init__(self) -> None:
        if not self.bands:
            raise ValueError("Threshold table needs at least one band")
        if self.bands[-1].upper is not None:
            raise ValueError("Last band of a threshold table must be the catch-all")
        uppers = [band.upper for band in self.bands[:-1]]
        if any(upper is None for upper in uppers) or uppers != sorted(uppers):
            raise ValueError("Threshold table bands must be in ascending order")

    @property
    def categories(self) -> list[RiskCategory]:
        """Distinct categories in ascending order."""
        seen: list[RiskCategory] = []
        for band in self.bands:
            if band.category not in seen:
                seen.append(band.category)
        return seen

    def band_for(self, value: float) -> RiskBand:
        for band in self.bands:
            if band.contains(value):
                return band
        return self.bands[-1]

    def classify(self, value: float, display: float | None = None) -> Classification:
        """Classify ``value``; ``display`` is the rounded score shown in text."""
        band = self.band_for(value)
        shown = value if display is None else display
        rate = band.event_rate if band.event_rate is not None else shown
        return Classification(
            category=band.category,
            interpretation=band.interpretation.format(score=_fmt(shown), rate=_fmt(rate)),
            event_rate=band.event_rate,
        )


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"
