"""Piecewise breakpoint lookup tables.

A table is an ordered list of ``value >= threshold -> points`` rules,
highest threshold first. The first matching rule wins; a value below every
threshold scores the table's floor.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BreakpointTable:
    """Descending ``value >= threshold`` lookup."""

    name: str
    rules: tuple[tuple[float, int], ...]
    floor: int = 0

    def __post_init__(self) -> None:
        thresholds = [threshold for threshold, _ in self.rules]
        if thresholds != sorted(thresholds, reverse=True):
            raise ValueError(f"Breakpoint table {self.name} must be ordered highest first")
        if len(set(thresholds)) != len(thresholds):
            raise ValueError(f"Breakpoint table {self.name} has duplicate thresholds")

    def points(self, value: float) -> int:
        for threshold, points in self.rules:
            if value >= threshold:
                return points
        return self.floor


@dataclass(frozen=True)
class BelowTable:
    """Ascending ``value < threshold`` lookup, used where the published
    table is written with strict upper bounds (MAGGIC EF and BMI)."""

    name: str
    rules: tuple[tuple[float, int], ...]
    ceiling: int = 0

    def __post_init__(self) -> None:
        thresholds = [threshold for threshold, _ in self.rules]
        if thresholds != sorted(thresholds):
            raise ValueError(f"Breakpoint table {self.name} must be ordered lowest first")
        if len(set(thresholds)) != len(thresholds):
            raise ValueError(f"Breakpoint table {self.name} has duplicate thresholds")

    def points(self, value: float) -> int:
        for threshold, points in self.rules:
            if value < threshold:
                return points
        return self.ceiling


def interpolate(anchors: tuple[tuple[float, float], ...], x: float) -> float:
    """Linear interpolation through ascending ``(x, y)`` anchor points.

    Values outside the anchor range are clamped to the end points.
    """
    if not anchors:
        raise ValueError("interpolate requires at least one anchor")
    if x <= anchors[0][0]:
        return anchors[0][1]
    for (x0, y0), (x1, y1) in zip(anchors, anchors[1:]):
        if x <= x1:
            return y0 + (y1 - y0) * (x - x0) / (x1 - x0)
    return anchors[-1][1]
