"""Core application configuration."""

from clinical_risk.core.config import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
