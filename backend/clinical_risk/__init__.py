"""Clinical Risk Engine: published cardiovascular risk scores as a service."""

__version__ = "0.1.0"
