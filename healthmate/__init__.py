"""HealthMate: medical report analysis API."""

__version__ = "0.1.0"
