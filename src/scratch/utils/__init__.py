"""Utility helpers for the :mod:`scratch` package."""

from .logging import StepTally, instrument, setup_logging

__all__ = ["StepTally", "instrument", "setup_logging"]
