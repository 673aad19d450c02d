"""Simulation engine implementations."""

from .engine import ArgonEngine
from .reporters import (
    CallbackReporter,
    EnergyReporter,
    Reporter,
    ReporterGroup,
    StateReporter,
)

__all__ = [
    "ArgonEngine",
    "Reporter",
    "ReporterGroup",
    "StateReporter",
    "CallbackReporter",
    "EnergyReporter",
]
