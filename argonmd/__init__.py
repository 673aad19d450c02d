"""
argonmd - Lennard-Jones argon molecular dynamics.

Simulates an FCC argon crystal (or any explicit configuration) in a cubic
periodic box with a cut-and-shifted Lennard-Jones potential, cell-list
pair search with a Verlet skin, and NVE or NVT (Langevin, Woodcock)
integration. Everything runs in reduced units; queries convert to
kelvin, Hartree, nanometers, picoseconds and atm.

Quick Start:
    >>> from argonmd import ArgonEngine, SimulationConfig
    >>> engine = ArgonEngine(SimulationConfig(supercell_count=4, seed=1))
    >>> engine.run(100)
    >>> print(f"T = {engine.temperature_kelvin:.1f} K")
"""

__version__ = "0.1.0"

from . import plotting, simulate
from .config import SimulationConfig
from .engines import ArgonEngine
from .exceptions import (
    ArgonMDError,
    ConfigurationError,
    GridTooSmallError,
    InvalidEnsembleError,
)
from .integrators import Ensemble, TemperatureControl
from .system import PeriodicBox, ParticleState

__all__ = [
    "simulate",
    "plotting",
    "ArgonEngine",
    "SimulationConfig",
    "Ensemble",
    "TemperatureControl",
    "PeriodicBox",
    "ParticleState",
    "ArgonMDError",
    "ConfigurationError",
    "GridTooSmallError",
    "InvalidEnsembleError",
]
