"""Simulation configuration."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from .exceptions import ConfigurationError
from .integrators.base import Ensemble, TemperatureControl
from .system.params import (
    ALPHA,
    ATOMS_PER_CELL,
    DT,
    FIRST_NC,
    FIRST_SCALE,
    FIRST_TEMP,
    GAMMA,
    MARGIN,
    RCUTOFF,
)


@dataclass(frozen=True)
class SimulationConfig:
    """
    Parameters for an argon simulation.

    All defaults reproduce the classic setup: 6x6x6 FCC supercells (864
    atoms) at unit reduced density, 50 K, NVT with a Langevin thermostat.

    Attributes:
        supercell_count: FCC unit cells per box edge (Nc).
        lattice_scale: Multiplier on the unit-density lattice constant.
        temperature: Target temperature in kelvin.
        ensemble: NVE or NVT.
        temperature_control: Thermostat used for NVT.
        dt: Integration timestep (reduced).
        gamma: Langevin damping coefficient (reduced).
        alpha: Woodcock coupling coefficient.
        cutoff: Interaction cutoff (sigma).
        margin: Pair-list skin (sigma).
        seed: Random seed for initial momenta and Langevin noise.
        backend: Parallel backend name ("serial", "threads", "multiprocessing").
        n_workers: Worker count for pooled backends. None means CPU count.
    """

    supercell_count: int = FIRST_NC
    lattice_scale: float = FIRST_SCALE
    temperature: float = FIRST_TEMP
    ensemble: Ensemble = Ensemble.NVT
    temperature_control: TemperatureControl = TemperatureControl.LANGEVIN
    dt: float = DT
    gamma: float = GAMMA
    alpha: float = ALPHA
    cutoff: float = RCUTOFF
    margin: float = MARGIN
    seed: int | None = None
    backend: str = "serial"
    n_workers: int | None = None

    def __post_init__(self) -> None:
        """Normalize enumerations and validate ranges."""
        object.__setattr__(self, "ensemble", Ensemble.parse(self.ensemble))
        object.__setattr__(
            self,
            "temperature_control",
            TemperatureControl.parse(self.temperature_control),
        )

        if int(self.supercell_count) != self.supercell_count or self.supercell_count < 1:
            raise ConfigurationError(
                f"supercell_count must be an integer >= 1, got {self.supercell_count}"
            )
        object.__setattr__(self, "supercell_count", int(self.supercell_count))

        if self.lattice_scale <= 0.0:
            raise ConfigurationError(
                f"lattice_scale must be positive, got {self.lattice_scale}"
            )
        if self.temperature < 0.0:
            raise ConfigurationError(
                f"temperature must be non-negative, got {self.temperature}"
            )
        if self.dt <= 0.0:
            raise ConfigurationError(f"dt must be positive, got {self.dt}")
        if self.gamma < 0.0:
            raise ConfigurationError(f"gamma must be non-negative, got {self.gamma}")
        if not 0.0 <= self.alpha < 1.0:
            raise ConfigurationError(f"alpha must lie in [0, 1), got {self.alpha}")
        if self.cutoff <= 0.0 or self.margin <= 0.0:
            raise ConfigurationError("cutoff and margin must be positive")
        if self.n_workers is not None and self.n_workers < 1:
            raise ConfigurationError(f"n_workers must be >= 1, got {self.n_workers}")

    @property
    def n_atoms(self) -> int:
        """Number of atoms the lattice will hold."""
        return ATOMS_PER_CELL * self.supercell_count**3

    def replace(self, **changes: Any) -> SimulationConfig:
        """Return a copy with some fields changed."""
        return dataclasses.replace(self, **changes)
