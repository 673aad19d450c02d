"""
Simple high-level simulation API.

This module runs an argon simulation with minimal setup and collects the
usual observables in physical units.

Example:
    >>> from argonmd import simulate
    >>> result = simulate.run(500, SimulationConfig(supercell_count=4, seed=1))
    >>> print(result.mean_temperature)
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from .config import SimulationConfig
from .engines import ArgonEngine, EnergyReporter, StateReporter
from .exceptions import ConfigurationError
from .integrators import Ensemble
from .system import params

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Results from a simulation run, in physical units."""

    # Time series
    times: NDArray[np.floating] = field(default_factory=lambda: np.array([]))
    temperature: NDArray[np.floating] = field(default_factory=lambda: np.array([]))
    kinetic_energy: NDArray[np.floating] = field(default_factory=lambda: np.array([]))
    potential_energy: NDArray[np.floating] = field(default_factory=lambda: np.array([]))
    total_energy: NDArray[np.floating] = field(default_factory=lambda: np.array([]))
    pressure: NDArray[np.floating] = field(default_factory=lambda: np.array([]))

    # Final configuration (nm)
    positions: NDArray[np.floating] = field(default_factory=lambda: np.array([]))

    # Summary statistics
    mean_temperature: float = 0.0
    mean_pressure: float = 0.0
    energy_drift: float = 0.0
    energy_fluctuation: float = 0.0

    # Metadata
    n_atoms: int = 0
    n_steps: int = 0
    timestep: float = 0.0
    box_length: float = 0.0
    neighbor_strategy: str = ""
    rebuild_count: int = 0


def _relative_drift(total: NDArray[np.floating]) -> float:
    """Relative change of the total energy between first and last sample."""
    if len(total) < 2 or total[0] == 0.0:
        return 0.0
    return float((total[-1] - total[0]) / abs(total[0]))


def _collect(engine: ArgonEngine, energies: EnergyReporter, n_steps: int) -> SimulationResult:
    total = energies.total_energy
    mean_total = np.mean(total) if len(total) else 0.0

    return SimulationResult(
        times=energies.times,
        temperature=energies.temperature,
        kinetic_energy=energies.kinetic_energy,
        potential_energy=energies.potential_energy,
        total_energy=total,
        pressure=energies.pressure,
        positions=params.reduced_to_nanometers(np.array(engine.atoms.positions)),
        mean_temperature=float(np.mean(energies.temperature)) if len(total) else 0.0,
        mean_pressure=float(np.mean(energies.pressure)) if len(total) else 0.0,
        energy_drift=_relative_drift(total),
        energy_fluctuation=(
            float(np.std(total) / abs(mean_total)) if mean_total != 0.0 else 0.0
        ),
        n_atoms=engine.n_atoms,
        n_steps=n_steps,
        timestep=params.reduced_to_picoseconds(engine.timestep),
        box_length=engine.box_length_nm,
        neighbor_strategy=engine.neighbor_strategy,
        rebuild_count=engine.rebuild_count,
    )


def run(
    n_steps: int,
    config: SimulationConfig | None = None,
    report_every: int = 1,
    verbose: bool = False,
) -> SimulationResult:
    """
    Run an argon simulation from a fresh FCC lattice.

    Args:
        n_steps: Number of steps to run.
        config: Simulation parameters (default: SimulationConfig()).
        report_every: Sampling interval for the time series.
        verbose: Print a state table to stdout while running.

    Returns:
        SimulationResult with time series and summary statistics.

    Example:
        >>> cfg = SimulationConfig(supercell_count=4, ensemble="nve", seed=7)
        >>> result = run(1000, cfg, report_every=10)
        >>> print(f"Energy drift: {result.energy_drift:.2e}")
    """
    if report_every < 1:
        raise ConfigurationError(f"report_every must be >= 1, got {report_every}")

    with ArgonEngine(config) as engine:
        energies = EnergyReporter(frequency=report_every)
        engine.add_reporter(energies)
        if verbose:
            engine.add_reporter(StateReporter(frequency=report_every, file=sys.stdout))

        logger.info(
            "Running %d steps: N=%d, %s, T=%.1f K",
            n_steps,
            engine.n_atoms,
            engine.ensemble.name,
            engine.target_temperature_kelvin,
        )
        engine.run(n_steps)
        result = _collect(engine, energies, n_steps)

    logger.info(
        "Finished: <T>=%.2f K, drift=%.3e, %d pair-list rebuilds",
        result.mean_temperature,
        result.energy_drift,
        result.rebuild_count,
    )
    return result


def dimer(
    separation: float = 2.0 ** (1.0 / 6.0),
    box_length: float = 10.0,
    n_steps: int = 1000,
    report_every: int = 1,
) -> SimulationResult:
    """
    Run two atoms at rest in an NVE box.

    At the potential minimum r = 2^(1/6) sigma the pair stays put; any other
    separation oscillates about it.

    Args:
        separation: Initial distance along x (reduced).
        box_length: Periodic box length (reduced).
        n_steps: Number of steps.
        report_every: Sampling interval for the time series.

    Returns:
        SimulationResult with the dimer trajectory observables.
    """
    center = 0.5 * box_length
    positions = np.array(
        [
            [center - 0.5 * separation, center, center],
            [center + 0.5 * separation, center, center],
        ]
    )

    config = SimulationConfig(supercell_count=1, ensemble=Ensemble.NVE)
    with ArgonEngine(config) as engine:
        engine.load_particles(positions, None, box_length)
        energies = EnergyReporter(frequency=report_every)
        engine.add_reporter(energies)
        engine.run(n_steps)
        return _collect(engine, energies, n_steps)
