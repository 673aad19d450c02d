"""
Plots of SimulationResult time series, in physical units.

matplotlib is an optional dependency (the ``plot`` extra); every public
function raises ImportError when it is missing.

Example:
    >>> from argonmd import simulate, plotting
    >>> result = simulate.run(1000)
    >>> plotting.summary(result, show=False)
    >>> plotting.save("argon.png")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .simulate import SimulationResult

# Try to import matplotlib, but don't fail if not available
try:
    import matplotlib.pyplot as plt

    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False
    plt = None

logger = logging.getLogger(__name__)

TIME_LABEL = "Time (ps)"


def _check_matplotlib():
    """Check if matplotlib is available."""
    if not HAS_MATPLOTLIB:
        raise ImportError(
            "matplotlib is required for plotting. "
            "Install it with: pip install argonmd[plot]"
        )


def _finish(fig, show: bool):
    fig.tight_layout()
    if show:
        plt.show()
    return fig


def _series_panel(ax, times, values, ylabel: str, color: str, mean: float | None = None):
    """Draw one observable against time, with an optional dashed mean line."""
    ax.plot(times, values, color=color, lw=0.8)
    if mean is not None:
        ax.axhline(mean, color="k", linestyle="--", alpha=0.5, label=f"mean {mean:.4g}")
        ax.legend(loc="best", fontsize="small")
    ax.set_xlabel(TIME_LABEL)
    ax.set_ylabel(ylabel)
    ax.grid(True, alpha=0.3)


def _energy_panel(ax, result: SimulationResult) -> None:
    for values, label, color in (
        (result.kinetic_energy, "Kinetic", "tab:blue"),
        (result.potential_energy, "Potential", "tab:red"),
        (result.total_energy, "Total", "k"),
    ):
        ax.plot(result.times, values, color=color, lw=0.8, label=label)
    ax.set_xlabel(TIME_LABEL)
    ax.set_ylabel("Energy (Hartree)")
    ax.legend(loc="best", fontsize="small")
    ax.grid(True, alpha=0.3)


def _drift_panel(ax, result: SimulationResult) -> None:
    """Total energy as a percentage deviation from the first sample."""
    total = result.total_energy
    deviation = np.zeros_like(total)
    if len(total) > 0 and total[0] != 0.0:
        deviation = (total - total[0]) / abs(total[0]) * 100.0
    ax.plot(result.times, deviation, color="k", lw=0.8)
    ax.axhline(0.0, color="tab:red", linestyle="--", alpha=0.5)
    ax.set_xlabel(TIME_LABEL)
    ax.set_ylabel("Energy deviation (%)")
    ax.set_title(f"drift {result.energy_drift:.2e}")
    ax.grid(True, alpha=0.3)


def energy(
    result: SimulationResult,
    show: bool = True,
    figsize: tuple[float, float] = (10, 4),
):
    """
    Plot the energy components and total-energy conservation.

    Args:
        result: SimulationResult from a simulation.
        show: Whether to display the plot immediately.
        figsize: Figure size (width, height) in inches.

    Returns:
        The matplotlib Figure.
    """
    _check_matplotlib()
    fig, (left, right) = plt.subplots(1, 2, figsize=figsize)
    _energy_panel(left, result)
    _drift_panel(right, result)
    return _finish(fig, show)


def temperature(
    result: SimulationResult,
    show: bool = True,
    figsize: tuple[float, float] = (8, 4),
):
    """Plot temperature (K) against time with its mean."""
    _check_matplotlib()
    fig, ax = plt.subplots(figsize=figsize)
    _series_panel(
        ax, result.times, result.temperature, "Temperature (K)", "tab:orange",
        mean=result.mean_temperature,
    )
    return _finish(fig, show)


def pressure(
    result: SimulationResult,
    show: bool = True,
    figsize: tuple[float, float] = (8, 4),
):
    """Plot pressure (atm) against time with its mean."""
    _check_matplotlib()
    fig, ax = plt.subplots(figsize=figsize)
    _series_panel(
        ax, result.times, result.pressure, "Pressure (atm)", "tab:green",
        mean=result.mean_pressure,
    )
    return _finish(fig, show)


def summary(
    result: SimulationResult,
    show: bool = True,
    figsize: tuple[float, float] = (11, 8),
):
    """
    Plot a 2x2 overview: energies, energy deviation, temperature, pressure.

    The figure title carries the atom count, box length and neighbor
    search strategy of the run.
    """
    _check_matplotlib()
    fig, axes = plt.subplots(2, 2, figsize=figsize)
    _energy_panel(axes[0, 0], result)
    _drift_panel(axes[0, 1], result)
    _series_panel(
        axes[1, 0], result.times, result.temperature, "Temperature (K)", "tab:orange",
        mean=result.mean_temperature,
    )
    _series_panel(
        axes[1, 1], result.times, result.pressure, "Pressure (atm)", "tab:green",
        mean=result.mean_pressure,
    )
    fig.suptitle(
        f"{result.n_atoms} Ar atoms, L = {result.box_length:.3f} nm, "
        f"{result.neighbor_strategy}"
    )
    return _finish(fig, show)


def save(filename: str | Path, dpi: int = 150) -> None:
    """
    Save the current figure to a file.

    Args:
        filename: Output filename; the suffix picks the format.
        dpi: Resolution in dots per inch.
    """
    _check_matplotlib()
    plt.savefig(filename, dpi=dpi, bbox_inches="tight")
    logger.info("Saved plot to %s", filename)


def show() -> None:
    """Display all pending plots."""
    _check_matplotlib()
    plt.show()
