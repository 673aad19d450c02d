"""Initial configurations: FCC lattice positions and thermal momenta."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

# Fractional coordinates of the four atoms of an FCC unit cell
FCC_BASIS = np.array(
    [
        [0.0, 0.0, 0.0],
        [0.5, 0.5, 0.0],
        [0.0, 0.5, 0.5],
        [0.5, 0.0, 0.5],
    ]
)


def make_fcc_lattice(lattice_constant: float, n_cells: int) -> NDArray[np.floating]:
    """
    Build an FCC crystal replicated n_cells times along each axis.

    The returned positions are recentered so that their center of mass sits
    at the origin.

    Args:
        lattice_constant: Edge length of the cubic unit cell.
        n_cells: Number of unit cells per axis.

    Returns:
        Positions array of shape (4 * n_cells**3, 3).
    """
    grid = np.arange(n_cells, dtype=np.float64)
    origins = np.stack(np.meshgrid(grid, grid, grid, indexing="ij"), axis=-1)
    origins = origins.reshape(-1, 1, 3)

    positions = lattice_constant * (origins + FCC_BASIS[np.newaxis, :, :])
    positions = positions.reshape(-1, 3)

    return positions - positions.mean(axis=0)


def random_momenta(
    n_atoms: int,
    temperature: float,
    rng: np.random.Generator,
) -> NDArray[np.floating]:
    """
    Draw momenta with random directions and a common speed sqrt(3 T).

    The mean momentum is subtracted afterwards so that the center of mass
    does not drift.

    Args:
        n_atoms: Number of atoms.
        temperature: Target reduced temperature.
        rng: Random number generator.

    Returns:
        Momenta array of shape (n_atoms, 3).
    """
    speed = np.sqrt(3.0 * temperature)

    directions = rng.uniform(-1.0, 1.0, (n_atoms, 3))
    norms = np.linalg.norm(directions, axis=1)
    # A draw of exactly zero has no direction; redraw those rows
    while np.any(norms == 0.0):
        zero = norms == 0.0
        directions[zero] = rng.uniform(-1.0, 1.0, (int(np.sum(zero)), 3))
        norms = np.linalg.norm(directions, axis=1)

    momenta = speed * directions / norms[:, np.newaxis]
    momenta -= momenta.mean(axis=0)
    return momenta
