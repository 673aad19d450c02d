"""Lennard-Jones force implementation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..parallel import ParallelBackend, get_backend
from ..system.box import minimum_image
from ..system.params import RCUTOFF


@dataclass(frozen=True)
class ForceResult:
    """
    Output of one force evaluation.

    Attributes:
        forces: Force on every atom, shape (N, 3).
        potential_energy: Shifted potential energy (reduced).
        virial: Sum of r^2 dF/dr over interacting pairs (reduced).
    """

    forces: NDArray[np.floating]
    potential_energy: float
    virial: float


def _accumulate_pairs(
    args: tuple[NDArray[np.floating], NDArray[np.integer], float, float, float],
) -> tuple[NDArray[np.floating], float, float]:
    """
    Evaluate one chunk of pairs into a private force buffer.

    Module-level so that process pools can pickle it.

    Args:
        args: (positions, pairs, box_length, cutoff, energy_shift).

    Returns:
        Tuple of (forces, potential_energy, virial) for this chunk.
    """
    positions, pairs, box_length, cutoff, energy_shift = args
    forces = np.zeros_like(positions)

    i_indices = pairs[:, 0]
    j_indices = pairs[:, 1]

    d = minimum_image(positions[j_indices] - positions[i_indices], box_length)
    r2 = np.einsum("ij,ij->i", d, d)

    mask = r2 <= cutoff * cutoff
    if not np.any(mask):
        return forces, 0.0, 0.0

    i_indices = i_indices[mask]
    j_indices = j_indices[mask]
    d = d[mask]
    r2 = r2[mask]

    # r = 0 cannot occur: atoms start on a lattice and never close a gap
    # faster than the pair-list margin allows
    r6 = r2 * r2 * r2
    r12 = r6 * r6
    dfdr = (24.0 * r6 - 48.0) / (r12 * r2)

    f = dfdr[:, np.newaxis] * d

    # Newton's third law
    np.add.at(forces, i_indices, f)
    np.add.at(forces, j_indices, -f)

    energy = float(np.sum(4.0 * (1.0 / r12 - 1.0 / r6) + energy_shift))
    virial = float(np.sum(r2 * dfdr))

    return forces, energy, virial


class LennardJonesForce:
    """
    Truncated and shifted Lennard-Jones 12-6 potential in reduced units.

    V(r) = 4 [r^-12 - r^-6] - V(rc) for r <= rc, zero beyond.

    The pair list is split into one contiguous chunk per backend worker.
    Each chunk writes only to its own force buffer and scalar totals; the
    buffers are summed after all chunks finish, so no two workers ever
    touch the same force slot. Summation order across chunks depends on the
    worker count, so results agree to rounding, not bit for bit.

    Attributes:
        cutoff: Cutoff distance.
        energy_shift: -V(rc), added to every interacting pair.
    """

    def __init__(
        self,
        cutoff: float = RCUTOFF,
        backend: ParallelBackend | None = None,
    ) -> None:
        """
        Initialize Lennard-Jones force.

        Args:
            cutoff: Cutoff distance for interactions.
            backend: Parallel backend for the pair loop. Defaults to the
                process-wide default backend.
        """
        self.cutoff = cutoff
        self.backend = get_backend(backend)

        rcm6 = cutoff**-6
        rcm12 = cutoff**-12
        self.energy_shift = 4.0 * (rcm6 - rcm12)

    @staticmethod
    def pair_energy(r: ArrayLike) -> NDArray[np.floating]:
        """Unshifted pair potential 4 (r^-12 - r^-6)."""
        r = np.asarray(r, dtype=np.float64)
        inv6 = r**-6
        return 4.0 * (inv6 * inv6 - inv6)

    def compute(
        self,
        positions: ArrayLike,
        pairs: NDArray[np.integer],
        box_length: float,
    ) -> ForceResult:
        """
        Compute forces, potential energy and virial for a pair list.

        Args:
            positions: Atomic positions, shape (N, 3).
            pairs: Candidate pairs, shape (N_pairs, 2). Pairs beyond the
                cutoff are skipped.
            box_length: Periodic box length.

        Returns:
            ForceResult with freshly computed forces.
        """
        positions = np.asarray(positions, dtype=np.float64)
        n_atoms = len(positions)

        if len(pairs) == 0:
            return ForceResult(np.zeros((n_atoms, 3), dtype=np.float64), 0.0, 0.0)

        chunks = [
            (positions, pairs[start:end], box_length, self.cutoff, self.energy_shift)
            for start, end in self.backend.partition(len(pairs))
        ]
        partials = self.backend.parallel_map(_accumulate_pairs, chunks)

        forces = self.backend.reduce_forces([p[0] for p in partials], n_atoms)
        energy = self.backend.reduce_sum([p[1] for p in partials])
        virial = self.backend.reduce_sum([p[2] for p in partials])

        return ForceResult(forces, energy, virial)
