"""Base interface for neighbor (pair) searches."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..system.box import minimum_image
from ..system.params import MARGIN, RCUTOFF


class NeighborSearch(ABC):
    """
    Abstract base class for pair-list construction strategies.

    A search returns every pair (i, j), i < j, whose minimum image separation
    is within cutoff + margin. The margin (Verlet skin) keeps the list valid
    for several steps; deciding when to rebuild is left to the caller.

    Attributes:
        box_length: Periodic box length the search was set up for.
    """

    def __init__(
        self,
        box_length: float,
        cutoff: float = RCUTOFF,
        margin: float = MARGIN,
    ) -> None:
        """
        Initialize the search.

        Args:
            box_length: Periodic box length.
            cutoff: Interaction cutoff distance.
            margin: Skin distance added to the cutoff.
        """
        self.box_length = float(box_length)
        self._cutoff = cutoff
        self._margin = margin
        self._list_cutoff = cutoff + margin
        self._pairs: NDArray[np.integer] = np.empty((0, 2), dtype=np.int64)

    @property
    def name(self) -> str:
        """Return a short strategy name."""
        return type(self).__name__

    @property
    def cutoff(self) -> float:
        """Return the interaction cutoff distance."""
        return self._cutoff

    @property
    def margin(self) -> float:
        """Return the skin distance."""
        return self._margin

    @property
    def list_cutoff(self) -> float:
        """Return the neighbor list cutoff (cutoff + margin)."""
        return self._list_cutoff

    @property
    def n_pairs(self) -> int:
        """Return the number of pairs found by the last build."""
        return len(self._pairs)

    @abstractmethod
    def make_pair(self, positions: ArrayLike) -> NDArray[np.integer]:
        """
        Rebuild the pair list from scratch.

        Args:
            positions: Atomic positions, shape (N, 3).

        Returns:
            Array of shape (N_pairs, 2) with i < j in every row.
        """
        ...

    def get_pairs(self) -> NDArray[np.integer]:
        """Return the pairs from the last build."""
        return self._pairs

    def get_neighbors(self, atom_index: int) -> NDArray[np.integer]:
        """
        Get neighbors of a specific atom from the last build.

        Args:
            atom_index: Index of the atom to query.

        Returns:
            Array of neighbor atom indices.
        """
        pairs = self._pairs
        left = pairs[pairs[:, 0] == atom_index, 1]
        right = pairs[pairs[:, 1] == atom_index, 0]
        return np.concatenate([left, right])

    def get_distances(self, positions: ArrayLike) -> NDArray[np.floating]:
        """
        Compute minimum image distances for all pairs of the last build.

        Args:
            positions: Current atomic positions.

        Returns:
            Array of distances for each pair in get_pairs().
        """
        if len(self._pairs) == 0:
            return np.array([], dtype=np.float64)

        positions = np.asarray(positions, dtype=np.float64)
        dr = minimum_image(
            positions[self._pairs[:, 1]] - positions[self._pairs[:, 0]],
            self.box_length,
        )
        return np.linalg.norm(dr, axis=1)

    def _filter_pairs(
        self,
        positions: NDArray[np.floating],
        i_indices: NDArray[np.integer],
        j_indices: NDArray[np.integer],
    ) -> NDArray[np.integer]:
        """Keep candidate pairs within the list cutoff and order each as i < j."""
        if len(i_indices) == 0:
            return np.empty((0, 2), dtype=np.int64)

        d = minimum_image(positions[j_indices] - positions[i_indices], self.box_length)
        r_sq = np.einsum("ij,ij->i", d, d)

        keep = r_sq <= self._list_cutoff**2
        i_kept = i_indices[keep]
        j_kept = j_indices[keep]

        return np.column_stack(
            [np.minimum(i_kept, j_kept), np.maximum(i_kept, j_kept)]
        ).astype(np.int64)
