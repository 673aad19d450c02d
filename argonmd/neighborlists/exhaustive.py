"""Exhaustive O(N^2) neighbor search."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..exceptions import ConfigurationError
from ..system.params import MARGIN, RCUTOFF
from .base import NeighborSearch

# Candidate pairs tested per block; bounds peak memory of a build
DEFAULT_BLOCK_PAIRS = 1 << 17


class AllPairsSearch(NeighborSearch):
    """
    Brute force pair search over all i < j.

    Used when the box is too small for a cell grid. Works for any box
    length, including boxes smaller than twice the cutoff.

    Rows i are processed in blocks, each block tested against every j > i,
    so a build never holds more than about `block_pairs` candidates at once.
    """

    def __init__(
        self,
        box_length: float,
        cutoff: float = RCUTOFF,
        margin: float = MARGIN,
        block_pairs: int = DEFAULT_BLOCK_PAIRS,
    ) -> None:
        """
        Initialize the search.

        Args:
            box_length: Periodic box length.
            cutoff: Interaction cutoff distance.
            margin: Skin distance added to the cutoff.
            block_pairs: Approximate number of candidate pairs per block.
        """
        super().__init__(box_length, cutoff, margin)
        if block_pairs < 1:
            raise ConfigurationError(f"block_pairs must be >= 1, got {block_pairs}")
        self._block_pairs = int(block_pairs)

    def make_pair(self, positions: ArrayLike) -> NDArray[np.integer]:
        """
        Build the pair list by testing every pair.

        Args:
            positions: Atomic positions, shape (N, 3).

        Returns:
            Array of shape (N_pairs, 2) with i < j in every row.
        """
        positions = np.asarray(positions, dtype=np.float64)
        n_atoms = len(positions)
        rows_per_block = max(1, self._block_pairs // max(n_atoms, 1))
        columns = np.arange(n_atoms, dtype=np.int64)

        kept = [np.empty((0, 2), dtype=np.int64)]
        for start in range(0, n_atoms - 1, rows_per_block):
            rows = columns[start : start + rows_per_block]
            # Upper triangle of this block of rows
            i_local, j_indices = np.nonzero(rows[:, np.newaxis] < columns[np.newaxis, :])
            kept.append(self._filter_pairs(positions, rows[i_local], j_indices))

        self._pairs = np.concatenate(kept)
        return self._pairs
