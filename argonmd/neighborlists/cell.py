"""Cell list neighbor search."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..exceptions import GridTooSmallError
from ..system.params import MARGIN, RCUTOFF
from .base import NeighborSearch

# Forward half of the 26 neighboring cells. Together with the reverse half,
# covered when the neighbor cell runs its own search, every unordered pair of
# adjacent cells is visited exactly once.
HALF_STENCIL = np.array(
    [
        [1, 0, 0],
        [-1, 1, 0],
        [0, 1, 0],
        [1, 1, 0],
        [-1, 0, 1],
        [0, 0, 1],
        [1, 0, 1],
        [-1, -1, 1],
        [0, -1, 1],
        [1, -1, 1],
        [-1, 1, 1],
        [0, 1, 1],
        [1, 1, 1],
    ],
    dtype=np.int64,
)

# Smallest usable number of cells per axis
MIN_CELLS_PER_AXIS = 3


class CellList(NeighborSearch):
    """
    Cell list (mesh) neighbor search.

    Divides the cubic box into m^3 cells whose edge exceeds cutoff + margin,
    counting-sorts atoms by cell, and compares each cell only against itself
    and its 13 forward neighbors. This reduces the search from O(N^2) to O(N).

    Attributes:
        box_length: Periodic box length.
        _m: Number of cells per axis.
        _cell_size: Cell edge length.
        _counts: Number of atoms in each cell.
        _offsets: Prefix sums of _counts into _sorted_buffer.
        _sorted_buffer: Atom indices ordered by cell id.
    """

    def __init__(
        self,
        box_length: float,
        cutoff: float = RCUTOFF,
        margin: float = MARGIN,
    ) -> None:
        """
        Initialize the cell grid.

        Args:
            box_length: Periodic box length.
            cutoff: Interaction cutoff distance.
            margin: Skin distance added to the cutoff.

        Raises:
            GridTooSmallError: If the box holds fewer than 3 cells per axis.
        """
        super().__init__(box_length, cutoff, margin)

        self._m = self.cells_per_axis(box_length, cutoff, margin)
        if self._m < MIN_CELLS_PER_AXIS:
            raise GridTooSmallError(box_length, self._m)

        self._cell_size = self.box_length / self._m
        self._n_cells = self._m**3

        self._counts: NDArray[np.integer] = np.zeros(self._n_cells, dtype=np.int64)
        self._offsets: NDArray[np.integer] = np.zeros(self._n_cells, dtype=np.int64)
        self._sorted_buffer: NDArray[np.integer] = np.empty(0, dtype=np.int64)

    @staticmethod
    def cells_per_axis(
        box_length: float,
        cutoff: float = RCUTOFF,
        margin: float = MARGIN,
    ) -> int:
        """
        Return m = floor(L / (cutoff + margin)) - 1.

        One cell is given up so that the cell edge L/m is strictly larger
        than the pair-list radius.
        """
        return int(np.floor(box_length / (cutoff + margin))) - 1

    @classmethod
    def is_supported(
        cls,
        box_length: float,
        cutoff: float = RCUTOFF,
        margin: float = MARGIN,
    ) -> bool:
        """Check whether a cell grid can be built for this box."""
        return cls.cells_per_axis(box_length, cutoff, margin) >= MIN_CELLS_PER_AXIS

    @property
    def m(self) -> int:
        """Return number of cells per axis."""
        return self._m

    @property
    def cell_size(self) -> float:
        """Return the cell edge length."""
        return self._cell_size

    @property
    def counts(self) -> NDArray[np.integer]:
        """Return per-cell occupancy from the last build."""
        return self._counts

    @property
    def offsets(self) -> NDArray[np.integer]:
        """Return per-cell start offsets into the sorted buffer."""
        return self._offsets

    @property
    def sorted_buffer(self) -> NDArray[np.integer]:
        """Return atom indices ordered by cell id."""
        return self._sorted_buffer

    def cell_coordinates(self, positions: ArrayLike) -> NDArray[np.integer]:
        """
        Get integer cell coordinates for positions.

        Coordinates are wrapped periodically into [0, m), so positions
        outside the primary box map to their periodic cell.

        Args:
            positions: Positions, shape (N, 3).

        Returns:
            Array of (ix, iy, iz), shape (N, 3).
        """
        positions = np.asarray(positions, dtype=np.float64)
        return np.floor(positions / self._cell_size).astype(np.int64) % self._m

    def cell_of(self, positions: ArrayLike) -> NDArray[np.integer]:
        """Get the linear cell id ix + iy*m + iz*m^2 for each position."""
        coords = self.cell_coordinates(positions)
        m = self._m
        return coords[:, 0] + coords[:, 1] * m + coords[:, 2] * m * m

    def _sort_into_cells(self, cell_ids: NDArray[np.integer]) -> None:
        """Counting sort: tally cells, prefix-sum offsets, scatter indices."""
        self._counts = np.bincount(cell_ids, minlength=self._n_cells).astype(np.int64)

        self._offsets = np.zeros(self._n_cells, dtype=np.int64)
        np.cumsum(self._counts[:-1], out=self._offsets[1:])

        # A stable argsort places every atom at offsets[cell] + its rank in
        # the cell, exactly where the counting-sort scatter would
        self._sorted_buffer = np.argsort(cell_ids, kind="stable").astype(np.int64)

    def _neighbor_cell(
        self, coords: NDArray[np.integer], shift: NDArray[np.integer]
    ) -> NDArray[np.integer]:
        """Linear id of the cell at coords + shift, wrapped periodically."""
        m = self._m
        shifted = (coords + shift) % m
        return shifted[:, 0] + shifted[:, 1] * m + shifted[:, 2] * m * m

    def _expand_candidates(
        self,
        atoms: NDArray[np.integer],
        target_cells: NDArray[np.integer],
    ) -> tuple[NDArray[np.integer], NDArray[np.integer]]:
        """
        Pair every atom with every occupant of its target cell.

        Args:
            atoms: Atom indices, shape (K,).
            target_cells: Cell id to search for each atom, shape (K,).

        Returns:
            Tuple of (i_indices, j_indices) for all candidate pairs.
        """
        lengths = self._counts[target_cells]
        total = int(np.sum(lengths))
        if total == 0:
            empty = np.empty(0, dtype=np.int64)
            return empty, empty

        i_indices = np.repeat(atoms, lengths)
        starts = np.repeat(self._offsets[target_cells], lengths)
        run_starts = np.repeat(np.cumsum(lengths) - lengths, lengths)
        within = np.arange(total) - run_starts
        j_indices = self._sorted_buffer[starts + within]

        return i_indices, j_indices

    def make_pair(self, positions: ArrayLike) -> NDArray[np.integer]:
        """
        Build the pair list using the cell decomposition.

        Args:
            positions: Atomic positions, shape (N, 3).

        Returns:
            Array of shape (N_pairs, 2) with i < j in every row.
        """
        positions = np.asarray(positions, dtype=np.float64)
        n_atoms = len(positions)

        coords = self.cell_coordinates(positions)
        m = self._m
        cell_ids = coords[:, 0] + coords[:, 1] * m + coords[:, 2] * m * m
        self._sort_into_cells(cell_ids)

        # Position of each atom inside the sorted buffer
        slot = np.empty(n_atoms, dtype=np.int64)
        slot[self._sorted_buffer] = np.arange(n_atoms)

        atoms = np.arange(n_atoms, dtype=np.int64)
        chunks = []

        # Own cell: each unordered pair once, by buffer slot
        i_idx, j_idx = self._expand_candidates(atoms, cell_ids)
        own = slot[j_idx] > slot[i_idx]
        chunks.append(self._filter_pairs(positions, i_idx[own], j_idx[own]))

        for shift in HALF_STENCIL:
            targets = self._neighbor_cell(coords, shift)
            i_idx, j_idx = self._expand_candidates(atoms, targets)
            chunks.append(self._filter_pairs(positions, i_idx, j_idx))

        self._pairs = np.concatenate(chunks, axis=0)
        return self._pairs
