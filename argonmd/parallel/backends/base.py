"""Abstract base class for parallel backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any

import numpy as np
from numpy.typing import NDArray


class ParallelBackend(ABC):
    """
    Abstract base class for fork-join parallel backends.

    Work is split into contiguous index ranges, one per worker, mapped over
    the pool, and the partial results are combined once every worker has
    returned. A call blocks until the whole map completes.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return backend name."""
        ...

    @property
    @abstractmethod
    def n_workers(self) -> int:
        """Return number of parallel workers."""
        ...

    @abstractmethod
    def parallel_map(
        self,
        func: Callable[..., Any],
        items: Sequence[Any],
    ) -> list[Any]:
        """
        Apply function to items in parallel and wait for all results.

        Args:
            func: Function to apply.
            items: Items to process.

        Returns:
            Results for each item, in input order.
        """
        ...

    def close(self) -> None:
        """Release pool resources. No-op unless a backend holds a pool."""

    def __enter__(self) -> ParallelBackend:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def partition(self, n_items: int, n_parts: int | None = None) -> list[tuple[int, int]]:
        """
        Split range(n_items) into contiguous, nearly equal chunks.

        The first n_items % n_parts chunks get one extra item. Empty chunks
        are dropped.

        Args:
            n_items: Total number of items.
            n_parts: Number of chunks. Defaults to n_workers.

        Returns:
            List of (start_index, end_index) tuples.
        """
        n_parts = self.n_workers if n_parts is None else n_parts
        n_parts = max(1, n_parts)

        per_part = n_items // n_parts
        remainder = n_items % n_parts

        ranges = []
        for rank in range(n_parts):
            if rank < remainder:
                start = rank * (per_part + 1)
                end = start + per_part + 1
            else:
                start = rank * per_part + remainder
                end = start + per_part
            if end > start:
                ranges.append((start, end))

        return ranges

    def reduce_forces(
        self,
        partial_forces: Sequence[NDArray[np.floating]],
        n_atoms: int,
    ) -> NDArray[np.floating]:
        """
        Sum private per-worker force buffers into one array.

        This is the merge half of private-accumulate-then-merge: workers
        never write to a shared force array.

        Args:
            partial_forces: Force contributions, each of shape (n_atoms, 3).
            n_atoms: Total number of atoms.

        Returns:
            Total forces, shape (n_atoms, 3).
        """
        total = np.zeros((n_atoms, 3), dtype=np.float64)
        for forces in partial_forces:
            total += forces
        return total

    def reduce_sum(self, partial_values: Sequence[float]) -> float:
        """Sum per-worker scalar contributions."""
        return float(sum(partial_values, 0.0))
