"""Process pool backend."""

from __future__ import annotations

import multiprocessing as mp
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor
from typing import Any

from .base import ParallelBackend


class MultiprocessingBackend(ParallelBackend):
    """
    Process pool backend for CPU-bound chunks.

    Functions and their arguments cross a process boundary, so both must be
    picklable; the force kernel's chunk function lives at module level for
    this reason. Every map ships a full copy of the positions to each
    worker, which only pays off for large pair lists.

    The pool is started on first use and reused until close().
    """

    def __init__(
        self,
        n_workers: int | None = None,
        start_method: str | None = None,
    ) -> None:
        """
        Initialize the backend without starting any processes.

        Args:
            n_workers: Number of worker processes. Defaults to CPU count.
            start_method: "fork", "spawn" or "forkserver". None uses the
                platform default.
        """
        self._n_workers = n_workers or mp.cpu_count()
        self._context = mp.get_context(start_method)
        self._executor: ProcessPoolExecutor | None = None

    @property
    def name(self) -> str:
        return "multiprocessing"

    @property
    def n_workers(self) -> int:
        return self._n_workers

    def parallel_map(
        self,
        func: Callable[..., Any],
        items: Sequence[Any],
    ) -> list[Any]:
        """Map a picklable function over items on the process pool."""
        if len(items) == 0:
            return []

        if self._executor is None:
            self._executor = ProcessPoolExecutor(
                max_workers=self._n_workers, mp_context=self._context
            )
        return list(self._executor.map(func, items))

    def close(self) -> None:
        """Stop the worker processes."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
