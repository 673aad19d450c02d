"""Thread pool backend."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from .base import ParallelBackend


class ThreadPoolBackend(ParallelBackend):
    """
    Shared-memory thread pool backend.

    NumPy releases the GIL inside its array kernels, so chunked numpy work
    runs concurrently. The pool is created lazily and kept alive between
    maps; call close() (or use the backend as a context manager) to shut it
    down.
    """

    def __init__(self, n_workers: int | None = None) -> None:
        """
        Initialize thread pool backend.

        Args:
            n_workers: Number of worker threads. Defaults to CPU count.
        """
        self._n_workers = n_workers or os.cpu_count() or 1
        self._executor: ThreadPoolExecutor | None = None

    @property
    def name(self) -> str:
        """Return backend name."""
        return "threads"

    @property
    def n_workers(self) -> int:
        """Return number of parallel workers."""
        return self._n_workers

    def parallel_map(
        self,
        func: Callable[..., Any],
        items: Sequence[Any],
    ) -> list[Any]:
        """
        Apply function to items on the thread pool.

        Args:
            func: Function to apply.
            items: Items to process.

        Returns:
            Results for each item.
        """
        if len(items) == 0:
            return []
        if len(items) == 1:
            return [func(items[0])]

        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._n_workers, thread_name_prefix="argonmd"
            )
        return list(self._executor.map(func, items))

    def close(self) -> None:
        """Shut down the thread pool."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
