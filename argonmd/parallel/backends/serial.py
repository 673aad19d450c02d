"""In-process serial backend."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from .base import ParallelBackend


class SerialBackend(ParallelBackend):
    """
    Runs every chunk in the calling thread, in order.

    The default backend. With a single worker the force kernel sees one
    chunk holding the whole pair list, which makes this the reference
    result the pooled backends are compared against.
    """

    @property
    def name(self) -> str:
        return "serial"

    @property
    def n_workers(self) -> int:
        return 1

    def parallel_map(
        self,
        func: Callable[..., Any],
        items: Sequence[Any],
    ) -> list[Any]:
        return list(map(func, items))
