"""Parallel backend implementations."""

from .base import ParallelBackend
from .multiprocessing_backend import MultiprocessingBackend
from .serial import SerialBackend
from .threading_backend import ThreadPoolBackend

__all__ = [
    "ParallelBackend",
    "MultiprocessingBackend",
    "SerialBackend",
    "ThreadPoolBackend",
]
