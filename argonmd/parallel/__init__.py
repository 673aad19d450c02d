"""Fork-join backends for the force kernel."""

from .backends.base import ParallelBackend
from .backends.multiprocessing_backend import MultiprocessingBackend
from .backends.serial import SerialBackend
from .backends.threading_backend import ThreadPoolBackend
from .dispatcher import (
    available_backends,
    create_backend,
    get_backend,
    reset_default_backend,
    set_default_backend,
)

__all__ = [
    "ParallelBackend",
    "SerialBackend",
    "ThreadPoolBackend",
    "MultiprocessingBackend",
    "available_backends",
    "create_backend",
    "get_backend",
    "set_default_backend",
    "reset_default_backend",
]
