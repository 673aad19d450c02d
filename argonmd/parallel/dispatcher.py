"""Backend registry and process-wide default backend."""

from __future__ import annotations

from collections.abc import Callable
from typing import Literal

from ..exceptions import ConfigurationError
from .backends.base import ParallelBackend
from .backends.multiprocessing_backend import MultiprocessingBackend
from .backends.serial import SerialBackend
from .backends.threading_backend import ThreadPoolBackend

BackendType = Literal["serial", "threads", "multiprocessing"]

# Factories keyed by backend name; pooled backends take n_workers
_FACTORIES: dict[str, Callable[..., ParallelBackend]] = {
    "serial": lambda **_: SerialBackend(),
    "threads": ThreadPoolBackend,
    "multiprocessing": MultiprocessingBackend,
}

_default_backend: ParallelBackend | None = None


def available_backends() -> list[str]:
    """Return the registered backend names."""
    return sorted(_FACTORIES)


def create_backend(name: BackendType, **kwargs) -> ParallelBackend:
    """
    Create a new backend by name.

    Args:
        name: One of available_backends().
        **kwargs: Passed to the backend constructor (e.g. n_workers).
            The serial backend ignores them.

    Returns:
        New ParallelBackend instance.

    Raises:
        ConfigurationError: If the name is not registered.
    """
    factory = _FACTORIES.get(str(name).lower())
    if factory is None:
        raise ConfigurationError(
            f"Unknown backend: {name!r}. Available: {', '.join(available_backends())}"
        )
    return factory(**kwargs)


def get_backend(
    backend: BackendType | ParallelBackend | None = None,
    **kwargs,
) -> ParallelBackend:
    """
    Resolve a backend name or instance to an instance.

    Instances are returned as-is, names create a new backend, and None
    gives the shared default (serial unless set_default_backend was called).

    Examples:
        >>> get_backend().name
        'serial'
        >>> get_backend("threads", n_workers=4).n_workers
        4
    """
    global _default_backend

    if isinstance(backend, ParallelBackend):
        return backend
    if backend is not None:
        return create_backend(backend, **kwargs)
    if _default_backend is None:
        _default_backend = SerialBackend()
    return _default_backend


def set_default_backend(
    backend: BackendType | ParallelBackend,
    **kwargs,
) -> ParallelBackend:
    """Install a new process-wide default backend and return it."""
    global _default_backend

    _default_backend = get_backend(backend, **kwargs)
    return _default_backend


def reset_default_backend() -> None:
    """Forget the default backend; the next get_backend() makes a serial one."""
    global _default_backend
    _default_backend = None
