"""Cubic periodic simulation box."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..exceptions import ConfigurationError


def minimum_image(
    displacement: ArrayLike, box_length: float
) -> NDArray[np.floating]:
    """
    Apply the minimum image convention to displacement vector(s).

    Each component whose magnitude exceeds L/2 is shifted by exactly one box
    length toward zero. Components are corrected independently, which is
    exact as long as no raw component exceeds 1.5 L.

    Args:
        displacement: Raw displacement(s), shape (3,) or (N, 3).
        box_length: Periodic box length L.

    Returns:
        Corrected displacement(s) with the same shape.
    """
    d = np.array(displacement, dtype=np.float64)
    half = 0.5 * box_length
    d[d > half] -= box_length
    d[d < -half] += box_length
    return d


@dataclass(frozen=True)
class PeriodicBox:
    """
    Cubic box with periodic boundaries on all three axes.

    Attributes:
        length: Box edge length in reduced units.
    """

    length: float

    def __post_init__(self) -> None:
        """Validate the box length."""
        length = float(self.length)
        if not np.isfinite(length) or length <= 0.0:
            raise ConfigurationError(f"Box length must be positive, got {self.length}")
        object.__setattr__(self, "length", length)

    @property
    def volume(self) -> float:
        """Return box volume."""
        return self.length**3

    def minimum_image(self, displacement: ArrayLike) -> NDArray[np.floating]:
        """Return the shortest periodic equivalent of displacement(s)."""
        return minimum_image(displacement, self.length)

    def displacement(
        self, r1: NDArray[np.floating], r2: NDArray[np.floating]
    ) -> NDArray[np.floating]:
        """
        Compute minimum image displacement vector r2 - r1.

        Args:
            r1: First position(s), shape (3,) or (N, 3).
            r2: Second position(s), shape (3,) or (N, 3).

        Returns:
            Displacement vector(s) under minimum image convention.
        """
        return minimum_image(np.asarray(r2) - np.asarray(r1), self.length)

    def wrap_positions(self, positions: ArrayLike) -> NDArray[np.floating]:
        """
        Wrap positions back into [0, L) along each axis.

        A coordinate at or beyond L is shifted down by L and a negative one
        is shifted up by L, once per axis. Particles never travel more than
        one box length per step, so a single shift suffices.

        Args:
            positions: Positions array of shape (N, 3).

        Returns:
            Wrapped positions array of shape (N, 3).
        """
        wrapped = np.array(positions, dtype=np.float64)
        wrapped[wrapped >= self.length] -= self.length
        wrapped[wrapped < 0.0] += self.length
        # A tiny negative coordinate plus L can round up to exactly L
        wrapped[wrapped >= self.length] = 0.0
        return wrapped
