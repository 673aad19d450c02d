"""Langevin thermostat implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from ..exceptions import ConfigurationError
from ..system.params import GAMMA
from .base import ThermostatModifier

if TYPE_CHECKING:
    from ..system import ParticleState


class LangevinThermostat(ThermostatModifier):
    """
    Langevin (Ornstein-Uhlenbeck) thermostat.

    Adds friction and random forces to simulate coupling to a heat bath.
    Every momentum component is updated with an Euler-Maruyama step:

        p <- p + (-gamma * p + xi) * dt,   xi ~ N(0, sqrt(2 gamma T / dt))

    so that the noise variance per step is 2 gamma T dt, balancing the
    friction at the target temperature (fluctuation-dissipation).

    Attributes:
        dt: Integration timestep.
        friction: Damping coefficient gamma.
    """

    def __init__(
        self,
        dt: float,
        friction: float = GAMMA,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        """
        Initialize Langevin thermostat.

        Args:
            dt: Integration timestep (reduced).
            friction: Damping coefficient gamma (reduced).
            seed: Random seed, used when rng is not given.
            rng: Random number generator to draw noise from.
        """
        if friction < 0.0:
            raise ConfigurationError(f"Friction must be non-negative, got {friction}")
        self._dt = dt
        self._friction = friction
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    @property
    def friction(self) -> float:
        """Return friction coefficient."""
        return self._friction

    def noise_amplitude(self, target_temperature: float) -> float:
        """Standard deviation of the random force for a target temperature."""
        return float(np.sqrt(2.0 * self._friction * target_temperature / self._dt))

    def apply(
        self,
        state: ParticleState,
        measured_temperature: float,
        target_temperature: float,
    ) -> None:
        """
        Apply one Ornstein-Uhlenbeck update to all momenta.

        Args:
            state: Particle state, modified in place.
            measured_temperature: Unused; Langevin coupling does not need it.
            target_temperature: Reduced target temperature.
        """
        noise = self._rng.normal(
            0.0, self.noise_amplitude(target_temperature), state.momenta.shape
        )
        state.momenta += (-self._friction * state.momenta + noise) * self._dt
