"""Velocity-scaling thermostat implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from ..exceptions import ConfigurationError
from ..system.params import ALPHA
from .base import ThermostatModifier

if TYPE_CHECKING:
    from ..system import ParticleState


class WoodcockThermostat(ThermostatModifier):
    """
    Woodcock velocity-scaling thermostat with partial coupling.

    Rescales all momenta by

        s = sqrt((T_target + alpha * (T - T_target)) / T)

    which moves the temperature a fraction (1 - alpha) of the way to the
    target on every application. alpha = 0 is plain velocity rescaling.
    Gives the correct average kinetic energy but not a canonical velocity
    distribution.

    Attributes:
        alpha: Fraction of the temperature deviation retained.
    """

    def __init__(self, alpha: float = ALPHA) -> None:
        """
        Initialize Woodcock thermostat.

        Args:
            alpha: Coupling coefficient in [0, 1).
        """
        if not 0.0 <= alpha < 1.0:
            raise ConfigurationError(f"alpha must lie in [0, 1), got {alpha}")
        self._alpha = alpha

    @property
    def alpha(self) -> float:
        return self._alpha

    def scale_factor(
        self, measured_temperature: float, target_temperature: float
    ) -> float:
        """Return the momentum scaling factor, 1.0 at zero temperature."""
        if measured_temperature < 1e-10:
            # Can't rescale from zero temperature
            return 1.0
        blended = target_temperature + self._alpha * (
            measured_temperature - target_temperature
        )
        return float(np.sqrt(blended / measured_temperature))

    def apply(
        self,
        state: ParticleState,
        measured_temperature: float,
        target_temperature: float,
    ) -> None:
        """
        Rescale momenta toward the target temperature.

        Args:
            state: Particle state, modified in place.
            measured_temperature: Reduced temperature before this half step.
            target_temperature: Reduced target temperature.
        """
        state.momenta *= self.scale_factor(measured_temperature, target_temperature)
