"""Base interfaces and enumerations for integrators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..exceptions import ConfigurationError

if TYPE_CHECKING:
    from ..system import ParticleState


class Ensemble(Enum):
    """Statistical ensemble sampled by the engine."""

    NVE = "nve"
    NVT = "nvt"

    @classmethod
    def parse(cls, value: Ensemble | str) -> Ensemble:
        """Convert a name such as "NVT" to an Ensemble."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown ensemble: {value!r}. Available: NVE, NVT"
            ) from None


class TemperatureControl(Enum):
    """Thermostat used when the ensemble is NVT."""

    LANGEVIN = "langevin"
    WOODCOCK = "woodcock"

    @classmethod
    def parse(cls, value: TemperatureControl | str) -> TemperatureControl:
        """Convert a name such as "langevin" to a TemperatureControl."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown temperature control: {value!r}. "
                "Available: langevin, woodcock"
            ) from None


class ThermostatModifier(ABC):
    """
    Abstract base class for thermostat modifiers.

    Thermostats adjust momenta in place at the start of every half step,
    before positions are advanced.
    """

    @abstractmethod
    def apply(
        self,
        state: ParticleState,
        measured_temperature: float,
        target_temperature: float,
    ) -> None:
        """
        Modify momenta in place.

        Args:
            state: Particle state to modify.
            measured_temperature: Reduced temperature measured from the
                momenta before this half step.
            target_temperature: Reduced target temperature.
        """
        ...


class Integrator(ABC):
    """
    Abstract base class for the split time-integration scheme.

    One engine step is: half step, force evaluation, kick, half step. Each
    half step lets the thermostat (if any) act on the momenta and then
    drifts positions by p dt / 2.
    """

    @property
    @abstractmethod
    def timestep(self) -> float:
        """Return the integration timestep."""
        ...

    @abstractmethod
    def half_step(
        self,
        state: ParticleState,
        thermostat: ThermostatModifier | None,
        measured_temperature: float,
        target_temperature: float,
    ) -> None:
        """Apply thermostat then advance positions by half a timestep."""
        ...

    @abstractmethod
    def kick(self, state: ParticleState, forces: NDArray[np.floating]) -> None:
        """Advance momenta by a full timestep of force."""
        ...
