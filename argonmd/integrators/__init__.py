"""Integrator and thermostat implementations."""

from .base import Ensemble, Integrator, TemperatureControl, ThermostatModifier
from .langevin import LangevinThermostat
from .thermostats import WoodcockThermostat
from .velocity_verlet import VelocityVerletIntegrator

__all__ = [
    # Base classes
    "Integrator",
    "ThermostatModifier",
    # Enumerations
    "Ensemble",
    "TemperatureControl",
    # Integrators
    "VelocityVerletIntegrator",
    # Thermostats
    "LangevinThermostat",
    "WoodcockThermostat",
]
