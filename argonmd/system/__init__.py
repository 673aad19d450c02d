"""System state, box and unit management."""

from . import params
from .box import PeriodicBox, minimum_image
from .lattice import make_fcc_lattice, random_momenta
from .state import FrozenParticleState, ParticleState

__all__ = [
    "params",
    "PeriodicBox",
    "minimum_image",
    "ParticleState",
    "FrozenParticleState",
    "make_fcc_lattice",
    "random_momenta",
]
