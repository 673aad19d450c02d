"""
Constants and unit conversions for argon in reduced Lennard-Jones units.

All engine arithmetic happens in reduced units where sigma, epsilon and the
argon mass are 1. Physical values are derived only when a caller asks for
them, using the helpers below.
"""

from __future__ import annotations

import math

# Interaction cutoff radius (sigma)
RCUTOFF = 2.5

# Verlet skin added to the cutoff when building pair lists (sigma)
MARGIN = 0.75

# Argon Lennard-Jones length (m)
SIGMA = 3.405e-10

# Argon Lennard-Jones well depth (J)
EPSILON = 1.6540172624e-21

# Van der Waals radius of argon (m), used by renderers to size spheres
VDW_RADIUS = 1.88e-10

# Boltzmann constant (J/K)
KB = 1.3806488e-23

# One Hartree (J)
HARTREE = 4.35974465054e-18

AVOGADRO_CONSTANT = 6.022140857e23

# Pa -> atm
ATM = 9.86923266716013e-6

# Molar mass of argon (kg/mol)
ARGON_MOLAR_MASS = 0.039948

# Reduced time unit sqrt(m sigma^2 / epsilon) (s)
TAU = math.sqrt(ARGON_MOLAR_MASS / AVOGADRO_CONSTANT * SIGMA * SIGMA / EPSILON)

# Integration time step (reduced)
DT = 0.0001

# Langevin damping coefficient (reduced)
GAMMA = 1.0

# Woodcock velocity-scaling coupling coefficient
ALPHA = 0.2

# Defaults for a fresh engine
FIRST_NC = 6
FIRST_SCALE = 1.0
FIRST_TEMP = 50.0

# Atoms per face-centered-cubic unit cell
ATOMS_PER_CELL = 4


def lattice_constant(scale: float) -> float:
    """
    Return the reduced FCC lattice constant for a given scale factor.

    A scale of 1 gives a lattice constant of 2^(2/3), i.e. a reduced
    number density of exactly 1.
    """
    return 2.0 ** (2.0 / 3.0) * scale


def reduced_to_hartree(energy: float) -> float:
    """Convert a reduced energy to Hartree."""
    return energy * EPSILON / HARTREE


def reduced_to_kelvin(temperature: float) -> float:
    """Convert a reduced temperature to kelvin."""
    return EPSILON / KB * temperature


def kelvin_to_reduced(temperature: float) -> float:
    """Convert a temperature in kelvin to reduced units."""
    return temperature * KB / EPSILON


def reduced_to_nanometers(length: float) -> float:
    """Convert a reduced length to nanometers."""
    return SIGMA * length * 1.0e9


def reduced_to_picoseconds(time: float) -> float:
    """Convert a reduced time to picoseconds."""
    return TAU * time * 1.0e12


def pressure_atm(
    n_atoms: int, temperature: float, virial: float, box_length: float
) -> float:
    """
    Compute the pressure in atm from reduced quantities.

    P = (N kB T - W / 3) / V, where W = sum(r^2 dF/dr) is the reduced virial
    accumulated by the force kernel (negative for repulsive pairs).

    Args:
        n_atoms: Number of atoms.
        temperature: Measured reduced temperature.
        virial: Reduced virial sum.
        box_length: Reduced periodic box length.

    Returns:
        Pressure in atm.
    """
    volume = (SIGMA * box_length) ** 3
    ideal = n_atoms * EPSILON * temperature
    return (ideal - virial * EPSILON / 3.0) / volume * ATM
