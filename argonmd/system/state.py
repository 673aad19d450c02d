"""Particle state representation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray


@dataclass
class ParticleState:
    """
    Positions, momenta and forces of every atom, in reduced units.

    All atoms have unit mass, so momenta and velocities coincide. Forces are
    overwritten by each force evaluation and never accumulated across steps.

    Attributes:
        positions: Atomic positions, shape (N, 3).
        momenta: Atomic momenta, shape (N, 3).
        forces: Atomic forces, shape (N, 3).
    """

    positions: NDArray[np.floating]
    momenta: NDArray[np.floating]
    forces: NDArray[np.floating]

    def __post_init__(self) -> None:
        """Validate and convert arrays."""
        self.positions = np.asarray(self.positions, dtype=np.float64)
        self.momenta = np.asarray(self.momenta, dtype=np.float64)
        self.forces = np.asarray(self.forces, dtype=np.float64)

        n_atoms = len(self.positions)
        if self.positions.shape != (n_atoms, 3):
            raise ValueError(
                f"positions must have shape (N, 3), got {self.positions.shape}"
            )
        if self.momenta.shape != (n_atoms, 3):
            raise ValueError(
                f"momenta shape {self.momenta.shape} incompatible with "
                f"{n_atoms} atoms"
            )
        if self.forces.shape != (n_atoms, 3):
            raise ValueError(
                f"forces shape {self.forces.shape} incompatible with {n_atoms} atoms"
            )

    @classmethod
    def create(
        cls,
        positions: ArrayLike,
        momenta: ArrayLike | None = None,
    ) -> ParticleState:
        """
        Create a state with zero forces and optional momenta.

        Args:
            positions: Atomic positions, shape (N, 3).
            momenta: Atomic momenta, shape (N, 3). Defaults to zeros.

        Returns:
            New ParticleState instance.
        """
        positions = np.array(positions, dtype=np.float64)
        if momenta is None:
            momenta = np.zeros_like(positions)
        return cls(
            positions=positions,
            momenta=np.array(momenta, dtype=np.float64),
            forces=np.zeros_like(positions),
        )

    @property
    def n_atoms(self) -> int:
        """Return number of atoms."""
        return len(self.positions)

    @property
    def kinetic_energy(self) -> float:
        """Compute total kinetic energy: sum(0.5 * p^2)."""
        return 0.5 * float(np.sum(self.momenta**2))

    @property
    def temperature(self) -> float:
        """
        Compute instantaneous reduced temperature.

        Uses T = KE / (1.5 N), i.e. 3N degrees of freedom with kB = 1.
        """
        if self.n_atoms == 0:
            return 0.0
        return self.kinetic_energy / (1.5 * self.n_atoms)

    @property
    def total_momentum(self) -> NDArray[np.floating]:
        """Return the vector sum of all momenta."""
        return np.sum(self.momenta, axis=0)

    @property
    def max_speed(self) -> float:
        """Return the largest momentum magnitude."""
        if self.n_atoms == 0:
            return 0.0
        return float(np.sqrt(np.max(np.sum(self.momenta**2, axis=1))))

    def force_magnitudes(self) -> NDArray[np.floating]:
        """Return |F| for every atom."""
        return np.linalg.norm(self.forces, axis=1)

    def copy(self) -> ParticleState:
        """Create a deep copy of this state."""
        return ParticleState(
            positions=self.positions.copy(),
            momenta=self.momenta.copy(),
            forces=self.forces.copy(),
        )

    def freeze(self) -> FrozenParticleState:
        """Create an immutable snapshot of this state."""
        return FrozenParticleState(
            positions=self.positions.copy(),
            momenta=self.momenta.copy(),
            forces=self.forces.copy(),
        )

    def view(self) -> FrozenParticleState:
        """
        Return a read-only view sharing memory with this state.

        The view reflects later steps but cannot be written through.
        """
        return FrozenParticleState(
            positions=self.positions.view(),
            momenta=self.momenta.view(),
            forces=self.forces.view(),
        )


@dataclass(frozen=True)
class FrozenParticleState:
    """Immutable snapshot or view of particle state."""

    positions: NDArray[np.floating]
    momenta: NDArray[np.floating]
    forces: NDArray[np.floating]

    def __post_init__(self) -> None:
        """Make arrays read-only."""
        self.positions.flags.writeable = False
        self.momenta.flags.writeable = False
        self.forces.flags.writeable = False

    @property
    def n_atoms(self) -> int:
        """Return number of atoms."""
        return len(self.positions)

    def thaw(self) -> ParticleState:
        """Create a mutable copy of this frozen state."""
        return ParticleState(
            positions=self.positions.copy(),
            momenta=self.momenta.copy(),
            forces=self.forces.copy(),
        )
