"""Tests for the Lennard-Jones force kernel."""

import numpy as np
import pytest

from argonmd.forcefields import ForceResult, LennardJonesForce
from argonmd.neighborlists import AllPairsSearch
from argonmd.parallel import SerialBackend

R_MIN = 2.0 ** (1.0 / 6.0)


def _dimer(separation, box_length=10.0):
    center = 0.5 * box_length
    return np.array(
        [
            [center - 0.5 * separation, center, center],
            [center + 0.5 * separation, center, center],
        ]
    )


@pytest.fixture
def lj():
    """LJ force with the default cutoff on the serial backend."""
    return LennardJonesForce(backend=SerialBackend())


class TestPairPotential:
    """Tests for the analytic pair terms."""

    def test_energy_shift_zeroes_cutoff(self, lj):
        """Test V(rc) + shift vanishes at the cutoff."""
        assert lj.pair_energy(lj.cutoff) + lj.energy_shift == pytest.approx(
            0.0, abs=1e-14
        )

    def test_minimum_energy(self, lj):
        """Test V(2^(1/6)) = -1."""
        assert lj.pair_energy(R_MIN) == pytest.approx(-1.0)


class TestLennardJonesForce:
    """Tests for LennardJonesForce.compute."""

    def test_returns_force_result(self, lj):
        """Test result type and shapes."""
        positions = _dimer(1.5)
        result = lj.compute(positions, np.array([[0, 1]]), 10.0)

        assert isinstance(result, ForceResult)
        assert result.forces.shape == (2, 3)

    def test_zero_force_at_minimum(self, lj):
        """Test the pair force vanishes at r = 2^(1/6)."""
        result = lj.compute(_dimer(R_MIN), np.array([[0, 1]]), 10.0)

        np.testing.assert_allclose(result.forces, 0.0, atol=1e-10)
        assert result.potential_energy == pytest.approx(-1.0 + lj.energy_shift)

    def test_repulsive_inside_minimum(self, lj):
        """Test atoms closer than r_min push apart."""
        result = lj.compute(_dimer(1.0), np.array([[0, 1]]), 10.0)

        assert result.forces[0, 0] < 0.0
        assert result.forces[1, 0] > 0.0
        # F = 24 (2 r^-13 - r^-7) at r = 1
        assert result.forces[1, 0] == pytest.approx(24.0)

    def test_attractive_outside_minimum(self, lj):
        """Test atoms beyond r_min pull together."""
        result = lj.compute(_dimer(1.5), np.array([[0, 1]]), 10.0)

        assert result.forces[0, 0] > 0.0
        assert result.forces[1, 0] < 0.0

    def test_newtons_third_law(self, lj):
        """Test the net force on any configuration is zero."""
        rng = np.random.default_rng(9)
        lattice = np.stack(
            np.meshgrid(np.arange(5), np.arange(5), np.arange(5), indexing="ij"),
            axis=-1,
        ).reshape(-1, 3)
        positions = 1.2 * lattice + rng.uniform(-0.1, 0.1, lattice.shape)
        search = AllPairsSearch(6.0)

        result = lj.compute(positions, search.make_pair(positions), 6.0)

        np.testing.assert_allclose(result.forces.sum(axis=0), 0.0, atol=1e-9)

    def test_pairs_beyond_cutoff_skipped(self, lj):
        """Test listed pairs outside rc contribute nothing."""
        result = lj.compute(_dimer(3.0), np.array([[0, 1]]), 10.0)

        np.testing.assert_array_equal(result.forces, 0.0)
        assert result.potential_energy == 0.0
        assert result.virial == 0.0

    def test_empty_pair_list(self, lj):
        """Test an empty pair list gives zero forces."""
        result = lj.compute(np.zeros((3, 3)), np.empty((0, 2), dtype=np.int64), 5.0)

        np.testing.assert_array_equal(result.forces, np.zeros((3, 3)))
        assert result.potential_energy == 0.0

    def test_minimum_image_used(self, lj):
        """Test atoms interact through the periodic boundary."""
        positions = np.array([[0.1, 5.0, 5.0], [9.4, 5.0, 5.0]])
        result = lj.compute(positions, np.array([[0, 1]]), 10.0)
        direct = lj.compute(_dimer(0.7), np.array([[0, 1]]), 10.0)

        assert result.potential_energy == pytest.approx(direct.potential_energy)
        # Atom 0 is pushed to +x, away from its image neighbor at -0.6
        assert result.forces[0, 0] > 0.0

    def test_force_is_energy_gradient(self, lj):
        """Test F = -dV/dx by central differences."""
        h = 1e-6
        pairs = np.array([[0, 1]])
        positions = _dimer(1.3)

        result = lj.compute(positions, pairs, 10.0)

        plus = positions.copy()
        plus[1, 0] += h
        minus = positions.copy()
        minus[1, 0] -= h
        dv = (
            lj.compute(plus, pairs, 10.0).potential_energy
            - lj.compute(minus, pairs, 10.0).potential_energy
        ) / (2 * h)

        assert result.forces[1, 0] == pytest.approx(-dv, rel=1e-5)

    def test_virial_of_single_pair(self, lj):
        """Test virial = r^2 dF/dr for one pair."""
        r = 1.3
        result = lj.compute(_dimer(r), np.array([[0, 1]]), 10.0)

        expected = r**2 * (24.0 * r**6 - 48.0) / (r**12 * r**2)
        assert result.virial == pytest.approx(expected)
