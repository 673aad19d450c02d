"""Tests for particle state."""

import numpy as np
import pytest

from argonmd.system.state import FrozenParticleState, ParticleState


@pytest.fixture
def small_state():
    """Three atoms with known momenta."""
    positions = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    momenta = np.array([[1.0, 0.0, 0.0], [0.0, 2.0, 0.0], [0.0, 0.0, -2.0]])
    return ParticleState.create(positions, momenta)


class TestParticleState:
    """Tests for ParticleState."""

    def test_create_defaults(self):
        """Test momenta and forces default to zero."""
        state = ParticleState.create(np.ones((4, 3)))

        assert state.n_atoms == 4
        np.testing.assert_array_equal(state.momenta, np.zeros((4, 3)))
        np.testing.assert_array_equal(state.forces, np.zeros((4, 3)))

    def test_create_copies_input(self):
        """Test the state does not alias caller arrays."""
        positions = np.zeros((2, 3))
        state = ParticleState.create(positions)
        state.positions[0, 0] = 1.0

        assert positions[0, 0] == 0.0

    def test_bad_shapes_rejected(self):
        """Test mismatched shapes raise ValueError."""
        with pytest.raises(ValueError):
            ParticleState.create(np.zeros((3, 2)))
        with pytest.raises(ValueError):
            ParticleState.create(np.zeros((3, 3)), np.zeros((2, 3)))

    def test_kinetic_energy(self, small_state):
        """Test KE = sum(p^2) / 2."""
        assert small_state.kinetic_energy == pytest.approx(0.5 * (1 + 4 + 4))

    def test_temperature(self, small_state):
        """Test T = KE / (1.5 N)."""
        assert small_state.temperature == pytest.approx(4.5 / 4.5)

    def test_total_momentum(self, small_state):
        """Test vector sum of momenta."""
        np.testing.assert_allclose(small_state.total_momentum, [1.0, 2.0, -2.0])

    def test_max_speed(self, small_state):
        """Test largest |p|."""
        assert small_state.max_speed == pytest.approx(2.0)

    def test_force_magnitudes(self, small_state):
        """Test per-atom |F|."""
        small_state.forces[1] = [3.0, 4.0, 0.0]
        np.testing.assert_allclose(small_state.force_magnitudes(), [0.0, 5.0, 0.0])

    def test_copy_is_independent(self, small_state):
        """Test copy does not share memory."""
        copied = small_state.copy()
        copied.momenta[0, 0] = 99.0

        assert small_state.momenta[0, 0] == 1.0


class TestFrozenParticleState:
    """Tests for read-only snapshots and views."""

    def test_freeze_is_read_only(self, small_state):
        """Test frozen arrays cannot be written."""
        frozen = small_state.freeze()

        assert isinstance(frozen, FrozenParticleState)
        with pytest.raises(ValueError):
            frozen.positions[0, 0] = 1.0

    def test_freeze_is_a_snapshot(self, small_state):
        """Test later changes do not leak into a frozen snapshot."""
        frozen = small_state.freeze()
        small_state.positions[0, 0] = 7.0

        assert frozen.positions[0, 0] == 0.0

    def test_view_tracks_state(self, small_state):
        """Test a view reflects later changes but stays read-only."""
        view = small_state.view()
        small_state.positions[0, 0] = 7.0

        assert view.positions[0, 0] == 7.0
        with pytest.raises(ValueError):
            view.momenta[0, 0] = 1.0

    def test_view_leaves_state_writable(self, small_state):
        """Test taking a view does not lock the underlying arrays."""
        small_state.view()
        small_state.momenta[0, 0] = 5.0

        assert small_state.momenta[0, 0] == 5.0

    def test_thaw_round_trip(self, small_state):
        """Test thaw returns a mutable copy with equal contents."""
        thawed = small_state.freeze().thaw()
        thawed.positions[0, 0] = 3.0

        np.testing.assert_array_equal(thawed.momenta, small_state.momenta)
        assert small_state.positions[0, 0] == 0.0
