"""
CI-friendly smoke tests.

These tests are designed to:
1. Run fast
2. Touch every layer once (lattice, pair search, forces, integration)
3. Be deterministic (seeded RNG)

Use for continuous integration to catch regressions quickly.
"""

import numpy as np
import pytest

from argonmd import ArgonEngine, SimulationConfig
from argonmd.forcefields import LennardJonesForce
from argonmd.integrators import VelocityVerletIntegrator
from argonmd.neighborlists import select_neighbor_search
from argonmd.system import ParticleState, PeriodicBox, make_fcc_lattice

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def small_crystal():
    """
    Minimal perturbed FCC crystal.

    32 atoms, unit reduced density, deterministic seed.
    """
    rng = np.random.default_rng(42)
    a = 2.0 ** (2.0 / 3.0)
    box = PeriodicBox(2 * a)
    positions = box.wrap_positions(
        make_fcc_lattice(a, 2) + rng.uniform(-0.02, 0.02, (32, 3))
    )
    momenta = rng.normal(0.0, 0.5, (32, 3))
    momenta -= momenta.mean(axis=0)
    return ParticleState.create(positions, momenta), box


# =============================================================================
# Smoke tests
# =============================================================================


class TestComponentPipeline:
    """Smoke test wiring the components by hand."""

    def test_manual_step(self, small_crystal):
        """Test one hand-rolled step produces finite state."""
        state, box = small_crystal
        search = select_neighbor_search(box.length)
        lj = LennardJonesForce()
        integrator = VelocityVerletIntegrator(1e-3)

        pairs = search.make_pair(state.positions)
        integrator.half_step(state, None, state.temperature, 0.0)
        result = lj.compute(state.positions, pairs, box.length)
        integrator.kick(state, result.forces)
        integrator.half_step(state, None, state.temperature, 0.0)
        state.positions[:] = box.wrap_positions(state.positions)

        assert np.all(np.isfinite(state.positions))
        assert np.all(np.isfinite(state.momenta))
        assert result.potential_energy < 0.0


class TestEngineSmoke:
    """Smoke tests through the engine."""

    @pytest.mark.parametrize(
        "ensemble, control",
        [("nve", "langevin"), ("nvt", "langevin"), ("nvt", "woodcock")],
    )
    def test_all_modes_run(self, ensemble, control):
        """Test every ensemble and thermostat runs and stays finite."""
        engine = ArgonEngine(
            SimulationConfig(
                supercell_count=2,
                ensemble=ensemble,
                temperature_control=control,
                seed=0,
            )
        )
        engine.run(10)

        assert np.isfinite(engine.total_energy)
        assert np.isfinite(engine.pressure_atm)
        assert engine.temperature_kelvin > 0.0
