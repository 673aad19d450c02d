"""Argon MD simulation engine."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..config import SimulationConfig
from ..exceptions import ConfigurationError, InvalidEnsembleError
from ..forcefields import LennardJonesForce
from ..integrators import (
    Ensemble,
    LangevinThermostat,
    TemperatureControl,
    ThermostatModifier,
    VelocityVerletIntegrator,
    WoodcockThermostat,
)
from ..neighborlists import NeighborSearch, select_neighbor_search
from ..parallel import ParallelBackend, get_backend
from ..system import (
    FrozenParticleState,
    ParticleState,
    PeriodicBox,
    make_fcc_lattice,
    params,
    random_momenta,
)
from .reporters import Reporter, ReporterGroup

logger = logging.getLogger(__name__)


class ArgonEngine:
    """
    Molecular dynamics engine for Lennard-Jones argon in a periodic box.

    Owns the particle state and every derived quantity. Callers drive it
    with step() and may issue commands between steps; all queries are
    side-effect free and convert from reduced units at call time.

    One step:
    1. Half step: measure kinetic energy and temperature, apply the
       thermostat (NVT), drift positions by p dt / 2
    2. Pair-list check: spend 2 v_max dt of the margin budget, rebuild the
       list when the budget runs out
    3. Force evaluation over the pair list, then kick p += F dt
    4. Half step again with the kicked momenta
    5. Periodic wrap
    6. Advance time and step counter

    Example usage:
        engine = ArgonEngine(SimulationConfig(supercell_count=4, seed=1))
        engine.set_temperature_target(80.0)
        engine.run(1000)
        print(engine.temperature_kelvin, engine.pressure_atm)

    Attributes:
        config: Configuration the engine was created with.
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        backend: ParallelBackend | str | None = None,
    ) -> None:
        """
        Initialize the engine and build the initial lattice.

        Args:
            config: Simulation parameters. Defaults to SimulationConfig().
            backend: Parallel backend instance or name. Overrides
                config.backend when given.
        """
        self.config = config if config is not None else SimulationConfig()
        cfg = self.config

        backend_kwargs = {} if cfg.n_workers is None else {"n_workers": cfg.n_workers}
        backend_spec = backend if backend is not None else cfg.backend
        self._backend = get_backend(backend_spec, **backend_kwargs)
        # Backends created here from a name are closed by close()
        self._owns_backend = isinstance(backend_spec, str)

        self._rng = np.random.default_rng(cfg.seed)
        self._integrator = VelocityVerletIntegrator(cfg.dt)
        self._force_field = LennardJonesForce(cfg.cutoff, backend=self._backend)
        self._thermostats: dict[TemperatureControl, ThermostatModifier] = {
            TemperatureControl.LANGEVIN: LangevinThermostat(
                cfg.dt, friction=cfg.gamma, rng=self._rng
            ),
            TemperatureControl.WOODCOCK: WoodcockThermostat(cfg.alpha),
        }

        # Live simulation parameters
        self._n_cells = cfg.supercell_count
        self._scale = cfg.lattice_scale
        self._target_temperature = params.kelvin_to_reduced(cfg.temperature)
        self._ensemble = cfg.ensemble
        self._temperature_control = cfg.temperature_control

        self._reporters = ReporterGroup()
        self._wall_time = 0.0

        self.recompute()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def step(self) -> None:
        """Advance the system by one timestep."""
        self._half_step()
        self._check_pairlist()
        self._evaluate_forces()
        self._integrator.kick(self._state, self._state.forces)
        self._half_step()
        self.periodic_wrap()

        self._elapsed_time = self._step_count * self._integrator.timestep
        self._step_count += 1

        self._reporters.report(self)

    def run(
        self,
        n_steps: int,
        callback: Callable[[ArgonEngine], bool] | None = None,
    ) -> ArgonEngine:
        """
        Run the simulation for a number of steps.

        Args:
            n_steps: Number of steps to run.
            callback: Optional callback called after each step.
                Return True to stop early.

        Returns:
            This engine.
        """
        self._reporters.initialize(self)
        start_time = time.perf_counter()

        try:
            for _ in range(n_steps):
                self.step()
                if callback is not None and callback(self):
                    break
        finally:
            self._wall_time += time.perf_counter() - start_time
            self._reporters.finalize(self)

        return self

    def recompute(self) -> None:
        """
        Restart from a fresh FCC lattice at the target temperature.

        Resets the step counter and clock, regenerates positions and
        momenta, picks the pair search strategy for the new box, and builds
        the pair list.
        """
        self._lattice_constant = params.lattice_constant(self._scale)

        positions = make_fcc_lattice(self._lattice_constant, self._n_cells)
        momenta = random_momenta(len(positions), self._target_temperature, self._rng)

        self._reset(
            ParticleState.create(positions, momenta),
            self._lattice_constant * self._n_cells,
        )
        logger.info(
            "Initialized %d atoms (Nc=%d, L=%.4f, %s)",
            self.n_atoms,
            self._n_cells,
            self._box.length,
            self._ensemble.name,
        )

    def load_particles(
        self,
        positions: ArrayLike,
        momenta: ArrayLike | None,
        box_length: float,
    ) -> None:
        """
        Replace the lattice with an explicit configuration.

        Resets the step counter and clock like recompute(); the supercell
        count and lattice scale are left untouched and will be used again by
        the next recompute().

        Args:
            positions: Atomic positions, shape (N, 3).
            momenta: Atomic momenta, shape (N, 3). None means at rest.
            box_length: Periodic box length (reduced).
        """
        self._reset(ParticleState.create(positions, momenta), box_length)

    def set_temperature_target(self, kelvin: float) -> None:
        """Set the target temperature; the thermostat uses it from the next step."""
        if kelvin < 0.0:
            raise ConfigurationError(f"Temperature must be non-negative, got {kelvin}")
        self._target_temperature = params.kelvin_to_reduced(kelvin)

    def set_lattice_scale(self, scale: float) -> None:
        """Change the lattice scale and restart from a fresh lattice."""
        if scale <= 0.0:
            raise ConfigurationError(f"Lattice scale must be positive, got {scale}")
        self._scale = scale
        self.recompute()

    def set_supercell_count(self, n_cells: int) -> None:
        """Change the number of FCC cells per edge and restart."""
        if int(n_cells) != n_cells or n_cells < 1:
            raise ConfigurationError(
                f"Supercell count must be an integer >= 1, got {n_cells}"
            )
        self._n_cells = int(n_cells)
        self.recompute()

    def set_ensemble(self, ensemble: Ensemble | str) -> None:
        """Switch between NVE and NVT and restart."""
        self._ensemble = Ensemble.parse(ensemble)
        self.recompute()

    def set_temperature_control(self, control: TemperatureControl | str) -> None:
        """Select the NVT thermostat; takes effect on the next step."""
        self._temperature_control = TemperatureControl.parse(control)

    def periodic_wrap(self) -> None:
        """Wrap every coordinate back into [0, L)."""
        self._state.positions[:] = self._box.wrap_positions(self._state.positions)

    def close(self) -> None:
        """
        Release the parallel backend if this engine created it.

        A backend passed in as an instance belongs to the caller and is
        left running.
        """
        if self._owns_backend:
            self._backend.close()

    def __enter__(self) -> ArgonEngine:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def add_reporter(self, reporter: Reporter) -> None:
        """Add a reporter."""
        self._reporters.add(reporter)

    def remove_reporter(self, reporter: Reporter) -> None:
        """Remove a reporter."""
        self._reporters.remove(reporter)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reset(self, state: ParticleState, box_length: float) -> None:
        """Install a new state and box and rebuild everything derived."""
        self._state = state
        self._box = PeriodicBox(box_length)
        self._step_count = 1
        self._elapsed_time = 0.0
        self._rebuild_count = 0

        self._neighbor_search: NeighborSearch = select_neighbor_search(
            self._box.length, self.config.cutoff, self.config.margin
        )
        self._margin_budget = self.config.margin
        self._pairs = self._neighbor_search.make_pair(self._state.positions)

        self._potential_energy = 0.0
        self._virial = 0.0
        self._evaluate_forces()
        self._measure()

    def _measure(self) -> None:
        """Update kinetic energy, total energy and temperature from momenta."""
        self._kinetic_energy = self._state.kinetic_energy
        self._total_energy = self._kinetic_energy + self._potential_energy
        self._temperature = self._state.temperature

    def _thermostat(self) -> ThermostatModifier | None:
        """Return the momentum modifier for the current ensemble."""
        if self._ensemble is Ensemble.NVE:
            return None
        if self._ensemble is Ensemble.NVT:
            thermostat = self._thermostats.get(self._temperature_control)
            if thermostat is None:
                raise InvalidEnsembleError(
                    f"No thermostat for temperature control "
                    f"{self._temperature_control!r}"
                )
            return thermostat
        raise InvalidEnsembleError(f"Unknown ensemble {self._ensemble!r}")

    def _half_step(self) -> None:
        """Measure, thermostat and drift by half a timestep."""
        self._measure()
        self._integrator.half_step(
            self._state,
            self._thermostat(),
            self._temperature,
            self._target_temperature,
        )

    def _check_pairlist(self) -> bool:
        """
        Spend the margin budget and rebuild the pair list when it runs out.

        Two atoms approach each other at most 2 v_max per unit time, so the
        list stays complete while the accumulated 2 v_max dt is below the
        margin.

        Returns:
            True if the list was rebuilt.
        """
        v_max = self._state.max_speed
        self._margin_budget -= 2.0 * v_max * self._integrator.timestep

        if self._margin_budget < 0.0:
            self._margin_budget = self.config.margin
            self._pairs = self._neighbor_search.make_pair(self._state.positions)
            self._rebuild_count += 1
            logger.debug(
                "Rebuilt pair list at step %d: %d pairs (%s)",
                self._step_count,
                len(self._pairs),
                self._neighbor_search.name,
            )
            return True

        return False

    def _evaluate_forces(self) -> None:
        """Recompute forces, potential energy and virial from scratch."""
        result = self._force_field.compute(
            self._state.positions, self._pairs, self._box.length
        )
        self._state.forces[:] = result.forces
        self._potential_energy = result.potential_energy
        self._virial = result.virial

    # ------------------------------------------------------------------
    # Queries (reduced units)
    # ------------------------------------------------------------------

    @property
    def atoms(self) -> FrozenParticleState:
        """Return a read-only view of positions, momenta and forces."""
        return self._state.view()

    @property
    def box(self) -> PeriodicBox:
        """Return the periodic box."""
        return self._box

    @property
    def backend(self) -> ParallelBackend:
        """Return the parallel backend."""
        return self._backend

    @property
    def pairs(self) -> NDArray[np.integer]:
        """Return the current pair list (read-only)."""
        view = self._pairs.view()
        view.flags.writeable = False
        return view

    @property
    def neighbor_search(self) -> NeighborSearch:
        """Return the active pair search strategy."""
        return self._neighbor_search

    @property
    def neighbor_strategy(self) -> str:
        """Return the name of the active pair search strategy."""
        return self._neighbor_search.name

    @property
    def margin_budget(self) -> float:
        """Return the remaining pair-list margin."""
        return self._margin_budget

    @property
    def rebuild_count(self) -> int:
        """Return the number of pair-list rebuilds since the last reset."""
        return self._rebuild_count

    @property
    def step_count(self) -> int:
        """Return the step counter (1 right after a reset)."""
        return self._step_count

    @property
    def completed_steps(self) -> int:
        """Return the number of steps taken since the last reset."""
        return self._step_count - 1

    @property
    def supercell_count(self) -> int:
        """Return the number of FCC cells per edge."""
        return self._n_cells

    @property
    def lattice_scale(self) -> float:
        """Return the lattice scale factor."""
        return self._scale

    @property
    def ensemble(self) -> Ensemble:
        """Return the active ensemble."""
        return self._ensemble

    @property
    def temperature_control(self) -> TemperatureControl:
        """Return the NVT thermostat selection."""
        return self._temperature_control

    @property
    def n_atoms(self) -> int:
        """Return number of atoms."""
        return self._state.n_atoms

    @property
    def box_length(self) -> float:
        """Return the periodic box length (reduced)."""
        return self._box.length

    @property
    def timestep(self) -> float:
        """Return the integration timestep (reduced)."""
        return self._integrator.timestep

    @property
    def elapsed_time(self) -> float:
        """Return elapsed simulation time (reduced)."""
        return self._elapsed_time

    @property
    def target_temperature(self) -> float:
        """Return target temperature (reduced)."""
        return self._target_temperature

    @property
    def temperature(self) -> float:
        """Return measured temperature (reduced)."""
        return self._temperature

    @property
    def kinetic_energy(self) -> float:
        """Return kinetic energy (reduced)."""
        return self._kinetic_energy

    @property
    def potential_energy(self) -> float:
        """Return shifted potential energy (reduced)."""
        return self._potential_energy

    @property
    def total_energy(self) -> float:
        """Return total energy (reduced)."""
        return self._total_energy

    @property
    def virial(self) -> float:
        """Return the virial sum of the last force evaluation (reduced)."""
        return self._virial

    @property
    def total_momentum(self) -> NDArray[np.floating]:
        """Return the vector sum of all momenta."""
        return self._state.total_momentum

    def force_magnitude(self, n: int) -> float:
        """Return |F| on atom n (reduced)."""
        return float(np.linalg.norm(self._state.forces[n]))

    # ------------------------------------------------------------------
    # Queries (physical units)
    # ------------------------------------------------------------------

    @property
    def elapsed_time_ps(self) -> float:
        """Return elapsed simulation time in picoseconds."""
        return params.reduced_to_picoseconds(self._elapsed_time)

    @property
    def lattice_constant_nm(self) -> float:
        """Return the lattice constant in nanometers."""
        return params.reduced_to_nanometers(self._lattice_constant)

    @property
    def box_length_nm(self) -> float:
        """Return the periodic box length in nanometers."""
        return params.reduced_to_nanometers(self._box.length)

    @property
    def target_temperature_kelvin(self) -> float:
        """Return the target temperature in kelvin."""
        return params.reduced_to_kelvin(self._target_temperature)

    @property
    def temperature_kelvin(self) -> float:
        """Return the measured temperature in kelvin."""
        return params.reduced_to_kelvin(self._temperature)

    @property
    def kinetic_energy_hartree(self) -> float:
        """Return kinetic energy in Hartree."""
        return params.reduced_to_hartree(self._kinetic_energy)

    @property
    def potential_energy_hartree(self) -> float:
        """Return potential energy in Hartree."""
        return params.reduced_to_hartree(self._potential_energy)

    @property
    def total_energy_hartree(self) -> float:
        """Return total energy in Hartree."""
        return params.reduced_to_hartree(self._total_energy)

    @property
    def pressure_atm(self) -> float:
        """Return the pressure in atm from the virial and ideal-gas terms."""
        return params.pressure_atm(
            self.n_atoms, self._temperature, self._virial, self._box.length
        )

    @property
    def performance(self) -> dict[str, float]:
        """Return wall-clock statistics of run()."""
        steps = self.completed_steps
        if self._wall_time == 0:
            return {"steps_per_second": 0.0, "wall_time": 0.0}
        return {
            "steps_per_second": steps / self._wall_time,
            "wall_time": self._wall_time,
        }
