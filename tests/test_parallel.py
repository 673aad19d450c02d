"""Tests for parallel infrastructure."""

import numpy as np
import pytest

from argonmd.exceptions import ConfigurationError
from argonmd.forcefields import LennardJonesForce
from argonmd.neighborlists import CellList
from argonmd.parallel import (
    MultiprocessingBackend,
    ParallelBackend,
    SerialBackend,
    ThreadPoolBackend,
    available_backends,
    get_backend,
    reset_default_backend,
    set_default_backend,
)
from argonmd.system import make_fcc_lattice


def _square(x):
    return x * x


@pytest.fixture
def crystal():
    """A 9x9x9 FCC crystal large enough for a cell list."""
    a = 2.0 ** (2.0 / 3.0)
    n_cells = 9
    rng = np.random.default_rng(12)
    positions = make_fcc_lattice(a, n_cells) + rng.uniform(-0.05, 0.05, (2916, 3))
    length = a * n_cells
    pairs = CellList(length).make_pair(positions)
    return positions, pairs, length


class TestSerialBackend:
    """Tests for serial backend."""

    def test_properties(self):
        """Test serial backend basic properties."""
        backend = SerialBackend()

        assert backend.name == "serial"
        assert backend.n_workers == 1

    def test_parallel_map(self):
        """Test map preserves order."""
        assert SerialBackend().parallel_map(_square, [1, 2, 3]) == [1, 4, 9]

    def test_reduce_sum(self):
        """Test scalar reduction."""
        assert SerialBackend().reduce_sum([1.0, 2.5]) == pytest.approx(3.5)


class TestPartition:
    """Tests for work partitioning."""

    def test_even_split(self):
        """Test contiguous, covering chunks."""
        ranges = SerialBackend().partition(10, 3)

        assert ranges == [(0, 4), (4, 7), (7, 10)]

    def test_more_parts_than_items(self):
        """Test empty chunks are dropped."""
        ranges = SerialBackend().partition(2, 5)

        assert ranges == [(0, 1), (1, 2)]

    def test_default_uses_workers(self):
        """Test n_parts defaults to the worker count."""
        backend = ThreadPoolBackend(n_workers=4)
        try:
            assert len(backend.partition(100)) == 4
        finally:
            backend.close()


class TestReduceForces:
    """Tests for merging private force buffers."""

    def test_sum_of_buffers(self):
        """Test partial buffers add up."""
        a = np.ones((3, 3))
        b = 2.0 * np.ones((3, 3))

        total = SerialBackend().reduce_forces([a, b], 3)

        np.testing.assert_array_equal(total, 3.0 * np.ones((3, 3)))

    def test_no_buffers(self):
        """Test an empty reduction gives zeros."""
        total = SerialBackend().reduce_forces([], 2)
        np.testing.assert_array_equal(total, np.zeros((2, 3)))


class TestThreadPoolBackend:
    """Tests for the thread pool backend."""

    def test_map_and_close(self):
        """Test map order and context-manager cleanup."""
        with ThreadPoolBackend(n_workers=3) as backend:
            assert backend.name == "threads"
            assert backend.n_workers == 3
            assert backend.parallel_map(_square, list(range(6))) == [
                0,
                1,
                4,
                9,
                16,
                25,
            ]

    def test_forces_match_serial(self, crystal):
        """Test threaded forces agree with serial ones to rounding."""
        positions, pairs, length = crystal
        serial = LennardJonesForce(backend=SerialBackend()).compute(
            positions, pairs, length
        )
        with ThreadPoolBackend(n_workers=4) as backend:
            threaded = LennardJonesForce(backend=backend).compute(
                positions, pairs, length
            )

        np.testing.assert_allclose(threaded.forces, serial.forces, rtol=1e-10, atol=1e-10)
        assert threaded.potential_energy == pytest.approx(serial.potential_energy)
        assert threaded.virial == pytest.approx(serial.virial)


class TestMultiprocessingBackend:
    """Tests for the process pool backend."""

    def test_properties(self):
        """Test name and worker count."""
        backend = MultiprocessingBackend(n_workers=2)

        assert backend.name == "multiprocessing"
        assert backend.n_workers == 2

    def test_map(self):
        """Test a picklable function maps across processes."""
        with MultiprocessingBackend(n_workers=2) as backend:
            assert backend.parallel_map(abs, [-2, 3]) == [2, 3]
            assert backend.parallel_map(abs, [-4]) == [4]

    def test_forces_match_serial(self, crystal):
        """Test process-pool forces agree with serial ones."""
        positions, pairs, length = crystal
        serial = LennardJonesForce(backend=SerialBackend()).compute(
            positions, pairs, length
        )
        with MultiprocessingBackend(n_workers=2) as backend:
            pooled = LennardJonesForce(backend=backend).compute(
                positions, pairs, length
            )

        np.testing.assert_allclose(pooled.forces, serial.forces, rtol=1e-10, atol=1e-10)


class TestDispatcher:
    """Tests for backend selection."""

    def teardown_method(self):
        reset_default_backend()

    def test_default_is_serial(self):
        """Test the default backend is serial."""
        reset_default_backend()
        assert get_backend().name == "serial"

    def test_instance_passes_through(self):
        """Test an instance is returned unchanged."""
        backend = SerialBackend()
        assert get_backend(backend) is backend

    def test_by_name(self):
        """Test creating backends by name."""
        backend = get_backend("threads", n_workers=2)
        try:
            assert isinstance(backend, ThreadPoolBackend)
            assert isinstance(backend, ParallelBackend)
        finally:
            backend.close()

    def test_unknown_name(self):
        """Test unknown names raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            get_backend("mpi")

    def test_set_default(self):
        """Test overriding the default backend."""
        backend = ThreadPoolBackend(n_workers=2)
        try:
            set_default_backend(backend)
            assert get_backend() is backend
        finally:
            backend.close()

    def test_available_backends(self):
        """Test the registry lists every backend."""
        assert available_backends() == ["multiprocessing", "serial", "threads"]

    def test_serial_ignores_worker_count(self):
        """Test n_workers is accepted but unused for serial."""
        assert get_backend("serial", n_workers=8).n_workers == 1
