"""Periodic observers of a running engine."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, TextIO

import numpy as np

from ..exceptions import ConfigurationError

if TYPE_CHECKING:
    from .engine import ArgonEngine


class Reporter(ABC):
    """
    Base class for reporters.

    The engine offers every completed step to its reporters; a reporter
    acts on every `frequency`-th one. Reporters only read from the engine.
    """

    def __init__(self, frequency: int = 1) -> None:
        if frequency < 1:
            raise ConfigurationError(f"frequency must be >= 1, got {frequency}")
        self._frequency = int(frequency)

    @property
    def frequency(self) -> int:
        """Return reporting interval in steps."""
        return self._frequency

    def should_report(self, completed_steps: int) -> bool:
        return completed_steps % self._frequency == 0

    @abstractmethod
    def report(self, engine: ArgonEngine) -> None:
        """Record or emit the current engine state."""
        ...

    def initialize(self, engine: ArgonEngine) -> None:
        """Hook called at the start of ArgonEngine.run()."""

    def finalize(self, engine: ArgonEngine) -> None:
        """Hook called when ArgonEngine.run() returns or raises."""


class ReporterGroup:
    """Ordered set of reporters driven together."""

    def __init__(self, reporters: list[Reporter] | None = None) -> None:
        self._reporters: list[Reporter] = list(reporters) if reporters else []

    def __len__(self) -> int:
        return len(self._reporters)

    def add(self, reporter: Reporter) -> None:
        self._reporters.append(reporter)

    def remove(self, reporter: Reporter) -> None:
        self._reporters.remove(reporter)

    def initialize(self, engine: ArgonEngine) -> None:
        for reporter in self._reporters:
            reporter.initialize(engine)

    def report(self, engine: ArgonEngine) -> None:
        """Offer the just-completed step to every reporter."""
        step = engine.completed_steps
        for reporter in self._reporters:
            if reporter.should_report(step):
                reporter.report(engine)

    def finalize(self, engine: ArgonEngine) -> None:
        for reporter in self._reporters:
            reporter.finalize(engine)


class StateReporter(Reporter):
    """
    Writes a delimited table of thermodynamic observables.

    Columns: completed steps, time (ps), temperature (K), kinetic, potential
    and total energy (Hartree), pressure (atm). The header is written once,
    on the first run() the reporter takes part in.
    """

    HEADERS = ("Step", "Time(ps)", "T(K)", "KE(Eh)", "PE(Eh)", "Total(Eh)", "P(atm)")

    def __init__(
        self,
        frequency: int = 1000,
        file: TextIO | None = None,
        separator: str = "\t",
    ) -> None:
        """
        Args:
            frequency: Reporting interval in steps.
            file: Text stream to write to (defaults to stdout).
            separator: Column separator.
        """
        super().__init__(frequency)
        self._file = file if file is not None else sys.stdout
        self._separator = separator
        self._header_written = False

    def initialize(self, engine: ArgonEngine) -> None:
        if not self._header_written:
            self._write(self.HEADERS)
            self._header_written = True

    def report(self, engine: ArgonEngine) -> None:
        self._write(
            (
                f"{engine.completed_steps}",
                f"{engine.elapsed_time_ps:.6f}",
                f"{engine.temperature_kelvin:.2f}",
                f"{engine.kinetic_energy_hartree:.6e}",
                f"{engine.potential_energy_hartree:.6e}",
                f"{engine.total_energy_hartree:.6e}",
                f"{engine.pressure_atm:.2f}",
            )
        )

    def _write(self, fields: tuple[str, ...]) -> None:
        self._file.write(self._separator.join(fields) + "\n")
        self._file.flush()


class CallbackReporter(Reporter):
    """Calls `callback(engine)` every `frequency` steps."""

    def __init__(
        self,
        callback: Callable[[ArgonEngine], None],
        frequency: int = 1,
    ) -> None:
        super().__init__(frequency)
        self._callback = callback

    def report(self, engine: ArgonEngine) -> None:
        self._callback(engine)


class EnergyReporter(Reporter):
    """
    Collects observables in memory, in physical units.

    Each sample holds the completed step count, time (ps), temperature (K),
    kinetic, potential and total energy (Hartree) and pressure (atm).
    """

    _FIELDS = ("steps", "times", "temperature", "kinetic", "potential", "total", "pressure")

    def __init__(self, frequency: int = 100) -> None:
        super().__init__(frequency)
        self._series: dict[str, list[float]] = {name: [] for name in self._FIELDS}

    def report(self, engine: ArgonEngine) -> None:
        sample = (
            engine.completed_steps,
            engine.elapsed_time_ps,
            engine.temperature_kelvin,
            engine.kinetic_energy_hartree,
            engine.potential_energy_hartree,
            engine.total_energy_hartree,
            engine.pressure_atm,
        )
        for name, value in zip(self._FIELDS, sample):
            self._series[name].append(value)

    @property
    def n_records(self) -> int:
        return len(self._series["steps"])

    @property
    def steps(self) -> np.ndarray:
        return np.array(self._series["steps"], dtype=np.int64)

    @property
    def times(self) -> np.ndarray:
        return np.array(self._series["times"])

    @property
    def temperature(self) -> np.ndarray:
        return np.array(self._series["temperature"])

    @property
    def kinetic_energy(self) -> np.ndarray:
        return np.array(self._series["kinetic"])

    @property
    def potential_energy(self) -> np.ndarray:
        return np.array(self._series["potential"])

    @property
    def total_energy(self) -> np.ndarray:
        return np.array(self._series["total"])

    @property
    def pressure(self) -> np.ndarray:
        return np.array(self._series["pressure"])

    def clear(self) -> None:
        """Drop all collected samples."""
        for values in self._series.values():
            values.clear()
