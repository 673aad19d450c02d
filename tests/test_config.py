"""Tests for SimulationConfig."""

import pytest

from argonmd.config import SimulationConfig
from argonmd.exceptions import ConfigurationError
from argonmd.integrators import Ensemble, TemperatureControl


class TestSimulationConfig:
    """Tests for configuration defaults and validation."""

    def test_defaults(self):
        """Test the classic 864-atom NVT setup."""
        config = SimulationConfig()

        assert config.supercell_count == 6
        assert config.n_atoms == 864
        assert config.temperature == 50.0
        assert config.ensemble is Ensemble.NVT
        assert config.temperature_control is TemperatureControl.LANGEVIN
        assert config.dt == pytest.approx(1e-4)
        assert config.backend == "serial"

    def test_string_enums_are_parsed(self):
        """Test ensemble and thermostat names are accepted."""
        config = SimulationConfig(ensemble="nve", temperature_control="woodcock")

        assert config.ensemble is Ensemble.NVE
        assert config.temperature_control is TemperatureControl.WOODCOCK

    @pytest.mark.parametrize(
        "changes",
        [
            {"supercell_count": 0},
            {"supercell_count": 2.5},
            {"lattice_scale": 0.0},
            {"temperature": -1.0},
            {"dt": 0.0},
            {"gamma": -0.5},
            {"alpha": 1.0},
            {"cutoff": 0.0},
            {"margin": -0.1},
            {"n_workers": 0},
            {"ensemble": "npt"},
        ],
    )
    def test_invalid_values_rejected(self, changes):
        """Test out-of-range values raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            SimulationConfig(**changes)

    def test_config_error_is_value_error(self):
        """Test callers can catch ValueError."""
        with pytest.raises(ValueError):
            SimulationConfig(dt=-1.0)

    def test_replace(self):
        """Test replace returns a validated copy."""
        config = SimulationConfig(seed=3)
        changed = config.replace(supercell_count=2)

        assert changed.supercell_count == 2
        assert changed.seed == 3
        assert config.supercell_count == 6

    def test_frozen(self):
        """Test config fields cannot be reassigned."""
        config = SimulationConfig()
        with pytest.raises(AttributeError):
            config.dt = 1.0
