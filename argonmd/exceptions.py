"""Exception types raised by argonmd."""

from __future__ import annotations


class ArgonMDError(Exception):
    """Base class for all argonmd errors."""


class ConfigurationError(ArgonMDError, ValueError):
    """Raised when a simulation parameter is outside its valid range."""


class GridTooSmallError(ConfigurationError):
    """
    Raised when a cell grid would have too few cells per axis.

    The cell decomposition needs more than two cells per axis; smaller boxes
    must use the exhaustive pair search instead.
    """

    def __init__(self, box_length: float, cells_per_axis: int) -> None:
        self.box_length = box_length
        self.cells_per_axis = cells_per_axis
        super().__init__(
            f"box length {box_length:.4f} gives {cells_per_axis} cells per axis; "
            "at least 3 are required for a cell list"
        )


class InvalidEnsembleError(ArgonMDError, RuntimeError):
    """
    Raised when the integrator meets an ensemble or thermostat it cannot handle.

    This is a programming error and is never caught inside the package.
    """
