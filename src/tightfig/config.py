"""Solver configuration."""

from dataclasses import dataclass, replace
from typing import Literal

from .units import LENGTH_UNITS


@dataclass
class SolverConfig:
    """Tunable parameters of the layout loop.

    Parameters
    ----------
    max_iter : int, default 20
        Maximum number of layout rounds before giving up on convergence.
    tolerance_digits : int, default 4
        Significant digits compared when deciding whether a round changed
        anything.
    units : {'cm', 'inches'}, default 'cm'
        Physical units of canvas size, margins and reported geometry.

    Examples
    --------
    >>> config = SolverConfig(max_iter=50)
    >>> coarse = config.copy(tolerance_digits=3)
    """

    max_iter: int = 20
    tolerance_digits: int = 4
    units: Literal['cm', 'inches'] = 'cm'

    def __post_init__(self):
        if int(self.max_iter) != self.max_iter or self.max_iter < 1:
            raise ValueError(f"max_iter must be a positive integer, got {self.max_iter}")
        if int(self.tolerance_digits) != self.tolerance_digits or self.tolerance_digits < 1:
            raise ValueError(
                f"tolerance_digits must be a positive integer, got {self.tolerance_digits}"
            )
        if self.units not in LENGTH_UNITS:
            raise ValueError(f"Unknown units: {self.units}. Must be 'cm' or 'inches'")

    def copy(self, **kwargs) -> 'SolverConfig':
        """Create a copy of this config with optional modifications."""
        return replace(self, **kwargs)
