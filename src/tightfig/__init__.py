"""tightfig - dead-space-free layouts for grids of plot panels.

Resizes a figure to a physical page size and moves its subplots so that
every panel has the same size and panels, their decorations and the
requested margins fill the page exactly.

Quick Start
-----------
>>> from tightfig import create_grid_figure, layout
>>>
>>> fig, axes, index = create_grid_figure(2, 2, (20, 15))
>>> axes[0, 0].set_ylabel('Signal')
>>> layout(fig, index, (20, 15), outer_margin=1, inner_margin=0.5)
>>> fig.savefig('figure.pdf')
"""

__version__ = "0.1.0"

from .config import SolverConfig
from .errors import (
    TightFigError,
    InvalidArgument,
    InsufficientSpaceError,
    HostError,
    IterationCapExceeded,
)
from .inputs import LayoutInputs, normalize_inputs
from .oracle import MeasurementOracle, HostDisplayState, host_display_state
from .solver import LayoutSolver, LayoutResult, SolverState
from .mpl import MatplotlibOracle, create_grid_figure
from .layout import layout, solve_layout
from .units import to_inches, from_inches, density_ratio

__all__ = [
    "__version__",
    # Entry points
    "layout",
    "solve_layout",
    "create_grid_figure",
    # Solver
    "LayoutSolver",
    "LayoutResult",
    "SolverState",
    "SolverConfig",
    "LayoutInputs",
    "normalize_inputs",
    # Host contract
    "MeasurementOracle",
    "MatplotlibOracle",
    "HostDisplayState",
    "host_display_state",
    # Errors
    "TightFigError",
    "InvalidArgument",
    "InsufficientSpaceError",
    "HostError",
    "IterationCapExceeded",
    # Units
    "to_inches",
    "from_inches",
    "density_ratio",
]
