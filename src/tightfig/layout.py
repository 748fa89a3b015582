"""Public entry points for dead-space-free panel layouts."""

import logging
from typing import Optional, Sequence

from matplotlib.axes import Axes
from matplotlib.figure import Figure

from .config import SolverConfig
from .inputs import ArrayLike, normalize_inputs
from .mpl import MatplotlibOracle
from .oracle import MeasurementOracle
from .solver import LayoutResult, LayoutSolver


def solve_layout(
    oracle: MeasurementOracle,
    panel_index,
    canvas_size: ArrayLike,
    outer_margin: ArrayLike,
    inner_margin: ArrayLike,
    dpi: Optional[float] = None,
    config: Optional[SolverConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> LayoutResult:
    """Lay out a panel grid on any host and report the outcome.

    Parameters
    ----------
    oracle : MeasurementOracle
        Host owning canvas and panels.
    panel_index : array-like of int
        Matrix (rows, cols) of panel ids; row 0 is the top row.
    canvas_size : array-like
        [width, height] of the canvas in ``config.units``.
    outer_margin : float or array-like
        Scalar or [left, bottom, right, top].
    inner_margin : float or array-like
        Scalar or [horizontal, vertical].
    dpi : float, optional
        Resolution to assume instead of the host's native one.
    config : SolverConfig, optional
        Solver parameters.
    logger : logging.Logger, optional
        Logger for progress messages.

    Returns
    -------
    LayoutResult
        Final geometry and convergence state.

    Raises
    ------
    InvalidArgument
        If the inputs are malformed. The host is left untouched.
    InsufficientSpaceError
        If panel decorations leave no room for the panels.
    """
    logger = logger or logging.getLogger(__name__)
    config = config or SolverConfig()
    inputs = normalize_inputs(oracle, panel_index, canvas_size, outer_margin, inner_margin, dpi)
    return LayoutSolver(oracle, inputs, config=config, logger=logger).solve()


def layout(
    canvas: Figure,
    panel_index,
    canvas_size: ArrayLike,
    outer_margin: ArrayLike,
    inner_margin: ArrayLike,
    dpi: Optional[float] = None,
    panels: Optional[Sequence[Axes]] = None,
    config: Optional[SolverConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> Figure:
    """Remove dead space between the subplots of a matplotlib figure.

    The figure is resized to ``canvas_size`` and every referenced axes is
    moved so that all axes share one size and, together with their tick
    labels, axis labels and titles, fill the figure up to the margins.

    Parameters
    ----------
    canvas : matplotlib.figure.Figure
        Figure to rearrange.
    panel_index : array-like of int
        Matrix (rows, cols) of indices into ``panels``.
    canvas_size : array-like
        [width, height] of the figure in ``config.units`` (cm by default).
    outer_margin : float or array-like
        Scalar or [left, bottom, right, top].
    inner_margin : float or array-like
        Scalar or [horizontal, vertical].
    dpi : float, optional
        Resolution to assume instead of ``canvas.dpi``.
    panels : sequence of Axes, optional
        Axes addressed by ``panel_index``. Defaults to ``canvas.axes``.
    config : SolverConfig, optional
        Solver parameters.
    logger : logging.Logger, optional
        Logger for progress messages.

    Returns
    -------
    matplotlib.figure.Figure
        The same figure, for chaining.

    Examples
    --------
    >>> fig, axes = plt.subplots(2, 2)
    >>> layout(fig, [[0, 1], [2, 3]], (20, 15), [1, 1, 1, 1], 0.5)  # doctest: +SKIP
    >>> fig.savefig('figure.pdf')  # doctest: +SKIP
    """
    config = config or SolverConfig()
    oracle = MatplotlibOracle(canvas, panels=panels, units=config.units)
    solve_layout(
        oracle,
        panel_index,
        canvas_size,
        outer_margin,
        inner_margin,
        dpi=dpi,
        config=config,
        logger=logger,
    )
    return canvas
