"""Fixed-point solver for dead-space-free panel grids.

A panel's tight inset depends on its size (tick labels reflow when an axis
gets shorter) while the size available to panels depends on the insets,
since they eat into a fixed canvas. The solver resolves this by iterating:
compute rectangles from the current inset estimates, apply them, measure
again, and stop once a round leaves every value unchanged.
"""

import logging
import warnings
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .config import SolverConfig
from .errors import HostError, InsufficientSpaceError, IterationCapExceeded
from .geometry import column_borders, has_changed, panel_rectangles, panel_size, row_borders
from .inputs import LayoutInputs
from .oracle import MeasurementOracle, host_display_state


class SolverState(Enum):
    INIT = 'init'
    ITERATING = 'iterating'
    CONVERGED = 'converged'
    CAPPED = 'capped'


@dataclass
class LayoutResult:
    """Outcome of a layout run.

    Attributes
    ----------
    state : SolverState
        CONVERGED or CAPPED.
    iterations : int
        Number of layout rounds performed.
    positions : np.ndarray
        Last observed rectangles, shape (rows, cols, 4).
    insets : np.ndarray
        Last observed tight insets (density scaled), shape (rows, cols, 4).
    panel_width, panel_height : float
        Uniform panel size of the last computed layout.
    skipped : list of tuple
        ``(row, col)`` cells whose rectangle the host refused at least once.
    """

    state: SolverState
    iterations: int
    positions: np.ndarray
    insets: np.ndarray
    panel_width: float
    panel_height: float
    skipped: List[Tuple[int, int]] = field(default_factory=list)

    @property
    def converged(self) -> bool:
        return self.state is SolverState.CONVERGED


class LayoutSolver:
    """Iteratively lay out a panel grid on a host canvas.

    Parameters
    ----------
    oracle : MeasurementOracle
        Host owning the canvas and panels.
    inputs : LayoutInputs
        Normalized inputs, see :func:`~tightfig.inputs.normalize_inputs`.
    config : SolverConfig, optional
        Iteration cap, tolerance and units. Defaults to ``SolverConfig()``.
    logger : logging.Logger, optional
        Logger for progress messages.

    Examples
    --------
    >>> inputs = normalize_inputs(oracle, [[0, 1], [2, 3]], (20, 15), 1, 0.5)
    >>> result = LayoutSolver(oracle, inputs).solve()
    >>> result.converged
    True
    """

    def __init__(
        self,
        oracle: MeasurementOracle,
        inputs: LayoutInputs,
        config: Optional[SolverConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.oracle = oracle
        self.inputs = inputs
        self.config = config or SolverConfig()
        self.logger = logger or logging.getLogger(self.__class__.__name__)

        self.state = SolverState.INIT
        rows, cols = inputs.shape
        self.insets = np.full((rows, cols, 4), np.nan)
        self.positions = np.full((rows, cols, 4), np.nan)
        self.skipped: List[Tuple[int, int]] = []

    def _measure(self, row: int, col: int, panel_id: int, insets: np.ndarray, positions: np.ndarray):
        insets[row, col] = np.asarray(self.oracle.measure_border(panel_id)) * self.inputs.density
        positions[row, col] = self.oracle.measure_rectangle(panel_id)

    def _initialize(self):
        """Resize the canvas and record the iteration-0 geometry."""
        width, height = self.inputs.canvas_size
        self.oracle.set_canvas_size(width, height)
        for _, _, panel_id in self.inputs.cells():
            self.oracle.set_panel_units(panel_id, self.config.units)
        self.oracle.flush()

        for row, col, panel_id in self.inputs.cells():
            self._measure(row, col, panel_id, self.insets, self.positions)

    def _iterate(self) -> Tuple[float, float]:
        """One layout round. Updates insets and positions in place.

        Returns
        -------
        tuple of float
            Panel (width, height) used in this round.
        """
        inputs = self.inputs
        col_b = column_borders(self.insets)
        row_b = row_borders(self.insets)
        width, height = panel_size(
            inputs.canvas_size, inputs.outer_margin, inputs.inner_margin, col_b, row_b
        )
        if width <= 0 or height <= 0:
            raise InsufficientSpaceError(
                f"No room left for panels: computed size {width:.4g} x {height:.4g} "
                f"{self.config.units}. Reduce margins or panel decorations."
            )
        targets = panel_rectangles(
            inputs.outer_margin, inputs.inner_margin, col_b, row_b, width, height
        )

        new_insets = self.insets.copy()
        new_positions = self.positions.copy()
        for row, col, panel_id in inputs.cells():
            try:
                self.oracle.apply_rectangle(panel_id, tuple(targets[row, col]))
            except HostError as e:
                self.logger.warning(f"Skipping panel {panel_id} at ({row}, {col}): {e}")
                if (row, col) not in self.skipped:
                    self.skipped.append((row, col))
            try:
                self._measure(row, col, panel_id, new_insets, new_positions)
            except HostError as e:
                self.logger.warning(f"Could not measure panel {panel_id} at ({row}, {col}): {e}")

        digits = self.config.tolerance_digits
        changed = has_changed(self.insets, new_insets, digits) or has_changed(
            self.positions, new_positions, digits
        )
        self.insets = new_insets
        self.positions = new_positions
        if not changed:
            self.state = SolverState.CONVERGED
        return width, height

    def solve(self) -> LayoutResult:
        """Run the layout loop until convergence or the iteration cap.

        Returns
        -------
        LayoutResult
            Final geometry and convergence information.

        Raises
        ------
        InsufficientSpaceError
            If margins and insets leave no positive panel size. The host
            state is restored before the error propagates.

        Warns
        -----
        IterationCapExceeded
            If ``config.max_iter`` rounds did not converge.
        """
        rows, cols = self.inputs.shape
        panel_ids = [panel_id for _, _, panel_id in self.inputs.cells()]
        self.logger.info(
            f"Laying out {rows}x{cols} panels on a "
            f"{self.inputs.canvas_size[0]:.4g} x {self.inputs.canvas_size[1]:.4g} "
            f"{self.config.units} canvas"
        )

        width = height = np.nan
        iterations = 0
        with host_display_state(self.oracle, panel_ids, self.config.units, logger=self.logger):
            self._initialize()
            self.state = SolverState.ITERATING

            while self.state is SolverState.ITERATING:
                if iterations >= self.config.max_iter:
                    self.state = SolverState.CAPPED
                    break
                width, height = self._iterate()
                iterations += 1
                self.logger.debug(
                    f"Iteration {iterations}: panel size {width:.4g} x {height:.4g}"
                )
                self.oracle.flush()

        if self.state is SolverState.CAPPED:
            msg = f"Maximum number of iterations ({self.config.max_iter}) reached."
            self.logger.warning(msg)
            warnings.warn(msg, IterationCapExceeded)
        else:
            self.logger.info(f"Layout converged after {iterations} iteration(s)")

        return LayoutResult(
            state=self.state,
            iterations=iterations,
            positions=self.positions.copy(),
            insets=self.insets.copy(),
            panel_width=width,
            panel_height=height,
            skipped=list(self.skipped),
        )
