"""Matplotlib implementation of the measurement oracle.

Figures play the role of the canvas and axes the role of panels. Axes
positions are stored by matplotlib as figure fractions; this module
translates them to and from physical units.
"""

from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from .errors import HostError
from .oracle import MeasurementOracle, PanelId, Rect
from .units import LENGTH_UNITS, PANEL_UNITS, box_from_inches, box_to_inches, to_inches

# display pixel distances below this precision are float noise
PIXEL_DECIMALS = 6


class MatplotlibOracle(MeasurementOracle):
    """Measurement oracle backed by a matplotlib figure.

    Parameters
    ----------
    figure : matplotlib.figure.Figure
        Figure whose axes are laid out.
    panels : sequence of Axes, optional
        Axes addressed by panel id (their index in this sequence).
        Defaults to ``figure.axes`` at construction time.
    units : {'cm', 'inches'}, default 'cm'
        Initial canvas units.

    Examples
    --------
    >>> fig, axes = plt.subplots(2, 2)
    >>> oracle = MatplotlibOracle(fig)
    >>> oracle.measure_border(0)  # doctest: +SKIP
    """

    def __init__(
        self,
        figure: Figure,
        panels: Optional[Sequence[Axes]] = None,
        units: str = 'cm',
    ):
        if units not in LENGTH_UNITS:
            raise ValueError(f"Unknown units: {units}. Must be 'cm' or 'inches'")
        self.figure = figure
        self.panels = list(figure.axes if panels is None else panels)
        self.canvas_units = units
        self.panel_units = {i: 'normalized' for i in range(len(self.panels))}
        self._native_dpi = float(figure.dpi)

    @property
    def native_dpi(self) -> float:
        return self._native_dpi

    def _axes(self, panel_id: PanelId) -> Axes:
        if not self.panel_exists(panel_id):
            raise HostError(f"Panel {panel_id} is not an axes of this figure")
        return self.panels[panel_id]

    def _figure_size(self) -> np.ndarray:
        return np.asarray(self.figure.get_size_inches(), dtype=float)

    def _export(self, box_inches, panel_id: PanelId) -> Rect:
        """Box in inches -> tuple in the panel's units."""
        box = box_from_inches(box_inches, self._figure_size(), self.panel_units[panel_id])
        return tuple(float(v) for v in box)

    def panel_exists(self, panel_id: PanelId) -> bool:
        if not 0 <= panel_id < len(self.panels):
            return False
        return self.panels[panel_id] in self.figure.axes

    def get_canvas_units(self) -> str:
        return self.canvas_units

    def set_canvas_units(self, units: str) -> None:
        if units not in LENGTH_UNITS:
            raise HostError(f"Unsupported canvas units: {units}")
        self.canvas_units = units

    def set_canvas_size(self, width: float, height: float) -> None:
        width_in, height_in = to_inches([width, height], self.canvas_units)
        self.figure.set_size_inches(width_in, height_in, forward=True)

    def is_visible(self) -> bool:
        return self.figure.get_visible()

    def set_visible(self, visible: bool) -> None:
        self.figure.set_visible(visible)

    def prepare_canvas(self) -> None:
        # a layout engine would move the axes again on every draw
        self.figure.set_layout_engine('none')

    def flush(self) -> None:
        # Figure.draw is a no-op on hidden figures; nothing is rendered here
        hidden = not self.figure.get_visible()
        if hidden:
            self.figure.set_visible(True)
        try:
            self.figure.draw_without_rendering()
        finally:
            if hidden:
                self.figure.set_visible(False)

    def set_panel_units(self, panel_id: PanelId, units: str) -> None:
        if units not in PANEL_UNITS:
            raise HostError(f"Unsupported panel units: {units}")
        self._axes(panel_id)
        self.panel_units[panel_id] = units

    def apply_rectangle(self, panel_id: PanelId, rect: Rect) -> None:
        ax = self._axes(panel_id)
        figure_size = self._figure_size()
        rect_inches = box_to_inches(rect, figure_size, self.panel_units[panel_id])
        fraction = box_from_inches(rect_inches, figure_size, 'normalized')
        try:
            ax.set_position(fraction)
        except ValueError as e:
            raise HostError(f"Could not position panel {panel_id}: {e}")

    def measure_rectangle(self, panel_id: PanelId) -> Rect:
        ax = self._axes(panel_id)
        bounds = ax.get_position().bounds
        return self._export(box_to_inches(bounds, self._figure_size(), 'normalized'), panel_id)

    def measure_border(self, panel_id: PanelId) -> Rect:
        """Tight inset ``(left, bottom, right, top)`` of an axes.

        The tight bounding box covers tick labels, axis labels and title.
        Its distance to the axes box, clipped at zero, is the inset.
        Distances are taken in display pixels and rounded to
        ``PIXEL_DECIMALS``, so float noise of undecorated axes reads as 0.
        """
        ax = self._axes(panel_id)
        renderer = self.figure.canvas.get_renderer()
        tight = ax.get_tightbbox(renderer)
        if tight is None:
            return (0.0, 0.0, 0.0, 0.0)

        box = ax.get_position().transformed(self.figure.transFigure)
        inset_px = np.array(
            [box.x0 - tight.x0, box.y0 - tight.y0, tight.x1 - box.x1, tight.y1 - box.y1]
        )
        inset_px = np.clip(np.round(inset_px, PIXEL_DECIMALS), 0.0, None)
        return self._export(inset_px / self.figure.dpi, panel_id)


def create_grid_figure(
    rows: int,
    cols: int,
    canvas_size: Tuple[float, float],
    units: str = 'cm',
    dpi: Optional[float] = None,
) -> Tuple[Figure, np.ndarray, np.ndarray]:
    """Create a figure of a given physical size holding a grid of axes.

    Parameters
    ----------
    rows, cols : int
        Grid shape.
    canvas_size : tuple of float
        (width, height) in ``units``.
    units : {'cm', 'inches'}, default 'cm'
        Units of ``canvas_size``.
    dpi : float, optional
        Figure dpi. Matplotlib's default if None.

    Returns
    -------
    fig : matplotlib.figure.Figure
        The created figure.
    axes : np.ndarray
        Axes array of shape (rows, cols).
    panel_index : np.ndarray
        Panel ids of ``axes`` in ``fig.axes`` order, shape (rows, cols).

    Examples
    --------
    >>> fig, axes, index = create_grid_figure(2, 3, (18, 12))
    >>> layout(fig, index, (18, 12), 1, 0.5)  # doctest: +SKIP
    """
    if rows < 1 or cols < 1:
        raise ValueError(f"Grid must have at least one row and column, got {rows}x{cols}")
    figsize = tuple(to_inches([canvas_size[0], canvas_size[1]], units))
    fig, axes = plt.subplots(rows, cols, figsize=figsize, dpi=dpi, squeeze=False)
    panel_index = np.array(
        [[fig.axes.index(ax) for ax in row] for row in axes], dtype=int
    )
    return fig, axes, panel_index
