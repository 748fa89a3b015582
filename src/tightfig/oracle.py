"""Host graphics contract used by the layout solver.

The solver never talks to a plotting library directly. It sees the host
through a :class:`MeasurementOracle`: panels are addressed by integer ids,
rectangles are applied, and the resulting geometry is measured back. This
keeps the fixed-point loop testable against a scripted host.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

PanelId = int
Rect = Tuple[float, float, float, float]


class MeasurementOracle(ABC):
    """Abstract interface to the host that owns canvas and panels.

    Rectangles are ``(x, y, width, height)`` and tight insets are
    ``(left, bottom, right, top)``, both in the units last set for the
    panel. Implementations raise :class:`~tightfig.errors.HostError` when
    the host rejects an operation.
    """

    @property
    @abstractmethod
    def native_dpi(self) -> float:
        """Resolution the host reports for itself."""

    @abstractmethod
    def panel_exists(self, panel_id: PanelId) -> bool:
        pass

    @abstractmethod
    def get_canvas_units(self) -> str:
        pass

    @abstractmethod
    def set_canvas_units(self, units: str) -> None:
        pass

    @abstractmethod
    def set_canvas_size(self, width: float, height: float) -> None:
        """Resize the canvas, in the current canvas units."""

    @abstractmethod
    def is_visible(self) -> bool:
        pass

    @abstractmethod
    def set_visible(self, visible: bool) -> None:
        pass

    @abstractmethod
    def flush(self) -> None:
        """Process pending draws so that the next measurement is current."""

    @abstractmethod
    def set_panel_units(self, panel_id: PanelId, units: str) -> None:
        pass

    @abstractmethod
    def apply_rectangle(self, panel_id: PanelId, rect: Rect) -> None:
        pass

    @abstractmethod
    def measure_border(self, panel_id: PanelId) -> Rect:
        """Tight inset of the panel as the host currently lays it out."""

    @abstractmethod
    def measure_rectangle(self, panel_id: PanelId) -> Rect:
        """Rectangle the host actually applied to the panel."""

    def prepare_canvas(self) -> None:
        """Host specific setup run once before the canvas is resized."""


@dataclass
class HostDisplayState:
    """Canvas state saved on entry to a layout run."""

    units: str
    visible: bool


@contextmanager
def host_display_state(
    oracle: MeasurementOracle,
    panel_ids: Iterable[PanelId],
    units: str,
    logger: Optional[logging.Logger] = None,
) -> Iterator[HostDisplayState]:
    """Hold the host in absolute units with the canvas hidden.

    On entry the current canvas units and visibility are recorded, the
    canvas is hidden and switched to ``units``. On exit, whatever the
    reason, all panels go back to normalized units, the canvas units are
    restored and the canvas is made visible.

    Parameters
    ----------
    oracle : MeasurementOracle
        Host to operate on.
    panel_ids : iterable of int
        Panels to return to normalized units on exit.
    units : {'cm', 'inches'}
        Absolute units used while the context is active.
    logger : logging.Logger, optional
        Logger for state transitions.

    Yields
    ------
    HostDisplayState
        The state that will be restored.
    """
    logger = logger or logging.getLogger(__name__)
    panel_ids = list(panel_ids)
    saved = HostDisplayState(units=oracle.get_canvas_units(), visible=oracle.is_visible())
    logger.debug(f"Saved host state: units={saved.units}, visible={saved.visible}")

    oracle.set_visible(False)
    try:
        oracle.prepare_canvas()
        oracle.set_canvas_units(units)
        yield saved
    finally:
        try:
            for panel_id in panel_ids:
                # panels removed mid-run are left alone
                if oracle.panel_exists(panel_id):
                    oracle.set_panel_units(panel_id, 'normalized')
            oracle.set_canvas_units(saved.units)
        finally:
            oracle.set_visible(True)
            logger.debug("Host state restored, canvas visible")
