"""Configuration for tests.

Provides a scripted host that stands in for a real plotting backend, so the
layout loop can be driven with deterministic panel decorations.
"""

import matplotlib

matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt
import pytest

from tightfig.errors import HostError
from tightfig.oracle import MeasurementOracle

# Disable interactive mode globally
plt.ioff()


class ScriptedHost(MeasurementOracle):
    """In-memory host with scripted tight insets.

    Parameters
    ----------
    n_panels : int
        Number of panels, addressed by ids ``0 .. n_panels - 1``.
    inset_fn : callable, optional
        ``inset_fn(panel_id, rect, n_measure) -> (left, bottom, right, top)``.
        Zero insets if None.
    clamp_fn : callable, optional
        ``clamp_fn(panel_id, rect) -> rect`` applied on every write.
    failing : iterable of int
        Panels whose writes are rejected with HostError.
    native_dpi : float
        Resolution reported by the host.
    """

    def __init__(self, n_panels, inset_fn=None, clamp_fn=None, failing=(), native_dpi=100.0):
        self._native_dpi = native_dpi
        self.inset_fn = inset_fn
        self.clamp_fn = clamp_fn
        self.failing = set(failing)
        self.rects = {i: (0.0, 0.0, 1.0, 1.0) for i in range(n_panels)}
        self.units = {i: 'normalized' for i in range(n_panels)}
        self.canvas_units = 'pixels'
        self.canvas_size = None
        self.visible = True
        self.n_measure = 0
        self.calls = []

    @property
    def native_dpi(self):
        return self._native_dpi

    @property
    def mutations(self):
        return [name for name, _ in self.calls if name.startswith('set') or name == 'apply']

    def panel_exists(self, panel_id):
        return panel_id in self.rects

    def get_canvas_units(self):
        return self.canvas_units

    def set_canvas_units(self, units):
        self.calls.append(('set_canvas_units', units))
        self.canvas_units = units

    def set_canvas_size(self, width, height):
        self.calls.append(('set_canvas_size', (width, height)))
        self.canvas_size = (width, height)

    def is_visible(self):
        return self.visible

    def set_visible(self, visible):
        self.calls.append(('set_visible', visible))
        self.visible = visible

    def flush(self):
        self.calls.append(('flush', None))

    def set_panel_units(self, panel_id, units):
        self.calls.append(('set_panel_units', (panel_id, units)))
        self.units[panel_id] = units

    def apply_rectangle(self, panel_id, rect):
        self.calls.append(('apply', (panel_id, rect)))
        if panel_id in self.failing:
            raise HostError(f"panel {panel_id} was deleted")
        if self.clamp_fn is not None:
            rect = self.clamp_fn(panel_id, rect)
        self.rects[panel_id] = tuple(float(v) for v in rect)

    def measure_border(self, panel_id):
        self.n_measure += 1
        if self.inset_fn is None:
            return (0.0, 0.0, 0.0, 0.0)
        return self.inset_fn(panel_id, self.rects[panel_id], self.n_measure)

    def measure_rectangle(self, panel_id):
        return self.rects[panel_id]


@pytest.fixture
def make_host():
    """Factory for :class:`ScriptedHost` instances."""
    return ScriptedHost


@pytest.fixture
def host():
    """Four-panel host with zero insets."""
    return ScriptedHost(4)


@pytest.fixture
def close_figures():
    """Close all matplotlib figures after the test."""
    yield
    plt.close('all')
