"""Length units and resolution handling.

Matplotlib keeps figure sizes in inches and axes boxes in figure fractions.
The layout works in physical units, so boxes travel through inches:
``fraction <-> inches <-> cm``. Boxes are 4-vectors whose components
alternate horizontal and vertical, like ``(x, y, width, height)`` or
``(left, bottom, right, top)``.
"""

import numpy as np


INCHES_PER_UNIT = {'cm': 1 / 2.54, 'inches': 1.0}

LENGTH_UNITS = tuple(INCHES_PER_UNIT)
PANEL_UNITS = LENGTH_UNITS + ('normalized',)


def _inches_per(units: str) -> float:
    try:
        return INCHES_PER_UNIT[units]
    except KeyError:
        raise ValueError(f"Unknown units: {units}. Must be one of {LENGTH_UNITS}")


def to_inches(value, units: str) -> np.ndarray:
    """Convert lengths in ``units`` to inches.

    Examples
    --------
    >>> to_inches([25.4, 12.7], 'cm')
    array([10.,  5.])
    """
    return np.asarray(value, dtype=float) * _inches_per(units)


def from_inches(value, units: str) -> np.ndarray:
    """Convert lengths in inches to ``units``."""
    return np.asarray(value, dtype=float) / _inches_per(units)


def box_from_inches(box, figure_size, units: str) -> np.ndarray:
    """Express a box given in inches in panel units.

    Parameters
    ----------
    box : array-like
        4-vector (or array of them on the last axis) in inches.
    figure_size : array-like
        (width, height) of the figure in inches, used for 'normalized'.
    units : {'cm', 'inches', 'normalized'}
        Target units.

    Returns
    -------
    np.ndarray
        Box in ``units``.
    """
    box = np.asarray(box, dtype=float)
    if units == 'normalized':
        return box / np.tile(np.asarray(figure_size, dtype=float), 2)
    return from_inches(box, units)


def box_to_inches(box, figure_size, units: str) -> np.ndarray:
    """Inverse of :func:`box_from_inches`."""
    box = np.asarray(box, dtype=float)
    if units == 'normalized':
        return box * np.tile(np.asarray(figure_size, dtype=float), 2)
    return to_inches(box, units)


def density_ratio(dpi: float, native_dpi: float) -> float:
    """Ratio between a requested and the host's native resolution.

    Every length of a layout run is multiplied by it, which corrects for a
    display whose resolution is misreported.
    """
    if not np.isfinite(native_dpi) or native_dpi <= 0:
        raise ValueError(f"Native dpi must be positive, got {native_dpi}")
    return float(dpi) / float(native_dpi)
