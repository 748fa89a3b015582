"""Pure geometry of a uniform panel grid.

All functions work on numpy arrays of shape ``(rows, cols, 4)`` holding,
per grid cell, either a tight inset ``(left, bottom, right, top)`` or a
rectangle ``(x, y, width, height)``. Row 0 is the visually topmost row.
"""

from typing import Tuple

import numpy as np

# Component indices of a tight inset
LEFT, BOTTOM, RIGHT, TOP = 0, 1, 2, 3


def column_borders(insets: np.ndarray) -> np.ndarray:
    """Horizontal space taken by panel decorations at each column boundary.

    Parameters
    ----------
    insets : np.ndarray
        Tight insets, shape (rows, cols, 4).

    Returns
    -------
    np.ndarray
        Shape (cols + 1,). Entry 0 is the widest left inset of the first
        column, entry ``cols`` the widest right inset of the last column.
        Entry ``j`` in between is the largest, over rows, of the right
        inset of column ``j - 1`` plus the left inset of column ``j``.
    """
    rows = insets.shape[0]
    pad = np.zeros((rows, 1))
    right = np.hstack([pad, insets[:, :, RIGHT]])
    left = np.hstack([insets[:, :, LEFT], pad])
    return np.max(right + left, axis=0)


def row_borders(insets: np.ndarray) -> np.ndarray:
    """Vertical space taken by panel decorations at each row boundary.

    Same as :func:`column_borders` but top to bottom: entry 0 is the
    tallest top inset of the first row, entry ``rows`` the tallest bottom
    inset of the last row.
    """
    cols = insets.shape[1]
    pad = np.zeros((1, cols))
    bottom = np.vstack([pad, insets[:, :, BOTTOM]])
    top = np.vstack([insets[:, :, TOP], pad])
    return np.max(bottom + top, axis=1)


def panel_size(
    canvas_size: np.ndarray,
    outer_margin: np.ndarray,
    inner_margin: np.ndarray,
    col_borders: np.ndarray,
    row_borders: np.ndarray,
) -> Tuple[float, float]:
    """Uniform panel width and height that fill the canvas exactly.

    Parameters
    ----------
    canvas_size : np.ndarray
        (width, height).
    outer_margin : np.ndarray
        (left, bottom, right, top).
    inner_margin : np.ndarray
        (horizontal, vertical) gap between neighbouring panels.
    col_borders, row_borders : np.ndarray
        Output of :func:`column_borders` and :func:`row_borders`.

    Returns
    -------
    tuple of float
        (width, height) of every panel. May be non-positive when the
        decorations do not fit; callers decide how to handle that.
    """
    cols = len(col_borders) - 1
    rows = len(row_borders) - 1
    total_width = (
        canvas_size[0]
        - (outer_margin[LEFT] + outer_margin[RIGHT])
        - (cols - 1) * inner_margin[0]
        - np.sum(col_borders)
    )
    total_height = (
        canvas_size[1]
        - (outer_margin[BOTTOM] + outer_margin[TOP])
        - (rows - 1) * inner_margin[1]
        - np.sum(row_borders)
    )
    return float(total_width / cols), float(total_height / rows)


def panel_rectangles(
    outer_margin: np.ndarray,
    inner_margin: np.ndarray,
    col_borders: np.ndarray,
    row_borders: np.ndarray,
    width: float,
    height: float,
) -> np.ndarray:
    """Absolute rectangle of every grid cell.

    Returns
    -------
    np.ndarray
        Shape (rows, cols, 4) of ``(x, y, width, height)``. ``y`` is
        measured from the bottom, so row 0 gets the largest value.
    """
    cols = len(col_borders) - 1
    rows = len(row_borders) - 1

    col_idx = np.arange(cols)
    # cumulative border left of each panel, entry 0 included
    x = (
        outer_margin[LEFT]
        + col_idx * inner_margin[0]
        + np.cumsum(col_borders)[:cols]
        + col_idx * width
    )

    rows_below = rows - 1 - np.arange(rows)
    # border below each panel: entries r + 1 .. rows
    below = np.cumsum(row_borders[::-1])[::-1][1:]
    y = (
        outer_margin[BOTTOM]
        + rows_below * inner_margin[1]
        + below
        + rows_below * height
    )

    rects = np.empty((rows, cols, 4))
    rects[:, :, 0] = x[np.newaxis, :]
    rects[:, :, 1] = y[:, np.newaxis]
    rects[:, :, 2] = width
    rects[:, :, 3] = height
    return rects


def round_significant(values: np.ndarray, digits: int) -> np.ndarray:
    """Round to a number of significant digits, elementwise.

    Zeros and non-finite values are returned unchanged.

    Examples
    --------
    >>> round_significant(np.array([123456.0, 0.00123456, 0.0]), 4)
    array([1.235e+05, 1.235e-03, 0.000e+00])
    """
    values = np.asarray(values, dtype=float)
    out = values.copy()
    mask = np.isfinite(values) & (values != 0)
    if np.any(mask):
        magnitude = np.floor(np.log10(np.abs(values[mask])))
        scale = 10.0 ** (digits - 1 - magnitude)
        out[mask] = np.round(values[mask] * scale) / scale
    return out


def has_changed(old: np.ndarray, new: np.ndarray, digits: int) -> bool:
    """True if any component differs after rounding to ``digits`` significant digits."""
    return bool(np.any(round_significant(old, digits) != round_significant(new, digits)))
