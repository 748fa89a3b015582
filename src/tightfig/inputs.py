"""Validation and normalization of layout inputs."""

import numbers
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np

from .errors import InvalidArgument
from .oracle import MeasurementOracle
from .units import density_ratio

ArrayLike = Union[float, Sequence[float], np.ndarray]


@dataclass
class LayoutInputs:
    """Normalized inputs of one layout run.

    All lengths are already multiplied by ``density``.

    Attributes
    ----------
    panel_index : np.ndarray
        Integer matrix (rows, cols) of panel ids.
    canvas_size : np.ndarray
        (width, height).
    outer_margin : np.ndarray
        (left, bottom, right, top).
    inner_margin : np.ndarray
        (horizontal, vertical).
    density : float
        Ratio between requested and native resolution.
    """

    panel_index: np.ndarray
    canvas_size: np.ndarray
    outer_margin: np.ndarray
    inner_margin: np.ndarray
    density: float = 1.0

    @property
    def shape(self):
        """Grid shape (rows, cols)."""
        return self.panel_index.shape

    def cells(self):
        """Iterate over ``(row, col, panel_id)`` column by column."""
        rows, cols = self.shape
        for col in range(cols):
            for row in range(rows):
                yield row, col, int(self.panel_index[row, col])


def _as_float_vector(value, name: str) -> np.ndarray:
    try:
        arr = np.asarray(value, dtype=float)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{name} must be numeric, got {value!r}")
    if not np.all(np.isfinite(arr)):
        raise InvalidArgument(f"{name} must contain finite values, got {value!r}")
    return arr


def _check_canvas_size(canvas_size: ArrayLike) -> np.ndarray:
    arr = _as_float_vector(canvas_size, "canvas_size")
    if arr.shape != (2,):
        raise InvalidArgument(
            f"canvas_size must be a [width, height] vector, got shape {arr.shape}"
        )
    if np.any(arr <= 0):
        raise InvalidArgument(f"canvas_size must be positive, got {arr.tolist()}")
    return arr


def _expand_margin(margin: ArrayLike, size: int, name: str) -> np.ndarray:
    """Broadcast a scalar margin to ``size`` entries and validate it."""
    arr = _as_float_vector(margin, name)
    if arr.size == 1 and arr.ndim <= 1:
        arr = np.repeat(arr.reshape(-1), size)
    if arr.shape != (size,):
        raise InvalidArgument(
            f"{name} must be a scalar or a vector of {size} values, got shape {arr.shape}"
        )
    if np.any(arr < 0):
        raise InvalidArgument(f"{name} must be non-negative, got {arr.tolist()}")
    return arr


def _check_panel_index(panel_index, oracle: MeasurementOracle) -> np.ndarray:
    try:
        raw = np.atleast_2d(np.asarray(panel_index))
    except (TypeError, ValueError):
        raise InvalidArgument("panel_index must be a matrix of integer panel ids")

    if raw.ndim != 2:
        raise InvalidArgument(f"panel_index must be 2D, got shape {raw.shape}")
    if raw.size == 0:
        raise InvalidArgument("panel_index must not be empty")
    # bool and complex are not valid ids
    if not (np.issubdtype(raw.dtype, np.integer) or np.issubdtype(raw.dtype, np.floating)):
        raise InvalidArgument(f"panel_index must hold integers, got dtype {raw.dtype}")
    if not np.all(np.isfinite(raw)) or np.any(np.floor(raw) != raw):
        raise InvalidArgument("panel_index needs to be a matrix of integer values")

    index = raw.astype(int)
    unique = np.unique(index)
    if unique.size != index.size:
        raise InvalidArgument("panel_index must not reference the same panel twice")

    missing = [int(i) for i in unique if not oracle.panel_exists(int(i))]
    if missing:
        raise InvalidArgument(f"panel_index references unknown panels: {missing}")
    return index


def _check_dpi(dpi, native_dpi: float) -> float:
    if dpi is None:
        return 1.0
    if isinstance(dpi, bool) or not isinstance(dpi, numbers.Real):
        raise InvalidArgument(f"dpi must be a positive numeric scalar, got {dpi!r}")
    if not np.isfinite(dpi) or dpi <= 0:
        raise InvalidArgument(f"dpi must be a positive numeric scalar, got {dpi!r}")
    return density_ratio(dpi, native_dpi)


def normalize_inputs(
    oracle: MeasurementOracle,
    panel_index,
    canvas_size: ArrayLike,
    outer_margin: ArrayLike,
    inner_margin: ArrayLike,
    dpi: Optional[float] = None,
) -> LayoutInputs:
    """Validate user inputs and bring them to their full vector form.

    Nothing on the host is modified; the oracle is only asked whether the
    referenced panels exist.

    Parameters
    ----------
    oracle : MeasurementOracle
        Host the panels live in.
    panel_index : array-like of int
        Matrix (rows, cols) of panel ids. A flat sequence is one row.
    canvas_size : array-like
        [width, height] of the canvas.
    outer_margin : float or array-like
        Scalar or [left, bottom, right, top].
    inner_margin : float or array-like
        Scalar or [horizontal, vertical].
    dpi : float, optional
        Resolution to assume instead of ``oracle.native_dpi``.

    Returns
    -------
    LayoutInputs
        Normalized inputs with lengths scaled by the density ratio.

    Raises
    ------
    InvalidArgument
        If any input is malformed.

    Examples
    --------
    >>> inputs = normalize_inputs(oracle, [[0, 1]], (20, 15), 1, 0.5)
    >>> inputs.outer_margin
    array([1., 1., 1., 1.])
    """
    canvas = _check_canvas_size(canvas_size)
    outer = _expand_margin(outer_margin, 4, "outer_margin")
    inner = _expand_margin(inner_margin, 2, "inner_margin")
    density = _check_dpi(dpi, oracle.native_dpi)
    index = _check_panel_index(panel_index, oracle)

    rows, cols = index.shape
    if canvas[0] - outer[0] - outer[2] - (cols - 1) * inner[0] <= 0:
        raise InvalidArgument("Margins leave no horizontal space for panels")
    if canvas[1] - outer[1] - outer[3] - (rows - 1) * inner[1] <= 0:
        raise InvalidArgument("Margins leave no vertical space for panels")

    return LayoutInputs(
        panel_index=index,
        canvas_size=canvas * density,
        outer_margin=outer * density,
        inner_margin=inner * density,
        density=density,
    )
