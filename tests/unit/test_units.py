"""Tests for unit conversion and configuration."""

import numpy as np
import pytest

from tightfig import SolverConfig
from tightfig.units import (
    box_from_inches,
    box_to_inches,
    density_ratio,
    from_inches,
    to_inches,
)


class TestBoxConversion:
    """Test conversion of rectangles and insets between units."""

    def test_lengths_vectorised(self):
        """Test that sequences convert elementwise to arrays."""
        assert np.allclose(to_inches([25.4, 12.7], 'cm'), [10.0, 5.0])
        assert np.allclose(from_inches(np.array([[1.0], [2.0]]), 'cm'), [[2.54], [5.08]])
        assert to_inches(3.0, 'inches') == 3.0

    def test_rect_to_cm(self):
        """Test that a rect in inches is expressed in cm."""
        box = box_from_inches([1.0, 0.5, 2.0, 1.5], (8.0, 6.0), 'cm')
        assert np.allclose(box, [2.54, 1.27, 5.08, 3.81])

    def test_rect_to_normalized(self):
        """Test that normalized boxes alternate figure width and height."""
        box = box_from_inches([2.0, 1.5, 4.0, 3.0], (8.0, 6.0), 'normalized')
        assert np.allclose(box, [0.25, 0.25, 0.5, 0.5])

    def test_inset_array(self):
        """Test that a grid of insets converts along the last axis."""
        insets = np.ones((2, 3, 4))
        box = box_from_inches(insets, (4.0, 2.0), 'normalized')
        assert box.shape == (2, 3, 4)
        assert np.allclose(box[..., 0], 0.25)
        assert np.allclose(box[..., 1], 0.5)

    @pytest.mark.parametrize("units", ['cm', 'inches', 'normalized'])
    def test_inverse(self, units):
        """Test that box_to_inches undoes box_from_inches."""
        rect = np.array([0.3, 1.1, 2.2, 0.7])
        back = box_to_inches(box_from_inches(rect, (5.0, 4.0), units), (5.0, 4.0), units)
        assert np.allclose(back, rect)

    def test_invalid_units(self):
        """Test that invalid units raise ValueError."""
        with pytest.raises(ValueError, match="Unknown units"):
            to_inches(1.0, 'meters')
        with pytest.raises(ValueError, match="Unknown units"):
            box_from_inches([0, 0, 1, 1], (4, 3), 'pixels')

    def test_density_ratio(self):
        """Test ratio of requested to native resolution."""
        assert density_ratio(144, 96) == pytest.approx(1.5)
        assert density_ratio(96, 96) == 1.0
        with pytest.raises(ValueError, match="Native dpi"):
            density_ratio(100, 0)


class TestSolverConfig:
    """Test solver configuration."""

    def test_defaults(self):
        """Test default cap, tolerance and units."""
        config = SolverConfig()
        assert config.max_iter == 20
        assert config.tolerance_digits == 4
        assert config.units == 'cm'

    @pytest.mark.parametrize("kwargs", [{'max_iter': 0}, {'max_iter': 2.5}, {'tolerance_digits': 0}])
    def test_invalid_values(self, kwargs):
        """Test that non-positive or fractional counts are rejected."""
        with pytest.raises(ValueError):
            SolverConfig(**kwargs)

    def test_invalid_units(self):
        """Test that unknown units are rejected."""
        with pytest.raises(ValueError, match="Unknown units"):
            SolverConfig(units='pt')

    def test_copy(self):
        """Test copying config with modifications."""
        original = SolverConfig()
        modified = original.copy(max_iter=50)

        assert modified.max_iter == 50
        assert original.max_iter == 20
        assert modified.tolerance_digits == original.tolerance_digits
