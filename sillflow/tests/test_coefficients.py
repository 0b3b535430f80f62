"""
Pytest tests for the closed-form crest quartic.

Tests verify:
1. Table shape (one row per height, five coefficients)
2. Known rows at h = 0 and h = 1
3. Double root at the upstream interface depth when h = 0
4. Vanishing leading coefficient for equal layer depths
"""

import numpy as np
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from sillflow.src import quartic_coefficients


@pytest.fixture
def heights():
    return np.linspace(0.0, 1.0, 50)


class TestTableShape:
    """Tests for the coefficient table layout."""

    def test_one_row_per_height(self, heights):
        """Each height gives exactly one row of five coefficients."""
        C = quartic_coefficients(0.3, heights)
        assert C.shape == (len(heights), 5), f"Unexpected table shape {C.shape}"

    def test_scalar_height(self):
        """A single height still gives a (1, 5) table."""
        C = quartic_coefficients(0.3, 0.25)
        assert C.shape == (1, 5)

    def test_all_finite(self, heights):
        """Coefficients are finite over the whole unit interval."""
        for a in (0.1, 0.3, 0.5, 0.7, 0.9):
            assert np.all(np.isfinite(quartic_coefficients(a, heights)))


class TestKnownRows:
    """Tests against rows expanded by hand."""

    def test_flat_bottom_row(self):
        """a = 0.3, h = 0 gives 1.2 (y - 0.3)² (y² + 2y/3 - 1/2)."""
        C = quartic_coefficients(0.3, [0.0])[0]
        assert np.allclose(C, [1.2, 0.08, -0.972, 0.432, -0.054])

    def test_equal_depths_flat_bottom(self):
        """a = 0.5, h = 0 reduces to 2 (y - 1/2)³."""
        C = quartic_coefficients(0.5, [0.0])[0]
        assert np.allclose(C, [0.0, 2.0, -3.0, 1.5, -0.25])

    def test_full_height_row(self):
        """At h = 1 only the two leading coefficients survive."""
        C = quartic_coefficients(0.3, [1.0])[0]
        assert np.allclose(C, [1.2, 0.56, 0.0, 0.0, 0.0])


class TestLimits:
    """Tests for limiting cases of the crest quartic."""

    @pytest.mark.parametrize("a", [0.2, 0.3, 0.6, 0.8])
    def test_double_root_at_interface(self, a):
        """Without topography y = a is a double root."""
        C = quartic_coefficients(a, [0.0])[0]
        value = np.polyval(C, a)
        slope = np.polyval(np.polyder(C), a)
        assert abs(value) < 1e-12, f"p(a) = {value}"
        assert abs(slope) < 1e-12, f"p'(a) = {slope}"

    def test_leading_coefficient_vanishes_for_equal_depths(self, heights):
        """a = 1/2 zeroes the quartic term at every height."""
        C = quartic_coefficients(0.5, heights)
        assert np.all(C[:, 0] == 0.0)

    def test_leading_coefficient_independent_of_height(self, heights):
        """The quartic term only depends on the depth ratio."""
        C = quartic_coefficients(0.3, heights)
        assert np.allclose(C[:, 0], 3 * (1 - 2 * 0.3))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
