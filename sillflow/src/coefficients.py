"""
Closed-form coefficients of the crest quartic.

For a two-layer stream of upstream lower-layer depth a (upper b = 1 - a)
passing over an obstacle of crest height h, the lower-layer crest depth y of
a flow that is exactly critical at the crest solves

    c4 y^4 + c3 y^3 + c2 y^2 + c1 y + c0 = 0

with L = 1 - h and c = h - a:

    c4 = 3 (b² - a²)
    c3 = L (9a² - b²) + 2c (b² - a²)
    c2 = 3a² L (2c - 3L)
    c1 = 3a² L² (L - 2c)
    c0 = 2a² L³ c

These are the coefficients produced once by ``derivation.derive_quartic``;
they are written out here so the numeric sweep needs no symbolic algebra.
"""

import numpy as np
from typing import Callable

# (depth_ratio, heights) -> coefficient table of shape (n_heights, 5)
CoefficientFunction = Callable[[float, np.ndarray], np.ndarray]

N_COEFFICIENTS = 5


def quartic_coefficients(depth_ratio: float, heights: np.ndarray) -> np.ndarray:
    """
    Coefficient table of the crest quartic, highest degree first.

    Args:
        depth_ratio: Upstream lower-layer depth a
        heights: Crest heights h (n_heights)

    Returns:
        Array of shape (n_heights, 5)
    """
    h = np.atleast_1d(np.asarray(heights, dtype=float))
    a = float(depth_ratio)
    b = 1.0 - a
    L = 1.0 - h
    c = h - a
    a2, b2 = a**2, b**2

    C = np.empty((len(h), N_COEFFICIENTS))
    C[:, 0] = 3 * (b2 - a2)
    C[:, 1] = L * (9 * a2 - b2) + 2 * c * (b2 - a2)
    C[:, 2] = 3 * a2 * L * (2 * c - 3 * L)
    C[:, 3] = 3 * a2 * L**2 * (L - 2 * c)
    C[:, 4] = 2 * a2 * L**3 * c
    return C
