"""
Single-layer reference: critical flow of a homogeneous layer over an obstacle.

With depths scaled by the upstream depth, a stream of upstream Froude number F
is exactly critical over a crest of height

    h_c(F) = 1 + F²/2 - (3/2) F^(2/3)

which falls from 1 to 0 on 0 <= F <= 1 (subcritical) and rises from 0 for
F >= 1 (supercritical). Both branches start from F = 1 at h = 0.
"""

import numpy as np
from scipy.optimize import root_scalar

BRANCHES = ('subcritical', 'supercritical')
MAX_FROUDE = 10.0


def obstacle_height(froude):
    """Crest height that makes single-layer flow of Froude number F critical."""
    F = np.asarray(froude, dtype=float)
    return 1.0 + 0.5 * F**2 - 1.5 * F**(2.0 / 3.0)


def critical_froude(height: float, branch: str = 'subcritical') -> float:
    """
    Upstream Froude number for which a crest of the given height is critical.

    Args:
        height: Crest height h, 0 <= h <= 1
        branch: 'subcritical' or 'supercritical'
    """
    if branch not in BRANCHES:
        raise ValueError(f"Unknown branch: {branch}. Options: {', '.join(BRANCHES)}")
    if not 0.0 <= height <= 1.0:
        raise ValueError(f"Height must lie in [0, 1], got {height}")

    bracket = [0.0, 1.0] if branch == 'subcritical' else [1.0, MAX_FROUDE]
    sol = root_scalar(lambda F: obstacle_height(F) - height, bracket=bracket,
                      method='brentq', xtol=1e-12)
    if not sol.converged:
        raise RuntimeError(f"Critical Froude number did not converge at h = {height}: {sol.flag}")
    return sol.root


def critical_curve(heights: np.ndarray, branch: str = 'subcritical') -> np.ndarray:
    """Vectorised critical_froude over a sequence of heights."""
    return np.array([critical_froude(h, branch) for h in np.asarray(heights, dtype=float)])
