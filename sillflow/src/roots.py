"""
Polynomial roots of a single coefficient row.

Rows whose leading coefficients vanish are solved at their reduced degree and
flagged as degenerate rather than handed to the root solver as quartics.
"""

import numpy as np
from dataclasses import dataclass, field

from .coefficients import N_COEFFICIENTS


@dataclass(frozen=True)
class RootSet:
    """
    Roots of one coefficient row.

    roots    : Complex roots (degree,), in the solver's order
    is_real  : Real-valuedness tag per root (degree,)
    degree   : Effective polynomial degree after stripping vanishing leads
    degenerate : True when degree < 4
    """
    roots: np.ndarray
    is_real: np.ndarray
    degree: int
    degenerate: bool = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, 'degenerate', self.degree < N_COEFFICIENTS - 1)

    def __len__(self) -> int:
        return len(self.roots)

    @property
    def real_roots(self) -> np.ndarray:
        """Real parts of the roots tagged real."""
        return self.roots[self.is_real].real

    @property
    def n_complex(self) -> int:
        """Number of roots with a significant imaginary part."""
        return int(np.count_nonzero(~self.is_real))


def effective_degree(coefficients: np.ndarray, degenerate_tol: float = 1e-12) -> int:
    """
    Degree left after dropping leading coefficients that vanish relative to
    the largest one. An identically zero row has degree 0.
    """
    scale = np.max(np.abs(coefficients))
    if scale == 0.0:
        return 0
    significant = np.flatnonzero(np.abs(coefficients) > degenerate_tol * scale)
    return int(len(coefficients) - 1 - significant[0])


def find_roots(coefficients: np.ndarray, degenerate_tol: float = 1e-12,
               imag_tol: float = 1e-6) -> RootSet:
    """
    Roots of one coefficient row.

    Args:
        coefficients: Five coefficients, highest degree first
        degenerate_tol: Relative size below which a leading coefficient is zero
        imag_tol: Relative imaginary part below which a root counts as real

    Returns:
        RootSet with at most four roots
    """
    coefficients = np.asarray(coefficients, dtype=float)
    if coefficients.shape != (N_COEFFICIENTS,):
        raise ValueError(f"Expected {N_COEFFICIENTS} coefficients, got shape {coefficients.shape}")
    if not np.all(np.isfinite(coefficients)):
        raise ValueError(f"Non-finite coefficients: {coefficients}")

    degree = effective_degree(coefficients, degenerate_tol)
    if degree == 0:
        roots = np.zeros(0, dtype=complex)
    else:
        roots = np.roots(coefficients[N_COEFFICIENTS - 1 - degree:]).astype(complex)

    is_real = np.abs(roots.imag) <= imag_tol * np.maximum(1.0, np.abs(roots))
    return RootSet(roots=roots, is_real=is_real, degree=degree)
