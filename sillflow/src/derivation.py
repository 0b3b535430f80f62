"""
Symbolic derivation of the crest quartic.

This is the one-time phase: the two crest conditions are written in sympy,
the upstream speed is eliminated and the result is collected as a polynomial
in the crest depth. ``coefficient_function`` hands the coefficients over to
numpy; the sweep itself never imports this module.

Conditions at the crest (Boussinesq, rigid lid, g' = 1, upstream depth 1):
    critical:   U² (a²/y³ + b²/y2³) = 1
    Bernoulli:  U² (a²/y² - b²/y2²) / 2 + h + y - a = 0
with b = 1 - a and y2 = 1 - h - y.
"""

import numpy as np
import sympy as sp
from typing import List, Tuple

from .coefficients import CoefficientFunction, N_COEFFICIENTS

a, h, y, U2 = sp.symbols('a h y U2')


def crest_conditions() -> Tuple[sp.Expr, sp.Expr]:
    """
    Residuals of the crest conditions, both zero for a critical crest.

    Returns:
        (critical, bernoulli) as expressions in a, h, y, U2
    """
    b = 1 - a
    y2 = 1 - h - y
    critical = U2 * (a**2 / y**3 + b**2 / y2**3) - 1
    bernoulli = U2 * (a**2 / y**2 - b**2 / y2**2) / 2 + h + y - a
    return critical, bernoulli


def critical_speed_squared() -> sp.Expr:
    """U² from the critical condition."""
    critical, _ = crest_conditions()
    return sp.solve(critical, U2)[0]


def derive_quartic() -> List[sp.Expr]:
    """
    Eliminate U² and collect the crest polynomial in y.

    The Bernoulli residual is multiplied by 2 (a² y2³ + b² y³), which clears
    every denominator once U² is substituted.

    Returns:
        Five coefficients in a and h, highest degree first
    """
    _, bernoulli = crest_conditions()
    b = 1 - a
    y2 = 1 - h - y
    denominator = a**2 * y2**3 + b**2 * y**3

    expr = sp.cancel(2 * denominator * bernoulli.subs(U2, critical_speed_squared()))
    num, den = sp.fraction(expr)
    if den.has(y):
        raise ValueError(f"Crest condition did not reduce to a polynomial in y: {expr}")

    coeffs = [sp.expand(c / den) for c in sp.Poly(num, y).all_coeffs()]
    if len(coeffs) > N_COEFFICIENTS:
        raise ValueError(f"Expected at most a quartic in y, got degree {len(coeffs) - 1}")
    # Pad to a fixed width so the table always has five columns
    return [sp.Integer(0)] * (N_COEFFICIENTS - len(coeffs)) + coeffs


def coefficient_function(coeffs: List[sp.Expr] = None) -> CoefficientFunction:
    """
    Compile symbolic coefficients into a numpy coefficient function.

    Args:
        coeffs: Coefficients in a and h (derived when omitted)

    Returns:
        Function(depth_ratio, heights) -> array of shape (n_heights, 5)
    """
    if coeffs is None:
        coeffs = derive_quartic()
    compiled = sp.lambdify((a, h), coeffs, modules='numpy')

    def evaluate(depth_ratio: float, heights: np.ndarray) -> np.ndarray:
        heights = np.atleast_1d(np.asarray(heights, dtype=float))
        columns = compiled(float(depth_ratio), heights)
        # Coefficients free of h come back as scalars
        return np.column_stack([np.broadcast_to(np.asarray(col, dtype=float), heights.shape)
                                for col in columns])

    return evaluate
