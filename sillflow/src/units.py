"""
Physical units for the nondimensional sweep.
"""

import numpy as np
from pint import UnitRegistry

ureg = UnitRegistry()
g = 9.80665 * ureg('m/s**2')


def _as_quantity(value, unit: str):
    if isinstance(value, ureg.Quantity):
        return value.to(unit)
    return value * ureg(unit)


def reduced_gravity(rho_lower, rho_upper, gravity=g):
    """
    Reduced gravity g' = g (rho_lower - rho_upper) / rho_lower.

    Args:
        rho_lower, rho_upper: Layer densities (quantities or kg/m³)
        gravity: Gravitational acceleration
    """
    rho_lower = _as_quantity(rho_lower, 'kg/m**3')
    rho_upper = _as_quantity(rho_upper, 'kg/m**3')
    if rho_lower <= rho_upper:
        raise ValueError(f"Lower layer must be denser: {rho_lower:~P} <= {rho_upper:~P}")
    return (gravity * (rho_lower - rho_upper) / rho_lower).to('m/s**2')


def dimensional_speed(speed, g_prime, depth):
    """
    Convert a nondimensional speed U / sqrt(g' H) to m/s.

    Args:
        speed: Nondimensional speed (scalar or array)
        g_prime: Reduced gravity (quantity or m/s²)
        depth: Upstream total depth H (quantity or m)
    """
    g_prime = _as_quantity(g_prime, 'm/s**2')
    depth = _as_quantity(depth, 'm')
    speed = np.asarray(speed, dtype=float)
    if speed.ndim == 0:
        speed = float(speed)
    return (speed * np.sqrt(g_prime * depth)).to('m/s')
