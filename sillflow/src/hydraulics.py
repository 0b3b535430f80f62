"""
Crest state of a two-layer stream that is critical over the obstacle.

Nondimensional: depths scaled by the upstream total depth H, speeds by
sqrt(g' H). Both layers approach with the same speed U.

Source of the speed:
    composite Froude number at the crest is one,
    U² (a²/y³ + b²/y2³) = 1
"""

import numpy as np
from dataclasses import dataclass


@dataclass
class CrestState:
    """
    Flow over the crest for a given lower-layer crest depth.

    Stored:
        depth_ratio : Upstream lower-layer depth a
        height      : Crest height h
        depth       : Lower-layer crest depth y (the critical depth ratio)

    Derived (properties):
        upper_depth, speed_squared, speed, froude_upstream, crest_froude
    """
    depth_ratio: float
    height: np.ndarray
    depth: np.ndarray

    def __post_init__(self):
        self.height = np.asarray(self.height, dtype=float)
        self.depth = np.asarray(self.depth, dtype=float)

    @property
    def upper_ratio(self) -> float:
        return 1.0 - self.depth_ratio

    @property
    def upper_depth(self) -> np.ndarray:
        """Upper-layer crest depth y2 = 1 - h - y."""
        return 1.0 - self.height - self.depth

    @property
    def is_physical(self) -> np.ndarray:
        """Both layers have positive thickness over the crest."""
        return (self.depth > 0.0) & (self.upper_depth > 0.0)

    @property
    def speed_squared(self) -> np.ndarray:
        """U² = y³ y2³ / (a² y2³ + b² y³)."""
        y3 = self.depth**3
        y23 = self.upper_depth**3
        return y3 * y23 / (self.depth_ratio**2 * y23 + self.upper_ratio**2 * y3)

    @property
    def speed(self) -> np.ndarray:
        """Upstream speed U; NaN where U² is negative."""
        U2 = self.speed_squared
        return np.sqrt(np.where(U2 >= 0.0, U2, np.nan))

    @property
    def froude_upstream_squared(self) -> np.ndarray:
        """Upstream composite Froude number G0² = U² / (a b)."""
        return self.speed_squared / (self.depth_ratio * self.upper_ratio)

    @property
    def froude_upstream(self) -> np.ndarray:
        G2 = self.froude_upstream_squared
        return np.sqrt(np.where(G2 >= 0.0, G2, np.nan))

    @property
    def crest_froude_lower(self) -> np.ndarray:
        """Lower-layer crest Froude number squared, F1² = U² a² / y³."""
        return self.speed_squared * self.depth_ratio**2 / self.depth**3

    @property
    def crest_froude_upper(self) -> np.ndarray:
        """Upper-layer crest Froude number squared, F2² = U² b² / y2³."""
        return self.speed_squared * self.upper_ratio**2 / self.upper_depth**3

    @property
    def crest_froude(self) -> np.ndarray:
        """Composite crest Froude number squared (one by construction)."""
        return self.crest_froude_lower + self.crest_froude_upper

    @property
    def bernoulli_residual(self) -> np.ndarray:
        """
        Change of the layer Bernoulli difference between upstream and crest.

        Zero when the crest depth is a root of the crest quartic.
        """
        U2 = self.speed_squared
        kinetic = 0.5 * U2 * (self.depth_ratio**2 / self.depth**2
                              - self.upper_ratio**2 / self.upper_depth**2)
        return kinetic + self.height + self.depth - self.depth_ratio
