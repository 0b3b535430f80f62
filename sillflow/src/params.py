"""
Flow parameters and the height sweep for two-layer flow over an obstacle.
"""

import numpy as np
from dataclasses import dataclass


@dataclass(frozen=True)
class FlowParameters:
    """Upstream state of a Boussinesq two-layer stream (depths scaled by H)."""
    depth_ratio: float          # Upstream lower-layer depth a

    def __post_init__(self):
        if not 0.0 < self.depth_ratio < 1.0:
            raise ValueError(f"Depth ratio must lie in (0, 1), got {self.depth_ratio}")

    @property
    def upper_ratio(self) -> float:
        """Upstream upper-layer depth b = 1 - a."""
        return 1.0 - self.depth_ratio

    @property
    def long_wave_speed(self) -> float:
        """Interfacial long-wave speed sqrt(a b) of the undisturbed stream."""
        return float(np.sqrt(self.depth_ratio * self.upper_ratio))


@dataclass
class HeightSweep:
    """
    Ordered obstacle crest heights (scaled by the upstream depth).

    - heights: Crest heights (n_heights)
    - depths: Total depth over each crest, 1 - h (n_heights)
    """
    heights: np.ndarray

    def __post_init__(self):
        self.heights = np.asarray(self.heights, dtype=float)
        if self.heights.ndim != 1:
            raise ValueError(f"Heights must be a 1-D sequence, got shape {self.heights.shape}")
        self.n_heights = len(self.heights)
        self.depths = 1.0 - self.heights

    def __len__(self) -> int:
        return self.n_heights

    @classmethod
    def uniform(cls, h_min: float = 0.0, h_max: float = 1.0,
                n_heights: int = 50) -> 'HeightSweep':
        """
        Create evenly spaced heights, end points included.

        Args:
            h_min, h_max: Sweep bounds
            n_heights: Number of samples
        """
        if n_heights < 1:
            raise ValueError(f"Need at least one height sample, got {n_heights}")
        return cls(heights=np.linspace(h_min, h_max, n_heights))
