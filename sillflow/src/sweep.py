"""
Root sweep evaluator: coefficients, roots and branches over a height sweep.
"""

import logging
import numpy as np
import matplotlib.pyplot as plt
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .params import FlowParameters, HeightSweep
from .coefficients import CoefficientFunction, N_COEFFICIENTS, quartic_coefficients
from .roots import RootSet, find_roots
from .branches import Branch, BranchSelector, CriticalBranchSelector
from .single_layer import critical_curve

logger = logging.getLogger(__name__)


class SweepError(ValueError):
    """A sweep aborted; index and height name the offending sample when known."""

    def __init__(self, message: str, index: int = None, height: float = None):
        super().__init__(message)
        self.index = index
        self.height = height


@dataclass
class SweepConfig:
    """Configuration for the root sweep."""
    degenerate_tol: float = 1e-12   # Relative size of a vanishing leading coefficient
    imag_tol: float = 1e-6          # Relative imaginary part of a real root
    froude_tol: float = 1e-6        # Band around G0² = 1 shared by both branches
    near_real_tol: float = 1e-4     # Relative imaginary part of a split multiple root
    residual_tol: float = 1e-9      # Bernoulli residual accepted for a split multiple root
    height_range: Tuple[float, float] = (0.0, 1.0)

    def __post_init__(self):
        for name in ('degenerate_tol', 'imag_tol', 'froude_tol', 'near_real_tol', 'residual_tol'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        lo, hi = self.height_range
        if not lo <= hi:
            raise ValueError(f"Invalid height range: {self.height_range}")


@dataclass
class SweepResult:
    """Everything derived from one sweep. Rows follow the height order."""
    depth_ratio: float
    heights: np.ndarray
    coefficients: np.ndarray        # (n_heights, 5), highest degree first
    root_sets: List[RootSet]
    branches: Dict[str, Branch]

    @property
    def n_heights(self) -> int:
        return len(self.heights)

    @property
    def degenerate(self) -> np.ndarray:
        """Rows whose polynomial degree collapsed below four."""
        return np.array([rs.degenerate for rs in self.root_sets], dtype=bool)

    @property
    def degrees(self) -> np.ndarray:
        return np.array([rs.degree for rs in self.root_sets], dtype=int)

    def roots_array(self) -> np.ndarray:
        """Roots as an (n_heights, 4) complex array, padded with NaN."""
        roots = np.full((self.n_heights, N_COEFFICIENTS - 1), np.nan, dtype=complex)
        for i, root_set in enumerate(self.root_sets):
            roots[i, :len(root_set)] = root_set.roots
        return roots

    def to_dict(self) -> dict:
        return {
            'depth_ratio': self.depth_ratio,
            'heights': self.heights,
            'coefficients': self.coefficients,
            'root_sets': self.root_sets,
            'branches': self.branches,
        }


class RootSweepEvaluator:
    """
    Crest-quartic root sweep for a two-layer stream over an obstacle.

    Phases, each pure and run once per sweep:
    - coefficient table from the coefficient function (one row per height)
    - roots of every row, degenerate rows solved at their reduced degree
    - branch selection by the configured policy
    """

    def __init__(self, params: FlowParameters, sweep: HeightSweep,
                 coefficient_func: CoefficientFunction = quartic_coefficients,
                 selector: BranchSelector = None, config: SweepConfig = None):
        """
        Initialize the evaluator.

        Args:
            params: Upstream flow parameters (or the depth ratio itself)
            sweep: Height samples (or any 1-D sequence of heights)
            coefficient_func: Function(depth_ratio, heights) -> (n_heights, 5)
            selector: Branch selection policy (CriticalBranchSelector by default)
            config: Sweep configuration
        """
        if not isinstance(params, FlowParameters):
            params = FlowParameters(depth_ratio=float(params))
        if not isinstance(sweep, HeightSweep):
            sweep = HeightSweep(heights=sweep)

        self.params = params
        self.sweep = sweep
        self.coefficient_func = coefficient_func
        self.config = config if config is not None else SweepConfig()
        self.selector = (selector if selector is not None
                         else CriticalBranchSelector(froude_tol=self.config.froude_tol,
                                                     near_real_tol=self.config.near_real_tol,
                                                     residual_tol=self.config.residual_tol))

        self._check_heights()

        self.result = None

    def _check_heights(self):
        h = self.sweep.heights
        lo, hi = self.config.height_range
        bad = ~np.isfinite(h) | (h < lo) | (h > hi)
        if np.any(bad):
            i = int(np.flatnonzero(bad)[0])
            raise SweepError(f"Height sample {i} (h = {h[i]}) outside [{lo}, {hi}]",
                             index=i, height=float(h[i]))

    def compute_coefficients(self) -> np.ndarray:
        """
        Evaluate the coefficient function over the whole sweep.

        Returns:
            Coefficient table (n_heights, 5)
        """
        heights = self.sweep.heights
        C = np.asarray(self.coefficient_func(self.params.depth_ratio, heights), dtype=float)

        expected = (self.sweep.n_heights, N_COEFFICIENTS)
        if C.shape != expected:
            raise SweepError(f"Coefficient table has shape {C.shape}, expected {expected}")

        finite = np.all(np.isfinite(C), axis=1)
        if not np.all(finite):
            i = int(np.flatnonzero(~finite)[0])
            raise SweepError(f"Non-finite coefficients at sample {i} (h = {heights[i]:.4f}): {C[i]}",
                             index=i, height=float(heights[i]))
        return C

    def find_roots(self, coefficients: np.ndarray) -> List[RootSet]:
        """Roots of every coefficient row, in height order."""
        root_sets = []
        for i, (height, row) in enumerate(zip(self.sweep.heights, coefficients)):
            try:
                root_set = find_roots(row, degenerate_tol=self.config.degenerate_tol,
                                      imag_tol=self.config.imag_tol)
            except (ValueError, np.linalg.LinAlgError) as exc:
                raise SweepError(f"Root finding failed at sample {i} (h = {height:.4f}): {exc}",
                                 index=i, height=float(height)) from exc

            if root_set.degenerate:
                logger.debug("Sample %d (h = %.4f): degree collapsed to %d",
                             i, height, root_set.degree)
            logger.debug("Sample %d (h = %.4f): %d roots, %d complex",
                         i, height, len(root_set), root_set.n_complex)
            root_sets.append(root_set)

        n_degenerate = sum(rs.degenerate for rs in root_sets)
        if n_degenerate:
            logger.warning("%d of %d coefficient rows are degenerate (leading coefficient ~ 0)",
                           n_degenerate, len(root_sets))
        return root_sets

    def select_branches(self, root_sets: List[RootSet]) -> Dict[str, Branch]:
        """Apply the branch selection policy."""
        return self.selector.select(self.params, self.sweep, root_sets)

    def evaluate(self) -> SweepResult:
        """
        Run the sweep.

        Returns:
            SweepResult (also kept as self.result)
        """
        logger.info("Sweeping %d heights, a = %.4f, selector = %s",
                    self.sweep.n_heights, self.params.depth_ratio,
                    type(self.selector).__name__)

        coefficients = self.compute_coefficients()
        root_sets = self.find_roots(coefficients)
        branches = self.select_branches(root_sets)

        for name, branch in branches.items():
            logger.info("Branch %-14s %3d of %d samples valid",
                        name, branch.n_valid, self.sweep.n_heights)

        self.result = SweepResult(depth_ratio=self.params.depth_ratio,
                                  heights=self.sweep.heights.copy(),
                                  coefficients=coefficients,
                                  root_sets=root_sets,
                                  branches=branches)
        return self.result

    def _require_result(self) -> SweepResult:
        if self.result is None:
            raise ValueError("Sweep must be evaluated before plotting")
        return self.result

    def _finish_plot(self, fig, filename: str = None, show: bool = True):
        fig.tight_layout()

        if filename:
            fig.savefig(filename, dpi=150, bbox_inches='tight')
            logger.info("Saved plot to %s", filename)

        if show:
            plt.show()
        else:
            plt.close(fig)

    def plot_branches(self, filename: str = None, show: bool = True):
        """Plot upstream speed of each branch against crest height."""
        result = self._require_result()

        fig, ax = plt.subplots(figsize=(7, 5))
        for name, branch in result.branches.items():
            ax.plot(branch.heights, np.where(branch.valid, branch.speed, np.nan),
                    linewidth=2, label=name)
        ax.axhline(self.params.long_wave_speed, color='k', linestyle=':', linewidth=1,
                   label=r'$\sqrt{a(1-a)}$')

        ax.set_xlim(0.0, 1.0)
        ax.set_ylim(0.0, 1.0)
        ax.set_xlabel('Crest height h / H')
        ax.set_ylabel(r"Upstream speed $U / \sqrt{g' H}$")
        ax.set_title(f'Critical crest branches (a = {self.params.depth_ratio:g})')
        ax.grid(True)
        ax.legend()

        self._finish_plot(fig, filename, show)
        return fig

    def plot_regime(self, filename: str = None, show: bool = True):
        """Plot upstream Froude number of each branch with the single-layer curves."""
        result = self._require_result()

        fig, ax = plt.subplots(figsize=(7, 5))
        for name, branch in result.branches.items():
            ax.plot(branch.heights, np.where(branch.valid, branch.froude, np.nan),
                    linewidth=2, label=f'two-layer {name}')

        h_ref = np.linspace(0.0, 1.0, 101)
        for name in ('subcritical', 'supercritical'):
            ax.plot(h_ref, critical_curve(h_ref, name), 'k--', linewidth=1, alpha=0.7,
                    label='single layer' if name == 'subcritical' else None)

        ax.set_xlim(0.0, 1.0)
        ax.set_ylim(0.0, 3.0)
        ax.set_xlabel('Crest height h / H')
        ax.set_ylabel('Upstream Froude number')
        ax.set_title('Hydraulic regimes')
        ax.grid(True)
        ax.legend()

        self._finish_plot(fig, filename, show)
        return fig

    def plot_roots(self, filename: str = None, show: bool = True):
        """Plot real parts of all roots; hollow markers for complex roots."""
        result = self._require_result()

        fig, ax = plt.subplots(figsize=(7, 5))
        for height, root_set in zip(result.heights, result.root_sets):
            real = root_set.is_real
            ax.plot(np.full(np.count_nonzero(real), height), root_set.roots[real].real,
                    'bo', markersize=3)
            ax.plot(np.full(np.count_nonzero(~real), height), root_set.roots[~real].real,
                    'o', markerfacecolor='none', markeredgecolor='r', markersize=3)

        # Both layers positive: 0 < y < 1 - h
        ax.fill_between(result.heights, 0.0, 1.0 - result.heights, color='c', alpha=0.15,
                        label='physical crest depths')
        ax.set_xlim(0.0, 1.0)
        ax.set_xlabel('Crest height h / H')
        ax.set_ylabel('Crest depth ratio y')
        ax.set_title('Roots of the crest quartic (hollow: complex)')
        ax.grid(True)
        ax.legend()

        self._finish_plot(fig, filename, show)
        return fig
