"""
Branch selection policies.

A branch picks at most one root per height sample and pairs it with the
upstream speed that makes the crest critical.

Notation:
    a  - upstream lower-layer depth ratio
    y  - lower-layer crest depth (a root of the crest quartic)
    G0 - upstream composite Froude number
"""

import numpy as np
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Sequence

from .params import FlowParameters, HeightSweep
from .roots import RootSet
from .hydraulics import CrestState


@dataclass
class Branch:
    """
    One selected root per height sample; NaN where none was selected.

        depth   : Lower-layer crest depth y
        speed   : Upstream speed U
        froude  : Upstream composite Froude number G0
        is_real : Whether the selected root was real-valued
    """
    name: str
    heights: np.ndarray
    depth: np.ndarray
    speed: np.ndarray
    froude: np.ndarray
    is_real: np.ndarray

    @property
    def valid(self) -> np.ndarray:
        """Samples with a selected real root and a finite speed."""
        return self.is_real & np.isfinite(self.speed)

    @property
    def n_valid(self) -> int:
        return int(np.count_nonzero(self.valid))

    @classmethod
    def from_depths(cls, name: str, params: FlowParameters, sweep: HeightSweep,
                    depth: np.ndarray, is_real: np.ndarray) -> 'Branch':
        """Derive speed and Froude number from selected crest depths."""
        state = CrestState(params.depth_ratio, sweep.heights, depth)
        with np.errstate(divide='ignore', invalid='ignore'):
            speed = state.speed
            froude = state.froude_upstream
        return cls(name=name, heights=sweep.heights.copy(), depth=state.depth,
                   speed=speed, froude=froude, is_real=np.asarray(is_real, dtype=bool))


class BranchSelector(ABC):
    """Abstract base class for branch selection policies."""

    @abstractmethod
    def select(self, params: FlowParameters, sweep: HeightSweep,
               root_sets: List[RootSet]) -> Dict[str, Branch]:
        """
        Select branches from the root sets of a sweep.

        Args:
            params: Upstream flow parameters
            sweep: Height samples
            root_sets: One RootSet per height sample

        Returns:
            Mapping of branch name to Branch, in plotting order
        """
        pass


class CriticalBranchSelector(BranchSelector):
    """
    Select the subcritical and supercritical critical-crest branches.

    A root is a candidate when it is real and both layers are positive over
    the crest (0 < y < 1 - h). Candidates are classified by the upstream
    composite Froude number: G0² < 1 subcritical, G0² > 1 supercritical;
    within froude_tol of one they belong to both, which is where the branches
    meet at h = 0. Conjugate pairs split off a multiple root are taken back
    at their real part, see candidates(). When a branch has several
    candidates, the root closest to the upstream interface y = a is the one
    reached by smoothly deforming the upstream stream.
    """

    names = ('subcritical', 'supercritical')

    def __init__(self, froude_tol: float = 1e-6, near_real_tol: float = 1e-4,
                 residual_tol: float = 1e-9):
        for name, value in (('froude_tol', froude_tol), ('near_real_tol', near_real_tol),
                            ('residual_tol', residual_tol)):
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        self.froude_tol = froude_tol
        self.near_real_tol = near_real_tol
        self.residual_tol = residual_tol

    def candidates(self, params: FlowParameters, height: float,
                   root_set: RootSet) -> np.ndarray:
        """
        Physical crest depths among the roots of one row.

        Near a multiple root numpy.roots splits the root into a conjugate
        pair with a small imaginary part. Such a pair counts when its real
        part satisfies the crest Bernoulli condition to residual_tol.
        """
        roots = root_set.roots
        near = ~root_set.is_real & (
            np.abs(roots.imag) <= self.near_real_tol * np.maximum(1.0, np.abs(roots)))
        if np.any(near):
            y = roots[near].real
            with np.errstate(divide='ignore', invalid='ignore'):
                residual = CrestState(params.depth_ratio, np.full(len(y), height),
                                      y).bernoulli_residual
            polished = y[np.abs(residual) <= self.residual_tol]
        else:
            polished = np.zeros(0)

        depths = np.concatenate([root_set.real_roots, polished])
        return depths[(depths > 0.0) & (depths < 1.0 - height)]

    def classify(self, params: FlowParameters, height: float,
                 root_set: RootSet) -> Dict[str, float]:
        """
        Selected crest depth per branch for one height (NaN if none).
        """
        selected = {name: np.nan for name in self.names}

        candidates = self.candidates(params, height, root_set)
        if len(candidates) == 0:
            return selected

        state = CrestState(params.depth_ratio, np.full(len(candidates), height), candidates)
        G2 = state.froude_upstream_squared
        masks = {
            'subcritical': G2 < 1.0 + self.froude_tol,
            'supercritical': G2 > 1.0 - self.froude_tol,
        }

        for name, mask in masks.items():
            if np.any(mask):
                options = candidates[mask]
                selected[name] = options[np.argmin(np.abs(options - params.depth_ratio))]
        return selected

    def select(self, params: FlowParameters, sweep: HeightSweep,
               root_sets: List[RootSet]) -> Dict[str, Branch]:
        depths = {name: np.full(sweep.n_heights, np.nan) for name in self.names}

        for i, (height, root_set) in enumerate(zip(sweep.heights, root_sets)):
            for name, depth in self.classify(params, height, root_set).items():
                depths[name][i] = depth

        return {name: Branch.from_depths(name, params, sweep, depths[name],
                                         np.isfinite(depths[name]))
                for name in self.names}


class IndexBranchSelector(BranchSelector):
    """
    Positional selection: take the roots at fixed indices of the solver output.

    Relies on the root solver returning roots in a stable order. Rows with too
    few roots give NaN; complex picks keep their real part and are tagged
    is_real = False.
    """

    def __init__(self, indices: Sequence[int] = (2, 3), names: Sequence[str] = None):
        self.indices = tuple(indices)
        if names is None:
            names = [f'root_{i}' for i in self.indices]
        if len(names) != len(self.indices):
            raise ValueError("One branch name is needed per index")
        self.names = tuple(names)

    def select(self, params: FlowParameters, sweep: HeightSweep,
               root_sets: List[RootSet]) -> Dict[str, Branch]:
        branches = {}
        for name, idx in zip(self.names, self.indices):
            depth = np.full(sweep.n_heights, np.nan)
            is_real = np.zeros(sweep.n_heights, dtype=bool)
            for i, root_set in enumerate(root_sets):
                if idx < len(root_set):
                    depth[i] = root_set.roots[idx].real
                    is_real[i] = root_set.is_real[idx]
            branches[name] = Branch.from_depths(name, params, sweep, depth, is_real)
        return branches
