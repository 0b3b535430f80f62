"""
Critical Two-Layer Flow over Topography
=======================================

Sweeps the obstacle crest height for a Boussinesq two-layer stream and finds
the flows that are exactly critical over the crest.

Features:
- Closed-form crest quartic in the lower-layer crest depth
- Symbolic derivation of the same quartic in the optional submodule
  sillflow.src.derivation (needs sympy, not imported by the package)
- Degenerate rows detected and solved at their reduced degree
- Real/complex tagging of every root
- Branch selection by upstream Froude number (positional policy kept for comparison)
- Single-layer reference curves and regime plots

Nondimensional variables:
    a - upstream lower-layer depth / H (baseline depth ratio)
    h - crest height / H
    y - lower-layer crest depth / H (critical depth ratio)
    U - upstream speed / sqrt(g' H)

Example:
    params = FlowParameters(depth_ratio=0.3)
    sweep = HeightSweep.uniform(0.0, 1.0, 50)

    evaluator = RootSweepEvaluator(params, sweep)
    result = evaluator.evaluate()
    sub = result.branches['subcritical']
    print(sub.heights[sub.valid], sub.speed[sub.valid])
"""

from .params import FlowParameters, HeightSweep
from .coefficients import CoefficientFunction, quartic_coefficients
from .roots import RootSet, find_roots
from .hydraulics import CrestState
from .branches import Branch, BranchSelector, CriticalBranchSelector, IndexBranchSelector
from .single_layer import obstacle_height, critical_froude, critical_curve
from .sweep import RootSweepEvaluator, SweepConfig, SweepResult, SweepError
from .units import ureg, reduced_gravity, dimensional_speed
from .io import AdvancedJSONEncoder, save_result, load_result, save_hdf5, load_hdf5
from .log import configure_logging

__all__ = [
    # Parameters
    'FlowParameters',
    'HeightSweep',

    # Coefficients and roots
    'CoefficientFunction',
    'quartic_coefficients',
    'RootSet',
    'find_roots',

    # Crest hydraulics
    'CrestState',

    # Branch selection
    'Branch',
    'BranchSelector',
    'CriticalBranchSelector',
    'IndexBranchSelector',

    # Single-layer reference
    'obstacle_height',
    'critical_froude',
    'critical_curve',

    # Sweep
    'RootSweepEvaluator',
    'SweepConfig',
    'SweepResult',
    'SweepError',

    # Units
    'ureg',
    'reduced_gravity',
    'dimensional_speed',

    # Output
    'AdvancedJSONEncoder',
    'save_result',
    'load_result',
    'save_hdf5',
    'load_hdf5',
    'configure_logging',
]

__version__ = '1.0.0'
