"""
sillflow - Critical Two-Layer Flow over Topography
==================================================

Re-exports all public components from sillflow.src
"""

from sillflow.src import (
    # Parameters
    FlowParameters,
    HeightSweep,
    # Coefficients and roots
    quartic_coefficients,
    RootSet,
    find_roots,
    # Crest hydraulics
    CrestState,
    # Branch selection
    Branch,
    BranchSelector,
    CriticalBranchSelector,
    IndexBranchSelector,
    # Single-layer reference
    critical_froude,
    critical_curve,
    # Sweep
    RootSweepEvaluator,
    SweepConfig,
    SweepResult,
    SweepError,
    # Output
    save_result,
    load_result,
    save_hdf5,
    load_hdf5,
    configure_logging,
)

__all__ = [
    'FlowParameters',
    'HeightSweep',
    'quartic_coefficients',
    'RootSet',
    'find_roots',
    'CrestState',
    'Branch',
    'BranchSelector',
    'CriticalBranchSelector',
    'IndexBranchSelector',
    'critical_froude',
    'critical_curve',
    'RootSweepEvaluator',
    'SweepConfig',
    'SweepResult',
    'SweepError',
    'save_result',
    'load_result',
    'save_hdf5',
    'load_hdf5',
    'configure_logging',
]
