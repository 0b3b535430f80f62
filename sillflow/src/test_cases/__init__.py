"""
Test cases for the critical-crest root sweep.
"""

from .critical_sweep import run_critical_sweep, compare_selectors

__all__ = [
    'run_critical_sweep',
    'compare_selectors',
]
