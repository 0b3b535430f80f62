"""
Example script to run the critical-crest sweep.

Run from the repository root:
    python sillflow/scripts/run_critical_sweep.py
"""

import sys
from pathlib import Path

# Add repository root to path to import the sillflow package
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from sillflow.src import configure_logging, save_result, save_hdf5
from sillflow.src.test_cases import run_critical_sweep, compare_selectors

if __name__ == "__main__":
    configure_logging(verbose=True)

    evaluator = run_critical_sweep(depth_ratio=0.3, n_heights=50)
    save_result(evaluator.result, 'critical_sweep.json')
    save_hdf5(evaluator.result, 'critical_sweep.h5')

    compare_selectors(depth_ratio=0.3, n_heights=50)
