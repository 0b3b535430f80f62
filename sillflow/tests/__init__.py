"""
Tests for the critical-crest root sweep.

Run tests with pytest:
    pytest sillflow/tests/ -v

Or run individual test files:
    pytest sillflow/tests/test_sweep.py -v
    pytest sillflow/tests/test_roots.py -v
"""
