"""
Pytest tests for the root sweep evaluator.

Tests verify:
1. Equal layer depths over 50 heights: table shape, root counts, degeneracy flags
2. Zero height: both branches start at the long-wave speed, G0 = 1
3. Subcritical branch physics for small obstacles
4. Selected roots satisfy the crest conditions
5. Aborts naming the offending sample
6. Positional selection keeps complex and missing roots visible
"""

import logging
import numpy as np
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from sillflow.src import (
    FlowParameters, HeightSweep, RootSweepEvaluator, SweepConfig, SweepError,
    CrestState, IndexBranchSelector, quartic_coefficients, critical_froude
)


@pytest.fixture
def sweep():
    """Fifty evenly spaced heights on [0, 1]."""
    return HeightSweep.uniform(0.0, 1.0, 50)


@pytest.fixture
def small_obstacles():
    """Crest heights well below the upstream interface a = 0.3."""
    return HeightSweep.uniform(0.0, 0.2, 21)


@pytest.fixture
def result(sweep):
    return RootSweepEvaluator(FlowParameters(depth_ratio=0.3), sweep).evaluate()


class TestEqualDepths:
    """a = 0.5, fifty heights on [0, 1]."""

    @pytest.fixture
    def equal(self, sweep):
        return RootSweepEvaluator(FlowParameters(depth_ratio=0.5), sweep).evaluate()

    def test_table_shape(self, equal):
        assert equal.coefficients.shape == (50, 5)
        assert np.all(np.isfinite(equal.coefficients))

    def test_root_counts(self, equal):
        assert len(equal.root_sets) == 50
        for i, root_set in enumerate(equal.root_sets):
            assert len(root_set) <= 4, f"Row {i} has {len(root_set)} roots"

    def test_every_row_degenerate(self, equal):
        assert np.all(equal.degenerate)
        assert np.all(equal.degrees <= 3)

    def test_full_height_row_vanishes(self, equal):
        """a = 1/2 and h = 1 leave no polynomial at all."""
        assert equal.degrees[-1] == 0
        assert len(equal.root_sets[-1]) == 0

    def test_degenerate_rows_logged(self, sweep, caplog):
        with caplog.at_level(logging.WARNING, logger='sillflow'):
            RootSweepEvaluator(FlowParameters(depth_ratio=0.5), sweep).evaluate()
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1, "Degenerate rows should give one summary warning"
        assert "50 of 50" in warnings[0].getMessage()

    def test_full_quartic_not_logged(self, sweep, caplog):
        with caplog.at_level(logging.WARNING, logger='sillflow'):
            RootSweepEvaluator(FlowParameters(depth_ratio=0.3), sweep).evaluate()
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    def test_roots_array_padding(self, equal):
        roots = equal.roots_array()
        assert roots.shape == (50, 4)
        assert np.all(np.isnan(roots[:, 3]))


class TestFullQuartic:
    """a = 0.3 keeps every row a quartic."""

    def test_no_degenerate_rows(self, result):
        assert not np.any(result.degenerate)

    def test_four_roots_per_row(self, result):
        assert all(len(rs) == 4 for rs in result.root_sets)

    def test_idempotent(self, sweep):
        evaluator = RootSweepEvaluator(0.3, sweep)
        first = evaluator.evaluate()
        second = evaluator.evaluate()
        assert np.array_equal(first.roots_array(), second.roots_array(), equal_nan=True)


class TestZeroHeight:
    """Without topography both branches meet at the long-wave speed."""

    @pytest.mark.parametrize("a", [0.2, 0.3, 0.7])
    def test_branch_speeds(self, a):
        result = RootSweepEvaluator(a, HeightSweep.uniform(0.0, 0.1, 3)).evaluate()
        expected = np.sqrt(a * (1 - a))
        for name, branch in result.branches.items():
            assert branch.valid[0], f"{name} branch missing at h = 0"
            assert branch.speed[0] == pytest.approx(expected, rel=1e-5)
            assert branch.depth[0] == pytest.approx(a, abs=1e-5)

    @pytest.mark.parametrize("a", [0.4995, 0.5005, 0.501])
    def test_branch_speeds_near_equal_depths(self, a):
        """The leading coefficient nearly vanishes and y = a is a near-multiple root."""
        result = RootSweepEvaluator(a, HeightSweep.uniform(0.0, 0.1, 3)).evaluate()
        expected = np.sqrt(a * (1 - a))
        for name, branch in result.branches.items():
            assert branch.valid[0], f"{name} branch missing at h = 0 for a = {a}"
            assert branch.speed[0] == pytest.approx(expected, rel=1e-5)
            assert branch.depth[0] == pytest.approx(a, abs=1e-4)
            assert branch.froude[0] == pytest.approx(1.0, abs=1e-5)

    def test_matches_single_layer_froude(self, result):
        """Upstream Froude number equals the single-layer critical value at h = 0."""
        F_single = critical_froude(0.0)
        for branch in result.branches.values():
            assert branch.froude[0] == pytest.approx(F_single, abs=1e-5)


class TestSubcriticalBranch:
    """Subcritical crest control for obstacles lower than the interface."""

    @pytest.fixture
    def sub(self, small_obstacles):
        return RootSweepEvaluator(0.3, small_obstacles).evaluate().branches['subcritical']

    def test_present_everywhere(self, sub):
        assert np.all(sub.valid)

    def test_subcritical_upstream(self, sub):
        assert np.all(sub.froude <= 1.0 + 1e-6)
        assert np.all(sub.speed[1:] < np.sqrt(0.21))

    def test_slows_with_height(self, sub):
        assert np.all(np.diff(sub.speed) < 0), "Critical speed should fall as the obstacle grows"

    def test_lower_layer_thins(self, sub):
        assert np.all(np.diff(sub.depth) < 0)
        assert np.all(sub.depth[1:] < 0.3)


class TestSupercriticalBranch:
    """Supercritical crest control."""

    def test_supercritical_upstream(self, result):
        sup = result.branches['supercritical']
        assert np.all(sup.froude[sup.valid] >= 1.0 - 1e-6)


class TestCrestConditions:
    """Every selected root is a critical crest state."""

    def test_selected_roots(self, result):
        for name, branch in result.branches.items():
            valid = branch.valid
            state = CrestState(0.3, branch.heights[valid], branch.depth[valid])
            assert np.all(state.is_physical), f"{name}: unphysical crest depth selected"
            assert np.allclose(state.crest_froude, 1.0)
            assert np.allclose(state.bernoulli_residual, 0.0, atol=1e-7)


class TestErrors:
    """Failures abort the sweep and name the sample."""

    def test_non_finite_row(self, sweep):
        def broken(depth_ratio, heights):
            C = quartic_coefficients(depth_ratio, heights)
            C[7, 2] = np.nan
            return C

        with pytest.raises(SweepError) as excinfo:
            RootSweepEvaluator(0.3, sweep, coefficient_func=broken).evaluate()
        assert excinfo.value.index == 7
        assert excinfo.value.height == pytest.approx(sweep.heights[7])

    def test_wrong_table_shape(self, sweep):
        def short(depth_ratio, heights):
            return quartic_coefficients(depth_ratio, heights)[:, 1:]

        with pytest.raises(SweepError) as excinfo:
            RootSweepEvaluator(0.3, sweep, coefficient_func=short).evaluate()
        assert excinfo.value.index is None

    def test_height_out_of_range(self):
        with pytest.raises(SweepError) as excinfo:
            RootSweepEvaluator(0.3, [0.0, 0.5, 1.2, 1.5])
        assert excinfo.value.index == 2

    @pytest.mark.parametrize("a", [0.0, 1.0, -0.2, 1.5])
    def test_depth_ratio_out_of_range(self, a):
        with pytest.raises(ValueError):
            FlowParameters(depth_ratio=a)

    def test_invalid_config(self):
        with pytest.raises(ValueError):
            SweepConfig(imag_tol=-1.0)
        with pytest.raises(ValueError):
            SweepConfig(height_range=(1.0, 0.0))
        with pytest.raises(ValueError):
            SweepConfig(residual_tol=-1.0)


class TestIndexSelector:
    """Positional selection of roots 2 and 3."""

    def test_degenerate_rows_give_nan(self, sweep):
        result = RootSweepEvaluator(0.5, sweep, selector=IndexBranchSelector()).evaluate()
        last = result.branches['root_3']
        assert not np.any(last.valid)
        assert np.all(np.isnan(last.depth))

    def test_complex_picks_tagged(self, result, sweep):
        legacy = RootSweepEvaluator(0.3, sweep, selector=IndexBranchSelector()).evaluate()
        for name, idx in (('root_2', 2), ('root_3', 3)):
            branch = legacy.branches[name]
            expected = np.array([rs.is_real[idx] for rs in legacy.root_sets])
            assert np.array_equal(branch.is_real, expected)
            # Complex picks are kept, never counted as valid
            assert not np.any(branch.valid & ~expected)

    def test_names_must_match_indices(self):
        with pytest.raises(ValueError):
            IndexBranchSelector(indices=(2, 3), names=('only_one',))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
