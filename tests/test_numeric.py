"""Tests for the numeric kernel (core/numeric.py).

Test categories
---------------
A. Known-answer cases taken from hand calculations.
B. Identities that must hold for any input (rmse(e, e) == 0, constants).
C. Structural errors: mismatched lengths, empty input, NaN, degenerate fits.
D. Closeness assertions.
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from scivalidate.core.numeric import (
    DEFAULT_TOLERANCE,
    RegressionFit,
    as_sample,
    assert_close,
    assert_not_close,
    is_close,
    linear_fit,
    mbe,
    mean,
    mean_bias_error,
    min_max,
    rmse,
    root_mean_squared_error,
)
from scivalidate.exceptions import (
    EmptyInputError,
    InsufficientDataError,
    NaNEncounteredError,
    ShapeMismatchError,
)

# ---------------------------------------------------------------------------
# A. Known answers
# ---------------------------------------------------------------------------


class TestKnownAnswers:
    """Hand-computed values."""

    def test_mean(self):
        assert mean([-1.0, -1.0, 1.0, 1.0]) == pytest.approx(0.0)
        assert mean([1, 2, 3, 4]) == pytest.approx(2.5)

    def test_min_max(self):
        assert min_max([3.0, 1.0, 5.0, 2.0, 4.0]) == (1.0, 5.0)

    def test_rmse_and_mbe_reference_scenario(self):
        """expected=[1,2,3], found=[5,6,6]: MBE = 11/3, RMSE = sqrt(41/3)."""
        expected = [1.0, 2.0, 3.0]
        found = [5.0, 6.0, 6.0]
        assert mean_bias_error(expected, found) == pytest.approx(11 / 3)
        assert root_mean_squared_error(expected, found) == pytest.approx(math.sqrt(41 / 3))

    def test_rmse_does_not_cancel_out(self):
        """Errors of opposite sign cancel in MBE but not in RMSE."""
        x = [0.0, 0.0, 0.0, 0.0]
        y = [-1.0, -1.0, 1.0, 1.0]
        assert rmse(x, y) == pytest.approx(1.0)
        assert mbe(x, y) == pytest.approx(0.0)

    def test_mbe_sign_convention(self):
        """Positive MBE means found overshoots expected."""
        assert mbe([0.0] * 10, [1.0] * 10) == pytest.approx(1.0)
        assert mbe([1.0] * 10, [0.0] * 10) == pytest.approx(-1.0)

    def test_linear_fit_imperfect(self):
        fit = linear_fit([1.0, 2.0, 3.0, 4.0], [6.0, 2.0, 1.0, 0.0])
        assert fit.intercept == pytest.approx(7.0)
        assert fit.slope == pytest.approx(-1.9)
        assert fit.r_squared == pytest.approx(0.8699, abs=1e-3)
        assert fit.n_points == 4

    def test_integer_samples(self):
        """Integer inputs are accepted and promoted to float."""
        assert rmse(np.array([1, 2, 3]), np.array([1, 2, 3], dtype=np.int8)) == 0.0
        assert mean(np.arange(5, dtype=np.uint16)) == pytest.approx(2.0)


# ---------------------------------------------------------------------------
# B. Identities
# ---------------------------------------------------------------------------


class TestIdentities:
    """Properties that hold for any valid input."""

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_self_comparison_is_zero(self, seed):
        e = np.random.default_rng(seed).normal(size=50)
        assert rmse(e, e) == 0.0
        assert mbe(e, e) == 0.0

    @pytest.mark.parametrize("k", [-3.5, 0.0, 7.0])
    def test_constant_sample(self, k):
        sample = [k] * 8
        assert mean(sample) == pytest.approx(k)
        assert min_max(sample) == (k, k)

    @pytest.mark.parametrize("slope,intercept", [(2.0, 1.0), (-0.5, 10.0), (1.0, 0.0)])
    def test_linear_fit_recovers_exact_line(self, slope, intercept):
        x = np.linspace(-5, 5, 21)
        y = slope * x + intercept
        fit = linear_fit(x, y)
        assert fit.slope == pytest.approx(slope)
        assert fit.intercept == pytest.approx(intercept, abs=1e-9)
        assert fit.r_squared == pytest.approx(1.0)

    def test_constant_y_is_a_perfect_fit(self):
        fit = linear_fit([1.0, 2.0, 3.0], [4.0, 4.0, 4.0])
        assert fit.slope == pytest.approx(0.0)
        assert fit.intercept == pytest.approx(4.0)
        assert fit.r_squared == 1.0

    def test_two_points(self):
        fit = linear_fit([0.0, 1.0], [1.0, 3.0])
        assert fit.slope == pytest.approx(2.0)
        assert fit.intercept == pytest.approx(1.0)
        assert fit.r_squared == pytest.approx(1.0)

    def test_predict(self):
        fit = RegressionFit(slope=2.0, intercept=1.0, r_squared=1.0, n_points=2)
        np.testing.assert_allclose(fit.predict([0.0, 1.0, 2.0]), [1.0, 3.0, 5.0])
        assert fit.to_dict()["slope"] == 2.0


# ---------------------------------------------------------------------------
# C. Structural errors
# ---------------------------------------------------------------------------


class TestErrors:
    """Invalid input raises instead of truncating or returning NaN."""

    @pytest.mark.parametrize("func", [rmse, mbe, linear_fit])
    def test_shape_mismatch(self, func):
        with pytest.raises(ShapeMismatchError):
            func([1.0, 2.0, 3.0], [1.0, 2.0])

    def test_shape_mismatch_is_a_value_error(self):
        with pytest.raises(ValueError):
            rmse([1.0], [1.0, 2.0])

    @pytest.mark.parametrize("func", [mean, min_max])
    def test_empty_single(self, func):
        with pytest.raises(EmptyInputError):
            func([])

    @pytest.mark.parametrize("func", [rmse, mbe])
    def test_empty_pair(self, func):
        with pytest.raises(EmptyInputError):
            func([], [])

    def test_linear_fit_needs_two_points(self):
        with pytest.raises(InsufficientDataError):
            linear_fit([1.0], [2.0])
        # InsufficientData is a kind of EmptyInput
        with pytest.raises(EmptyInputError):
            linear_fit([], [])

    def test_linear_fit_constant_x(self):
        with pytest.raises(InsufficientDataError, match="identical"):
            linear_fit([2.0, 2.0, 2.0], [1.0, 2.0, 3.0])

    def test_nan_in_min_max(self):
        with pytest.raises(NaNEncounteredError):
            min_max([1.0, float("nan"), 3.0])

    @pytest.mark.parametrize("func", [rmse, mbe, linear_fit])
    def test_nan_in_pair(self, func):
        with pytest.raises(NaNEncounteredError):
            func([1.0, 2.0, 3.0], [1.0, np.nan, 3.0])

    @pytest.mark.parametrize("func", [rmse, mbe, linear_fit])
    @pytest.mark.parametrize("value", [np.inf, -np.inf])
    def test_infinity_in_pair(self, func, value):
        """inf - inf would otherwise turn the result into NaN."""
        with pytest.raises(NaNEncounteredError):
            func([1.0, value], [1.0, value])

    @pytest.mark.parametrize("func", [mean, min_max])
    def test_infinity_in_single(self, func):
        with pytest.raises(NaNEncounteredError):
            func([1.0, np.inf])

    def test_two_dimensional_input(self):
        with pytest.raises(ShapeMismatchError):
            as_sample([[1.0, 2.0], [3.0, 4.0]])
        with pytest.raises(ShapeMismatchError):
            as_sample(3.0)

    def test_as_sample_copies(self):
        source = np.array([1.0, 2.0, 3.0])
        sample = as_sample(source)
        source[0] = 100.0
        assert sample[0] == 1.0
        assert sample.dtype == np.float64


# ---------------------------------------------------------------------------
# D. Closeness
# ---------------------------------------------------------------------------


class TestCloseness:
    """is_close / assert_close / assert_not_close."""

    def test_is_close(self):
        assert is_close(1.0, 1.01, 0.1)
        assert not is_close(1.0, 2.0, 0.2)
        assert is_close(1.0, 1.0 + DEFAULT_TOLERANCE / 2)
        assert not is_close(1.0, 1.001)

    def test_tolerance_is_inclusive(self):
        assert is_close(1.0, 1.5, 0.5)

    def test_assert_close_passes(self):
        assert_close(1.0, 2.0, 2.0)
        assert_close(1.0, 1.0000001)

    def test_assert_close_fails(self):
        with pytest.raises(AssertionError, match="not close enough"):
            assert_close(1.0, 2.0, 0.2)

    def test_assert_not_close_passes(self):
        assert_not_close(1.0, 21.0, 1.0)
        assert_not_close(1.0, 10.0)

    def test_assert_not_close_fails(self):
        with pytest.raises(AssertionError, match="too close"):
            assert_not_close(1.0, 1.0, 0.1)

    def test_integers(self):
        assert_close(2, 2)
        assert_not_close(2, 3)
