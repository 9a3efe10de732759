"""Numeric kernel used by the built-in validators.

All functions are pure: they take array-like samples, coerce them to
``float64`` numpy arrays and return plain floats (or small dataclasses).
Structural problems with the input raise the errors defined in
:mod:`scivalidate.exceptions` instead of returning NaN or silently
truncating.

Functions
---------
as_sample
    Coerce an array-like into a one-dimensional float64 array
mean
    Arithmetic mean
min_max
    Minimum and maximum of a sample
root_mean_squared_error
    Root Mean Squared Error between two samples (alias ``rmse``)
mean_bias_error
    Mean Bias Error between two samples (alias ``mbe``)
linear_fit
    Ordinary least-squares fit of ``y = intercept + slope * x``
is_close, assert_close, assert_not_close
    Closeness checks for ad hoc numeric assertions
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from scivalidate.exceptions import (
    EmptyInputError,
    InsufficientDataError,
    NaNEncounteredError,
    ShapeMismatchError,
)

# Any one-dimensional array-like of real numbers
NumericSample = ArrayLike

DEFAULT_TOLERANCE = 1e-6


@dataclass(frozen=True)
class RegressionFit:
    """Result of an ordinary least-squares linear fit.

    Attributes
    ----------
    slope : float
        Fitted slope.
    intercept : float
        Fitted intercept.
    r_squared : float
        Coefficient of determination (1.0 is a perfect fit).
    n_points : int
        Number of paired points used.
    slope_stderr : float
        Standard error of the slope.
    intercept_stderr : float
        Standard error of the intercept.
    """

    slope: float
    intercept: float
    r_squared: float
    n_points: int
    slope_stderr: float = 0.0
    intercept_stderr: float = 0.0

    def predict(self, x: ArrayLike) -> NDArray[np.float64]:
        """Evaluate the fitted line at ``x``."""
        return self.intercept + self.slope * np.asarray(x, dtype=np.float64)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "slope": self.slope,
            "intercept": self.intercept,
            "r_squared": self.r_squared,
            "n_points": self.n_points,
            "slope_stderr": self.slope_stderr,
            "intercept_stderr": self.intercept_stderr,
        }


def as_sample(values: NumericSample, name: str = "sample") -> NDArray[np.float64]:
    """Coerce ``values`` into a one-dimensional float64 array.

    The input is always copied, so later changes to the caller's data do not
    leak into a validator holding the result.

    Parameters
    ----------
    values : array_like
        Integers, floats or numpy scalars of any real dtype.
    name : str, optional
        Name used in error messages.

    Returns
    -------
    NDArray[np.float64]
        The coerced sample.

    Raises
    ------
    ShapeMismatchError
        If the input is not one-dimensional.
    """
    arr = np.array(values, dtype=np.float64, copy=True)
    if arr.ndim != 1:
        raise ShapeMismatchError(
            f"{name} must be one-dimensional, got an array of shape {arr.shape}"
        )
    return arr


def _check_not_empty(x: NDArray[np.float64], what: str) -> None:
    if x.size == 0:
        raise EmptyInputError(f"Trying to calculate {what} of empty dataset")


def _check_finite(x: NDArray[np.float64], what: str) -> None:
    if not np.isfinite(x).all():
        raise NaNEncounteredError(f"Found NaN or infinity when calculating {what} of dataset")


def _paired(
    expected: NumericSample,
    found: NumericSample,
    what: str,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    x = as_sample(expected, "expected")
    y = as_sample(found, "found")
    if x.size != y.size:
        raise ShapeMismatchError(
            f"Calculating {what} of two datasets of different length. "
            f"expected has {x.size} values, found has {y.size}"
        )
    _check_not_empty(x, what)
    _check_finite(x, what)
    _check_finite(y, what)
    return x, y


def mean(sample: NumericSample) -> float:
    """Calculate the arithmetic mean of a sample.

    Parameters
    ----------
    sample : array_like
        Values to average.

    Returns
    -------
    float
        The mean.

    Raises
    ------
    EmptyInputError
        If the sample is empty.
    NaNEncounteredError
        If the sample contains NaN or infinity.

    Examples
    --------
    >>> mean([-1.0, -1.0, 1.0, 1.0])
    0.0
    """
    x = as_sample(sample)
    _check_not_empty(x, "mean")
    _check_finite(x, "mean")
    return float(np.mean(x))


def min_max(sample: NumericSample) -> tuple[float, float]:
    """Calculate the minimum and maximum of a sample.

    Raises
    ------
    EmptyInputError
        If the sample is empty.
    NaNEncounteredError
        If the sample contains NaN or infinity.

    Examples
    --------
    >>> min_max([1.0, 2.0, 3.0, 4.0, 5.0])
    (1.0, 5.0)
    """
    x = as_sample(sample)
    _check_not_empty(x, "max and min")
    _check_finite(x, "max and min")
    return float(x.min()), float(x.max())


def root_mean_squared_error(expected: NumericSample, found: NumericSample) -> float:
    """Calculate the Root Mean Squared Error between two samples.

    Contrary to :func:`mean_bias_error`, positive and negative deviations do
    not cancel out: if ``found`` is above ``expected`` by 1.2 units half of
    the time and below it by the same amount the rest of the time, the RMSE
    is 1.2 while the MBE is 0.

    .. math::

        RMSE = \\sqrt{\\frac{\\sum_{i=1}^{n}(found_i - expected_i)^2}{n}}

    Parameters
    ----------
    expected : array_like
        Reference values.
    found : array_like
        Computed values, same length as ``expected``.

    Returns
    -------
    float
        The RMSE (always >= 0).

    Raises
    ------
    ShapeMismatchError
        If the samples differ in length.
    EmptyInputError
        If the samples are empty.
    NaNEncounteredError
        If either sample contains NaN or infinity.
    """
    x, y = _paired(expected, found, "Root Mean Squared Error")
    return float(np.sqrt(np.mean((y - x) ** 2)))


def mean_bias_error(expected: NumericSample, found: NumericSample) -> float:
    """Calculate the Mean Bias Error between two samples.

    A positive value means ``found`` is systematically larger than
    ``expected``; a negative value means it is systematically smaller.

    .. math::

        MBE = \\frac{\\sum_{i=1}^{n}(found_i - expected_i)}{n}

    Raises
    ------
    ShapeMismatchError
        If the samples differ in length.
    EmptyInputError
        If the samples are empty.
    NaNEncounteredError
        If either sample contains NaN or infinity.
    """
    x, y = _paired(expected, found, "Mean Bias Error")
    return float(np.mean(y - x))


rmse = root_mean_squared_error
mbe = mean_bias_error


def linear_fit(x: NumericSample, y: NumericSample) -> RegressionFit:
    """Fit ``y = intercept + slope * x`` by ordinary least squares.

    Slope, intercept and their standard errors come from
    :func:`scipy.stats.linregress`. R² is computed from the residuals as
    ``1 - SS_res / SS_tot``; a constant ``y`` that is fitted exactly has
    R² = 1.

    Parameters
    ----------
    x : array_like
        Independent variable (typically the expected values).
    y : array_like
        Dependent variable (typically the found values).

    Returns
    -------
    RegressionFit
        Slope, intercept, R² and standard errors.

    Raises
    ------
    ShapeMismatchError
        If ``x`` and ``y`` differ in length.
    InsufficientDataError
        If there are fewer than 2 points, or ``x`` is constant.
    NaNEncounteredError
        If either sample contains NaN or infinity.

    Examples
    --------
    >>> fit = linear_fit([1.0, 2.0, 3.0, 4.0], [6.0, 2.0, 1.0, 0.0])
    >>> round(fit.intercept, 3), round(fit.slope, 3)
    (7.0, -1.9)
    """
    from scipy import stats

    xs = as_sample(x, "x")
    ys = as_sample(y, "y")
    if xs.size != ys.size:
        raise ShapeMismatchError(
            f"Calculating linear coefficients of two datasets of different length. "
            f"x has {xs.size} values, y has {ys.size}"
        )
    if xs.size < 2:
        raise InsufficientDataError(
            f"A linear fit needs at least 2 points, got {xs.size}"
        )
    _check_finite(xs, "linear coefficients")
    _check_finite(ys, "linear coefficients")
    if np.ptp(xs) == 0:
        raise InsufficientDataError("Cannot fit a line: all x values are identical")

    result = stats.linregress(xs, ys)
    slope = float(result.slope)
    intercept = float(result.intercept)

    residuals = ys - (intercept + slope * xs)
    ss_res = float(np.sum(residuals**2))
    ss_tot = float(np.sum((ys - ys.mean()) ** 2))
    if ss_tot == 0:
        r_squared = 1.0 if np.isclose(ss_res, 0.0) else 0.0
    else:
        r_squared = 1.0 - ss_res / ss_tot

    return RegressionFit(
        slope=slope,
        intercept=intercept,
        r_squared=r_squared,
        n_points=int(xs.size),
        slope_stderr=float(result.stderr),
        intercept_stderr=float(result.intercept_stderr),
    )


def is_close(a: float, b: float, tolerance: float | None = None) -> bool:
    """Return True if ``abs(a - b) <= tolerance``.

    The default tolerance is :data:`DEFAULT_TOLERANCE` (1e-6).
    """
    if tolerance is None:
        tolerance = DEFAULT_TOLERANCE
    return abs(float(a) - float(b)) <= tolerance


def assert_close(a: float, b: float, tolerance: float | None = None) -> None:
    """Assert that two numbers are close enough.

    Raises
    ------
    AssertionError
        If ``abs(a - b) > tolerance``.

    Examples
    --------
    >>> assert_close(1.0, 1.01, 0.1)
    >>> assert_close(1.0, 1.0000001)
    """
    if tolerance is None:
        tolerance = DEFAULT_TOLERANCE
    diff = abs(float(a) - float(b))
    if diff > tolerance:
        raise AssertionError(
            f"{a} and {b} are not close enough "
            f"(allowed difference was {tolerance}... found {diff})"
        )


def assert_not_close(a: float, b: float, tolerance: float | None = None) -> None:
    """Assert that two numbers are at least ``tolerance`` apart.

    Raises
    ------
    AssertionError
        If ``abs(a - b) < tolerance``.

    Examples
    --------
    >>> assert_not_close(1.0, 10.0, 0.2)
    """
    if tolerance is None:
        tolerance = DEFAULT_TOLERANCE
    diff = abs(float(a) - float(b))
    if diff < tolerance:
        raise AssertionError(
            f"{a} and {b} are too close (minimum difference was {tolerance}... found {diff})"
        )
