"""Core validation engine.

Classes
-------
BaseValidator
    Abstract base class every validator implements.
Success, Failure, FailureKind
    The outcome of one validation.
RegressionFit
    Result of :func:`linear_fit`.
ValidatorRegistry
    Registry for building validators by name.

The numeric kernel (``mean``, ``min_max``, ``root_mean_squared_error``,
``mean_bias_error``, ``linear_fit`` and the closeness checks) lives in
:mod:`scivalidate.core.numeric`.
"""

from scivalidate.core.base import BaseValidator
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
from scivalidate.core.outcome import Failure, FailureKind, Outcome, Success
from scivalidate.core.registry import ValidatorRegistry

__all__ = [
    "BaseValidator",
    "DEFAULT_TOLERANCE",
    "Failure",
    "FailureKind",
    "Outcome",
    "RegressionFit",
    "Success",
    "ValidatorRegistry",
    "as_sample",
    "assert_close",
    "assert_not_close",
    "is_close",
    "linear_fit",
    "mbe",
    "mean",
    "mean_bias_error",
    "min_max",
    "rmse",
    "root_mean_squared_error",
]
