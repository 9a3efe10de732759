"""Scatter/regression validator.

Plots found values against expected values and fits a straight line through
them. A perfect agreement lies on ``found = expected``; the validator can fail
when the fit is too poor (R² floor) or when its slope or intercept drift too
far from the expected line.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from numpy.typing import ArrayLike
from pydantic import BaseModel, Field

from scivalidate.core.base import BaseValidator
from scivalidate.core.numeric import as_sample, linear_fit, min_max
from scivalidate.core.outcome import Failure, Outcome, Success
from scivalidate.core.registry import ValidatorRegistry
from scivalidate.exceptions import ScivalidateError
from scivalidate.plotting import render_scatter_chart
from scivalidate.validators._utils import FAILED_MARKER, ChartLabels, compose_report

logger = logging.getLogger(__name__)


class ScatterSettings(BaseModel):
    """Thresholds for :class:`ScatterValidator`.

    Attributes
    ----------
    min_r_squared : float, optional
        Lowest acceptable R² of the fit.
    allowed_slope_delta : float, optional
        Maximum ``abs(slope - expected_slope)``.
    allowed_intercept_delta : float, optional
        Maximum ``abs(intercept - expected_intercept)``.
    expected_slope : float
        Slope of a perfect agreement. Default 1.
    expected_intercept : float
        Intercept of a perfect agreement. Default 0.
    """

    min_r_squared: float | None = Field(default=None, le=1)
    allowed_slope_delta: float | None = Field(default=None, ge=0)
    allowed_intercept_delta: float | None = Field(default=None, ge=0)
    expected_slope: float = 1.0
    expected_intercept: float = 0.0


@ValidatorRegistry.register("scatter")
class ScatterValidator(BaseValidator):
    """Validate found against expected values with a linear regression.

    Parameters
    ----------
    expected : array_like
        Reference values (x axis).
    found : array_like
        Computed values (y axis).
    settings : ScatterSettings, optional
        Thresholds and the expected line.
    labels : ChartLabels, optional
        Chart metadata. The axis labels default to the legends.
    """

    validator_type: ClassVar[str] = "scatter"
    settings_class: ClassVar[type[BaseModel]] = ScatterSettings

    def __init__(
        self,
        expected: ArrayLike,
        found: ArrayLike,
        settings: ScatterSettings | None = None,
        labels: ChartLabels | None = None,
    ):
        self.expected = as_sample(expected, "expected")
        self.found = as_sample(found, "found")
        self.settings = settings or ScatterSettings()
        self.labels = labels or ChartLabels()

    def evaluate(self) -> Outcome:
        try:
            fit = linear_fit(self.expected, self.found)
            x_range = min_max(self.expected)
        except ScivalidateError as e:
            logger.debug(f"Scatter comparison could not be computed: {e}")
            return Failure.from_error(e)

        s = self.settings
        slope_delta = abs(fit.slope - s.expected_slope)
        intercept_delta = abs(fit.intercept - s.expected_intercept)

        errors = []
        r2_failed = s.min_r_squared is not None and fit.r_squared < s.min_r_squared
        if r2_failed:
            errors.append(
                f"R2 is {fit.r_squared:.6g}, which is lower than the minimum allowed "
                f"value of {s.min_r_squared}"
            )
        slope_failed = s.allowed_slope_delta is not None and slope_delta > s.allowed_slope_delta
        if slope_failed:
            errors.append(
                f"Slope is {fit.slope:.6g}, which deviates {slope_delta:.6g} from the "
                f"expected {s.expected_slope} (allowed {s.allowed_slope_delta})"
            )
        intercept_failed = (
            s.allowed_intercept_delta is not None and intercept_delta > s.allowed_intercept_delta
        )
        if intercept_failed:
            errors.append(
                f"Intercept is {fit.intercept:.6g}, which deviates {intercept_delta:.6g} "
                f"from the expected {s.expected_intercept} (allowed {s.allowed_intercept_delta})"
            )

        lines = [
            f" * Fit: {fit.intercept:.3f} + {fit.slope:.3f}x",
            f" * R2 = {fit.r_squared:.3f}" + (FAILED_MARKER if r2_failed else ""),
            f" * Slope deviation: {slope_delta:.3f}" + (FAILED_MARKER if slope_failed else ""),
            f" * Intercept deviation: {intercept_delta:.3f}"
            + (FAILED_MARKER if intercept_failed else ""),
        ]

        chart = render_scatter_chart(
            self.expected,
            self.found,
            fit,
            x_range,
            expected_slope=s.expected_slope,
            expected_intercept=s.expected_intercept,
            title=self.labels.title or "",
            x_label=self.labels.x_axis(self.labels.expected_legend),
            y_label=self.labels.y_axis(self.labels.found_legend),
        )
        report = compose_report(self.labels, lines, chart)

        if errors:
            return Failure(error_message="; ".join(errors), report=report)
        return Success(report=report)

    def __repr__(self) -> str:
        return f"ScatterValidator(n={self.expected.size}, settings={self.settings!r})"
