"""Time-series validator based on RMSE and MBE.

Compares a computed series against a reference series point by point,
reports the Root Mean Squared Error and the Mean Bias Error, and draws both
series on one chart.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from numpy.typing import ArrayLike
from pydantic import BaseModel, Field

from scivalidate.core.base import BaseValidator
from scivalidate.core.numeric import as_sample, mean_bias_error, root_mean_squared_error
from scivalidate.core.outcome import Failure, Outcome, Success
from scivalidate.core.registry import ValidatorRegistry
from scivalidate.exceptions import ScivalidateError
from scivalidate.plotting import render_series_chart
from scivalidate.validators._utils import ChartLabels, compose_report, metric_line

logger = logging.getLogger(__name__)


class SeriesSettings(BaseModel):
    """Thresholds for :class:`SeriesValidator`.

    A threshold left as None is never checked, but the metric is still
    computed and reported.

    Attributes
    ----------
    allowed_root_mean_squared_error : float, optional
        Maximum allowed RMSE.
    allowed_mean_bias_error : float, optional
        Maximum allowed absolute MBE. The bound applies to ``abs(MBE)``, so
        a large negative bias fails just like a large positive one.
    """

    allowed_root_mean_squared_error: float | None = Field(default=None, ge=0)
    allowed_mean_bias_error: float | None = Field(default=None, ge=0)


@ValidatorRegistry.register("series")
class SeriesValidator(BaseValidator):
    """Validate a time series based on Mean Bias Error and RMSE.

    Parameters
    ----------
    expected : array_like
        Reference values.
    found : array_like
        Computed values.
    settings : SeriesSettings, optional
        Thresholds. None means nothing can fail.
    labels : ChartLabels, optional
        Chart metadata.

    Examples
    --------
    >>> v = SeriesValidator(
    ...     [1.0, 2.0, 3.0],
    ...     [5.0, 6.0, 6.0],
    ...     labels=ChartLabels(x_label="time step", y_label="Zone Temperature", y_units="C"),
    ... )
    >>> v.evaluate().passed
    True
    """

    validator_type: ClassVar[str] = "series"
    settings_class: ClassVar[type[BaseModel]] = SeriesSettings

    def __init__(
        self,
        expected: ArrayLike,
        found: ArrayLike,
        settings: SeriesSettings | None = None,
        labels: ChartLabels | None = None,
    ):
        self.expected = as_sample(expected, "expected")
        self.found = as_sample(found, "found")
        self.settings = settings or SeriesSettings()
        self.labels = labels or ChartLabels()

    def evaluate(self) -> Outcome:
        try:
            rmse = root_mean_squared_error(self.expected, self.found)
            mbe = mean_bias_error(self.expected, self.found)
        except ScivalidateError as e:
            logger.debug(f"Series comparison could not be computed: {e}")
            return Failure.from_error(e)

        errors = []

        allowed_rmse = self.settings.allowed_root_mean_squared_error
        rmse_failed = allowed_rmse is not None and rmse > allowed_rmse
        if rmse_failed:
            errors.append(
                f"Root Mean Squared Error is {rmse:.6g}, which is greater than "
                f"the allowed value of {allowed_rmse}"
            )

        allowed_mbe = self.settings.allowed_mean_bias_error
        mbe_failed = allowed_mbe is not None and abs(mbe) > allowed_mbe
        if mbe_failed:
            errors.append(
                f"Mean Bias Error is {mbe:.6g} (absolute {abs(mbe):.6g}), which is greater "
                f"than the allowed value of {allowed_mbe}"
            )

        chart = render_series_chart(
            self.expected,
            self.found,
            title=self.labels.title or "",
            x_label=self.labels.x_axis("x"),
            y_label=self.labels.y_axis("y"),
            expected_legend=self.labels.expected_legend,
            found_legend=self.labels.found_legend,
        )
        report = compose_report(
            self.labels,
            [
                metric_line("Root Mean Squared Error", rmse, rmse_failed),
                metric_line("Mean Bias Error", mbe, mbe_failed),
            ],
            chart,
        )

        if errors:
            return Failure(error_message="; ".join(errors), report=report)
        return Success(report=report)

    def __repr__(self) -> str:
        return f"SeriesValidator(n={self.expected.size}, settings={self.settings!r})"
