"""
scivalidate: validate scientific algorithms against reference data.

Compare the results of a numerical model (e.g. a simulated temperature)
against reference data (e.g. measurements), with the checks embedded in a
unit or integration test. Every comparison contributes a section to a
Markdown report, and the run fails if any comparison is outside its bounds.

Example usage:
    >>> from scivalidate import ChartLabels, SeriesSettings, SeriesValidator, Suite
    >>> suite = Suite("report.md", title="Thermal model")
    >>> suite.push(
    ...     SeriesValidator(
    ...         expected=[1.0, 2.0, 3.0],
    ...         found=[5.0, 6.0, 6.0],
    ...         settings=SeriesSettings(allowed_root_mean_squared_error=5.0),
    ...         labels=ChartLabels(x_label="time step", y_label="Temperature", y_units="C"),
    ...     ),
    ...     title="Zone temperature",
    ... )
    >>> suite.check()

Key modules:
    - core: numeric kernel, outcomes, validator base class and registry
    - validators: built-in series and scatter validators
    - suite: Entry and Suite, the aggregator writing the report
    - ingest: reading columns from CSV files
    - config: YAML suite files
    - cli: the ``scivalidate`` command
"""

__version__ = "0.1.0"

from scivalidate.core import (  # noqa: E402
    DEFAULT_TOLERANCE,
    BaseValidator,
    Failure,
    FailureKind,
    Outcome,
    RegressionFit,
    Success,
    ValidatorRegistry,
    assert_close,
    assert_not_close,
    is_close,
    linear_fit,
    mean,
    mean_bias_error,
    min_max,
    root_mean_squared_error,
)
from scivalidate.exceptions import (  # noqa: E402
    AggregateFailure,
    ConfigError,
    EmptyInputError,
    InsufficientDataError,
    NaNEncounteredError,
    ParseError,
    ReportWriteError,
    ScivalidateError,
    ShapeMismatchError,
)
from scivalidate.ingest import from_csv  # noqa: E402
from scivalidate.suite import Entry, EntryResult, Suite, SuiteResult, SuiteState  # noqa: E402
from scivalidate.validators import (  # noqa: E402
    ChartLabels,
    ScatterSettings,
    ScatterValidator,
    SeriesSettings,
    SeriesValidator,
)

__all__ = [
    "__version__",
    # Core
    "BaseValidator",
    "DEFAULT_TOLERANCE",
    "Failure",
    "FailureKind",
    "Outcome",
    "RegressionFit",
    "Success",
    "ValidatorRegistry",
    "assert_close",
    "assert_not_close",
    "is_close",
    "linear_fit",
    "mean",
    "mean_bias_error",
    "min_max",
    "root_mean_squared_error",
    # Validators
    "ChartLabels",
    "ScatterSettings",
    "ScatterValidator",
    "SeriesSettings",
    "SeriesValidator",
    # Suite
    "Entry",
    "EntryResult",
    "Suite",
    "SuiteResult",
    "SuiteState",
    # Ingestion
    "from_csv",
    # Errors
    "AggregateFailure",
    "ConfigError",
    "EmptyInputError",
    "InsufficientDataError",
    "NaNEncounteredError",
    "ParseError",
    "ReportWriteError",
    "ScivalidateError",
    "ShapeMismatchError",
]
