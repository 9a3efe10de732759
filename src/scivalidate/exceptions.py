"""Exception hierarchy for scivalidate.

All errors raised by the package derive from :class:`ScivalidateError` so
callers can catch them in one place. Structural errors raised by the numeric
kernel also derive from :class:`ValueError`.

Each kernel error carries the ``failure_kind`` used when a validator turns it
into a :class:`~scivalidate.core.outcome.Failure`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from scivalidate.suite import EntryResult


class ScivalidateError(Exception):
    """Base class for all scivalidate errors."""

    failure_kind: ClassVar[str] = "error"


class ShapeMismatchError(ScivalidateError, ValueError):
    """Paired samples differ in length, or a sample is not one-dimensional."""

    failure_kind = "shape_mismatch"


class EmptyInputError(ScivalidateError, ValueError):
    """A kernel function was given an empty sample."""

    failure_kind = "empty_input"


class InsufficientDataError(EmptyInputError):
    """A kernel function was given too few (or degenerate) points."""

    failure_kind = "insufficient_data"


class NaNEncounteredError(ScivalidateError, ValueError):
    """A NaN or infinite value was found where a finite value is required."""

    failure_kind = "nan_encountered"


class ParseError(ScivalidateError, ValueError):
    """Tabular data could not be read."""


class ConfigError(ScivalidateError, ValueError):
    """A suite configuration file is invalid."""


class ReportWriteError(ScivalidateError, OSError):
    """The report destination could not be opened or written.

    This is the only fatal error of a suite run.
    """


class AggregateFailure(ScivalidateError):
    """One or more entries of a suite failed.

    Parameters
    ----------
    failures : list[EntryResult]
        The failing entries, in execution order.
    """

    def __init__(self, failures: list["EntryResult"]):
        self.failures = list(failures)
        lines = [f"{f.title}: {f.error_message}" for f in self.failures]
        super().__init__("\n".join(lines))
