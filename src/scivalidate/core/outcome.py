"""Result of evaluating one validator.

Every validator returns either a :class:`Success` or a :class:`Failure`. Both
carry report text: a failing validation still explains itself in the report.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict

from scivalidate.exceptions import ScivalidateError


class FailureKind(str, Enum):
    """Why a validation failed."""

    THRESHOLD_EXCEEDED = "threshold_exceeded"
    SHAPE_MISMATCH = "shape_mismatch"
    EMPTY_INPUT = "empty_input"
    INSUFFICIENT_DATA = "insufficient_data"
    NAN_ENCOUNTERED = "nan_encountered"
    ERROR = "error"


class Success(BaseModel):
    """A passed validation.

    Attributes
    ----------
    report : str
        Markdown fragment to include in the report.
    """

    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    report: str

    @property
    def passed(self) -> bool:
        return True


class Failure(BaseModel):
    """A failed validation.

    Attributes
    ----------
    error_message : str
        Short explanation of what failed, used in the aggregate error.
    report : str
        Markdown fragment to include in the report.
    kind : FailureKind
        Category of the failure.
    """

    model_config = ConfigDict(frozen=True)

    status: Literal["failure"] = "failure"
    error_message: str
    report: str
    kind: FailureKind = FailureKind.THRESHOLD_EXCEEDED

    @property
    def passed(self) -> bool:
        return False

    @classmethod
    def from_error(cls, exc: ScivalidateError, report: str | None = None) -> "Failure":
        """Build a Failure from a kernel error.

        Parameters
        ----------
        exc : ScivalidateError
            The error raised while evaluating.
        report : str, optional
            Report text. Defaults to the error message.
        """
        message = str(exc)
        return cls(
            error_message=message,
            report=report if report is not None else message,
            kind=FailureKind(exc.failure_kind),
        )


Outcome = Union[Success, Failure]
