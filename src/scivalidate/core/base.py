"""Base class for validators.

A validator is any comparison task that can be evaluated into an
:data:`~scivalidate.core.outcome.Outcome`. Built-in validators live in
:mod:`scivalidate.validators`; user code subclasses :class:`BaseValidator`
directly.

Example
-------
>>> from scivalidate.core import BaseValidator, Failure, Success
>>>
>>> class EqualValidator(BaseValidator):
...     def __init__(self, expected: int, found: int):
...         self.expected = expected
...         self.found = found
...
...     def evaluate(self):
...         if self.expected == self.found:
...             return Success(report=f" * Passed! {self.expected} and {self.found} are equal")
...         msg = f"{self.expected} and {self.found} aren't equal"
...         return Failure(error_message=msg, report=f" * Failed... {msg}")
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from pydantic import BaseModel

    from scivalidate.core.outcome import Outcome


class BaseValidator(ABC):
    """Abstract base class for all validators.

    Subclasses implement :meth:`evaluate`. A validator returns its report
    fragment inside the outcome and never writes to the report file itself.

    Attributes
    ----------
    validator_type : str
        Registry name, set by validators usable from suite configuration files.
    settings_class : type[BaseModel] or None
        Pydantic model holding the validator's thresholds.
    """

    validator_type: ClassVar[str] = "base"
    settings_class: ClassVar[type["BaseModel"] | None] = None

    @abstractmethod
    def evaluate(self) -> "Outcome":
        """Run the comparison.

        Returns
        -------
        Outcome
            ``Success`` or ``Failure``; both must carry report text.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
