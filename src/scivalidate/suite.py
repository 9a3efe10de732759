"""Validation suites: run many validators and write one report.

A :class:`Suite` holds an ordered list of :class:`Entry` objects, each pairing
a title and an optional description with one validator. :meth:`Suite.run`
evaluates every entry in insertion order, writes all fragments to a Markdown
report and returns a :class:`SuiteResult`. A failing entry never stops the
run; only a failure to write the report does.

Example
-------
>>> from scivalidate import Suite, SeriesValidator
>>>
>>> def zone_temperature():
...     '''Simulated against measured zone temperature.'''
...     return SeriesValidator([1.0, 2.0, 3.0], [5.0, 6.0, 6.0])
>>>
>>> suite = Suite("report.md", title="Thermal model")
>>> suite.push(zone_temperature, title="Zone temperature")
>>> suite.check()  # raises AggregateFailure if any entry failed
"""

from __future__ import annotations

import inspect
import logging
import traceback
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import IO, Callable, Iterator, Union

from pydantic import BaseModel, Field

from scivalidate import __version__
from scivalidate.core.base import BaseValidator
from scivalidate.core.outcome import Failure, FailureKind, Outcome, Success
from scivalidate.exceptions import AggregateFailure, ReportWriteError, ScivalidateError
from scivalidate.formatters import format_entry

logger = logging.getLogger("scivalidate.suite")

ValidatorFactory = Callable[[], BaseValidator]


class SuiteState(str, Enum):
    """Lifecycle of a suite."""

    EMPTY = "empty"
    POPULATED = "populated"
    EXECUTED = "executed"


class Entry:
    """A titled, described wrapper around one validator.

    Parameters
    ----------
    title : str
        Heading of the entry in the report.
    validator : BaseValidator
        The validator this entry owns.
    description : str, optional
        Markdown shown under the heading.
    """

    def __init__(self, title: str, validator: BaseValidator, description: str | None = None):
        if not isinstance(validator, BaseValidator):
            raise TypeError(
                f"Entry '{title}' needs a BaseValidator, got {type(validator).__name__}"
            )
        self.title = title
        self.validator = validator
        self.description = description

    @classmethod
    def from_factory(
        cls,
        factory: ValidatorFactory,
        title: str | None = None,
        description: str | None = None,
    ) -> "Entry":
        """Build an entry by calling a nullary validator factory.

        Parameters
        ----------
        factory : callable
            Function returning a ready-to-use validator.
        title : str, optional
            Entry title. Defaults to the factory's name.
        description : str, optional
            Entry description. Defaults to the factory's docstring.
        """
        validator = factory()
        if title is None:
            title = getattr(factory, "__name__", type(validator).__name__)
        if description is None:
            description = inspect.getdoc(factory)
        return cls(title, validator, description)

    def evaluate(self) -> Outcome:
        """Evaluate the validator; never raises.

        Errors raised by scivalidate itself (e.g. a custom validator calling
        the numeric kernel with mismatched samples) become a ``Failure`` of
        the matching kind. Any other exception, or a return value that is not
        ``Success`` or ``Failure``, becomes a ``Failure`` of kind ``ERROR``
        whose report holds the traceback.
        """
        try:
            outcome = self.validator.evaluate()
        except ScivalidateError as e:
            logger.debug(f"Entry '{self.title}' raised {type(e).__name__}: {e}")
            return Failure.from_error(e)
        except Exception as e:
            logger.debug(f"Entry '{self.title}' crashed", exc_info=True)
            return Failure(
                error_message=f"{type(self.validator).__name__}.evaluate() raised {e!r}",
                report=f"```\n{traceback.format_exc().rstrip()}\n```",
                kind=FailureKind.ERROR,
            )
        if not isinstance(outcome, (Success, Failure)):
            message = (
                f"{type(self.validator).__name__}.evaluate() must return Success or "
                f"Failure, got {type(outcome).__name__}"
            )
            return Failure(error_message=message, report=message, kind=FailureKind.ERROR)
        return outcome

    def __repr__(self) -> str:
        return f"Entry(title={self.title!r}, validator={self.validator!r})"


class EntryResult(BaseModel):
    """Outcome of one entry, without its report text."""

    title: str
    passed: bool
    kind: FailureKind | None = None
    error_message: str | None = None

    @classmethod
    def from_outcome(cls, title: str, outcome: Outcome) -> "EntryResult":
        if isinstance(outcome, Failure):
            return cls(
                title=title,
                passed=False,
                kind=outcome.kind,
                error_message=outcome.error_message,
            )
        return cls(title=title, passed=True)


class SuiteResult(BaseModel):
    """Summary of one suite run.

    Attributes
    ----------
    title : str, optional
        Suite title.
    destination : str
        Report file that was written.
    entries : list[EntryResult]
        One result per entry, in execution order.
    created_at : datetime
        When the run finished.
    scivalidate_version : str
        Version of scivalidate used.
    """

    title: str | None = None
    destination: str
    entries: list[EntryResult] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    scivalidate_version: str = __version__

    @property
    def success(self) -> bool:
        return all(e.passed for e in self.entries)

    @property
    def failures(self) -> list[EntryResult]:
        return [e for e in self.entries if not e.passed]

    @property
    def n_passed(self) -> int:
        return sum(1 for e in self.entries if e.passed)

    @property
    def error_message(self) -> str:
        """Every failure message, one line each, prefixed by its entry title."""
        return "\n".join(f"{f.title}: {f.error_message}" for f in self.failures)

    def raise_for_failures(self) -> None:
        """Raise :class:`AggregateFailure` if any entry failed."""
        failures = self.failures
        if failures:
            raise AggregateFailure(failures)

    def save(self, path: Path | str) -> Path:
        """Save result to JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2))
        return path

    @classmethod
    def load(cls, path: Path | str) -> "SuiteResult":
        """Load result from JSON file."""
        path = Path(path)
        return cls.model_validate_json(path.read_text())


class Suite:
    """An ordered collection of validation entries and their report file.

    Parameters
    ----------
    destination : Path or str
        Markdown report to write. Nothing is touched until :meth:`run`.
    title : str, optional
        Written as the top-level heading of the report.
    report_data_dir : Path or str, optional
        Directory for supporting files (see :meth:`get_support_path`).
        Defaults to the report's directory.
    """

    def __init__(
        self,
        destination: Path | str,
        title: str | None = None,
        report_data_dir: Path | str | None = None,
    ):
        self.destination = Path(destination)
        self.title = title
        self.report_data_dir = (
            Path(report_data_dir) if report_data_dir is not None else self.destination.parent
        )
        self._entries: list[Entry] = []
        self._state = SuiteState.EMPTY

    @property
    def state(self) -> SuiteState:
        return self._state

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def push(
        self,
        item: Union[Entry, BaseValidator, ValidatorFactory],
        title: str | None = None,
        description: str | None = None,
    ) -> Entry:
        """Append an entry; entries run in the order they were pushed.

        Parameters
        ----------
        item : Entry, BaseValidator or callable
            A ready entry, a validator (``title`` required), or a nullary
            factory returning a validator (``title`` defaults to its name and
            ``description`` to its docstring).
        title : str, optional
            Entry title.
        description : str, optional
            Entry description (Markdown).

        Returns
        -------
        Entry
            The appended entry.
        """
        if isinstance(item, Entry):
            if title is not None or description is not None:
                raise TypeError("title/description cannot be given together with an Entry")
            entry = item
        elif isinstance(item, BaseValidator):
            if title is None:
                raise ValueError("A title is required when pushing a validator instance")
            entry = Entry(title, item, description)
        elif callable(item):
            entry = Entry.from_factory(item, title=title, description=description)
        else:
            raise TypeError(
                f"Cannot push {type(item).__name__}: expected an Entry, a validator "
                "or a function returning a validator"
            )

        self._entries.append(entry)
        if self._state is SuiteState.EMPTY:
            self._state = SuiteState.POPULATED
        logger.debug(f"Added entry {len(self._entries)}: {entry.title}")
        return entry

    def get_support_path(self, filename: str) -> Path:
        """Return the path of a supporting file inside ``report_data_dir``."""
        return self.report_data_dir / filename

    def run(self) -> SuiteResult:
        """Run every entry and write the report.

        The destination is truncated, then each entry is evaluated in order
        and its block is written whether it passed or not.

        Returns
        -------
        SuiteResult
            ``success`` is False if any entry failed.

        Raises
        ------
        ReportWriteError
            If the report cannot be opened or written. The run stops at once.
        """
        logger.info(f"Running {len(self._entries)} validation(s), report: {self.destination}")

        results: list[EntryResult] = []
        with self._open_destination() as fh:
            if self.title:
                self._write(fh, f"# {self.title}\n")
            for i, entry in enumerate(self._entries, 1):
                logger.debug(f"[{i}/{len(self._entries)}] {entry.title}")
                outcome = entry.evaluate()
                self._write(fh, "\n\n")
                self._write(fh, format_entry(entry.title, entry.description, outcome.report))

                result = EntryResult.from_outcome(entry.title, outcome)
                if not result.passed:
                    logger.error(f"{entry.title}: {result.error_message}")
                results.append(result)

        self._state = SuiteState.EXECUTED
        suite_result = SuiteResult(
            title=self.title,
            destination=str(self.destination),
            entries=results,
        )
        if suite_result.success:
            logger.info(f"All {len(results)} validation(s) passed")
        else:
            logger.warning(
                f"{len(suite_result.failures)} of {len(results)} validation(s) failed"
            )
        return suite_result

    def check(self) -> SuiteResult:
        """Run the suite and raise :class:`AggregateFailure` on any failure.

        This is the intended call from a test function.
        """
        result = self.run()
        result.raise_for_failures()
        return result

    def _open_destination(self) -> IO[str]:
        try:
            self.destination.parent.mkdir(parents=True, exist_ok=True)
            return open(self.destination, "w", encoding="utf-8")
        except OSError as e:
            raise ReportWriteError(f"Could not open report {self.destination}: {e}") from e

    def _write(self, fh: IO[str], text: str) -> None:
        try:
            fh.write(text)
        except OSError as e:
            raise ReportWriteError(f"Could not write report {self.destination}: {e}") from e

    def __repr__(self) -> str:
        return (
            f"Suite(destination={str(self.destination)!r}, entries={len(self._entries)}, "
            f"state={self._state.value})"
        )
