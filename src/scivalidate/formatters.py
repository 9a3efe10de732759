"""Output formatters for validation reports and suite results.

:func:`format_entry` lays out one entry block of the Markdown report. The
remaining functions format a :class:`~scivalidate.suite.SuiteResult` for
different outputs: console tables, Markdown and JSON.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scivalidate.suite import SuiteResult


def format_entry(title: str, description: str | None, report: str) -> str:
    """Format one entry of the report.

    Parameters
    ----------
    title : str
        Entry title, written as a ``##`` heading.
    description : str, optional
        Markdown written under the heading.
    report : str
        Fragment returned by the validator.

    Returns
    -------
    str
        Markdown block.
    """
    lines = [f"## {title}", ""]
    if description:
        lines.append(description.strip())
        lines.append("")
    lines.append("#### Indicators")
    lines.append("")
    lines.append(report)
    lines.append("")
    return "\n".join(lines)


def format_console_table(result: "SuiteResult") -> str:
    """Format a suite result as a console-friendly ASCII table."""
    lines = []

    lines.append("")
    lines.append(f"Validation: {result.title or result.destination}")
    lines.append("=" * 70)
    lines.append(f"Report: {result.destination}")
    lines.append("")

    header = f"{'#':<4} {'Entry':<40} {'Result':<8} {'Kind':<18}"
    lines.append(header)
    lines.append("-" * 70)
    for i, entry in enumerate(result.entries, 1):
        status = "PASS" if entry.passed else "FAIL"
        kind = entry.kind.value if entry.kind is not None else ""
        lines.append(f"{i:<4} {entry.title[:40]:<40} {status:<8} {kind:<18}")
    lines.append("-" * 70)
    lines.append(f"{result.n_passed}/{len(result.entries)} passed")
    lines.append("")

    if result.failures:
        lines.append("Failures")
        lines.append("-" * 70)
        lines.extend(result.error_message.splitlines())
        lines.append("")

    lines.append(f"Completed: {result.created_at.strftime('%Y-%m-%d %H:%M:%S')}")
    lines.append(f"scivalidate version: {result.scivalidate_version}")
    lines.append("")

    return "\n".join(lines)


def format_markdown(result: "SuiteResult") -> str:
    """Format a suite result as a Markdown summary table."""
    lines = []

    lines.append(f"# Validation Summary: {result.title or result.destination}")
    lines.append("")
    lines.append(f"- **Report:** `{result.destination}`")
    lines.append(f"- **Completed:** {result.created_at.strftime('%Y-%m-%d %H:%M:%S')}")
    lines.append(f"- **scivalidate Version:** {result.scivalidate_version}")
    lines.append(f"- **Passed:** {result.n_passed}/{len(result.entries)}")
    lines.append("")
    lines.append("| # | Entry | Result | Message |")
    lines.append("|---|-------|--------|---------|")
    for i, entry in enumerate(result.entries, 1):
        status = "Passed" if entry.passed else "**Failed**"
        message = (entry.error_message or "").replace("|", "\\|")
        lines.append(f"| {i} | {entry.title} | {status} | {message} |")
    lines.append("")

    return "\n".join(lines)


def format_json(result: "SuiteResult") -> str:
    """Format a suite result as JSON."""
    return result.model_dump_json(indent=2)


def format_result(result: "SuiteResult", output_format: str = "table") -> str:
    """Format a suite result in the requested format.

    Parameters
    ----------
    result : SuiteResult
        Result to format.
    output_format : str
        One of "table", "markdown", "json".

    Raises
    ------
    ValueError
        If the format is unknown.
    """
    if output_format == "table":
        return format_console_table(result)
    elif output_format == "markdown":
        return format_markdown(result)
    elif output_format == "json":
        return format_json(result)
    else:
        raise ValueError(f"Unknown format: {output_format}")
