"""Shared helpers for the built-in validators."""

from __future__ import annotations

from pydantic import BaseModel

FAILED_MARKER = " | **Failed!**"


class ChartLabels(BaseModel):
    """Axis and legend metadata for a validator's chart.

    All fields are optional; they only affect the rendered chart and the
    fragment header.

    Attributes
    ----------
    title : str, optional
        Chart title, also used as a ``###`` header in the fragment.
    x_label, x_units : str, optional
        Label and units of the x axis.
    y_label, y_units : str, optional
        Label and units of the y axis.
    expected_legend : str
        Name of the expected series.
    found_legend : str
        Name of the found series.
    """

    title: str | None = None
    x_label: str | None = None
    x_units: str | None = None
    y_label: str | None = None
    y_units: str | None = None
    expected_legend: str = "Expected"
    found_legend: str = "Found"

    def x_axis(self, default: str = "x") -> str:
        return axis_label(self.x_label or default, self.x_units)

    def y_axis(self, default: str = "y") -> str:
        return axis_label(self.y_label or default, self.y_units)


def axis_label(label: str, units: str | None) -> str:
    """Return ``"label (units)"``, or just the label when units are missing."""
    if units:
        return f"{label} ({units})"
    return label


def metric_line(name: str, value: float, failed: bool, precision: int = 2) -> str:
    """Format one bullet of the indicators list."""
    line = f" * {name}: {value:.{precision}f}"
    if failed:
        line += FAILED_MARKER
    return line


def compose_report(labels: ChartLabels, lines: list[str], chart: str) -> str:
    """Assemble a fragment: optional header, indicator lines, chart."""
    parts = []
    if labels.title:
        parts.append(f"### {labels.title}\n")
    parts.append("\n".join(lines))
    parts.append("")
    parts.append(chart)
    return "\n".join(parts)
