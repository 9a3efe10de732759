"""Chart rendering for validation reports.

Charts are rendered with matplotlib's SVG backend and returned as text so
they can be embedded directly in the Markdown report. Rendering uses a fixed
hash salt and drops the date metadata, so the same data always produces the
same markup.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np
from numpy.typing import ArrayLike

if TYPE_CHECKING:
    from matplotlib.figure import Figure

    from scivalidate.core.numeric import RegressionFit


COLORS = {
    "expected": "#2c3e50",
    "found": "#e74c3c",
    "fit": "#3498db",
    "reference": "#95a5a6",
}

_SVG_RC = {
    "svg.hashsalt": "scivalidate",
    "svg.fonttype": "none",
}


def figure_to_svg(fig: "Figure") -> str:
    """Serialize a figure to an embeddable ``<svg>`` element and close it.

    The XML declaration and DOCTYPE emitted by matplotlib are stripped.
    """
    buf = io.StringIO()
    try:
        fig.savefig(
            buf,
            format="svg",
            bbox_inches="tight",
            facecolor="white",
            edgecolor="none",
            metadata={"Date": None},
        )
    finally:
        plt.close(fig)
    svg = buf.getvalue()
    start = svg.find("<svg")
    return svg[start:].strip() if start >= 0 else svg.strip()


def _style(ax) -> None:
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)


def render_series_chart(
    expected: ArrayLike,
    found: ArrayLike,
    *,
    title: str = "",
    x_label: str = "x",
    y_label: str = "y",
    expected_legend: str = "Expected",
    found_legend: str = "Found",
    figsize: tuple[float, float] = (8, 4.5),
) -> str:
    """Render two series as lines against their sample index.

    Parameters
    ----------
    expected, found : array_like
        Series of equal length.
    title : str, optional
        Chart title.
    x_label, y_label : str, optional
        Axis labels (units already appended).
    expected_legend, found_legend : str, optional
        Legend entries.
    figsize : tuple, optional
        Figure size in inches.

    Returns
    -------
    str
        SVG markup.
    """
    expected = np.asarray(expected, dtype=np.float64)
    found = np.asarray(found, dtype=np.float64)
    steps = np.arange(expected.size)

    with plt.rc_context(_SVG_RC):
        fig, ax = plt.subplots(figsize=figsize)
        ax.plot(steps, expected, color=COLORS["expected"], linewidth=1.5, label=expected_legend)
        ax.plot(steps, found, color=COLORS["found"], linewidth=1.5, label=found_legend)
        ax.set_xlabel(x_label, fontsize=12)
        ax.set_ylabel(y_label, fontsize=12)
        if title:
            ax.set_title(title, fontsize=14, fontweight="bold")
        ax.legend(loc="best", fontsize=9)
        _style(ax)
        fig.tight_layout()
        return figure_to_svg(fig)


def render_scatter_chart(
    expected: ArrayLike,
    found: ArrayLike,
    fit: "RegressionFit",
    x_range: tuple[float, float],
    *,
    expected_slope: float = 1.0,
    expected_intercept: float = 0.0,
    title: str = "",
    x_label: str = "Expected",
    y_label: str = "Found",
    figsize: tuple[float, float] = (6, 6),
) -> str:
    """Render found against expected with the fitted and the expected line.

    Parameters
    ----------
    expected, found : array_like
        Paired values; ``expected`` on the x axis.
    fit : RegressionFit
        Least-squares fit of found against expected.
    x_range : tuple[float, float]
        (min, max) of ``expected``; both lines span this range.
    expected_slope, expected_intercept : float, optional
        The line a perfect agreement would follow (y = x by default).
    title, x_label, y_label : str, optional
        Chart title and axis labels.
    figsize : tuple, optional
        Figure size in inches.

    Returns
    -------
    str
        SVG markup.
    """
    expected = np.asarray(expected, dtype=np.float64)
    found = np.asarray(found, dtype=np.float64)
    line_x = np.array(x_range, dtype=np.float64)

    with plt.rc_context(_SVG_RC):
        fig, ax = plt.subplots(figsize=figsize)
        ax.scatter(expected, found, s=16, color=COLORS["expected"], alpha=0.8, label="Data")
        ax.plot(
            line_x,
            fit.predict(line_x),
            color=COLORS["fit"],
            linewidth=1.5,
            label=f"Fit: {fit.intercept:.3f} + {fit.slope:.3f}x",
        )
        ax.plot(
            line_x,
            expected_intercept + expected_slope * line_x,
            color=COLORS["reference"],
            linestyle="--",
            linewidth=1.5,
            label="Expected fit",
        )
        ax.set_xlabel(x_label, fontsize=12)
        ax.set_ylabel(y_label, fontsize=12)
        if title:
            ax.set_title(title, fontsize=14, fontweight="bold")
        ax.legend(loc="best", fontsize=9)
        _style(ax)
        fig.tight_layout()
        return figure_to_svg(fig)
