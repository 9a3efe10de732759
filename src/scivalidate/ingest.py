"""Read reference and computed data from CSV files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from scivalidate.exceptions import ParseError

logger = logging.getLogger(__name__)

ColumnSelector = int | str


def from_csv(
    path: Path | str,
    columns: Sequence[ColumnSelector],
    *,
    delimiter: str = ",",
    header: bool = True,
) -> list[NDArray[np.float64]]:
    """Read a number of columns from a CSV file.

    Parameters
    ----------
    path : Path or str
        CSV file to read.
    columns : sequence of int or str
        Column selectors: zero-based positions, or header names when
        ``header`` is True.
    delimiter : str, optional
        Field separator. Default ``","``.
    header : bool, optional
        Whether the first row holds column names. Default True.

    Returns
    -------
    list[NDArray[np.float64]]
        One array per selector, in the order given.

    Raises
    ------
    ParseError
        If the file is missing or malformed, a column does not exist, or a
        cell is not numeric.

    Examples
    --------
    >>> expected, found = from_csv("data/zone.csv", [0, "measured"])
    """
    import pandas as pd

    path = Path(path)
    if not path.is_file():
        raise ParseError(f"CSV file not found: {path}")

    try:
        df = pd.read_csv(
            path,
            sep=delimiter,
            header=0 if header else None,
            skipinitialspace=True,
            dtype=str,
            keep_default_na=False,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise ParseError(f"Could not parse {path}: {e}") from e

    if header:
        df.columns = [str(c).strip() for c in df.columns]

    result = []
    for col in columns:
        if isinstance(col, str) and header and col in df.columns:
            series = df[col]
        elif isinstance(col, int) and 0 <= col < df.shape[1]:
            series = df.iloc[:, col]
        else:
            raise ParseError(
                f"Column {col!r} not found in {path} "
                f"(available: {list(df.columns) if header else df.shape[1]})"
            )

        values = series.fillna("").astype(str).str.strip()
        numeric = pd.to_numeric(values, errors="coerce")
        bad = numeric.isna() & (values.str.lower() != "nan")
        if bad.any():
            row = int(bad.to_numpy().nonzero()[0][0])
            raise ParseError(
                f"Non-numeric value {values.iloc[row]!r} in column {col!r} of {path} "
                f"(data row {row + 1})"
            )
        result.append(numeric.to_numpy(dtype=np.float64))

    logger.debug(f"Read {len(columns)} column(s), {df.shape[0]} row(s) from {path}")
    return result
