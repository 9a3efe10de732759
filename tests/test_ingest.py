"""Tests for CSV ingestion (ingest.py)."""

from __future__ import annotations

import numpy as np
import pytest

from scivalidate.exceptions import ParseError
from scivalidate.ingest import from_csv


def write_csv(tmp_path, text, name="data.csv"):
    path = tmp_path / name
    path.write_text(text)
    return path


class TestFromCsv:
    """Tests for from_csv."""

    def test_columns_by_position(self, tmp_path):
        path = write_csv(tmp_path, "a,b,c\n1,2,3\n4,5,6\n")
        a, c = from_csv(path, [0, 2])
        np.testing.assert_array_equal(a, [1.0, 4.0])
        np.testing.assert_array_equal(c, [3.0, 6.0])
        assert a.dtype == np.float64

    def test_columns_by_name(self, tmp_path):
        path = write_csv(tmp_path, "time,expected,found\n0,20.1,20.4\n1,20.8,21.0\n")
        found, expected = from_csv(path, ["found", "expected"])
        np.testing.assert_allclose(expected, [20.1, 20.8])
        np.testing.assert_allclose(found, [20.4, 21.0])

    def test_mixed_selectors(self, tmp_path):
        path = write_csv(tmp_path, "expected,found\n1,2\n3,4\n")
        expected, found = from_csv(path, [0, "found"])
        np.testing.assert_array_equal(found, [2.0, 4.0])

    def test_whitespace_is_ignored(self, tmp_path):
        path = write_csv(tmp_path, "expected, found\n 1.5 , 2.5\n3.0,  4.0 \n")
        expected, found = from_csv(path, ["expected", "found"])
        np.testing.assert_array_equal(expected, [1.5, 3.0])
        np.testing.assert_array_equal(found, [2.5, 4.0])

    def test_no_header(self, tmp_path):
        path = write_csv(tmp_path, "1;2\n3;4\n5;6\n")
        first, second = from_csv(path, [0, 1], delimiter=";", header=False)
        np.testing.assert_array_equal(first, [1.0, 3.0, 5.0])
        np.testing.assert_array_equal(second, [2.0, 4.0, 6.0])

    def test_scientific_notation(self, tmp_path):
        path = write_csv(tmp_path, "x\n1e3\n-2.5E-1\n")
        (x,) = from_csv(path, [0])
        np.testing.assert_allclose(x, [1000.0, -0.25])

    def test_explicit_nan_is_kept(self, tmp_path):
        path = write_csv(tmp_path, "x\n1\nnan\n")
        (x,) = from_csv(path, [0])
        assert x.size == 2
        assert np.isnan(x[1])

    def test_missing_column_name(self, tmp_path):
        path = write_csv(tmp_path, "a,b\n1,2\n")
        with pytest.raises(ParseError, match="not found"):
            from_csv(path, ["c"])

    def test_column_index_out_of_range(self, tmp_path):
        path = write_csv(tmp_path, "a,b\n1,2\n")
        with pytest.raises(ParseError, match="not found"):
            from_csv(path, [5])

    def test_non_numeric_value(self, tmp_path):
        path = write_csv(tmp_path, "a,b\n1,2\n3,hello\n")
        with pytest.raises(ParseError, match="hello") as excinfo:
            from_csv(path, [0, 1])
        assert "data row 2" in str(excinfo.value)

    def test_short_row(self, tmp_path):
        path = write_csv(tmp_path, "a,b\n1,2\n3\n")
        with pytest.raises(ParseError):
            from_csv(path, [0, 1])

    def test_missing_file(self, tmp_path):
        with pytest.raises(ParseError, match="not found"):
            from_csv(tmp_path / "nope.csv", [0])

    def test_parse_error_is_a_value_error(self, tmp_path):
        path = write_csv(tmp_path, "a\nx\n")
        with pytest.raises(ValueError):
            from_csv(path, [0])
