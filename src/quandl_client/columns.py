"""Row/column reshaping and typed column extraction."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Sequence

from .errors import TypeMismatchError


DATE_FORMAT = "%Y-%m-%d"
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def _row_width(rows: Sequence[Sequence[Any]]) -> int:
    width = len(rows[0])
    for i, row in enumerate(rows):
        if len(row) != width:
            raise ValueError(f"Row {i} has {len(row)} cells, expected {width}")
    return width


def to_columns(rows: Sequence[Sequence[Any]]) -> list[list[Any]]:
    """Convert a list of rows to a list of columns (out[j][i] == rows[i][j])."""
    if not rows:
        return []
    width = _row_width(rows)
    return [[row[j] for row in rows] for j in range(width)]


def to_named_columns(
    rows: Sequence[Sequence[Any]],
    keys: Sequence[str],
) -> dict[str, list[Any]]:
    """Convert a list of rows to a mapping of column name to column."""
    if not rows:
        return {key: [] for key in keys}
    width = _row_width(rows)
    if len(keys) != width:
        raise ValueError(f"Got {len(keys)} keys for rows of {width} cells")
    return dict(zip(keys, to_columns(rows)))


def float_column(column: Sequence[Any]) -> list[float]:
    """Convert a column of numeric cells to floats."""
    result = []
    for i, cell in enumerate(column):
        if isinstance(cell, bool) or not isinstance(cell, (int, float)):
            raise TypeMismatchError(i, "number", cell)
        result.append(float(cell))
    return result


def time_column(column: Sequence[Any]) -> list[date]:
    """Convert a column of YYYY-MM-DD strings to dates."""
    result = []
    for i, cell in enumerate(column):
        if not isinstance(cell, str):
            raise TypeMismatchError(i, "date string", cell)
        if not _DATE_RE.fullmatch(cell):
            raise TypeMismatchError(i, "date (YYYY-MM-DD)", cell)
        try:
            result.append(datetime.strptime(cell, DATE_FORMAT).date())
        except ValueError as e:
            raise TypeMismatchError(i, "date (YYYY-MM-DD)", cell) from e
    return result


def string_column(column: Sequence[Any]) -> list[str]:
    """Check that every cell of a column is a string."""
    result = []
    for i, cell in enumerate(column):
        if not isinstance(cell, str):
            raise TypeMismatchError(i, "string", cell)
        result.append(cell)
    return result
