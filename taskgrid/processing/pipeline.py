"""Filter, sort and pagination pipeline for table rows.

Rows are never handed to polars directly. Instead a frame is built with one
row-position column plus one derived column per filterable and sortable
table column. The pipeline works on that frame and yields row positions,
which the table maps back to the original row objects.
"""

import math
import numbers
import warnings
from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional, Sequence

import numpy as np
import polars as pl

from ..core.columns import ColumnDef, SortDirection

ROW_NR = "__row_nr"

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def search_column(column_id: str) -> str:
    """Name of the lowercase search text column for a table column."""
    return f"search:{column_id}"


def sort_column(column_id: str) -> str:
    """Name of the sort key column for a table column."""
    return f"sort:{column_id}"


def to_search_text(value: Any) -> Optional[str]:
    """
    Stringify a cell value for case-insensitive substring search.

    None never matches, so it maps to None. Booleans read as "true"/"false"
    and integral floats drop their fractional part, matching how the values
    are displayed.

    Args:
        value: Raw column value

    Returns:
        Lowercased text, or None
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat().lower()
    return str(value).lower()



def _is_bool(value: Any) -> bool:
    return isinstance(value, (bool, np.bool_))


def _is_number(value: Any) -> bool:
    return isinstance(value, (numbers.Real, Decimal)) and not _is_bool(value)


def _number_series(name: str, values: List[Any], present: List[Any]) -> pl.Series:
    """
    Numeric sort keys: Int64 when every value is an integer in range,
    Float64 otherwise (Decimal, numpy floats, integers beyond 64 bits).
    """
    if all(
        isinstance(v, numbers.Integral) and INT64_MIN <= int(v) <= INT64_MAX
        for v in present
    ):
        return pl.Series(
            name, [int(v) if v is not None else None for v in values], dtype=pl.Int64
        )
    return pl.Series(
        name, [float(v) if v is not None else None for v in values], dtype=pl.Float64
    )


def _sort_series(name: str, values: List[Any]) -> pl.Series:
    """
    Build a typed sort key series.

    Numbers (including Decimal and numpy scalars) sort numerically, dates
    chronologically, strings case-insensitively. Anything else falls back
    to string comparison, with a warning when the column mixes types.
    """
    present = [v for v in values if v is not None]

    if not present:
        return pl.Series(name, values, dtype=pl.Utf8)
    if all(_is_bool(v) for v in present):
        return pl.Series(
            name, [bool(v) if v is not None else None for v in values], dtype=pl.Boolean
        )
    if all(_is_number(v) for v in present):
        return _number_series(name, values, present)
    if all(isinstance(v, datetime) for v in present):
        return pl.Series(name, values)
    if all(isinstance(v, date) and not isinstance(v, datetime) for v in present):
        return pl.Series(name, values, dtype=pl.Date)
    if all(isinstance(v, str) for v in present):
        return pl.Series(
            name, [v.lower() if v is not None else None for v in values], dtype=pl.Utf8
        )

    kinds = sorted({type(v).__name__ for v in present})
    if len(kinds) > 1:
        warnings.warn(
            f"Sort column '{name}' mixes value types {kinds}; comparing as text"
        )
    return pl.Series(name, [to_search_text(v) for v in values], dtype=pl.Utf8)


def build_frame(rows: Sequence[Any], columns: Sequence[ColumnDef]) -> pl.DataFrame:
    """
    Build the working frame for a row snapshot.

    Args:
        rows: Row records
        columns: Column definitions (already validated)

    Returns:
        DataFrame with the row position column, a search text column for
        each filterable column and a sort key column for each sortable one
    """
    series = [pl.Series(ROW_NR, range(len(rows)), dtype=pl.Int64)]

    for column in columns:
        if not (column.filterable or column.sortable):
            continue
        values = [column.get_value(row) for row in rows]
        if column.filterable:
            series.append(
                pl.Series(
                    search_column(column.id),
                    [to_search_text(v) for v in values],
                    dtype=pl.Utf8,
                )
            )
        if column.sortable:
            series.append(_sort_series(sort_column(column.id), values))

    return pl.DataFrame(series)


def filter_rows(
    data: pl.LazyFrame, columns: Sequence[ColumnDef], text: Optional[str]
) -> pl.LazyFrame:
    """
    Keep rows where any filterable column contains the search text.

    Matching is case-insensitive literal substring containment. An empty
    search keeps every row; a non-empty search over a table with no
    filterable columns keeps none.

    Args:
        data: Working frame from build_frame()
        columns: Column definitions
        text: Global filter text

    Returns:
        Filtered LazyFrame
    """
    needle = (text or "").lower()
    if not needle:
        return data

    matches = [
        pl.col(search_column(column.id)).str.contains(needle, literal=True).fill_null(False)
        for column in columns
        if column.filterable
    ]
    if not matches:
        return data.head(0)

    return data.filter(pl.any_horizontal(matches))


def sort_rows(
    data: pl.LazyFrame, column_id: Optional[str], direction: SortDirection
) -> pl.LazyFrame:
    """
    Stable sort by a single column.

    Rows with equal keys keep their incoming order. Missing values go last
    in both directions.

    Args:
        data: Working frame (typically already filtered)
        column_id: Column to sort by, or None for no sort
        direction: Sort direction

    Returns:
        Sorted LazyFrame (unchanged when there is no active sort)
    """
    if column_id is None or direction is SortDirection.NONE:
        return data

    return data.sort(
        sort_column(column_id),
        descending=direction is SortDirection.DESC,
        nulls_last=True,
        maintain_order=True,
    )


def order_rows(
    frame: pl.DataFrame,
    columns: Sequence[ColumnDef],
    text: Optional[str],
    column_id: Optional[str],
    direction: SortDirection,
) -> pl.DataFrame:
    """
    Run filter then sort over the full row set.

    Args:
        frame: Working frame from build_frame()
        columns: Column definitions
        text: Global filter text
        column_id: Active sort column, or None
        direction: Active sort direction

    Returns:
        Collected DataFrame holding only the row position column, in display order
    """
    data = frame.lazy()
    data = filter_rows(data, columns, text)
    data = sort_rows(data, column_id, direction)
    return data.select(ROW_NR).collect()


def page_count(row_count: int, page_size: int) -> int:
    """Number of pages for a row count, at least 1."""
    return max(1, math.ceil(row_count / page_size))


def paginate(ordered: pl.DataFrame, page_index: int, page_size: int) -> List[int]:
    """
    Slice one page out of the ordered rows.

    Args:
        ordered: Result of order_rows()
        page_index: Zero-based page index
        page_size: Rows per page

    Returns:
        Row positions on the requested page (empty past the last page)
    """
    return ordered.slice(page_index * page_size, page_size).get_column(ROW_NR).to_list()
