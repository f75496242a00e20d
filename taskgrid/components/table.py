"""Generic data table with global search, single-column sort and pagination."""

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar

import polars as pl

from ..core.columns import ColumnDef, SortDirection, validate_columns
from ..core.config import get_default_page_size
from ..core.errors import TableConfigError
from ..core.state import PageIndexStore
from ..processing.pipeline import build_frame, order_rows, page_count, paginate

T = TypeVar("T")


@dataclass(frozen=True)
class HeaderInfo:
    """Header metadata for one column."""

    id: str
    label: str
    direction: SortDirection
    sortable: bool


@dataclass(frozen=True)
class PaginationSummary:
    """Pagination figures for the current view."""

    current_page: int
    page_count: int
    page_size: int
    can_previous_page: bool
    can_next_page: bool
    filtered_count: int
    total_count: int

    @property
    def first_row(self) -> int:
        """One-based number of the first row on the page (0 when empty)."""
        if self.filtered_count == 0:
            return 0
        return self.current_page * self.page_size + 1

    @property
    def last_row(self) -> int:
        """One-based number of the last row on the page (0 when empty)."""
        return min((self.current_page + 1) * self.page_size, self.filtered_count)


@dataclass(frozen=True)
class TableView(Generic[T]):
    """
    Materialized result of filter -> sort -> paginate.

    Attributes:
        rows: Rows on the current page, in display order
        headers: One entry per column
        cells: Rendered cell values, one list per row in `rows`
        summary: Pagination figures
    """

    rows: List[T]
    headers: List[HeaderInfo]
    cells: List[List[Any]]
    summary: PaginationSummary


class DataTable(Generic[T]):
    """
    Table engine over an immutable snapshot of rows.

    Features:
    - Global search: case-insensitive substring match over filterable columns
    - Single-column stable sort cycling none -> asc -> desc -> none
    - Pagination whose page index lives in a PageIndexStore, keyed by the
      table's list identity, so it survives re-creation of the table

    Changing the search text or the sort never resets the stored page
    index. When the stored page lies past the last page of the current
    result, the last page is shown instead, while the stored value is kept
    so widening the search returns the user to where they were.

    Example:
        store = PageIndexStore()
        table = DataTable(
            rows=projects,
            columns=[
                ColumnDef("name"),
                ColumnDef("task_count", header="Tasks", filterable=False),
            ],
            list_id="projects",
            page_store=store,
        )
        table.set_global_filter("web")
        table.toggle_sort("name")
        view = table.get_view()
    """

    def __init__(
        self,
        rows: Sequence[T],
        columns: Sequence[ColumnDef[T]],
        list_id: str,
        page_store: PageIndexStore,
        page_size: Optional[int] = None,
    ):
        """
        Initialize the table.

        Args:
            rows: Row records. Copied into an immutable snapshot.
            columns: Column definitions. Field-name accessors are checked
                against every row.
            list_id: Logical list identity used as the page store key.
                Example: "projects" or "tasks-7"
            page_store: Store that owns the page index
            page_size: Rows per page. Defaults to TASKGRID_PAGE_SIZE or 10.

        Raises:
            TableConfigError: If page_size is not positive or the column
                definitions are invalid
        """
        if page_size is None:
            page_size = get_default_page_size()
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
            raise TableConfigError(f"page_size must be a positive integer, got {page_size!r}")

        self._columns: List[ColumnDef[T]] = validate_columns(columns, rows)
        self._columns_by_id: Dict[str, ColumnDef[T]] = {c.id: c for c in self._columns}
        self._list_id = list_id
        self._page_store = page_store
        self._page_size = page_size

        self._global_filter = ""
        self._sort_column: Optional[str] = None
        self._sort_direction = SortDirection.NONE

        self._load_rows(rows)

    def _load_rows(self, rows: Sequence[T]) -> None:
        self._rows: Tuple[T, ...] = tuple(rows)
        self._frame = build_frame(self._rows, self._columns)
        self._ordered: Optional[pl.DataFrame] = None

    def _get_ordered(self) -> pl.DataFrame:
        """Filtered and sorted row positions, recomputed after state changes."""
        if self._ordered is None:
            self._ordered = order_rows(
                self._frame,
                self._columns,
                self._global_filter,
                self._sort_column,
                self._sort_direction,
            )
        return self._ordered

    def _get_column(self, column_id: str) -> ColumnDef[T]:
        if column_id not in self._columns_by_id:
            available = list(self._columns_by_id.keys())
            raise KeyError(
                f"No column with id '{column_id}'. Available columns: {available}"
            )
        return self._columns_by_id[column_id]

    # -- data --------------------------------------------------------------

    def set_rows(self, rows: Sequence[T]) -> None:
        """
        Replace the row snapshot, e.g. after data was refetched.

        Search text, sort and page position are kept.

        Raises:
            TableConfigError: If the new rows lack a field a column reads
        """
        validate_columns(self._columns, rows)
        self._load_rows(rows)

    @property
    def list_id(self) -> str:
        return self._list_id

    @property
    def columns(self) -> List[ColumnDef[T]]:
        return list(self._columns)

    @property
    def total_count(self) -> int:
        """Number of rows before filtering."""
        return len(self._rows)

    @property
    def filtered_count(self) -> int:
        """Number of rows matching the global filter."""
        return self._get_ordered().height

    # -- filtering ---------------------------------------------------------

    @property
    def global_filter(self) -> str:
        return self._global_filter

    def set_global_filter(self, text: Optional[str]) -> None:
        """
        Set the global search text. Empty or None clears the search.

        The stored page index is left untouched.
        """
        text = text or ""
        if text != self._global_filter:
            self._global_filter = text
            self._ordered = None

    # -- sorting -----------------------------------------------------------

    @property
    def sorting(self) -> List[Tuple[str, SortDirection]]:
        """Active sort as a list of (column_id, direction); at most one entry."""
        if self._sort_column is None:
            return []
        return [(self._sort_column, self._sort_direction)]

    def get_sort_direction(self, column_id: str) -> SortDirection:
        """Current direction of a column (NONE unless it is the sort column)."""
        if column_id == self._sort_column:
            return self._sort_direction
        return SortDirection.NONE

    def set_sorting(self, column_id: Optional[str], direction: SortDirection) -> None:
        """
        Set the sort explicitly, replacing any previous sort.

        Args:
            column_id: Column to sort by, or None to clear sorting
            direction: Sort direction. NONE clears sorting.

        Raises:
            KeyError: If column_id is unknown
            TableConfigError: If the column is not sortable
        """
        if column_id is None or direction is SortDirection.NONE:
            self._sort_column = None
            self._sort_direction = SortDirection.NONE
            self._ordered = None
            return

        if not self._get_column(column_id).sortable:
            raise TableConfigError(f"Column '{column_id}' is not sortable")

        self._sort_column = column_id
        self._sort_direction = direction
        self._ordered = None

    def toggle_sort(self, column_id: str) -> SortDirection:
        """
        Advance a column through none -> asc -> desc -> none.

        Sorting a different column replaces the previous sort. The stored
        page index is left untouched.

        Args:
            column_id: Column whose header was clicked

        Returns:
            The column's new direction
        """
        direction = self.get_sort_direction(column_id).next()
        self.set_sorting(column_id, direction)
        return direction

    # -- pagination --------------------------------------------------------

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def page_count(self) -> int:
        return page_count(self.filtered_count, self._page_size)

    @property
    def stored_page_index(self) -> int:
        """Page index as held by the page store (may exceed the last page)."""
        return self._page_store.get_page_index(self._list_id)

    @property
    def page_index(self) -> int:
        """Page index actually displayed, clamped to the last page."""
        return min(self.stored_page_index, self.page_count - 1)

    @property
    def can_previous_page(self) -> bool:
        return self.page_index > 0

    @property
    def can_next_page(self) -> bool:
        return self.page_index < self.page_count - 1

    def set_page_index(self, index: int) -> int:
        """
        Go to a page.

        Args:
            index: Zero-based page index. Values past the last page are
                clamped to the last page.

        Returns:
            The page index now stored

        Raises:
            ValueError: If index is negative
        """
        if index < 0:
            raise ValueError(f"Page index must be >= 0, got {index}")

        index = min(index, self.page_count - 1)
        self._page_store.set_page_index(self._list_id, index)
        return index

    def next_page(self) -> None:
        """Go to the next page; no-op on the last page."""
        if self.can_next_page:
            self._page_store.set_page_index(self._list_id, self.page_index + 1)

    def previous_page(self) -> None:
        """Go to the previous page; no-op on the first page."""
        if self.can_previous_page:
            self._page_store.set_page_index(self._list_id, self.page_index - 1)

    def first_page(self) -> None:
        """Go to the first page; no-op when already there."""
        if self.can_previous_page:
            self._page_store.set_page_index(self._list_id, 0)

    def last_page(self) -> None:
        """Go to the last page; no-op when already there."""
        if self.can_next_page:
            self._page_store.set_page_index(self._list_id, self.page_count - 1)

    # -- view --------------------------------------------------------------

    def get_headers(self) -> List[HeaderInfo]:
        return [
            HeaderInfo(
                id=column.id,
                label=column.label,
                direction=self.get_sort_direction(column.id),
                sortable=column.sortable,
            )
            for column in self._columns
        ]

    def get_summary(self) -> PaginationSummary:
        filtered = self.filtered_count
        count = page_count(filtered, self._page_size)
        current = min(self.stored_page_index, count - 1)
        return PaginationSummary(
            current_page=current,
            page_count=count,
            page_size=self._page_size,
            can_previous_page=current > 0,
            can_next_page=current < count - 1,
            filtered_count=filtered,
            total_count=self.total_count,
        )

    def get_view(self) -> TableView[T]:
        """
        Compute the rows and metadata to display.

        Filtering and sorting always run over the full row set; only then is
        the current page cut out.

        Returns:
            TableView for the current state
        """
        summary = self.get_summary()
        positions = paginate(self._get_ordered(), summary.current_page, self._page_size)
        rows = [self._rows[position] for position in positions]
        cells = [[column.render(row) for column in self._columns] for row in rows]
        return TableView(
            rows=rows,
            headers=self.get_headers(),
            cells=cells,
            summary=summary,
        )

    def summary_text(self) -> str:
        """
        Result count line shown under the table.

        Examples:
            "Showing 1 to 10 of 25 results" (several pages)
            "Showing 7 of 7 results" (single page)
        """
        summary = self.get_summary()
        if summary.page_count > 1:
            return (
                f"Showing {summary.first_row} to {summary.last_row} "
                f"of {summary.filtered_count} results"
            )
        return f"Showing {summary.filtered_count} of {summary.filtered_count} results"

    def __call__(self, key: Optional[str] = None) -> TableView[T]:
        """
        Render the table in Streamlit.

        Args:
            key: Optional unique key for the table's widgets. Search text and
                sort are remembered per key; the page index per list identity.

        Returns:
            The view that was rendered
        """
        from ..rendering.bridge import render_table

        return render_table(self, key=key)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"list_id='{self._list_id}', "
            f"rows={self.total_count}, "
            f"page_size={self._page_size}, "
            f"sorting={self.sorting}, "
            f"global_filter='{self._global_filter}')"
        )
