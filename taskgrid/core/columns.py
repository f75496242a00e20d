"""Column definitions and sort directions for generic tables."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar, Union

from .errors import TableConfigError

T = TypeVar("T")

Accessor = Union[str, Callable[[T], Any]]


class SortDirection(Enum):
    """Direction of a column sort."""

    NONE = "none"
    ASC = "asc"
    DESC = "desc"

    def next(self) -> "SortDirection":
        """
        Return the direction that follows this one when a header is clicked.

        The cycle is none -> asc -> desc -> none.
        """
        if self is SortDirection.NONE:
            return SortDirection.ASC
        if self is SortDirection.ASC:
            return SortDirection.DESC
        return SortDirection.NONE


@dataclass(frozen=True)
class ColumnDef(Generic[T]):
    """
    Definition of a single table column over rows of type T.

    Attributes:
        id: Unique column identifier within a table
        accessor: Field name (looked up as a mapping key or attribute) or a
            callable returning the column value for a row
        header: Display label. Defaults to the id in title case.
        cell: Optional renderer producing the displayed value for a row.
            Must be pure: no side effects, same output for the same row.
        sortable: Whether clicking the header toggles sorting
        filterable: Whether the global search looks at this column
    """

    id: str
    accessor: Optional[Accessor] = None
    header: Optional[str] = None
    cell: Optional[Callable[[T], Any]] = None
    sortable: bool = True
    filterable: bool = True

    @property
    def label(self) -> str:
        """Header label shown to the user."""
        if self.header is not None:
            return self.header
        return self.id.replace("_", " ").title()

    @property
    def field(self) -> Optional[str]:
        """Field name read from each row, or None for callable accessors."""
        if self.accessor is None:
            return self.id
        if isinstance(self.accessor, str):
            return self.accessor
        return None

    def get_value(self, row: T) -> Any:
        """
        Read this column's raw value from a row.

        Args:
            row: A row record (mapping or object)

        Returns:
            The value used for filtering and sorting
        """
        field = self.field
        if field is None:
            return self.accessor(row)
        if isinstance(row, Mapping):
            return row[field]
        return getattr(row, field)

    def render(self, row: T) -> Any:
        """Return the display value for this column's cell in a row."""
        if self.cell is not None:
            return self.cell(row)
        return self.get_value(row)


def _has_field(row: Any, field: str) -> bool:
    if isinstance(row, Mapping):
        return field in row
    return hasattr(row, field)


def validate_columns(columns: Sequence[ColumnDef], rows: Sequence[Any]) -> List[ColumnDef]:
    """
    Validate column definitions against a row sequence.

    Args:
        columns: Column definitions for the table
        rows: Rows the columns will be applied to

    Returns:
        The columns as a list

    Raises:
        TableConfigError: If there are no columns, ids repeat, or a
            field-name accessor is missing from any row
    """
    columns = list(columns)
    if not columns:
        raise TableConfigError("A table needs at least one column definition")

    seen = set()
    for column in columns:
        if column.id in seen:
            raise TableConfigError(f"Duplicate column id '{column.id}'")
        seen.add(column.id)

    for position, row in enumerate(rows):
        for column in columns:
            field = column.field
            if field is not None and not _has_field(row, field):
                raise TableConfigError(
                    f"Column '{column.id}' reads field '{field}' which is missing "
                    f"from row {position} ({type(row).__name__})"
                )

    return columns
