"""Core infrastructure for taskgrid."""

from .columns import ColumnDef, SortDirection, validate_columns
from .config import get_default_page_size
from .errors import TableConfigError
from .state import PageIndexStore

__all__ = [
    "ColumnDef",
    "SortDirection",
    "validate_columns",
    "PageIndexStore",
    "TableConfigError",
    "get_default_page_size",
]
