"""
taskgrid - Sortable, searchable, paginated tables for project and task lists.

This package provides a generic table engine (global search, single-column
stable sort, pagination) whose page position is kept in an explicit store
keyed by list identity, plus Streamlit rendering for project and task views.
"""

from .components.table import DataTable, HeaderInfo, PaginationSummary, TableView
from .components.task_list import (
    Project,
    Task,
    TaskBoard,
    TaskSummary,
    make_project_table,
    project_columns,
    summarize_tasks,
    task_columns,
)
from .core.columns import ColumnDef, SortDirection
from .core.errors import TableConfigError
from .core.state import PageIndexStore

__version__ = "0.1.0"

__all__ = [
    # Core
    "ColumnDef",
    "SortDirection",
    "PageIndexStore",
    "TableConfigError",
    # Components
    "DataTable",
    "TableView",
    "HeaderInfo",
    "PaginationSummary",
    "TaskBoard",
    "TaskSummary",
    "Project",
    "Task",
    # Utilities
    "make_project_table",
    "project_columns",
    "task_columns",
    "summarize_tasks",
]
