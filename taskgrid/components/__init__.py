"""Table components."""

from .table import DataTable
from .task_list import TaskBoard

__all__ = [
    "DataTable",
    "TaskBoard",
]
