"""Project and task lists built on DataTable."""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from ..core.columns import ColumnDef
from ..core.state import PageIndexStore
from .table import DataTable

EMPTY_TASKS_TITLE = "No tasks yet"
EMPTY_TASKS_MESSAGE = "Get started by creating a new task for this project."


@dataclass(frozen=True)
class Project:
    id: int
    name: str
    description: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    task_count: int = 0
    completed_task_count: int = 0


@dataclass(frozen=True)
class Task:
    id: int
    project_id: int
    title: str
    description: str = ""
    is_completed: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class TaskSummary:
    """Task counts shown in the task view header."""

    total: int
    completed: int

    @property
    def pending(self) -> int:
        return self.total - self.completed


def project_list_id() -> str:
    """List identity of the project table."""
    return "projects"


def task_list_id(project_id: int) -> str:
    """List identity of a project's task table, e.g. "tasks-7"."""
    return f"tasks-{project_id}"


def format_date(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d")


def format_status(is_completed: bool) -> str:
    return "Completed" if is_completed else "Pending"


def project_columns() -> List[ColumnDef[Project]]:
    """Default columns of the project table."""
    return [
        ColumnDef("name", header="Name"),
        ColumnDef("description", header="Description"),
        ColumnDef("task_count", header="Tasks", filterable=False),
        ColumnDef(
            "progress",
            accessor=lambda p: p.completed_task_count,
            header="Completed",
            cell=lambda p: f"{p.completed_task_count}/{p.task_count}",
            filterable=False,
        ),
        ColumnDef(
            "created_at",
            header="Created",
            cell=lambda p: format_date(p.created_at),
            filterable=False,
        ),
    ]


def task_columns() -> List[ColumnDef[Task]]:
    """Default columns of the task table."""
    return [
        ColumnDef("title", header="Title"),
        ColumnDef("description", header="Description"),
        ColumnDef(
            "status",
            accessor=lambda t: format_status(t.is_completed),
            header="Status",
        ),
        ColumnDef(
            "created_at",
            header="Created",
            cell=lambda t: format_date(t.created_at),
            filterable=False,
        ),
    ]


def summarize_tasks(tasks: Sequence[Task]) -> TaskSummary:
    """Count total and completed tasks."""
    completed = sum(1 for task in tasks if task.is_completed)
    return TaskSummary(total=len(tasks), completed=completed)


def newest_first(tasks: Sequence[Task]) -> List[Task]:
    """
    Order tasks by creation time, newest first.

    Tasks without a creation time go last. Ties keep their incoming order.
    """
    dated = [task for task in tasks if task.created_at is not None]
    undated = [task for task in tasks if task.created_at is None]
    return sorted(dated, key=lambda task: task.created_at, reverse=True) + undated


def make_project_table(
    projects: Sequence[Project],
    page_store: PageIndexStore,
    page_size: Optional[int] = None,
) -> DataTable[Project]:
    """Create the project table, paged under the "projects" identity."""
    return DataTable(
        rows=projects,
        columns=project_columns(),
        list_id=project_list_id(),
        page_store=page_store,
        page_size=page_size,
    )


class TaskBoard:
    """
    Task view for a single project.

    Wraps a DataTable of the project's tasks (newest first) together with
    the header counts and the empty state. The page position is stored
    under the project's own list identity, so every project pages
    independently and reopening a project returns to the same page.

    Example:
        board = TaskBoard(project, tasks, page_store=store)
        board.summary.pending
        board.refresh(refetched_tasks)  # after a task was added or edited
    """

    def __init__(
        self,
        project: Project,
        tasks: Sequence[Task],
        page_store: PageIndexStore,
        page_size: Optional[int] = None,
    ):
        self._project = project
        self._tasks = list(tasks)
        self._table: DataTable[Task] = DataTable(
            rows=newest_first(self._tasks),
            columns=task_columns(),
            list_id=task_list_id(project.id),
            page_store=page_store,
            page_size=page_size,
        )

    @property
    def project(self) -> Project:
        return self._project

    @property
    def table(self) -> DataTable[Task]:
        return self._table

    @property
    def summary(self) -> TaskSummary:
        return summarize_tasks(self._tasks)

    @property
    def is_empty(self) -> bool:
        return not self._tasks

    def refresh(self, tasks: Sequence[Task]) -> None:
        """
        Swap in freshly fetched tasks after a create, update or delete.

        Search text, sort and page position are kept.
        """
        self._tasks = list(tasks)
        self._table.set_rows(newest_first(self._tasks))

    def __call__(self, key: Optional[str] = None) -> Optional[object]:
        """Render the task view in Streamlit."""
        from ..rendering.bridge import render_task_board

        return render_task_board(self, key=key)
