"""Tests for project and task lists."""

from datetime import datetime, timedelta

from taskgrid import (
    Project,
    SortDirection,
    Task,
    TaskBoard,
    make_project_table,
    summarize_tasks,
)
from taskgrid.components.task_list import (
    format_date,
    newest_first,
    project_list_id,
    task_list_id,
)


def make_tasks(count, project_id=7):
    start = datetime(2024, 1, 1)
    return [
        Task(
            id=i,
            project_id=project_id,
            title=f"Task {i}",
            is_completed=i % 4 == 0,
            created_at=start + timedelta(hours=i),
        )
        for i in range(count)
    ]


class TestTaskHelpers:
    """Tests for task ordering and counts."""

    def test_newest_first(self, sample_tasks):
        assert [task.id for task in newest_first(sample_tasks)] == [3, 2, 1]

    def test_newest_first_keeps_undated_last(self, sample_tasks):
        undated = Task(id=9, project_id=7, title="Someday")

        ordered = newest_first([undated] + sample_tasks)

        assert [task.id for task in ordered] == [3, 2, 1, 9]

    def test_summarize_tasks(self, sample_tasks):
        summary = summarize_tasks(sample_tasks)

        assert summary.total == 3
        assert summary.completed == 1
        assert summary.pending == 2

    def test_list_ids(self):
        assert project_list_id() == "projects"
        assert task_list_id(7) == "tasks-7"

    def test_format_date(self):
        assert format_date(datetime(2024, 3, 5, 14, 30)) == "2024-03-05"
        assert format_date(None) == ""


class TestTaskBoard:
    """Tests for the per-project task view."""

    def test_rows_are_newest_first(self, page_store, sample_project, sample_tasks):
        board = TaskBoard(sample_project, sample_tasks, page_store=page_store)

        view = board.table.get_view()

        assert [task.id for task in view.rows] == [3, 2, 1]
        assert view.cells[0] == ["Review docs", "Check install guide", "Pending", "2024-03-03"]

    def test_header_labels(self, page_store, sample_project, sample_tasks):
        board = TaskBoard(sample_project, sample_tasks, page_store=page_store)

        labels = [header.label for header in board.table.get_headers()]

        assert labels == ["Title", "Description", "Status", "Created"]

    def test_search_by_status(self, page_store, sample_project, sample_tasks):
        board = TaskBoard(sample_project, sample_tasks, page_store=page_store)

        board.table.set_global_filter("completed")

        assert [task.id for task in board.table.get_view().rows] == [1]

    def test_table_uses_project_list_id(self, page_store, sample_project, sample_tasks):
        board = TaskBoard(sample_project, sample_tasks, page_store=page_store)

        assert board.table.list_id == "tasks-7"

    def test_summary_and_empty_state(self, page_store, sample_project, sample_tasks):
        assert TaskBoard(sample_project, [], page_store=page_store).is_empty is True

        board = TaskBoard(sample_project, sample_tasks, page_store=page_store)
        assert board.is_empty is False
        assert board.summary.completed == 1

    def test_refresh_keeps_page_search_and_sort(self, page_store, sample_project):
        board = TaskBoard(sample_project, make_tasks(25), page_store=page_store)
        board.table.set_page_index(1)
        board.table.set_global_filter("task")
        board.table.toggle_sort("title")

        board.refresh(make_tasks(26))

        assert board.table.page_index == 1
        assert board.table.global_filter == "task"
        assert board.table.sorting == [("title", SortDirection.ASC)]
        assert board.summary.total == 26
        assert board.table.total_count == 26

    def test_reopening_board_keeps_page(self, page_store, sample_project):
        tasks = make_tasks(25)
        TaskBoard(sample_project, tasks, page_store=page_store).table.set_page_index(2)

        reopened = TaskBoard(sample_project, tasks, page_store=page_store)

        assert reopened.table.page_index == 2

    def test_projects_page_independently(self, page_store, sample_project):
        other = Project(id=8, name="Mobile App")
        TaskBoard(sample_project, make_tasks(25), page_store=page_store).table.set_page_index(2)

        board = TaskBoard(other, make_tasks(25, project_id=8), page_store=page_store)

        assert board.table.page_index == 0


class TestProjectTable:
    """Tests for the default project table."""

    def test_project_columns(self, page_store, sample_project):
        table = make_project_table([sample_project], page_store=page_store)
        view = table.get_view()

        assert table.list_id == "projects"
        assert [h.label for h in view.headers] == [
            "Name",
            "Description",
            "Tasks",
            "Completed",
            "Created",
        ]
        assert view.cells[0] == [
            "Website Redesign",
            "New landing page and docs",
            3,
            "1/3",
            "2024-01-01",
        ]

    def test_search_ignores_counts(self, page_store, sample_project):
        table = make_project_table([sample_project], page_store=page_store)

        table.set_global_filter("3")

        assert table.filtered_count == 0

    def test_sort_by_task_count(self, page_store):
        projects = [
            Project(id=1, name="A", task_count=5),
            Project(id=2, name="B", task_count=1),
            Project(id=3, name="C", task_count=3),
        ]
        table = make_project_table(projects, page_store=page_store)

        table.toggle_sort("task_count")
        table.toggle_sort("task_count")

        assert [p.name for p in table.get_view().rows] == ["A", "C", "B"]
