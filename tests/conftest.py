"""Pytest configuration and shared fixtures for taskgrid tests."""

from datetime import datetime, timedelta
from typing import Any, Dict, List
from unittest.mock import patch

import pytest

from taskgrid import ColumnDef, PageIndexStore, Project, Task


class MockSessionState(dict):
    """Mock Streamlit session_state that behaves like a dict."""
    pass


@pytest.fixture
def mock_streamlit():
    """
    Mock Streamlit's session_state for testing stores and callbacks.

    This fixture patches st.session_state to allow testing without running
    a full Streamlit server.
    """
    mock_session_state = MockSessionState()

    with patch('streamlit.session_state', mock_session_state):
        yield mock_session_state


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep configuration variables from the host out of the tests."""
    monkeypatch.delenv("TASKGRID_PAGE_SIZE", raising=False)
    monkeypatch.delenv("TASKGRID_SESSION_KEY", raising=False)


@pytest.fixture
def page_store() -> PageIndexStore:
    """Page store backed by a plain dict (no Streamlit needed)."""
    return PageIndexStore("test_pages", backend={})


@pytest.fixture
def numbered_rows() -> List[Dict[str, Any]]:
    """25 rows: ids 0-4 in group 'alpha', ids 5-24 in group 'beta'."""
    return [
        {
            "id": i,
            "name": f"item_{i:02d}",
            "group": "alpha" if i < 5 else "beta",
        }
        for i in range(25)
    ]


@pytest.fixture
def numbered_columns() -> List[ColumnDef]:
    return [
        ColumnDef("id", header="ID"),
        ColumnDef("name"),
        ColumnDef("group"),
    ]


@pytest.fixture
def sample_project() -> Project:
    return Project(
        id=7,
        name="Website Redesign",
        description="New landing page and docs",
        created_at=datetime(2024, 1, 1),
        task_count=3,
        completed_task_count=1,
    )


@pytest.fixture
def sample_tasks() -> List[Task]:
    """Three tasks of project 7, created on consecutive days (oldest first)."""
    start = datetime(2024, 3, 1, 9, 0)
    return [
        Task(
            id=1,
            project_id=7,
            title="Draft wireframes",
            description="Landing page layout",
            is_completed=True,
            created_at=start,
        ),
        Task(
            id=2,
            project_id=7,
            title="Write copy",
            description="Hero and feature sections",
            created_at=start + timedelta(days=1),
        ),
        Task(
            id=3,
            project_id=7,
            title="Review docs",
            description="Check install guide",
            created_at=start + timedelta(days=2),
        ),
    ]
