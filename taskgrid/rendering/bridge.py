"""Bridge between table engines and Streamlit widgets."""

from typing import TYPE_CHECKING, Any, Dict, Optional

import pandas as pd
import streamlit as st

from ..core.columns import SortDirection

if TYPE_CHECKING:
    from ..components.table import DataTable, TableView
    from ..components.task_list import TaskBoard

SEARCH_PLACEHOLDER = "Search all columns..."
NO_RESULTS_MESSAGE = "No results"

_SORT_INDICATORS = {
    SortDirection.ASC: " ↑",
    SortDirection.DESC: " ↓",
}


def format_sort_indicator(direction: SortDirection) -> str:
    """Arrow appended to a header label for the given sort direction."""
    return _SORT_INDICATORS.get(direction, "")


def table_frame(view: "TableView") -> pd.DataFrame:
    """
    Convert a table view into a pandas DataFrame for display.

    Args:
        view: View returned by DataTable.get_view()

    Returns:
        DataFrame with one column per header (labelled) and one row per
        visible row, holding the rendered cell values
    """
    labels = [header.label for header in view.headers]
    return pd.DataFrame(view.cells, columns=labels)


def _sort_state_key(key: str) -> str:
    return f"{key}:sort"


def _get_local_sort(key: str) -> Optional[Dict[str, Any]]:
    """Sort remembered for a widget key: {"column": id, "dir": "asc"|"desc"} or None."""
    return st.session_state.get(_sort_state_key(key))


def _toggle_sort_callback(key: str, column_id: str) -> None:
    """Advance the remembered sort of a widget key for a clicked header."""
    current = _get_local_sort(key)
    direction = SortDirection.NONE
    if current is not None and current["column"] == column_id:
        direction = SortDirection(current["dir"])

    direction = direction.next()
    if direction is SortDirection.NONE:
        st.session_state[_sort_state_key(key)] = None
    else:
        st.session_state[_sort_state_key(key)] = {
            "column": column_id,
            "dir": direction.value,
        }


def _navigate_callback(table: "DataTable", action: str) -> None:
    getattr(table, action)()


def render_table(table: "DataTable", key: Optional[str] = None) -> "TableView":
    """
    Render a DataTable with Streamlit widgets.

    This function:
    1. Restores the search text and sort remembered for this widget key
    2. Draws the search box and the sortable header row
    3. Computes the view (filter -> sort -> paginate) and draws the page
    4. Draws the result summary and, for multi-page results, the
       first/previous/next/last buttons

    Search text and sort belong to the widget key, so a different key starts
    fresh. The page index belongs to the table's list identity in its
    PageIndexStore and is shared by every key showing that list.

    Args:
        table: The table to render
        key: Optional unique widget key. Defaults to one derived from the
            table's list identity.

    Returns:
        The rendered view
    """
    if key is None:
        key = f"taskgrid_{table.list_id}"

    search = st.text_input(
        "Search",
        key=f"{key}:search",
        placeholder=SEARCH_PLACEHOLDER,
        label_visibility="collapsed",
    )
    table.set_global_filter(search)

    local_sort = _get_local_sort(key)
    if local_sort is not None:
        table.set_sorting(local_sort["column"], SortDirection(local_sort["dir"]))
    else:
        table.set_sorting(None, SortDirection.NONE)

    headers = table.get_headers()
    header_columns = st.columns(len(headers))
    for slot, header in zip(header_columns, headers):
        label = f"{header.label}{format_sort_indicator(header.direction)}"
        if header.sortable:
            slot.button(
                label,
                key=f"{key}:header:{header.id}",
                on_click=_toggle_sort_callback,
                args=(key, header.id),
                width="stretch",
            )
        else:
            slot.markdown(f"**{label}**")

    view = table.get_view()
    summary = view.summary

    if summary.filtered_count == 0:
        st.info(NO_RESULTS_MESSAGE)
    else:
        st.dataframe(table_frame(view), hide_index=True, width="stretch")

    st.caption(table.summary_text())

    if summary.page_count > 1:
        first, previous, label, following, last = st.columns([1, 1, 2, 1, 1])
        first.button(
            "<<",
            key=f"{key}:first",
            disabled=not summary.can_previous_page,
            on_click=_navigate_callback,
            args=(table, "first_page"),
        )
        previous.button(
            "<",
            key=f"{key}:previous",
            disabled=not summary.can_previous_page,
            on_click=_navigate_callback,
            args=(table, "previous_page"),
        )
        label.markdown(f"Page {summary.current_page + 1} of {summary.page_count}")
        following.button(
            ">",
            key=f"{key}:next",
            disabled=not summary.can_next_page,
            on_click=_navigate_callback,
            args=(table, "next_page"),
        )
        last.button(
            ">>",
            key=f"{key}:last",
            disabled=not summary.can_next_page,
            on_click=_navigate_callback,
            args=(table, "last_page"),
        )

    return view


def render_task_board(board: "TaskBoard", key: Optional[str] = None) -> Optional["TableView"]:
    """
    Render a project's task view: header counts, then the task table or
    the empty state.

    Args:
        board: The task board to render
        key: Optional unique widget key for the task table

    Returns:
        The rendered table view, or None when the project has no tasks
    """
    from ..components.task_list import EMPTY_TASKS_MESSAGE, EMPTY_TASKS_TITLE

    project = board.project
    st.subheader(f"Tasks - {project.name}")
    if project.description:
        st.caption(project.description)

    summary = board.summary
    total, completed, pending = st.columns(3)
    total.metric("Total Tasks", summary.total)
    completed.metric("Completed", summary.completed)
    pending.metric("Pending", summary.pending)

    if board.is_empty:
        st.markdown(f"#### {EMPTY_TASKS_TITLE}")
        st.write(EMPTY_TASKS_MESSAGE)
        return None

    return render_table(board.table, key=key)
