"""Rendering utilities for Streamlit."""

from .bridge import render_table, render_task_board

__all__ = [
    "render_table",
    "render_task_board",
]
