"""Row processing: global search, sorting and pagination."""

from .pipeline import (
    build_frame,
    filter_rows,
    order_rows,
    page_count,
    paginate,
    sort_rows,
)

__all__ = [
    "build_frame",
    "filter_rows",
    "sort_rows",
    "order_rows",
    "page_count",
    "paginate",
]
