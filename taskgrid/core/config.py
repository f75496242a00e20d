"""Environment-driven defaults."""

import os

from .errors import TableConfigError

DEFAULT_PAGE_SIZE = 10


def get_default_page_size() -> int:
    """
    Get the page size used when a table is created without one.

    Reads TASKGRID_PAGE_SIZE from the environment, falling back to 10.

    Returns:
        Positive page size

    Raises:
        TableConfigError: If TASKGRID_PAGE_SIZE is not a positive integer
    """
    raw = os.environ.get("TASKGRID_PAGE_SIZE")
    if raw is None or raw.strip() == "":
        return DEFAULT_PAGE_SIZE

    try:
        page_size = int(raw)
    except ValueError:
        raise TableConfigError(
            f"TASKGRID_PAGE_SIZE must be a positive integer, got '{raw}'"
        ) from None

    if page_size <= 0:
        raise TableConfigError(
            f"TASKGRID_PAGE_SIZE must be a positive integer, got {page_size}"
        )
    return page_size
