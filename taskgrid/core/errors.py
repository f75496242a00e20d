"""Error types for table configuration.

This module provides the exceptions raised when a table is set up incorrectly:
- TableConfigError: Raised at construction time for invalid table configuration
"""


class TableConfigError(ValueError):
    """Raised when a table is constructed with an invalid configuration.

    This error is raised when:
    1. The page size is not a positive integer
    2. Column definitions are empty or contain duplicate ids
    3. A column accessor names a field that is missing from a row
    4. A sort is requested on a column marked as not sortable

    These are programming errors at the use site and are not recovered from
    internally. Fix the column definitions or the page size to resolve.
    """

    pass
