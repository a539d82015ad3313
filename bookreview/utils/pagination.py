"""
Skip/take pagination.

Pages are 1-indexed. Page and limit values come straight from the client
with no upper bound; the offset is clamped at zero and a negative limit
returns nothing, so a page of 0 or less reads the first window instead of
handing a negative OFFSET to the database. Very large pages are capped at
the largest OFFSET the database accepts, which reads an empty window.
"""

from typing import NamedTuple

from bookreview.database import DB_INT_MAX


class Window(NamedTuple):
    skip: int
    take: int


def paginate(page: int = 1, limit: int = 10) -> Window:
    """
    Convert a page number and size into an offset/limit pair.

    Examples:
        >>> paginate(1, 10)
        Window(skip=0, take=10)
        >>> paginate(3, 5)
        Window(skip=10, take=5)
        >>> paginate(0, 10)
        Window(skip=0, take=10)
    """
    take = min(max(limit, 0), DB_INT_MAX)
    skip = min(max((page - 1) * take, 0), DB_INT_MAX)
    return Window(skip=skip, take=take)
