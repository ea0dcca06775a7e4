"""Page window arithmetic and the paged find result."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, NamedTuple, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_ROWS = 25


class PageWindow(NamedTuple):
    page: int
    rows: int
    offset: int
    last_page: int
    from_: int
    to: int


def normalise_page(page: int, rows: int) -> tuple[int, int]:
    """``page <= 0`` becomes 1, ``rows <= 0`` becomes ``DEFAULT_PAGE_ROWS``."""
    if page <= 0:
        page = 1
    if rows <= 0:
        rows = DEFAULT_PAGE_ROWS
    return page, rows


def compute_page_window(total: int, page: int, rows: int) -> PageWindow:
    """
    Compute the window for a 1-based *page* of *rows* over *total* records.

    ``to`` is always ``offset + rows``: it reports the full page width even
    on a short last page and is not clamped to *total*.
    """
    page, rows = normalise_page(page, rows)
    offset = page * rows - rows
    last_page = math.ceil(total / rows)
    return PageWindow(
        page=page,
        rows=rows,
        offset=offset,
        last_page=last_page,
        from_=offset + 1,
        to=offset + rows,
    )


@dataclass(frozen=True)
class PagedFindResult(Generic[T]):
    """Snapshot of one paginated read plus its pagination metadata."""

    total_data: int
    rows: int
    current_page: int
    last_page: int
    from_: int
    to: int
    data: list[T] = field(default_factory=list)

    @classmethod
    def from_window(
        cls, window: PageWindow, total: int, data: list[T]
    ) -> PagedFindResult[T]:
        return cls(
            total_data=total,
            rows=window.rows,
            current_page=window.page,
            last_page=window.last_page,
            from_=window.from_,
            to=window.to,
            data=data,
        )

    def to_dict(self) -> dict[str, Any]:
        """Render with the wire keys (``from`` instead of ``from_``)."""
        return {
            "total_data": self.total_data,
            "rows": self.rows,
            "current_page": self.current_page,
            "last_page": self.last_page,
            "from": self.from_,
            "to": self.to,
            "data": self.data,
        }
