from __future__ import annotations

import math
from typing import Any, Optional, Sequence

from fleet_console.models.grid import DEFAULT_PAGE_SIZE, PAGE_SIZES, Page, PageState


def total_pages_for(count: int, page_size: int) -> int:
    return max(1, math.ceil(count / page_size))


def clamp_index(index: int, total_pages: int) -> int:
    return min(max(1, index), total_pages)


def paginate(records: Sequence[Any], page_state: PageState) -> Page:
    """Slice one page out of an already filtered + sorted sequence.

    A stale current_index (beyond the last page) is clamped to the last page,
    so a page with data is always returned when data exists.
    """
    count = len(records)
    total_pages = total_pages_for(count, page_state.page_size)
    index = clamp_index(page_state.current_index, total_pages)
    start = (index - 1) * page_state.page_size
    return Page(
        items=list(records[start:start + page_state.page_size]),
        total_pages=total_pages,
        current_index=index,
        start_index=start,
        total_count=count,
    )


def page_state_from_args(size: Optional[str], page: Optional[str]) -> PageState:
    """Build a PageState from query-string values, falling back to defaults."""
    try:
        page_size = int(size) if size else DEFAULT_PAGE_SIZE
    except ValueError:
        page_size = DEFAULT_PAGE_SIZE
    if page_size not in PAGE_SIZES:
        page_size = DEFAULT_PAGE_SIZE

    try:
        index = int(page) if page else 1
    except ValueError:
        index = 1
    return PageState(page_size=page_size, current_index=max(1, index))
