"""Page arithmetic shared by the repositories."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class PageWindow:
    """Resolved page for a result set of ``total_items`` rows."""

    total_items: int
    items_per_page: int
    total_pages: int
    current_page: int

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.items_per_page


def paginate(total_items: int, requested_page: int, items_per_page: int) -> PageWindow:
    """Clamp ``requested_page`` into ``[1, total_pages]``.

    ``total_pages`` is never below one, so an empty result set still reports
    a single (empty) page and a page past the end resolves to the last page.
    """

    if items_per_page < 1:
        raise ValueError("items_per_page must be positive")
    total_items = max(0, int(total_items))
    total_pages = max(1, math.ceil(total_items / items_per_page))
    current_page = max(1, min(int(requested_page), total_pages))
    return PageWindow(
        total_items=total_items,
        items_per_page=items_per_page,
        total_pages=total_pages,
        current_page=current_page,
    )
