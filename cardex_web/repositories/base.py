"""Query helpers shared by the catalogue repositories."""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import func
from sqlmodel import Session, select

from ..pagination import PageWindow, paginate

LIKE_ESCAPE = "\\"


def contains_pattern(value: str) -> str:
    """Return a casefolded ``LIKE`` pattern matching ``value`` anywhere."""

    escaped = (
        value.casefold()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


def name_contains(column: Any, value: str) -> Any:
    """Substring filter on a column holding casefolded names."""

    return column.like(contains_pattern(value), escape=LIKE_ESCAPE)


def fetch_page(
    session: Session,
    *,
    count_column: Any,
    rows_stmt: Any,
    filters: Sequence[Any],
    page: int,
    items_per_page: int,
) -> tuple[PageWindow, list[Any]]:
    """Count rows matching ``filters`` and load the clamped page of ``rows_stmt``."""

    count_stmt = select(func.count(count_column))
    if filters:
        count_stmt = count_stmt.where(*filters)
    total_items = session.exec(count_stmt).one()
    window = paginate(total_items, page, items_per_page)

    stmt = rows_stmt
    if filters:
        stmt = stmt.where(*filters)
    rows = session.exec(stmt.offset(window.offset).limit(window.items_per_page)).all()
    return window, list(rows)
