"""
Sorting and paging shared by the list endpoints.
Each entity declares the sort columns it accepts; we build the ORDER BY,
the OFFSET/LIMIT and the COUNT query from that.
"""
import logging
from typing import Any, Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


def resolve_sort(
    sort_by: str | None, columns: dict[str, Any], default: str, is_ascending: bool
) -> tuple[Any, bool]:
    """Map a client sort key to a column expression and direction.

    Unknown keys sort ascending on the default column, whatever `is_ascending` says.
    """
    if sort_by in columns:
        return columns[sort_by], is_ascending
    if sort_by:
        logger.debug(f"Unknown sort key {sort_by!r}, using {default!r} ascending")
    return columns[default], True


def order_clauses(column: Any, tiebreaker: Any, is_ascending: bool) -> list:
    """ORDER BY for the chosen column, with the primary key breaking ties in the same direction."""
    if is_ascending:
        return [column.asc(), tiebreaker.asc()]
    return [column.desc(), tiebreaker.desc()]


def page_offset(page_number: int, page_size: int) -> int:
    """Rows to skip; page numbers below 1 skip nothing."""
    return max((page_number - 1) * page_size, 0)


async def count_rows(session: AsyncSession, stmt: Select) -> int:
    total = await session.scalar(select(func.count()).select_from(stmt.order_by(None).subquery()))
    return total or 0


async def paginate(
    session: AsyncSession,
    stmt: Select,
    *,
    order_by: Sequence,
    page_number: int,
    page_size: int,
    options: Sequence = (),
) -> tuple[list, int]:
    """Run one page of `stmt`.

    Returns:
        tuple: (rows on the requested page, total matching rows)
    """
    total_count = await count_rows(session, stmt)

    # Out-of-range pages are empty, not errors
    if page_size <= 0:
        return [], total_count

    # Pages starting past the last row never reach the store
    offset = page_offset(page_number, page_size)
    if offset >= total_count:
        return [], total_count

    page_stmt = (
        stmt.options(*options)
        .order_by(*order_by)
        .offset(offset)
        .limit(min(page_size, total_count - offset))
    )
    result = await session.execute(page_stmt)
    return list(result.scalars().all()), total_count
