"""
Pagination and sorting for listing queries.

A PageRequest carries a zero-based page index, a page size and a list of
sort tokens in ``field[,asc|desc]`` form (``createdAt,desc`` is accepted as
well as ``created_at,desc``). Sort fields are whitelisted per entity so a
request can never order by an arbitrary column.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from review_service.exceptions import BadRequestError

DEFAULT_SORT = ("created_at,desc",)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass(frozen=True)
class PageRequest:
    """Requested slice of a sorted result set."""

    page: int = 0
    size: int = 10
    sort: Sequence[str] = field(default=DEFAULT_SORT)

    def __post_init__(self) -> None:
        if self.page < 0:
            raise BadRequestError("Page index must not be less than zero")
        if self.size < 1:
            raise BadRequestError("Page size must not be less than one")
        if not self.sort:
            object.__setattr__(self, "sort", DEFAULT_SORT)

    @property
    def offset(self) -> int:
        return self.page * self.size


def _to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def build_order_by(
    sort: Sequence[str],
    sortable: Mapping[str, Any],
    tiebreaker: Any,
) -> list[Any]:
    """
    Translate sort tokens into ORDER BY clauses.

    Direction defaults to ascending when omitted. ``tiebreaker`` (the primary
    key) is appended in the direction of the last token so pages never
    overlap when sort keys collide.
    """
    clauses: list[Any] = []
    seen: set[str] = set()
    descending = False

    for token in sort:
        name, _, direction = token.partition(",")
        name = _to_snake(name.strip())
        direction = (direction.strip() or "asc").lower()

        if name not in sortable:
            allowed = ", ".join(sorted(sortable))
            raise BadRequestError(f"Cannot sort by '{name}'. Allowed fields: {allowed}")
        if direction not in ("asc", "desc"):
            raise BadRequestError(f"Invalid sort direction '{direction}' for '{name}'")
        if name in seen:
            continue

        seen.add(name)
        descending = direction == "desc"
        column = sortable[name]
        clauses.append(column.desc() if descending else column.asc())

    if "id" not in seen:
        clauses.append(tiebreaker.desc() if descending else tiebreaker.asc())
    return clauses


async def paginate(
    db: AsyncSession,
    stmt: Select,
    count_stmt: Select,
    page_request: PageRequest,
) -> tuple[list[Any], int]:
    """Run the count query and, if the page is in range, the sliced entity query."""
    total = (await db.execute(count_stmt)).scalar_one()
    if total == 0 or page_request.offset >= total:
        return [], total

    # populate_existing: derived counts must reflect the rows as of this query
    result = await db.execute(
        stmt.offset(page_request.offset)
        .limit(page_request.size)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all()), total
