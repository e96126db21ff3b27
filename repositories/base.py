# repositories/base.py
import math
from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from schemas.query import CONTAINS, EQUALS, GTE, IS_NULL, LTE, NOT_NULL, Criterion, ListQuery

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    docs: List[T]
    total_docs: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_docs / self.limit) or 1

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def prev_page(self) -> Optional[int]:
        return self.page - 1 if self.has_prev_page else None

    @property
    def next_page(self) -> Optional[int]:
        return self.page + 1 if self.has_next_page else None


def criterion_clause(model, criterion: Criterion):
    column = getattr(model, criterion.column)
    if criterion.op == CONTAINS:
        return column.icontains(criterion.value, autoescape=True)
    if criterion.op == EQUALS:
        return column == criterion.value
    if criterion.op == GTE:
        return column >= criterion.value
    if criterion.op == LTE:
        return column <= criterion.value
    if criterion.op == IS_NULL:
        return column.is_(None)
    if criterion.op == NOT_NULL:
        return column.is_not(None)
    raise ValueError(f"unsupported filter operator: {criterion.op}")


async def paginate(session: AsyncSession, model, query: ListQuery, tiebreaker) -> Page:
    """
    One page of ``model`` rows matching ``query``.
    ``tiebreaker`` (the primary key) keeps the order stable across calls.
    """
    clauses = [criterion_clause(model, c) for c in query.criteria]
    options = query.options

    total = await session.scalar(select(func.count()).select_from(model).where(*clauses))

    column = getattr(model, options.sort_by)
    order = column.desc() if options.descending else column.asc()
    stmt = (
        select(model)
        .where(*clauses)
        .order_by(order, tiebreaker)
        .offset((options.page - 1) * options.limit)
        .limit(options.limit)
    )
    rows = await session.scalars(stmt)
    return Page(docs=list(rows), total_docs=total or 0, page=options.page, limit=options.limit)
