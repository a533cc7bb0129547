"""
< Keyset page assembly >

Data flow for one page:

    query -> extract_order_spec -> DirectionStrategy.resolve -> KeysetStrategy.build
          -> assemble (clone + ORDER BY + WHERE + LIMIT) -> engine executes -> fix_orientation

The caller's query is never modified; every step works on a copy.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any, TypeVar

from sqlalchemy import Select, asc, desc
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from keyset_paginator.enums import PaginationMode, SortDirection
from keyset_paginator.query.order_spec import OrderSpec, extract_order_spec
from keyset_paginator.query.pageable import PageableQuery, as_pageable
from keyset_paginator.query.strategies import DirectionStrategy, EffectiveDirection, KeysetStrategy
from keyset_paginator.repo_types import QueryOrStmt
from keyset_paginator.settings import DEFAULT_SETTINGS, PaginatorSettings

logger = logging.getLogger(__name__)

T = TypeVar('T')


def assemble(
    query: PageableQuery,
    order_spec: OrderSpec,
    directions: Sequence[EffectiveDirection],
    predicate: ColumnElement[bool],
    size: int,
) -> PageableQuery:
    """
    < Build the page query from a copy of `query` >
    1. Clone the query.
    2. Replace ORDER BY with the effective direction of every column, same column sequence.
    3. AND the seek predicate onto the filters the query already has.
    4. Apply LIMIT size.

    ORDER BY entries are rebuilt as plain asc()/desc(); nulls_first()/nulls_last() are not carried over.
    """
    if size < 1:
        raise ValueError('size must be >= 1.')

    clauses = [
        desc(col.order_expression) if d.query_direction is SortDirection.DESC else asc(col.order_expression)
        for col, d in zip(order_spec, directions)
    ]
    return query.clone().replace_order(clauses).where(predicate).limit(size)


def fix_orientation(rows: Iterable[T], mode: PaginationMode) -> list[T]:
    """
    Put fetched rows back into the query's declared order.

    BEFORE pages are fetched with a flipped sort, so they come back reversed.
    AFTER pages are already in declared order. A new list is returned either way.
    """
    out = list(rows)
    if DirectionStrategy.is_flipped(mode):
        out.reverse()
    return out


def paginate(query: QueryOrStmt, size: int, mode: PaginationMode, cursor: Any) -> Any:
    """
    Build the statement selecting at most `size` rows on the `mode` side of `cursor`.

    Parameters
    ----------
    query:
        An ordered Select, ListQuery, or any PageableQuery.
    size:
        Page size (>= 1).
    mode:
        PaginationMode.BEFORE or PaginationMode.AFTER (or their string values).
    cursor:
        Sort key of the boundary row: a scalar for single-column orderings,
        otherwise a list/tuple with one value per ordered column.

    Returns
    -------
    The engine statement (a Select for SelectQuery). Rows it produces must be
    passed through `fix_orientation(rows, mode)`.

    Raises
    ------
    NoOrderDefinedError
        If the query is not ordered.
    CursorArityMismatchError
        If the cursor does not match the ordered columns.
    """
    mode = PaginationMode(mode)
    pageable = as_pageable(query)
    order_spec = extract_order_spec(pageable)
    directions = DirectionStrategy.resolve(order_spec, mode)
    predicate = KeysetStrategy.build(order_spec, directions, cursor)
    logger.debug('Keyset page: mode=%s size=%d order=%r', mode, size, order_spec)
    return assemble(pageable, order_spec, directions, predicate, size).statement


class KeysetPager:
    """
    Paginate one query in one direction.

    >>> pager = QueryBefore(select(Reply).order_by(Reply.id), 2)
    >>> stmt = pager.process(5)                       # ... WHERE id < 5 ORDER BY id DESC LIMIT 2
    >>> rows = pager.fix(session.scalars(stmt).all())  # [3, 4]
    """

    mode: PaginationMode

    def __init__(
        self,
        query: QueryOrStmt,
        size: int | None = None,
        *,
        mode: PaginationMode | str | None = None,
        settings: PaginatorSettings | None = None,
    ) -> None:
        if mode is not None:
            self.mode = PaginationMode(mode)
        if getattr(self, 'mode', None) is None:
            raise ValueError('A pagination mode is required: pass mode= or use QueryBefore / QueryAfter.')

        self.query = query
        self.settings = settings or DEFAULT_SETTINGS
        self.size = self.settings.get_final_page_size(size)

    def process(self, cursor: Any) -> Any:
        """Build the page statement for `cursor`. The original query is left untouched."""
        return paginate(self.query, self.size, self.mode, cursor)

    def fix(self, rows: Iterable[T]) -> list[T]:
        return fix_orientation(rows, self.mode)

    def fetch(self, session: Session, cursor: Any, *, scalars: bool = True) -> list[Any]:
        """
        Execute the page with a synchronous Session and return rows in declared order.

        `scalars=True` returns the first column of each row (ORM entities for `select(Model)`),
        otherwise Row objects.
        """
        stmt: Select[Any] = self.process(cursor)
        result = session.execute(stmt)
        rows = list(result.scalars()) if scalars else list(result)
        logger.debug('Fetched %d row(s) for %s page', len(rows), self.mode)
        return self.fix(rows)


class QueryBefore(KeysetPager):
    """Previous page: the rows immediately preceding the cursor."""

    mode = PaginationMode.BEFORE


class QueryAfter(KeysetPager):
    """Next page: the rows immediately following the cursor."""

    mode = PaginationMode.AFTER
