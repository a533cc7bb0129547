"""
< Query capability interface >

Pagination only needs a handful of things from a query: its declared ordering,
a way to copy it, and generative ORDER BY / WHERE / LIMIT. PageableQuery names
exactly those; SelectQuery implements them over a SQLAlchemy Select, which
covers both ORM selects (`select(Model)`) and Core selects (`select(table)`).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import Select
from sqlalchemy.sql.elements import ColumnElement, Label, _label_reference, _textual_label_reference

from keyset_paginator.enums import SortDirection
from keyset_paginator.exceptions import UnresolvableOrderColumnError
from keyset_paginator.query.list_query import ListQuery
from keyset_paginator.query.order_spec import OrderColumn
from keyset_paginator.sa_helper import is_desc, order_by_clauses, peel_unary


@runtime_checkable
class PageableQuery(Protocol):
    """
    What a query abstraction must offer to be paginated.

    Every method except `list_order_columns()` returns a new query and leaves
    the receiver untouched.
    """

    @property
    def statement(self) -> Any: ...

    def list_order_columns(self) -> Sequence[OrderColumn]: ...

    def clone(self) -> PageableQuery: ...

    def replace_order(self, clauses: Sequence[ColumnElement[Any]]) -> PageableQuery: ...

    def where(self, predicate: ColumnElement[bool]) -> PageableQuery: ...

    def limit(self, size: int) -> PageableQuery: ...


class SelectQuery:
    """
    PageableQuery over a SQLAlchemy Select.

    Select is generative: `where()`, `order_by()` and `limit()` return copies,
    so the wrapped statement is shared safely between clones.
    """

    __slots__ = ('_stmt',)

    def __init__(self, stmt: Select[Any]):
        if not isinstance(stmt, Select):
            raise TypeError(f'SelectQuery wraps a sqlalchemy Select, got {type(stmt).__name__}.')
        self._stmt = stmt

    @property
    def statement(self) -> Select[Any]:
        return self._stmt

    def list_order_columns(self) -> list[OrderColumn]:
        return [self._resolve(clause) for clause in order_by_clauses(self._stmt)]

    def clone(self) -> SelectQuery:
        return SelectQuery(self._stmt)

    def replace_order(self, clauses: Sequence[ColumnElement[Any]]) -> SelectQuery:
        return SelectQuery(self._stmt.order_by(None).order_by(*clauses))

    def where(self, predicate: ColumnElement[bool]) -> SelectQuery:
        return SelectQuery(self._stmt.where(predicate))

    def limit(self, size: int) -> SelectQuery:
        return SelectQuery(self._stmt.limit(size))

    def _resolve(self, clause: ColumnElement[Any]) -> OrderColumn:
        """
        < Turn one ORDER BY entry into an OrderColumn >
        1. Unwrap the label reference SQLAlchemy adds around labelled ORDER BY entries.
        2. Read the direction from the asc()/desc() layers, then peel them.
        3. Resolve a bare string (`order_by('year')`) against the selected columns.
        4. For a Label, compare against the labelled expression but keep ordering by the label.

        Raises UnresolvableOrderColumnError for unknown string names and for `text()` entries.
        """
        # 1
        if isinstance(clause, _label_reference):
            clause = clause.element

        # 2
        direction = SortDirection.DESC if is_desc(clause) else SortDirection.ASC
        base = peel_unary(clause)

        # 3
        if isinstance(base, _textual_label_reference):
            name = base.element
            selected = self._stmt.selected_columns.get(name)
            if selected is None:
                raise UnresolvableOrderColumnError(name)
            base = selected

        # raw text() has no column to compare against
        if not isinstance(base, ColumnElement):
            raise UnresolvableOrderColumnError(str(base), 'raw SQL text cannot be used in a WHERE comparison')

        # 4
        if isinstance(base, Label):
            return OrderColumn(name=base.name, expression=base.element, order_expression=base, direction=direction)

        name = getattr(base, 'key', None) or getattr(base, 'name', None) or str(base)
        return OrderColumn(name=str(name), expression=base, order_expression=base, direction=direction)


def as_pageable(query: Any) -> PageableQuery:
    """
    Adapt the supported query kinds to PageableQuery.

    - Select           -> SelectQuery
    - ListQuery        -> SelectQuery over `to_select()`
    - PageableQuery    -> returned as-is

    Raises
    ------
    TypeError
        For anything else.
    """
    if isinstance(query, Select):
        return SelectQuery(query)
    if isinstance(query, ListQuery):
        return SelectQuery(query.to_select())
    if isinstance(query, PageableQuery):
        return query
    raise TypeError(f'Unsupported query/statement type: {type(query).__name__}')
