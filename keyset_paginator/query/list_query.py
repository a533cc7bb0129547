from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated, Any, Generic

from sqlalchemy import Select, select
from sqlalchemy.sql.base import ExecutableOption
from sqlalchemy.sql.elements import ColumnElement
from typing_extensions import Doc

from keyset_paginator.repo_types import TModel

from .strategies import OrderByStrategy


class ListQuery(Generic[TModel]):
    """
    A lightweight, model-bound DSL for read-only queries.

    This is a **pure state object** that composes WHERE / ORDER BY / loader options.
    It never executes anything and is never consumed: `to_select()` can be called
    any number of times, and pagination builds on the resulting Select without
    touching the ListQuery.

    Design principles
    -----------------
    - WHERE:
        - `where(*criteria)` may be called repeatedly; all criteria are AND-composed.
    - ORDER:
        - `order_by()` can be called once. Inputs are normalized by OrderByStrategy,
          and only columns of the model itself are allowed.
        - No default ordering is added. An unordered ListQuery cannot be paginated.
    - OPTIONS:
        - Loader options (`selectinload(...)`, ...) are carried into the Select as-is.

    Typical usage
    -------------
    >>> q = (
    ...     ListQuery(Reply)
    ...         .where(Reply.likes_count > 0)
    ...         .order_by([Reply.created_at.asc(), Reply.id.desc()])
    ... )
    >>> stmt = QueryBefore(q, 20).process([created_at, 123])
    """

    def __init__(self, model: type[TModel]) -> None:
        """
        Parameters
        ----------
        model:
            Target SQLAlchemy ORM model class. ORDER BY inputs are validated against its columns.
        """
        self.model: type[TModel] = model

        self._criteria: list[ColumnElement[bool]] = []
        self._order_items: Sequence[Any] | None = None
        self._options: list[ExecutableOption] = []

    def where(self, *criteria: ColumnElement[bool]) -> ListQuery[TModel]:
        """
        Add WHERE criteria. Criteria from repeated calls are combined with AND.

        Returns
        -------
        ListQuery[TModel]
            Returns self to support method chaining.
        """
        self._criteria.extend(criteria)
        return self

    def order_by(self, items: Sequence[Any]) -> ListQuery[TModel]:
        """
        Define the ORDER BY clause.

        Parameters
        ----------
        items:
            Ordering input sequence, normalized by OrderByStrategy:

            - str: "id", "name" (model column key)
            - Enum.value: an Enum whose value is a string
            - model attributes: Reply.id, Reply.created_at
            - ordering expressions: Reply.id.asc(), Reply.id.desc()

        Raises
        ------
        ValueError
            If `order_by()` was already called, or an item is not a column of the model.
        TypeError
            If `items` is a single string.
        """
        if self._order_items is not None:
            raise ValueError('order_by() can be called only once.')
        self._order_items = OrderByStrategy.apply(self.model, items)
        return self

    def options(self, *opts: ExecutableOption) -> ListQuery[TModel]:
        """Add loader options, e.g. `selectinload(Reply.user)`."""
        self._options.extend(opts)
        return self

    @property
    def criteria(self) -> Annotated[tuple[ColumnElement[bool], ...], Doc('WHERE criteria, AND-composed.')]:
        return tuple(self._criteria)

    @property
    def order_items(
        self,
    ) -> Annotated[
        Sequence[ColumnElement[Any]] | None,
        Doc('Normalized ORDER BY items, or None if order_by() was never called.'),
    ]:
        return self._order_items

    def to_select(self) -> Select[tuple[TModel]]:
        """
        Convert into a SQLAlchemy Select.

        Conversion order
        ----------------
        1. `select(model)`
        2. WHERE criteria
        3. loader options
        4. ORDER BY (only if order_by() was called)
        """
        stmt = select(self.model)
        if self._criteria:
            stmt = stmt.where(*self._criteria)
        if self._options:
            stmt = stmt.options(*self._options)
        if self._order_items:
            stmt = stmt.order_by(*self._order_items)
        return stmt
