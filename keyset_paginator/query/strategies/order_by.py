"""
< Normalize ORDER BY inputs of a model-bound ListQuery >
1. Accept user-facing inputs: str key / Enum (str value) / ORM attribute / asc(), desc() over one of those.
2. Only the model's own columns are allowed: other models, aliased tables, functions and raw text are rejected.
3. Duplicates (same column, any direction) are dropped; the first occurrence wins.
4. No ordering is ever invented. An empty input stays empty.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any

from sqlalchemy.orm.attributes import InstrumentedAttribute
from sqlalchemy.sql.elements import ColumnElement, TextClause, UnaryExpression
from sqlalchemy.sql.functions import FunctionElement

from keyset_paginator.sa_helper import peel_unary, sa_mapper


class OrderByStrategy:
    @staticmethod
    def apply(model: type[Any], order_items: Sequence[Any] | None) -> list[ColumnElement[Any]]:
        """
        < Normalize ordering criteria for `model` >

        Parameters
        ----------
        model : type
            SQLAlchemy ORM model class.
        order_items : Sequence[Any] | None
            str keys, Enum members, ORM attributes, or asc()/desc() expressions over them.

        Returns
        -------
        list[ColumnElement[Any]]
            ORDER BY items ready for `select(...).order_by(*cols)`. Directions are preserved.

        Raises
        ------
        TypeError
            If `order_items` is a single string instead of a sequence.
        ValueError
            If an item does not refer to a column of `model`.
        """
        if isinstance(order_items, str):
            raise TypeError('order_items must be a Sequence, not a single string.')

        seen: set[str] = set()
        out: list[ColumnElement[Any]] = []
        for item in order_items or ():
            col, key = OrderByStrategy._normalize(model, item)
            if key in seen:
                continue
            seen.add(key)
            out.append(col)
        return out

    @staticmethod
    def _normalize(model: type[Any], item: Any) -> tuple[ColumnElement[Any], str]:
        if isinstance(item, Enum) and isinstance(item.value, str):
            item = item.value

        if isinstance(item, str):
            return OrderByStrategy._column(model, item), item

        if isinstance(item, UnaryExpression):
            key = OrderByStrategy._owned_key(model, peel_unary(item))
            return item, key  # keep asc()/desc()

        if isinstance(item, InstrumentedAttribute) or (
            isinstance(item, ColumnElement) and not isinstance(item, FunctionElement | TextClause)
        ):
            key = OrderByStrategy._owned_key(model, item)
            return OrderByStrategy._column(model, key), key

        raise ValueError(f'Unsupported order_by input type: {item!r}')

    @staticmethod
    def _column(model: type[Any], key: str) -> ColumnElement[Any]:
        mapper = sa_mapper(model)
        if key not in mapper.column_attrs:
            raise ValueError(f"Model {model.__name__} does not have a field '{key}'.")
        return getattr(model, key).expression

    @staticmethod
    def _owned_key(model: type[Any], expr: Any) -> str:
        """
        Return the column key of `expr` if it is a column of `model`'s own table.
        Columns of `aliased()` models carry a different table object and are rejected.
        """
        if isinstance(expr, InstrumentedAttribute):
            owner = getattr(expr, 'class_', None)
            if owner is not model:
                raise ValueError(f"'{expr}' belongs to another model ({getattr(owner, '__name__', 'Unknown')}).")
            expr = expr.expression
        if isinstance(expr, FunctionElement | TextClause):
            raise ValueError(f'Unsupported order_by input type: {expr!r}')

        key = getattr(expr, 'key', None)
        if key is None or getattr(expr, 'table', None) is not sa_mapper(model).local_table:
            raise ValueError(f"Model {model.__name__} does not have a field '{key}'.")
        OrderByStrategy._column(model, key)
        return key
