from typing import Any, cast

from sqlalchemy import ColumnElement, Select, UnaryExpression, inspect
from sqlalchemy.orm import Mapper
from sqlalchemy.sql import operators


def sa_mapper(model: type[Any]) -> Mapper[Any]:
    return cast(Mapper[Any], inspect(model))


def peel_unary(expr: ColumnElement[Any]) -> ColumnElement[Any]:
    base = expr
    while isinstance(base, UnaryExpression):
        base = base.element
    return base


def is_desc(expr: ColumnElement[Any]) -> bool:
    """
    Return True if any asc()/desc()/nulls_first()/nulls_last() layer of `expr` is DESC.
    """
    base = expr
    while isinstance(base, UnaryExpression):
        if base.modifier is operators.desc_op:
            return True
        base = base.element
    return False


def order_by_clauses(stmt: Select[Any]) -> tuple[ColumnElement[Any], ...]:
    # Select exposes no public accessor for its ORDER BY list.
    return tuple(stmt._order_by_clauses)
