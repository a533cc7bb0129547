from typing import TYPE_CHECKING, Any, TypeAlias, TypeVar

from sqlalchemy.orm import DeclarativeBase

if TYPE_CHECKING:
    from sqlalchemy import Select

    from keyset_paginator.query.list_query import ListQuery
    from keyset_paginator.query.pageable import PageableQuery

__all__ = ['TModel', 'CursorScalar', 'QueryOrStmt']


TModel = TypeVar('TModel', bound=DeclarativeBase)

# Anything the engine can compare a column against: int, str, datetime, Decimal, ...
CursorScalar: TypeAlias = Any

# If you add more query types beyond ListQuery / PageableQuery, extend this union type.
QueryOrStmt: TypeAlias = 'ListQuery[Any] | PageableQuery | Select[Any]'
