from .cursor import ScalarCursor, TupleCursor, as_cursor
from .enums import PaginationMode, SortDirection
from .exceptions import *
from .query import (
    KeysetPager,
    ListQuery,
    OrderColumn,
    OrderSpec,
    PageableQuery,
    QueryAfter,
    QueryBefore,
    SelectQuery,
    extract_order_spec,
    fix_orientation,
    paginate,
)
from .repo_types import *
from .repository import KeysetRepository
from .session_provider import SessionProvider
from .settings import PaginatorSettings

__all__ = [
    # cursor
    'ScalarCursor',
    'TupleCursor',
    'as_cursor',
    # enums
    'PaginationMode',
    'SortDirection',
    # exceptions
    'KeysetPaginationError',
    'NoOrderDefinedError',
    'CursorArityMismatchError',
    'UnresolvableOrderColumnError',
    # query
    'KeysetPager',
    'ListQuery',
    'OrderColumn',
    'OrderSpec',
    'PageableQuery',
    'QueryAfter',
    'QueryBefore',
    'SelectQuery',
    'extract_order_spec',
    'fix_orientation',
    'paginate',
    # repository
    'KeysetRepository',
    # session_provider
    'SessionProvider',
    # settings
    'PaginatorSettings',
    # repo_types
    'TModel',
    'CursorScalar',
    'QueryOrStmt',
]


__version__ = '0.1.0'
