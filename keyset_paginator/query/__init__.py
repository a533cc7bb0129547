from .order_spec import OrderColumn, OrderSpec, extract_order_spec
from .list_query import ListQuery
from .pageable import PageableQuery, SelectQuery, as_pageable
from .paginate import KeysetPager, QueryAfter, QueryBefore, assemble, fix_orientation, paginate

__all__ = [
    'OrderColumn',
    'OrderSpec',
    'extract_order_spec',
    'ListQuery',
    'PageableQuery',
    'SelectQuery',
    'as_pageable',
    'KeysetPager',
    'QueryAfter',
    'QueryBefore',
    'assemble',
    'fix_orientation',
    'paginate',
]
