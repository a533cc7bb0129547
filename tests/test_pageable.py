from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy import column, desc, func, nulls_last, select, table, text

from keyset_paginator import QueryBefore
from keyset_paginator.enums import SortDirection
from keyset_paginator.exceptions import NoOrderDefinedError, UnresolvableOrderColumnError
from keyset_paginator.query.list_query import ListQuery
from keyset_paginator.query.order_spec import OrderSpec, extract_order_spec
from keyset_paginator.query.pageable import PageableQuery, SelectQuery, as_pageable

from .models import Reply


def spec_of(stmt) -> list[tuple[str, SortDirection]]:
    return [(c.name, c.direction) for c in extract_order_spec(SelectQuery(stmt))]


def test_extracts_columns_and_directions_as_declared() -> None:
    stmt = select(Reply).order_by(Reply.likes_count, Reply.created_at.desc(), Reply.id.asc())

    assert spec_of(stmt) == [
        ('likes_count', SortDirection.ASC),
        ('created_at', SortDirection.DESC),
        ('id', SortDirection.ASC),
    ]


def test_order_by_calls_accumulate() -> None:
    stmt = select(Reply).order_by(Reply.likes_count.desc()).order_by(Reply.id)

    assert spec_of(stmt) == [('likes_count', SortDirection.DESC), ('id', SortDirection.ASC)]


def test_nulls_ordering_modifiers_are_peeled() -> None:
    stmt = select(Reply).order_by(nulls_last(Reply.likes_count.desc()), Reply.id.asc().nulls_first())

    assert spec_of(stmt) == [('likes_count', SortDirection.DESC), ('id', SortDirection.ASC)]


def test_string_order_resolves_against_selected_columns() -> None:
    """
    < order_by('name') resolves to the selected column or label with that key >
    1. A plain column of the selected entity.
    2. A label over a computed expression compares against the expression, orders by the label.
    """
    # 1
    (col,) = extract_order_spec(SelectQuery(select(Reply).order_by(desc('likes_count'))))
    assert col.name == 'likes_count'
    assert col.direction is SortDirection.DESC
    assert col.expression.key == 'likes_count'
    assert col.expression.table is Reply.__table__

    # 2
    year = func.strftime('%Y', Reply.created_at).label('year')
    (col,) = extract_order_spec(SelectQuery(select(year).order_by('year')))
    assert col.name == 'year'
    assert col.order_expression is year
    assert col.expression is year.element


def test_label_object_in_order_by() -> None:
    year = func.strftime('%Y', Reply.created_at).label('year')
    (col,) = extract_order_spec(SelectQuery(select(year, Reply.id).order_by(year.desc())))

    assert col.direction is SortDirection.DESC
    assert col.expression is year.element


def test_unresolvable_string_order_raises() -> None:
    stmt = select(Reply.id).order_by('no_such_column')

    with pytest.raises(UnresolvableOrderColumnError, match='no_such_column'):
        extract_order_spec(SelectQuery(stmt))


@pytest.mark.parametrize(
    'stmt',
    [
        select(Reply).order_by(text('id')),
        select(Reply).order_by(Reply.likes_count, text('id DESC')),
        select((table('users', column('id')).c.id * 2).label('d')).order_by(text('d DESC')),
    ],
)
def test_raw_text_order_raises(stmt) -> None:
    """
    < text() ORDER BY entries have no column to compare against >
    1. Extraction fails with UnresolvableOrderColumnError, not a TypeError from the comparison.
    2. The same error reaches callers of the page builders.
    """
    # 1
    with pytest.raises(UnresolvableOrderColumnError):
        extract_order_spec(SelectQuery(stmt))

    # 2
    with pytest.raises(UnresolvableOrderColumnError):
        QueryBefore(stmt, 2).process(5)


def test_core_table_columns() -> None:
    t = table('things', column('a'), column('b'))
    stmt = select(t).order_by(t.c.b.desc(), t.c.a)

    assert spec_of(stmt) == [('b', SortDirection.DESC), ('a', SortDirection.ASC)]


def test_no_order_raises() -> None:
    with pytest.raises(NoOrderDefinedError):
        extract_order_spec(SelectQuery(select(Reply)))
    with pytest.raises(NoOrderDefinedError):
        extract_order_spec(SelectQuery(select(Reply).order_by(Reply.id).order_by(None)))
    with pytest.raises(NoOrderDefinedError):
        OrderSpec(())


def test_order_spec_sequence_protocol() -> None:
    spec = extract_order_spec(SelectQuery(select(Reply).order_by(Reply.likes_count, Reply.id.desc())))

    assert len(spec) == 2
    assert spec.names == ('likes_count', 'id')
    assert spec[1].is_desc
    assert 'id desc' in repr(spec)


def test_select_query_is_generative() -> None:
    stmt = select(Reply).order_by(Reply.id)
    q = SelectQuery(stmt)
    original_sql = str(stmt)

    q2 = q.clone().replace_order([Reply.id.desc()]).where(Reply.id > 3).limit(5)

    assert str(q.statement) == original_sql
    assert q2.statement is not stmt
    sql = str(q2.statement)
    assert 'ORDER BY replies.id DESC' in sql
    assert 'WHERE replies.id >' in sql
    assert 'LIMIT' in sql


def test_select_query_rejects_non_select() -> None:
    with pytest.raises(TypeError):
        SelectQuery(Reply)  # type: ignore[arg-type]


def test_as_pageable() -> None:
    """
    < as_pageable adapts every supported query kind >
    1. Select -> SelectQuery.
    2. ListQuery -> SelectQuery over to_select().
    3. A custom PageableQuery is returned as-is.
    4. Anything else -> TypeError.
    """
    # 1
    assert isinstance(as_pageable(select(Reply)), SelectQuery)

    # 2
    lq = ListQuery(Reply).order_by(['id'])
    pq = as_pageable(lq)
    assert isinstance(pq, SelectQuery)
    assert [c.name for c in pq.list_order_columns()] == ['id']

    # 3
    custom = SelectQuery(select(Reply))
    assert isinstance(custom, PageableQuery)
    assert as_pageable(custom) is custom

    # 4
    with pytest.raises(TypeError, match='Unsupported query'):
        as_pageable('SELECT * FROM replies')


class RecordingQuery:
    """Minimal PageableQuery over plain data, to check the interface is all pagination needs."""

    def __init__(self, order: list[Any], ops: tuple[str, ...] = ()):
        self._order = order
        self.ops = ops

    @property
    def statement(self) -> tuple[str, ...]:
        return self.ops

    def list_order_columns(self):
        return self._order

    def clone(self) -> RecordingQuery:
        return RecordingQuery(self._order, self.ops)

    def replace_order(self, clauses) -> RecordingQuery:
        return RecordingQuery(self._order, self.ops + (f'order:{len(clauses)}',))

    def where(self, predicate) -> RecordingQuery:
        return RecordingQuery(self._order, self.ops + ('where',))

    def limit(self, size: int) -> RecordingQuery:
        return RecordingQuery(self._order, self.ops + (f'limit:{size}',))


def test_custom_pageable_query_is_paginated_through_the_interface() -> None:
    from keyset_paginator.query.paginate import paginate

    order = SelectQuery(select(Reply).order_by(Reply.likes_count, Reply.id)).list_order_columns()
    q = RecordingQuery(order)

    assert paginate(q, 3, 'before', [1, 2]) == ('order:2', 'where', 'limit:3')
    assert q.ops == ()
