from __future__ import annotations

import operator
from collections.abc import Sequence
from typing import Any

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement

from keyset_paginator.cursor import as_cursor
from keyset_paginator.query.order_spec import OrderSpec

from .direction import EffectiveDirection

_OPERATORS = {'>': operator.gt, '<': operator.lt}


class KeysetStrategy:
    """
    <Keyset Pagination Predicate>

    Builds the WHERE condition selecting rows strictly on one side of a cursor,
    under the lexicographic order defined by the ORDER BY columns.

    For columns c1..ck, operators op1..opk and cursor values v1..vk the condition is an
    OR-ladder (seek condition) of k AND-groups:

        (c1 op1 v1)
        OR (c1 = v1 AND c2 op2 v2)
        OR (c1 = v1 AND c2 = v2 AND c3 op3 v3)
        ...

    There is no group where every column equals its cursor value, so the cursor row
    itself never matches. A single column degenerates to the bare comparison.
    """

    @staticmethod
    def build(
        order_spec: OrderSpec,
        directions: Sequence[EffectiveDirection],
        cursor: Any,
    ) -> ColumnElement[bool]:
        """
        <Build the seek condition>

        1. Check that directions are aligned with the ordered columns
        2. Validate cursor arity against the ordered columns (CursorArityMismatchError)
        3. Single column -> one comparison
        4. Multiple columns -> OR of AND-groups, each fixing the previous columns with ==
        """
        if len(directions) != len(order_spec):
            raise ValueError('directions length does not match the number of ordered columns.')

        values = as_cursor(cursor).components(len(order_spec))
        columns = [c.expression for c in order_spec]
        ops = [_OPERATORS[d.compare_op] for d in directions]

        if len(columns) == 1:
            return ops[0](columns[0], values[0])

        or_conds = []
        for i in range(len(columns)):
            and_parts = [columns[j] == values[j] for j in range(i)]
            and_parts.append(ops[i](columns[i], values[i]))
            or_conds.append(and_(*and_parts))
        return or_(*or_conds)
