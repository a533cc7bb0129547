from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from keyset_paginator.enums import PaginationMode, SortDirection
from keyset_paginator.query.order_spec import OrderSpec

CompareOp = Literal['>', '<']


@dataclass(frozen=True)
class EffectiveDirection:
    """
    How one ordered column is used for a given pagination mode.

    - query_direction : sort direction sent to the engine together with LIMIT
    - compare_op      : operator comparing the column against its cursor value
    """

    query_direction: SortDirection
    compare_op: CompareOp


# (mode, declared direction) -> effective direction.
# BEFORE searches backwards from the cursor: it flips the sort so LIMIT takes the
# nearest rows, and the rows are reversed back after execution.
_DIRECTION_TABLE: dict[tuple[PaginationMode, SortDirection], EffectiveDirection] = {
    (PaginationMode.AFTER, SortDirection.ASC): EffectiveDirection(SortDirection.ASC, '>'),
    (PaginationMode.AFTER, SortDirection.DESC): EffectiveDirection(SortDirection.DESC, '<'),
    (PaginationMode.BEFORE, SortDirection.ASC): EffectiveDirection(SortDirection.DESC, '<'),
    (PaginationMode.BEFORE, SortDirection.DESC): EffectiveDirection(SortDirection.ASC, '>'),
}


class DirectionStrategy:
    @staticmethod
    def resolve_one(direction: SortDirection, mode: PaginationMode) -> EffectiveDirection:
        return _DIRECTION_TABLE[(PaginationMode(mode), SortDirection(direction))]

    @staticmethod
    def resolve(order_spec: OrderSpec, mode: PaginationMode) -> tuple[EffectiveDirection, ...]:
        """
        Resolve every ordered column independently, keeping the column sequence.
        Mixed ASC/DESC orderings are handled column by column.
        """
        return tuple(DirectionStrategy.resolve_one(col.direction, mode) for col in order_spec)

    @staticmethod
    def is_flipped(mode: PaginationMode) -> bool:
        """True when the engine returns rows in reverse of the declared order."""
        return PaginationMode(mode) is PaginationMode.BEFORE
