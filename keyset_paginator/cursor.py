"""
< Cursor values >

A cursor is the sort key of the boundary row: one value per ORDER BY column.
It does not have to belong to an existing row; out-of-range values are valid.

- ScalarCursor : a single value, only valid for single-column orderings
- TupleCursor  : one value per ordered column, aligned with the ORDER BY sequence
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, TypeAlias

from keyset_paginator.exceptions import CursorArityMismatchError


@dataclass(frozen=True)
class ScalarCursor:
    value: Any

    def components(self, arity: int) -> tuple[Any, ...]:
        if arity != 1:
            raise CursorArityMismatchError(expected=arity, got=None)
        return (self.value,)


@dataclass(frozen=True)
class TupleCursor:
    values: tuple[Any, ...]

    def components(self, arity: int) -> tuple[Any, ...]:
        if len(self.values) != arity:
            raise CursorArityMismatchError(expected=arity, got=len(self.values))
        return self.values


CursorValue: TypeAlias = ScalarCursor | TupleCursor


def as_cursor(raw: Any) -> CursorValue:
    """
    Wrap a raw cursor into a CursorValue.

    Lists and tuples become a TupleCursor. Strings and bytes are sequences too,
    but they are treated as a single value.
    """
    if isinstance(raw, ScalarCursor | TupleCursor):
        return raw
    if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes, bytearray)):
        return TupleCursor(tuple(raw))
    return ScalarCursor(raw)
