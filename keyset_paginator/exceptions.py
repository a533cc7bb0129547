from __future__ import annotations

__all__ = [
    'KeysetPaginationError',
    'NoOrderDefinedError',
    'CursorArityMismatchError',
    'UnresolvableOrderColumnError',
]


class KeysetPaginationError(ValueError):
    """Base class for errors raised by keyset_paginator itself."""


class NoOrderDefinedError(KeysetPaginationError):
    """
    The query declares no ORDER BY columns.

    A cursor has no position without an ordering, so there is no sensible default.
    """

    def __init__(self, message: str = 'Keyset pagination requires an ordered query. Call order_by() first.'):
        super().__init__(message)


class CursorArityMismatchError(KeysetPaginationError):
    """The cursor does not supply exactly one value per ordered column."""

    def __init__(self, expected: int, got: int | None):
        self.expected = expected
        self.got = got
        shape = 'a scalar' if got is None else f'{got} value(s)'
        super().__init__(f'Cursor arity mismatch: the query is ordered by {expected} column(s), cursor has {shape}.')


class UnresolvableOrderColumnError(KeysetPaginationError):
    """An ORDER BY entry cannot be referenced in a WHERE clause."""

    def __init__(self, name: str, reason: str = 'it does not match any selected column or label'):
        self.name = name
        super().__init__(f"ORDER BY entry '{name}' cannot be compared against a cursor: {reason}.")
