from enum import Enum


class SortDirection(str, Enum):
    ASC = 'asc'
    DESC = 'desc'

    def __str__(self):
        return self.value

    def opposite(self) -> 'SortDirection':
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class PaginationMode(str, Enum):
    """
    Which side of the cursor a page is taken from.

    - AFTER  : rows following the cursor in declared order (next page)
    - BEFORE : rows preceding the cursor, returned in declared order (previous page)
    """

    BEFORE = 'before'
    AFTER = 'after'

    def __str__(self):
        return self.value
