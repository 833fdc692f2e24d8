"""Cursor: (index, page) pointer into a column's current page.

Pure data holder. Callers keep the invariants; nothing is validated here.
"""
INACTIVE = -1
INITIAL_PAGE = 1


class Cursor:
    def __init__(self, index: int = INACTIVE, page: int = INITIAL_PAGE):
        self._index = index
        self._page = page

    def index(self) -> int:
        return self._index

    def page(self) -> int:
        return self._page

    def set_index(self, index: int) -> "Cursor":
        self._index = index
        return self

    def set_page(self, page: int) -> "Cursor":
        self._page = page
        return self

    def increment(self) -> "Cursor":
        self._index += 1
        return self

    def decrement(self) -> "Cursor":
        self._index -= 1
        return self

    def next_page(self) -> int:
        return self._page + 1

    def previous_page(self) -> int:
        return self._page - 1

    def is_active(self) -> bool:
        return self._index != INACTIVE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return (self._index, self._page) == (other._index, other._page)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Cursor(index={self._index}, page={self._page})"
