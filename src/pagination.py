"""Fixed-size pagination over an ordered column.

Pages are 1-based. Asking for a page past the last one yields a valid, empty
Page; callers detect that through ``count`` rather than an exception.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from math import ceil
from typing import Generic, Iterator, List, Optional, Sequence, TypeVar

PAGE_SIZE = 6

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    total: int = 0
    per_page: int = PAGE_SIZE
    current_page: int = 1

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def last_page(self) -> int:
        return max(1, ceil(self.total / self.per_page))

    @property
    def has_more_pages(self) -> bool:
        return self.current_page < self.last_page

    def get(self, index: int) -> Optional[T]:
        if 0 <= index < len(self.items):
            return self.items[index]
        return None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __getitem__(self, index: int) -> T:
        return self.items[index]


def paginate(sequence: Sequence[T], per_page: int = PAGE_SIZE, page: int = 1) -> Page[T]:
    start = max(0, (page - 1) * per_page)
    end = max(0, page * per_page)
    return Page(
        items=list(sequence[start:end]),
        total=len(sequence),
        per_page=per_page,
        current_page=page,
    )
