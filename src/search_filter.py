"""Search and urgency filtering applied to a column before pagination."""
from typing import Optional
from models import Todo, TodoUrgency


class SearchFilter:
    """Text query plus urgency filter for one running session.

    The query matches (case-insensitively) any tag or the description.
    Filtering happens at read time and never changes stored order.
    """

    def __init__(self) -> None:
        self._query: Optional[str] = None
        self._urgency: Optional[TodoUrgency] = None

    @property
    def search_query(self) -> Optional[str]:
        return self._query

    @property
    def urgency_filter(self) -> Optional[TodoUrgency]:
        return self._urgency

    def set_search_query(self, query: Optional[str]) -> None:
        query = query.strip() if query else ""
        self._query = query or None

    def set_urgency_filter(self, urgency: Optional[TodoUrgency]) -> None:
        self._urgency = urgency

    def matches_search(self, todo: Todo) -> bool:
        if not self._query:
            return True
        needle = self._query.lower()
        if any(needle in tag.lower() for tag in todo.tags):
            return True
        return needle in todo.description.lower()

    def matches_urgency(self, todo: Todo) -> bool:
        if self._urgency is None:
            return True
        return todo.urgency is self._urgency

    def matches(self, todo: Todo) -> bool:
        return self.matches_search(todo) and self.matches_urgency(todo)

    def is_active(self) -> bool:
        return self._query is not None or self._urgency is not None

    def clear(self) -> None:
        self._query = None
        self._urgency = None

    def description(self) -> str:
        parts = []
        if self._query is not None:
            parts.append(f'Search: "{self._query}"')
        if self._urgency is not None:
            parts.append(f"Urgency: {self._urgency.label()}")
        return " | ".join(parts)
