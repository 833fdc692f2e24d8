"""Data models for the terminal kanban todo board.

Exposes the Todo dataclass plus the TodoType (column) and TodoUrgency enums.
Column keys use underscores ("in_progress") for persistence stability; the
user-facing header renders as "IN PROGRESS".
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional
from zoneinfo import ZoneInfo

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class TodoType(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    def opposite(self) -> "TodoType":
        """Swap between TODO and IN_PROGRESS; DONE maps to itself."""
        if self is TodoType.TODO:
            return TodoType.IN_PROGRESS
        if self is TodoType.IN_PROGRESS:
            return TodoType.TODO
        return TodoType.DONE

    @property
    def header(self) -> str:
        return self.name.replace("_", " ")


class TodoUrgency(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    IMPORTANT = "important"
    URGENT = "urgent"

    def label(self) -> str:
        return self.value.upper()


@dataclass
class Todo:
    """A single todo card.

    Fields:
        id: UUID string, unique across all three columns.
        type: Column the todo currently lives in.
        tags: Ordered tag strings (may be empty); replaces the old title.
        description: Free-text narrative.
        urgency: One of low/normal/important/urgent.
        created_at: "YYYY-MM-DD HH:MM:SS" in the context timezone.
    """
    id: str
    type: TodoType = TodoType.TODO
    tags: List[str] = field(default_factory=list)
    description: str = ""
    urgency: TodoUrgency = TodoUrgency.NORMAL
    created_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        # column membership is implied by the array the entry is stored in
        return {
            "id": self.id,
            "tags": list(self.tags),
            "description": self.description,
            "urgency": self.urgency.value,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], todo_type: TodoType) -> "Todo":
        """Build a Todo from a stored entry.

        A redundant "type" key written by older files is ignored: the column
        the entry was read from is authoritative. Raises ValueError or
        KeyError for malformed entries.
        """
        tags = data.get("tags") or []
        if not isinstance(tags, list):
            raise ValueError(f"tags must be a list, got {type(tags).__name__}")
        return cls(
            id=str(data["id"]),
            type=todo_type,
            tags=[str(t) for t in tags],
            description=str(data.get("description") or ""),
            urgency=TodoUrgency(data.get("urgency", TodoUrgency.NORMAL.value)),
            created_at=str(data.get("created_at") or ""),
        )

    def created_datetime(self, tz: ZoneInfo) -> Optional[datetime]:
        if not self.created_at:
            return None
        try:
            return datetime.strptime(self.created_at, DATE_FORMAT).replace(tzinfo=tz)
        except ValueError:
            return None

    def __repr__(self) -> str:
        return f"Todo(id={self.id}, type={self.type.value}, tags={self.tags})"


def parse_tags(text: Optional[str]) -> List[str]:
    """Split comma separated tag input, dropping blanks."""
    if not text:
        return []
    return [part.strip() for part in text.split(",") if part.strip()]


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(DATE_FORMAT)
