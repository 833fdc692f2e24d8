"""Tests for Todo, TodoType and TodoUrgency."""
from zoneinfo import ZoneInfo

import pytest

from models import Todo, TodoType, TodoUrgency, parse_tags


def test_type_values_and_opposite():
    assert [t.value for t in TodoType] == ["todo", "in_progress", "done"]
    assert TodoType.TODO.opposite() is TodoType.IN_PROGRESS
    assert TodoType.IN_PROGRESS.opposite() is TodoType.TODO
    assert TodoType.DONE.opposite() is TodoType.DONE


def test_type_header():
    assert TodoType.IN_PROGRESS.header == "IN PROGRESS"


def test_urgency_label():
    assert TodoUrgency.IMPORTANT.label() == "IMPORTANT"
    assert TodoUrgency("urgent") is TodoUrgency.URGENT


def test_to_dict_omits_column():
    todo = Todo(id="1", type=TodoType.DONE, tags=["a"], description="d",
                urgency=TodoUrgency.LOW, created_at="2025-01-01 00:00:00")
    assert todo.to_dict() == {
        "id": "1",
        "tags": ["a"],
        "description": "d",
        "urgency": "low",
        "created_at": "2025-01-01 00:00:00",
    }


def test_from_dict_uses_column_not_stored_type():
    todo = Todo.from_dict(
        {"id": "1", "type": "done", "tags": [], "description": "d",
         "urgency": "urgent", "created_at": ""},
        TodoType.IN_PROGRESS,
    )
    assert todo.type is TodoType.IN_PROGRESS
    assert todo.urgency is TodoUrgency.URGENT


def test_from_dict_rejects_unknown_urgency():
    with pytest.raises(ValueError):
        Todo.from_dict({"id": "1", "urgency": "whenever"}, TodoType.TODO)


def test_from_dict_requires_id():
    with pytest.raises(KeyError):
        Todo.from_dict({"description": "no id"}, TodoType.TODO)


def test_parse_tags():
    assert parse_tags(" a, b ,, c ") == ["a", "b", "c"]
    assert parse_tags("") == []
    assert parse_tags(None) == []


def test_created_datetime():
    todo = Todo(id="1", created_at="2025-03-04 05:06:07")
    moment = todo.created_datetime(ZoneInfo("UTC"))
    assert (moment.year, moment.month, moment.day, moment.hour) == (2025, 3, 4, 5)
    assert Todo(id="2", created_at="garbage").created_datetime(ZoneInfo("UTC")) is None


def test_from_dict_treats_null_text_as_empty():
    todo = Todo.from_dict({"id": "1", "description": None, "created_at": None}, TodoType.TODO)
    assert todo.description == ""
    assert todo.created_at == ""
