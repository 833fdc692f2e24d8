"""Shared fixtures: an isolated kanban home, contexts and scripted prompts."""
import json
from typing import Any, Dict, List, Optional

import pytest

from context import Context
from data_manager import DataManager
from models import TodoUrgency
from navigation import Navigator
from paths import ENV_VAR, get_kanban_home
from prompts import PromptCancelled, TodoFields


@pytest.fixture(autouse=True)
def kanban_home(monkeypatch, tmp_path):
    home = tmp_path / "kanban-home"
    monkeypatch.setenv(ENV_VAR, str(home))
    monkeypatch.setenv("TZ", "UTC")
    get_kanban_home.cache_clear()
    yield home
    get_kanban_home.cache_clear()


def make_entries(count: int, prefix: str = "t", urgency: str = "normal") -> List[Dict[str, Any]]:
    return [
        {
            "id": f"{prefix}-{i}",
            "tags": [f"{prefix}{i}"],
            "description": f"Description {prefix} {i}",
            "urgency": urgency,
            "created_at": "2025-01-01 00:00:00",
        }
        for i in range(1, count + 1)
    ]


def write_data(context: Context, todo=(), in_progress=(), done=()) -> None:
    context.ensure_defaults()
    context.data_path.write_text(json.dumps({
        "todo": list(todo),
        "in_progress": list(in_progress),
        "done": list(done),
    }))


def read_data(context: Context) -> Dict[str, List[Dict[str, Any]]]:
    return json.loads(context.data_path.read_text())


def ids(todos) -> List[str]:
    return [t.id for t in todos]


@pytest.fixture
def context():
    ctx = Context("test")
    ctx.ensure_defaults()
    return ctx


@pytest.fixture
def board(context):
    """Factory: seed the context and return (manager, navigator)."""
    def _make(todo=0, in_progress=0, done=0, delete_done=True):
        write_data(
            context,
            make_entries(todo, "t"),
            make_entries(in_progress, "p"),
            make_entries(done, "d"),
        )
        manager = DataManager(context)
        return manager, Navigator(manager, delete_done=delete_done)
    return _make


class ScriptedPrompter:
    """Prompter double returning queued answers; None answers cancel."""

    def __init__(self, todos=(), searches=(), urgencies=()):
        self.todos: List[Optional[TodoFields]] = list(todos)
        self.searches: List[Optional[str]] = list(searches)
        self.urgencies: List[Any] = list(urgencies)
        self.headings: List[str] = []
        self.defaults: List[Optional[TodoFields]] = []

    def ask_todo(self, heading: str, defaults: Optional[TodoFields] = None) -> TodoFields:
        self.headings.append(heading)
        self.defaults.append(defaults)
        answer = self.todos.pop(0)
        if answer is None:
            raise PromptCancelled()
        return answer

    def ask_search(self, default: Optional[str] = None) -> str:
        answer = self.searches.pop(0)
        if answer is None:
            raise PromptCancelled()
        return answer

    def ask_urgency_filter(self, default: Optional[TodoUrgency] = None) -> Optional[TodoUrgency]:
        answer = self.urgencies.pop(0)
        if answer == "cancel":
            raise PromptCancelled()
        return answer
