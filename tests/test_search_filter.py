"""Tests for SearchFilter."""
import itertools

import pytest

from models import Todo, TodoUrgency
from search_filter import SearchFilter


def make_todo(tags=(), description="", urgency=TodoUrgency.NORMAL):
    return Todo(id="x", tags=list(tags), description=description, urgency=urgency)


def test_inactive_by_default_and_matches_everything():
    f = SearchFilter()
    assert not f.is_active()
    assert f.matches(make_todo(description="anything", urgency=TodoUrgency.LOW))
    assert f.description() == ""


def test_query_is_trimmed_and_blank_unsets():
    f = SearchFilter()
    f.set_search_query("  bug  ")
    assert f.search_query == "bug"
    f.set_search_query("   ")
    assert f.search_query is None
    assert not f.is_active()
    f.set_search_query(None)
    assert f.search_query is None


def test_matches_tag_case_insensitively():
    f = SearchFilter()
    f.set_search_query("BACK")
    assert f.matches_search(make_todo(tags=["frontend", "Backend"]))
    assert not f.matches_search(make_todo(tags=["frontend"], description="css"))


def test_matches_description():
    f = SearchFilter()
    f.set_search_query("login")
    assert f.matches_search(make_todo(description="Fix the Login flow"))


def test_urgency_filter_is_exact():
    f = SearchFilter()
    f.set_urgency_filter(TodoUrgency.URGENT)
    assert f.matches_urgency(make_todo(urgency=TodoUrgency.URGENT))
    assert not f.matches_urgency(make_todo(urgency=TodoUrgency.IMPORTANT))
    assert f.is_active()


@pytest.mark.parametrize(
    "query,urgency,todo_urgency,description",
    list(itertools.product(
        [None, "fix", "nope"],
        [None, TodoUrgency.LOW, TodoUrgency.URGENT],
        [TodoUrgency.LOW, TodoUrgency.URGENT],
        ["fix it", "other"],
    )),
)
def test_matches_is_conjunction(query, urgency, todo_urgency, description):
    f = SearchFilter()
    f.set_search_query(query)
    f.set_urgency_filter(urgency)
    todo = make_todo(description=description, urgency=todo_urgency)
    assert f.matches(todo) == (f.matches_search(todo) and f.matches_urgency(todo))


def test_description_and_clear():
    f = SearchFilter()
    f.set_search_query("x")
    f.set_urgency_filter(TodoUrgency.URGENT)
    assert f.description() == 'Search: "x" | Urgency: URGENT'
    f.clear()
    assert not f.is_active()
    assert f.description() == ""


def test_description_urgency_only():
    f = SearchFilter()
    f.set_urgency_filter(TodoUrgency.LOW)
    assert f.description() == "Urgency: LOW"
